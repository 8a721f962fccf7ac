"""
Token Inspector

Reads the claims of a Steam JWT (access or refresh token) without checking
its signature. The token is expected to come straight from an authenticated
Steam client session.
"""

import base64
import binascii
import json
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional

from steam_web.config.settings import TOKEN_EXPIRY_MARGIN, WEB_AUDIENCE, RENEW_AUDIENCE
from steam_web.core.errors import InvalidToken, InvalidAudience, TokenNearExpiry


class TokenKind(Enum):
    ACCESS = 'access'
    REFRESH = 'refresh'


@dataclass(frozen=True)
class TokenClaims:
    issuer: Optional[str]
    subject: str
    audience: FrozenSet[str]
    expires_at: int
    not_before: Optional[int]
    issued_at: Optional[int]
    token_id: Optional[str]

    @property
    def steam_id(self) -> str:
        return self.subject


@dataclass(frozen=True)
class TokenInfo:
    claims: TokenClaims
    kind: TokenKind

    @property
    def steam_id(self) -> str:
        return self.claims.subject


def _b64url_decode(segment: str) -> bytes:
    padded = segment + '=' * (-len(segment) % 4)
    return base64.urlsafe_b64decode(padded.encode('ascii'))


def decode_payload(token: str) -> Dict[str, Any]:
    """Decode the middle part of a compact JWT into a dict"""
    if not isinstance(token, str):
        raise InvalidToken("Token must be a string")

    parts = token.strip().split('.')
    if len(parts) != 3 or not parts[1]:
        raise InvalidToken("Token must have three dot-separated parts")

    try:
        payload = json.loads(_b64url_decode(parts[1]))
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise InvalidToken(f"Token payload is not valid base64url JSON: {e}") from e

    if not isinstance(payload, dict):
        raise InvalidToken("Token payload is not a JSON object")
    return payload


def _parse_claims(payload: Dict[str, Any]) -> TokenClaims:
    try:
        subject = str(payload['sub'])
        audience = payload['aud']
        expires_at = int(payload['exp'])
    except KeyError as e:
        raise InvalidToken(f"Token is missing claim {e.args[0]!r}") from e
    except (TypeError, ValueError) as e:
        raise InvalidToken(f"Token has an invalid exp claim: {e}") from e

    if isinstance(audience, str):
        audience = [audience]
    if not isinstance(audience, list):
        raise InvalidToken("Token aud claim must be a string or a list")

    return TokenClaims(
        issuer=payload.get('iss'),
        subject=subject,
        audience=frozenset(str(a) for a in audience),
        expires_at=expires_at,
        not_before=payload.get('nbf'),
        issued_at=payload.get('iat'),
        token_id=payload.get('jti'),
    )


def inspect_token(token: str, now: Optional[float] = None) -> TokenInfo:
    """
    Decode and validate a token.

    Args:
        token: compact JWT issued by Steam
        now: current unix time, defaults to time.time()

    Returns:
        TokenInfo with the parsed claims and whether it is an access or refresh token

    Raises:
        InvalidToken, InvalidAudience, TokenNearExpiry
    """
    claims = _parse_claims(decode_payload(token))

    if WEB_AUDIENCE not in claims.audience:
        raise InvalidAudience(f"Token audience {sorted(claims.audience)} does not include '{WEB_AUDIENCE}'")

    if now is None:
        now = time.time()
    if claims.expires_at - now < TOKEN_EXPIRY_MARGIN:
        raise TokenNearExpiry(f"Token expires in less than {TOKEN_EXPIRY_MARGIN} seconds")

    kind = TokenKind.REFRESH if RENEW_AUDIENCE in claims.audience else TokenKind.ACCESS
    return TokenInfo(claims=claims, kind=kind)
