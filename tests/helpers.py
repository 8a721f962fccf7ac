"""Shared builders for the test suites."""

import base64
import json
import time

import requests
from requests.structures import CaseInsensitiveDict


def make_response(status_code=200, body=b'', headers=None, url='https://steamcommunity.com/', reason=None):
    """Build a real requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    if isinstance(body, (dict, list)):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode('utf-8')
    response._content = body
    response.headers = CaseInsensitiveDict(headers or {})
    response.url = url
    response.reason = reason or ('OK' if status_code < 400 else 'Error')
    response.encoding = 'utf-8'
    return response


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b'=').decode('ascii')


def make_token(audience=('web',), steam_id='76561198000000001', expires_in=3600, **claims):
    """Compact JWT with the given claims and a dummy signature."""
    now = int(time.time())
    payload = {
        'iss': 'steam',
        'sub': steam_id,
        'aud': list(audience),
        'exp': now + expires_in,
        'nbf': now - 10,
        'iat': now - 10,
        'jti': '0001_ABCDEF',
    }
    payload.update(claims)
    header = _b64url(json.dumps({'typ': 'JWT', 'alg': 'EdDSA'}).encode())
    return f"{header}.{_b64url(json.dumps(payload).encode())}.{_b64url(b'signature')}"
