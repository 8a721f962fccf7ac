"""
Exceptions raised by the Steam web client
"""

from typing import Any, Optional


class SteamWebError(Exception):
    """Base class for every error raised by steam_web"""


class InvalidToken(SteamWebError):
    """The token could not be decoded into a claim set"""


class InvalidAudience(SteamWebError):
    """The token was not issued for the web audience"""


class TokenNearExpiry(SteamWebError):
    """The token expires too soon to establish a session"""


class RateLimitExceeded(SteamWebError):
    """Steam answered 429"""


class NotLoggedIn(SteamWebError):
    """Steam no longer recognises the session cookies"""


# Older releases named the same condition CookieExpired
CookieExpired = NotLoggedIn


class Unauthorized(NotLoggedIn):
    """Steam answered 401"""


class NeedCookie(SteamWebError):
    """An authenticated call was made before a session was established"""


class NeedWebNonce(SteamWebError):
    """Web-nonce login was requested without a nonce"""


class BadRequest(SteamWebError):
    """Steam accepted the request but reported failure in the body"""

    def __init__(self, message: str, payload: Any = None):
        super().__init__(message)
        self.payload = payload


class InvalidResponse(SteamWebError):
    """The response body did not have the expected shape"""


class LoginFailed(SteamWebError):
    """A login step returned an error or a non-OK result code"""

    def __init__(self, result: Any):
        super().__init__(f"login failed with result {result}")
        self.result = result


class SomethingWentWrong(SteamWebError):
    """The login handshake finished without delivering the login cookie"""


class HttpError(SteamWebError):
    """Non-2xx response that survived every retry"""

    def __init__(self, status_code: int, reason: Optional[str] = None, response: Any = None):
        message = f"HTTP {status_code}"
        if reason:
            message += f" {reason}"
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.response = response
