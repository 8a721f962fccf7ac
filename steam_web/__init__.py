"""
Steam Web - a client for the Steam Community web surface

Logs in with a web nonce, an access token or a refresh token, then lists
games with card drops left, reads the trading card inventory and changes
avatar, aliases and privacy settings.
"""

from .core import SteamWeb, WebClient, RetryPolicy, inspect_token
from .core.errors import (
    SteamWebError, InvalidToken, InvalidAudience, TokenNearExpiry, RateLimitExceeded,
    NotLoggedIn, CookieExpired, Unauthorized, NeedCookie, NeedWebNonce, BadRequest,
    InvalidResponse, LoginFailed, SomethingWentWrong, HttpError
)
from .core.models import Session, FarmableGame, InventoryItem, PrivacySettings, AvatarImage
from .utils import DataExporter, setup_logging

__version__ = "1.0.0"

__all__ = [
    'SteamWeb',
    'WebClient',
    'RetryPolicy',
    'inspect_token',
    'Session',
    'FarmableGame',
    'InventoryItem',
    'PrivacySettings',
    'AvatarImage',
    'DataExporter',
    'setup_logging',
    'SteamWebError',
    'InvalidToken',
    'InvalidAudience',
    'TokenNearExpiry',
    'RateLimitExceeded',
    'NotLoggedIn',
    'CookieExpired',
    'Unauthorized',
    'NeedCookie',
    'NeedWebNonce',
    'BadRequest',
    'InvalidResponse',
    'LoginFailed',
    'SomethingWentWrong',
    'HttpError'
]
