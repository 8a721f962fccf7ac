"""
Core Steam Web Components
"""

from steam_web.core.login import (
    LoginMethod, WebNonceLogin, AccessTokenLogin, RefreshTokenLogin, login_method_for_token
)
from steam_web.core.session_store import SessionStore
from steam_web.core.steam_web import SteamWeb
from steam_web.core.token_inspector import TokenInfo, TokenKind, inspect_token
from steam_web.core.web_client import RetryPolicy, WebClient

__all__ = [
    'SteamWeb',
    'WebClient',
    'RetryPolicy',
    'SessionStore',
    'LoginMethod',
    'WebNonceLogin',
    'AccessTokenLogin',
    'RefreshTokenLogin',
    'login_method_for_token',
    'TokenInfo',
    'TokenKind',
    'inspect_token'
]
