"""
Login Strategies

Each LoginMethod fills a SessionStore with working steamcommunity.com cookies:

* WebNonceLogin     - web nonce from a Steam client session, encrypted with a session key
* AccessTokenLogin  - access token placed straight into steamLoginSecure
* RefreshTokenLogin - refresh token exchanged through finalizelogin and a transfer URL
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List
from urllib.parse import quote

import requests

from steam_web.config.settings import (
    AUTHENTICATE_USER_URL, FINALIZE_LOGIN_URL, LOGIN_REDIRECT_URL, NOTIFICATION_COUNTS_URL,
    STEAM_COMMUNITY_URL, SESSION_ID_COOKIE, LOGIN_SECURE_COOKIE
)
from steam_web.core.errors import (
    InvalidResponse, LoginFailed, NeedWebNonce, NotLoggedIn, SomethingWentWrong
)
from steam_web.core.models import Session
from steam_web.core.session_store import SessionStore
from steam_web.core.token_inspector import TokenInfo, TokenKind, inspect_token
from steam_web.core.web_client import WebClient
from steam_web.utils.crypto import (
    generate_session_id, generate_session_key, symmetric_encrypt_with_hmac_iv
)

logger = logging.getLogger(__name__)

TRANSFER_RESULT_OK = 1


def _json(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise InvalidResponse(f"Expected JSON from {response.url}") from e


def verify_session(client: WebClient, store: SessionStore) -> Dict[str, Any]:
    """
    Cheap authenticated request proving the cookies work.

    Also picks up the sessionid Steam assigns in set-cookie.

    Raises:
        NotLoggedIn: Steam did not answer with notification counts
    """
    response = client.get(NOTIFICATION_COUNTS_URL, headers={'Cookie': store.cookie_header})
    store.harvest(response.headers.get('set-cookie'))

    try:
        data = response.json()
    except ValueError:
        raise NotLoggedIn("Notification counts were not returned") from None

    if not isinstance(data, dict) or 'notifications' not in data:
        raise NotLoggedIn("Notification counts were not returned")
    return data


class LoginMethod(ABC):
    """One way of turning credentials into session cookies"""

    def __init__(self, client: WebClient, store: SessionStore):
        self.client = client
        self.store = store

    @abstractmethod
    def login(self) -> Session:
        """Establish the session, store its cookies and return it"""


class WebNonceLogin(LoginMethod):
    """Login through ISteamUserAuth/AuthenticateUser with a web nonce"""

    def __init__(self, client: WebClient, store: SessionStore, steam_id: str, web_nonce: str):
        super().__init__(client, store)
        self.steam_id = str(steam_id)
        self.web_nonce = web_nonce

    def _build_form(self) -> Dict[str, Any]:
        # A nonce encrypted once is rejected on replay, so every attempt gets a new key
        plain_key, encrypted_key = generate_session_key()
        return {
            'data': {
                'steamid': self.steam_id,
                'encrypted_loginkey': symmetric_encrypt_with_hmac_iv(self.web_nonce, plain_key),
                'sessionkey': encrypted_key,
            }
        }

    def login(self) -> Session:
        if not self.web_nonce:
            raise NeedWebNonce("A web nonce is needed for this login")

        response = self.client.post(AUTHENTICATE_USER_URL, build=self._build_form)
        data = _json(response)

        try:
            token_secure = data['authenticateuser']['tokensecure']
        except (KeyError, TypeError) as e:
            raise InvalidResponse("AuthenticateUser did not return tokensecure") from e

        self.store.clear()
        self.store.steam_id = self.steam_id
        self.store.set_cookie(SESSION_ID_COOKIE, generate_session_id())
        self.store.set_cookie(LOGIN_SECURE_COOKIE, token_secure)

        logger.info(f"Logged in {self.steam_id} with web nonce")
        return self.store.to_session()


class AccessTokenLogin(LoginMethod):
    """Use an access token as steamLoginSecure without exchanging it"""

    def __init__(self, client: WebClient, store: SessionStore, token_info: TokenInfo, token: str):
        super().__init__(client, store)
        self.token_info = token_info
        self.token = token

    def login(self) -> Session:
        steam_id = self.token_info.steam_id

        self.store.clear()
        self.store.steam_id = steam_id
        self.store.set_cookie(LOGIN_SECURE_COOKIE, quote(f"{steam_id}||{self.token}", safe="!~*'()"))

        verify_session(self.client, self.store)
        if not self.store.session_id:
            self.store.set_cookie(SESSION_ID_COOKIE, generate_session_id())

        logger.info(f"Logged in {steam_id} with access token")
        return self.store.to_session()


class RefreshTokenLogin(LoginMethod):
    """Exchange a refresh token for cookies through finalizelogin and a transfer URL"""

    def __init__(self, client: WebClient, store: SessionStore, token_info: TokenInfo, token: str):
        super().__init__(client, store)
        self.token_info = token_info
        self.token = token

    def finalize_login(self, session_id: str) -> Dict[str, Any]:
        response = self.client.post(
            FINALIZE_LOGIN_URL,
            data={'nonce': self.token, 'sessionid': session_id, 'redir': LOGIN_REDIRECT_URL},
            headers={'Origin': STEAM_COMMUNITY_URL, 'Referer': STEAM_COMMUNITY_URL + '/'},
        )
        data = _json(response)
        if not isinstance(data, dict):
            raise InvalidResponse("finalizelogin did not return an object")

        if data.get('error'):
            raise LoginFailed(data['error'])
        if data.get('success') is False:
            raise LoginFailed(data.get('error', 'finalizelogin failed'))
        if not data.get('transfer_info'):
            raise InvalidResponse("finalizelogin returned no transfer_info")
        return data

    @staticmethod
    def choose_transfer(transfers: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Every transfer sets the same cookies on a different domain; prefer steamcommunity.com"""
        for transfer in transfers:
            if 'steamcommunity.com' in transfer.get('url', ''):
                return transfer
        return transfers[0]

    def transfer(self, transfer: Dict[str, Any], steam_id: str) -> requests.Response:
        params = transfer.get('params') or {}
        try:
            url = transfer['url']
            form = {'nonce': params['nonce'], 'auth': params['auth'], 'steamID': steam_id}
        except KeyError as e:
            raise InvalidResponse(f"transfer_info entry is missing {e}") from e

        response = self.client.post(url, data=form)
        result = _json(response)
        if not isinstance(result, dict) or result.get('result') != TRANSFER_RESULT_OK:
            raise LoginFailed(result.get('result') if isinstance(result, dict) else result)
        return response

    def login(self) -> Session:
        session_id = generate_session_id()
        data = self.finalize_login(session_id)
        steam_id = str(data.get('steamID') or self.token_info.steam_id)

        response = self.transfer(self.choose_transfer(data['transfer_info']), steam_id)

        self.store.clear()
        self.store.steam_id = steam_id
        self.store.set_cookie(SESSION_ID_COOKIE, session_id)
        cookies = self.store.harvest(response.headers.get('set-cookie'))
        if not cookies.get(LOGIN_SECURE_COOKIE):
            self.store.clear()
            raise SomethingWentWrong("Transfer did not set steamLoginSecure")

        logger.info(f"Logged in {steam_id} with refresh token")
        return self.store.to_session()


def login_method_for_token(token: str, client: WebClient, store: SessionStore) -> LoginMethod:
    """Pick the login strategy matching the token's audience"""
    token_info = inspect_token(token)
    if token_info.kind is TokenKind.REFRESH:
        return RefreshTokenLogin(client, store, token_info, token)
    return AccessTokenLogin(client, store, token_info, token)
