"""
Steam Web Client

Entry point of the package: logs in to steamcommunity.com and runs the
authenticated account operations on top of the stored session.
"""

import logging
from typing import Any, Dict, List, Optional, Union

import requests

from steam_web.config.settings import (
    REQUEST_TIMEOUT, LOGOUT_URL, AVATAR_UPLOAD_URL, PROFILE_URL, BADGES_URL, INVENTORY_URL,
    CLEAR_ALIASES_URL, SET_PRIVACY_URL, STEAM_COMMUNITY_APP_ID, INVENTORY_CONTEXT_ID,
    AVATAR_UPLOAD_TYPE, AVATAR_FILENAME, DEFAULT_AVATAR_CONTENT_TYPE, MISSING_STEAM_ID_SENTINEL,
    SESSION_ID_COOKIE
)
from steam_web.core.errors import BadRequest, InvalidResponse, NeedCookie, NotLoggedIn, SteamWebError
from steam_web.core.login import WebNonceLogin, login_method_for_token, verify_session
from steam_web.core.models import AvatarImage, FarmableGame, InventoryItem, PrivacySettings, Session
from steam_web.core.session_store import SessionStore
from steam_web.core.web_client import RetryPolicy, WebClient
from steam_web.extractors import BadgesExtractor, InventoryExtractor, ProfileExtractor
from steam_web.utils.crypto import generate_session_id


class SteamWeb:
    """
    Client for one Steam Community web session.

    An instance is not thread safe; use one instance per concurrent session.
    """

    def __init__(self, timeout: float = REQUEST_TIMEOUT, proxies: Optional[Dict[str, str]] = None,
                 headers: Optional[Dict[str, str]] = None, retry_policy: Optional[RetryPolicy] = None):
        """
        Initialize the client.

        Args:
            timeout: seconds before a single request attempt is aborted
            proxies: requests-style proxies mapping used for every call
            headers: extra headers for this instance
            retry_policy: retry budget shared by every call
        """
        self.web_client = WebClient(headers=headers, timeout=timeout, proxies=proxies,
                                    retry_policy=retry_policy)
        self.store = SessionStore()
        self.logger = logging.getLogger(__name__)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    @property
    def session(self) -> Optional[Session]:
        """Current session, None when logged out"""
        try:
            return self.store.to_session()
        except NeedCookie:
            return None

    @property
    def steam_id(self) -> Optional[str]:
        return self.store.steam_id

    # Login

    def login(self, token: str) -> Session:
        """
        Login with an access token or a refresh token.

        The token's audience decides which flow is used.

        Returns:
            Session: cookies that can be saved and passed to set_session later
        """
        method = login_method_for_token(token, self.web_client, self.store)
        return self._run_login(method)

    def login_with_web_nonce(self, steam_id: str, web_nonce: str) -> Session:
        """Login with a web nonce obtained from a Steam client connection"""
        return self._run_login(WebNonceLogin(self.web_client, self.store, steam_id, web_nonce))

    def _run_login(self, method) -> Session:
        try:
            return method.login()
        except Exception:
            self._reset()
            raise

    def _reset(self):
        self.store.clear()
        self.web_client.clear_cookies()

    def set_session(self, session: Session):
        """
        Re-use a previous session instead of logging in again.

        Raises:
            NotLoggedIn: the session is incomplete or Steam rejects it
        """
        if not session.steam_id or not session.cookies:
            raise NotLoggedIn("Session has no cookies")

        self.web_client.clear_cookies()
        self.store.load(session)
        if not self.store.is_authenticated:
            self._reset()
            raise NotLoggedIn("Session has no steamLoginSecure cookie")

        try:
            verify_session(self.web_client, self.store)
        except Exception:
            self._reset()
            raise

        if not self.store.session_id:
            self.store.set_cookie(SESSION_ID_COOKIE, generate_session_id())

    def logout(self):
        """Logout on Steam and forget the cookies"""
        if self.store.is_authenticated and self.store.session_id:
            try:
                self.web_client.post(LOGOUT_URL, data={'sessionid': self.store.session_id},
                                     headers=self._cookie_headers())
            except (SteamWebError, requests.RequestException) as e:
                self.logger.warning(f"Logout request failed, clearing local session anyway: {e}")
        self._reset()

    # Requests

    def _require_session(self):
        if not self.store.is_authenticated:
            raise NeedCookie("Login or set_session first")

    def _cookie_headers(self) -> Dict[str, str]:
        return {'Cookie': self.store.cookie_header}

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        """Authenticated request to Steam; fresh set-cookie values are kept"""
        self._require_session()
        headers = dict(kwargs.pop('headers', None) or {})
        headers.update(self._cookie_headers())

        response = self.web_client.request(method, url, headers=headers, **kwargs)
        self.store.harvest(response.headers.get('set-cookie'))
        return response

    @staticmethod
    def _check_ajax_response(response: requests.Response) -> Optional[Any]:
        """
        Validate the body of an ajax form post.

        An empty body is accepted; JSON with a false success is rejected.
        """
        text = response.text or ''
        if ProfileExtractor.is_logged_out_page(text):
            raise NotLoggedIn("Steam served a logged-out page")
        if not text.strip():
            return None

        try:
            data = response.json()
        except ValueError:
            raise InvalidResponse(f"Unexpected response from {response.url}") from None

        if isinstance(data, dict) and 'success' in data and data['success'] not in (1, True):
            raise BadRequest(str(data.get('message') or data.get('success')), data)
        return data

    # Account operations

    def get_farmable_games(self) -> List[FarmableGame]:
        """Games that still have card drops, across every badges page"""
        self._require_session()
        url = BADGES_URL.format(steam_id=self.store.steam_id)

        response = self._request('GET', url)
        soup = BadgesExtractor.to_soup(response.text)
        games = BadgesExtractor.extract_farmable_games(soup)

        page_count = BadgesExtractor.extract_page_count(soup)
        for page in range(2, page_count + 1):
            response = self._request('GET', url, params={'p': page})
            games.extend(BadgesExtractor.extract_farmable_games(response.text))

        self.logger.info(f"Found {len(games)} games with card drops remaining")
        return games

    def get_cards_inventory(self) -> List[InventoryItem]:
        """Trading cards in the Steam Community inventory"""
        self._require_session()
        url = INVENTORY_URL.format(steam_id=self.store.steam_id, app_id=STEAM_COMMUNITY_APP_ID,
                                   context_id=INVENTORY_CONTEXT_ID)

        response = self._request('GET', url)
        try:
            payload = response.json()
        except ValueError:
            if ProfileExtractor.is_logged_out_page(response.text):
                raise NotLoggedIn("Steam served a logged-out page") from None
            raise InvalidResponse("Inventory response is not JSON") from None

        return InventoryExtractor.extract_items(payload, INVENTORY_CONTEXT_ID)

    def _download_avatar(self, url: str) -> AvatarImage:
        # Third party host: no Steam cookies
        response = self.web_client.get(url)
        content_type = response.headers.get('content-type', DEFAULT_AVATAR_CONTENT_TYPE)
        return AvatarImage(content=response.content, content_type=content_type.split(';')[0].strip())

    def change_avatar(self, avatar: Union[str, bytes, AvatarImage]) -> str:
        """
        Upload a new profile avatar.

        Args:
            avatar: image URL to download, raw image bytes (JPEG) or an AvatarImage

        Returns:
            str: URL of the full size avatar
        """
        self._require_session()
        if isinstance(avatar, str):
            avatar = self._download_avatar(avatar)
        elif isinstance(avatar, bytes):
            avatar = AvatarImage(content=avatar)

        def build_form():
            # The session id may change between attempts through set-cookie
            return {
                'files': {'avatar': (AVATAR_FILENAME, avatar.content, avatar.content_type)},
                'data': {
                    'type': AVATAR_UPLOAD_TYPE,
                    'sId': self.store.steam_id,
                    'sessionid': self.store.session_id,
                    'doSub': '1',
                    'json': '1',
                },
            }

        response = self._request('POST', AVATAR_UPLOAD_URL, build=build_form)
        text = response.text or ''
        if text.startswith(MISSING_STEAM_ID_SENTINEL) or ProfileExtractor.is_logged_out_page(text):
            raise NotLoggedIn("Avatar upload was refused for this session")

        try:
            data = response.json()
        except ValueError:
            raise BadRequest(text.strip() or "Avatar upload failed", text) from None

        if not data.get('success'):
            raise BadRequest(data.get('message') or "Avatar upload failed", data)

        try:
            return data['images']['full']
        except (KeyError, TypeError) as e:
            raise InvalidResponse("Avatar upload response has no full image") from e

    def clear_aliases(self):
        """Clear the account's previous names"""
        self._require_session()
        url = CLEAR_ALIASES_URL.format(steam_id=self.store.steam_id)
        response = self._request('POST', url, build=lambda: {'data': {'sessionid': self.store.session_id}})
        self._check_ajax_response(response)

    def change_privacy(self, privacy: Union[str, PrivacySettings]):
        """
        Change the profile privacy.

        Args:
            privacy: 'public', 'friendsOnly', 'private' or a PrivacySettings
        """
        self._require_session()
        if isinstance(privacy, str):
            privacy = PrivacySettings.from_preset(privacy)

        url = SET_PRIVACY_URL.format(steam_id=self.store.steam_id)
        response = self._request('POST', url, build=lambda: {'data': privacy.to_form(self.store.session_id)})
        self._check_ajax_response(response)

    def get_avatar_frame(self) -> Optional[str]:
        """Image URL of the equipped avatar frame, None without one"""
        self._require_session()
        response = self._request('GET', PROFILE_URL.format(steam_id=self.store.steam_id))
        return ProfileExtractor.extract_avatar_frame(response.text)

    def close(self):
        self.web_client.close()
