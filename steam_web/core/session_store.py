"""
Cookie/Session Store
"""

import logging
import re
from typing import Dict, Optional

from steam_web.config.settings import SESSION_ID_COOKIE, LOGIN_SECURE_COOKIE, DELETED_COOKIE_VALUE
from steam_web.core.errors import NeedCookie
from steam_web.core.models import Session

logger = logging.getLogger(__name__)

# A comma only separates two cookies when a new "name=" follows it,
# so the comma inside "Expires=Wed, 21 Oct 2026 ..." is kept.
SET_COOKIE_SPLIT = re.compile(r',\s*(?=[^;,\s=]+=)')


def parse_set_cookie(header: Optional[str]) -> Dict[str, str]:
    """
    Parse a raw set-cookie header into a name -> value mapping.

    Args:
        header: one or more comma-joined entries like "name=value; Path=/"

    Returns:
        dict: cookie names mapped to their values, attributes dropped
    """
    cookies = {}
    if not header:
        return cookies

    for entry in SET_COOKIE_SPLIT.split(header):
        pair = entry.split(';', 1)[0].strip()
        name, sep, value = pair.partition('=')
        if sep and name.strip():
            cookies[name.strip()] = value.strip()
    return cookies


def parse_cookie_header(header: Optional[str]) -> Dict[str, str]:
    """Parse a request Cookie header ("a=1; b=2;") into a dict"""
    cookies = {}
    if not header:
        return cookies

    for pair in header.split(';'):
        name, sep, value = pair.strip().partition('=')
        if sep and name:
            cookies[name] = value
    return cookies


def serialize_cookies(cookies: Dict[str, str]) -> str:
    """Serialize cookies as "name=value; name=value;" """
    if not cookies:
        return ''
    return '; '.join(f'{name}={value}' for name, value in cookies.items()) + ';'


class SessionStore:
    """Holds the cookies of one web session and updates them from responses"""

    def __init__(self):
        self.steam_id: Optional[str] = None
        self.session_id: Optional[str] = None
        self._cookies: Dict[str, str] = {}

    @property
    def cookies(self) -> Dict[str, str]:
        return dict(self._cookies)

    @property
    def cookie_header(self) -> str:
        return serialize_cookies(self._cookies)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.steam_id) and bool(self._cookies.get(LOGIN_SECURE_COOKIE))

    def set_cookie(self, name: str, value: str):
        if value == DELETED_COOKIE_VALUE:
            self._cookies.pop(name, None)
            if name == SESSION_ID_COOKIE:
                self.session_id = None
            return

        self._cookies[name] = value
        if name == SESSION_ID_COOKIE:
            self.session_id = value

    def harvest(self, set_cookie_header: Optional[str]) -> Dict[str, str]:
        """
        Merge the cookies of a set-cookie header into the store.

        Returns:
            dict: the cookies that were found in the header
        """
        found = parse_set_cookie(set_cookie_header)
        for name, value in found.items():
            self.set_cookie(name, value)
        if found:
            logger.debug(f"Harvested cookies: {', '.join(found)}")
        return found

    def load(self, session: Session):
        """Replace the store content with a previously saved session"""
        self.clear()
        self.steam_id = session.steam_id
        for name, value in parse_cookie_header(session.cookies).items():
            self.set_cookie(name, value)
        if session.session_id:
            self.set_cookie(SESSION_ID_COOKIE, session.session_id)

    def to_session(self) -> Session:
        if not self.is_authenticated or not self.session_id:
            raise NeedCookie("No complete session is available")
        return Session(steam_id=self.steam_id, session_id=self.session_id, cookies=self.cookie_header)

    def clear(self):
        self.steam_id = None
        self.session_id = None
        self._cookies.clear()
