"""
Data records exchanged with Steam Community
"""

import json
from dataclasses import dataclass, asdict
from typing import Dict, Any

from steam_web.config.settings import (
    PRIVACY_PRESETS, PRIVACY_PRIVATE, PRIVACY_FRIENDS_ONLY, PRIVACY_PUBLIC,
    COMMENT_FRIENDS_ONLY, COMMENT_PUBLIC, COMMENT_PRIVATE,
    DEFAULT_AVATAR_CONTENT_TYPE
)

VISIBILITY_VALUES = (PRIVACY_PRIVATE, PRIVACY_FRIENDS_ONLY, PRIVACY_PUBLIC)
HIDDEN_OR_SHOWN_VALUES = (PRIVACY_PRIVATE, PRIVACY_PUBLIC)
COMMENT_VALUES = (COMMENT_FRIENDS_ONLY, COMMENT_PUBLIC, COMMENT_PRIVATE)


@dataclass(frozen=True)
class Session:
    """An authenticated web session that callers may store and re-use"""
    steam_id: str
    session_id: str
    cookies: str

    def to_dict(self) -> Dict[str, str]:
        return {'steamid': self.steam_id, 'sessionid': self.session_id, 'cookies': self.cookies}

    @staticmethod
    def from_dict(data: Dict[str, str]) -> 'Session':
        return Session(
            steam_id=str(data.get('steamid', '')),
            session_id=data.get('sessionid', ''),
            cookies=data.get('cookies', ''),
        )


@dataclass
class FarmableGame:
    """A game that still has trading card drops left"""
    name: str
    app_id: int
    play_time: float
    remaining_cards: int
    dropped_cards: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class InventoryItem:
    """A single item of the trading card inventory"""
    asset_id: str
    amount: str
    icon_url: str
    name: str
    type: str
    tradable: bool
    context_id: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class AvatarImage:
    """Raw image to upload as the profile avatar"""
    content: bytes
    content_type: str = DEFAULT_AVATAR_CONTENT_TYPE


@dataclass
class PrivacySettings:
    """
    Profile privacy as submitted to ajaxsetprivacy.

    Visibility fields take 1 (private), 2 (friends only) or 3 (public);
    inventory_gifts and playtime only take 1 or 3. comment_permission follows
    Steam's ECommentPermission enum: 0 (friends only), 1 (public), 2 (private).
    """
    profile: int
    inventory: int
    inventory_gifts: int
    owned_games: int
    playtime: int
    friends_list: int
    comment_permission: int

    def __post_init__(self):
        for field_name in ('profile', 'inventory', 'owned_games', 'friends_list'):
            self._check(field_name, VISIBILITY_VALUES)
        for field_name in ('inventory_gifts', 'playtime'):
            self._check(field_name, HIDDEN_OR_SHOWN_VALUES)
        self._check('comment_permission', COMMENT_VALUES)

    def _check(self, field_name: str, allowed):
        value = getattr(self, field_name)
        if value not in allowed:
            raise ValueError(f"{field_name} must be one of {allowed}, got {value!r}")

    @classmethod
    def from_preset(cls, name: str) -> 'PrivacySettings':
        """Build settings from 'public', 'friendsOnly' or 'private'"""
        try:
            return cls(**PRIVACY_PRESETS[name])
        except KeyError:
            raise ValueError(f"Unknown privacy preset: {name!r}") from None

    def privacy_payload(self) -> Dict[str, int]:
        """The Privacy object with Steam's field names, comment permission excluded"""
        return {
            'PrivacyProfile': self.profile,
            'PrivacyInventory': self.inventory,
            'PrivacyInventoryGifts': self.inventory_gifts,
            'PrivacyOwnedGames': self.owned_games,
            'PrivacyPlaytime': self.playtime,
            'PrivacyFriendsList': self.friends_list,
        }

    def to_form(self, session_id: str) -> Dict[str, str]:
        return {
            'sessionid': session_id,
            'Privacy': json.dumps(self.privacy_payload()),
            'eCommentPermission': str(self.comment_permission),
        }
