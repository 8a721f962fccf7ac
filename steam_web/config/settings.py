"""
Steam Web Client Configuration Settings
"""

# Network settings
REQUEST_TIMEOUT = 15
MAX_RETRIES = 2
RETRY_DELAY = 2.0
RETRY_BACKOFF = 1.0
NON_RETRYABLE_STATUSES = frozenset({401, 429})

# User Agent
DEFAULT_USER_AGENT = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36'

# Headers
DEFAULT_HEADERS = {
    'User-Agent': DEFAULT_USER_AGENT,
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,application/json;q=0.9,*/*;q=0.8',
    'Accept-Language': 'en-US,en;q=0.5',
    'Accept-Encoding': 'gzip, deflate',
    'Connection': 'keep-alive',
}

# Steam URLs
STEAM_COMMUNITY_URL = "https://steamcommunity.com"
STEAM_LOGIN_URL = "https://login.steampowered.com"
STEAM_API_URL = "https://api.steampowered.com"

AUTHENTICATE_USER_URL = STEAM_API_URL + "/ISteamUserAuth/AuthenticateUser/v1"
FINALIZE_LOGIN_URL = STEAM_LOGIN_URL + "/jwt/finalizelogin"
LOGIN_REDIRECT_URL = STEAM_COMMUNITY_URL + "/login/home/?goto="
LOGOUT_URL = STEAM_COMMUNITY_URL + "/login/logout/"
NOTIFICATION_COUNTS_URL = STEAM_COMMUNITY_URL + "/actions/GetNotificationCounts"
AVATAR_UPLOAD_URL = STEAM_COMMUNITY_URL + "/actions/FileUploader/"

PROFILE_URL = STEAM_COMMUNITY_URL + "/profiles/{steam_id}"
BADGES_URL = PROFILE_URL + "/badges"
INVENTORY_URL = PROFILE_URL + "/inventory/json/{app_id}/{context_id}"
CLEAR_ALIASES_URL = PROFILE_URL + "/ajaxclearaliashistory/"
SET_PRIVACY_URL = PROFILE_URL + "/ajaxsetprivacy/"

# Cookies
SESSION_ID_COOKIE = 'sessionid'
LOGIN_SECURE_COOKIE = 'steamLoginSecure'
DELETED_COOKIE_VALUE = 'deleted'

# Tokens
TOKEN_EXPIRY_MARGIN = 60
WEB_AUDIENCE = 'web'
RENEW_AUDIENCE = 'renew'

# Inventory
STEAM_COMMUNITY_APP_ID = "753"
INVENTORY_CONTEXT_ID = "6"  # trading cards

# Avatar upload
AVATAR_UPLOAD_TYPE = 'player_avatar_image'
AVATAR_FILENAME = 'blob'
DEFAULT_AVATAR_CONTENT_TYPE = 'image/jpeg'
MISSING_STEAM_ID_SENTINEL = '#Error_BadOrMissingSteamID'

# Markers found in HTML served to a logged-out browser
LOGGED_OUT_MARKERS = [
    'g_steamID = false',
]

# Privacy values: 1 private, 2 friends only, 3 public
PRIVACY_PRIVATE = 1
PRIVACY_FRIENDS_ONLY = 2
PRIVACY_PUBLIC = 3

# Comment permission values
COMMENT_FRIENDS_ONLY = 0
COMMENT_PUBLIC = 1
COMMENT_PRIVATE = 2

PRIVACY_PRESETS = {
    'public': {
        'profile': PRIVACY_PUBLIC,
        'inventory': PRIVACY_PUBLIC,
        'inventory_gifts': PRIVACY_PUBLIC,
        'owned_games': PRIVACY_PUBLIC,
        'playtime': PRIVACY_PUBLIC,
        'friends_list': PRIVACY_PUBLIC,
        'comment_permission': COMMENT_PUBLIC,
    },
    'friendsOnly': {
        'profile': PRIVACY_FRIENDS_ONLY,
        'inventory': PRIVACY_FRIENDS_ONLY,
        'inventory_gifts': PRIVACY_PRIVATE,
        'owned_games': PRIVACY_FRIENDS_ONLY,
        'playtime': PRIVACY_PUBLIC,
        'friends_list': PRIVACY_FRIENDS_ONLY,
        'comment_permission': COMMENT_FRIENDS_ONLY,
    },
    'private': {
        'profile': PRIVACY_PRIVATE,
        'inventory': PRIVACY_PRIVATE,
        'inventory_gifts': PRIVACY_PRIVATE,
        'owned_games': PRIVACY_PRIVATE,
        'playtime': PRIVACY_PRIVATE,
        'friends_list': PRIVACY_PRIVATE,
        'comment_permission': COMMENT_PRIVATE,
    },
}

# Data export settings
DEFAULT_DATA_DIR = 'data'
FARMABLE_GAME_CSV_FIELDS = ["app_id", "name", "play_time", "remaining_cards", "dropped_cards"]

# Logging
LOG_LEVEL = 'INFO'
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
