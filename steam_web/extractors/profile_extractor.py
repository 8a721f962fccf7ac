"""
Profile Page Extractor
"""

from typing import Optional, Union

from bs4 import BeautifulSoup

from steam_web.config.settings import LOGGED_OUT_MARKERS

class ProfileExtractor:
    """Reads the few things we need from a profile page"""

    @staticmethod
    def extract_avatar_frame(html: Union[str, bytes]) -> Optional[str]:
        """Image URL of the equipped avatar frame, None without a frame"""
        soup = BeautifulSoup(html, 'html.parser')
        frame = soup.find('div', class_='profile_avatar_frame')
        if not frame:
            return None

        image = frame.find('img')
        if image and image.get('src'):
            return image['src']
        return None

    @staticmethod
    def is_logged_out_page(text: str) -> bool:
        """Steam pages rendered for a visitor set g_steamID to false"""
        if not text:
            return False
        return any(marker in text for marker in LOGGED_OUT_MARKERS)
