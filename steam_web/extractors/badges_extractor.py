"""
Badges Page Extractor

Finds the games that still have trading card drops on a
steamcommunity.com/profiles/<id>/badges page.
"""

import logging
import re
from typing import List, Optional, Union

from bs4 import BeautifulSoup, Tag

from steam_web.core.errors import NotLoggedIn
from steam_web.core.models import FarmableGame

logger = logging.getLogger(__name__)

INTEGER = re.compile(r'\d+')
DECIMAL = re.compile(r'\d+(?:\.\d+)?')
PAGE_PARAM = re.compile(r'[?&]p=(\d+)')

class BadgesExtractor:
    """Extracts FarmableGame records from the badges page"""

    @staticmethod
    def to_soup(html: Union[str, bytes, BeautifulSoup]) -> BeautifulSoup:
        if isinstance(html, BeautifulSoup):
            return html
        return BeautifulSoup(html, 'html.parser')

    @staticmethod
    def is_logged_out(soup: BeautifulSoup) -> bool:
        """The header's primary action link says "login" when the cookies are not accepted"""
        action_link = soup.find('a', class_='global_action_link')
        if not action_link:
            return False
        return 'login' in action_link.get_text(strip=True).lower()

    @staticmethod
    def extract_page_count(soup: BeautifulSoup) -> int:
        """Highest page number linked from the pager, 1 for a single page"""
        pages = [1]
        for link in soup.find_all('a', class_='pagelink'):
            match = PAGE_PARAM.search(link.get('href', ''))
            if match:
                pages.append(int(match.group(1)))
        return max(pages)

    @staticmethod
    def extract_remaining_cards(badge: Tag) -> int:
        progress = badge.find(class_='progress_info_bold')
        if not progress:
            return 0

        # Also used for "tasks remaining" on non-game badges
        text = progress.get_text()
        if 'card drops remaining' not in text:
            return 0

        match = INTEGER.search(text)
        return int(match.group(0)) if match else 0

    @staticmethod
    def extract_play_time(badge: Tag) -> float:
        stats = badge.find(class_='badge_title_stats_playtime')
        if not stats:
            return 0.0

        # "1,234 hrs on record" or "12.5 hrs on record"
        text = stats.get_text().replace(',', '')
        if 'hrs on record' not in text:
            return 0.0

        match = DECIMAL.search(text)
        return float(match.group(0)) if match else 0.0

    @staticmethod
    def extract_name(badge: Tag) -> str:
        # "View details" sits inside the title block
        for details in badge.find_all(class_='badge_view_details'):
            details.decompose()

        title = badge.find(class_='badge_title')
        if not title:
            return ""
        return title.get_text().replace('\xa0', ' ').strip()

    @staticmethod
    def extract_app_id(badge: Tag) -> Optional[int]:
        overlay = badge.find(class_='badge_row_overlay')
        if not overlay:
            return None

        link = overlay.get('href') or ''
        position = link.find('gamecards')
        if position == -1:
            return None

        match = INTEGER.search(link[position:])
        return int(match.group(0)) if match else None

    @staticmethod
    def extract_dropped_cards(badge: Tag) -> int:
        for header in badge.find_all(class_='card_drop_info_header'):
            text = header.get_text()
            if 'Card drops received' in text:
                match = DECIMAL.search(text)
                return int(float(match.group(0))) if match else 0
        return 0

    @staticmethod
    def extract_farmable_games(html: Union[str, bytes, BeautifulSoup]) -> List[FarmableGame]:
        """
        Extract every game with card drops left.

        Args:
            html: badges page markup or an already parsed soup

        Returns:
            list: FarmableGame for each badge row with remaining drops

        Raises:
            NotLoggedIn: the page was served to a logged-out visitor
        """
        soup = BadgesExtractor.to_soup(html)

        if BadgesExtractor.is_logged_out(soup):
            raise NotLoggedIn("Badges page asks to login")

        games = []
        for badge in soup.find_all('div', class_='badge_row'):
            remaining_cards = BadgesExtractor.extract_remaining_cards(badge)
            if remaining_cards == 0:
                continue

            app_id = BadgesExtractor.extract_app_id(badge)
            if app_id is None:
                logger.debug("Skipping badge row without a gamecards link")
                continue

            games.append(FarmableGame(
                name=BadgesExtractor.extract_name(badge),
                app_id=app_id,
                play_time=BadgesExtractor.extract_play_time(badge),
                remaining_cards=remaining_cards,
                dropped_cards=BadgesExtractor.extract_dropped_cards(badge),
            ))

        return games
