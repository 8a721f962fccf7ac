"""
Extractors for Steam Community pages and responses
"""

from steam_web.extractors.badges_extractor import BadgesExtractor
from steam_web.extractors.inventory_extractor import InventoryExtractor
from steam_web.extractors.profile_extractor import ProfileExtractor

__all__ = [
    'BadgesExtractor',
    'InventoryExtractor',
    'ProfileExtractor'
]
