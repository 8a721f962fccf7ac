"""
Inventory JSON Extractor
"""

from typing import Any, Dict, List

from steam_web.core.errors import NotLoggedIn, BadRequest, InvalidResponse
from steam_web.core.models import InventoryItem

class InventoryExtractor:
    """Joins rgInventory with rgDescriptions into InventoryItem records"""

    @staticmethod
    def check_success(payload: Dict[str, Any]):
        """Raise for a payload that reports failure with a 200 status"""
        if not isinstance(payload, dict):
            raise InvalidResponse("Inventory response is not a JSON object")

        if payload.get('success'):
            return

        error = str(payload.get('Error') or '')
        if 'private' in error.lower():
            raise NotLoggedIn(error)
        raise BadRequest(error or "Inventory request failed", payload)

    @staticmethod
    def extract_items(payload: Dict[str, Any], context_id: str) -> List[InventoryItem]:
        """
        Flatten an inventory response.

        Args:
            payload: decoded /inventory/json/ response
            context_id: inventory context the payload was requested for

        Returns:
            list: one InventoryItem per rgInventory entry

        Raises:
            NotLoggedIn: the profile inventory is private to this session
            BadRequest: Steam reported another failure
            InvalidResponse: an asset references a missing description
        """
        InventoryExtractor.check_success(payload)

        # Steam sends [] instead of {} for an empty inventory
        inventory = payload.get('rgInventory') or {}
        descriptions = payload.get('rgDescriptions') or {}
        if not isinstance(inventory, dict) or not isinstance(descriptions, dict):
            raise InvalidResponse("rgInventory and rgDescriptions must be objects")

        items = []
        for asset in inventory.values():
            try:
                key = f"{asset['classid']}_{asset['instanceid']}"
                description = descriptions[key]
                items.append(InventoryItem(
                    asset_id=str(asset['id']),
                    amount=str(asset.get('amount', '1')),
                    icon_url=description.get('icon_url', ''),
                    name=description.get('name', ''),
                    type=description.get('type', ''),
                    tradable=description.get('tradable') in (1, '1'),
                    context_id=context_id,
                ))
            except (KeyError, TypeError, AttributeError) as e:
                raise InvalidResponse(f"Malformed inventory entry, missing {e}") from e

        return items
