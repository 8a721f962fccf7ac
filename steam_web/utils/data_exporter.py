"""
Data Export Utilities
"""

import csv
import json
import os
from dataclasses import asdict, is_dataclass
from typing import Any, Dict, List, Optional, Sequence

from steam_web.config.settings import DEFAULT_DATA_DIR

def _as_dict(record: Any) -> Dict[str, Any]:
    if is_dataclass(record):
        return asdict(record)
    return dict(record)

class DataExporter:
    """Writes farmable games and inventory items to JSON or CSV files"""

    @staticmethod
    def save_to_json(records: Sequence[Any], filename: str, data_dir: str = DEFAULT_DATA_DIR) -> str:
        """
        Save records to a JSON file.

        Args:
            records: FarmableGame / InventoryItem instances or plain dicts
            filename: Output filename
            data_dir: Directory to save files in

        Returns:
            str: Path to saved file
        """
        os.makedirs(data_dir, exist_ok=True)
        filepath = os.path.join(data_dir, filename)

        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump([_as_dict(r) for r in records], f, indent=2, ensure_ascii=False)

        return filepath

    @staticmethod
    def save_to_csv(records: Sequence[Any], filename: str, data_dir: str = DEFAULT_DATA_DIR,
                    fieldnames: Optional[List[str]] = None) -> str:
        """
        Save records to a CSV file.

        Args:
            records: FarmableGame / InventoryItem instances or plain dicts
            filename: Output CSV filename
            data_dir: Directory to save files in
            fieldnames: Columns to write, every field of the first record if omitted

        Returns:
            str: Path to saved file
        """
        os.makedirs(data_dir, exist_ok=True)
        rows = [_as_dict(r) for r in records]

        if not fieldnames:
            fieldnames = list(rows[0].keys()) if rows else []

        filepath = os.path.join(data_dir, filename)

        with open(filepath, 'w', newline='', encoding='utf-8') as csvfile:
            writer = csv.DictWriter(csvfile, fieldnames=fieldnames)
            writer.writeheader()
            for row in rows:
                writer.writerow({field: row.get(field, '') for field in fieldnames})

        return filepath

    @staticmethod
    def load_from_json(filepath: str) -> List[Dict[str, Any]]:
        """Load records saved by save_to_json"""
        with open(filepath, 'r', encoding='utf-8') as f:
            return json.load(f)
