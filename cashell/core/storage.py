"""
Durable key-value storage for Cashell.
Holds interactive history, the alias index and per-alias records
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class LocalStorage:
    """String key-value store persisted as one JSON document"""

    def __init__(self, storage_file: Path):
        self.storage_file = Path(storage_file)
        self._items = self._load()

    def _load(self) -> Dict[str, str]:
        """Load items from file or start empty"""
        if self.storage_file.exists():
            try:
                with open(self.storage_file, 'r') as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    return {str(key): value for key, value in data.items() if isinstance(value, str)}
                logger.warning("Ignoring malformed storage file %s", self.storage_file)
            except (json.JSONDecodeError, IOError) as e:
                logger.warning("Could not load storage file %s: %s", self.storage_file, e)
        return {}

    def _save(self) -> None:
        """Write every item back to disk"""
        try:
            self.storage_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.storage_file, 'w') as f:
                json.dump(self._items, f, indent=2)
        except IOError as e:
            logger.error("Error saving storage: %s", e)

    def get(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = str(value)
        self._save()

    def remove(self, key: str) -> None:
        if self._items.pop(key, None) is not None:
            self._save()
