"""
Alias persistence.

The index key holds a JSON list of alias names; each alias lives under its
own ``alias|<name>`` key. The two are written independently, so a reader
must tolerate index entries without a record.
"""

import json
import logging
from typing import Dict, List

from .storage import LocalStorage

logger = logging.getLogger(__name__)

INDEX_KEY = "aliases"


def record_key(name: str) -> str:
    return f"alias|{name}"


def read_index(storage: LocalStorage) -> List[str]:
    """Alias names from the index; a corrupt or missing index is cleared"""
    try:
        names = json.loads(storage.get(INDEX_KEY))
        if not isinstance(names, list):
            raise ValueError(f"alias index is a {type(names).__name__}, not a list")
    except (TypeError, ValueError) as e:
        logger.debug("Resetting alias index: %s", e)
        storage.remove(INDEX_KEY)
        return []
    return [str(name) for name in names]


def load_aliases(storage: LocalStorage) -> Dict[str, str]:
    """Rebuild the alias table, skipping names whose record is gone"""
    aliases = {}
    for name in read_index(storage):
        value = storage.get(record_key(name))
        if value is not None:
            aliases[name] = value
    return aliases


def save_alias(storage: LocalStorage, name: str, value: str) -> None:
    names = read_index(storage)
    if name not in names:
        names.append(name)
        storage.set(INDEX_KEY, json.dumps(names))
    storage.set(record_key(name), value)


def remove_alias(storage: LocalStorage, name: str) -> None:
    names = [entry for entry in read_index(storage) if entry != name]
    storage.set(INDEX_KEY, json.dumps(names))
    storage.remove(record_key(name))
