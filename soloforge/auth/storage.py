from __future__ import annotations

import logging
from typing import Dict, Literal, Optional, Protocol

logger = logging.getLogger(__name__)

StorageKind = Literal["local", "session"]

# Persistent storage key remembering whether the user asked to stay signed in.
AUTH_STORAGE_PREFERENCE_KEY = "sf_auth_storage"


class KeyValueStorage(Protocol):
    """
    Client-side string storage.

    Same method names as supabase-py's `SyncSupportedStorage`, so one object can back
    both the auth client's session persistence and our own redirect bookkeeping.
    """

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """Tab-scoped storage that lives as long as the object does."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)


def read_item(storage: KeyValueStorage, key: str) -> Optional[str]:
    """Read a value; storage failures are logged and read as absent."""
    try:
        value = storage.get_item(key)
    except Exception as e:
        logger.warning("Storage read failed for %s: %s", key, str(e))
        return None
    if value is None:
        return None
    return str(value)


def write_item(storage: KeyValueStorage, key: str, value: str) -> bool:
    try:
        storage.set_item(key, value)
        return True
    except Exception as e:
        logger.warning("Storage write failed for %s: %s", key, str(e))
        return False


def discard_item(storage: KeyValueStorage, key: str) -> bool:
    """Remove a value. Returns False (after logging) when storage refused."""
    try:
        storage.remove_item(key)
        return True
    except Exception as e:
        logger.warning("Storage delete failed for %s: %s", key, str(e))
        return False


def get_auth_storage_preference(storage: KeyValueStorage) -> StorageKind:
    """`session` only when explicitly stored; anything else (or a failing store) means `local`."""
    return "session" if read_item(storage, AUTH_STORAGE_PREFERENCE_KEY) == "session" else "local"


def set_auth_storage_preference(storage: KeyValueStorage, kind: StorageKind) -> None:
    write_item(storage, AUTH_STORAGE_PREFERENCE_KEY, kind)
