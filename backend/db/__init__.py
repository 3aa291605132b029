"""
Database Module
Single settings document, stored as db/settings.json (file backend) or a one-row
table in db/settings.db (sqlite backend). NEXUS_DB_BACKEND / NEXUS_DATA_DIR select
the backend and directory.

Reads synthesize and persist the default document on first run. Writes merge the
incoming fields over the stored document. Load and save on one store are
serialized by the store's lock; last write wins.
"""

from pathlib import Path
from typing import Optional, Union

from loguru import logger

from dashboard import default_document, is_normalized, normalize_document
from shared.config import get_data_dir, get_db_backend

from .errors import StorageError
from .file_store import JsonFileStore
from .sqlite_store import SqliteStore

SETTINGS_FILE = "settings.json"
SQLITE_FILE = "settings.db"

SettingsStore = Union[JsonFileStore, SqliteStore]

_store: Optional[SettingsStore] = None


def create_store(backend: str, data_dir: Union[str, Path]) -> SettingsStore:
    """Build a store for backend (file | sqlite) rooted at data_dir."""
    data_dir = Path(data_dir)
    if backend == "file":
        return JsonFileStore(data_dir / SETTINGS_FILE)
    if backend == "sqlite":
        return SqliteStore(data_dir / SQLITE_FILE)
    raise ValueError(f"Unknown storage backend: {backend!r}")


def get_store() -> SettingsStore:
    """Return the active store, creating it from the environment on first use."""
    global _store
    if _store is None:
        _store = create_store(get_db_backend(), get_data_dir())
        logger.info("Using {} settings store: {}", _store.name, _store.path)
    return _store


def configure_store(store: Optional[SettingsStore]) -> None:
    """Replace the active store. None resets to the environment-configured one."""
    global _store
    _store = store


async def get_settings() -> dict:
    """Get the settings document. Creates and persists defaults when nothing is stored."""
    store = get_store()
    async with store.lock:
        stored = await store.read()
        if stored is None:
            document = default_document()
            await store.write(document)
            logger.info("No stored settings; created default document ({} widgets)", len(document["widgets"]))
            return document
    return stored if is_normalized(stored) else normalize_document(stored)


async def save_settings(incoming: dict) -> dict:
    """Merge incoming over the stored document and write the result in full."""
    store = get_store()
    async with store.lock:
        try:
            stored = await store.read()
        except StorageError as e:
            # a full save replaces an unreadable document instead of failing forever
            logger.warning("Stored settings unreadable, merging over defaults: {}", e)
            stored = None
        document = normalize_document(incoming, stored)
        await store.write(document)
    return {"success": True}


__all__ = [
    "JsonFileStore",
    "SettingsStore",
    "SqliteStore",
    "StorageError",
    "configure_store",
    "create_store",
    "get_settings",
    "get_store",
    "save_settings",
]
