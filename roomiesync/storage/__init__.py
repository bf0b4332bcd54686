from roomiesync.config import Settings, settings as default_settings
from roomiesync.storage.interface import (
    StorageBackend,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from roomiesync.storage.local import JsonFileStore, LocalStorage, SessionStore
from roomiesync.storage.remote import RemoteStorage


def get_storage(settings: Settings = default_settings) -> StorageBackend:
    """Build the storage backend selected by STORAGE_BACKEND."""
    if settings.STORAGE_BACKEND == "remote":
        session = SessionStore(JsonFileStore(settings.LOCAL_STORAGE_DIR))
        return RemoteStorage(
            settings.REMOTE_API_URL,
            session=session,
            timeout=settings.REMOTE_API_TIMEOUT,
        )
    return LocalStorage(settings.LOCAL_STORAGE_DIR)


__all__ = [
    "StorageBackend",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "JsonFileStore",
    "LocalStorage",
    "SessionStore",
    "RemoteStorage",
    "get_storage",
]
