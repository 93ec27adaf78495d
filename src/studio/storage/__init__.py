"""Object storage adapters."""

from .local_storage import LocalStorage
from .storage_client import DownloadedObject, ObjectStore, StoredObject
from .storage_errors import ObjectExistsError, ObjectNotFoundError, StorageError
from .storage_factory import create_storage
from .supabase_storage import SupabaseStorage

__all__ = [
    "DownloadedObject",
    "LocalStorage",
    "ObjectExistsError",
    "ObjectNotFoundError",
    "ObjectStore",
    "StorageError",
    "StoredObject",
    "SupabaseStorage",
    "create_storage",
]
