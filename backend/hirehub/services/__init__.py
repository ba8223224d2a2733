from hirehub.services.storage import ObjectStorage, StorageError, build_object_key, get_storage
from hirehub.services.profiles import get_user, resolve_user, sync_user

__all__ = [
    "ObjectStorage",
    "StorageError",
    "build_object_key",
    "get_storage",
    "get_user",
    "resolve_user",
    "sync_user",
]
