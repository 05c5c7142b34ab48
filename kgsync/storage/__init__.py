"""Local persistence shared across execution contexts."""

from kgsync.storage.area import StorageArea, StorageContext, StorageEvent
from kgsync.storage.keyed_store import PersistentKeyedStore

__all__ = ["PersistentKeyedStore", "StorageArea", "StorageContext", "StorageEvent"]
