from groupbuy.storage.module import DataStoreModule
from groupbuy.storage.postgrest import PostgrestClient

__all__ = [
    "DataStoreModule",
    "PostgrestClient",
]
