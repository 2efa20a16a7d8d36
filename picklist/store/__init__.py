from picklist.store.base import Store, StoreState
from picklist.store.memory import InMemoryStore

__all__ = [
    "InMemoryStore",
    "Store",
    "StoreState",
]
