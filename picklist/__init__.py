from picklist.errors import (
    AlreadySelectedError,
    ElementExistsError,
    ElementNotFoundError,
    InvalidRequestError,
    NotSelectedError,
    PickListError,
    QueueStoppedError,
)
from picklist.facade import Ack, Page, PickList
from picklist.queue import BatchingQueue, FlushReport, QueueSizes
from picklist.store import InMemoryStore, Store, StoreState

__all__ = [
    "Ack",
    "AlreadySelectedError",
    "BatchingQueue",
    "ElementExistsError",
    "ElementNotFoundError",
    "FlushReport",
    "InMemoryStore",
    "InvalidRequestError",
    "NotSelectedError",
    "Page",
    "PickList",
    "PickListError",
    "QueueSizes",
    "QueueStoppedError",
    "Store",
    "StoreState",
]
