from picklist.facade.core import PickList
from picklist.facade.pagination import PageQuery, paginate
from picklist.facade.types import Ack, Page

__all__ = [
    "Ack",
    "Page",
    "PageQuery",
    "PickList",
    "paginate",
]
