"""Public return types for the picklist API."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Page:
    """One page of element ids from :meth:`PickList.list_elements` or
    :meth:`PickList.list_selected`."""

    data: list[int] = field(default_factory=list)
    total: int = 0
    page: int = 1
    total_pages: int = 0


@dataclass
class Ack:
    """Acknowledgement that a mutation was queued (not yet applied)."""

    message: str
    success: bool = True
