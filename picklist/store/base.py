from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field


class StoreState(BaseModel):
    """Selection and display order, shaped for external persistence.

    Serialises as ``{"selectedIds": [...], "sortOrder": [...]}`` with
    ``model_dump(by_alias=True)``; either spelling is accepted on input.
    """

    model_config = ConfigDict(populate_by_name=True)

    selected_ids: list[int] = Field(default_factory=list, alias="selectedIds")
    sort_order: list[int] = Field(default_factory=list, alias="sortOrder")


class Store(ABC):
    """Abstract element store: catalog, selection and display order.

    Every operation is synchronous and performs no I/O, so within a single
    event loop a write can never interleave with a partially computed read.
    Expected business conditions (unknown id, already selected, ...) are
    reported as ``False``, never raised.
    """

    # ── Queries ──────────────────────────────────────────────────────

    @abstractmethod
    def list_all(self) -> list[int]:
        """Return every catalog id."""
        ...

    @abstractmethod
    def list_unselected(self) -> list[int]:
        """Return catalog ids that are not selected."""
        ...

    @abstractmethod
    def list_selected_ordered(self) -> list[int]:
        """Return the selection rendered in display order.

        Ids that appear in the display order come first, in that order;
        selected ids missing from it follow in selection order.  An empty
        display order falls back to ascending numeric order.
        """
        ...

    @abstractmethod
    def exists(self, element_id: int) -> bool: ...

    @abstractmethod
    def is_selected(self, element_id: int) -> bool: ...

    @abstractmethod
    def count(self) -> int:
        """Return the catalog size."""
        ...

    # ── Mutations ────────────────────────────────────────────────────

    @abstractmethod
    def add(self, element_id: int) -> bool:
        """Insert into the catalog. ``False`` if already present."""
        ...

    @abstractmethod
    def select(self, element_id: int) -> bool:
        """Select and append to the display order.

        ``False`` if the id is unknown or already selected.
        """
        ...

    @abstractmethod
    def deselect(self, element_id: int) -> bool:
        """Remove from the selection and display order. ``False`` if not selected."""
        ...

    @abstractmethod
    def reorder(self, new_order: Iterable[int]) -> bool:
        """Replace the display order, reconciling it against the selection.

        Unselected ids are dropped; selected ids missing from *new_order*
        keep their previous relative order at the end.  Always ``True``.
        """
        ...

    # ── Snapshots ────────────────────────────────────────────────────

    @abstractmethod
    def snapshot(self) -> StoreState:
        """Return a copy of the selection and display order."""
        ...

    @abstractmethod
    def restore(self, state: StoreState) -> None:
        """Replace the selection and display order with *state*."""
        ...

    @abstractmethod
    def reset(self) -> None:
        """Clear the selection and display order; the catalog is kept."""
        ...
