from __future__ import annotations

import logging
from collections.abc import Iterable

from picklist.store.base import Store, StoreState

logger = logging.getLogger(__name__)


class InMemoryStore(Store):
    """Store backed by insertion-ordered dicts and a list.

    The catalog and selection are ``dict[int, None]`` so membership is O(1)
    and iteration follows insertion order.  Not safe for concurrent mutation
    from several threads; confine it to one event loop.
    """

    def __init__(self, initial_ids: Iterable[int] = ()) -> None:
        self._catalog: dict[int, None] = dict.fromkeys(initial_ids)
        self._selected: dict[int, None] = {}
        self._order: list[int] = []

    @classmethod
    def seeded(cls, size: int) -> InMemoryStore:
        """Build a store whose catalog is ``1..size``."""
        return cls(range(1, size + 1))

    # ── Queries ──────────────────────────────────────────────────────

    def list_all(self) -> list[int]:
        return list(self._catalog)

    def list_unselected(self) -> list[int]:
        selected = self._selected
        return [eid for eid in self._catalog if eid not in selected]

    def list_selected_ordered(self) -> list[int]:
        if not self._order:
            return sorted(self._selected)

        ordered = [eid for eid in self._order if eid in self._selected]
        placed = set(ordered)
        stragglers = [eid for eid in self._selected if eid not in placed]
        return ordered + stragglers

    def exists(self, element_id: int) -> bool:
        return element_id in self._catalog

    def is_selected(self, element_id: int) -> bool:
        return element_id in self._selected

    def count(self) -> int:
        return len(self._catalog)

    # ── Mutations ────────────────────────────────────────────────────

    def add(self, element_id: int) -> bool:
        if element_id in self._catalog:
            return False
        self._catalog[element_id] = None
        return True

    def select(self, element_id: int) -> bool:
        if element_id not in self._catalog:
            return False
        if element_id in self._selected:
            return False
        self._selected[element_id] = None
        self._order.append(element_id)
        return True

    def deselect(self, element_id: int) -> bool:
        if element_id not in self._selected:
            return False
        del self._selected[element_id]
        self._order = [eid for eid in self._order if eid != element_id]
        return True

    def reorder(self, new_order: Iterable[int]) -> bool:
        previous = self.list_selected_ordered()
        # dict.fromkeys keeps the first occurrence of a repeated id
        valid = list(
            dict.fromkeys(eid for eid in new_order if eid in self._selected)
        )
        placed = set(valid)
        self._order = valid + [eid for eid in previous if eid not in placed]
        return True

    # ── Snapshots ────────────────────────────────────────────────────

    def snapshot(self) -> StoreState:
        return StoreState(
            selected_ids=list(self._selected),
            sort_order=list(self._order),
        )

    def restore(self, state: StoreState) -> None:
        unknown = [eid for eid in state.selected_ids if eid not in self._catalog]
        if unknown:
            logger.warning(
                "Dropping %d selected ids missing from the catalog: %s",
                len(unknown),
                unknown[:10],
            )

        self._selected = dict.fromkeys(
            eid for eid in state.selected_ids if eid in self._catalog
        )
        self._order = list(
            dict.fromkeys(eid for eid in state.sort_order if eid in self._selected)
        )

    def reset(self) -> None:
        self._selected = {}
        self._order = []
