from __future__ import annotations

from picklist.queue.intents import AddIntent, FastIntent


class FastLane:
    """Select/deselect/sort buffer, last-write-wins per key.

    Keys are ``select:<id>``, ``deselect:<id>`` and a single ``sort`` key.
    Queuing a select cancels a pending deselect for the same id and vice
    versa, so at most one intent per id is pending.  A re-queued key moves
    to the end: pending intents are kept in arrival order.
    """

    def __init__(self) -> None:
        self._pending: dict[str, FastIntent] = {}

    def offer(self, intent: FastIntent) -> bool:
        """Queue *intent*. Returns ``True`` if it cancelled an opposite intent."""
        collapsed = False
        if intent.opposite_key is not None:
            collapsed = self._pending.pop(intent.opposite_key, None) is not None
        self._pending.pop(intent.dedup_key, None)
        self._pending[intent.dedup_key] = intent
        return collapsed

    def pending(self) -> list[FastIntent]:
        return list(self._pending.values())

    def clear(self) -> None:
        self._pending.clear()

    def __len__(self) -> int:
        return len(self._pending)


class SlowLane:
    """Add buffer keyed by element id, first-writer-wins."""

    def __init__(self) -> None:
        self._pending: dict[int, AddIntent] = {}

    def offer(self, intent: AddIntent) -> bool:
        """Queue *intent*. Returns ``False`` if an add for the id is already pending."""
        if intent.dedup_key in self._pending:
            return False
        self._pending[intent.dedup_key] = intent
        return True

    def pending(self) -> list[AddIntent]:
        return list(self._pending.values())

    def clear(self) -> None:
        self._pending.clear()

    def __len__(self) -> int:
        return len(self._pending)
