"""Request-batching queue.

Mutating requests are buffered in two lanes and drained into the store by
two independent asyncio tickers:

    fast lane  →  select / deselect / sort   every ``fast_interval`` seconds
    slow lane  →  add                        every ``slow_interval`` seconds

A flush is synchronous: once a ticker fires, every surviving intent is
applied and the lane cleared before control returns to the event loop.
Per-intent failures are not reported upstream; a stale intent is a no-op
counted in :attr:`FlushReport.skipped`.

Stopping the queue discards whatever has not been flushed yet.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from types import TracebackType

from picklist.errors import QueueStoppedError
from picklist.queue.intents import (
    AddIntent,
    DeselectIntent,
    FastIntent,
    Intent,
    SelectIntent,
    SortIntent,
)
from picklist.queue.lanes import FastLane, SlowLane
from picklist.store.base import Store

logger = logging.getLogger(__name__)

FAST_LANE_INTERVAL = 1.0
SLOW_LANE_INTERVAL = 10.0


@dataclass
class QueueSizes:
    """Snapshot of pending intent counts, for monitoring only."""

    fast_lane_size: int
    slow_lane_size: int


@dataclass
class FlushReport:
    """Outcome of a single lane flush."""

    lane: str
    applied: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.applied + self.skipped


class BatchingQueue:
    """Buffers intents and flushes them into a :class:`Store` on two timers.

    Usage::

        async with BatchingQueue(store) as queue:
            queue.submit(SelectIntent(id=4))
            ...

    With ``autostart=True`` (the default) the tickers start in the
    constructor, which must then run inside an event loop.  Pass
    ``autostart=False`` to drive flushes by hand or start later.
    """

    def __init__(
        self,
        store: Store,
        *,
        fast_interval: float = FAST_LANE_INTERVAL,
        slow_interval: float = SLOW_LANE_INTERVAL,
        autostart: bool = True,
    ) -> None:
        if fast_interval <= 0 or slow_interval <= 0:
            raise ValueError(
                f"Flush intervals must be positive, got "
                f"fast={fast_interval} slow={slow_interval}"
            )
        self._store = store
        self.fast_interval = fast_interval
        self.slow_interval = slow_interval
        self._fast = FastLane()
        self._slow = SlowLane()
        self._tasks: list[asyncio.Task[None]] = []
        self._stopped = False

        if autostart:
            self.start()

    # ── Lifecycle ────────────────────────────────────────────────────

    @property
    def running(self) -> bool:
        return bool(self._tasks)

    @property
    def stopped(self) -> bool:
        return self._stopped

    def start(self) -> None:
        """Start both tickers. No-op if they are already running."""
        if self._stopped:
            raise QueueStoppedError("Cannot restart a stopped queue")
        if self._tasks:
            return

        loop = asyncio.get_running_loop()
        self._tasks = [
            loop.create_task(
                self._tick("fast", self.fast_interval, self.flush_fast),
                name="picklist-fast-lane",
            ),
            loop.create_task(
                self._tick("slow", self.slow_interval, self.flush_slow),
                name="picklist-slow-lane",
            ),
        ]
        logger.info(
            "Batching queue started (fast every %ss, slow every %ss)",
            self.fast_interval,
            self.slow_interval,
        )

    def stop(self) -> None:
        """Cancel both tickers and discard unflushed intents."""
        if self._stopped:
            return
        self._stopped = True

        for task in self._tasks:
            task.cancel()
        self._tasks = []

        dropped_fast, dropped_slow = len(self._fast), len(self._slow)
        self._fast.clear()
        self._slow.clear()
        if dropped_fast or dropped_slow:
            logger.warning(
                "Queue stopped: discarded %d fast-lane and %d slow-lane intents",
                dropped_fast,
                dropped_slow,
            )
        else:
            logger.info("Queue stopped")

    async def aclose(self) -> None:
        """Stop the queue and wait for the ticker tasks to finish cancelling."""
        tasks = list(self._tasks)
        self.stop()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def __aenter__(self) -> BatchingQueue:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # ── Intake ───────────────────────────────────────────────────────

    def submit(self, intent: Intent) -> None:
        """Queue *intent* in the lane matching its kind."""
        if self._stopped:
            raise QueueStoppedError()

        if isinstance(intent, AddIntent):
            if not self._slow.offer(intent):
                logger.debug("Add for %d already pending, dropped", intent.id)
            return

        if self._fast.offer(intent):
            logger.debug("%s cancelled its pending opposite", intent.dedup_key)

    def queue_sizes(self) -> QueueSizes:
        return QueueSizes(
            fast_lane_size=len(self._fast),
            slow_lane_size=len(self._slow),
        )

    # ── Flushing ─────────────────────────────────────────────────────

    def flush_fast(self) -> FlushReport:
        """Apply every pending select/deselect/sort, then clear the lane."""
        report = FlushReport(lane="fast")
        if not len(self._fast):
            return report

        logger.info("Processing %d fast-lane intents", len(self._fast))
        try:
            for intent in self._fast.pending():
                if self._apply_fast(intent):
                    report.applied += 1
                else:
                    report.skipped += 1
        finally:
            self._fast.clear()

        logger.info(
            "Fast lane processed: %d applied, %d skipped",
            report.applied,
            report.skipped,
        )
        return report

    def flush_slow(self) -> FlushReport:
        """Apply every pending add, then clear the lane."""
        report = FlushReport(lane="slow")
        if not len(self._slow):
            return report

        logger.info("Processing %d add intents", len(self._slow))
        try:
            for intent in self._slow.pending():
                if self._store.add(intent.id):
                    logger.info("Added element: %d", intent.id)
                    report.applied += 1
                else:
                    logger.debug("Element already exists: %d", intent.id)
                    report.skipped += 1
        finally:
            self._slow.clear()

        logger.info(
            "Slow lane processed: %d added, %d skipped",
            report.applied,
            report.skipped,
        )
        return report

    def _apply_fast(self, intent: FastIntent) -> bool:
        if isinstance(intent, SelectIntent):
            return self._store.select(intent.id)
        if isinstance(intent, DeselectIntent):
            return self._store.deselect(intent.id)
        if isinstance(intent, SortIntent):
            return self._store.reorder(intent.order)
        raise ValueError(f"Unknown fast-lane intent: {intent!r}")

    async def _tick(
        self,
        lane: str,
        interval: float,
        flush: Callable[[], FlushReport],
    ) -> None:
        while True:
            await asyncio.sleep(interval)
            try:
                flush()
            except Exception as exc:
                logger.error("[%s] Flush failed: %s", lane, exc, exc_info=True)
