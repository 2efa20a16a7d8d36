"""Main facade for the picklist library."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, StrictInt, ValidationError

from picklist.errors import (
    AlreadySelectedError,
    ElementExistsError,
    ElementNotFoundError,
    InvalidRequestError,
    NotSelectedError,
)
from picklist.facade.pagination import DEFAULT_PAGE_SIZE, PageQuery, paginate
from picklist.facade.types import Ack, Page
from picklist.queue.batcher import BatchingQueue, QueueSizes
from picklist.queue.intents import AddIntent, DeselectIntent, SelectIntent, SortIntent
from picklist.store.memory import InMemoryStore

if TYPE_CHECKING:
    from picklist.config import Config
    from picklist.store.base import Store, StoreState

logger = logging.getLogger(__name__)


class _IdPayload(BaseModel):
    id: StrictInt


class _OrderPayload(BaseModel):
    order: list[StrictInt]


M = TypeVar("M", bound=BaseModel)


def _validate(model: type[M], data: dict[str, Any], message: str) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise InvalidRequestError(message) from exc


class PickList:
    """Request layer over an element store and its batching queue.

    Reads go straight to the store and may lag behind queued mutations by
    up to one flush interval.  Mutations are validated against the current
    store state, then queued; they return an :class:`Ack`, never the new
    state.

    Usage::

        async with PickList.create(load_config()) as picklist:
            picklist.select(42)
            page = picklist.list_selected(page=1, limit=20)
    """

    def __init__(
        self,
        store: Store,
        queue: BatchingQueue,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self._store = store
        self._queue = queue
        self._page_size = page_size

    @classmethod
    def create(cls, config: Config | None = None, *, autostart: bool = True) -> PickList:
        """Seed an in-memory store and attach a queue to it.

        With ``autostart=True`` this must be called inside a running event
        loop, since the queue's tickers start immediately.
        """
        from picklist.config import Config

        config = config or Config()
        store = InMemoryStore.seeded(config.catalog_size)
        logger.info("Catalog seeded with %d elements", store.count())

        queue = BatchingQueue(
            store,
            fast_interval=config.fast_interval,
            slow_interval=config.slow_interval,
            autostart=autostart,
        )
        return cls(store, queue, page_size=config.page_size)

    @property
    def store(self) -> Store:
        return self._store

    @property
    def queue(self) -> BatchingQueue:
        return self._queue

    async def close(self) -> None:
        """Stop the queue. Intents not yet flushed are lost."""
        await self._queue.aclose()

    async def __aenter__(self) -> PickList:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    # ── Reads ────────────────────────────────────────────────────────

    def list_elements(
        self,
        page: int | str = 1,
        limit: int | str | None = None,
        filter: str | None = None,
    ) -> Page:
        """Return a page of unselected element ids."""
        query = self._parse_query(page, limit, filter)
        return paginate(
            self._store.list_unselected(),
            page=query.page,
            limit=query.limit,
            filter=query.filter,
        )

    def list_selected(
        self,
        page: int | str = 1,
        limit: int | str | None = None,
        filter: str | None = None,
    ) -> Page:
        """Return a page of selected element ids in display order."""
        query = self._parse_query(page, limit, filter)
        return paginate(
            self._store.list_selected_ordered(),
            page=query.page,
            limit=query.limit,
            filter=query.filter,
        )

    def state(self) -> StoreState:
        return self._store.snapshot()

    def queue_status(self) -> QueueSizes:
        return self._queue.queue_sizes()

    def health(self) -> dict[str, str]:
        return {"status": "ok"}

    # ── Mutations (queued) ───────────────────────────────────────────

    def select(self, element_id: Any) -> Ack:
        payload = _validate(_IdPayload, {"id": element_id}, "Invalid ID")
        if not self._store.exists(payload.id):
            raise ElementNotFoundError(payload.id)
        if self._store.is_selected(payload.id):
            raise AlreadySelectedError(payload.id)

        self._queue.submit(SelectIntent(id=payload.id))
        return Ack(message="Request queued")

    def deselect(self, element_id: Any) -> Ack:
        payload = _validate(_IdPayload, {"id": element_id}, "Invalid ID")
        if not self._store.is_selected(payload.id):
            raise NotSelectedError(payload.id)

        self._queue.submit(DeselectIntent(id=payload.id))
        return Ack(message="Request queued")

    def sort(self, order: Any) -> Ack:
        payload = _validate(
            _OrderPayload, {"order": order}, "Order must be an array of integer IDs"
        )
        self._queue.submit(SortIntent(order=tuple(payload.order)))
        return Ack(message="Request queued")

    def add(self, element_id: Any) -> Ack:
        payload = _validate(_IdPayload, {"id": element_id}, "Invalid ID")
        if self._store.exists(payload.id):
            raise ElementExistsError(payload.id)

        self._queue.submit(AddIntent(id=payload.id))
        return Ack(
            message=(
                "Request queued (will be processed within "
                f"{self._queue.slow_interval:g}s)"
            )
        )

    # ── Helpers ──────────────────────────────────────────────────────

    def _parse_query(
        self,
        page: int | str,
        limit: int | str | None,
        filter: str | None,
    ) -> PageQuery:
        return _validate(
            PageQuery,
            {
                "page": page,
                "limit": self._page_size if limit is None else limit,
                "filter": filter or None,
            },
            "Invalid pagination parameters",
        )
