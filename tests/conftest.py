from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest

from picklist.facade.core import PickList
from picklist.queue.batcher import BatchingQueue
from picklist.store.memory import InMemoryStore

CATALOG_SIZE = 5


@pytest.fixture()
def store() -> InMemoryStore:
    """A store whose catalog is ``1..5`` with nothing selected."""
    return InMemoryStore.seeded(CATALOG_SIZE)


@pytest.fixture()
def queue(store: InMemoryStore) -> BatchingQueue:
    """A queue with no running tickers; tests flush by hand."""
    return BatchingQueue(store, autostart=False)


@pytest.fixture()
async def picklist(
    store: InMemoryStore, queue: BatchingQueue
) -> AsyncGenerator[PickList]:
    facade = PickList(store, queue, page_size=2)
    yield facade
    await facade.close()


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch) -> None:
    """Point config lookups at a temp file and strip picklist env overrides."""
    monkeypatch.setenv("PICKLIST_CONFIG", str(tmp_path / "config.toml"))
    for var in (
        "PICKLIST_CATALOG_SIZE",
        "PICKLIST_FAST_INTERVAL",
        "PICKLIST_SLOW_INTERVAL",
        "PICKLIST_PAGE_SIZE",
        "PICKLIST_HOST",
        "PORT",
    ):
        monkeypatch.delenv(var, raising=False)
