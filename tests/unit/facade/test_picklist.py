from __future__ import annotations

import asyncio

import pytest

from picklist.config import Config
from picklist.errors import (
    AlreadySelectedError,
    ElementExistsError,
    ElementNotFoundError,
    InvalidRequestError,
    NotSelectedError,
    QueueStoppedError,
)
from picklist.facade.core import PickList
from picklist.facade.types import Ack, Page
from picklist.queue.batcher import QueueSizes
from picklist.store.memory import InMemoryStore

# ── Reads ────────────────────────────────────────────────────────────


async def test_list_elements_paginates(picklist: PickList) -> None:
    page = picklist.list_elements()
    assert page == Page(data=[1, 2], total=5, page=1, total_pages=3)

    last = picklist.list_elements(page=3)
    assert last.data == [5]


async def test_list_elements_accepts_query_strings(picklist: PickList) -> None:
    page = picklist.list_elements(page="2", limit="3")
    assert page.data == [4, 5]
    assert page.total_pages == 2


async def test_list_elements_filter(picklist: PickList) -> None:
    picklist.store.add(13)
    page = picklist.list_elements(limit=10, filter="3")
    assert page.data == [3, 13]
    assert page.total == 2


@pytest.mark.parametrize(
    "kwargs",
    [{"page": 0}, {"page": "abc"}, {"limit": 0}, {"limit": -5}],
)
async def test_list_elements_rejects_bad_query(picklist: PickList, kwargs) -> None:
    with pytest.raises(InvalidRequestError) as exc_info:
        picklist.list_elements(**kwargs)
    assert exc_info.value.status_code == 400


async def test_reads_see_state_only_after_flush(picklist: PickList) -> None:
    picklist.select(2)
    assert picklist.list_selected().data == []
    assert 2 in picklist.list_elements(limit=5).data

    picklist.queue.flush_fast()

    assert picklist.list_selected().data == [2]
    assert 2 not in picklist.list_elements(limit=5).data


async def test_list_selected_in_display_order(picklist: PickList) -> None:
    for eid in (1, 2, 3):
        picklist.select(eid)
    picklist.queue.flush_fast()
    picklist.sort([3, 1])
    picklist.queue.flush_fast()

    assert picklist.list_selected(limit=10).data == [3, 1, 2]
    assert picklist.list_selected().total_pages == 2


async def test_state_and_queue_status(picklist: PickList) -> None:
    picklist.select(4)
    picklist.add(9)
    assert picklist.queue_status() == QueueSizes(fast_lane_size=1, slow_lane_size=1)

    picklist.queue.flush_fast()
    state = picklist.state()
    assert state.model_dump(by_alias=True) == {"selectedIds": [4], "sortOrder": [4]}


async def test_health(picklist: PickList) -> None:
    assert picklist.health() == {"status": "ok"}


# ── Mutations ────────────────────────────────────────────────────────


async def test_select_acknowledges(picklist: PickList) -> None:
    assert picklist.select(1) == Ack(message="Request queued")


@pytest.mark.parametrize("bad_id", ["1", 1.0, True, None, [1]])
async def test_select_rejects_non_integer(picklist: PickList, bad_id) -> None:
    with pytest.raises(InvalidRequestError, match="Invalid ID"):
        picklist.select(bad_id)
    assert picklist.queue_status().fast_lane_size == 0


async def test_select_unknown_is_not_found(picklist: PickList) -> None:
    with pytest.raises(ElementNotFoundError) as exc_info:
        picklist.select(99)
    assert exc_info.value.status_code == 404
    assert exc_info.value.element_id == 99


async def test_select_already_selected(picklist: PickList) -> None:
    picklist.store.select(1)
    with pytest.raises(AlreadySelectedError):
        picklist.select(1)


async def test_deselect_requires_selected(picklist: PickList) -> None:
    with pytest.raises(NotSelectedError):
        picklist.deselect(1)

    picklist.store.select(1)
    picklist.deselect(1)
    picklist.queue.flush_fast()
    assert picklist.store.is_selected(1) is False


async def test_select_then_deselect_collapse(picklist: PickList) -> None:
    picklist.store.select(2)
    picklist.select(1)
    picklist.deselect(2)
    picklist.select(3)

    picklist.queue.flush_fast()

    assert picklist.list_selected(limit=10).data == [1, 3]


@pytest.mark.parametrize("bad_order", ["1,2", [1, "2"], [1.5], None, 3])
async def test_sort_rejects_bad_order(picklist: PickList, bad_order) -> None:
    with pytest.raises(InvalidRequestError, match="Order must be an array"):
        picklist.sort(bad_order)


async def test_sort_accepts_unknown_ids(picklist: PickList) -> None:
    picklist.store.select(2)
    picklist.sort([99, 2])
    picklist.queue.flush_fast()
    assert picklist.list_selected().data == [2]


async def test_add_existing_rejected(picklist: PickList) -> None:
    with pytest.raises(ElementExistsError):
        picklist.add(3)


async def test_add_message_names_slow_interval(picklist: PickList) -> None:
    ack = picklist.add(6)
    assert ack.message == "Request queued (will be processed within 10s)"

    picklist.queue.flush_slow()
    assert picklist.store.exists(6)


async def test_add_twice_before_flush(picklist: PickList) -> None:
    picklist.add(10)
    picklist.add(10)
    assert picklist.queue_status().slow_lane_size == 1

    report = picklist.queue.flush_slow()
    assert report.applied == 1
    assert picklist.store.exists(10)


async def test_mutation_after_close_raises(picklist: PickList) -> None:
    await picklist.close()
    with pytest.raises(QueueStoppedError) as exc_info:
        picklist.select(1)
    assert exc_info.value.status_code == 503


# ── Construction ─────────────────────────────────────────────────────


async def test_create_from_config() -> None:
    cfg = Config(catalog_size=50, fast_interval=0.01, slow_interval=0.05, page_size=7)
    async with PickList.create(cfg) as picklist:
        assert isinstance(picklist.store, InMemoryStore)
        assert picklist.store.count() == 50
        assert picklist.queue.running is True
        assert len(picklist.list_elements().data) == 7

        picklist.select(12)
        await asyncio.sleep(0.03)
        assert picklist.list_selected().data == [12]

    assert picklist.queue.stopped is True


def test_create_without_autostart() -> None:
    picklist = PickList.create(Config(catalog_size=3), autostart=False)
    assert picklist.queue.running is False
    assert picklist.store.list_all() == [1, 2, 3]
