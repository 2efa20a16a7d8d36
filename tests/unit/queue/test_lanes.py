from __future__ import annotations

import pytest
from pydantic import ValidationError

from picklist.queue.intents import (
    AddIntent,
    DeselectIntent,
    IntentKind,
    SelectIntent,
    SortIntent,
)
from picklist.queue.lanes import FastLane, SlowLane


class TestIntents:
    def test_kind_tags(self):
        assert SelectIntent(id=1).kind == IntentKind.SELECT
        assert DeselectIntent(id=1).kind == IntentKind.DESELECT
        assert SortIntent(order=(1,)).kind == IntentKind.SORT
        assert AddIntent(id=1).kind == IntentKind.ADD

    def test_dedup_keys(self):
        assert SelectIntent(id=7).dedup_key == "select:7"
        assert DeselectIntent(id=7).dedup_key == "deselect:7"
        assert SortIntent(order=(3, 1)).dedup_key == SortIntent(order=()).dedup_key
        assert AddIntent(id=7).dedup_key == 7

    def test_intents_are_frozen(self):
        intent = SelectIntent(id=1)
        with pytest.raises(ValidationError):
            intent.id = 2  # type: ignore[misc]

    def test_queued_at_is_utc(self):
        assert SelectIntent(id=1).queued_at.tzinfo is not None


class TestFastLane:
    def test_select_then_deselect_keeps_only_deselect(self):
        lane = FastLane()
        lane.offer(SelectIntent(id=3))
        collapsed = lane.offer(DeselectIntent(id=3))

        assert collapsed is True
        [intent] = lane.pending()
        assert isinstance(intent, DeselectIntent)
        assert intent.id == 3

    def test_deselect_then_select_keeps_only_select(self):
        lane = FastLane()
        lane.offer(DeselectIntent(id=3))
        lane.offer(SelectIntent(id=3))

        [intent] = lane.pending()
        assert isinstance(intent, SelectIntent)
        assert intent.id == 3

    def test_same_key_last_write_wins(self):
        lane = FastLane()
        first = SelectIntent(id=1)
        second = SelectIntent(id=1)
        lane.offer(first)
        assert lane.offer(second) is False

        assert len(lane) == 1
        assert lane.pending()[0] is second

    def test_only_latest_sort_survives(self):
        lane = FastLane()
        lane.offer(SortIntent(order=(1, 2)))
        lane.offer(SortIntent(order=(2, 1)))

        [intent] = lane.pending()
        assert isinstance(intent, SortIntent)
        assert intent.order == (2, 1)

    def test_pending_in_arrival_order(self):
        lane = FastLane()
        lane.offer(SortIntent(order=(1,)))
        lane.offer(SelectIntent(id=5))
        lane.offer(SortIntent(order=(5, 1)))

        kinds = [i.kind for i in lane.pending()]
        assert kinds == [IntentKind.SELECT, IntentKind.SORT]

    def test_different_ids_do_not_collapse(self):
        lane = FastLane()
        lane.offer(SelectIntent(id=1))
        lane.offer(DeselectIntent(id=2))
        assert len(lane) == 2

    def test_clear(self):
        lane = FastLane()
        lane.offer(SelectIntent(id=1))
        lane.clear()
        assert len(lane) == 0
        assert lane.pending() == []


class TestSlowLane:
    def test_first_writer_wins(self):
        lane = SlowLane()
        first = AddIntent(id=10)
        assert lane.offer(first) is True
        assert lane.offer(AddIntent(id=10)) is False

        assert len(lane) == 1
        assert lane.pending()[0] is first

    def test_distinct_ids(self):
        lane = SlowLane()
        lane.offer(AddIntent(id=10))
        lane.offer(AddIntent(id=11))
        assert [i.id for i in lane.pending()] == [10, 11]
