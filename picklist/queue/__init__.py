from picklist.queue.batcher import (
    FAST_LANE_INTERVAL,
    SLOW_LANE_INTERVAL,
    BatchingQueue,
    FlushReport,
    QueueSizes,
)
from picklist.queue.intents import (
    AddIntent,
    DeselectIntent,
    FastIntent,
    Intent,
    IntentKind,
    SelectIntent,
    SortIntent,
)
from picklist.queue.lanes import FastLane, SlowLane

__all__ = [
    # Intents
    "Intent",
    "IntentKind",
    "FastIntent",
    "SelectIntent",
    "DeselectIntent",
    "SortIntent",
    "AddIntent",
    # Lanes
    "FastLane",
    "SlowLane",
    # Queue
    "BatchingQueue",
    "FlushReport",
    "QueueSizes",
    "FAST_LANE_INTERVAL",
    "SLOW_LANE_INTERVAL",
]
