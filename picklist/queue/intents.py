"""Queued mutation intents.

Each intent is a frozen pydantic model tagged by ``kind``; ``Intent`` is the
discriminated union over all of them.

Lanes:
    FastIntent  (SELECT, DESELECT, SORT)  → flushed every ``fast_interval``
    AddIntent   (ADD)                     → flushed every ``slow_interval``
"""

from __future__ import annotations

import enum
from datetime import UTC, datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


def _utc_now() -> datetime:
    return datetime.now(UTC)


class IntentKind(enum.StrEnum):
    SELECT = "SELECT"
    DESELECT = "DESELECT"
    SORT = "SORT"
    ADD = "ADD"


SORT_KEY = "sort"


class _BaseIntent(BaseModel):
    model_config = ConfigDict(frozen=True)

    queued_at: datetime = Field(default_factory=_utc_now)


class SelectIntent(_BaseIntent):
    kind: Literal[IntentKind.SELECT] = IntentKind.SELECT
    id: int

    @property
    def dedup_key(self) -> str:
        return f"select:{self.id}"

    @property
    def opposite_key(self) -> str | None:
        return f"deselect:{self.id}"


class DeselectIntent(_BaseIntent):
    kind: Literal[IntentKind.DESELECT] = IntentKind.DESELECT
    id: int

    @property
    def dedup_key(self) -> str:
        return f"deselect:{self.id}"

    @property
    def opposite_key(self) -> str | None:
        return f"select:{self.id}"


class SortIntent(_BaseIntent):
    """Only the most recent sort submitted before a flush survives."""

    kind: Literal[IntentKind.SORT] = IntentKind.SORT
    order: tuple[int, ...]

    @property
    def dedup_key(self) -> str:
        return SORT_KEY

    @property
    def opposite_key(self) -> str | None:
        return None


class AddIntent(_BaseIntent):
    kind: Literal[IntentKind.ADD] = IntentKind.ADD
    id: int

    @property
    def dedup_key(self) -> int:
        return self.id


FastIntent = SelectIntent | DeselectIntent | SortIntent

Intent = Annotated[
    SelectIntent | DeselectIntent | SortIntent | AddIntent,
    Field(discriminator="kind"),
]
