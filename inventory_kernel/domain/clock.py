"""
Clock -- injectable time source.

Responsibility:
    Item ``added_at`` stamps, transaction ``occurred_at`` stamps and age
    projections all read time from a ``Clock`` handed to them, never from
    ``datetime.now()``.

Architecture position:
    Kernel > Domain. ``SystemClock`` is the only place that touches the
    wall clock.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone

_EPOCH = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class Clock(ABC):
    """Source of timezone-aware timestamps."""

    @abstractmethod
    def now(self) -> datetime:
        ...


class SystemClock(Clock):
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """
    Manually driven clock for tests and replayable runs.

    ``now()`` stays put until ``advance``, ``advance_days`` or ``set_time``
    moves it, so every stamp taken in between is identical.
    """

    def __init__(self, start: datetime | None = None):
        self._current = start or _EPOCH

    def now(self) -> datetime:
        return self._current

    def set_time(self, time: datetime) -> None:
        self._current = time

    def advance(self, seconds: int = 1) -> None:
        self._current += timedelta(seconds=seconds)

    def advance_days(self, days: int) -> None:
        self._current += timedelta(days=days)
