# Time sources for deadline and due-date checks

from datetime import datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock in naive UTC, matching how timestamps are stored."""

    def now(self) -> datetime:
        return datetime.utcnow()


class FixedClock:
    """A clock frozen at a given instant; advance it explicitly."""

    def __init__(self, instant: datetime):
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def advance(self, **delta) -> None:
        self._instant = self._instant + timedelta(**delta)
