"""Timestamps and time-derived identifiers."""

from __future__ import annotations

from datetime import datetime, timezone


class Clock:
    """Source of UTC timestamps and unique millisecond ids."""

    def __init__(self) -> None:
        self._last_id = 0

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def now_iso(self) -> str:
        return self.now().isoformat()

    def now_millis(self) -> int:
        return int(self.now().timestamp() * 1000)

    def next_id(self) -> int:
        """Return an epoch-millisecond id, bumped past the last one issued.

        Two ids requested within the same millisecond would otherwise collide.
        """
        candidate = self.now_millis()
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate

    def observe_id(self, issued_id: int) -> None:
        """Make sure future ids sort after an id replayed from storage."""
        self._last_id = max(self._last_id, issued_id)


class FrozenClock(Clock):
    """Clock pinned to one instant; ids still advance."""

    def __init__(self, instant: datetime) -> None:
        super().__init__()
        self.instant = instant

    def now(self) -> datetime:
        return self.instant
