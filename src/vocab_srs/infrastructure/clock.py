from datetime import datetime, timezone

from vocab_srs.domain.ports import Clock


class SystemClock(Clock):
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Clock pinned to one instant, for replaying a deck as of a given time."""

    def __init__(self, at: datetime):
        self._at = at

    def now(self) -> datetime:
        return self._at
