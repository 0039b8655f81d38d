from datetime import UTC, date, datetime


class SystemClock:
    """Wall clock. All timestamps are naive UTC, matching the stored columns."""

    def now(self) -> datetime:
        return datetime.now(UTC).replace(tzinfo=None)

    def today(self) -> date:
        return self.now().date()


class FixedClock:
    """Clock frozen at a given instant; advance it explicitly."""

    def __init__(self, at: datetime):
        self._at = at

    def now(self) -> datetime:
        return self._at

    def today(self) -> date:
        return self._at.date()

    def set(self, at: datetime) -> None:
        self._at = at
