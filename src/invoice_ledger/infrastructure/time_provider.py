from datetime import UTC, datetime, timedelta

from invoice_ledger.application.ports import TimeProvider


class SystemTimeProvider(TimeProvider):
    """Production clock."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedTimeProvider(TimeProvider):
    """Controllable clock for tests.

    Optionally advances by ``step`` after every read so records created
    in sequence get distinct, increasing timestamps.
    """

    def __init__(self, fixed_time: datetime, step: timedelta | None = None) -> None:
        _require_utc(fixed_time)
        self._current = fixed_time
        self._step = step

    def now(self) -> datetime:
        current = self._current
        if self._step is not None:
            self._current = current + self._step
        return current

    def set_time(self, new_time: datetime) -> None:
        _require_utc(new_time)
        self._current = new_time


def _require_utc(dt: datetime) -> None:
    if dt.tzinfo is not UTC:
        raise ValueError(f"datetime must have tzinfo=UTC, got tzinfo={dt.tzinfo}")
