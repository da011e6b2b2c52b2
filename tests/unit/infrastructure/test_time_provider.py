from datetime import UTC, datetime, timedelta, timezone

import pytest

from invoice_ledger.application.ports import TimeProvider
from invoice_ledger.infrastructure.time_provider import FixedTimeProvider, SystemTimeProvider


class TestSystemTimeProvider:
    def test_implements_time_provider_interface(self) -> None:
        assert isinstance(SystemTimeProvider(), TimeProvider)

    def test_now_is_utc(self) -> None:
        assert SystemTimeProvider().now().tzinfo is UTC


class TestFixedTimeProvider:
    def test_returns_fixed_time(self, fixed_time: datetime) -> None:
        provider = FixedTimeProvider(fixed_time)

        assert provider.now() == fixed_time
        assert provider.now() == fixed_time

    def test_step_advances_after_each_read(self, fixed_time: datetime) -> None:
        provider = FixedTimeProvider(fixed_time, step=timedelta(seconds=1))

        assert provider.now() == fixed_time
        assert provider.now() == fixed_time + timedelta(seconds=1)

    def test_set_time(self, fixed_time: datetime) -> None:
        provider = FixedTimeProvider(fixed_time)
        later = fixed_time + timedelta(days=1)

        provider.set_time(later)

        assert provider.now() == later

    def test_rejects_naive_datetime(self) -> None:
        with pytest.raises(ValueError):
            FixedTimeProvider(datetime(2024, 1, 15, 12, 0, 0))

    def test_rejects_non_utc_offset(self) -> None:
        with pytest.raises(ValueError):
            FixedTimeProvider(datetime(2024, 1, 15, 12, tzinfo=timezone(timedelta(hours=-6))))

    def test_set_time_rejects_naive_datetime(self, fixed_time: datetime) -> None:
        provider = FixedTimeProvider(fixed_time)

        with pytest.raises(ValueError):
            provider.set_time(datetime(2024, 1, 15))
