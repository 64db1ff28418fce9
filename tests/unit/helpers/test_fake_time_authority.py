"""Tests for FakeTimeAuthority test helper.

The voting window is one week long and boundaries are inclusive, so the
fake clock must move by exact amounts and never on its own.
"""

from datetime import datetime, timedelta, timezone

import pytest

from metadata_requests.application.ports.time_authority import TimeAuthorityProtocol
from tests.helpers.fake_time_authority import FakeTimeAuthority


class TestFakeTimeAuthorityProtocolCompliance:
    """FakeTimeAuthority must implement TimeAuthorityProtocol."""

    def test_implements_protocol(self) -> None:
        fake_time = FakeTimeAuthority()
        assert isinstance(fake_time, TimeAuthorityProtocol)

    def test_now_returns_aware_datetime(self) -> None:
        result = FakeTimeAuthority().now()
        assert isinstance(result, datetime)
        assert result.tzinfo is not None


class TestControllableTime:
    """now() returns the controlled time value."""

    def test_now_returns_frozen_time(self) -> None:
        frozen_at = datetime(2026, 1, 15, 10, 30, 0, tzinfo=timezone.utc)
        fake_time = FakeTimeAuthority(frozen_at=frozen_at)

        assert fake_time.now() == frozen_at

    def test_default_time_is_predictable(self) -> None:
        """Verify default time is 2026-01-01T00:00:00 UTC."""
        expected = datetime(2026, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
        assert FakeTimeAuthority().now() == expected

    def test_naive_frozen_time_is_treated_as_utc(self) -> None:
        fake_time = FakeTimeAuthority(frozen_at=datetime(2026, 3, 1, 12, 0, 0))

        assert fake_time.now() == datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)

    def test_multiple_calls_return_same_time(self) -> None:
        """Verify time doesn't change without explicit advancement."""
        fake_time = FakeTimeAuthority()

        assert fake_time.now() == fake_time.now() == fake_time.now()


class TestTimeAdvancement:
    """advance() moves time by exact amounts."""

    def test_advance_by_seconds(self) -> None:
        fake_time = FakeTimeAuthority()

        fake_time.advance(seconds=3600)

        assert fake_time.now() == datetime(2026, 1, 1, 1, 0, 0, tzinfo=timezone.utc)

    def test_advance_by_fractional_seconds(self) -> None:
        fake_time = FakeTimeAuthority()

        fake_time.advance(seconds=0.5)

        assert fake_time.now() == datetime(
            2026, 1, 1, 0, 0, 0, 500000, tzinfo=timezone.utc
        )

    def test_advance_by_timedelta_takes_precedence(self) -> None:
        fake_time = FakeTimeAuthority()

        fake_time.advance(seconds=10, delta=timedelta(weeks=1))

        assert fake_time.now() == datetime(2026, 1, 8, 0, 0, 0, tzinfo=timezone.utc)

    def test_advances_accumulate(self) -> None:
        fake_time = FakeTimeAuthority()

        fake_time.advance(delta=timedelta(weeks=1))
        fake_time.advance(seconds=1)

        assert fake_time.now() == datetime(2026, 1, 8, 0, 0, 1, tzinfo=timezone.utc)

    def test_advance_requires_argument(self) -> None:
        with pytest.raises(ValueError, match="Must provide either"):
            FakeTimeAuthority().advance()

    def test_advance_negative_time_raises_error(self) -> None:
        with pytest.raises(ValueError, match="Cannot advance time backwards"):
            FakeTimeAuthority().advance(seconds=-1)


class TestSetTime:
    """set_time() jumps to an explicit value."""

    def test_set_time_moves_backwards(self) -> None:
        fake_time = FakeTimeAuthority()
        target = datetime(2025, 6, 1, 0, 0, 0, tzinfo=timezone.utc)

        fake_time.set_time(target)

        assert fake_time.now() == target

    def test_set_time_naive_is_utc(self) -> None:
        fake_time = FakeTimeAuthority()

        fake_time.set_time(datetime(2026, 2, 2, 2, 2, 2))

        assert fake_time.now().tzinfo == timezone.utc

    def test_repr_contains_iso_time(self) -> None:
        assert "2026-01-01T00:00:00+00:00" in repr(FakeTimeAuthority())
