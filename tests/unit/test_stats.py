"""Unit tests for dashboard statistics."""

from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio

from trainerdesk.core.stats import (
    BookingCounts,
    DashboardStats,
    DashboardStatsService,
    month_range,
    percent_change,
    rate,
    round_half_up,
    week_range,
)
from trainerdesk.db.models import Booking, BookingStatus, Client, Trainer

# Wednesday
NOW = datetime(2026, 10, 14, 12, 0, tzinfo=UTC)


def at(month: int, day: int, hour: int = 10) -> datetime:
    return datetime(2026, month, day, hour, 0, tzinfo=UTC)


class TestDateRanges:
    """Tests for week and month boundaries."""

    def test_week_starts_on_sunday(self):
        week = week_range(NOW)

        assert week.start == datetime(2026, 10, 11, 0, 0, tzinfo=UTC)
        assert week.end.date() == datetime(2026, 10, 17).date()
        assert week.end.hour == 23 and week.end.minute == 59

    def test_week_on_sunday_starts_same_day(self):
        sunday = datetime(2026, 10, 11, 8, 30, tzinfo=UTC)

        assert week_range(sunday).start == datetime(2026, 10, 11, tzinfo=UTC)

    def test_week_on_saturday_belongs_to_previous_sunday(self):
        saturday = datetime(2026, 10, 17, 23, 0, tzinfo=UTC)

        assert week_range(saturday).start == datetime(2026, 10, 11, tzinfo=UTC)

    def test_current_month(self):
        month = month_range(NOW)

        assert month.start == datetime(2026, 10, 1, tzinfo=UTC)
        assert month.end.date() == datetime(2026, 10, 31).date()

    def test_previous_month(self):
        month = month_range(NOW, months_back=1)

        assert month.start == datetime(2026, 9, 1, tzinfo=UTC)
        assert month.end.date() == datetime(2026, 9, 30).date()

    def test_previous_month_across_year(self):
        january = datetime(2026, 1, 15, tzinfo=UTC)

        month = month_range(january, months_back=1)

        assert month.start == datetime(2025, 12, 1, tzinfo=UTC)
        assert month.end.date() == datetime(2025, 12, 31).date()

    def test_february_leap_year(self):
        month = month_range(datetime(2028, 2, 10, tzinfo=UTC))

        assert month.end.day == 29


class TestDerivedFigures:
    """Tests for percentages and rounding."""

    @pytest.mark.parametrize(
        "current,previous,expected",
        [(10, 5, 100.0), (5, 10, -50.0), (3, 0, 100.0), (0, 0, 0.0), (4, 4, 0.0)],
    )
    def test_percent_change(self, current, previous, expected):
        assert percent_change(current, previous) == expected

    @pytest.mark.parametrize(
        "value,ndigits,expected",
        [(2.5, 0, 3), (-2.5, 0, -2), (2.4, 0, 2), (1.25, 1, 1.3), (37.5, 0, 38)],
    )
    def test_round_half_up(self, value, ndigits, expected):
        assert round_half_up(value, ndigits) == expected

    def test_rate_with_no_total(self):
        assert rate(0, 0) == 0.0

    def test_rate(self):
        assert rate(1, 4) == 25.0

    def test_stats_from_counts(self):
        counts = BookingCounts(
            total=8,
            confirmed=2,
            completed=3,
            cancelled=2,
            no_show=1,
            this_week=3,
            this_month=6,
            last_month=4,
            minutes_this_week=150,
        )

        stats = DashboardStats.from_counts(counts, active_clients=2, total_clients=5)

        assert stats.bookings_change == 50
        assert stats.hours_this_week == 2.5
        assert stats.completion_rate == 38
        assert stats.no_show_rate == 13
        assert stats.revenue == 0
        assert stats.active_clients == 2
        assert stats.total_clients == 5

    def test_stats_from_empty_counts(self):
        stats = DashboardStats.from_counts(BookingCounts(), active_clients=0, total_clients=0)

        assert stats.bookings_change == 0
        assert stats.completion_rate == 0
        assert stats.no_show_rate == 0
        assert stats.hours_this_week == 0


# =============================================================================
# Database-backed tests
# =============================================================================


@pytest_asyncio.fixture
async def trainer(db_session) -> Trainer:
    trainer = Trainer(business_name="Acme Gym", subdomain="acme-gym")
    db_session.add(trainer)
    await db_session.flush()
    return trainer


async def _add_client(db_session, trainer: Trainer, name: str) -> Client:
    client = Client(trainer_id=trainer.trainer_id, name=name, email=f"{name.lower()}@mail.io")
    db_session.add(client)
    await db_session.flush()
    return client


async def _add_booking(
    db_session,
    trainer: Trainer,
    client: Client,
    start_time: datetime,
    status: BookingStatus,
    duration: int = 60,
) -> Booking:
    booking = Booking(
        trainer_id=trainer.trainer_id,
        client_id=client.client_id,
        start_time=start_time,
        duration=duration,
        status=status.value,
    )
    db_session.add(booking)
    await db_session.flush()
    return booking


@pytest.mark.asyncio
async def test_get_stats_counts(db_session, trainer):
    """Test the overview figures over a mixed set of bookings."""
    alice = await _add_client(db_session, trainer, "Alice")
    bob = await _add_client(db_session, trainer, "Bob")
    await _add_client(db_session, trainer, "Carol")  # never booked

    await _add_booking(db_session, trainer, alice, at(10, 12), BookingStatus.CONFIRMED, 60)
    await _add_booking(db_session, trainer, alice, at(10, 13), BookingStatus.COMPLETED, 90)
    await _add_booking(db_session, trainer, bob, at(10, 5), BookingStatus.COMPLETED)
    await _add_booking(db_session, trainer, bob, at(10, 20), BookingStatus.PENDING, 30)
    await _add_booking(db_session, trainer, bob, at(9, 15), BookingStatus.NO_SHOW)
    await _add_booking(db_session, trainer, alice, at(9, 20), BookingStatus.CANCELLED, 45)
    await _add_booking(db_session, trainer, alice, at(8, 1), BookingStatus.COMPLETED)

    # Another trainer's booking in the same week must not be counted
    other = Trainer(business_name="Other Gym", subdomain="other-gym")
    db_session.add(other)
    await db_session.flush()
    stranger = await _add_client(db_session, other, "Stranger")
    await _add_booking(db_session, other, stranger, at(10, 12), BookingStatus.COMPLETED, 120)

    stats = await DashboardStatsService(db_session).get_stats(trainer.trainer_id, now=NOW)

    assert stats.total_bookings == 7
    assert stats.confirmed_bookings == 1
    assert stats.completed_bookings == 3
    assert stats.cancelled_bookings == 1
    assert stats.no_show_bookings == 1
    assert stats.bookings_this_week == 2
    assert stats.bookings_this_month == 4
    assert stats.bookings_last_month == 2
    assert stats.bookings_change == 100
    assert stats.hours_this_week == 2.5
    assert stats.completion_rate == 43
    assert stats.no_show_rate == 14
    assert stats.active_clients == 2
    assert stats.total_clients == 3


@pytest.mark.asyncio
async def test_get_stats_for_new_trainer(db_session, trainer):
    """Test a trainer with no data gets all zeros."""
    stats = await DashboardStatsService(db_session).get_stats(trainer.trainer_id, now=NOW)

    assert stats.total_bookings == 0
    assert stats.bookings_change == 0
    assert stats.hours_this_week == 0
    assert stats.total_clients == 0


@pytest.mark.asyncio
async def test_upcoming_bookings_filters_and_orders(db_session, trainer):
    """Test only future pending/confirmed bookings are listed, soonest first."""
    client = await _add_client(db_session, trainer, "Alice")

    later = await _add_booking(
        db_session, trainer, client, NOW + timedelta(days=2), BookingStatus.CONFIRMED
    )
    sooner = await _add_booking(
        db_session, trainer, client, NOW + timedelta(hours=1), BookingStatus.PENDING
    )
    await _add_booking(db_session, trainer, client, NOW + timedelta(days=1), BookingStatus.CANCELLED)
    await _add_booking(db_session, trainer, client, NOW - timedelta(hours=1), BookingStatus.CONFIRMED)

    bookings = await DashboardStatsService(db_session).upcoming_bookings(trainer.trainer_id, now=NOW)

    assert [b.booking_id for b in bookings] == [sooner.booking_id, later.booking_id]
    assert bookings[0].client.name == "Alice"


@pytest.mark.asyncio
async def test_upcoming_bookings_limited_to_five(db_session, trainer):
    client = await _add_client(db_session, trainer, "Alice")
    for day in range(1, 8):
        await _add_booking(
            db_session, trainer, client, NOW + timedelta(days=day), BookingStatus.CONFIRMED
        )

    bookings = await DashboardStatsService(db_session).upcoming_bookings(trainer.trainer_id, now=NOW)

    assert len(bookings) == 5
