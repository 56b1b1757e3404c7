"""Dashboard statistics for a trainer.

Counts are gathered with aggregate queries; the derived percentages are
computed in plain Python so they can be tested without a database.
"""

import calendar
import math
from dataclasses import dataclass
from datetime import UTC, datetime, time, timedelta
from uuid import UUID

from sqlalchemy import and_, case, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from trainerdesk.db.models.booking import Booking, BookingStatus
from trainerdesk.db.models.client import Client

UPCOMING_LIMIT = 5
UPCOMING_STATUSES = (BookingStatus.PENDING.value, BookingStatus.CONFIRMED.value)


@dataclass(frozen=True)
class DateRange:
    """Inclusive datetime range."""

    start: datetime
    end: datetime


def week_range(now: datetime) -> DateRange:
    """Sunday 00:00 through Saturday 23:59:59.999999 of the week containing ``now``."""
    days_since_sunday = (now.weekday() + 1) % 7
    start = datetime.combine(now.date() - timedelta(days=days_since_sunday), time.min, now.tzinfo)
    end = datetime.combine(start.date() + timedelta(days=6), time.max, now.tzinfo)
    return DateRange(start=start, end=end)


def month_range(now: datetime, months_back: int = 0) -> DateRange:
    """First through last instant of the calendar month ``months_back`` before ``now``."""
    month_index = now.year * 12 + (now.month - 1) - months_back
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1, tzinfo=now.tzinfo)
    end = datetime.combine(start.date().replace(day=last_day), time.max, now.tzinfo)
    return DateRange(start=start, end=end)


def percent_change(current: int, previous: int) -> float:
    """Change from ``previous`` to ``current`` in percent.

    With no previous activity any current activity counts as +100%.
    """
    if previous > 0:
        return (current - previous) / previous * 100
    return 100.0 if current > 0 else 0.0


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round halves toward positive infinity (2.5 -> 3, -2.5 -> -2)."""
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def rate(part: int, total: int) -> float:
    """``part`` as a percentage of ``total``, 0 when total is 0."""
    return part / total * 100 if total > 0 else 0.0


@dataclass(frozen=True)
class BookingCounts:
    total: int = 0
    confirmed: int = 0
    completed: int = 0
    cancelled: int = 0
    no_show: int = 0
    this_week: int = 0
    this_month: int = 0
    last_month: int = 0
    minutes_this_week: int = 0


@dataclass(frozen=True)
class DashboardStats:
    """Figures shown on the dashboard overview."""

    total_bookings: int
    confirmed_bookings: int
    completed_bookings: int
    cancelled_bookings: int
    no_show_bookings: int
    bookings_this_week: int
    bookings_this_month: int
    bookings_last_month: int
    bookings_change: int
    active_clients: int
    total_clients: int
    hours_this_week: float
    completion_rate: int
    no_show_rate: int
    revenue: float = 0

    @classmethod
    def from_counts(
        cls, counts: BookingCounts, *, active_clients: int, total_clients: int
    ) -> "DashboardStats":
        return cls(
            total_bookings=counts.total,
            confirmed_bookings=counts.confirmed,
            completed_bookings=counts.completed,
            cancelled_bookings=counts.cancelled,
            no_show_bookings=counts.no_show,
            bookings_this_week=counts.this_week,
            bookings_this_month=counts.this_month,
            bookings_last_month=counts.last_month,
            bookings_change=int(
                round_half_up(percent_change(counts.this_month, counts.last_month))
            ),
            active_clients=active_clients,
            total_clients=total_clients,
            hours_this_week=round_half_up(counts.minutes_this_week / 60, 1),
            completion_rate=int(round_half_up(rate(counts.completed, counts.total))),
            no_show_rate=int(round_half_up(rate(counts.no_show, counts.total))),
        )


def _count_where(condition) -> object:
    return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)


class DashboardStatsService:
    """Read-only statistics scoped to one trainer."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_stats(self, trainer_id: UUID, now: datetime | None = None) -> DashboardStats:
        """Compute the dashboard overview for ``trainer_id`` as of ``now`` (UTC)."""
        now = now or datetime.now(UTC)
        counts = await self._booking_counts(trainer_id, now)
        active_clients, total_clients = await self._client_counts(trainer_id)
        return DashboardStats.from_counts(
            counts, active_clients=active_clients, total_clients=total_clients
        )

    async def _booking_counts(self, trainer_id: UUID, now: datetime) -> BookingCounts:
        week = week_range(now)
        month = month_range(now)
        last_month = month_range(now, months_back=1)

        in_week = and_(Booking.start_time >= week.start, Booking.start_time <= week.end)

        query = select(
            func.count(Booking.booking_id),
            _count_where(Booking.status == BookingStatus.CONFIRMED.value),
            _count_where(Booking.status == BookingStatus.COMPLETED.value),
            _count_where(Booking.status == BookingStatus.CANCELLED.value),
            _count_where(Booking.status == BookingStatus.NO_SHOW.value),
            _count_where(in_week),
            _count_where(
                and_(Booking.start_time >= month.start, Booking.start_time <= month.end)
            ),
            _count_where(
                and_(
                    Booking.start_time >= last_month.start,
                    Booking.start_time <= last_month.end,
                )
            ),
            func.coalesce(func.sum(case((in_week, Booking.duration), else_=0)), 0),
        ).where(Booking.trainer_id == trainer_id)

        row = (await self.db.execute(query)).one()
        return BookingCounts(*(int(value or 0) for value in row))

    async def _client_counts(self, trainer_id: UUID) -> tuple[int, int]:
        total = await self.db.scalar(
            select(func.count(Client.client_id)).where(Client.trainer_id == trainer_id)
        )
        active = await self.db.scalar(
            select(func.count(Client.client_id)).where(
                Client.trainer_id == trainer_id,
                Client.bookings.any(),
            )
        )
        return int(active or 0), int(total or 0)

    async def upcoming_bookings(
        self,
        trainer_id: UUID,
        now: datetime | None = None,
        limit: int = UPCOMING_LIMIT,
    ) -> list[Booking]:
        """Next pending or confirmed bookings, soonest first, with clients loaded."""
        now = now or datetime.now(UTC)
        query = (
            select(Booking)
            .options(selectinload(Booking.client))
            .where(
                Booking.trainer_id == trainer_id,
                Booking.start_time >= now,
                Booking.status.in_(UPCOMING_STATUSES),
            )
            .order_by(Booking.start_time.asc())
            .limit(limit)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())
