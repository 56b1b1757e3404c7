"""API schemas for the trainer dashboard.

Response shapes for the overview statistics and the upcoming bookings
list shown on the dashboard home page.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from trainerdesk.core.stats import DashboardStats
from trainerdesk.db.models.booking import Booking

# =============================================================================
# Response Schemas
# =============================================================================


class DashboardStatsResponse(BaseModel):
    """Overview statistics for the signed-in trainer."""

    total_bookings: int = Field(..., ge=0)
    confirmed_bookings: int = Field(..., ge=0)
    completed_bookings: int = Field(..., ge=0)
    cancelled_bookings: int = Field(..., ge=0)
    no_show_bookings: int = Field(..., ge=0)
    bookings_this_week: int = Field(..., ge=0, description="Bookings starting this week (Sun-Sat)")
    bookings_this_month: int = Field(..., ge=0)
    bookings_last_month: int = Field(..., ge=0)
    bookings_change: int = Field(
        ..., description="Percent change of this month's bookings vs last month"
    )
    active_clients: int = Field(..., ge=0, description="Clients with at least one booking")
    total_clients: int = Field(..., ge=0)
    hours_this_week: float = Field(..., ge=0, description="Booked hours this week, one decimal")
    completion_rate: int = Field(..., ge=0, le=100, description="Completed as percent of total")
    no_show_rate: int = Field(..., ge=0, le=100, description="No-shows as percent of total")
    revenue: float = Field(default=0, description="Not computed yet; always 0")

    @classmethod
    def from_stats(cls, stats: DashboardStats) -> "DashboardStatsResponse":
        return cls(
            total_bookings=stats.total_bookings,
            confirmed_bookings=stats.confirmed_bookings,
            completed_bookings=stats.completed_bookings,
            cancelled_bookings=stats.cancelled_bookings,
            no_show_bookings=stats.no_show_bookings,
            bookings_this_week=stats.bookings_this_week,
            bookings_this_month=stats.bookings_this_month,
            bookings_last_month=stats.bookings_last_month,
            bookings_change=stats.bookings_change,
            active_clients=stats.active_clients,
            total_clients=stats.total_clients,
            hours_this_week=stats.hours_this_week,
            completion_rate=stats.completion_rate,
            no_show_rate=stats.no_show_rate,
            revenue=stats.revenue,
        )


class ClientSummary(BaseModel):
    """Client fields shown next to a booking."""

    id: UUID
    name: str
    email: str | None = None


class UpcomingBookingResponse(BaseModel):
    """A pending or confirmed booking in the future."""

    id: UUID
    start_time: datetime
    duration: int = Field(..., description="Length in minutes")
    status: str
    client: ClientSummary

    @classmethod
    def from_booking(cls, booking: Booking) -> "UpcomingBookingResponse":
        return cls(
            id=booking.booking_id,
            start_time=booking.start_time,
            duration=booking.duration,
            status=booking.status,
            client=ClientSummary(
                id=booking.client.client_id,
                name=booking.client.name,
                email=booking.client.email,
            ),
        )
