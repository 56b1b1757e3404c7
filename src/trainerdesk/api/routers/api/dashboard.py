"""Dashboard API endpoints.

- GET /api/dashboard/stats - Overview statistics for the signed-in trainer
- GET /api/dashboard/bookings - Next upcoming bookings
"""

from fastapi import APIRouter

from trainerdesk.api.dependencies import CurrentUser, DbSession
from trainerdesk.api.schemas.dashboard import DashboardStatsResponse, UpcomingBookingResponse
from trainerdesk.core.stats import UPCOMING_LIMIT, DashboardStatsService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "/stats",
    response_model=DashboardStatsResponse,
    summary="Dashboard statistics",
    description="""
    Booking and client counts for the signed-in trainer, plus derived
    figures: month-over-month change, hours booked this week, completion
    and no-show rates. Weeks run Sunday to Saturday; all ranges are UTC.
    """,
)
async def get_dashboard_stats(
    user: CurrentUser,
    db: DbSession,
) -> DashboardStatsResponse:
    """Get overview statistics."""
    stats = await DashboardStatsService(db).get_stats(user.trainer_id)
    return DashboardStatsResponse.from_stats(stats)


@router.get(
    "/bookings",
    response_model=list[UpcomingBookingResponse],
    summary="Upcoming bookings",
    description=f"The next {UPCOMING_LIMIT} pending or confirmed bookings, soonest first.",
)
async def get_upcoming_bookings(
    user: CurrentUser,
    db: DbSession,
) -> list[UpcomingBookingResponse]:
    """Get upcoming bookings with client details."""
    bookings = await DashboardStatsService(db).upcoming_bookings(user.trainer_id)
    return [UpcomingBookingResponse.from_booking(booking) for booking in bookings]
