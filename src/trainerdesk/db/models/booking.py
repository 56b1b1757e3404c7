"""Booked training sessions."""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from uuid_utils.compat import uuid7

from .base import Base, PortableUUID, TimestampMixin

if TYPE_CHECKING:
    from .client import Client
    from .trainer import Trainer


class BookingStatus(str, Enum):
    """Lifecycle of a booking."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"


class Booking(TimestampMixin, Base):
    """A session between a trainer and a client."""

    __tablename__ = "bookings"

    booking_id: Mapped[UUID] = mapped_column(PortableUUID(), primary_key=True, default=uuid7)
    trainer_id: Mapped[UUID] = mapped_column(
        PortableUUID(),
        ForeignKey("trainers.trainer_id", ondelete="CASCADE"),
        nullable=False,
    )
    client_id: Mapped[UUID] = mapped_column(
        PortableUUID(),
        ForeignKey("clients.client_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)  # minutes
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=BookingStatus.PENDING.value
    )

    trainer: Mapped["Trainer"] = relationship(back_populates="bookings")
    client: Mapped["Client"] = relationship(back_populates="bookings")

    __table_args__ = (
        Index("idx_booking_trainer_start", "trainer_id", "start_time"),
        Index("idx_booking_trainer_status", "trainer_id", "status"),
    )

    def __repr__(self) -> str:
        return f"<Booking(id={self.booking_id}, status={self.status})>"
