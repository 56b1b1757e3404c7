"""Trainer model: the tenant of the system."""

from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from uuid_utils.compat import uuid7

from trainerdesk.core.timezones import DEFAULT_TIMEZONE

from .base import Base, PortableUUID, TimestampMixin

if TYPE_CHECKING:
    from .booking import Booking
    from .client import Client
    from .user import User


class SubscriptionTier(str, Enum):
    """Billing plan of a trainer."""

    FREE = "FREE"
    PRO = "PRO"
    BUSINESS = "BUSINESS"


class Trainer(TimestampMixin, Base):
    """A trainer business, reachable at ``<subdomain>.<base domain>``.

    ``subdomain`` is assigned once at registration and never changes,
    even when ``business_name`` is edited later.
    """

    __tablename__ = "trainers"

    trainer_id: Mapped[UUID] = mapped_column(PortableUUID(), primary_key=True, default=uuid7)
    business_name: Mapped[str] = mapped_column(String(255), nullable=False)
    subdomain: Mapped[str] = mapped_column(String(63), nullable=False, unique=True)

    # Public profile
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    timezone: Mapped[str] = mapped_column(String(64), nullable=False, default=DEFAULT_TIMEZONE)
    profile_photo: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    # Plan and messaging credits
    subscription_tier: Mapped[str] = mapped_column(
        String(20), nullable=False, default=SubscriptionTier.FREE.value
    )
    sms_credits: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    email_credits: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    is_active: Mapped[bool] = mapped_column(default=True, nullable=False)

    users: Mapped[list["User"]] = relationship(back_populates="trainer")
    clients: Mapped[list["Client"]] = relationship(back_populates="trainer")
    bookings: Mapped[list["Booking"]] = relationship(back_populates="trainer")

    def __repr__(self) -> str:
        return f"<Trainer(id={self.trainer_id}, subdomain={self.subdomain})>"
