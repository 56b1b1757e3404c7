"""Clients of a trainer."""

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from uuid_utils.compat import uuid7

from .base import Base, PortableUUID, TimestampMixin

if TYPE_CHECKING:
    from .booking import Booking
    from .trainer import Trainer


class Client(TimestampMixin, Base):
    """A person who books sessions with a trainer."""

    __tablename__ = "clients"

    client_id: Mapped[UUID] = mapped_column(PortableUUID(), primary_key=True, default=uuid7)
    trainer_id: Mapped[UUID] = mapped_column(
        PortableUUID(),
        ForeignKey("trainers.trainer_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)

    trainer: Mapped["Trainer"] = relationship(back_populates="clients")
    bookings: Mapped[list["Booking"]] = relationship(back_populates="client")

    def __repr__(self) -> str:
        return f"<Client(id={self.client_id}, name={self.name})>"
