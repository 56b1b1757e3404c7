"""User accounts that sign in to a trainer's dashboard."""

from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from uuid_utils.compat import uuid7

from .base import Base, PortableUUID, TimestampMixin

if TYPE_CHECKING:
    from .trainer import Trainer


class UserRole(str, Enum):
    """Role of a user within a trainer business."""

    PRIMARY_TRAINER = "PRIMARY_TRAINER"
    TRAINER = "TRAINER"
    ADMIN = "ADMIN"


class User(TimestampMixin, Base):
    """A person with dashboard access, linked to at most one trainer."""

    __tablename__ = "users"

    user_id: Mapped[UUID] = mapped_column(PortableUUID(), primary_key=True, default=uuid7)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(32), nullable=False, default=UserRole.PRIMARY_TRAINER.value
    )
    trainer_id: Mapped[UUID | None] = mapped_column(
        PortableUUID(),
        ForeignKey("trainers.trainer_id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    trainer: Mapped["Trainer | None"] = relationship(back_populates="users")

    def __repr__(self) -> str:
        return f"<User(id={self.user_id}, email={self.email})>"
