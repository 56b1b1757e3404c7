"""Database models for TrainerDesk."""

from .base import Base, TimestampMixin
from .booking import Booking, BookingStatus
from .client import Client
from .trainer import SubscriptionTier, Trainer
from .user import User, UserRole

__all__ = [
    "Base",
    "TimestampMixin",
    "Trainer",
    "SubscriptionTier",
    "User",
    "UserRole",
    "Client",
    "Booking",
    "BookingStatus",
]
