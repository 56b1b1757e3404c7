"""Repositories for database access."""

from .base import BaseRepository
from .trainer import TrainerRepository
from .user import UserRepository

__all__ = [
    "BaseRepository",
    "TrainerRepository",
    "UserRepository",
]
