"""Utility modules for TrainerDesk."""

from trainerdesk.utils.exceptions import ConfigurationError, TrainerDeskError

__all__ = [
    "TrainerDeskError",
    "ConfigurationError",
]
