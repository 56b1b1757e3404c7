"""Configuration module for TrainerDesk."""

from trainerdesk.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
