"""Custom exceptions for TrainerDesk."""


class TrainerDeskError(Exception):
    """Base exception for all TrainerDesk errors."""

    pass


class ConfigurationError(TrainerDeskError):
    """Error in configuration or settings."""

    pass
