"""Core exceptions for TrainerDesk tenancy, accounts and request context."""

from uuid import UUID

from trainerdesk.utils.exceptions import TrainerDeskError


class ContextNotSetError(TrainerDeskError):
    """Raised when attempting to access request context that is not set.

    This error indicates a programming error - operations requiring context
    are being called outside of a request_context() context manager.
    """

    def __init__(self, message: str = "Request context is not set"):
        super().__init__(message)


class InvalidSubdomainError(TrainerDeskError):
    """Raised when a business name yields no usable subdomain label.

    Attributes:
        business_name: The source text that normalized to nothing
    """

    def __init__(self, business_name: str):
        super().__init__(f"Cannot derive a subdomain from business name: {business_name!r}")
        self.business_name = business_name

    def __str__(self) -> str:
        return f"InvalidSubdomainError: {self.args[0]}"


class SubdomainAllocationError(TrainerDeskError):
    """Raised when no unused subdomain is found within the attempt ceiling.

    Attributes:
        base_label: The normalized label that kept colliding
        attempts: How many candidates were checked
    """

    def __init__(self, base_label: str, attempts: int):
        super().__init__("Unable to generate unique subdomain")
        self.base_label = base_label
        self.attempts = attempts

    def __str__(self) -> str:
        return (
            f"SubdomainAllocationError: {self.args[0]} "
            f"(base={self.base_label}, attempts={self.attempts})"
        )


class EmailAlreadyRegisteredError(TrainerDeskError):
    """Raised when registering an email that already has an account."""

    def __init__(self, email: str):
        super().__init__("User with this email already exists")
        self.email = email


class AuthenticationError(TrainerDeskError):
    """Raised when authentication fails.

    Used for invalid credentials, missing sessions and expired or
    tampered session tokens.

    Attributes:
        reason: The specific reason authentication failed
    """

    def __init__(self, reason: str = "Authentication failed"):
        super().__init__(reason)
        self.reason = reason

    def __str__(self) -> str:
        return f"AuthenticationError: {self.args[0]}"


class TrainerNotFoundError(TrainerDeskError):
    """Raised when a trainer does not exist.

    Attributes:
        identifier: The trainer ID or subdomain that was looked up
    """

    def __init__(self, identifier: UUID | str):
        super().__init__(f"Trainer not found: {identifier}")
        self.identifier = identifier

    def __str__(self) -> str:
        return f"TrainerNotFoundError: {self.args[0]}"


class TrainerAccessDeniedError(TrainerDeskError):
    """Raised when a user touches another trainer's resources.

    Attributes:
        trainer_id: The trainer whose resource was requested
        resource: The resource that access was denied to
    """

    def __init__(self, trainer_id: UUID | str, resource: str):
        super().__init__(f"Access denied to {resource} for trainer {trainer_id}")
        self.trainer_id = trainer_id
        self.resource = resource

    def __str__(self) -> str:
        return f"TrainerAccessDeniedError: {self.args[0]}"
