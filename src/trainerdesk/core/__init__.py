"""Core services and utilities for TrainerDesk.

Database-backed services (registration, auth, stats, trainer profile) are
imported from their modules directly; only the I/O-free pieces are
re-exported here.
"""

from .context import (
    RequestContext,
    create_context,
    get_current_context,
    get_current_context_or_none,
    request_context,
    reset_context,
    set_context,
)
from .exceptions import (
    AuthenticationError,
    ContextNotSetError,
    EmailAlreadyRegisteredError,
    InvalidSubdomainError,
    SubdomainAllocationError,
    TrainerAccessDeniedError,
    TrainerNotFoundError,
)
from .subdomain import SubdomainAllocator, SubdomainStore, slugify_subdomain
from .tenant_resolver import ResolverConfig, RoutingAction, RoutingDecision, TenantResolver

__all__ = [
    # Context
    "RequestContext",
    "create_context",
    "get_current_context",
    "get_current_context_or_none",
    "request_context",
    "reset_context",
    "set_context",
    # Exceptions
    "AuthenticationError",
    "ContextNotSetError",
    "EmailAlreadyRegisteredError",
    "InvalidSubdomainError",
    "SubdomainAllocationError",
    "TrainerAccessDeniedError",
    "TrainerNotFoundError",
    # Tenancy
    "ResolverConfig",
    "RoutingAction",
    "RoutingDecision",
    "SubdomainAllocator",
    "SubdomainStore",
    "TenantResolver",
    "slugify_subdomain",
]
