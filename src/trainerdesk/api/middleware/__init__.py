"""API middleware components."""

from .context import RequestContextMiddleware
from .errors import ErrorHandlingMiddleware
from .logging import RequestLoggingMiddleware
from .session import SessionMiddleware
from .subdomain import SubdomainRoutingMiddleware

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestContextMiddleware",
    "RequestLoggingMiddleware",
    "SessionMiddleware",
    "SubdomainRoutingMiddleware",
]
