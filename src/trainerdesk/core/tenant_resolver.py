"""Host-based tenant resolution.

Classifies an incoming request by its ``Host`` header: requests for a
trainer's subdomain are routed internally to that trainer's public page,
everything else falls through to the default application routes.

Examples (base domain ``trainerdesk.com``):
- ``acme.trainerdesk.com``       -> rewrite to ``/pages/acme``
- ``www.trainerdesk.com``        -> passthrough
- ``trainerdesk.com``            -> passthrough
- ``acme.trainerdesk.com:3000``  -> rewrite to ``/pages/acme``
- ``localhost:3000``             -> rewrite to ``/pages/localhost``
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from trainerdesk.config.settings import Settings

TENANT_PAGE_PREFIX = "/pages"


class RoutingAction(str, Enum):
    """What to do with a request after host inspection."""

    PASSTHROUGH = "passthrough"
    REWRITE = "rewrite"


@dataclass(frozen=True)
class RoutingDecision:
    """Outcome of resolving a request host.

    Attributes:
        action: Whether to pass through or rewrite
        path: The effective routing path
        label: The tenant label, only set for rewrites
    """

    action: RoutingAction
    path: str
    label: str | None = None

    @property
    def is_rewrite(self) -> bool:
        return self.action == RoutingAction.REWRITE


@dataclass(frozen=True)
class ResolverConfig:
    """Reserved labels for the resolver, passed in at construction."""

    reserved_labels: frozenset[str] = field(default_factory=lambda: frozenset({"www"}))

    @classmethod
    def from_settings(cls, settings: Settings) -> "ResolverConfig":
        return cls(reserved_labels=settings.reserved_subdomains)

    @classmethod
    def from_labels(cls, labels: Iterable[str]) -> "ResolverConfig":
        return cls(reserved_labels=frozenset(label.lower() for label in labels))


def extract_candidate_label(host: str | None) -> str | None:
    """Extract the first dot-delimited label from a Host header value.

    The port, if any, is dropped and the result is lowercased. Returns None
    when the header is absent, the first label is empty, or the host is a
    bracketed IPv6 literal such as ``[::1]:8000``.
    """
    if not host:
        return None

    host = host.strip()
    if host.startswith("["):
        return None

    hostname = host.split(":", 1)[0]
    label = hostname.split(".")[0].lower()
    return label or None


class TenantResolver:
    """Decide per request whether to route to a tenant page.

    Performs no I/O: whether the label belongs to an existing trainer is
    decided by the handler behind ``/pages/{subdomain}``.
    """

    def __init__(self, config: ResolverConfig | None = None):
        self.config = config or ResolverConfig()

    def is_reserved(self, label: str) -> bool:
        return label in self.config.reserved_labels

    def resolve(self, host: str | None, path: str) -> RoutingDecision:
        """Resolve a request's host into a routing decision.

        Args:
            host: The Host header value, possibly None
            path: The request's original path

        Returns:
            Passthrough with the original path, or a rewrite to the
            tenant page path for the candidate label
        """
        label = extract_candidate_label(host)

        if label is None or self.is_reserved(label):
            return RoutingDecision(action=RoutingAction.PASSTHROUGH, path=path)

        return RoutingDecision(
            action=RoutingAction.REWRITE,
            path=tenant_page_path(label),
            label=label,
        )


def tenant_page_path(label: str) -> str:
    """Build the internal path that renders a tenant's page."""
    return f"{TENANT_PAGE_PREFIX}/{label}"
