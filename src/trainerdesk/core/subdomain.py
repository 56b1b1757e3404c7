"""Subdomain derivation and unique allocation for new trainers.

A trainer's subdomain is derived from the business name and must be unique
across trainers. Allocation probes the store for ``base``, ``base-2``,
``base-3`` ... and gives up after a fixed number of candidates.

The probe is a read before the insert, so two registrations racing on the
same business name can both see a label as free. The ``UNIQUE`` constraint
on ``trainers.subdomain`` is what finally decides; see
``RegistrationService`` for how an insert-time collision is retried.
"""

import re
from collections.abc import Iterator
from typing import Protocol

from trainerdesk.core.exceptions import InvalidSubdomainError, SubdomainAllocationError
from trainerdesk.core.logging import get_logger

logger = get_logger(__name__)

MAX_SUBDOMAIN_LENGTH = 63
DEFAULT_MAX_ATTEMPTS = 100

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


class SubdomainStore(Protocol):
    """Existence check against wherever trainers are persisted."""

    async def exists(self, label: str) -> bool: ...


def slugify_subdomain(business_name: str) -> str:
    """Derive a URL-safe subdomain label from a business name.

    Lowercases, trims, collapses every run of characters outside
    ``[a-z0-9]`` into one hyphen, strips edge hyphens and truncates to the
    DNS label limit.

    Args:
        business_name: Free text, any Unicode

    Returns:
        The base label (may be empty when the name has no ASCII alphanumerics)
    """
    label = _NON_ALNUM_RUN.sub("-", business_name.lower().strip()).strip("-")
    return label[:MAX_SUBDOMAIN_LENGTH].rstrip("-")


def with_suffix(base: str, counter: int) -> str:
    """Append a numeric disambiguator, shortening the base to stay within 63 chars."""
    suffix = f"-{counter}"
    head = base[: MAX_SUBDOMAIN_LENGTH - len(suffix)].rstrip("-")
    return f"{head}{suffix}"


def candidate_subdomains(base: str, max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> Iterator[str]:
    """Yield ``base``, ``base-2``, ``base-3`` ... up to ``max_attempts`` labels."""
    if max_attempts < 1:
        return
    yield base
    for counter in range(2, max_attempts + 1):
        yield with_suffix(base, counter)


class SubdomainAllocator:
    """Find a subdomain label not assigned to any trainer.

    Existence checks run one at a time; each candidate depends on the
    previous one being taken. Store errors propagate unchanged.
    """

    def __init__(self, store: SubdomainStore, max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        self.store = store
        self.max_attempts = max_attempts

    async def allocate(self, business_name: str) -> str:
        """Return the first unused label derived from ``business_name``.

        Raises:
            InvalidSubdomainError: If the name normalizes to an empty label
            SubdomainAllocationError: If every candidate is taken
        """
        base = slugify_subdomain(business_name)
        if not base:
            raise InvalidSubdomainError(business_name)

        attempts = 0
        for candidate in candidate_subdomains(base, self.max_attempts):
            attempts += 1
            if not await self.store.exists(candidate):
                if attempts > 1:
                    logger.debug(
                        "subdomain_collision_resolved",
                        base=base,
                        subdomain=candidate,
                        attempts=attempts,
                    )
                return candidate

        logger.warning("subdomain_allocation_exhausted", base=base, attempts=attempts)
        raise SubdomainAllocationError(base, attempts)
