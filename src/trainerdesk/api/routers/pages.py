"""Public tenant pages.

``/pages/{subdomain}`` is where SubdomainRoutingMiddleware sends requests
for ``<subdomain>.<base domain>``; it can also be requested directly.
"""

from fastapi import APIRouter

from trainerdesk.api.dependencies import DbSession
from trainerdesk.api.schemas.pages import PublicPageResponse
from trainerdesk.core.tenant_resolver import TENANT_PAGE_PREFIX
from trainerdesk.core.trainer import TrainerService

router = APIRouter(prefix=TENANT_PAGE_PREFIX, tags=["pages"])


@router.get(
    "/{subdomain}",
    response_model=PublicPageResponse,
    summary="Public trainer page",
    responses={404: {"description": "No active trainer with this subdomain"}},
)
async def get_public_page(subdomain: str, db: DbSession) -> PublicPageResponse:
    """Render the public profile of the trainer behind a subdomain."""
    trainer = await TrainerService(db).get_public_page(subdomain)
    return PublicPageResponse.from_trainer(trainer)
