"""Trainer profile endpoints used by the settings page."""

from uuid import UUID

from fastapi import APIRouter

from trainerdesk.api.dependencies import CurrentUser, DbSession
from trainerdesk.api.schemas.trainer import (
    ProfileSettings,
    TrainerOwner,
    TrainerResponse,
    TrainerUpdateResponse,
)
from trainerdesk.core.trainer import TrainerService

router = APIRouter(prefix="/trainers", tags=["trainers"])


@router.get(
    "/{trainer_id}",
    response_model=TrainerResponse,
    summary="Get trainer profile",
    responses={
        401: {"description": "Not signed in"},
        403: {"description": "Another trainer's profile"},
        404: {"description": "Trainer not found"},
    },
)
async def get_trainer(
    trainer_id: UUID,
    user: CurrentUser,
    db: DbSession,
) -> TrainerResponse:
    """Get the signed-in user's trainer profile."""
    trainer, owner = await TrainerService(db).get_profile(user, trainer_id)
    return TrainerResponse.from_trainer(
        trainer,
        TrainerOwner(name=owner.name, email=owner.email) if owner else None,
    )


@router.patch(
    "/{trainer_id}",
    response_model=TrainerUpdateResponse,
    summary="Update trainer profile",
    description="""
    Update profile settings. Empty optional fields are cleared. The
    subdomain is fixed at registration and does not follow the business
    name.
    """,
    responses={
        401: {"description": "Not signed in"},
        403: {"description": "Another trainer's profile"},
        404: {"description": "Trainer not found"},
        422: {"description": "Invalid profile settings"},
    },
)
async def update_trainer(
    trainer_id: UUID,
    profile: ProfileSettings,
    user: CurrentUser,
    db: DbSession,
) -> TrainerUpdateResponse:
    """Update the signed-in user's trainer profile."""
    trainer = await TrainerService(db).update_profile(
        user,
        trainer_id,
        name=profile.name,
        business_name=profile.business_name,
        timezone=profile.timezone,
        bio=profile.bio,
        phone=profile.phone,
        profile_photo=profile.profile_photo,
    )
    await db.commit()

    return TrainerUpdateResponse(trainer=TrainerResponse.from_trainer(trainer))
