"""API schemas for trainer profile endpoints."""

import re
from uuid import UUID

from pydantic import AnyUrl, BaseModel, Field, TypeAdapter, ValidationError, field_validator

from trainerdesk.core.timezones import get_timezone_label, is_valid_timezone
from trainerdesk.db.models.trainer import Trainer

PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{1,14}$")

_url_adapter = TypeAdapter(AnyUrl)


class ProfileSettings(BaseModel):
    """Editable profile fields from the settings page.

    Optional text fields accept an empty string to clear the value.
    """

    name: str = Field(..., min_length=2, max_length=255)
    business_name: str = Field(..., min_length=2, max_length=255)
    bio: str | None = Field(default=None, max_length=500)
    phone: str | None = None
    timezone: str = Field(..., min_length=1)
    profile_photo: str | None = None

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str | None) -> str | None:
        if v and not PHONE_PATTERN.match(v):
            raise ValueError("Invalid phone number format")
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        if not is_valid_timezone(v):
            raise ValueError(f"Unknown timezone: {v}")
        return v

    @field_validator("profile_photo")
    @classmethod
    def validate_profile_photo(cls, v: str | None) -> str | None:
        if v:
            try:
                _url_adapter.validate_python(v)
            except ValidationError as e:
                raise ValueError("Invalid profile photo URL") from e
        return v


class TrainerOwner(BaseModel):
    name: str
    email: str


class TrainerResponse(BaseModel):
    """A trainer's profile as seen by its own users."""

    id: UUID
    business_name: str
    subdomain: str
    bio: str | None = None
    phone: str | None = None
    timezone: str
    timezone_label: str
    profile_photo: str | None = None
    subscription_tier: str
    sms_credits: int
    email_credits: int
    is_active: bool
    user: TrainerOwner | None = None

    @classmethod
    def from_trainer(
        cls, trainer: Trainer, user: TrainerOwner | None = None
    ) -> "TrainerResponse":
        return cls(
            id=trainer.trainer_id,
            business_name=trainer.business_name,
            subdomain=trainer.subdomain,
            bio=trainer.bio,
            phone=trainer.phone,
            timezone=trainer.timezone,
            timezone_label=get_timezone_label(trainer.timezone),
            profile_photo=trainer.profile_photo,
            subscription_tier=trainer.subscription_tier,
            sms_credits=trainer.sms_credits,
            email_credits=trainer.email_credits,
            is_active=trainer.is_active,
            user=user,
        )


class TrainerUpdateResponse(BaseModel):
    success: bool = True
    trainer: TrainerResponse
