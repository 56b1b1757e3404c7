"""Public tenant page schema."""

from pydantic import BaseModel

from trainerdesk.core.timezones import get_timezone_label
from trainerdesk.db.models.trainer import Trainer


class PublicPageResponse(BaseModel):
    """What a visitor to ``<subdomain>.<base domain>`` sees."""

    subdomain: str
    business_name: str
    bio: str | None = None
    profile_photo: str | None = None
    timezone: str
    timezone_label: str

    @classmethod
    def from_trainer(cls, trainer: Trainer) -> "PublicPageResponse":
        return cls(
            subdomain=trainer.subdomain,
            business_name=trainer.business_name,
            bio=trainer.bio,
            profile_photo=trainer.profile_photo,
            timezone=trainer.timezone,
            timezone_label=get_timezone_label(trainer.timezone),
        )
