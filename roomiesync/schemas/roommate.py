from pydantic import Field
from typing import Optional
import uuid

from roomiesync.config import settings
from roomiesync.models.roommate import Role
from roomiesync.schemas.base import CamelModel


class RoommateBase(CamelModel):
    """Base roommate schema with common fields."""
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")
    role: Role = Role.MEMBER
    is_vegetarian: bool = False
    agreed_contribution: float = Field(
        settings.DEFAULT_AGREED_CONTRIBUTION, ge=0, description="Monthly amount owed to the pool"
    )


class RoommateCreate(RoommateBase):
    """Schema for adding a roommate (admin only)."""
    avatar_url: Optional[str] = None


class Roommate(RoommateBase):
    """Roommate profile as stored and transmitted."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    avatar_url: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def avatar_url_for(name: str) -> str:
    """Deterministic placeholder avatar seeded by the roommate's name."""
    seed = "".join(name.split())
    return f"https://picsum.photos/seed/{seed}/200/200"
