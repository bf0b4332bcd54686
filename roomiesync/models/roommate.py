from sqlalchemy import String, Boolean, Float, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column
from typing import Optional
import enum
from roomiesync.models.base import BaseModel


class Role(str, enum.Enum):
    """Household roles"""

    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


class Roommate(BaseModel):
    """
    Household member profile.
    Created and deleted by admins, never otherwise mutated.
    """

    __tablename__ = "roommates"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(
        SQLEnum(Role), default=Role.MEMBER, nullable=False
    )
    is_vegetarian: Mapped[bool] = mapped_column(Boolean, default=False)
    avatar_url: Mapped[Optional[str]] = mapped_column(
        String(500), nullable=True, default=None
    )
    agreed_contribution: Mapped[float] = mapped_column(Float, default=0, nullable=False)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
