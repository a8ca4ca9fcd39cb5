"""
User schemas.
"""

from typing import List, Optional

from pydantic import Field

from artforms.api.v1.schemas.common import CamelModel
from artforms.models.user import UserType


class Location(CamelModel):
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None


class UserSummary(CamelModel):
    """Read-only projection of the owning user joined into artist/artwork responses."""

    id: int
    name: str
    profile_image: Optional[str] = None
    location: Location = Field(default_factory=Location)
    bio: Optional[str] = None


class CurrentUserResponse(UserSummary):
    """
    The authenticated user, including membership sets.

    ``favorites`` and ``following`` are what the client uses to decide which
    like/follow buttons render as active.
    """

    email: str
    user_type: UserType
    favorites: List[int] = Field(default_factory=list)
    following: List[int] = Field(default_factory=list)
