"""
Schemas for artist profiles.

Reference: https://fastapi.tiangolo.com/tutorial/body/
"""

from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field

from artforms.api.v1.schemas.artwork import ArtworkBrief
from artforms.api.v1.schemas.common import CamelModel
from artforms.api.v1.schemas.user import Location, UserSummary
from artforms.models.artist import ArtForm


class Award(CamelModel):
    title: Optional[str] = None
    year: Optional[int] = None
    organization: Optional[str] = None


class Exhibition(CamelModel):
    title: Optional[str] = None
    venue: Optional[str] = None
    year: Optional[int] = None
    description: Optional[str] = None


class SocialLinks(CamelModel):
    website: Optional[str] = None
    instagram: Optional[str] = None
    facebook: Optional[str] = None
    youtube: Optional[str] = None


class ArtistProfileUpdate(CamelModel):
    """
    Schema for an artist updating their own profile.

    All fields are optional for partial updates. Counters, rating and
    verification are not editable by the artist and are rejected.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    artist_name: Optional[str] = Field(None, min_length=2, max_length=100)
    specializations: Optional[List[ArtForm]] = None
    experience: Optional[int] = Field(None, ge=0, le=100, description="Years of experience")
    awards: Optional[List[Award]] = None
    exhibitions: Optional[List[Exhibition]] = None
    social_links: Optional[SocialLinks] = None


class ArtistResponse(CamelModel):
    """Artist profile with the owning user joined in."""

    id: int
    artist_name: str
    specializations: List[ArtForm] = Field(default_factory=list)
    experience: Optional[int] = None
    awards: List[Award] = Field(default_factory=list)
    exhibitions: List[Exhibition] = Field(default_factory=list)
    social_links: SocialLinks = Field(default_factory=SocialLinks)
    artwork_count: int
    followers: int
    rating: float
    total_sales: int
    is_verified: bool
    is_active: bool
    user: UserSummary
    created_at: datetime
    updated_at: datetime


class ArtistDetailResponse(ArtistResponse):
    """Artist profile plus the most recent approved artworks."""

    artworks: List[ArtworkBrief] = Field(default_factory=list)


class SearchUser(CamelModel):
    name: str
    profile_image: Optional[str] = None
    location: Location = Field(default_factory=Location)
    bio: Optional[str] = None


class ArtistSearchResult(CamelModel):
    """Projection returned by the artist search."""

    id: int
    artist_name: str
    specializations: List[ArtForm] = Field(default_factory=list)
    experience: Optional[int] = None
    followers: int
    rating: float
    artwork_count: int
    is_verified: bool
    user: SearchUser


class FollowResponse(CamelModel):
    """Result of a follow toggle: the new state and the server-side count."""

    success: bool = True
    message: str
    following: bool
    followers: int
