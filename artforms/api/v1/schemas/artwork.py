"""
Schemas for artworks.

Reference: https://fastapi.tiangolo.com/tutorial/body/
"""

from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field, field_validator

from artforms.api.v1.schemas.common import CamelModel
from artforms.api.v1.schemas.user import UserSummary
from artforms.models.artist import ArtForm
from artforms.models.artwork import ArtworkStatus, DimensionUnit

MIN_YEAR_CREATED = 1900


def _validate_year_created(value: Optional[int]) -> Optional[int]:
    """yearCreated must fall between 1900 and the current year."""
    if value is None:
        return value
    current_year = datetime.now().year
    if value < MIN_YEAR_CREATED or value > current_year:
        raise ValueError(f"Year created must be between {MIN_YEAR_CREATED} and {current_year}")
    return value


class ArtworkImage(CamelModel):
    url: str = Field(..., min_length=1, max_length=500, description="Image URL")
    caption: Optional[str] = Field(None, max_length=200)


class Dimensions(CamelModel):
    width: Optional[float] = Field(None, gt=0)
    height: Optional[float] = Field(None, gt=0)
    unit: DimensionUnit = DimensionUnit.CM


class ArtworkCreate(CamelModel):
    """
    Schema for creating a new artwork.

    The owning artist is taken from the authenticated user; status always
    starts as pending and counters start at 0, so none of them are accepted here.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    title: str = Field(..., min_length=2, max_length=200, description="Artwork title")
    artform: ArtForm = Field(..., description="Traditional art form")
    description: str = Field(..., min_length=10, max_length=1000)
    cultural_significance: Optional[str] = Field(None, max_length=500)
    images: List[ArtworkImage] = Field(default_factory=list)
    dimensions: Optional[Dimensions] = None
    medium: str = Field(..., min_length=1, max_length=200, description="Medium used")
    year_created: Optional[int] = None
    price: float = Field(..., ge=0, description="Price in the listing currency")
    currency: str = Field("INR", min_length=3, max_length=3)
    is_for_sale: bool = True
    tags: List[str] = Field(default_factory=list)

    @field_validator("year_created")
    @classmethod
    def validate_year_created(cls, v: Optional[int]) -> Optional[int]:
        """Ensure yearCreated is within range."""
        return _validate_year_created(v)


class ArtworkUpdate(CamelModel):
    """
    Schema for updating an artwork.

    All fields are optional for partial updates. Fields outside this set
    (status, likes, views, featured, ...) are rejected.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    title: Optional[str] = Field(None, min_length=2, max_length=200)
    description: Optional[str] = Field(None, min_length=10, max_length=1000)
    cultural_significance: Optional[str] = Field(None, max_length=500)
    images: Optional[List[ArtworkImage]] = None
    dimensions: Optional[Dimensions] = None
    medium: Optional[str] = Field(None, min_length=1, max_length=200)
    year_created: Optional[int] = None
    price: Optional[float] = Field(None, ge=0)
    is_for_sale: Optional[bool] = None
    tags: Optional[List[str]] = None

    @field_validator("year_created")
    @classmethod
    def validate_year_created(cls, v: Optional[int]) -> Optional[int]:
        """Ensure yearCreated is within range."""
        return _validate_year_created(v)


class ArtistBrief(CamelModel):
    """Owning artist as embedded in artwork responses."""

    id: int
    artist_name: str
    specializations: List[ArtForm] = Field(default_factory=list)
    is_verified: bool
    rating: float
    followers: int
    user: UserSummary


class ArtworkBrief(CamelModel):
    """Artwork without the joined artist (used inside artist detail)."""

    id: int
    title: str
    artist_id: int
    artform: ArtForm
    description: str
    cultural_significance: Optional[str] = None
    images: List[ArtworkImage] = Field(default_factory=list)
    dimensions: Optional[Dimensions] = None
    medium: str
    year_created: Optional[int] = None
    price: float
    currency: str
    is_for_sale: bool
    is_sold: bool
    tags: List[str] = Field(default_factory=list)
    likes: int
    views: int
    featured: bool
    status: ArtworkStatus
    created_at: datetime
    updated_at: datetime


class ArtworkResponse(ArtworkBrief):
    """Artwork with the owning artist and that artist's user joined in."""

    artist: ArtistBrief


class LikeResponse(CamelModel):
    """Result of a like toggle: the new state and the server-side count."""

    success: bool = True
    message: str
    liked: bool
    likes: int
