"""
Pydantic schemas for API request/response models
"""

from artforms.api.v1.schemas.artist import (
    ArtistDetailResponse,
    ArtistProfileUpdate,
    ArtistResponse,
    ArtistSearchResult,
    FollowResponse,
)
from artforms.api.v1.schemas.artwork import (
    ArtworkCreate,
    ArtworkResponse,
    ArtworkUpdate,
    LikeResponse,
)
from artforms.api.v1.schemas.common import ApiResponse, ErrorResponse, Pagination

__all__ = [
    "ApiResponse",
    "ArtistDetailResponse",
    "ArtistProfileUpdate",
    "ArtistResponse",
    "ArtistSearchResult",
    "ArtworkCreate",
    "ArtworkResponse",
    "ArtworkUpdate",
    "ErrorResponse",
    "FollowResponse",
    "LikeResponse",
    "Pagination",
]
