"""
Routes for artists: listings, search, profile detail, self-update and follows.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from artforms.api.v1.schemas.artist import (
    ArtistDetailResponse,
    ArtistProfileUpdate,
    ArtistResponse,
    ArtistSearchResult,
    FollowResponse,
)
from artforms.api.v1.schemas.artwork import ArtworkBrief, ArtworkResponse
from artforms.api.v1.schemas.common import ApiResponse, ErrorResponse, Pagination
from artforms.core.config import settings
from artforms.core.database import get_db
from artforms.core.dependencies import get_current_user, require_artist
from artforms.core.exceptions import AppError, ServerError
from artforms.models.artist import ArtForm
from artforms.models.user import User
from artforms.services.artist import ArtistService
from artforms.services.interaction import InteractionService
from artforms.services.query_builder import ArtistListParams, ArtistSearchParams

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/artists",
    tags=["artists"],
)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request data or validation error"},
    500: {"model": ErrorResponse, "description": "Internal server error"},
}

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Artist not found"}}


@router.get(
    "",
    response_model=ApiResponse[List[ArtistResponse]],
    summary="List artists",
    description="Active artists with filtering, sorting and pagination.",
    status_code=status.HTTP_200_OK,
    responses=ERROR_RESPONSES,
)
async def list_artists(
    specialization: Optional[ArtForm] = Query(None, description="Art form the artist practices"),
    verified: Optional[bool] = Query(None),
    location: Optional[str] = Query(None, description="Substring of the artist's state"),
    sort: Optional[str] = Query(None, description="Sort field, e.g. followers, rating"),
    order: Optional[str] = Query(None, description="asc or desc"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[List[ArtistResponse]]:
    params = ArtistListParams(
        specialization=specialization.value if specialization else None,
        verified=verified,
        location=location,
        sort=sort,
        order=order,
        page=page,
        limit=limit,
    )
    artist_service = ArtistService()
    try:
        artists, total = await artist_service.list_artists(db, params)
        logger.info(f"Retrieved {len(artists)} of {total} artists (page {page})")
        return ApiResponse(
            data=[ArtistResponse.model_validate(a) for a in artists],
            pagination=Pagination.build(page, limit, total),
        )
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing artists: {type(e).__name__}: {e}", exc_info=True)
        raise ServerError("Server error while fetching artists") from e


@router.get(
    "/featured/list",
    response_model=ApiResponse[List[ArtistResponse]],
    summary="Featured artists",
    description="Verified, active artists with at least one artwork, most followed first.",
    status_code=status.HTTP_200_OK,
    responses=ERROR_RESPONSES,
)
async def list_featured_artists(
    limit: int = Query(settings.FEATURED_LIMIT, ge=1, le=settings.MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[List[ArtistResponse]]:
    artist_service = ArtistService()
    try:
        artists = await artist_service.get_featured(db, limit)
        return ApiResponse(data=[ArtistResponse.model_validate(a) for a in artists])
    except AppError:
        raise
    except Exception as e:
        logger.error(
            f"Unexpected error getting featured artists: {type(e).__name__}: {e}", exc_info=True
        )
        raise ServerError("Server error while fetching featured artists") from e


@router.get(
    "/search/query",
    response_model=ApiResponse[List[ArtistSearchResult]],
    summary="Search artists",
    description="Search artists by name, user name, specialization and location.",
    status_code=status.HTTP_200_OK,
    responses=ERROR_RESPONSES,
)
async def search_artists(
    q: Optional[str] = Query(None, description="Matches artist name, user name or specialization"),
    specialization: Optional[ArtForm] = Query(None),
    location: Optional[str] = Query(None, description="Matches the user's city or state"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[List[ArtistSearchResult]]:
    """
    Search active artists.

    **Matching:**
    - q: case-insensitive substring of artistName, the user's name, or a specialization
    - location: case-insensitive substring of the user's city or state
    - q and location must both match when both are given

    Results are ordered by followers, then rating.
    """
    params = ArtistSearchParams(
        q=q,
        specialization=specialization.value if specialization else None,
        location=location,
        page=page,
        limit=limit,
    )
    artist_service = ArtistService()
    try:
        artists, total = await artist_service.search_artists(db, params)
        logger.info(f"Artist search q={q!r} location={location!r} matched {total}")
        return ApiResponse(
            data=[ArtistSearchResult.model_validate(a) for a in artists],
            pagination=Pagination.build(page, limit, total),
        )
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Unexpected error searching artists: {type(e).__name__}: {e}", exc_info=True)
        raise ServerError("Server error while searching artists") from e


@router.put(
    "/profile",
    response_model=ApiResponse[ArtistResponse],
    summary="Update own artist profile",
    description="Update the authenticated artist's profile.",
    status_code=status.HTTP_200_OK,
    responses={
        401: {"model": ErrorResponse, "description": "Unauthorized - authentication required"},
        403: {"model": ErrorResponse, "description": "Only artists can update a profile"},
        404: {"model": ErrorResponse, "description": "Artist profile not found"},
        **ERROR_RESPONSES,
    },
)
async def update_profile(
    profile_data: ArtistProfileUpdate,
    current_user: User = Depends(require_artist),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ArtistResponse]:
    """
    Update the authenticated artist's profile.

    **Editable:** artistName, specializations, experience, awards, exhibitions, socialLinks.
    Anything else is rejected with 400.
    """
    artist_service = ArtistService()
    try:
        artist = await artist_service.update_profile(db, current_user, profile_data)
        return ApiResponse(
            message="Profile updated successfully",
            data=ArtistResponse.model_validate(artist),
        )
    except AppError:
        raise
    except Exception as e:
        logger.error(
            f"Unexpected error updating profile for user {current_user.id}: "
            f"{type(e).__name__}: {e}",
            exc_info=True,
        )
        raise ServerError("Server error while updating profile") from e


@router.get(
    "/{artist_id}",
    response_model=ApiResponse[ArtistDetailResponse],
    summary="Get artist",
    description="Artist profile with their most recent approved artworks.",
    status_code=status.HTTP_200_OK,
    responses={**NOT_FOUND, **ERROR_RESPONSES},
)
async def get_artist(
    artist_id: int,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ArtistDetailResponse]:
    artist_service = ArtistService()
    try:
        artist = await artist_service.get_active_artist(db, artist_id)
        artworks = await artist_service.get_recent_artworks(
            db, artist_id, settings.ARTIST_RECENT_ARTWORKS
        )
        profile = ArtistResponse.model_validate(artist).model_dump()
        detail = ArtistDetailResponse.model_validate(
            {**profile, "artworks": [ArtworkBrief.model_validate(a) for a in artworks]}
        )
        return ApiResponse(data=detail)
    except AppError:
        raise
    except Exception as e:
        logger.error(
            f"Unexpected error getting artist {artist_id}: {type(e).__name__}: {e}", exc_info=True
        )
        raise ServerError("Server error while fetching artist") from e


@router.get(
    "/{artist_id}/artworks",
    response_model=ApiResponse[List[ArtworkResponse]],
    summary="List an artist's artworks",
    description="Approved artworks of one artist, newest first.",
    status_code=status.HTTP_200_OK,
    responses={**NOT_FOUND, **ERROR_RESPONSES},
)
async def list_artist_artworks(
    artist_id: int,
    artform: Optional[ArtForm] = Query(None),
    is_for_sale: Optional[bool] = Query(None, alias="isForSale"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[List[ArtworkResponse]]:
    artist_service = ArtistService()
    try:
        artworks, total = await artist_service.list_artist_artworks(
            db,
            artist_id,
            artform=artform.value if artform else None,
            is_for_sale=is_for_sale,
            page=page,
            limit=limit,
        )
        return ApiResponse(
            data=[ArtworkResponse.model_validate(a) for a in artworks],
            pagination=Pagination.build(page, limit, total),
        )
    except AppError:
        raise
    except Exception as e:
        logger.error(
            f"Unexpected error listing artworks of artist {artist_id}: {type(e).__name__}: {e}",
            exc_info=True,
        )
        raise ServerError("Server error while fetching artist artworks") from e


@router.post(
    "/{artist_id}/follow",
    response_model=FollowResponse,
    summary="Follow or unfollow artist",
    description="Toggle whether the authenticated user follows an artist.",
    status_code=status.HTTP_200_OK,
    responses={
        401: {"model": ErrorResponse, "description": "Unauthorized - authentication required"},
        **NOT_FOUND,
        **ERROR_RESPONSES,
    },
)
async def toggle_follow(
    artist_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> FollowResponse:
    """
    Flip the follow state relative to the current one.

    Following your own artist profile is rejected with 400.
    """
    interaction_service = InteractionService()
    try:
        result = await interaction_service.toggle_follow(db, current_user, artist_id)
        return FollowResponse(
            message="Artist followed" if result.following else "Artist unfollowed",
            following=result.following,
            followers=result.followers,
        )
    except AppError:
        raise
    except Exception as e:
        logger.error(
            f"Unexpected error toggling follow on artist {artist_id} for user {current_user.id}: "
            f"{type(e).__name__}: {e}",
            exc_info=True,
        )
        raise ServerError("Server error while processing follow") from e
