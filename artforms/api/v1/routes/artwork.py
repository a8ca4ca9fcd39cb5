"""
Routes for artworks: public listings and detail, artist-owned mutations, likes.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from artforms.api.v1.schemas.artwork import (
    ArtworkCreate,
    ArtworkResponse,
    ArtworkUpdate,
    LikeResponse,
)
from artforms.api.v1.schemas.common import ApiResponse, ErrorResponse, Pagination
from artforms.core.config import settings
from artforms.core.database import get_db
from artforms.core.dependencies import get_current_user, require_artist
from artforms.core.exceptions import AppError, ServerError
from artforms.models.artist import ArtForm
from artforms.models.user import User
from artforms.services.artwork import ArtworkService
from artforms.services.interaction import InteractionService
from artforms.services.query_builder import ArtworkListParams

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/artworks",
    tags=["artworks"],
)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request data or validation error"},
    500: {"model": ErrorResponse, "description": "Internal server error"},
}


@router.get(
    "",
    response_model=ApiResponse[List[ArtworkResponse]],
    summary="List artworks",
    description="Approved artworks with filtering, sorting and pagination.",
    status_code=status.HTTP_200_OK,
    responses=ERROR_RESPONSES,
)
async def list_artworks(
    artform: Optional[ArtForm] = Query(None, description="Filter by art form"),
    min_price: Optional[float] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0),
    is_for_sale: Optional[bool] = Query(None, alias="isForSale"),
    featured: Optional[bool] = Query(None),
    search: Optional[str] = Query(None, description="Free text over title, description and tags"),
    sort: Optional[str] = Query(None, description="Sort field, e.g. price, likes, createdAt"),
    order: Optional[str] = Query(None, description="asc or desc"),
    page: int = Query(1, ge=1, description="Page number (1-based)"),
    limit: int = Query(
        settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Page size"
    ),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[List[ArtworkResponse]]:
    """
    Browse approved artworks.

    **Filtering:**
    - artform, minPrice/maxPrice (inclusive), isForSale, featured
    - search: any word found in title, description or tags

    **Sorting:** sort + order (default: newest first)
    """
    params = ArtworkListParams(
        artform=artform.value if artform else None,
        min_price=min_price,
        max_price=max_price,
        is_for_sale=is_for_sale,
        featured=featured,
        search=search,
        sort=sort,
        order=order,
        page=page,
        limit=limit,
    )
    artwork_service = ArtworkService()
    try:
        artworks, total = await artwork_service.list_artworks(db, params)
        logger.info(f"Retrieved {len(artworks)} of {total} artworks (page {page})")
        return ApiResponse(
            data=[ArtworkResponse.model_validate(a) for a in artworks],
            pagination=Pagination.build(page, limit, total),
        )
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing artworks: {type(e).__name__}: {e}", exc_info=True)
        raise ServerError("Server error while fetching artworks") from e


@router.get(
    "/featured/list",
    response_model=ApiResponse[List[ArtworkResponse]],
    summary="Featured artworks",
    description="Featured, approved, for-sale artworks ordered by likes then views.",
    status_code=status.HTTP_200_OK,
    responses=ERROR_RESPONSES,
)
async def list_featured_artworks(
    limit: int = Query(settings.FEATURED_LIMIT, ge=1, le=settings.MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[List[ArtworkResponse]]:
    artwork_service = ArtworkService()
    try:
        artworks = await artwork_service.get_featured(db, limit)
        return ApiResponse(data=[ArtworkResponse.model_validate(a) for a in artworks])
    except AppError:
        raise
    except Exception as e:
        logger.error(
            f"Unexpected error getting featured artworks: {type(e).__name__}: {e}", exc_info=True
        )
        raise ServerError("Server error while fetching featured artworks") from e


@router.get(
    "/{artwork_id}",
    response_model=ApiResponse[ArtworkResponse],
    summary="Get artwork",
    description="Get one artwork and increment its view count.",
    status_code=status.HTTP_200_OK,
    responses={404: {"model": ErrorResponse, "description": "Artwork not found"}, **ERROR_RESPONSES},
)
async def get_artwork(
    artwork_id: int,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ArtworkResponse]:
    """
    Get a specific artwork by ID.

    Every call counts as one view.
    """
    artwork_service = ArtworkService()
    try:
        artwork = await artwork_service.view_artwork(db, artwork_id)
        logger.info(f"Retrieved artwork {artwork_id} (views={artwork.views})")
        return ApiResponse(data=ArtworkResponse.model_validate(artwork))
    except AppError:
        raise
    except Exception as e:
        logger.error(
            f"Unexpected error getting artwork {artwork_id}: {type(e).__name__}: {e}",
            exc_info=True,
        )
        raise ServerError("Server error while fetching artwork") from e


@router.post(
    "",
    response_model=ApiResponse[ArtworkResponse],
    summary="Create artwork",
    description="Create an artwork for the authenticated artist (starts as pending).",
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": ErrorResponse, "description": "Unauthorized - authentication required"},
        403: {"model": ErrorResponse, "description": "Only artists can create artworks"},
        404: {"model": ErrorResponse, "description": "Artist profile not found"},
        **ERROR_RESPONSES,
    },
)
async def create_artwork(
    artwork_data: ArtworkCreate,
    current_user: User = Depends(require_artist),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ArtworkResponse]:
    """
    Create a new artwork owned by the authenticated artist.

    **Defaults:**
    - status is pending until moderated
    - likes and views start at 0
    - the artist's artworkCount goes up by one
    """
    artwork_service = ArtworkService()
    try:
        artwork = await artwork_service.create_artwork(db, artwork_data, current_user)
        return ApiResponse(
            message="Artwork created successfully",
            data=ArtworkResponse.model_validate(artwork),
        )
    except AppError:
        raise
    except Exception as e:
        logger.error(
            f"Unexpected error creating artwork for user {current_user.id}: {type(e).__name__}: {e}",
            exc_info=True,
        )
        raise ServerError("Server error while creating artwork") from e


@router.put(
    "/{artwork_id}",
    response_model=ApiResponse[ArtworkResponse],
    summary="Update artwork",
    description="Update an artwork owned by the authenticated artist.",
    status_code=status.HTTP_200_OK,
    responses={
        401: {"model": ErrorResponse, "description": "Unauthorized - authentication required"},
        404: {"model": ErrorResponse, "description": "Artwork not found or not yours"},
        **ERROR_RESPONSES,
    },
)
async def update_artwork(
    artwork_id: int,
    artwork_data: ArtworkUpdate,
    current_user: User = Depends(require_artist),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ArtworkResponse]:
    """
    Update an artwork.

    **Partial Updates:**
    - Only provided fields will be updated
    - Fields outside the editable set are rejected
    """
    artwork_service = ArtworkService()
    try:
        artwork = await artwork_service.update_artwork(db, artwork_id, artwork_data, current_user)
        return ApiResponse(
            message="Artwork updated successfully",
            data=ArtworkResponse.model_validate(artwork),
        )
    except AppError:
        raise
    except Exception as e:
        logger.error(
            f"Unexpected error updating artwork {artwork_id} for user {current_user.id}: "
            f"{type(e).__name__}: {e}",
            exc_info=True,
        )
        raise ServerError("Server error while updating artwork") from e


@router.delete(
    "/{artwork_id}",
    response_model=ApiResponse,
    summary="Delete artwork",
    description="Delete an artwork owned by the authenticated artist.",
    status_code=status.HTTP_200_OK,
    responses={
        401: {"model": ErrorResponse, "description": "Unauthorized - authentication required"},
        404: {"model": ErrorResponse, "description": "Artwork not found or not yours"},
        **ERROR_RESPONSES,
    },
)
async def delete_artwork(
    artwork_id: int,
    current_user: User = Depends(require_artist),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse:
    artwork_service = ArtworkService()
    try:
        await artwork_service.delete_artwork(db, artwork_id, current_user)
        return ApiResponse(message="Artwork deleted successfully")
    except AppError:
        raise
    except Exception as e:
        logger.error(
            f"Unexpected error deleting artwork {artwork_id} for user {current_user.id}: "
            f"{type(e).__name__}: {e}",
            exc_info=True,
        )
        raise ServerError("Server error while deleting artwork") from e


@router.post(
    "/{artwork_id}/like",
    response_model=LikeResponse,
    summary="Like or unlike artwork",
    description="Toggle the authenticated user's like on an artwork.",
    status_code=status.HTTP_200_OK,
    responses={
        401: {"model": ErrorResponse, "description": "Unauthorized - authentication required"},
        404: {"model": ErrorResponse, "description": "Artwork not found"},
        **ERROR_RESPONSES,
    },
)
async def toggle_like(
    artwork_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> LikeResponse:
    """
    Flip the like state relative to the current one.

    The response carries the stored like count; clients should display it
    rather than adjusting their own copy.
    """
    interaction_service = InteractionService()
    try:
        result = await interaction_service.toggle_like(db, current_user, artwork_id)
        return LikeResponse(
            message="Artwork liked" if result.liked else "Artwork unliked",
            liked=result.liked,
            likes=result.likes,
        )
    except AppError:
        raise
    except Exception as e:
        logger.error(
            f"Unexpected error toggling like on artwork {artwork_id} for user {current_user.id}: "
            f"{type(e).__name__}: {e}",
            exc_info=True,
        )
        raise ServerError("Server error while processing like") from e
