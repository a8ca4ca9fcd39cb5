import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from artforms.api.v1.schemas.common import ApiResponse, ErrorResponse
from artforms.api.v1.schemas.user import CurrentUserResponse
from artforms.core.database import get_db
from artforms.core.dependencies import get_current_user
from artforms.core.exceptions import AppError, ServerError
from artforms.models.user import User
from artforms.services.user import UserService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users",
    tags=["users"],
)


@router.get(
    "/me",
    response_model=ApiResponse[CurrentUserResponse],
    summary="Get current user",
    description="The authenticated user with their favorites and followed artists.",
    status_code=status.HTTP_200_OK,
    responses={
        401: {"model": ErrorResponse, "description": "Unauthorized - authentication required"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
async def get_me(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[CurrentUserResponse]:
    """
    Get the authenticated user.

    Clients load this once per session to know which artworks are liked and
    which artists are followed.
    """
    user_service = UserService()
    try:
        user = await user_service.get_user_with_memberships(db, current_user.id)
        return ApiResponse(data=CurrentUserResponse.model_validate(user))
    except AppError:
        raise
    except Exception as e:
        logger.error(
            f"Unexpected error getting user {current_user.id}: {type(e).__name__}: {e}",
            exc_info=True,
        )
        raise ServerError("Server error while fetching user") from e
