import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from artforms.core.exceptions import NotFoundError
from artforms.models.user import User

logger = logging.getLogger(__name__)


class UserService:
    async def get_user_with_memberships(self, db: AsyncSession, user_id: int) -> User:
        """Load a user together with their favorites and following rows."""
        result = await db.execute(
            select(User)
            .where(User.id == user_id)
            .options(selectinload(User.favorite_links), selectinload(User.follow_links))
            .execution_options(populate_existing=True)
        )
        user = result.scalar_one_or_none()
        if not user:
            raise NotFoundError("User not found")
        return user
