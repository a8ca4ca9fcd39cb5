"""
Like/follow toggles and the derived counters they maintain.

Membership rows (user_favorites, user_follows) are the source of truth; the
counters on artworks/artists are denormalised copies for list rendering.
Each toggle writes the membership row and issues one atomic counter update in
the request session, so both commit together or roll back together.

Reference: https://docs.sqlalchemy.org/en/20/orm/queryguide/dml.html
"""

import logging
from dataclasses import dataclass

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from artforms.core.exceptions import NotFoundError, SelfActionError
from artforms.models.artist import Artist
from artforms.models.artwork import Artwork
from artforms.models.user import User, UserFavorite, UserFollow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LikeResult:
    liked: bool
    likes: int


@dataclass(frozen=True)
class FollowResult:
    following: bool
    followers: int


async def _bump(db: AsyncSession, model, pk: int, column_name: str, delta: int) -> int:
    """
    Atomically add ``delta`` (+1 or -1) to a counter column and return the new value.

    A decrement only applies while the counter is above 0. When it is already
    0 the counter stays at 0 and the clamp is logged.
    """
    column = getattr(model, column_name)
    stmt = update(model).where(model.id == pk)
    if delta > 0:
        stmt = stmt.values({column_name: column + 1})
    else:
        stmt = stmt.where(column > 0).values({column_name: column - 1})
    stmt = stmt.returning(column).execution_options(synchronize_session=False)

    new_value = (await db.execute(stmt)).scalar_one_or_none()
    if new_value is None:
        logger.warning(
            f"Clamped {model.__tablename__}.{column_name} at 0 for id {pk}; "
            "counter is out of step with its membership rows"
        )
        return 0
    return new_value


async def adjust_artwork_count(db: AsyncSession, artist_id: int, delta: int) -> int:
    """Increment or decrement an artist's artwork_count (never below 0)."""
    return await _bump(db, Artist, artist_id, "artwork_count", delta)


async def increment_views(db: AsyncSession, artwork_id: int) -> int:
    """Increment an artwork's view counter. No cap."""
    return await _bump(db, Artwork, artwork_id, "views", 1)


class InteractionService:
    """Service for like/unlike and follow/unfollow toggles"""

    async def toggle_like(
        self, db: AsyncSession, user: User, artwork_id: int
    ) -> LikeResult:
        """
        Flip the user's like on an artwork relative to its current state.

        Args:
            db: Database session
            user: Acting user
            artwork_id: Artwork to like or unlike

        Returns:
            LikeResult with the new state and the stored like count

        Raises:
            NotFoundError: If the artwork does not exist
        """
        artwork_exists = await db.scalar(select(Artwork.id).where(Artwork.id == artwork_id))
        if artwork_exists is None:
            raise NotFoundError("Artwork not found")

        existing = await db.scalar(
            select(UserFavorite).where(
                UserFavorite.user_id == user.id, UserFavorite.artwork_id == artwork_id
            )
        )

        if existing is not None:
            await db.delete(existing)
            await db.flush()
            likes = await _bump(db, Artwork, artwork_id, "likes", -1)
            liked = False
        else:
            db.add(UserFavorite(user_id=user.id, artwork_id=artwork_id))
            await db.flush()
            likes = await _bump(db, Artwork, artwork_id, "likes", 1)
            liked = True

        logger.info(
            f"User {user.id} {'liked' if liked else 'unliked'} artwork {artwork_id} (likes={likes})"
        )
        return LikeResult(liked=liked, likes=likes)

    async def toggle_follow(
        self, db: AsyncSession, user: User, artist_id: int
    ) -> FollowResult:
        """
        Flip the user's follow on an artist relative to its current state.

        Args:
            db: Database session
            user: Acting user
            artist_id: Artist to follow or unfollow

        Returns:
            FollowResult with the new state and the stored follower count

        Raises:
            NotFoundError: If the artist does not exist or is inactive
            SelfActionError: If the artist profile belongs to the acting user
        """
        row = (
            await db.execute(
                select(Artist.user_id, Artist.is_active).where(Artist.id == artist_id)
            )
        ).one_or_none()
        if row is None or not row.is_active:
            raise NotFoundError("Artist not found")
        if row.user_id == user.id:
            raise SelfActionError("You cannot follow yourself")

        existing = await db.scalar(
            select(UserFollow).where(
                UserFollow.user_id == user.id, UserFollow.artist_id == artist_id
            )
        )

        if existing is not None:
            await db.delete(existing)
            await db.flush()
            followers = await _bump(db, Artist, artist_id, "followers", -1)
            following = False
        else:
            db.add(UserFollow(user_id=user.id, artist_id=artist_id))
            await db.flush()
            followers = await _bump(db, Artist, artist_id, "followers", 1)
            following = True

        logger.info(
            f"User {user.id} {'followed' if following else 'unfollowed'} artist {artist_id} "
            f"(followers={followers})"
        )
        return FollowResult(following=following, followers=followers)
