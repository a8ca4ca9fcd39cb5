"""
Artwork service: listings, detail, and owner-only create/update/delete.

Reference: https://docs.sqlalchemy.org/en/20/orm/queryguide/
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from artforms.api.v1.schemas.artwork import ArtworkCreate, ArtworkUpdate
from artforms.core.exceptions import NotFoundError, ServerError
from artforms.models.artist import Artist
from artforms.models.artwork import Artwork, ArtworkStatus
from artforms.models.user import User, UserFavorite
from artforms.services.interaction import adjust_artwork_count, increment_views
from artforms.services.query import fetch_page
from artforms.services.query_builder import ArtworkListParams, build_artwork_query

logger = logging.getLogger(__name__)

# Owning artist and that artist's user, loaded with every artwork response
WITH_ARTIST = selectinload(Artwork.artist).selectinload(Artist.user)


class ArtworkService:
    """Service for managing artworks"""

    async def get_artwork(self, db: AsyncSession, artwork_id: int) -> Optional[Artwork]:
        """
        Get an artwork by ID with its artist and user loaded.

        populate_existing refreshes counters that were changed by UPDATE
        statements earlier in the same session.
        """
        result = await db.execute(
            select(Artwork)
            .where(Artwork.id == artwork_id)
            .options(WITH_ARTIST)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_artworks(
        self, db: AsyncSession, params: ArtworkListParams
    ) -> tuple[List[Artwork], int]:
        """
        Get one page of approved artworks matching the filters.

        Returns:
            (artworks on the page, total matching artworks)
        """
        return await fetch_page(db, build_artwork_query(params), WITH_ARTIST)

    async def get_featured(self, db: AsyncSession, limit: int) -> List[Artwork]:
        """Featured, approved, for-sale artworks: most liked, then most viewed."""
        result = await db.execute(
            select(Artwork)
            .where(
                Artwork.featured.is_(True),
                Artwork.status == ArtworkStatus.APPROVED.value,
                Artwork.is_for_sale.is_(True),
            )
            .order_by(Artwork.likes.desc(), Artwork.views.desc(), Artwork.id.desc())
            .limit(limit)
            .options(WITH_ARTIST)
        )
        return list(result.scalars().all())

    async def view_artwork(self, db: AsyncSession, artwork_id: int) -> Artwork:
        """
        Get an artwork for its detail page, counting the view.

        Raises:
            NotFoundError: If the artwork does not exist
        """
        exists = await db.scalar(select(Artwork.id).where(Artwork.id == artwork_id))
        if exists is None:
            raise NotFoundError("Artwork not found")

        await increment_views(db, artwork_id)
        return await self.get_artwork(db, artwork_id)

    async def _artist_for_user(self, db: AsyncSession, user: User) -> Artist:
        artist = await db.scalar(select(Artist).where(Artist.user_id == user.id))
        if not artist:
            raise NotFoundError("Artist profile not found")
        return artist

    async def _owned_artwork(
        self, db: AsyncSession, artwork_id: int, artist: Artist, action: str
    ) -> Artwork:
        """Missing and not-owned artworks are reported the same way."""
        artwork = await db.scalar(
            select(Artwork).where(Artwork.id == artwork_id, Artwork.artist_id == artist.id)
        )
        if not artwork:
            logger.warning(
                f"Artist {artist.id} attempted to {action} artwork {artwork_id} "
                "which is missing or not theirs"
            )
            raise NotFoundError(
                f"Artwork not found or you do not have permission to {action} it"
            )
        return artwork

    async def create_artwork(
        self, db: AsyncSession, data: ArtworkCreate, user: User
    ) -> Artwork:
        """
        Create a new artwork owned by the user's artist profile.

        The artwork starts as pending. The owner's artwork_count goes up by one.

        Raises:
            NotFoundError: If the user has no artist profile
            ServerError: If the insert violates a database constraint
        """
        artist = await self._artist_for_user(db, user)

        artwork = Artwork(
            **data.model_dump(mode="json"),
            artist_id=artist.id,
            status=ArtworkStatus.PENDING.value,
        )
        db.add(artwork)

        try:
            await db.flush()
        except IntegrityError as e:
            logger.error("Failed to create artwork due to database error", exc_info=True)
            raise ServerError("Server error while creating artwork") from e

        await adjust_artwork_count(db, artist.id, 1)
        logger.info(f"Created artwork '{artwork.title}' (ID: {artwork.id}) for artist {artist.id}")
        return await self.get_artwork(db, artwork.id)

    async def update_artwork(
        self, db: AsyncSession, artwork_id: int, data: ArtworkUpdate, user: User
    ) -> Artwork:
        """
        Update an artwork owned by the user. Only provided fields change.

        Raises:
            NotFoundError: If the artwork is missing or owned by someone else
        """
        artist = await self._artist_for_user(db, user)
        artwork = await self._owned_artwork(db, artwork_id, artist, "edit")

        updates = data.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        for field, value in updates.items():
            setattr(artwork, field, value)

        await db.flush()
        logger.info(f"Updated artwork {artwork_id} for artist {artist.id}")
        return await self.get_artwork(db, artwork_id)

    async def delete_artwork(self, db: AsyncSession, artwork_id: int, user: User) -> None:
        """
        Hard-delete an artwork owned by the user.

        The artwork is removed from every user's favorites and the owner's
        artwork_count goes down by one (never below 0).

        Raises:
            NotFoundError: If the artwork is missing or owned by someone else
        """
        artist = await self._artist_for_user(db, user)
        artwork = await self._owned_artwork(db, artwork_id, artist, "delete")

        await db.execute(delete(UserFavorite).where(UserFavorite.artwork_id == artwork_id))
        await db.delete(artwork)
        await db.flush()

        await adjust_artwork_count(db, artist.id, -1)
        logger.info(f"Deleted artwork {artwork_id} for artist {artist.id}")
