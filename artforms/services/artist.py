"""
Artist service: listings, cross-entity search, profile detail and self-update.

Reference: https://docs.sqlalchemy.org/en/20/orm/queryguide/
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from artforms.api.v1.schemas.artist import ArtistProfileUpdate
from artforms.core.exceptions import NotFoundError
from artforms.models.artist import Artist
from artforms.models.artwork import Artwork, ArtworkStatus
from artforms.models.user import User
from artforms.services.artwork import WITH_ARTIST
from artforms.services.query import Op, Predicate, QuerySpec, SortKey, fetch_page
from artforms.services.query_builder import (
    ArtistListParams,
    ArtistSearchParams,
    build_artist_query,
    build_artist_search,
)

logger = logging.getLogger(__name__)

WITH_USER = selectinload(Artist.user)


class ArtistService:
    """Service for browsing and managing artist profiles"""

    async def get_artist(self, db: AsyncSession, artist_id: int) -> Optional[Artist]:
        """Get an artist by ID with the owning user loaded."""
        result = await db.execute(
            select(Artist)
            .where(Artist.id == artist_id)
            .options(WITH_USER)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_active_artist(self, db: AsyncSession, artist_id: int) -> Artist:
        """
        Raises:
            NotFoundError: If the artist does not exist or has been retired
        """
        artist = await self.get_artist(db, artist_id)
        if not artist or not artist.is_active:
            raise NotFoundError("Artist not found")
        return artist

    async def list_artists(
        self, db: AsyncSession, params: ArtistListParams
    ) -> tuple[List[Artist], int]:
        """Get one page of active artists matching the filters."""
        return await fetch_page(db, build_artist_query(params), WITH_USER)

    async def search_artists(
        self, db: AsyncSession, params: ArtistSearchParams
    ) -> tuple[List[Artist], int]:
        """
        Search artists by text and/or location across artist and user fields.

        The total is computed from the same joins and predicates as the page.
        """
        return await fetch_page(db, build_artist_search(params), WITH_USER)

    async def get_featured(self, db: AsyncSession, limit: int) -> List[Artist]:
        """Verified, active artists with at least one artwork: most followed first."""
        result = await db.execute(
            select(Artist)
            .where(
                Artist.is_verified.is_(True),
                Artist.is_active.is_(True),
                Artist.artwork_count > 0,
            )
            .order_by(Artist.followers.desc(), Artist.rating.desc(), Artist.id.desc())
            .limit(limit)
            .options(WITH_USER)
        )
        return list(result.scalars().all())

    async def get_recent_artworks(
        self, db: AsyncSession, artist_id: int, limit: int
    ) -> List[Artwork]:
        """Most recent approved artworks of one artist."""
        result = await db.execute(
            select(Artwork)
            .where(
                Artwork.artist_id == artist_id,
                Artwork.status == ArtworkStatus.APPROVED.value,
            )
            .order_by(Artwork.created_at.desc(), Artwork.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def list_artist_artworks(
        self,
        db: AsyncSession,
        artist_id: int,
        artform: Optional[str] = None,
        is_for_sale: Optional[bool] = None,
        page: int = 1,
        limit: int = 12,
    ) -> tuple[List[Artwork], int]:
        """
        Get one page of an active artist's approved artworks, newest first.

        Raises:
            NotFoundError: If the artist does not exist or has been retired
        """
        await self.get_active_artist(db, artist_id)

        spec = QuerySpec(
            entity="artwork",
            sort=(SortKey("created_at", descending=True),),
            page=page,
            limit=limit,
        ).where(
            Predicate("artist_id", Op.EQ, artist_id),
            Predicate("status", Op.EQ, ArtworkStatus.APPROVED.value),
        )
        if artform:
            spec = spec.where(Predicate("artform", Op.EQ, artform))
        if is_for_sale is not None:
            spec = spec.where(Predicate("is_for_sale", Op.EQ, is_for_sale))

        return await fetch_page(db, spec, WITH_ARTIST)

    async def update_profile(
        self, db: AsyncSession, user: User, data: ArtistProfileUpdate
    ) -> Artist:
        """
        Update the artist profile owned by the user. Only provided fields change.

        Raises:
            NotFoundError: If the user has no artist profile
        """
        artist = await db.scalar(select(Artist).where(Artist.user_id == user.id))
        if not artist:
            raise NotFoundError("Artist profile not found")

        updates = data.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        for field, value in updates.items():
            setattr(artist, field, value)

        await db.flush()
        logger.info(f"Updated artist profile {artist.id} for user {user.id}")
        return await self.get_artist(db, artist.id)
