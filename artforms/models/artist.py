"""
Artist model: the public profile of a user registered as an artist.

Reference: https://docs.sqlalchemy.org/en/20/orm/basic_relationships.html
"""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from artforms.core.database import Base

if TYPE_CHECKING:
    from artforms.models.artwork import Artwork
    from artforms.models.user import User


class ArtForm(str, Enum):
    """Traditional art forms accepted as artwork artform / artist specialization."""

    WARLI = "Warli"
    PITHORA = "Pithora"
    MADHUBANI = "Madhubani"
    GOND = "Gond"
    KALAMKARI = "Kalamkari"
    PATACHITRA = "Patachitra"
    TANJORE = "Tanjore"
    MINIATURE = "Miniature"
    OTHER = "Other"


class Artist(Base):
    """
    Artist profile, one-to-one with a User whose user_type is artist.

    Attributes:
        id: Primary key
        user_id: Owning user (unique)
        artist_name: Public artist name
        specializations: List of ArtForm values
        experience: Years of experience (0-100)
        awards: List of {title, year, organization}
        exhibitions: List of {title, venue, year, description}
        social_links: {website, instagram, facebook, youtube}
        artwork_count: Derived counter, maintained on artwork create/delete
        followers: Derived counter, equals the number of user_follows rows
        rating: 0-5, maintained elsewhere
        total_sales: Number of completed sales
        is_verified: Verified by moderators
        is_active: Soft-retirement flag
    """

    __tablename__ = "artists"

    __table_args__ = (
        Index("ix_artists_active_followers", "is_active", "followers"),
        Index("ix_artists_verified", "is_verified"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        comment="Owning user - exactly one artist profile per user",
    )
    user: Mapped["User"] = relationship("User", back_populates="artist")

    artist_name: Mapped[str] = mapped_column(
        String(100), nullable=False, comment="Public artist name"
    )

    specializations: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Art forms the artist works in (e.g., ['Warli', 'Gond'])",
    )

    experience: Mapped[Optional[int]] = mapped_column(
        Integer, nullable=True, comment="Years of experience (0-100)"
    )

    awards: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)
    exhibitions: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)
    social_links: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    # Derived counters
    artwork_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    followers: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    rating: Mapped[float] = mapped_column(
        Float, default=0, nullable=False, comment="Average rating (0-5)"
    )
    total_sales: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    artworks: Mapped[list["Artwork"]] = relationship(
        "Artwork",
        back_populates="artist",
        cascade="all, delete-orphan",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation of artist"""
        return (
            f"<Artist(id={self.id}, artist_name='{self.artist_name}', "
            f"followers={self.followers}, is_active={self.is_active})>"
        )
