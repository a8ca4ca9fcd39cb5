"""
Artwork listing model.

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
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from artforms.core.database import Base

if TYPE_CHECKING:
    from artforms.models.artist import Artist


class ArtworkStatus(str, Enum):
    """Moderation status. Only approved artworks are publicly listed."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class DimensionUnit(str, Enum):
    CM = "cm"
    INCHES = "inches"


class Artwork(Base):
    """
    Artwork listing published by an artist.

    Attributes:
        id: Primary key
        title: Artwork title (max 200 chars)
        artist_id: Owning artist
        artform: ArtForm value
        description: Description (max 1000 chars)
        cultural_significance: Optional note (max 500 chars)
        images: List of {url, caption}
        dimensions: {width, height, unit}
        medium: Medium used (e.g., "Natural pigments on handmade paper")
        year_created: Year the work was made (1900..current year)
        price: Price in the listing currency (>= 0)
        currency: ISO currency code (default INR)
        is_for_sale / is_sold: Sale flags
        tags: Free-form tags
        likes: Derived counter, equals the number of user_favorites rows
        views: Incremented on every detail fetch
        featured: Shown on the featured list
        status: pending, approved or rejected
    """

    __tablename__ = "artworks"

    # Indexes for common queries
    # Reference: https://docs.sqlalchemy.org/en/20/core/constraints.html#indexes
    __table_args__ = (
        Index("ix_artworks_artform_price", "artform", "price"),
        Index("ix_artworks_status_created", "status", "created_at"),
        Index("ix_artworks_artist_id", "artist_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    title: Mapped[str] = mapped_column(String(200), nullable=False)

    artist_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("artists.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owning artist",
    )
    artist: Mapped["Artist"] = relationship("Artist", back_populates="artworks")

    artform: Mapped[str] = mapped_column(String(20), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    cultural_significance: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    images: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)
    dimensions: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)

    medium: Mapped[str] = mapped_column(String(200), nullable=False)
    year_created: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    price: Mapped[float] = mapped_column(Float, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="INR")
    is_for_sale: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_sold: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # Derived counters
    likes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Stored as String; enum validation is handled in Pydantic schemas
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ArtworkStatus.PENDING.value,
        comment="Moderation status (pending, approved, rejected)",
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
        """String representation of artwork"""
        return (
            f"<Artwork(id={self.id}, title='{self.title}', "
            f"artform='{self.artform}', status='{self.status}')>"
        )
