from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from artforms.core.database import Base

if TYPE_CHECKING:
    from artforms.models.artist import Artist


class UserType(str, Enum):
    """Account types."""

    CUSTOMER = "customer"
    ARTIST = "artist"


class User(Base):
    """
    User model representing an account in the database

    Attributes:
        id: Primary key
        name: Display name
        email: User email (unique)
        password_hash: Hashed password, owned by the auth service
        user_type: customer or artist
        bio: Free-form biography
        location_city / location_state / location_country: Location parts
        profile_image: URL of the profile image
        artist: One-to-one relationship to Artist (artists only)
        favorite_links: Membership rows for liked artworks
        follow_links: Membership rows for followed artists

    Reference: https://docs.sqlalchemy.org/en/20/orm/basic_relationships.html#one-to-one
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    # Stored as String; enum validation is handled in Pydantic schemas
    user_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=UserType.CUSTOMER.value,
        comment="Account type (customer, artist)",
    )
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Location is kept in columns so the artist search can match city/state
    location_city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    location_state: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    location_country: Mapped[Optional[str]] = mapped_column(
        String(100), nullable=True, default="India"
    )

    profile_image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    artist: Mapped[Optional["Artist"]] = relationship(
        "Artist",
        back_populates="user",
        uselist=False,
    )

    favorite_links: Mapped[list["UserFavorite"]] = relationship(
        "UserFavorite", cascade="all, delete-orphan"
    )
    follow_links: Mapped[list["UserFollow"]] = relationship(
        "UserFollow", cascade="all, delete-orphan"
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

    @property
    def location(self) -> dict:
        return {
            "city": self.location_city,
            "state": self.location_state,
            "country": self.location_country,
        }

    @property
    def favorites(self) -> list[int]:
        return [link.artwork_id for link in self.favorite_links]

    @property
    def following(self) -> list[int]:
        return [link.artist_id for link in self.follow_links]

    def __repr__(self) -> str:
        "String representation of user"
        return (
            f"<User(id={self.id}, email='{self.email}', user_type='{self.user_type}')>"
        )


class UserFavorite(Base):
    """
    Membership row: the user has liked the artwork.

    The unique constraint keeps a user's favorites free of duplicates.
    Reference: https://docs.sqlalchemy.org/en/20/orm/basic_relationships.html#many-to-many
    """

    __tablename__ = "user_favorites"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="User who liked the artwork",
    )

    artwork_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("artworks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Artwork that was liked",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("user_id", "artwork_id", name="uq_user_favorites_user_artwork"),
        {"comment": "Artworks each user has liked"},
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<UserFavorite(user_id={self.user_id}, artwork_id={self.artwork_id})>"


class UserFollow(Base):
    """
    Membership row: the user follows the artist.
    """

    __tablename__ = "user_follows"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Follower",
    )

    artist_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("artists.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Followed artist",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("user_id", "artist_id", name="uq_user_follows_user_artist"),
        {"comment": "Artists each user follows"},
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<UserFollow(user_id={self.user_id}, artist_id={self.artist_id})>"
