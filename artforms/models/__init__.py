"""
Database models
All SQLAlchemy models should be defined here or imported here
"""

# Import Base for models to inherit from
from artforms.core.database import Base
from artforms.models.artist import ArtForm, Artist
from artforms.models.artwork import Artwork, ArtworkStatus, DimensionUnit
from artforms.models.user import User, UserFavorite, UserFollow, UserType

# Export all models for easy imports
__all__ = [
    "ArtForm",
    "Artist",
    "Artwork",
    "ArtworkStatus",
    "Base",
    "DimensionUnit",
    "User",
    "UserFavorite",
    "UserFollow",
    "UserType",
]
