"""
Client-side adapter: session state, HTML fragment views and the API client
that reconciles them after confirmed toggles.
"""

from artforms.presentation.client import Listing, MarketplaceClient, Notification, ToggleOutcome
from artforms.presentation.page import Page
from artforms.presentation.session import ClientSession, ListingState
from artforms.presentation.views import (
    ArtistCard,
    ArtistDetail,
    ArtworkCard,
    ArtworkDetail,
    PaginationView,
)

__all__ = [
    "ArtistCard",
    "ArtistDetail",
    "ArtworkCard",
    "ArtworkDetail",
    "ClientSession",
    "Listing",
    "ListingState",
    "MarketplaceClient",
    "Notification",
    "Page",
    "PaginationView",
    "ToggleOutcome",
]
