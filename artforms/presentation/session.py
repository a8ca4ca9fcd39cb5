"""
Client-side session context.

Holds who is signed in, which artworks they like, which artists they follow,
and the filters/page of each listing (artworks, artists, artist search).
All changes go through ``ClientSession.update`` so there is exactly one place
state is mutated.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Optional

ARTWORKS = "artworks"
ARTISTS = "artists"
ARTIST_SEARCH = "artist_search"

LISTINGS = (ARTWORKS, ARTISTS, ARTIST_SEARCH)


@dataclass(frozen=True)
class ListingState:
    """Filters and current page of one listing."""

    filters: dict[str, Any] = field(default_factory=dict)
    page: int = 1

    def params(self) -> dict[str, Any]:
        """Query parameters for fetching this listing."""
        return {**self.filters, "page": self.page}


@dataclass
class ClientSession:
    user_id: Optional[int] = None
    token: Optional[str] = None
    favorites: frozenset[int] = field(default_factory=frozenset)
    following: frozenset[int] = field(default_factory=frozenset)
    listings: dict[str, ListingState] = field(default_factory=dict)

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None and self.token is not None

    def listing(self, kind: str) -> ListingState:
        if kind not in LISTINGS:
            raise ValueError(f"Unknown listing '{kind}'")
        return self.listings.get(kind, ListingState())

    def update(self, listing: Optional[str] = None, **changes: Any) -> "ClientSession":
        """
        Apply a set of field changes.

        ``filters`` and ``page`` apply to the listing named by ``listing`` and
        leave the other listings alone. Changing ``filters`` without an
        explicit ``page`` resets that listing to page 1. Unknown field names
        raise ValueError.
        """
        known = {f.name for f in fields(self)} | {"filters", "page"}
        unknown = set(changes) - known
        if unknown:
            raise ValueError(f"Unknown session fields: {', '.join(sorted(unknown))}")

        filters = changes.pop("filters", None)
        page = changes.pop("page", None)
        if filters is not None or page is not None:
            if listing is None:
                raise ValueError("filters and page need a listing")
            current = self.listing(listing)
            if filters is not None:
                filters = {k: v for k, v in filters.items() if v is not None}
                if page is None:
                    page = 1
            else:
                filters = current.filters
            if page < 1:
                raise ValueError("page must be >= 1")
            changes["listings"] = {
                **self.listings,
                listing: ListingState(filters=filters, page=page),
            }

        if "favorites" in changes:
            changes["favorites"] = frozenset(changes["favorites"])
        if "following" in changes:
            changes["following"] = frozenset(changes["following"])

        for name, value in changes.items():
            setattr(self, name, value)
        return self

    def sign_in(self, token: str, user: dict) -> "ClientSession":
        """Adopt the payload of GET /api/users/me."""
        return self.update(
            token=token,
            user_id=user["id"],
            favorites=user.get("favorites", []),
            following=user.get("following", []),
        )

    def sign_out(self) -> "ClientSession":
        return self.update(token=None, user_id=None, favorites=(), following=())

    def apply_like(self, artwork_id: int, liked: bool) -> "ClientSession":
        """Record a server-confirmed like state."""
        if liked:
            return self.update(favorites=self.favorites | {artwork_id})
        return self.update(favorites=self.favorites - {artwork_id})

    def apply_follow(self, artist_id: int, following: bool) -> "ClientSession":
        """Record a server-confirmed follow state."""
        if following:
            return self.update(following=self.following | {artist_id})
        return self.update(following=self.following - {artist_id})

    def likes(self, artwork_id: int) -> bool:
        return artwork_id in self.favorites

    def follows(self, artist_id: int) -> bool:
        return artist_id in self.following
