"""
Async client that drives the marketplace API and keeps rendered views in step.

State changes only after the server confirms them: a toggle updates the
session and the mounted views from the response body, never ahead of it.
Failures come back as a ``Notification`` and leave everything untouched.

Reference: https://www.python-httpx.org/async/
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Union

import httpx

from artforms.presentation.page import Page
from artforms.presentation.reconcile import reconcile_follow, reconcile_like
from artforms.presentation.session import ARTIST_SEARCH, ARTISTS, ARTWORKS, ClientSession
from artforms.presentation.views import (
    ArtistCard,
    ArtistDetail,
    ArtworkCard,
    ArtworkDetail,
    PaginationView,
    View,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


@dataclass(frozen=True)
class Notification:
    """Transient message for the user."""

    message: str
    level: str = "error"


@dataclass
class Listing:
    views: list[View] = field(default_factory=list)
    pagination: Optional[PaginationView] = None

    def render(self) -> str:
        html = "".join(view.render() for view in self.views)
        if self.pagination is not None:
            html += self.pagination.render()
        return html


@dataclass(frozen=True)
class ToggleOutcome:
    active: bool
    count: int
    message: str


class MarketplaceClient:
    """
    Usage:
        async with MarketplaceClient("https://artforms.example") as client:
            await client.sign_in(token)
            listing = await client.load_artworks(artform="Warli")
            outcome = await client.toggle_like(listing.views[0].entity_id)
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[ClientSession] = None,
        page: Optional[Page] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.session = session or ClientSession()
        self.page = page or Page()
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + API_PREFIX,
            transport=transport,
            timeout=timeout,
        )
        self._grid: list[View] = []
        self._detail: Optional[View] = None

    async def __aenter__(self) -> "MarketplaceClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def _headers(self) -> dict[str, str]:
        if self.session.token:
            return {"Authorization": f"Bearer {self.session.token}"}
        return {}

    async def _call(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        json: Optional[dict[str, Any]] = None,
        token: Optional[str] = None,
    ) -> Union[dict, Notification]:
        """
        Send one request.

        Returns:
            The decoded envelope on success, otherwise a Notification
        """
        headers = {"Authorization": f"Bearer {token}"} if token else self._headers()
        try:
            response = await self._http.request(
                method, path, params=params, json=json, headers=headers
            )
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {type(e).__name__}: {e}")
            return Notification("Network error, please try again")

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.is_success and body.get("success", True):
            return body

        if response.status_code == 401 and self.session.is_authenticated:
            self.session.sign_out()
            return Notification("Session expired. Please log in again.", level="warning")

        return Notification(self._failure_message(response, body))

    @staticmethod
    def _failure_message(response: httpx.Response, body: dict) -> str:
        errors = body.get("errors") or []
        if body.get("message") and not errors:
            return body["message"]
        if errors:
            return errors[0].get("message") or body.get("message") or "Validation failed"
        return f"Request failed ({response.status_code})"

    def _replace_grid(self, views: list[View], pagination: Optional[dict]) -> Listing:
        for view in self._grid:
            self.page.unmount(view)
        self._grid = [self.page.mount(view) for view in views]
        pager = PaginationView(pagination) if pagination else None
        return Listing(views=list(self._grid), pagination=pager)

    def _replace_detail(self, view: View) -> View:
        if self._detail is not None:
            self.page.unmount(self._detail)
        self._detail = self.page.mount(view)
        return view

    # Session

    async def sign_in(self, token: str) -> Union[dict, Notification]:
        """Adopt a bearer token and load the user's favorites/following."""
        body = await self._call("GET", "/users/me", token=token)
        if isinstance(body, Notification):
            return body
        self.session.sign_in(token, body["data"])
        logger.info(f"Signed in as user {self.session.user_id}")
        return body["data"]

    def sign_out(self) -> None:
        self.session.sign_out()

    # Listings

    def _select_listing(self, kind: str, page: Optional[int], filters: dict) -> dict:
        """
        Record the listing's new filters/page and return its query parameters.

        Passing filters replaces that listing's filters and returns it to
        page 1 unless a page is given.
        """
        if filters:
            self.session.update(listing=kind, filters=filters, page=page)
        elif page is not None:
            self.session.update(listing=kind, page=page)
        return self.session.listing(kind).params()

    async def load_artworks(
        self, page: Optional[int] = None, **filters: Any
    ) -> Union[Listing, Notification]:
        """
        Load a page of artworks.

        Passing filters replaces the current ones and returns to page 1.
        """
        params = self._select_listing(ARTWORKS, page, filters)
        body = await self._call("GET", "/artworks", params=params)
        if isinstance(body, Notification):
            return body

        can_like = self.session.is_authenticated
        cards = [
            ArtworkCard(a, liked=self.session.likes(a["id"]), can_like=can_like)
            for a in body.get("data") or []
        ]
        return self._replace_grid(cards, body.get("pagination"))

    async def load_featured_artworks(self) -> Union[Listing, Notification]:
        body = await self._call("GET", "/artworks/featured/list")
        if isinstance(body, Notification):
            return body
        can_like = self.session.is_authenticated
        cards = [
            ArtworkCard(a, liked=self.session.likes(a["id"]), can_like=can_like)
            for a in body.get("data") or []
        ]
        return self._replace_grid(cards, None)

    async def load_artists(
        self, page: Optional[int] = None, **filters: Any
    ) -> Union[Listing, Notification]:
        params = self._select_listing(ARTISTS, page, filters)
        body = await self._call("GET", "/artists", params=params)
        if isinstance(body, Notification):
            return body
        return self._replace_grid(self._artist_cards(body), body.get("pagination"))

    async def search_artists(
        self,
        q: Optional[str] = None,
        location: Optional[str] = None,
        specialization: Optional[str] = None,
        page: int = 1,
    ) -> Union[Listing, Notification]:
        self.session.update(
            listing=ARTIST_SEARCH,
            filters={"q": q, "location": location, "specialization": specialization},
            page=page,
        )
        params = self.session.listing(ARTIST_SEARCH).params()
        body = await self._call("GET", "/artists/search/query", params=params)
        if isinstance(body, Notification):
            return body
        return self._replace_grid(self._artist_cards(body), body.get("pagination"))

    def _artist_cards(self, body: dict) -> list[View]:
        can_follow = self.session.is_authenticated
        return [
            ArtistCard(a, following=self.session.follows(a["id"]), can_follow=can_follow)
            for a in body.get("data") or []
        ]

    # Details

    async def load_artwork(self, artwork_id: int) -> Union[ArtworkDetail, Notification]:
        body = await self._call("GET", f"/artworks/{artwork_id}")
        if isinstance(body, Notification):
            return body
        detail = ArtworkDetail(
            body["data"],
            liked=self.session.likes(artwork_id),
            can_like=self.session.is_authenticated,
        )
        return self._replace_detail(detail)

    async def load_artist(self, artist_id: int) -> Union[ArtistDetail, Notification]:
        body = await self._call("GET", f"/artists/{artist_id}")
        if isinstance(body, Notification):
            return body
        detail = ArtistDetail(
            body["data"],
            following=self.session.follows(artist_id),
            can_follow=self.session.is_authenticated,
            liked_artworks=self.session.favorites,
            can_like=self.session.is_authenticated,
        )
        return self._replace_detail(detail)

    # Toggles

    async def toggle_like(self, artwork_id: int) -> Union[ToggleOutcome, Notification]:
        if not self.session.is_authenticated:
            return Notification("Please log in to like artworks", level="warning")

        body = await self._call("POST", f"/artworks/{artwork_id}/like")
        if isinstance(body, Notification):
            return body

        updated = reconcile_like(self.session, self.page, artwork_id, body["liked"], body["likes"])
        logger.info(
            f"Artwork {artwork_id} liked={body['liked']} likes={body['likes']} ({updated} views)"
        )
        return ToggleOutcome(
            active=body["liked"], count=body["likes"], message=body.get("message", "")
        )

    async def toggle_follow(self, artist_id: int) -> Union[ToggleOutcome, Notification]:
        if not self.session.is_authenticated:
            return Notification("Please log in to follow artists", level="warning")

        body = await self._call("POST", f"/artists/{artist_id}/follow")
        if isinstance(body, Notification):
            return body

        updated = reconcile_follow(
            self.session, self.page, artist_id, body["following"], body["followers"]
        )
        logger.info(
            f"Artist {artist_id} following={body['following']} followers={body['followers']} "
            f"({updated} views)"
        )
        return ToggleOutcome(
            active=body["following"], count=body["followers"], message=body.get("message", "")
        )
