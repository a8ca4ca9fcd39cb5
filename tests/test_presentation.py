"""Tests for the client-side presentation adapter."""

import httpx
import pytest

from artforms.main import app
from artforms.presentation import (
    ArtistDetail,
    ArtworkCard,
    ArtworkDetail,
    ClientSession,
    MarketplaceClient,
    Notification,
    Page,
    PaginationView,
)
from artforms.presentation.reconcile import reconcile_follow, reconcile_like
from artforms.presentation.session import ARTIST_SEARCH, ARTISTS, ARTWORKS, ListingState
from tests.conftest import make_token


def artwork_payload(artwork_id=1, **overrides):
    payload = {
        "id": artwork_id,
        "title": "Tree of Life",
        "artistId": 7,
        "artform": "Gond",
        "description": "Birds and deer gathered around a flowering tree.",
        "images": [{"url": "https://img.example/tree.jpg", "caption": "Full view"}],
        "dimensions": {"width": 60, "height": 90, "unit": "cm"},
        "medium": "Acrylic on canvas",
        "yearCreated": 2020,
        "price": 12500,
        "currency": "INR",
        "isForSale": True,
        "isSold": False,
        "tags": ["tree", "birds"],
        "likes": 4,
        "views": 10,
        "featured": True,
        "status": "approved",
        "artist": {
            "id": 7,
            "artistName": "Forest Tales",
            "user": {"id": 3, "name": "Venkat Shyam", "location": {"city": "Bhopal"}},
        },
    }
    payload.update(overrides)
    return payload


def artist_payload(artist_id=7, **overrides):
    payload = {
        "id": artist_id,
        "artistName": "Forest Tales",
        "specializations": ["Gond"],
        "experience": 20,
        "awards": [{"title": "State Award", "year": 2015, "organization": "MP Govt"}],
        "exhibitions": [],
        "socialLinks": {},
        "artworkCount": 2,
        "followers": 11,
        "rating": 4.25,
        "isVerified": True,
        "user": {
            "id": 3,
            "name": "Venkat Shyam",
            "profileImage": None,
            "location": {"city": "Bhopal", "state": "Madhya Pradesh"},
            "bio": "Pardhan Gond painter.",
        },
        "artworks": [artwork_payload(1), artwork_payload(2, title="Second")],
    }
    payload.update(overrides)
    return payload


class TestClientSession:
    def test_update_rejects_unknown_fields(self):
        session = ClientSession()
        with pytest.raises(ValueError):
            session.update(favourites=[1])

    def test_changing_filters_resets_page(self):
        session = ClientSession()
        session.update(listing=ARTWORKS, page=4)
        session.update(listing=ARTWORKS, filters={"artform": "Warli", "minPrice": None})
        assert session.listing(ARTWORKS) == ListingState(filters={"artform": "Warli"}, page=1)

    def test_listings_keep_separate_filters_and_pages(self):
        session = ClientSession()
        session.update(listing=ARTWORKS, filters={"artform": "Warli"}, page=3)
        session.update(listing=ARTIST_SEARCH, filters={"q": "Madhubani", "location": "Bihar"})
        session.update(listing=ARTWORKS, page=4)

        assert session.listing(ARTWORKS).params() == {"artform": "Warli", "page": 4}
        assert session.listing(ARTIST_SEARCH).params() == {
            "q": "Madhubani",
            "location": "Bihar",
            "page": 1,
        }
        assert session.listing(ARTISTS) == ListingState()

    def test_filters_and_page_need_a_listing(self):
        session = ClientSession()
        with pytest.raises(ValueError):
            session.update(page=2)
        with pytest.raises(ValueError):
            session.update(listing="gallery", page=2)
        with pytest.raises(ValueError):
            session.update(listing=ARTWORKS, page=0)

    def test_sign_in_and_membership_helpers(self):
        session = ClientSession()
        session.sign_in("token", {"id": 5, "favorites": [1, 2], "following": [9]})
        assert session.is_authenticated
        assert session.likes(2) and session.follows(9)

        session.apply_like(3, True).apply_like(1, False)
        session.apply_follow(9, False)
        assert session.favorites == frozenset({2, 3})
        assert session.following == frozenset()

        session.sign_out()
        assert not session.is_authenticated
        assert session.favorites == frozenset()


class TestViews:
    def test_artwork_card_escapes_and_formats(self):
        card = ArtworkCard(artwork_payload(title="<b>Bold</b> & Bright"), liked=True, can_like=True)
        html = card.render()
        assert "&lt;b&gt;Bold&lt;/b&gt; &amp; Bright" in html
        assert "<b>Bold</b>" not in html
        assert "₹12,500" in html
        assert 'data-liked="true"' in html
        assert "Venkat Shyam" in html
        assert "Featured" in html

    def test_like_button_only_when_signed_in(self):
        assert "like-btn" not in ArtworkCard(artwork_payload()).render()

    def test_card_truncates_description(self):
        card = ArtworkCard(artwork_payload(description="x" * 150))
        assert "x" * 100 + "..." in card.render()
        assert "x" * 101 not in card.render()

    def test_artwork_detail(self):
        html = ArtworkDetail(artwork_payload(), can_like=True).render()
        assert "60.0 × 90.0 cm" in html or "60 × 90 cm" in html
        assert '<li class="tag">birds</li>' in html
        assert ">Like<" in html

    def test_artist_detail_mounts_artwork_cards(self):
        detail = ArtistDetail(artist_payload(), following=True, can_follow=True)
        assert [child.entity_id for child in detail.children] == [1, 2]
        html = detail.render()
        assert "Following" in html
        assert "Bhopal, Madhya Pradesh" in html
        assert "State Award" in html
        assert html.count('class="card artwork-card"') == 2

    def test_pagination_window(self):
        view = PaginationView({"current": 5, "pages": 10, "total": 120, "limit": 12})
        pages = [item.get("page", "...") for item in view.items()]
        assert pages == [1, "...", 3, 4, 5, 6, 7, "...", 10]
        html = view.render()
        assert 'data-page="4">Previous' in html
        assert 'data-page="6">Next' in html
        assert 'class="active">5<' in html

    def test_single_page_renders_nothing(self):
        view = PaginationView({"current": 1, "pages": 1, "total": 3, "limit": 12})
        assert view.render().strip() == ""


class TestReconcile:
    def test_every_view_of_the_entity_takes_the_server_count(self):
        page = Page()
        session = ClientSession(user_id=1, token="t")
        card = page.mount(ArtworkCard(artwork_payload(1, likes=4)))
        detail = page.mount(ArtworkDetail(artwork_payload(1, likes=3)))
        other = page.mount(ArtworkCard(artwork_payload(2, likes=4)))

        updated = reconcile_like(session, page, 1, liked=True, likes=9)

        assert updated == 2
        assert (card.liked, card.likes) == (True, 9)
        assert (detail.liked, detail.likes) == (True, 9)
        assert (other.liked, other.likes) == (False, 4)
        assert session.likes(1)
        assert "9 likes" in detail.render()

    def test_follow_reaches_cards_inside_artist_detail(self):
        page = Page()
        session = ClientSession(user_id=1, token="t")
        detail = page.mount(ArtistDetail(artist_payload(7)))

        reconcile_follow(session, page, 7, following=True, followers=12)

        assert (detail.following, detail.followers) == (True, 12)
        assert len(page.views_for("artwork", 1)) == 1
        page.unmount(detail)
        assert page.views_for("artwork", 1) == []
        assert len(page) == 0


def envelope(data=None, **extra):
    return {"success": True, "data": data, **extra}


class FakeApi:
    """Scripted MockTransport handler recording every request."""

    def __init__(self, routes):
        self.routes = routes
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.routes[(request.method, request.url.path)]
        return httpx.Response(status, json=body)


def make_client(routes, signed_in=True):
    api = FakeApi(routes)
    session = ClientSession()
    if signed_in:
        session.update(token="tok", user_id=5)
    client = MarketplaceClient(
        "http://marketplace.test", session=session, transport=httpx.MockTransport(api)
    )
    return client, api


@pytest.mark.asyncio
class TestMarketplaceClient:
    async def test_like_reconciles_grid_and_detail_from_response(self):
        client, api = make_client(
            {
                ("GET", "/api/artworks"): (
                    200,
                    envelope(
                        [artwork_payload(1), artwork_payload(2)],
                        pagination={"current": 1, "pages": 1, "total": 2, "limit": 12},
                    ),
                ),
                ("GET", "/api/artworks/1"): (200, envelope(artwork_payload(1, views=11))),
                ("POST", "/api/artworks/1/like"): (
                    200,
                    {"success": True, "message": "Artwork liked", "liked": True, "likes": 20},
                ),
            }
        )
        async with client:
            listing = await client.load_artworks(artform="Gond")
            detail = await client.load_artwork(1)
            outcome = await client.toggle_like(1)

        assert outcome.active is True and outcome.count == 20
        assert listing.views[0].likes == 20
        assert detail.likes == 20
        assert listing.views[1].likes == 4
        assert client.session.likes(1)
        assert api.requests[0].url.params["artform"] == "Gond"
        assert api.requests[2].headers["authorization"] == "Bearer tok"

    async def test_artist_search_does_not_leak_into_artwork_paging(self):
        client, api = make_client(
            {
                ("GET", "/api/artworks"): (200, envelope([artwork_payload(1)])),
                ("GET", "/api/artists/search/query"): (200, envelope([artist_payload(7)])),
            }
        )
        async with client:
            await client.load_artworks(artform="Warli")
            await client.search_artists(q="Madhubani", location="Bihar")
            await client.load_artworks(page=2)

        params = [dict(request.url.params) for request in api.requests]
        assert params == [
            {"artform": "Warli", "page": "1"},
            {"q": "Madhubani", "location": "Bihar", "page": "1"},
            {"artform": "Warli", "page": "2"},
        ]

    async def test_failed_toggle_leaves_state_untouched(self):
        client, _ = make_client(
            {
                ("GET", "/api/artworks"): (200, envelope([artwork_payload(1)])),
                ("POST", "/api/artworks/1/like"): (
                    404,
                    {"success": False, "message": "Artwork not found"},
                ),
            }
        )
        async with client:
            listing = await client.load_artworks()
            result = await client.toggle_like(1)

        assert result == Notification("Artwork not found")
        assert listing.views[0].likes == 4
        assert listing.views[0].liked is False
        assert client.session.favorites == frozenset()

    async def test_validation_failure_uses_first_error(self):
        client, _ = make_client(
            {
                ("GET", "/api/artworks"): (
                    400,
                    {
                        "success": False,
                        "message": "Validation failed",
                        "errors": [{"field": "sort", "message": "Cannot sort by 'x'"}],
                    },
                ),
            }
        )
        async with client:
            result = await client.load_artworks(sort="x")
        assert result == Notification("Cannot sort by 'x'")

    async def test_toggle_requires_sign_in(self):
        client, api = make_client({}, signed_in=False)
        async with client:
            result = await client.toggle_follow(7)
        assert result.level == "warning"
        assert api.requests == []

    async def test_expired_session_signs_out(self):
        client, _ = make_client(
            {("POST", "/api/artists/7/follow"): (401, {"success": False, "message": "Token expired"})}
        )
        async with client:
            result = await client.toggle_follow(7)
        assert result.message == "Session expired. Please log in again."
        assert not client.session.is_authenticated

    async def test_network_error_becomes_notification(self):
        def broken(request):
            raise httpx.ConnectError("refused", request=request)

        client = MarketplaceClient(
            "http://marketplace.test",
            session=ClientSession(user_id=1, token="t"),
            transport=httpx.MockTransport(broken),
        )
        async with client:
            result = await client.toggle_like(1)
        assert isinstance(result, Notification)

    async def test_load_artist_mounts_detail_and_cards(self):
        client, _ = make_client(
            {("GET", "/api/artists/7"): (200, envelope(artist_payload(7)))}
        )
        client.session.update(favorites=[2])
        async with client:
            detail = await client.load_artist(7)
        assert client.page.views_for("artist", 7) == [detail]
        cards = client.page.views_for("artwork", 2)
        assert len(cards) == 1 and cards[0].liked is True


@pytest.mark.asyncio
async def test_end_to_end_against_app(async_client, factory, artist, customer):
    """Drive the real app through the client and check reconciliation."""
    artwork = await factory.artwork(artist, title="Harvest")
    client = MarketplaceClient("http://test", transport=httpx.ASGITransport(app=app))
    async with client:
        me = await client.sign_in(make_token(customer.id))
        assert me["id"] == customer.id

        listing = await client.load_artworks()
        assert [view.entity_id for view in listing.views] == [artwork.id]

        outcome = await client.toggle_like(artwork.id)
        assert (outcome.active, outcome.count) == (True, 1)
        assert listing.views[0].likes == 1

        outcome = await client.toggle_follow(artist.id)
        assert outcome.active is True
        assert client.session.following == frozenset({artist.id})

        result = await client.load_artwork(999)
        assert result == Notification("Artwork not found")

    assert listing.views[0].artwork["title"] == "Harvest"
