"""Integration tests for /api/artists routes."""

import pytest

from artforms.core.exceptions import NotFoundError
from artforms.models import Artist
from artforms.services.artist import ArtistService
from tests.conftest import auth_headers

pytestmark = pytest.mark.asyncio


async def make_artist(factory, artist_name, user_name=None, city=None, state=None, **kwargs):
    user = await factory.user(
        name=user_name or f"{artist_name} User", user_type="artist", city=city, state=state
    )
    return await factory.artist(user=user, artist_name=artist_name, **kwargs)


class TestListArtists:
    async def test_active_only_most_followed_first(self, async_client, factory):
        await make_artist(factory, "Quiet", followers=1)
        await make_artist(factory, "Famous", followers=50)
        await make_artist(factory, "Retired", followers=100, is_active=False)

        res = await async_client.get("/api/artists")
        assert res.status_code == 200
        body = res.json()
        assert [a["artistName"] for a in body["data"]] == ["Famous", "Quiet"]
        assert body["pagination"]["total"] == 2

    async def test_specialization_and_verified(self, async_client, factory):
        await make_artist(factory, "Gond Verified", specializations=("Gond",), is_verified=True)
        await make_artist(factory, "Gond New", specializations=("Gond", "Warli"))
        await make_artist(factory, "Madhubani", specializations=("Madhubani",), is_verified=True)

        res = await async_client.get("/api/artists", params={"specialization": "Gond"})
        assert {a["artistName"] for a in res.json()["data"]} == {"Gond Verified", "Gond New"}

        res = await async_client.get(
            "/api/artists", params={"specialization": "Gond", "verified": "true"}
        )
        assert [a["artistName"] for a in res.json()["data"]] == ["Gond Verified"]

    async def test_location_matches_state_case_insensitively(self, async_client, factory):
        await make_artist(factory, "Bhil", city="Jhabua", state="Madhya Pradesh")
        await make_artist(factory, "Phad", city="Bhilwara", state="Rajasthan")

        res = await async_client.get("/api/artists", params={"location": "madhya"})
        body = res.json()
        assert [a["artistName"] for a in body["data"]] == ["Bhil"]
        assert body["pagination"]["total"] == 1

    async def test_sort_by_rating(self, async_client, factory):
        await make_artist(factory, "Low", rating=2.0)
        await make_artist(factory, "High", rating=4.8)

        res = await async_client.get("/api/artists", params={"sort": "rating", "order": "desc"})
        assert [a["artistName"] for a in res.json()["data"]] == ["High", "Low"]

    async def test_unknown_specialization(self, async_client):
        res = await async_client.get("/api/artists", params={"specialization": "Cubism"})
        assert res.status_code == 400


class TestSearchArtists:
    async def test_q_matches_artist_name_user_name_or_specialization(self, async_client, factory):
        await make_artist(factory, "Soma Studio", user_name="Jivya")
        await make_artist(factory, "Bright Colours", user_name="Bhuri Soma")
        await make_artist(factory, "Forest Tales", user_name="Venkat", specializations=("Gond",))
        await make_artist(factory, "Unrelated", user_name="Other")

        res = await async_client.get("/api/artists/search/query", params={"q": "soma"})
        assert res.status_code == 200
        names = {a["artistName"] for a in res.json()["data"]}
        assert names == {"Soma Studio", "Bright Colours"}

        res = await async_client.get("/api/artists/search/query", params={"q": "gond"})
        assert [a["artistName"] for a in res.json()["data"]] == ["Forest Tales"]

    @pytest.mark.parametrize("q", ['"', "[", ","])
    async def test_q_does_not_match_list_punctuation(self, async_client, factory, q):
        await make_artist(factory, "Forest Tales", specializations=("Gond", "Warli"))

        res = await async_client.get("/api/artists/search/query", params={"q": q})
        body = res.json()
        assert body["data"] == []
        assert body["pagination"]["total"] == 0

    async def test_specialization_filter_is_exact_element(self, async_client, factory):
        await make_artist(factory, "Gond Only", specializations=("Gond",))
        await make_artist(factory, "Other Forms", specializations=("Other",))

        res = await async_client.get(
            "/api/artists/search/query", params={"specialization": "Gond"}
        )
        assert [a["artistName"] for a in res.json()["data"]] == ["Gond Only"]

    async def test_q_and_location_must_both_match(self, async_client, factory):
        """q and location are OR-groups AND-ed together."""
        await make_artist(factory, "Soma North", city="Nashik", state="Maharashtra")
        await make_artist(factory, "Soma South", city="Chennai", state="Tamil Nadu")
        await make_artist(factory, "Other Pune", city="Pune", state="Maharashtra")

        res = await async_client.get(
            "/api/artists/search/query", params={"q": "soma", "location": "maharashtra"}
        )
        body = res.json()
        assert [a["artistName"] for a in body["data"]] == ["Soma North"]
        assert body["pagination"]["total"] == 1

        res = await async_client.get(
            "/api/artists/search/query", params={"q": "soma", "location": "chennai"}
        )
        assert [a["artistName"] for a in res.json()["data"]] == ["Soma South"]

    async def test_sorted_by_followers_then_rating(self, async_client, factory):
        await make_artist(factory, "A", followers=5, rating=3.0)
        await make_artist(factory, "B", followers=5, rating=4.0)
        await make_artist(factory, "C", followers=9, rating=1.0)

        res = await async_client.get("/api/artists/search/query")
        assert [a["artistName"] for a in res.json()["data"]] == ["C", "B", "A"]

    async def test_projection_and_total(self, async_client, factory):
        for i in range(3):
            await make_artist(factory, f"Soma {i}", city="Dahanu", state="Maharashtra")
        await make_artist(factory, "Soma Retired", is_active=False)

        res = await async_client.get(
            "/api/artists/search/query", params={"q": "soma", "limit": 2}
        )
        body = res.json()
        assert len(body["data"]) == 2
        assert body["pagination"] == {"current": 1, "pages": 2, "total": 3, "limit": 2}
        result = body["data"][0]
        assert set(result) == {
            "id",
            "artistName",
            "specializations",
            "experience",
            "followers",
            "rating",
            "artworkCount",
            "isVerified",
            "user",
        }
        assert result["user"]["location"]["city"] == "Dahanu"
        assert "email" not in result["user"]


class TestFeaturedArtists:
    async def test_verified_active_with_artworks(self, async_client, factory):
        await make_artist(factory, "Top", is_verified=True, artwork_count=3, followers=20)
        await make_artist(factory, "Second", is_verified=True, artwork_count=1, followers=10)
        await make_artist(factory, "Unverified", artwork_count=5, followers=99)
        await make_artist(factory, "Empty", is_verified=True, followers=99)
        await make_artist(
            factory, "Gone", is_verified=True, artwork_count=2, followers=99, is_active=False
        )

        res = await async_client.get("/api/artists/featured/list")
        assert [a["artistName"] for a in res.json()["data"]] == ["Top", "Second"]

    async def test_known_errors_keep_their_status(self, async_client, monkeypatch):
        async def unavailable(self, db, limit):
            raise NotFoundError("No featured artists")

        monkeypatch.setattr(ArtistService, "get_featured", unavailable)
        res = await async_client.get("/api/artists/featured/list")
        assert res.status_code == 404
        assert res.json() == {"success": False, "message": "No featured artists"}


class TestGetArtist:
    async def test_detail_with_recent_approved_artworks(self, async_client, factory, artist):
        await factory.artwork(artist, title="Shown")
        await factory.artwork(artist, title="Hidden", status="pending")

        res = await async_client.get(f"/api/artists/{artist.id}")
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["artistName"] == "Jivya Warli Studio"
        assert data["user"]["name"] == "Jivya Soma"
        assert [a["title"] for a in data["artworks"]] == ["Shown"]

    async def test_recent_artworks_are_capped(self, async_client, factory, artist):
        for i in range(14):
            await factory.artwork(artist, title=f"Work {i}")
        res = await async_client.get(f"/api/artists/{artist.id}")
        artworks = res.json()["data"]["artworks"]
        assert len(artworks) == 12
        assert artworks[0]["title"] == "Work 13"

    async def test_inactive_or_missing_is_not_found(self, async_client, factory):
        retired = await make_artist(factory, "Retired", is_active=False)
        assert (await async_client.get(f"/api/artists/{retired.id}")).status_code == 404
        assert (await async_client.get("/api/artists/999")).status_code == 404


class TestArtistArtworks:
    async def test_paginated_approved_artworks(self, async_client, factory, artist):
        other = await make_artist(factory, "Other")
        await factory.artwork(artist, title="Mine 1", is_for_sale=True)
        await factory.artwork(artist, title="Mine 2", is_for_sale=False)
        await factory.artwork(artist, title="Mine pending", status="pending")
        await factory.artwork(other, title="Theirs")

        res = await async_client.get(f"/api/artists/{artist.id}/artworks")
        body = res.json()
        assert [a["title"] for a in body["data"]] == ["Mine 2", "Mine 1"]
        assert body["pagination"]["total"] == 2

        res = await async_client.get(
            f"/api/artists/{artist.id}/artworks", params={"isForSale": "true"}
        )
        assert [a["title"] for a in res.json()["data"]] == ["Mine 1"]

    async def test_inactive_artist(self, async_client, factory):
        retired = await make_artist(factory, "Retired", is_active=False)
        await factory.artwork(retired)
        res = await async_client.get(f"/api/artists/{retired.id}/artworks")
        assert res.status_code == 404


class TestFollowArtist:
    async def test_double_toggle_restores_state(self, async_client, factory, artist, customer):
        headers = auth_headers(customer.id)

        first = await async_client.post(f"/api/artists/{artist.id}/follow", headers=headers)
        assert first.status_code == 200
        assert first.json() == {
            "success": True,
            "message": "Artist followed",
            "following": True,
            "followers": 1,
        }
        me = await async_client.get("/api/users/me", headers=headers)
        assert me.json()["data"]["following"] == [artist.id]

        second = await async_client.post(f"/api/artists/{artist.id}/follow", headers=headers)
        assert second.json()["following"] is False
        assert second.json()["followers"] == 0
        assert (await factory.get(Artist, artist.id)).followers == 0
        assert await factory.count_follows(user_id=customer.id) == 0

    async def test_cannot_follow_yourself(self, async_client, factory, artist):
        res = await async_client.post(
            f"/api/artists/{artist.id}/follow", headers=auth_headers(artist.user_id)
        )
        assert res.status_code == 400
        assert res.json() == {"success": False, "message": "You cannot follow yourself"}
        assert (await factory.get(Artist, artist.id)).followers == 0
        assert await factory.count_follows(artist_id=artist.id) == 0

    async def test_inactive_artist(self, async_client, factory, customer):
        retired = await make_artist(factory, "Retired", is_active=False)
        res = await async_client.post(
            f"/api/artists/{retired.id}/follow", headers=auth_headers(customer.id)
        )
        assert res.status_code == 404

    async def test_artist_can_follow_another_artist(self, async_client, factory, artist):
        other = await make_artist(factory, "Other")
        res = await async_client.post(
            f"/api/artists/{other.id}/follow", headers=auth_headers(artist.user_id)
        )
        assert res.json()["following"] is True


class TestUpdateProfile:
    async def test_updates_editable_fields(self, async_client, artist):
        res = await async_client.put(
            "/api/artists/profile",
            json={
                "artistName": "Jivya Soma Mashe",
                "specializations": ["Warli", "Other"],
                "experience": 40,
                "socialLinks": {"instagram": "@warli"},
                "awards": [{"title": "Padma Shri", "year": 2011}],
            },
            headers=auth_headers(artist.user_id),
        )
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["artistName"] == "Jivya Soma Mashe"
        assert data["specializations"] == ["Warli", "Other"]
        assert data["experience"] == 40
        assert data["socialLinks"]["instagram"] == "@warli"
        assert data["awards"][0]["title"] == "Padma Shri"
        assert data["rating"] == 4.5

    @pytest.mark.parametrize(
        "payload",
        [
            {"followers": 1000},
            {"isVerified": True},
            {"rating": 5},
            {"experience": 101},
            {"specializations": ["Cubism"]},
        ],
    )
    async def test_rejects_non_editable_or_invalid(self, async_client, factory, artist, payload):
        res = await async_client.put(
            "/api/artists/profile", json=payload, headers=auth_headers(artist.user_id)
        )
        assert res.status_code == 400
        stored = await factory.get(Artist, artist.id)
        assert stored.followers == 0
        assert stored.is_verified is True

    async def test_customer_is_forbidden(self, async_client, customer):
        res = await async_client.put(
            "/api/artists/profile",
            json={"artistName": "Sneaky"},
            headers=auth_headers(customer.id),
        )
        assert res.status_code == 403
