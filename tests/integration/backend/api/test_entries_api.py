"""
Integration Tests for the Entries API.

Exercises /api/v1/boards/{board}/entries and /api/v1/drafts through the
full stack: routing, the wall password header, services, database and
the error envelope.
"""

import httpx
from httpx import AsyncClient

from wallboard.backend.core.config import get_app_config
from wallboard.backend.models.entry import TechNote, Visibility, WallEntry
from wallboard.backend.services.entry import BLOCKED_MESSAGE
from wallboard.backend.services.moderation import ContentModerator, get_moderator


class TestCreateEntry:
    async def test_create(self, client: AsyncClient, api, wall_headers):
        response = await client.post(
            "/api/v1/boards/tech/entries",
            json={"text": "Use pathlib", "title": "(optional)"},
            headers=wall_headers,
        )

        data = api.assert_success(response, 201)["data"]
        assert data["board"] == "tech"
        assert data["title"] is None
        assert (data["is_pinned"], data["pin_order"]) == (False, None)

    async def test_requires_password(self, client: AsyncClient, api):
        response = await client.post("/api/v1/boards/tech/entries", json={"text": "x"})

        api.assert_error(response, 401, "AUTH_UNAUTHORIZED")

    async def test_wrong_password_counts_as_none(self, client: AsyncClient, api, wrong_headers):
        response = await client.post(
            "/api/v1/boards/tech/entries",
            json={"text": "x"},
            headers=wrong_headers,
        )

        api.assert_error(response, 401, "AUTH_UNAUTHORIZED")

    async def test_unknown_board(self, client: AsyncClient, api, wall_headers):
        response = await client.post(
            "/api/v1/boards/diary/entries",
            json={"text": "x"},
            headers=wall_headers,
        )

        api.assert_error(response, 404, "RES_NOT_FOUND")

    async def test_missing_text(self, client: AsyncClient, api, wall_headers):
        response = await client.post("/api/v1/boards/tech/entries", json={}, headers=wall_headers)

        api.assert_validation_error(response, field="body.text")

    async def test_draft_rejected_off_wall(self, client: AsyncClient, api, wall_headers):
        response = await client.post(
            "/api/v1/boards/ideas/entries",
            json={"text": "x", "visibility": "draft"},
            headers=wall_headers,
        )

        api.assert_error(response, 400, "VAL_VALIDATION_ERROR")


class TestFriendsBoard:
    async def test_anonymous_post(self, client: AsyncClient, api):
        response = await client.post(
            "/api/v1/boards/friends/entries",
            json={"text": "Congrats!", "name": "Ana"},
        )

        data = api.assert_success(response, 201)["data"]
        assert data["name"] == "Ana"

    async def test_name_required(self, client: AsyncClient, api):
        response = await client.post("/api/v1/boards/friends/entries", json={"text": "Hi"})

        data = api.assert_error(response, 400, "VAL_VALIDATION_ERROR")
        assert data["error"]["details"] == {"missing_fields": ["name"]}

    async def test_blocked_post_is_not_stored(self, app, client: AsyncClient, api):
        flagged = {
            "results": [
                {"flagged": True, "category_scores": {"harassment": 0.99}},
                {"flagged": False, "category_scores": {"harassment": 0.0}},
            ]
        }
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=flagged))
        moderator = ContentModerator(get_app_config().moderation, "sk-test", transport=transport)
        app.dependency_overrides[get_moderator] = lambda: moderator

        response = await client.post(
            "/api/v1/boards/friends/entries",
            json={"text": "hello", "name": "Troll"},
        )

        data = api.assert_error(response, 400, "VAL_VALIDATION_ERROR")
        assert data["error"]["message"] == BLOCKED_MESSAGE
        assert data["error"]["details"]["analysis"][0]["tripped"] == ["harassment"]

        listing = await client.get("/api/v1/boards/friends/entries")
        assert listing.json()["data"] == []


class TestListEntries:
    async def test_pinned_first_then_newest(self, client: AsyncClient, add_entry, make_times):
        t = make_times(3)
        old = await add_entry(TechNote, created_at=t[0])
        new = await add_entry(TechNote, created_at=t[2])
        pinned = await add_entry(TechNote, created_at=t[1], is_pinned=True, pin_order=0)

        response = await client.get("/api/v1/boards/tech/entries")

        assert response.status_code == 200
        assert [e["id"] for e in response.json()["data"]] == [pinned.id, new.id, old.id]

    async def test_pagination(self, client: AsyncClient, add_entry, make_times):
        t = make_times(5)
        for i in range(5):
            await add_entry(TechNote, created_at=t[i])

        first = (await client.get("/api/v1/boards/tech/entries?limit=2")).json()
        last = (await client.get("/api/v1/boards/tech/entries?limit=2&offset=4")).json()

        assert len(first["data"]) == 2
        assert first["pagination"] == {"total": 5, "limit": 2, "offset": 0, "has_more": True}
        assert len(last["data"]) == 1
        assert last["pagination"]["has_more"] is False

    async def test_limit_is_clamped(self, client: AsyncClient):
        response = await client.get("/api/v1/boards/tech/entries?limit=100000")

        assert response.json()["pagination"]["limit"] == get_app_config().application.pagination.max_limit

    async def test_invalid_limit(self, client: AsyncClient, api):
        response = await client.get("/api/v1/boards/tech/entries?limit=0")

        api.assert_validation_error(response, field="query.limit")

    async def test_drafts_not_listed(self, client: AsyncClient, add_entry):
        await add_entry(WallEntry, visibility=Visibility.DRAFT.value)
        public = await add_entry(WallEntry)

        response = await client.get("/api/v1/boards/wall/entries")

        assert [e["id"] for e in response.json()["data"]] == [public.id]

    async def test_named_wall(self, client: AsyncClient, wall_headers, post_entry):
        await client.post("/api/v1/walls", json={"name": "Travel"}, headers=wall_headers)
        on_travel = await post_entry("wall", text="Lisbon", wall="travel")
        await post_entry("wall", text="home")

        response = await client.get("/api/v1/boards/wall/entries?wall=travel")

        assert [e["id"] for e in response.json()["data"]] == [on_travel["id"]]


class TestGetUpdateDelete:
    async def test_get(self, client: AsyncClient, api, post_entry):
        entry = await post_entry("songs", text="la la", artist="Nina")

        data = api.assert_success(await client.get(f"/api/v1/boards/songs/entries/{entry['id']}"))["data"]

        assert data["artist"] == "Nina"

    async def test_entry_is_scoped_to_its_board(self, client: AsyncClient, api, post_entry):
        entry = await post_entry("songs")

        response = await client.get(f"/api/v1/boards/tech/entries/{entry['id']}")

        api.assert_error(response, 404, "RES_NOT_FOUND")

    async def test_draft_hidden_without_password(self, client: AsyncClient, api, post_entry):
        draft = await post_entry("wall", visibility="draft")

        response = await client.get(f"/api/v1/boards/wall/entries/{draft['id']}")

        api.assert_error(response, 403, "AUTHZ_FORBIDDEN")

    async def test_patch(self, client: AsyncClient, api, wall_headers, post_entry):
        entry = await post_entry("tech", text="old", title="Keep")

        response = await client.patch(
            f"/api/v1/boards/tech/entries/{entry['id']}",
            json={"text": "new"},
            headers=wall_headers,
        )

        data = api.assert_success(response)["data"]
        assert (data["text"], data["title"]) == ("new", "Keep")

    async def test_delete(self, client: AsyncClient, wall_headers, post_entry):
        entry = await post_entry("tech")

        response = await client.delete(f"/api/v1/boards/tech/entries/{entry['id']}", headers=wall_headers)

        assert response.status_code == 204
        missing = await client.get(f"/api/v1/boards/tech/entries/{entry['id']}")
        assert missing.status_code == 404

    async def test_delete_requires_password(self, client: AsyncClient, api, post_entry):
        entry = await post_entry("tech")

        response = await client.delete(f"/api/v1/boards/tech/entries/{entry['id']}")

        api.assert_error(response, 401, "AUTH_UNAUTHORIZED")


class TestDrafts:
    async def test_owner_sees_drafts(self, client: AsyncClient, api, wall_headers, post_entry):
        draft = await post_entry("wall", visibility="draft")
        await post_entry("wall")

        data = api.assert_success(await client.get("/api/v1/drafts", headers=wall_headers))["data"]

        assert [d["id"] for d in data] == [draft["id"]]

    async def test_requires_password(self, client: AsyncClient, api):
        api.assert_error(await client.get("/api/v1/drafts"), 401, "AUTH_UNAUTHORIZED")

    async def test_publish(self, client: AsyncClient, wall_headers, post_entry):
        draft = await post_entry("wall", visibility="draft")

        await client.patch(
            f"/api/v1/boards/wall/entries/{draft['id']}",
            json={"visibility": "public"},
            headers=wall_headers,
        )

        listing = await client.get("/api/v1/boards/wall/entries")
        assert [e["id"] for e in listing.json()["data"]] == [draft["id"]]
