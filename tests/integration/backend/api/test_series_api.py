"""
Integration Tests for the Series API.
"""

import pytest
from httpx import AsyncClient


@pytest.fixture
def create_series(client: AsyncClient, wall_headers):
    async def _create(name: str = "Road trip") -> dict:
        response = await client.post("/api/v1/series", json={"name": name}, headers=wall_headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create


class TestSeries:
    async def test_create_and_list(self, client: AsyncClient, api, create_series):
        series = await create_series()

        data = api.assert_success(await client.get("/api/v1/series"))["data"]

        assert [s["id"] for s in data] == [series["id"]]

    async def test_create_requires_password(self, client: AsyncClient, api):
        api.assert_error(await client.post("/api/v1/series", json={"name": "x"}), 401, "AUTH_UNAUTHORIZED")

    async def test_items_in_order_with_entries(self, client: AsyncClient, api, wall_headers, create_series, post_entry):
        series = await create_series()
        tech = await post_entry("tech", text="first")
        song = await post_entry("songs", text="second")

        for kind, entry in (("tech", tech), ("songs", song)):
            response = await client.post(
                f"/api/v1/series/{series['id']}/items",
                json={"entry_kind": kind, "entry_id": entry["id"]},
                headers=wall_headers,
            )
            api.assert_success(response, 201)

        detail = api.assert_success(await client.get(f"/api/v1/series/{series['id']}"))["data"]

        assert [i["position"] for i in detail["items"]] == [0, 1]
        assert [i["entry"]["text"] for i in detail["items"]] == ["first", "second"]

    async def test_reorder_and_remove(self, client: AsyncClient, api, wall_headers, create_series, post_entry):
        series = await create_series()
        items = []
        for text in ("a", "b"):
            entry = await post_entry("tech", text=text)
            response = await client.post(
                f"/api/v1/series/{series['id']}/items",
                json={"entry_kind": "tech", "entry_id": entry["id"]},
                headers=wall_headers,
            )
            items.append(response.json()["data"]["id"])

        reordered = await client.post(
            f"/api/v1/series/{series['id']}/reorder",
            json={"ordered_item_ids": [items[1], items[0]]},
            headers=wall_headers,
        )
        assert api.assert_success(reordered)["data"] == {"updated": 2}

        removed = await client.delete(f"/api/v1/series/{series['id']}/items/{items[1]}", headers=wall_headers)
        assert removed.status_code == 204

        detail = api.assert_success(await client.get(f"/api/v1/series/{series['id']}"))["data"]
        assert [i["id"] for i in detail["items"]] == [items[0]]

    async def test_duplicate_item(self, client: AsyncClient, api, wall_headers, create_series, post_entry):
        series = await create_series()
        entry = await post_entry("tech")
        body = {"entry_kind": "tech", "entry_id": entry["id"]}

        await client.post(f"/api/v1/series/{series['id']}/items", json=body, headers=wall_headers)
        response = await client.post(f"/api/v1/series/{series['id']}/items", json=body, headers=wall_headers)

        api.assert_error(response, 409, "RES_CONFLICT")

    async def test_delete(self, client: AsyncClient, api, wall_headers, create_series):
        series = await create_series()

        response = await client.delete(f"/api/v1/series/{series['id']}", headers=wall_headers)

        assert response.status_code == 204
        api.assert_error(await client.get(f"/api/v1/series/{series['id']}"), 404, "RES_NOT_FOUND")
