"""
Integration tests for the records API.

WHAT: Drives every /records route through the ASGI app against an
in-memory SQLite database.

WHY: Confirms the route → service → DAO chain end to end: status codes
mirror the envelope, 204s carry no body and soft-deleted records vanish
from every route.
"""

import pytest
from httpx import AsyncClient


async def _create(client: AsyncClient, body: dict) -> dict:
    response = await client.post("/records", json=body)
    assert response.status_code == 200
    return response.json()["payload"]


class TestCreateRecord:
    """POST /records"""

    @pytest.mark.asyncio
    async def test_create(self, client: AsyncClient, sample_record_data):
        response = await client.post("/records", json=sample_record_data)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == 200
        assert body["error"] is None
        assert body["payload"]["id"] == 1
        assert body["payload"]["_id"]
        assert body["payload"]["name"] == "Widget"

    @pytest.mark.asyncio
    async def test_empty_body(self, client: AsyncClient):
        response = await client.post("/records", json={})

        assert response.status_code == 500
        body = response.json()
        assert body["payload"] is None
        assert "Data is required to create." in body["error"]

    @pytest.mark.asyncio
    async def test_missing_body(self, client: AsyncClient):
        response = await client.post("/records")

        assert response.status_code == 500
        assert "Data is required to create." in response.json()["error"]

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, client: AsyncClient, sample_record_data):
        response = await client.post("/records", json=sample_record_data, headers={"X-Request-ID": "req-1"})

        assert response.headers["X-Request-ID"] == "req-1"


class TestReadRecords:
    """GET /records, /records/{id} and /records/search/{keys}/{keyword}"""

    @pytest.mark.asyncio
    async def test_read_by_id(self, client: AsyncClient, sample_record_data):
        created = await _create(client, sample_record_data)

        response = await client.get(f"/records/{created['id']}")

        assert response.status_code == 200
        assert response.json()["payload"]["_id"] == created["_id"]

    @pytest.mark.asyncio
    async def test_read_missing_id(self, client: AsyncClient):
        response = await client.get("/records/42")

        assert response.status_code == 404
        assert response.json() == {"status": 404, "error": "Resource not found", "payload": None}

    @pytest.mark.asyncio
    async def test_read_non_numeric_id(self, client: AsyncClient):
        response = await client.get("/records/abc")

        assert response.status_code == 500
        assert response.json()["error"].startswith("[RecordService] read_record_by_id:")

    @pytest.mark.asyncio
    async def test_filter(self, client: AsyncClient):
        await _create(client, {"name": "Widget", "color": "blue"})
        await _create(client, {"name": "Gadget", "color": "red"})
        await _create(client, {"name": "Gizmo", "color": "blue"})

        response = await client.get("/records", params={"color": "blue", "sort": "-id", "return": "name"})

        assert response.status_code == 200
        payload = response.json()["payload"]
        assert [r["name"] for r in payload] == ["Gizmo", "Widget"]
        assert set(payload[0]) == {"name", "_id"}

    @pytest.mark.asyncio
    async def test_filter_count(self, client: AsyncClient):
        await _create(client, {"color": "blue"})
        await _create(client, {"color": "blue"})

        response = await client.get("/records", params={"color": "blue", "count": "true"})

        assert response.json()["payload"] == 2

    @pytest.mark.asyncio
    async def test_filter_without_query(self, client: AsyncClient):
        response = await client.get("/records")

        assert response.status_code == 500
        assert "Query is required to filter." in response.json()["error"]

    @pytest.mark.asyncio
    async def test_wildcard(self, client: AsyncClient):
        await _create(client, {"name": "Blue Widget", "description": "small"})
        await _create(client, {"name": "Gadget", "description": "widget accessory"})
        await _create(client, {"name": "Gizmo", "description": "large"})

        response = await client.get("/records/search/name,description/WIDGET", params={"limit": "10"})

        assert response.status_code == 200
        assert [r["id"] for r in response.json()["payload"]] == [1, 2]

    @pytest.mark.asyncio
    async def test_wildcard_without_query(self, client: AsyncClient):
        response = await client.get("/records/search/name/widget")

        assert response.status_code == 500
        assert "Invalid key/keyword" in response.json()["error"]


class TestUpdateRecords:
    """PUT /records and /records/{id}"""

    @pytest.mark.asyncio
    async def test_update_by_id(self, client: AsyncClient, sample_record_data):
        created = await _create(client, sample_record_data)

        response = await client.put(f"/records/{created['id']}", json={"color": "green"})

        assert response.status_code == 200
        assert response.json()["payload"] == {"ok": 1, "nModified": 1, "n": 1}
        record = (await client.get(f"/records/{created['id']}")).json()["payload"]
        assert record["color"] == "green"
        assert record["name"] == "Widget"

    @pytest.mark.asyncio
    async def test_update_without_change_is_204(self, client: AsyncClient, sample_record_data):
        created = await _create(client, sample_record_data)

        response = await client.put(f"/records/{created['id']}", json={"color": "blue"})

        assert response.status_code == 204
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_update_id_rejected(self, client: AsyncClient, sample_record_data):
        created = await _create(client, sample_record_data)

        response = await client.put(f"/records/{created['id']}", json={"id": 7})

        assert response.status_code == 500
        assert "cannot be updated" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_update_by_filter(self, client: AsyncClient):
        await _create(client, {"color": "blue"})
        await _create(client, {"color": "blue"})
        await _create(client, {"color": "red"})

        response = await client.put(
            "/records", json={"options": {"color": "blue"}, "data": {"color": "navy"}}
        )

        assert response.status_code == 200
        assert response.json()["payload"] == {"color": "navy", "ok": 1, "nModified": 2, "n": 2}

    @pytest.mark.asyncio
    async def test_update_by_filter_requires_options(self, client: AsyncClient):
        response = await client.put("/records", json={"options": {}, "data": {"color": "navy"}})

        assert response.status_code == 500
        assert "Options are required to update" in response.json()["error"]


class TestDeleteRecords:
    """DELETE /records and /records/{id}"""

    @pytest.mark.asyncio
    async def test_delete_by_id(self, client: AsyncClient, sample_record_data):
        created = await _create(client, sample_record_data)

        response = await client.delete(f"/records/{created['id']}")

        assert response.status_code == 200
        assert response.json()["payload"]["nModified"] == 1
        assert (await client.get(f"/records/{created['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_missing_is_204(self, client: AsyncClient):
        response = await client.delete("/records/99")

        assert response.status_code == 204

    @pytest.mark.asyncio
    async def test_delete_by_filter(self, client: AsyncClient):
        await _create(client, {"color": "blue"})
        await _create(client, {"color": "red"})

        response = await client.request("DELETE", "/records", json={"options": {"color": "blue"}})

        assert response.status_code == 200
        remaining = (await client.get("/records", params={"limit": "10"})).json()["payload"]
        assert [r["color"] for r in remaining] == ["red"]

    @pytest.mark.asyncio
    async def test_delete_by_filter_requires_options(self, client: AsyncClient):
        response = await client.request("DELETE", "/records", json={})

        assert response.status_code == 500
        assert "Options are required" in response.json()["error"]


class TestAppEndpoints:
    """Health and root endpoints."""

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_root(self, client: AsyncClient):
        response = await client.get("/")

        assert response.json()["name"] == "Sample Records API"

    @pytest.mark.asyncio
    async def test_unknown_route_uses_envelope(self, client: AsyncClient):
        response = await client.get("/nowhere")

        assert response.status_code == 404
        assert response.json() == {"status": 404, "error": "Not Found", "payload": None}


class TestWildcardKeyInCallerOptions:
    """A raw `$wildcard` option is answered with a 500 envelope on every route."""

    @pytest.mark.asyncio
    async def test_filter_read(self, client: AsyncClient, sample_record_data):
        await _create(client, sample_record_data)

        response = await client.get("/records", params={"$wildcard": "x"})

        assert response.status_code == 500
        assert response.json()["error"].startswith("[RecordService] read_records_by_filter:")

    @pytest.mark.asyncio
    async def test_wildcard_read(self, client: AsyncClient):
        response = await client.get("/records/search/name/w", params={"$wildcard": "x"})

        assert response.status_code == 500
        assert "$wildcard" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_update_by_filter(self, client: AsyncClient, sample_record_data):
        await _create(client, sample_record_data)

        response = await client.put(
            "/records", json={"options": {"$wildcard": "x"}, "data": {"color": "red"}}
        )

        assert response.status_code == 500
        assert response.json()["error"].startswith("[RecordService] update_records:")

    @pytest.mark.asyncio
    async def test_delete_by_filter(self, client: AsyncClient, sample_record_data):
        await _create(client, sample_record_data)

        response = await client.request("DELETE", "/records", json={"options": {"$wildcard": "x"}})

        assert response.status_code == 500
        assert response.json()["error"].startswith("[RecordService] delete_records:")
