"""API tests for /api/data."""

from httpx import AsyncClient

from second_brain.core.entities import EntityType

TASK = {
    "id": "t1",
    "title": "Buy milk",
    "category": "other",
    "priority": "medium",
    "status": "todo",
    "tagIds": [],
    "createdAt": "2025-01-01T09:00:00.000Z",
    "updatedAt": "2025-01-01T09:00:00.000Z",
}


class TestListRecords:
    async def test_empty_collection(self, api_client: AsyncClient):
        response = await api_client.get("/api/data", params={"type": "tasks"})
        assert response.status_code == 200
        assert response.json() == []

    async def test_missing_record_is_null(self, api_client: AsyncClient):
        response = await api_client.get("/api/data", params={"type": "tasks", "id": "x"})
        assert response.status_code == 200
        assert response.json() is None

    async def test_single_record(self, api_client: AsyncClient, store, make_task):
        await store.insert(EntityType.TASKS, make_task(tag_ids=["g1"]))

        response = await api_client.get("/api/data", params={"type": "tasks", "id": "t1"})

        body = response.json()
        assert body["title"] == "Buy milk"
        assert body["tagIds"] == ["g1"]

    async def test_invalid_type(self, api_client: AsyncClient):
        response = await api_client.get("/api/data", params={"type": "widgets"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Invalid type: widgets"
        assert body["error_code"] == "INVALID_TYPE"
        assert body["path"] == "/api/data"
        assert body["hint"]

    async def test_missing_type(self, api_client: AsyncClient):
        response = await api_client.get("/api/data")

        assert response.status_code == 400
        assert response.json()["error"] == "Missing type parameter"


class TestMutateRecords:
    async def test_create_then_list(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/data", params={"type": "tasks", "action": "create"}, json=TASK
        )
        assert response.status_code == 200
        assert response.json() == {"success": True}

        listed = await api_client.get("/api/data", params={"type": "tasks"})
        assert [t["title"] for t in listed.json()] == ["Buy milk"]

    async def test_sync_empty_clears(self, api_client: AsyncClient, store, make_task):
        await store.insert(EntityType.TASKS, make_task())

        response = await api_client.post(
            "/api/data", params={"type": "tasks", "action": "sync"}, json=[]
        )

        assert response.status_code == 200
        assert (await api_client.get("/api/data", params={"type": "tasks"})).json() == []

    async def test_update(self, api_client: AsyncClient, store, make_task):
        await store.insert(EntityType.TASKS, make_task())

        response = await api_client.post(
            "/api/data",
            params={"type": "tasks", "action": "update"},
            json={"id": "t1", "status": "done"},
        )

        assert response.status_code == 200
        assert (await store.get_by_id(EntityType.TASKS, "t1")).status.value == "done"

    async def test_update_without_id(self, api_client: AsyncClient, store, make_task):
        await store.insert(EntityType.TASKS, make_task())

        response = await api_client.post(
            "/api/data",
            params={"type": "tasks", "action": "update"},
            json={"status": "done"},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "MISSING_ID"
        assert (await store.get_by_id(EntityType.TASKS, "t1")).status.value == "todo"

    async def test_delete_missing_is_success(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/data", params={"type": "notes", "action": "delete"}, json={"id": "nope"}
        )
        assert response.status_code == 200

    async def test_unknown_type_rejected(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/data", params={"type": "widgets", "action": "sync"}, json=[]
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_TYPE"

    async def test_invalid_action(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/data", params={"type": "tasks", "action": "purge"}, json={}
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_ACTION"

    async def test_duplicate_create_conflicts(self, api_client: AsyncClient):
        params = {"type": "tasks", "action": "create"}
        await api_client.post("/api/data", params=params, json=TASK)

        response = await api_client.post("/api/data", params=params, json=TASK)

        assert response.status_code == 409
        assert response.json()["error_code"] == "DUPLICATE_RECORD"

    async def test_validation_error(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/data",
            params={"type": "tasks", "action": "create"},
            json=dict(TASK, priority="asap"),
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"
