"""Integration tests for task workflows over HTTP."""

from datetime import timedelta

import httpx
import pytest

from casework_tasks.api.app import create_app
from casework_tasks.domain.entities.task import utc_now

BASE = "/api/v1/tasks"


def _due(days: float) -> str:
    return (utc_now() + timedelta(days=days)).isoformat()


@pytest.fixture
async def api_client(settings):
    """Async client talking to the ASGI app in-process."""
    transport = httpx.ASGITransport(app=create_app(settings))
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


class TestTaskWorkflows:
    """Test end-to-end task workflows."""

    @pytest.mark.asyncio
    async def test_task_lifecycle(self, api_client):
        """Test complete task lifecycle from creation to deletion."""
        created = await api_client.post(
            BASE,
            json={
                "title": "Prepare hearing bundle",
                "description": "Index and paginate exhibits",
                "dueDate": _due(3),
            },
        )
        assert created.status_code == 201
        task = created.json()
        assert task["status"] == "PENDING"
        assert task["caseNumber"] == "TASK000001"

        started = await api_client.put(f"{BASE}/{task['id']}/status", json={"status": "in_progress"})
        assert started.json()["status"] == "IN_PROGRESS"

        edited = await api_client.put(
            f"{BASE}/{task['id']}", json={"description": "Exhibits indexed"}
        )
        assert edited.json()["description"] == "Exhibits indexed"
        assert edited.json()["title"] == "Prepare hearing bundle"

        done = await api_client.put(f"{BASE}/{task['id']}/status", json={"status": "COMPLETED"})
        assert done.json()["status"] == "COMPLETED"

        stats = (await api_client.get(f"{BASE}/statistics")).json()
        assert stats == {"total": 1, "completed": 1, "overdue": 0}

        deleted = await api_client.delete(f"{BASE}/{task['id']}")
        assert deleted.status_code == 204

        missing = await api_client.get(f"{BASE}/{task['id']}")
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_search_and_paginate_workflow(self, api_client):
        """Test paging through filtered results until exhausted."""
        for i in range(12):
            status = "ON_HOLD" if i % 3 == 0 else "PENDING"
            response = await api_client.post(
                BASE, json={"title": f"Review file {i}", "status": status, "dueDate": _due(i + 1)}
            )
            assert response.status_code == 201

        seen = []
        page = 1
        while True:
            body = (
                await api_client.get(BASE, params={"status": "pending", "page": page, "pageSize": 3})
            ).json()
            if not body["tasks"]:
                break
            seen.extend(t["id"] for t in body["tasks"])
            assert body["totalTasks"] == 8
            assert body["totalPages"] == 3
            page += 1

        assert len(seen) == 8
        assert len(set(seen)) == 8
        assert page == 4

    @pytest.mark.asyncio
    async def test_overdue_workflow(self, api_client):
        """Test a task becoming overdue and leaving the list once completed."""
        created = (await api_client.post(BASE, json={"title": "Chase reply", "dueDate": _due(2)})).json()

        await api_client.put(f"{BASE}/{created['id']}", json={"dueDate": _due(-1)})
        overdue = (await api_client.get(f"{BASE}/overdue")).json()
        assert [t["id"] for t in overdue] == [created["id"]]

        await api_client.put(f"{BASE}/{created['id']}/status", json={"status": "completed"})
        assert (await api_client.get(f"{BASE}/overdue")).json() == []

    @pytest.mark.asyncio
    async def test_health(self, api_client):
        response = await api_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "UP"
