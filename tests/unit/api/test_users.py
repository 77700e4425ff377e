"""Tests for /users: admin-only lifecycle, owner-scoped profile updates."""

import pytest
from httpx import AsyncClient

from app.security.rbac import Role


@pytest.fixture
async def people(seed_user):
    return {
        "admin": await seed_user("admin", Role.ADMIN),
        "manager": await seed_user("manager", Role.MANAGER),
        "worker1": await seed_user("worker1", Role.WORKER),
        "worker2": await seed_user("worker2", Role.WORKER),
    }


@pytest.mark.asyncio
async def test_list_users_admin_only(client: AsyncClient, people, auth_headers):
    r = await client.get("/users", headers=auth_headers(people["admin"]))
    assert r.status_code == 200
    assert {u["username"] for u in r.json()} == {"admin", "manager", "worker1", "worker2"}
    assert all("password_hash" not in u for u in r.json())

    r = await client.get("/users", headers=auth_headers(people["manager"]))
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_get_user_any_identity(client: AsyncClient, people, auth_headers):
    r = await client.get(f"/users/{people['worker2'].id}", headers=auth_headers(people["worker1"]))
    assert r.status_code == 200
    assert r.json()["username"] == "worker2"

    r = await client.get("/users/9999", headers=auth_headers(people["worker1"]))
    assert r.status_code == 404
    assert r.json() == {"error": "User not found"}


@pytest.mark.asyncio
async def test_admin_creates_user(client: AsyncClient, people, auth_headers, audit_rows):
    r = await client.post(
        "/users",
        json={
            "username": "super2",
            "password": "secret123",
            "email": "super2@example.com",
            "full_name": "Super Two",
            "role": "supervisor",
        },
        headers=auth_headers(people["admin"]),
    )
    assert r.status_code == 201
    assert r.json()["role"] == "supervisor"

    rows = await audit_rows(entity_type="USER", action="CREATE")
    assert len(rows) == 1
    assert rows[0].user_id == people["admin"].id
    assert rows[0].entity_id == r.json()["id"]


@pytest.mark.asyncio
async def test_manager_cannot_create_user(client: AsyncClient, people, auth_headers):
    r = await client.post(
        "/users",
        json={
            "username": "x",
            "password": "secret123",
            "email": "x@example.com",
            "full_name": "X",
        },
        headers=auth_headers(people["manager"]),
    )
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_worker_updates_own_profile(client: AsyncClient, people, auth_headers, audit_rows):
    r = await client.put(
        f"/users/{people['worker1'].id}",
        json={"full_name": "Worker One", "password": "newpass123"},
        headers=auth_headers(people["worker1"]),
    )
    assert r.status_code == 200
    assert r.json()["full_name"] == "Worker One"

    rows = await audit_rows(entity_type="USER", action="UPDATE")
    assert len(rows) == 1
    assert rows[0].changes == {"full_name": "Worker One"}

    login = await client.post("/auth/login", json={"username": "worker1", "password": "newpass123"})
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_worker_cannot_update_other_profile(client: AsyncClient, people, auth_headers):
    r = await client.put(
        f"/users/{people['worker2'].id}",
        json={"full_name": "Hijacked"},
        headers=auth_headers(people["worker1"]),
    )
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_non_admin_role_change_ignored(client: AsyncClient, people, auth_headers, audit_rows):
    r = await client.put(
        f"/users/{people['worker1'].id}",
        json={"full_name": "Still Worker", "role": "admin"},
        headers=auth_headers(people["worker1"]),
    )
    assert r.status_code == 200
    assert r.json()["role"] == "worker"

    rows = await audit_rows(entity_type="USER", action="UPDATE")
    assert len(rows) == 1
    assert rows[0].changes == {"full_name": "Still Worker"}


@pytest.mark.asyncio
async def test_role_change_only_is_no_update_for_non_admin(client: AsyncClient, people, auth_headers):
    r = await client.put(
        f"/users/{people['worker1'].id}",
        json={"role": "admin"},
        headers=auth_headers(people["worker1"]),
    )
    assert r.status_code == 400
    assert r.json() == {"error": "No fields to update"}


@pytest.mark.asyncio
async def test_admin_changes_role(client: AsyncClient, people, auth_headers, audit_rows):
    r = await client.put(
        f"/users/{people['worker1'].id}",
        json={"role": "supervisor"},
        headers=auth_headers(people["admin"]),
    )
    assert r.status_code == 200
    assert r.json()["role"] == "supervisor"

    rows = await audit_rows(entity_type="USER", action="UPDATE")
    assert rows[0].changes == {"role": "supervisor"}


@pytest.mark.asyncio
async def test_deactivate_then_activate(client: AsyncClient, people, auth_headers, audit_rows):
    headers = auth_headers(people["admin"])
    worker_id = people["worker1"].id

    r = await client.patch(f"/users/{worker_id}/deactivate", headers=headers)
    assert r.status_code == 200
    assert r.json()["is_active"] is False

    login = await client.post("/auth/login", json={"username": "worker1", "password": "password123"})
    assert login.status_code == 401
    assert login.json() == {"error": "Invalid credentials"}

    r = await client.patch(f"/users/{worker_id}/activate", headers=headers)
    assert r.json()["is_active"] is True

    login = await client.post("/auth/login", json={"username": "worker1", "password": "password123"})
    assert login.status_code == 200

    actions = [row.action for row in await audit_rows(entity_type="USER")]
    assert actions == ["DEACTIVATE", "ACTIVATE"]


@pytest.mark.asyncio
async def test_deactivate_requires_admin(client: AsyncClient, people, auth_headers):
    r = await client.patch(f"/users/{people['worker2'].id}/deactivate", headers=auth_headers(people["manager"]))
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_deactivate_missing_user_is_404(client: AsyncClient, people, auth_headers):
    r = await client.patch("/users/9999/deactivate", headers=auth_headers(people["admin"]))
    assert r.status_code == 404
