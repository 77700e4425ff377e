"""Tests for /attendance: clock-in/out, supervisor entries, leave requests."""

from datetime import datetime, timezone

import pytest
from httpx import AsyncClient

from app.security.rbac import Role


@pytest.mark.asyncio
async def test_clock_in_then_out(client: AsyncClient, seed_user, auth_headers, audit_rows):
    worker = await seed_user("worker1")
    headers = auth_headers(worker)

    r = await client.post("/attendance/clock-in", json={"notes": "Gate B"}, headers=headers)
    assert r.status_code == 201
    record = r.json()
    assert record["user_id"] == worker.id
    assert record["attendance_date"] == datetime.now(timezone.utc).date().isoformat()
    assert record["clock_out_time"] is None

    r = await client.post("/attendance/clock-out", headers=headers)
    assert r.status_code == 200
    assert r.json()["id"] == record["id"]
    assert r.json()["clock_out_time"] is not None
    assert r.json()["hours_worked"] >= 0

    rows = await audit_rows(entity_type="ATTENDANCE")
    assert [row.action for row in rows] == ["CREATE", "UPDATE"]


@pytest.mark.asyncio
async def test_clock_in_without_body(client: AsyncClient, seed_user, auth_headers):
    worker = await seed_user("worker1")
    r = await client.post("/attendance/clock-in", headers=auth_headers(worker))
    assert r.status_code == 201


@pytest.mark.asyncio
async def test_double_clock_in_rejected(client: AsyncClient, seed_user, auth_headers):
    worker = await seed_user("worker1")
    headers = auth_headers(worker)
    await client.post("/attendance/clock-in", json={}, headers=headers)

    r = await client.post("/attendance/clock-in", json={}, headers=headers)
    assert r.status_code == 400
    assert r.json() == {"error": "Already clocked in today"}


@pytest.mark.asyncio
async def test_clock_out_without_clock_in(client: AsyncClient, seed_user, auth_headers):
    worker = await seed_user("worker1")
    r = await client.post("/attendance/clock-out", headers=auth_headers(worker))
    assert r.status_code == 400
    assert r.json() == {"error": "No active clock-in found"}


@pytest.mark.asyncio
async def test_supervisor_marks_and_corrects_attendance(client: AsyncClient, seed_user, auth_headers, audit_rows):
    supervisor = await seed_user("supervisor", Role.SUPERVISOR)
    worker = await seed_user("worker1")
    headers = auth_headers(supervisor)

    r = await client.post(
        "/attendance/mark",
        json={"user_id": worker.id, "attendance_date": "2026-05-04", "status": "absent"},
        headers=headers,
    )
    assert r.status_code == 201
    record = r.json()

    r = await client.put(f"/attendance/{record['id']}", json={"status": "late"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["status"] == "late"

    r = await client.get("/attendance", params={"date": "2026-05-04"}, headers=auth_headers(worker))
    assert [a["id"] for a in r.json()] == [record["id"]]

    rows = await audit_rows(entity_type="ATTENDANCE")
    assert [(row.action, row.user_id) for row in rows] == [
        ("CREATE", supervisor.id),
        ("UPDATE", supervisor.id),
    ]


@pytest.mark.asyncio
async def test_worker_cannot_mark_or_correct(client: AsyncClient, seed_user, auth_headers):
    worker = await seed_user("worker1")
    headers = auth_headers(worker)

    r = await client.post(
        "/attendance/mark",
        json={"user_id": worker.id, "attendance_date": "2026-05-04"},
        headers=headers,
    )
    assert r.status_code == 403

    r = await client.put("/attendance/1", json={"status": "present"}, headers=headers)
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_update_missing_attendance_is_404(client: AsyncClient, seed_user, auth_headers):
    supervisor = await seed_user("supervisor", Role.SUPERVISOR)
    r = await client.put("/attendance/9999", json={"status": "late"}, headers=auth_headers(supervisor))
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_leave_request_listing_defaults_to_own_for_workers(client: AsyncClient, seed_user, auth_headers):
    worker1 = await seed_user("worker1")
    worker2 = await seed_user("worker2")
    supervisor = await seed_user("supervisor", Role.SUPERVISOR)
    leave = {"start_date": "2026-06-01", "end_date": "2026-06-03", "leave_type": "annual"}

    for user in (worker1, worker2):
        r = await client.post("/attendance/leave-requests", json=leave, headers=auth_headers(user))
        assert r.status_code == 201
        assert r.json()["status"] == "pending"

    r = await client.get("/attendance/leave-requests", headers=auth_headers(worker1))
    assert [lr["user_id"] for lr in r.json()] == [worker1.id]

    r = await client.get(
        "/attendance/leave-requests",
        params={"user_id": worker2.id},
        headers=auth_headers(worker1),
    )
    assert [lr["user_id"] for lr in r.json()] == [worker2.id]

    r = await client.get("/attendance/leave-requests", headers=auth_headers(supervisor))
    assert {lr["user_id"] for lr in r.json()} == {worker1.id, worker2.id}


@pytest.mark.asyncio
async def test_leave_request_end_before_start_rejected(client: AsyncClient, seed_user, auth_headers):
    worker = await seed_user("worker1")
    r = await client.post(
        "/attendance/leave-requests",
        json={"start_date": "2026-06-03", "end_date": "2026-06-01", "leave_type": "annual"},
        headers=auth_headers(worker),
    )
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_review_leave_request(client: AsyncClient, seed_user, auth_headers, audit_rows):
    worker = await seed_user("worker1")
    manager = await seed_user("manager", Role.MANAGER)
    leave = (
        await client.post(
            "/attendance/leave-requests",
            json={"start_date": "2026-06-01", "end_date": "2026-06-01", "leave_type": "sick"},
            headers=auth_headers(worker),
        )
    ).json()

    r = await client.patch(
        f"/attendance/leave-requests/{leave['id']}",
        json={"status": "approved"},
        headers=auth_headers(worker),
    )
    assert r.status_code == 403

    r = await client.patch(
        f"/attendance/leave-requests/{leave['id']}",
        json={"status": "approved", "comments": "Get well"},
        headers=auth_headers(manager),
    )
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "approved"
    assert data["reviewed_by"] == manager.id
    assert data["review_comments"] == "Get well"
    assert data["reviewed_at"] is not None

    rows = await audit_rows(entity_type="LEAVE_REQUEST")
    assert [(row.action, row.user_id) for row in rows] == [
        ("CREATE", worker.id),
        ("UPDATE", manager.id),
    ]


@pytest.mark.asyncio
async def test_review_missing_leave_request_is_404(client: AsyncClient, seed_user, auth_headers):
    manager = await seed_user("manager", Role.MANAGER)
    r = await client.patch(
        "/attendance/leave-requests/9999",
        json={"status": "rejected"},
        headers=auth_headers(manager),
    )
    assert r.status_code == 404
    assert r.json() == {"error": "Leave request not found"}
