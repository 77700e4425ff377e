"""Tests for /equipment: breakdowns take equipment out of service, maintenance returns it."""

from datetime import datetime, timezone

import pytest
from httpx import AsyncClient

from app.security.rbac import Role


@pytest.fixture
async def crew(seed_user):
    return {
        "manager": await seed_user("manager", Role.MANAGER),
        "worker1": await seed_user("worker1", Role.WORKER),
    }


async def _create_equipment(client, headers, **fields):
    body = {"name": "Excavator", "type": "heavy", "serial_number": "EX-100", **fields}
    r = await client.post("/equipment", json=body, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


@pytest.mark.asyncio
async def test_create_equipment_defaults_to_available(client: AsyncClient, crew, auth_headers, audit_rows):
    equipment = await _create_equipment(client, auth_headers(crew["manager"]))
    assert equipment["status"] == "available"

    rows = await audit_rows(entity_type="EQUIPMENT", action="CREATE")
    assert len(rows) == 1
    assert rows[0].changes == {"name": "Excavator", "type": "heavy"}


@pytest.mark.asyncio
async def test_list_filters_and_get(client: AsyncClient, crew, auth_headers):
    headers = auth_headers(crew["worker1"])
    await _create_equipment(client, headers, name="Crane", status="in_use")
    mixer = await _create_equipment(client, headers, name="Mixer")

    r = await client.get("/equipment", params={"status": "in_use"}, headers=headers)
    assert [e["name"] for e in r.json()] == ["Crane"]

    r = await client.get(f"/equipment/{mixer['id']}", headers=headers)
    assert r.json()["name"] == "Mixer"

    r = await client.get("/equipment/9999", headers=headers)
    assert r.status_code == 404
    assert r.json() == {"error": "Equipment not found"}


@pytest.mark.asyncio
async def test_update_equipment(client: AsyncClient, crew, auth_headers, audit_rows):
    headers = auth_headers(crew["manager"])
    equipment = await _create_equipment(client, headers)

    r = await client.put(f"/equipment/{equipment['id']}", json={"status": "in_use"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["status"] == "in_use"
    assert r.json()["serial_number"] == "EX-100"

    rows = await audit_rows(entity_type="EQUIPMENT", action="UPDATE")
    assert rows[0].changes == {"status": "in_use"}

    r = await client.put("/equipment/9999", json={"status": "in_use"}, headers=headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_breakdown_then_maintenance(client: AsyncClient, crew, auth_headers, audit_rows):
    equipment = await _create_equipment(client, auth_headers(crew["manager"]))
    headers = auth_headers(crew["worker1"])

    r = await client.post(
        f"/equipment/{equipment['id']}/breakdown",
        json={"description": "Hydraulic leak", "severity": "high"},
        headers=headers,
    )
    assert r.status_code == 201
    assert r.json()["reported_by"] == crew["worker1"].id
    assert r.json()["status"] == "reported"

    r = await client.get(f"/equipment/{equipment['id']}", headers=headers)
    assert r.json()["status"] == "broken"

    r = await client.post(
        f"/equipment/{equipment['id']}/maintenance",
        json={"maintenance_type": "repair", "cost": 450.0, "next_maintenance_date": "2027-01-15"},
        headers=headers,
    )
    assert r.status_code == 201
    assert r.json()["performed_by"] == crew["worker1"].id

    r = await client.get(f"/equipment/{equipment['id']}", headers=headers)
    data = r.json()
    assert data["status"] == "available"
    assert data["next_maintenance_date"] == "2027-01-15"
    assert data["last_maintenance_date"] == datetime.now(timezone.utc).date().isoformat()

    breakdowns = await audit_rows(entity_type="EQUIPMENT_BREAKDOWN")
    assert breakdowns[0].changes == {"equipment_id": equipment["id"], "severity": "high"}
    maintenance = await audit_rows(entity_type="EQUIPMENT_MAINTENANCE")
    assert maintenance[0].changes == {"equipment_id": equipment["id"], "maintenance_type": "repair"}


@pytest.mark.asyncio
async def test_history_newest_first(client: AsyncClient, crew, auth_headers):
    equipment = await _create_equipment(client, auth_headers(crew["manager"]))
    headers = auth_headers(crew["worker1"])
    url = f"/equipment/{equipment['id']}"

    await client.post(f"{url}/breakdown", json={"description": "Track slipped"}, headers=headers)
    await client.post(f"{url}/breakdown", json={"description": "Engine stall"}, headers=headers)
    await client.post(f"{url}/maintenance", json={"maintenance_type": "service"}, headers=headers)

    r = await client.get(f"{url}/breakdowns", headers=headers)
    assert [b["description"] for b in r.json()] == ["Engine stall", "Track slipped"]
    assert r.json()[0]["severity"] == "medium"

    r = await client.get(f"{url}/maintenance", headers=headers)
    assert [m["maintenance_type"] for m in r.json()] == ["service"]


@pytest.mark.asyncio
async def test_breakdown_and_maintenance_on_missing_equipment(client: AsyncClient, crew, auth_headers, audit_rows):
    headers = auth_headers(crew["worker1"])
    r = await client.post("/equipment/9999/breakdown", json={"description": "?"}, headers=headers)
    assert r.status_code == 404
    assert r.json() == {"error": "Equipment not found"}

    r = await client.post("/equipment/9999/maintenance", json={"maintenance_type": "service"}, headers=headers)
    assert r.status_code == 404
    assert await audit_rows(entity_type="EQUIPMENT_BREAKDOWN") == []
