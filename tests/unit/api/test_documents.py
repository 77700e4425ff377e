"""Tests for /documents: metadata records, uploader-or-admin delete."""

import pytest
from httpx import AsyncClient

from app.security.rbac import Role

DOCUMENT = {"file_name": "site-plan.pdf", "file_path": "s3://bucket/site-plan.pdf", "document_type": "drawing"}


@pytest.mark.asyncio
async def test_upload_and_list(client: AsyncClient, seed_user, auth_headers, audit_rows):
    worker = await seed_user("worker1")
    r = await client.post("/documents", json=DOCUMENT, headers=auth_headers(worker))
    assert r.status_code == 201
    assert r.json()["uploaded_by"] == worker.id

    r = await client.get("/documents", params={"document_type": "drawing"}, headers=auth_headers(worker))
    assert [d["file_name"] for d in r.json()] == ["site-plan.pdf"]

    r = await client.get("/documents", params={"document_type": "invoice"}, headers=auth_headers(worker))
    assert r.json() == []

    rows = await audit_rows(entity_type="DOCUMENT", action="CREATE")
    assert len(rows) == 1


@pytest.mark.asyncio
async def test_uploader_deletes_own_document(client: AsyncClient, seed_user, auth_headers, audit_rows):
    worker = await seed_user("worker1")
    doc = (await client.post("/documents", json=DOCUMENT, headers=auth_headers(worker))).json()

    r = await client.delete(f"/documents/{doc['id']}", headers=auth_headers(worker))
    assert r.status_code == 200
    assert r.json() == {"message": "Document deleted successfully"}

    rows = await audit_rows(entity_type="DOCUMENT", action="DELETE")
    assert len(rows) == 1
    assert rows[0].entity_id == doc["id"]


@pytest.mark.asyncio
async def test_other_worker_and_supervisor_cannot_delete(client: AsyncClient, seed_user, auth_headers):
    owner = await seed_user("worker1")
    other = await seed_user("worker2")
    supervisor = await seed_user("supervisor", Role.SUPERVISOR)
    doc = (await client.post("/documents", json=DOCUMENT, headers=auth_headers(owner))).json()

    for intruder in (other, supervisor):
        r = await client.delete(f"/documents/{doc['id']}", headers=auth_headers(intruder))
        assert r.status_code == 403

    r = await client.get("/documents", headers=auth_headers(owner))
    assert len(r.json()) == 1


@pytest.mark.asyncio
async def test_admin_deletes_any_document(client: AsyncClient, seed_user, auth_headers):
    owner = await seed_user("worker1")
    admin = await seed_user("admin", Role.ADMIN)
    doc = (await client.post("/documents", json=DOCUMENT, headers=auth_headers(owner))).json()

    r = await client.delete(f"/documents/{doc['id']}", headers=auth_headers(admin))
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_delete_missing_document_is_404(client: AsyncClient, seed_user, auth_headers):
    admin = await seed_user("admin", Role.ADMIN)
    r = await client.delete("/documents/9999", headers=auth_headers(admin))
    assert r.status_code == 404
    assert r.json() == {"error": "Document not found"}


@pytest.mark.asyncio
async def test_get_document_by_id(client: AsyncClient, seed_user, auth_headers):
    owner = await seed_user("worker1")
    reader = await seed_user("worker2")
    doc = (await client.post("/documents", json=DOCUMENT, headers=auth_headers(owner))).json()

    r = await client.get(f"/documents/{doc['id']}", headers=auth_headers(reader))
    assert r.status_code == 200
    assert r.json()["file_path"] == "s3://bucket/site-plan.pdf"
    assert r.json()["uploaded_by"] == owner.id

    r = await client.get("/documents/9999", headers=auth_headers(reader))
    assert r.status_code == 404
    assert r.json() == {"error": "Document not found"}
