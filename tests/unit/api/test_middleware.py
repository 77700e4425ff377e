"""Tests for API middleware: correlation ID, structured request log, error body shape."""

import json
import logging

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_correlation_id_generated(client: AsyncClient):
    """When X-Correlation-ID is not sent, response has a generated correlation ID."""
    r = await client.get("/health")
    assert r.status_code == 200
    assert "X-Correlation-ID" in r.headers
    assert len(r.headers["X-Correlation-ID"]) > 0


@pytest.mark.asyncio
async def test_correlation_id_preserved_when_passed(client: AsyncClient):
    """When X-Correlation-ID is sent, the same value is returned in response."""
    correlation_id = "my-correlation-123"
    r = await client.get("/health", headers={"X-Correlation-ID": correlation_id})
    assert r.status_code == 200
    assert r.headers.get("X-Correlation-ID") == correlation_id
    assert r.json().get("correlation_id") == correlation_id


@pytest.mark.asyncio
async def test_error_responses_carry_correlation_id(client: AsyncClient):
    """Rejected requests still get the header, and the body is {"error": ...}."""
    r = await client.get("/auth/me", headers={"X-Correlation-ID": "corr-401"})
    assert r.status_code == 401
    assert r.headers.get("X-Correlation-ID") == "corr-401"
    assert r.json() == {"error": "Access token required"}


@pytest.mark.asyncio
async def test_request_audit_logged(client: AsyncClient, caplog):
    """One structured request_audit line per request."""
    with caplog.at_level(logging.INFO, logger="app.api.middleware"):
        await client.get("/health", headers={"X-Correlation-ID": "corr-log"})
    events = [
        json.loads(rec.getMessage())
        for rec in caplog.records
        if rec.name == "app.api.middleware"
    ]
    assert len(events) == 1
    event = events[0]
    assert event["event"] == "request_audit"
    assert event["correlation_id"] == "corr-log"
    assert event["path"] == "/health"
    assert event["method"] == "GET"
    assert event["status_code"] == 200
    assert event["duration_ms"] >= 0
