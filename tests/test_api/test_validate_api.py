"""Tests for the validation API."""

from __future__ import annotations

import threading

import httpx
import pytest
from fastapi.testclient import TestClient

import pkgcheck.deps as deps
from pkgcheck.config import ValidatorOptions
from pkgcheck.main import app


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def test_validate_upload(client: TestClient, make_package, base_entries, package_name) -> None:
    resp = client.post(
        "/api/validate",
        files={"file": (package_name, make_package(base_entries), "application/zip")},
    )
    assert resp.status_code == 200
    body = resp.json()
    run = body["run"]
    assert run["package_name"] == package_name
    assert run["project_name"] == "acme"
    assert run["report"]["status"] == "warning"
    assert run["report"]["exit_code"] == 0
    assert run["report"]["summary"]["errors"] == 0
    assert run["report"]["diagnostics"][0]["severity"] == "warning"
    assert body["console_text"].startswith("=== AEM Package Validation Report ===")


def test_validate_upload_failed_status(
    client: TestClient, make_package, base_entries, package_name, filter_xml,
) -> None:
    base_entries["META-INF/vault/filter.xml"] = filter_xml("/etc/acme")
    resp = client.post(
        "/api/validate",
        files={"file": (package_name, make_package(base_entries), "application/zip")},
    )
    report = resp.json()["run"]["report"]
    assert report["status"] == "failed"
    assert report["exit_code"] == 1


def test_validate_rejects_non_zip(client: TestClient) -> None:
    resp = client.post(
        "/api/validate",
        files={"file": ("acme-content-20240101-1.zip", b"not a zip", "application/zip")},
    )
    assert resp.status_code == 422
    assert "Cannot decode archive" in resp.json()["detail"]


def test_rules_endpoint(client: TestClient) -> None:
    resp = client.get("/api/validate/rules")
    assert resp.status_code == 200
    body = resp.json()
    assert body["forbidden_filter_prefixes"] == ["/libs", "/etc"]
    assert body["required_properties"] == ["name", "group", "version"]
    assert body["allowed_mixin"] == "mix:versionable"
    assert body["max_entries"] == 10_000


@pytest.mark.asyncio
async def test_validate_async_client(make_package, base_entries, package_name) -> None:
    deps._options = ValidatorOptions(max_entries=1)
    try:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            resp = await ac.post(
                "/api/validate",
                files={"file": (package_name, make_package(base_entries), "application/zip")},
            )
    finally:
        deps._options = None

    assert resp.status_code == 200
    warnings = [
        d["message"]
        for d in resp.json()["run"]["report"]["diagnostics"]
        if d["severity"] == "warning"
    ]
    assert any(m.startswith("Too many entries in package") for m in warnings)


def test_validate_damaged_zip_is_422(client: TestClient, make_package, base_entries, package_name) -> None:
    data = bytearray(make_package(base_entries))
    eocd = data.rfind(b"PK\x05\x06")
    data[eocd + 12:eocd + 16] = (0x7FFFFFFF).to_bytes(4, "little")
    resp = client.post(
        "/api/validate",
        files={"file": (package_name, bytes(data), "application/zip")},
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_validation_runs_off_event_loop(
    monkeypatch, make_package, base_entries, package_name,
) -> None:
    import pkgcheck.api.validate as validate_api

    threads: list[int] = []
    original = validate_api.validate_archive

    def _recording(archive, options):
        threads.append(threading.get_ident())
        return original(archive, options)

    monkeypatch.setattr(validate_api, "validate_archive", _recording)
    deps._options = ValidatorOptions()
    try:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            resp = await ac.post(
                "/api/validate",
                files={"file": (package_name, make_package(base_entries), "application/zip")},
            )
    finally:
        deps._options = None

    assert resp.status_code == 200
    assert threads and threads[0] != threading.get_ident()
