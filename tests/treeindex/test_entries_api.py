"""节点查询接口与启动扫描的集成测试。"""

import asyncio
import os

import pytest
from fastapi.testclient import TestClient

import app.main as main_module
from app.packages.treeindex.core.exceptions import ScanError


def test_root_listing_returns_plain_array(client: TestClient, served_root):
    response = client.get("/")

    assert response.status_code == 200
    rows = response.json()
    assert isinstance(rows, list)
    roots = [row for row in rows if row["parent_path"] == "root"]
    assert len(roots) == 1
    assert roots[0]["path"] == os.path.abspath(served_root)
    assert roots[0]["name"] == "root"
    assert roots[0]["kind"] == "dir"

    paths = {row["path"] for row in rows}
    assert str(served_root / "css" / "app.css") in paths
    assert [row["id"] for row in rows] == sorted(row["id"] for row in rows)


def test_dirs_listing_only_contains_directories(client: TestClient, served_root):
    response = client.get("/dirs")

    assert response.status_code == 200
    rows = response.json()
    assert rows
    assert {row["kind"] for row in rows} == {"dir"}
    assert str(served_root / "docs") in {row["path"] for row in rows}


def test_startup_scan_is_idempotent(client: TestClient):
    """每次启动都会重新扫描，但同一棵树不会产生重复行。"""
    before = client.get("/").json()

    with TestClient(main_module.app) as second:
        after = second.get("/").json()

    assert after == before


def test_entries_page_with_filters(client: TestClient, served_root):
    response = client.get(
        "/api/v1/entries",
        params={"kind": "file", "parentPath": str(served_root / "docs")},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["code"] == 200
    data = payload["data"]
    assert data["total"] == 2
    assert sorted(item["name"] for item in data["items"]) == ["guide.html", "notes.txt"]


def test_entries_page_paging(client: TestClient):
    response = client.get("/api/v1/entries", params={"skip": 1, "limit": 2})

    data = response.json()["data"]
    assert data["skip"] == 1
    assert data["limit"] == 2
    assert len(data["items"]) == 2


def test_entries_rejects_unknown_kind(client: TestClient):
    response = client.get("/api/v1/entries", params={"kind": "socket"})

    assert response.status_code == 422
    assert response.json()["code"] == 422


def test_entry_detail(client: TestClient):
    first = client.get("/").json()[0]

    response = client.get(f"/api/v1/entries/{first['id']}")

    assert response.status_code == 200
    assert response.json()["data"]["path"] == first["path"]


def test_entry_detail_not_found(client: TestClient):
    response = client.get("/api/v1/entries/999999")

    assert response.status_code == 404
    payload = response.json()
    assert payload["code"] == 404
    assert payload["msg"] == "节点不存在"


def test_health_and_request_id(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.status_code == 200
    assert response.json()["data"] == {"status": "healthy"}
    assert response.headers["X-Request-ID"] == "req-123"


def test_startup_fails_when_scan_fails(monkeypatch):
    """扫描失败时启动事件直接抛错，服务不会开始对外提供访问。"""

    def _failing_scan():
        raise ScanError("无法列出目录 /nope", "/nope")

    monkeypatch.setattr(main_module, "run_startup_scan", _failing_scan)

    with pytest.raises(ScanError):
        asyncio.run(main_module.startup_event())
