"""静态资源路由与 ContentResolver 的测试。"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from app.packages.treeindex.core.exceptions import ContentNotFound, ContentResolveError
from app.packages.treeindex.services.content_resolver import (
    ContentResolver,
    StaticServer,
    anchor,
    strip_serving_prefix,
)


def _scope(path: str) -> dict:
    return {"type": "http", "method": "GET", "path": path, "headers": []}


def _resolve(root, request_path: str, prefix: str = "/static"):
    resolver = ContentResolver(StaticServer(str(root)), prefix=prefix)
    return asyncio.run(resolver.resolve(request_path, _scope(request_path)))


def test_literal_hit_returns_file_unmodified(client: TestClient):
    response = client.get("/static/css/app.css")

    assert response.status_code == 200
    assert response.content == b"body { margin: 0; }\n"
    assert response.headers["content-type"].startswith("text/css")


def test_missing_path_falls_back_to_html(client: TestClient):
    response = client.get("/static/about")

    assert response.status_code == 200
    assert response.content == b"<h1>About</h1>\n"


def test_literal_match_wins_over_html_fallback(client: TestClient):
    response = client.get("/static/page")

    assert response.status_code == 200
    assert response.content == b"raw page\n"


def test_query_string_does_not_affect_lookup(client: TestClient):
    response = client.get("/static/about", params={"v": "1"})

    assert response.status_code == 200
    assert response.content == b"<h1>About</h1>\n"


def test_encoded_question_mark_is_part_of_file_name(client: TestClient):
    """%3F 解码后属于文件名，不能被当作查询串截断成 /q。"""
    response = client.get("/static/q%3Fa.txt")

    assert response.status_code == 200
    assert response.content == b"question mark\n"


def test_encoded_hash_is_part_of_file_name(client: TestClient):
    response = client.get("/static/h%23a.txt", params={"v": "2"})

    assert response.status_code == 200
    assert response.content == b"hash sign\n"


def test_double_miss_is_not_found(client: TestClient):
    """字面路径与 .html 均不存在时返回 404，而不是服务器错误。"""
    response = client.get("/static/missing")

    assert response.status_code == 404
    payload = response.json()
    assert payload["code"] == 404
    assert payload["msg"] == "文件不存在"
    assert payload["data"]["path"] == "/missing.html"


def test_directory_without_html_sibling_is_not_found(client: TestClient):
    """不做 index 文档解析：/docs 既不是文件也没有 docs.html。"""
    response = client.get("/static/docs")

    assert response.status_code == 404


def test_nested_html_fallback(client: TestClient):
    response = client.get("/static/docs/guide")

    assert response.status_code == 200
    assert response.content == b"<h1>Guide</h1>\n"


def test_resolver_html_fallback_targets_suffixed_file(served_root):
    response = _resolve(served_root, "/static/about")

    assert response.path.endswith("about.html")


def test_resolver_double_miss_raises_not_found(served_root):
    with pytest.raises(ContentNotFound) as exc_info:
        _resolve(served_root, "/static/missing")
    assert exc_info.value.status_code == 404


def test_resolver_rejects_prefix_mismatch(served_root):
    with pytest.raises(ContentResolveError) as exc_info:
        _resolve(served_root, "/other/x")
    assert exc_info.value.status_code == 500
    assert "/static" in exc_info.value.detail


def test_resolver_wraps_io_errors(served_root, monkeypatch):
    server = StaticServer(str(served_root))

    async def _broken(path, scope):
        raise OSError("device not ready")

    monkeypatch.setattr(server._files, "get_response", _broken)
    resolver = ContentResolver(server, prefix="/static")

    with pytest.raises(ContentResolveError) as exc_info:
        asyncio.run(resolver.resolve("/static/css/app.css", _scope("/static/css/app.css")))
    assert "device not ready" in exc_info.value.detail


def test_strip_serving_prefix():
    assert strip_serving_prefix("/static/css/app.css", "/static") == "css/app.css"
    assert strip_serving_prefix("/static", "/static") == ""
    assert strip_serving_prefix("/static/a", "/static/") == "a"
    assert strip_serving_prefix("/a/b", "/") == "a/b"


@pytest.mark.parametrize("path", ["/other/x", "/staticx/a", "static/a"])
def test_strip_serving_prefix_mismatch(path):
    with pytest.raises(ContentResolveError):
        strip_serving_prefix(path, "/static")


def test_anchor_rejects_control_characters():
    assert anchor("css/app.css") == "/css/app.css"
    with pytest.raises(ContentResolveError) as exc_info:
        anchor("bad\x00name")
    assert exc_info.value.detail == "Invalid path"
