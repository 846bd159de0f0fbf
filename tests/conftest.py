"""测试夹具：为 pytest 提供数据库、被服务的目录树与客户端的共享配置。"""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Generator

# 必须在导入应用模块之前写入环境变量：配置在首次读取后即被缓存
_TMP_DIR = Path(tempfile.mkdtemp(prefix="treeindex_tests_"))
SERVED_ROOT = _TMP_DIR / "site"
TEST_DB_PATH = _TMP_DIR / "test.db"

SITE_FILES = {
    "css/app.css": b"body { margin: 0; }\n",
    "about.html": b"<h1>About</h1>\n",
    "page": b"raw page\n",
    "page.html": b"<p>page.html</p>\n",
    "docs/guide.html": b"<h1>Guide</h1>\n",
    "docs/notes.txt": b"notes\n",
    "q?a.txt": b"question mark\n",
    "q": b"bare q\n",
    "h#a.txt": b"hash sign\n",
}


def _build_site(root: Path) -> None:
    for rel, content in SITE_FILES.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)


_build_site(SERVED_ROOT)

os.environ["ROOT_DIR"] = str(SERVED_ROOT)
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["LOG_DIR"] = str(_TMP_DIR / "log")
os.environ["STATIC_PREFIX"] = "/static"
os.environ["SCAN_ON_STARTUP"] = "true"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.main import app  # noqa: E402
from app.packages.treeindex.db import session as db_session  # noqa: E402
from app.packages.treeindex.db.init_db import init_db  # noqa: E402
from app.packages.treeindex.models.base import Base  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def setup_test_database() -> Generator[None, None, None]:
    """创建隔离的 SQLite 测试数据库，并在会话结束后清理临时目录。"""
    init_db()
    yield

    db_session.engine.dispose()
    shutil.rmtree(_TMP_DIR, ignore_errors=True)


@pytest.fixture()
def memory_db() -> Generator[Session, None, None]:
    """每个用例独立的内存数据库，用于直接驱动扫描器。"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture()
def served_root() -> Path:
    return SERVED_ROOT


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    """构建 FastAPI TestClient；进入上下文时触发启动扫描。"""
    with TestClient(app) as test_client:
        yield test_client
