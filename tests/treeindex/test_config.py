"""配置与数据库引擎参数的测试。"""

import os

from app.packages.treeindex.core.config import Settings, get_settings
from app.packages.treeindex.db.session import engine_options


def test_settings_follow_environment(served_root):
    settings = get_settings()

    assert settings.root_directory == served_root
    assert settings.static_prefix == "/static"
    assert settings.scan_limit == 6000
    assert settings.is_sqlite


def test_root_directory_is_absolute():
    settings = Settings(ROOT_DIR="relative/site")

    assert settings.root_directory.is_absolute()
    assert str(settings.root_directory) == os.path.abspath("relative/site")


def test_sqlite_engine_options():
    options = engine_options(Settings(DATABASE_URL="sqlite:///./x.db"))

    assert options["connect_args"] == {"check_same_thread": False}
    assert "pool_size" not in options


def test_server_database_gets_bounded_pool():
    options = engine_options(
        Settings(DATABASE_URL="postgresql+psycopg2://u:p@db/treeindex", DATABASE_POOL_SIZE=3)
    )

    assert options["pool_size"] == 3
    assert options["max_overflow"] == 0
    assert options["pool_pre_ping"] is True
