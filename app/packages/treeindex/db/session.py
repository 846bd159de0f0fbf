"""Database engine and session factory configuration."""

from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.packages.treeindex.core.config import Settings, get_settings


def engine_options(settings: Settings) -> dict[str, Any]:
    """Build ``create_engine`` keyword arguments for the configured backend.

    Server databases get a bounded pool (no overflow) sized by
    ``DATABASE_POOL_SIZE``; SQLite keeps its default pool and only needs
    cross-thread access for the request worker threads.
    """
    options: dict[str, Any] = {"pool_pre_ping": True, "echo": settings.database_echo}
    if settings.is_sqlite:
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_size"] = settings.database_pool_size
        options["max_overflow"] = 0
    return options


settings = get_settings()

engine = create_engine(settings.database_url, **engine_options(settings))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
