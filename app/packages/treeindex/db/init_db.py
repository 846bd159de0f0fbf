"""Database bootstrapping utilities."""

from __future__ import annotations

import logging

from app.packages.treeindex.db import session as db_session
from app.packages.treeindex.models.base import Base
from app.packages.treeindex.models.entry import Entry  # noqa: F401 - ensure table registration

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Create all database tables if they do not exist."""
    Base.metadata.create_all(bind=db_session.engine)
    logger.debug("Database schema ensured on %s", db_session.engine.url)
