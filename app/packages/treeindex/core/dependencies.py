"""依赖注入模块：封装 FastAPI 中复用度高的依赖函数。"""

from collections.abc import Generator

from sqlalchemy.orm import Session

from app.packages.treeindex.core.config import get_settings
from app.packages.treeindex.db import session as db_session
from app.packages.treeindex.services.content_resolver import ContentResolver, StaticServer


def get_db() -> Generator[Session, None, None]:
    """生成一个数据库会话，并在请求结束后自动关闭。"""
    db = db_session.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_content_resolver() -> ContentResolver:
    """按当前配置构建静态资源解析器；解析器本身无状态，每个请求独立创建。"""
    settings = get_settings()
    server = StaticServer(str(settings.root_directory))
    return ContentResolver(server, prefix=settings.static_prefix)
