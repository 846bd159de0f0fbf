"""目录索引业务包：启动时扫描根目录入库，并对外提供静态资源与节点查询。"""

from app.packages.types import AppPackage

from .api.v1 import api_router, public_router
from .core.config import get_settings
from .core.exceptions import generic_exception_handler, http_exception_handler
from .core.logger import logger, setup_logging
from .core.responses import create_response
from .db.init_db import init_db
from .services.indexer import run_startup_scan

package = AppPackage(
    name="treeindex",
    api_router=api_router,
    public_router=public_router,
    get_settings=get_settings,
    setup_logging=setup_logging,
    logger=logger,
    init_db=init_db,
    run_startup_scan=run_startup_scan,
    create_response=create_response,
    http_exception_handler=http_exception_handler,
    generic_exception_handler=generic_exception_handler,
)

__all__ = ["package", "api_router", "public_router", "get_settings"]
