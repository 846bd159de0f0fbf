"""路由汇总：版本化接口挂在 ``API_V1_STR`` 下，全表导出与静态资源挂在根路径。"""

from fastapi import APIRouter

from app.packages.treeindex.api.v1.endpoints import entries, listing, static

api_router = APIRouter()
api_router.include_router(entries.router)

public_router = APIRouter()
public_router.include_router(listing.router)
public_router.include_router(static.router)
