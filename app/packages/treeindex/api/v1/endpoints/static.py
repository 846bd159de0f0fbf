"""静态资源路由：``{STATIC_PREFIX}/{path}`` 交给 ContentResolver 处理。"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from app.packages.treeindex.core.config import get_settings
from app.packages.treeindex.core.dependencies import get_content_resolver
from app.packages.treeindex.services.content_resolver import ContentResolver

settings = get_settings()

router = APIRouter(prefix=settings.static_prefix.rstrip("/"), tags=["static"])


@router.get("/{path:path}", include_in_schema=False)
async def serve_static(
    request: Request,
    path: str,
    resolver: ContentResolver = Depends(get_content_resolver),
):
    # scope["path"] 已完成百分号解码且不含查询串，文件名中的 ? 与 # 原样保留
    return await resolver.resolve(request.scope["path"], request.scope)
