"""文件系统节点查询路由（分页 + 统一响应结构）。"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.packages.treeindex.api.v1.schemas.entries import (
    EntryDetailResponse,
    EntryOut,
    EntryPageResponse,
)
from app.packages.treeindex.core.constants import HTTP_STATUS_NOT_FOUND
from app.packages.treeindex.core.dependencies import get_db
from app.packages.treeindex.core.enums import EntryKind
from app.packages.treeindex.core.exceptions import AppException
from app.packages.treeindex.core.responses import create_response
from app.packages.treeindex.crud.entry import entry_crud

router = APIRouter(tags=["entries"])


@router.get("/entries", response_model=EntryPageResponse)
def list_entries(
    kind: Optional[EntryKind] = Query(None),
    parent_path: Optional[str] = Query(None, alias="parentPath"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    """按插入顺序分页返回已索引的节点，可按类型或父目录过滤。"""
    items, total = entry_crud.filter_multi(db, kind=kind, parent_path=parent_path, skip=skip, limit=limit)
    data = {
        "total": total,
        "skip": skip,
        "limit": limit,
        "items": [EntryOut.model_validate(item).model_dump() for item in items],
    }
    return create_response("获取节点列表成功", data)


@router.get("/entries/{entry_id}", response_model=EntryDetailResponse)
def get_entry(entry_id: int, db: Session = Depends(get_db)):
    entry = entry_crud.get(db, entry_id)
    if entry is None:
        raise AppException("节点不存在", HTTP_STATUS_NOT_FOUND)
    return create_response("获取节点成功", EntryOut.model_validate(entry).model_dump())
