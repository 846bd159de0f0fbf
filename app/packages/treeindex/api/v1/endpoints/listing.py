"""全表导出路由：直接返回 JSON 数组，不做分页与包装。"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.packages.treeindex.api.v1.schemas.entries import EntryOut
from app.packages.treeindex.core.dependencies import get_db
from app.packages.treeindex.core.enums import EntryKind
from app.packages.treeindex.crud.entry import entry_crud

router = APIRouter(tags=["listing"])


@router.get("/", response_model=list[EntryOut])
def list_all_entries(db: Session = Depends(get_db)):
    return entry_crud.list_all(db)


@router.get("/dirs", response_model=list[EntryOut])
def list_directories(db: Session = Depends(get_db)):
    return entry_crud.list_by_kind(db, EntryKind.DIR)
