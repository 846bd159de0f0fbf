"""文件系统节点 CRUD。"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.packages.treeindex.core.enums import EntryKind
from app.packages.treeindex.crud.base import CRUDBase
from app.packages.treeindex.models.entry import Entry

# PostgreSQL unique_violation
_PG_UNIQUE_VIOLATION = "23505"
# MySQL ER_DUP_ENTRY
_MYSQL_DUP_ENTRY = 1062


def is_unique_violation(exc: IntegrityError) -> bool:
    """判断一次完整性错误是否为唯一约束冲突（而非非空、外键等其它约束）。"""
    orig = getattr(exc, "orig", None)
    if orig is None:
        return False
    if getattr(orig, "pgcode", None) == _PG_UNIQUE_VIOLATION:
        return True
    sqlstate = getattr(getattr(orig, "diag", None), "sqlstate", None)
    if sqlstate == _PG_UNIQUE_VIOLATION:
        return True
    # sqlite3 (Python 3.11+) 暴露扩展错误名；旧版本只能依据错误信息判断
    errorname = getattr(orig, "sqlite_errorname", None)
    if errorname is not None:
        return errorname in {"SQLITE_CONSTRAINT_UNIQUE", "SQLITE_CONSTRAINT_PRIMARYKEY"}
    args = getattr(orig, "args", ())
    if args and args[0] == _MYSQL_DUP_ENTRY:
        return True
    return "UNIQUE constraint failed" in str(orig)


class CRUDEntry(CRUDBase[Entry]):
    def get_by_path(self, db: Session, *, path: str) -> Entry | None:
        return self.query(db).filter(Entry.path == path).first()

    def list_all(self, db: Session) -> List[Entry]:
        return self.query(db).order_by(Entry.id).all()

    def list_by_kind(self, db: Session, kind: EntryKind) -> List[Entry]:
        return self.query(db).filter(Entry.kind == kind.value).order_by(Entry.id).all()

    def filter_multi(
        self,
        db: Session,
        *,
        kind: Optional[EntryKind] = None,
        parent_path: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> tuple[List[Entry], int]:
        """按类型/父目录过滤并分页，返回 (当前页, 总数)。"""
        query = self.query(db)
        if kind is not None:
            query = query.filter(Entry.kind == kind.value)
        if parent_path is not None:
            query = query.filter(Entry.parent_path == parent_path)
        total = query.count()
        items = query.order_by(Entry.id).offset(skip).limit(limit).all()
        return items, total

    def insert_ignore_duplicate(
        self,
        db: Session,
        *,
        path: str,
        parent_path: str,
        name: str,
        kind: EntryKind,
    ) -> Entry | None:
        """插入一条节点记录；path 已存在时回滚并返回 None。

        仅唯一约束冲突被视为“已索引”，其余数据库错误原样抛出。
        """
        try:
            return self.create(
                db,
                {"path": path, "parent_path": parent_path, "name": name, "kind": kind.value},
            )
        except IntegrityError as exc:
            db.rollback()
            if is_unique_violation(exc):
                return None
            raise


entry_crud = CRUDEntry(Entry)
