"""目录索引服务：启动时把根目录下的整棵树写入 ``files`` 表。

- 深度优先、先序遍历：目录行总是先于其子孙写入；
- 用显式栈代替递归，深层目录不会撑爆调用栈；
- 全局扫描额度（默认 6000）在整次运行内共享，用尽后立即放弃剩余遍历（兄弟、祖先目录中待处理的项也不再访问）；
- path 唯一约束冲突视为“已索引”，其余数据库错误与列目录失败一律中止本次扫描。
"""

from __future__ import annotations

import os
import threading
import time
from dataclasses import dataclass
from typing import Iterator, Optional

from sqlalchemy.orm import Session

from app.packages.treeindex.core.config import get_settings
from app.packages.treeindex.core.constants import DEFAULT_SCAN_LIMIT, ROOT_SENTINEL
from app.packages.treeindex.core.enums import EntryKind
from app.packages.treeindex.core.exceptions import ScanError
from app.packages.treeindex.core.logger import logger
from app.packages.treeindex.crud.entry import entry_crud
from app.packages.treeindex.db import session as db_session


class ScanBudget:
    """整次扫描共享的访问计数器。

    检查与自增在同一把锁内完成，即便将来按子树并行扫描，总访问量也不会超过 ``limit``。
    """

    def __init__(self, limit: int = DEFAULT_SCAN_LIMIT) -> None:
        self.limit = max(int(limit), 0)
        self._used = 0
        self._lock = threading.Lock()

    def try_acquire(self) -> bool:
        """额度未用尽时占用一个单位并返回 True，否则返回 False。"""
        with self._lock:
            if self._used >= self.limit:
                return False
            self._used += 1
            return True

    @property
    def used(self) -> int:
        with self._lock:
            return self._used

    @property
    def exhausted(self) -> bool:
        with self._lock:
            return self._used >= self.limit


@dataclass
class ScanStats:
    visited: int = 0
    inserted: int = 0
    duplicates: int = 0
    skipped: int = 0
    truncated: bool = False
    duration_ms: int = 0


def _ensure_encodable(value: str, *, path: str) -> str:
    # os.scandir 以 surrogateescape 解码非 UTF-8 文件名，这类名字无法写库
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ScanError(f"路径包含无法编码的字符: {path!r}", path) from exc
    return value


class DirectoryIndexer:
    """把一棵目录树写入数据库。先调用 :meth:`initialize` 记录根目录，再调用 :meth:`scan`。"""

    def __init__(
        self,
        db: Session,
        *,
        limit: int = DEFAULT_SCAN_LIMIT,
        budget: Optional[ScanBudget] = None,
    ) -> None:
        self.db = db
        self.budget = budget if budget is not None else ScanBudget(limit)
        self.stats = ScanStats()

    def initialize(self, root_path: str) -> None:
        """记录扫描起点：kind=dir，parent_path 与 name 均为占位值 "root"。"""
        root = _ensure_encodable(os.path.abspath(root_path), path=root_path)
        created = entry_crud.insert_ignore_duplicate(
            self.db,
            path=root,
            parent_path=ROOT_SENTINEL,
            name=ROOT_SENTINEL,
            kind=EntryKind.DIR,
        )
        if created is None:
            logger.debug("Root %s already indexed", root)

    def scan(self, root_path: str) -> ScanStats:
        """从 ``root_path`` 开始先序遍历，返回本次扫描的统计信息。

        额度（``budget``）跨多次调用累计，统计信息只描述本次调用。
        """
        started = time.perf_counter()
        self.stats = ScanStats()
        root = os.path.abspath(root_path)
        stack: list[tuple[str, Iterator[os.DirEntry]]] = [(root, self._list_dir(root))]

        while stack:
            parent, children = stack[-1]
            child = next(children, None)
            if child is None:
                stack.pop()
                continue

            if not self.budget.try_acquire():
                self.stats.truncated = True
                logger.warning(
                    "Scan limit %s reached, remaining entries under %s are not indexed",
                    self.budget.limit,
                    root,
                )
                break
            self.stats.visited += 1

            kind = self._classify(child)
            if kind is None:
                self.stats.skipped += 1
                continue

            path = _ensure_encodable(child.path, path=child.path)
            name = _ensure_encodable(child.name, path=child.path)
            self._persist(path=path, parent_path=parent, name=name, kind=kind)

            if kind is EntryKind.DIR:
                stack.append((path, self._list_dir(path)))

        self.stats.duration_ms = int((time.perf_counter() - started) * 1000)
        return self.stats

    def _list_dir(self, path: str) -> Iterator[os.DirEntry]:
        try:
            with os.scandir(path) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as exc:
            raise ScanError(f"无法列出目录 {path}: {exc}", path) from exc
        return iter(entries)

    @staticmethod
    def _classify(entry: os.DirEntry) -> Optional[EntryKind]:
        # 不跟随符号链接：链接、套接字等其它类型占用额度但不入库
        try:
            if entry.is_dir(follow_symlinks=False):
                return EntryKind.DIR
            if entry.is_file(follow_symlinks=False):
                return EntryKind.FILE
        except OSError as exc:
            raise ScanError(f"无法识别节点类型 {entry.path}: {exc}", entry.path) from exc
        return None

    def _persist(self, *, path: str, parent_path: str, name: str, kind: EntryKind) -> None:
        created = entry_crud.insert_ignore_duplicate(
            self.db,
            path=path,
            parent_path=parent_path,
            name=name,
            kind=kind,
        )
        if created is None:
            self.stats.duplicates += 1
        else:
            self.stats.inserted += 1


def index_directory(root_dir: str, *, limit: int = DEFAULT_SCAN_LIMIT) -> ScanStats:
    """启动阶段调用：在独立会话中完成根目录登记与整树扫描。

    任何致命错误都会向上抛出，调用方应让进程在对外服务前失败。
    """
    db = db_session.SessionLocal()
    try:
        indexer = DirectoryIndexer(db, limit=limit)
        indexer.initialize(root_dir)
        stats = indexer.scan(root_dir)
    finally:
        db.close()
    logger.info(
        "Indexed %s in %.3fs: visited=%s inserted=%s duplicates=%s skipped=%s truncated=%s",
        root_dir,
        stats.duration_ms / 1000,
        stats.visited,
        stats.inserted,
        stats.duplicates,
        stats.skipped,
        stats.truncated,
    )
    return stats


def run_startup_scan() -> ScanStats:
    """按配置的 ROOT_DIR / SCAN_LIMIT 执行一次完整扫描。"""
    settings = get_settings()
    return index_directory(str(settings.root_directory), limit=settings.scan_limit)
