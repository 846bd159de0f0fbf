"""文件系统节点模型：扫描过程中发现的每个文件或目录对应一行。

存储规则：
- path：绝对路径，全表唯一，是事实上的自然键；
- parent_path：所在目录的绝对路径；扫描起点使用占位值 "root"；
- name：基名；扫描起点同样记为 "root"；
- kind：file 或 dir。

表只追加：同一 path 的重复写入被视为已索引，不更新也不删除。
"""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.packages.treeindex.models.base import Base


class Entry(Base):
    __tablename__ = "files"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    path: Mapped[str] = mapped_column(String(4096), nullable=False)
    parent_path: Mapped[str] = mapped_column(String(4096), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 取值见 EntryKind
    kind: Mapped[str] = mapped_column(String(8), index=True, nullable=False)

    __table_args__ = (
        UniqueConstraint("path", name="uq_files_path"),
    )
