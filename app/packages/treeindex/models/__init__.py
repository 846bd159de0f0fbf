"""模型包初始化，便于统一导入 ORM 实体并触发模型注册。"""

from app.packages.treeindex.models.entry import Entry

__all__ = ["Entry"]
