"""枚举定义：约束文件系统节点的类型取值。"""

from enum import Enum


class EntryKind(str, Enum):
    FILE = "file"
    DIR = "dir"
