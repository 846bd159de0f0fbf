"""常量定义：集中维护状态码与扫描相关的固定值。"""

HTTP_STATUS_OK = 200
HTTP_STATUS_NOT_FOUND = 404

# 扫描起点在 parent_path / name 两列上使用的占位值
ROOT_SENTINEL = "root"

# 单次扫描最多记录的条目数（不含根目录）
DEFAULT_SCAN_LIMIT = 6000

# 字面路径未命中时追加的后缀
HTML_SUFFIX = ".html"
