"""静态资源解析：把 ``/static/...`` 请求映射到根目录下的文件。

先按字面路径查找；未命中时追加 ``.html`` 再查一次（``/about`` -> ``about.html``），
之后不再有其它回退（不处理 ``/dir/`` -> ``/dir/index.html``）。
"""

from __future__ import annotations

import os

from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

from app.packages.treeindex.core.constants import HTML_SUFFIX, HTTP_STATUS_NOT_FOUND
from app.packages.treeindex.core.exceptions import ContentNotFound, ContentResolveError
from app.packages.treeindex.core.logger import logger


def strip_serving_prefix(request_path: str, prefix: str) -> str:
    """按路径段去掉服务前缀，返回相对路径（不含开头的 '/'）。

    ``/static/css/app.css`` + ``/static`` -> ``css/app.css``；
    ``/staticx/a`` 不视为以 ``/static`` 开头。
    """
    if not request_path.startswith("/"):
        raise ContentResolveError(f"请求路径 {request_path!r} 不是绝对路径")
    request_parts = [part for part in request_path.split("/") if part]
    prefix_parts = [part for part in prefix.split("/") if part]
    if request_parts[: len(prefix_parts)] != prefix_parts:
        raise ContentResolveError(
            f"请求路径 {request_path!r} 不以服务前缀 {prefix!r} 开头",
            {"path": request_path, "prefix": prefix},
        )
    return "/".join(request_parts[len(prefix_parts):])


def anchor(relative: str) -> str:
    """补回开头的 '/'，并拒绝无法作为请求路径的结果。"""
    anchored = f"/{relative}"
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in anchored):
        raise ContentResolveError("Invalid path", {"path": anchored})
    return anchored


class StaticServer:
    """文件服务协作者：对 Starlette ``StaticFiles`` 的薄封装。

    未找到时抛出 :class:`ContentNotFound`，底层读取错误统一转为 :class:`ContentResolveError`。
    """

    def __init__(self, directory: str) -> None:
        self.directory = directory
        self._files = StaticFiles(directory=directory, check_dir=False)

    async def serve(self, path: str, scope: Scope) -> Response:
        # 与 StaticFiles.get_path 相同的规范化：得到相对根目录的路径
        relative = os.path.normpath(os.path.join(*path.split("/")))
        try:
            return await self._files.get_response(relative, scope)
        except StarletteHTTPException as exc:
            if exc.status_code == HTTP_STATUS_NOT_FOUND:
                raise ContentNotFound(path) from exc
            raise ContentResolveError(f"Something went wrong: {exc.detail}", {"path": path}) from exc
        except (OSError, ValueError) as exc:
            raise ContentResolveError(f"Something went wrong: {exc}", {"path": path}) from exc


class ContentResolver:
    """无状态的请求路径解析器，每个请求独立调用，无需同步。"""

    def __init__(self, server: StaticServer, *, prefix: str) -> None:
        self.server = server
        self.prefix = prefix

    async def resolve(self, request_path: str, scope: Scope) -> Response:
        target = anchor(strip_serving_prefix(request_path, self.prefix))
        try:
            return await self.server.serve(target, scope)
        except ContentNotFound:
            logger.debug("Static %s not found, retrying with %s suffix", target, HTML_SUFFIX)
        return await self.server.serve(f"{target}{HTML_SUFFIX}", scope)
