"""异常处理模块：定义统一的业务异常与响应格式。"""

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class AppException(HTTPException):
    """携带统一响应结构的业务异常，方便在全局处理中转换响应体。"""

    def __init__(self, msg: str, code: int = status.HTTP_400_BAD_REQUEST, data=None) -> None:
        super().__init__(status_code=code, detail=msg)
        self.data = data


class ContentResolveError(AppException):
    """静态资源解析失败（如请求路径与前缀不匹配），按 500 返回。"""

    def __init__(self, msg: str, data=None) -> None:
        super().__init__(msg, status.HTTP_500_INTERNAL_SERVER_ERROR, data)


class ContentNotFound(AppException):
    """待提供的文件在根目录下不存在，按 404 返回。"""

    def __init__(self, path: str) -> None:
        super().__init__("文件不存在", status.HTTP_404_NOT_FOUND, {"path": path})


class ScanError(RuntimeError):
    """目录扫描过程中的致命错误：列目录失败或遇到无法编码的路径。

    该异常会中止整次扫描，并在启动阶段向上抛出，阻止服务在索引不完整时对外提供访问。
    """

    def __init__(self, msg: str, path: str | None = None) -> None:
        super().__init__(msg)
        self.path = path


_DEFAULT_MESSAGES = {
    status.HTTP_404_NOT_FOUND: "资源不存在",
    status.HTTP_405_METHOD_NOT_ALLOWED: "请求方法不被允许",
}


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:  # pragma: no cover - framework glue
    """将 Starlette/FastAPI 的 ``HTTPException`` 转换为统一响应格式。"""
    detail = exc.detail
    if isinstance(exc, AppException):
        msg = detail
    else:
        msg = _DEFAULT_MESSAGES.get(exc.status_code, detail)
    payload = {"msg": msg, "data": getattr(exc, "data", None), "code": exc.status_code}
    return JSONResponse(status_code=exc.status_code, content=payload, headers=getattr(exc, "headers", None))


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # pragma: no cover - framework glue
    """兜底处理：将未捕获异常转换为标准的 500 响应结构。"""
    payload = {
        "msg": "服务器内部错误",
        "data": None,
        "code": status.HTTP_500_INTERNAL_SERVER_ERROR,
    }
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)
