"""通用响应模型：与 ``create_response`` 生成的 ``{msg, data, code}`` 结构对应。"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ResponseEnvelope(BaseModel, Generic[T]):
    msg: str
    data: Optional[T] = None
    code: int
