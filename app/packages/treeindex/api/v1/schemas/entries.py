"""文件系统节点的响应模型。"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.packages.treeindex.api.v1.schemas.common import ResponseEnvelope


class EntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    path: str
    parent_path: str
    name: str
    kind: Literal["file", "dir"]


class EntryPage(BaseModel):
    total: int
    skip: int = Field(ge=0)
    limit: int = Field(ge=1)
    items: list[EntryOut]


EntryPageResponse = ResponseEnvelope[EntryPage]
EntryDetailResponse = ResponseEnvelope[EntryOut]
