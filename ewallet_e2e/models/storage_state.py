"""浏览器登录态快照模型。"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StorageState(BaseModel):
    """Playwright storage state（cookies + 各 origin 的 localStorage）。

    结构由 Playwright 定义，这里只约束两个顶层列表，其余字段原样保留。
    """

    model_config = ConfigDict(extra="allow")

    cookies: list[dict[str, Any]] = Field(default_factory=list)
    origins: list[dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StorageState:
        return cls.model_validate(data)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    @property
    def cookie_count(self) -> int:
        return len(self.cookies)

    @property
    def local_storage_count(self) -> int:
        return sum(len(origin.get("localStorage", [])) for origin in self.origins)
