"""APIのリクエスト/レスポンスモデル"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from url_indexation_checker.store import UrlRecord


class UrlListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[UrlRecord]


class CheckResponse(BaseModel):
    success: bool = True
    message: str
    timestamp: str | None = None
    data: list[UrlRecord]


class CheckOneRequest(BaseModel):
    url: str


class CheckOneResponse(BaseModel):
    success: bool = True
    message: str
    data: list[UrlRecord]  # 更新されたレコード（URL重複時は複数）


class StatusStats(BaseModel):
    """ステータス別の件数と最終チェック日時"""

    model_config = ConfigDict(populate_by_name=True)

    total: int
    indexed: int
    not_indexed: int = Field(alias="notIndexed")
    invalid: int
    pending: int
    last_check: str = Field(alias="lastCheck")


class StatusResponse(BaseModel):
    success: bool = True
    stats: StatusStats


class UploadResponse(BaseModel):
    success: bool = True
    message: str
    count: int
    data: list[UrlRecord]


class ErrorResponse(BaseModel):
    success: bool = False
    message: str


class HealthResponse(BaseModel):
    status: str = "OK"
    message: str = "Server is running"
