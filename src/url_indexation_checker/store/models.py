"""URLテーブルのレコード定義"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field

NOT_YET_CHECKED = "Not yet checked"


class IndexationStatus(StrEnum):
    """インデックス状況のラベル"""

    PENDING = "Pending"
    INDEXED = "Indexed"
    NOT_INDEXED = "Not Indexed"
    INVALID_URL = "Invalid URL"


class UrlRecord(BaseModel):
    """URLテーブルの1行

    urlはユーザーが入力したままの文字列で、正規化はしない。
    JSONではlast_checkedをlastCheckedとして出力する。
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str
    status: IndexationStatus = IndexationStatus.PENDING
    last_checked: str = Field(default=NOT_YET_CHECKED, alias="lastChecked")
    notes: str = ""


def format_timestamp(now: datetime, timezone: str) -> str:
    """日時をen-IN形式（例: 19/10/2026, 9:00:00 am）の文字列にする"""
    local = now.astimezone(ZoneInfo(timezone))
    hour = local.hour % 12 or 12
    meridiem = "am" if local.hour < 12 else "pm"
    return f"{local:%d/%m/%Y}, {hour}:{local:%M:%S} {meridiem}"
