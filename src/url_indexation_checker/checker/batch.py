"""複数URLの逐次チェック"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from url_indexation_checker.checker.classifier import IndexationResult, check_indexation
from url_indexation_checker.store.models import IndexationStatus, UrlRecord

logger = logging.getLogger(__name__)

CheckFunc = Callable[[str], Awaitable[IndexationResult]]

_DEFAULT_INTERVAL_SECONDS = 0.5


@dataclass(frozen=True)
class CheckResult:
    """check_manyの1件分の結果"""

    url: str
    status: IndexationStatus
    notes: str


async def check_many(
    urls: Sequence[UrlRecord | str],
    check_func: CheckFunc = check_indexation,
    interval_seconds: float = _DEFAULT_INTERVAL_SECONDS,
) -> list[CheckResult]:
    """URLを入力順に1件ずつチェックする。

    並列化はしない。各チェックの後（最後の1件の後も）interval_seconds待機する。
    check_funcは例外を送出しない前提のため、途中失敗の個別処理は行わない。

    Args:
        urls: UrlRecordまたはURL文字列の列
        check_func: 1件をチェックする関数（デフォルトはcheck_indexation）
        interval_seconds: リクエスト間の待機秒数

    Returns:
        list[CheckResult]: 入力と同じ長さ・同じ順序の結果
    """
    results: list[CheckResult] = []
    for item in urls:
        url = item.url if isinstance(item, UrlRecord) else item
        logger.info("Checking: %s", url)
        result = await check_func(url)
        results.append(CheckResult(url=url, status=result.status, notes=result.notes))
        await asyncio.sleep(interval_seconds)
    return results
