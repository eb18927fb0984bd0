"""HTTPプローブによるインデックス状況の判定モジュール

実際の検索エンジンのインデックスは確認しない。
URLにGETリクエストを送り、レスポンスや通信エラーの種類から
Indexed / Not Indexed / Invalid URL の3種類に分類する。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import aiohttp

from url_indexation_checker.checker.url_validator import is_valid_url
from url_indexation_checker.store.models import IndexationStatus

logger = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0 (compatible; URL-Indexation-Checker/1.0)"

_DEFAULT_TIMEOUT_SECONDS = 10.0
_DEFAULT_MAX_REDIRECTS = 5
# 想定外エラーのメッセージをnotesに残す最大文字数
_ERROR_MESSAGE_LIMIT = 50


@dataclass(frozen=True)
class IndexationResult:
    """1件のURLの判定結果"""

    status: IndexationStatus
    notes: str


class ServerErrorResponse(Exception):
    """5xxレスポンスをリクエスト失敗として扱うための例外"""

    def __init__(self, status: int) -> None:
        super().__init__(f"Request failed with status code {status}")
        self.status = status


def classify_status_code(status: int) -> IndexationResult:
    """500未満のHTTPステータスコードを判定結果に変換する。

    判定の優先順位は 200 → 404 → 403 → その他の4xx → それ以外。
    """
    if status == 200:
        return IndexationResult(IndexationStatus.INDEXED, f"HTTP {status} - Page accessible")
    if status == 404:
        return IndexationResult(IndexationStatus.NOT_INDEXED, "HTTP 404 - Page not found")
    if status == 403:
        return IndexationResult(IndexationStatus.NOT_INDEXED, "HTTP 403 - Access forbidden")
    if status >= 400:
        return IndexationResult(IndexationStatus.NOT_INDEXED, f"HTTP {status} - Client error")
    return IndexationResult(IndexationStatus.NOT_INDEXED, f"HTTP {status} - Unusual status")


def classify_error(error: BaseException) -> IndexationResult:
    """通信時の例外を判定結果に変換する。"""
    # ClientConnectorDNSErrorはClientConnectorErrorのサブクラスなので先に判定する
    if isinstance(error, aiohttp.ClientConnectorDNSError):
        return IndexationResult(IndexationStatus.INVALID_URL, "DNS not found - Domain does not exist")
    if isinstance(error, TimeoutError):
        return IndexationResult(IndexationStatus.NOT_INDEXED, "Connection timeout")
    if isinstance(error, aiohttp.ClientConnectorError) and isinstance(error.os_error, ConnectionRefusedError):
        return IndexationResult(IndexationStatus.INVALID_URL, "Connection refused")
    if isinstance(error, aiohttp.InvalidURL):
        return IndexationResult(IndexationStatus.INVALID_URL, "Malformed URL")
    message = str(error) or type(error).__name__
    return IndexationResult(IndexationStatus.NOT_INDEXED, f"Error: {message[:_ERROR_MESSAGE_LIMIT]}")


async def check_indexation(
    url: str,
    timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS,
    max_redirects: int = _DEFAULT_MAX_REDIRECTS,
) -> IndexationResult:
    """URLにHTTP GETを送り、インデックス状況を判定する。

    リトライはしない。URL形式が不正な場合は通信せずにInvalid URLを返す。
    通信エラーはすべて判定結果に変換されるため、この関数は例外を送出しない。

    Args:
        url: チェック対象のURL（ユーザー入力のまま）
        timeout_seconds: リクエスト全体のタイムアウト秒数
        max_redirects: 追従するリダイレクトの最大回数

    Returns:
        IndexationResult: ステータスと補足メモ
    """
    if not is_valid_url(url):
        return IndexationResult(IndexationStatus.INVALID_URL, "Invalid URL format")

    timeout = aiohttp.ClientTimeout(total=timeout_seconds)
    headers = {"User-Agent": USER_AGENT}
    # aiohttpは履歴がmax_redirectsに達した時点でTooManyRedirectsを送出し、0は無制限を意味する
    try:
        async with aiohttp.ClientSession() as session, session.get(
            url,
            allow_redirects=max_redirects > 0,
            max_redirects=max_redirects + 1,
            timeout=timeout,
            headers=headers,
        ) as response:
            if response.status >= 500:
                raise ServerErrorResponse(response.status)
            return classify_status_code(response.status)
    except Exception as e:
        logger.debug("Indexation check failed for %s: %r", url, e)
        return classify_error(e)
