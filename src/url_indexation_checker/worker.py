"""チェックサイクルと日次スケジューラ"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

from url_indexation_checker.checker import check_indexation, check_many
from url_indexation_checker.checker.batch import CheckFunc
from url_indexation_checker.store import CsvUrlStore, IndexationStatus, UrlRecord, format_timestamp

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass
class CheckCycleResult:
    """run_check_cycleの結果"""

    records: list[UrlRecord] = field(default_factory=list)
    checked_at: str | None = None  # テーブルが空の場合はNone

    @property
    def indexed_count(self) -> int:
        return sum(1 for r in self.records if r.status == IndexationStatus.INDEXED)

    @property
    def not_indexed_count(self) -> int:
        return sum(1 for r in self.records if r.status == IndexationStatus.NOT_INDEXED)

    @property
    def invalid_count(self) -> int:
        return sum(1 for r in self.records if r.status == IndexationStatus.INVALID_URL)


async def run_check_cycle(
    store: CsvUrlStore,
    lock: asyncio.Lock,
    timezone: str,
    check_func: CheckFunc = check_indexation,
    interval_seconds: float = 0.5,
    clock: Clock = _utcnow,
) -> CheckCycleResult:
    """全URLを読み込み、チェックして、テーブル全体を書き戻す。

    手動実行と日次実行はどちらもこの関数を呼ぶ。
    lockを保持している間だけテーブルを読み書きするため、サイクル同士が書き込みを奪い合うことはない。
    書き込みは全件のチェック完了後に1回だけ行うため、途中で例外が起きた場合テーブルは元のまま残る。

    Args:
        store: URLテーブル
        lock: テーブルの読み書きを直列化するロック
        timezone: 最終チェック日時の表示に使うタイムゾーン
        check_func: 1件をチェックする関数
        interval_seconds: リクエスト間の待機秒数
        clock: 現在時刻を返す関数

    Returns:
        CheckCycleResult: 更新後のレコードとチェック日時

    Raises:
        OSError: テーブルの読み書きに失敗した場合
    """
    async with lock:
        urls = await asyncio.to_thread(store.read_all)
        if not urls:
            logger.warning("No URLs to check")
            return CheckCycleResult()

        logger.info("Checking %d URLs...", len(urls))
        results = await check_many(urls, check_func=check_func, interval_seconds=interval_seconds)

        checked_at = format_timestamp(clock(), timezone)
        updated = [
            UrlRecord(url=record.url, status=result.status, last_checked=checked_at, notes=result.notes)
            for record, result in zip(urls, results, strict=True)
        ]
        await asyncio.to_thread(store.write_all, updated)

    cycle = CheckCycleResult(records=updated, checked_at=checked_at)
    logger.info(
        "Results: %d Indexed | %d Not Indexed | %d Invalid",
        cycle.indexed_count,
        cycle.not_indexed_count,
        cycle.invalid_count,
    )
    return cycle


def _next_run_at(now: datetime, hour: int, minute: int, timezone: str) -> datetime:
    """nowより後で最初に来る実行時刻（timezoneでのhour:minute）を返す。

    ちょうど実行時刻の場合は翌日の同時刻を返す。
    """
    local_now = now.astimezone(ZoneInfo(timezone))
    next_run = local_now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if next_run <= local_now:
        next_run += timedelta(days=1)
    return next_run


def seconds_until_next_run(
    now: datetime,
    hour: int,
    minute: int,
    timezone: str,
    not_before: datetime | None = None,
) -> float:
    """次の実行時刻までの秒数を返す。

    not_beforeを指定した場合は、nowがそれより前でもnot_beforeより後の実行時刻を対象にする。
    """
    base = now if not_before is None or now >= not_before else not_before
    next_run = _next_run_at(base, hour, minute, timezone)
    # 同じtzinfo同士の引き算は壁時計の差になるため、UTCに揃えてから差を取る
    return (next_run.astimezone(UTC) - now.astimezone(UTC)).total_seconds()


async def run(
    store: CsvUrlStore,
    lock: asyncio.Lock,
    schedule_hour: int,
    schedule_minute: int,
    timezone: str,
    check_func: CheckFunc = check_indexation,
    interval_seconds: float = 0.5,
    run_on_startup: bool = False,
    clock: Clock = _utcnow,
) -> None:
    """毎日決まった時刻にチェックサイクルを実行するループ。

    プロセスが停止していた間の実行は取り戻さない（その日の実行はスキップされる）。
    サイクル中の例外はログに残してループを継続する。

    Args:
        store: URLテーブル
        lock: テーブルの読み書きを直列化するロック
        schedule_hour: 実行時刻（時）
        schedule_minute: 実行時刻（分）
        timezone: 実行時刻を解釈するタイムゾーン
        check_func: 1件をチェックする関数
        interval_seconds: リクエスト間の待機秒数
        run_on_startup: Trueなら起動直後に1回実行する
        clock: 現在時刻を返す関数
    """
    logger.info(
        "スケジューラ開始: %02d:%02d (%s) に毎日実行",
        schedule_hour,
        schedule_minute,
        timezone,
    )

    async def _run_once() -> None:
        logger.info("Scheduled indexation check started at: %s", format_timestamp(clock(), timezone))
        try:
            await run_check_cycle(
                store=store,
                lock=lock,
                timezone=timezone,
                check_func=check_func,
                interval_seconds=interval_seconds,
                clock=clock,
            )
        except Exception:
            logger.exception("Error during scheduled check")

    try:
        if run_on_startup:
            await _run_once()
        last_run: datetime | None = None
        while True:
            now = clock()
            # sleepが実行時刻より早く戻っても、同じ実行時刻で二度実行しない
            delay = seconds_until_next_run(now, schedule_hour, schedule_minute, timezone, not_before=last_run)
            logger.info("次回実行まで%.0f秒", delay)
            await asyncio.sleep(delay)
            last_run = now + timedelta(seconds=delay)
            await _run_once()
    except asyncio.CancelledError:
        logger.info("スケジューラがキャンセルされました")
        raise
    finally:
        logger.info("スケジューラ終了")
