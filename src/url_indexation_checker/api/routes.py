"""URLテーブル操作のAPIルート"""

import asyncio
import logging
import time
from typing import Any

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.responses import Response

from url_indexation_checker.api.deps import AppConfigDep, CheckFuncDep, LockDep, StoreDep
from url_indexation_checker.api.schemas import (
    CheckOneRequest,
    CheckOneResponse,
    CheckResponse,
    StatusResponse,
    StatusStats,
    UploadResponse,
    UrlListResponse,
)
from url_indexation_checker.store import (
    NOT_YET_CHECKED,
    IndexationStatus,
    MissingUploadError,
    parse_upload,
    serialize_records,
)
from url_indexation_checker.worker import run_check_cycle

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=UrlListResponse)
async def get_all_urls(store: StoreDep) -> Any:
    """全URLを返す"""
    records = await asyncio.to_thread(store.read_all)
    return UrlListResponse(count=len(records), data=records)


@router.post("/check", response_model=CheckResponse)
async def check_all_urls(
    store: StoreDep,
    lock: LockDep,
    app_config: AppConfigDep,
    check_func: CheckFuncDep,
) -> Any:
    """全URLのインデックス状況チェックを同期的に実行する"""
    logger.info("Manual indexation check started")
    cycle = await run_check_cycle(
        store=store,
        lock=lock,
        timezone=app_config.timezone,
        check_func=check_func,
        interval_seconds=app_config.check_interval,
    )
    if not cycle.records:
        return CheckResponse(
            message="No URLs to check. Please upload a CSV file with URLs first.",
            data=[],
        )

    logger.info("Indexation check completed")
    return CheckResponse(
        message="Indexation check completed successfully",
        timestamp=cycle.checked_at,
        data=cycle.records,
    )


@router.post("/check-one", response_model=CheckOneResponse)
async def check_one_url(
    body: CheckOneRequest,
    store: StoreDep,
    lock: LockDep,
    check_func: CheckFuncDep,
) -> Any:
    """1件のURLをチェックし、一致するレコードを更新する"""
    async with lock:
        records = await asyncio.to_thread(store.read_all)
        if not any(record.url == body.url for record in records):
            raise HTTPException(status_code=404, detail="URL not found")

        result = await check_func(body.url)
        updated = await asyncio.to_thread(store.update_one, body.url, result.status, result.notes)

    matched = [record for record in updated if record.url == body.url]
    return CheckOneResponse(
        message=f"{body.url}: {result.status.value}",
        data=matched,
    )


@router.get("/status", response_model=StatusResponse)
async def get_check_status(store: StoreDep) -> Any:
    """ステータス別の件数と最終チェック日時を返す"""
    records = await asyncio.to_thread(store.read_all)

    def count(status: IndexationStatus) -> int:
        return sum(1 for record in records if record.status == status)

    last_check = "Never"
    if records and records[0].last_checked != NOT_YET_CHECKED:
        last_check = records[0].last_checked

    stats = StatusStats(
        total=len(records),
        indexed=count(IndexationStatus.INDEXED),
        not_indexed=count(IndexationStatus.NOT_INDEXED),
        invalid=count(IndexationStatus.INVALID_URL),
        pending=count(IndexationStatus.PENDING),
        last_check=last_check,
    )
    return StatusResponse(stats=stats)


@router.post("/upload", response_model=UploadResponse)
async def upload_csv(
    store: StoreDep,
    lock: LockDep,
    app_config: AppConfigDep,
    csv_file: UploadFile | None = File(None, alias="csvFile"),
) -> Any:
    """アップロードされたCSVでテーブル全体を置き換える

    UploadErrorはアプリケーションの例外ハンドラで400に変換される。
    """
    if csv_file is None:
        raise MissingUploadError("No file uploaded. Please upload a CSV file.")
    logger.info("Processing uploaded CSV file: %s", csv_file.filename)
    # 上限+1バイトまで読めばサイズ超過を判定できる
    content = await csv_file.read(app_config.max_upload_bytes + 1)
    records = parse_upload(
        csv_file.filename,
        content,
        max_urls=app_config.max_upload_urls,
        max_bytes=app_config.max_upload_bytes,
    )

    async with lock:
        await asyncio.to_thread(store.write_all, records)

    logger.info("Successfully imported %d URLs from CSV", len(records))
    return UploadResponse(
        message=f"Successfully imported {len(records)} URLs. Run a check to see their indexation status.",
        count=len(records),
        data=records,
    )


@router.get("/download")
async def download_csv(store: StoreDep) -> Response:
    """現在のテーブルを全フィールドをクォートしたCSVで返す"""
    records = await asyncio.to_thread(store.read_all)
    filename = f"url-indexation-report-{int(time.time() * 1000)}.csv"
    return Response(
        content=serialize_records(records),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
