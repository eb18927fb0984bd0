"""FastAPIアプリケーションの組み立て"""

from __future__ import annotations

import asyncio
import csv
import functools
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.middleware.cors import CORSMiddleware

from url_indexation_checker import worker
from url_indexation_checker.api.routes import router
from url_indexation_checker.api.schemas import ErrorResponse, HealthResponse
from url_indexation_checker.checker import check_indexation
from url_indexation_checker.checker.batch import CheckFunc
from url_indexation_checker.config import Config
from url_indexation_checker.store import CsvUrlStore, UploadError

logger = logging.getLogger(__name__)


async def _upload_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=400, content=ErrorResponse(message=str(exc)).model_dump())


async def _storage_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Storage error on %s %s: %r", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(message=f"Storage error: {exc}").model_dump(),
    )


def create_app(
    config: Config,
    store: CsvUrlStore | None = None,
    check_func: CheckFunc | None = None,
    start_scheduler: bool = True,
) -> FastAPI:
    """設定からFastAPIアプリケーションを作成する

    Args:
        config: 統合設定
        store: URLテーブル（Noneなら設定のCSVパスから作成）
        check_func: 1件をチェックする関数（Noneなら設定のタイムアウトでcheck_indexation）
        start_scheduler: Trueならlifespan中に日次スケジューラを起動する

    Returns:
        FastAPI: アプリケーション
    """
    app_config = config.app
    if store is None:
        store = CsvUrlStore(config.env.csv_path, timezone=app_config.timezone)
    if check_func is None:
        check_func = functools.partial(
            check_indexation,
            timeout_seconds=app_config.request_timeout,
            max_redirects=app_config.max_redirects,
        )
    lock = asyncio.Lock()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # 起動：日次スケジューラをバックグラウンドで開始
        task: asyncio.Task[None] | None = None
        if start_scheduler:
            task = asyncio.create_task(
                worker.run(
                    store=store,
                    lock=lock,
                    schedule_hour=app_config.schedule_hour,
                    schedule_minute=app_config.schedule_minute,
                    timezone=app_config.timezone,
                    check_func=check_func,
                    interval_seconds=app_config.check_interval,
                    run_on_startup=app_config.run_on_startup,
                )
            )
        yield
        # 終了：スケジューラを停止
        if task is not None:
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task

    app = FastAPI(title="URL Indexation Checker", lifespan=lifespan)
    app.state.config = config
    app.state.store = store
    app.state.lock = lock
    app.state.check_func = check_func

    if app_config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=app_config.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(UploadError, _upload_error_handler)
    app.add_exception_handler(OSError, _storage_error_handler)
    app.add_exception_handler(csv.Error, _storage_error_handler)
    # テーブル内の未知のステータス
    app.add_exception_handler(ValidationError, _storage_error_handler)

    app.include_router(router, prefix=f"{app_config.api_prefix}/urls", tags=["urls"])

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse()

    return app
