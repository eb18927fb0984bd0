"""ルートハンドラ用の依存関係"""

from __future__ import annotations

import asyncio
from typing import Annotated

from fastapi import Depends, Request

from url_indexation_checker.checker.batch import CheckFunc
from url_indexation_checker.config import AppConfig
from url_indexation_checker.store import CsvUrlStore


def get_store(request: Request) -> CsvUrlStore:
    return request.app.state.store


def get_lock(request: Request) -> asyncio.Lock:
    return request.app.state.lock


def get_app_config(request: Request) -> AppConfig:
    return request.app.state.config.app


def get_check_func(request: Request) -> CheckFunc:
    return request.app.state.check_func


StoreDep = Annotated[CsvUrlStore, Depends(get_store)]
LockDep = Annotated[asyncio.Lock, Depends(get_lock)]
AppConfigDep = Annotated[AppConfig, Depends(get_app_config)]
CheckFuncDep = Annotated[CheckFunc, Depends(get_check_func)]
