"""環境変数設定"""

import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError


class EnvConfig(BaseModel):
    """環境変数設定"""

    csv_path: Path = Field(default=Path("data/urls.csv"), description="URLテーブルのCSVファイルパス")
    host: str = Field(default="0.0.0.0", description="APIサーバーのバインドアドレス")
    port: int = Field(default=5000, ge=1, le=65535, description="APIサーバーのポート番号")

    model_config = {"extra": "forbid"}


def load_env_config() -> EnvConfig:
    """環境変数からEnvConfigを読み込む

    未設定の環境変数はデフォルト値を使う。

    Returns:
        EnvConfig: 環境変数設定

    Raises:
        ValueError: 環境変数の値が不正な場合
    """
    values = {
        "csv_path": os.environ.get("URL_CSV_PATH"),
        "host": os.environ.get("HOST"),
        "port": os.environ.get("PORT"),
    }
    try:
        return EnvConfig(**{key: value for key, value in values.items() if value})
    except ValidationError as e:
        msg = f"Invalid environment variable: {e}"
        raise ValueError(msg) from e
