"""アプリケーション設定"""

from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator


class AppConfig(BaseModel):
    """アプリケーション設定"""

    schedule_hour: int = Field(default=9, ge=0, le=23, description="日次チェックの実行時刻（時）")
    schedule_minute: int = Field(default=0, ge=0, le=59, description="日次チェックの実行時刻（分）")
    timezone: str = Field(default="Asia/Kolkata", description="実行時刻と日時表示のタイムゾーン")
    request_timeout: float = Field(default=10.0, gt=0, description="1リクエストのタイムアウト（秒）")
    max_redirects: int = Field(default=5, ge=0, description="追従するリダイレクトの最大回数")
    check_interval: float = Field(default=0.5, ge=0, description="リクエスト間の待機時間（秒）")
    max_upload_urls: int = Field(default=1000, gt=0, description="アップロードで受け付ける最大URL件数")
    max_upload_bytes: int = Field(default=5 * 1024 * 1024, gt=0, description="アップロードファイルの最大サイズ")
    run_on_startup: bool = Field(default=False, description="起動直後にチェックを1回実行するか")
    api_prefix: str = Field(default="/api", description="APIルートのプレフィックス")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"], description="CORSを許可するオリジン")

    model_config = {"extra": "forbid"}

    @field_validator("timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            msg = f"Unknown timezone: {value}"
            raise ValueError(msg) from e
        return value


def load_app_config(config_path: Path) -> AppConfig:
    """YAMLファイルからAppConfigを読み込む

    Args:
        config_path: 設定ファイルのパス

    Returns:
        AppConfig: アプリケーション設定（空ファイルの場合はデフォルト値）

    Raises:
        FileNotFoundError: 設定ファイルが存在しない場合
        ValueError: 設定ファイルが不正な場合
    """
    if not config_path.exists():
        msg = f"Config file not found: {config_path}"
        raise FileNotFoundError(msg)

    try:
        with config_path.open() as f:
            data = yaml.safe_load(f)
            if data is None:
                data = {}
            return AppConfig(**data)
    except yaml.YAMLError as e:
        msg = f"Invalid YAML file: {e}"
        raise ValueError(msg) from e
    except ValidationError as e:
        msg = f"Invalid configuration: {e}"
        raise ValueError(msg) from e
