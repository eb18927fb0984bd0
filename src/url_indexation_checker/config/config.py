"""統合Config クラス"""

from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from url_indexation_checker.config.app import AppConfig, load_app_config
from url_indexation_checker.config.env import EnvConfig, load_env_config


class Config(BaseModel):
    """統合設定クラス（環境変数 + アプリケーション設定）"""

    # 環境変数由来
    env: EnvConfig = Field(default_factory=EnvConfig)

    # config.yaml由来
    app: AppConfig = Field(default_factory=AppConfig)

    model_config = {"extra": "forbid"}


def load_config(config_path: Path) -> Config:
    """環境変数とYAMLファイルから統合設定を読み込む

    Args:
        config_path: YAMLファイルのパス

    Returns:
        Config: 統合設定

    Raises:
        ValueError: 環境変数やYAMLの値が不正な場合
        FileNotFoundError: YAMLファイルが存在しない場合
    """
    # .envファイルを読み込み
    load_dotenv()

    return Config(env=load_env_config(), app=load_app_config(config_path))
