"""統合Config クラスのテスト"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from url_indexation_checker.config import AppConfig, Config, EnvConfig, load_config


class TestConfig:
    """Configクラスのテスト"""

    def test_config_has_default_values(self) -> None:
        """Configがデフォルト値を持つこと"""
        config = Config()
        assert config.env == EnvConfig()
        assert config.app == AppConfig()

    def test_reject_unknown_fields(self) -> None:
        """未知のフィールドでエラーになること"""
        with pytest.raises(ValueError):
            Config(unknown={})  # type: ignore[call-arg]


class TestLoadConfig:
    """load_config関数のテスト"""

    def test_load_config_from_env_and_yaml(self, tmp_path: Path) -> None:
        """環境変数とYAMLファイルから設定を読み込むこと"""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("schedule_hour: 6\ntimezone: UTC\n")

        test_env = {
            "URL_CSV_PATH": str(tmp_path / "urls.csv"),
            "PORT": "8000",
        }

        with patch.dict(os.environ, test_env, clear=True), patch("url_indexation_checker.config.config.load_dotenv"):
            config = load_config(config_file)

        assert config.env.csv_path == tmp_path / "urls.csv"
        assert config.env.port == 8000
        assert config.app.schedule_hour == 6
        assert config.app.timezone == "UTC"

    def test_load_config_fails_when_yaml_not_found(self) -> None:
        """YAMLファイルが存在しない場合にエラーになること"""
        with patch("url_indexation_checker.config.config.load_dotenv"), pytest.raises(FileNotFoundError):
            load_config(Path("nonexistent.yaml"))

    def test_load_config_fails_when_env_invalid(self, tmp_path: Path) -> None:
        """環境変数の値が不正な場合にエラーになること"""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        with (
            patch.dict(os.environ, {"PORT": "not-a-port"}, clear=True),
            patch("url_indexation_checker.config.config.load_dotenv"),
            pytest.raises(ValueError, match="Invalid environment variable"),
        ):
            load_config(config_file)
