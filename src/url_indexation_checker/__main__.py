import asyncio
import logging
from pathlib import Path

import uvicorn

from url_indexation_checker.api import create_app
from url_indexation_checker.config import load_config

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def main() -> None:
    """アプリケーションのエントリーポイント"""
    # 統合設定を読み込み
    config = load_config(Path("config.yaml"))
    logger.info(
        "Config loaded: csv_path=%s, schedule=%02d:%02d %s",
        config.env.csv_path,
        config.app.schedule_hour,
        config.app.schedule_minute,
        config.app.timezone,
    )

    # APIサーバーを起動（日次スケジューラはlifespan内で起動する）
    app = create_app(config)
    server = uvicorn.Server(uvicorn.Config(app, host=config.env.host, port=config.env.port))
    logger.info("Server running on http://%s:%d", config.env.host, config.env.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Application stopped")
