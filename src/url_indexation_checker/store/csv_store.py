"""CSVファイルを使ったURLテーブル"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from url_indexation_checker.store.csv_codec import read_records, write_records
from url_indexation_checker.store.models import IndexationStatus, UrlRecord, format_timestamp
from url_indexation_checker.store.seed import build_seed_records

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "Asia/Kolkata"


class CsvUrlStore:
    """URLレコードを1つのCSVファイルに保持するストア

    行の順序は読み書きを通して保たれる。urlの重複は許容する。
    I/Oエラー（OSError, csv.Error）は変換せずにそのまま呼び出し元へ送出する。
    排他制御は行わないため、呼び出し側で書き込みを直列化すること。
    """

    def __init__(self, path: Path, timezone: str = DEFAULT_TIMEZONE) -> None:
        self._path = path
        self._timezone = timezone

    @property
    def path(self) -> Path:
        return self._path

    def read_all(self) -> list[UrlRecord]:
        """全レコードを読み込む。ファイルがなければ初期データを書き込んでから読む。"""
        if not self._path.exists():
            self.write_all(build_seed_records())
            logger.info("Sample data created in %s", self._path)

        # 手作業で編集された表にExcelが付けるBOMを除去する
        with self._path.open(newline="", encoding="utf-8-sig") as f:
            return read_records(f)

    def write_all(self, records: Sequence[UrlRecord]) -> None:
        """テーブル全体をrecordsで置き換える。

        一時ファイルに書き出してから置き換えるため、途中で失敗しても既存の内容は残る。
        """
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", newline="", encoding="utf-8") as f:
                write_records(f, records)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def update_one(
        self,
        url: str,
        status: IndexationStatus,
        notes: str = "",
        now: datetime | None = None,
    ) -> list[UrlRecord]:
        """urlが一致する全レコードのstatus/notes/最終チェック日時を更新して保存する。

        Args:
            url: 更新対象のURL（完全一致）
            status: 新しいステータス
            notes: 新しいメモ
            now: 最終チェック日時（Noneなら現在時刻）

        Returns:
            list[UrlRecord]: 更新後の全レコード
        """
        checked_at = format_timestamp(now or datetime.now(UTC), self._timezone)
        records = [
            record.model_copy(update={"status": status, "last_checked": checked_at, "notes": notes})
            if record.url == url
            else record
            for record in self.read_all()
        ]
        self.write_all(records)
        return records
