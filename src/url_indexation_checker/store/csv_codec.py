"""CSVとUrlRecordの相互変換"""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Mapping
from pathlib import PurePath
from typing import TextIO

from url_indexation_checker.store.exceptions import (
    InvalidCsvError,
    NoUrlsFoundError,
    TooManyUrlsError,
    UnsupportedFileTypeError,
    UploadTooLargeError,
)
from url_indexation_checker.store.models import NOT_YET_CHECKED, IndexationStatus, UrlRecord

CSV_HEADER = ("URL", "Status", "Last Checked Date", "Notes")

# アップロード時に許容するURL列名（先に見つかったものを使う）
UPLOAD_URL_COLUMNS = ("URL", "url", "Url", "link", "Link")


def _first_value(row: Mapping[str, str | None], *keys: str) -> str:
    for key in keys:
        value = row.get(key)
        if value:
            return value
    return ""


def row_to_record(row: Mapping[str, str | None]) -> UrlRecord:
    """CSVの1行をUrlRecordに変換する。空の任意列はデフォルト値で埋める。"""
    return UrlRecord(
        url=_first_value(row, "URL", "url"),
        status=_first_value(row, "Status", "status") or IndexationStatus.PENDING,
        last_checked=_first_value(row, "Last Checked Date", "lastChecked") or NOT_YET_CHECKED,
        notes=_first_value(row, "Notes", "notes"),
    )


def record_to_row(record: UrlRecord) -> tuple[str, str, str, str]:
    return (record.url, record.status.value, record.last_checked, record.notes)


def read_records(stream: Iterable[str]) -> list[UrlRecord]:
    """CSVストリームからレコードを行順に読み込む"""
    return [row_to_record(row) for row in csv.DictReader(stream)]


def write_records(stream: TextIO, records: Iterable[UrlRecord], *, quote_all: bool = False) -> None:
    """ヘッダー付きでレコードをCSVとして書き出す

    quote_allがFalseの場合はカンマや引用符を含む値のみクォートする。
    """
    writer = csv.writer(stream, quoting=csv.QUOTE_ALL if quote_all else csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    writer.writerows(record_to_row(record) for record in records)


def serialize_records(records: Iterable[UrlRecord]) -> str:
    """ダウンロード用に全フィールドをクォートしたCSV文字列を返す"""
    buffer = io.StringIO()
    write_records(buffer, records, quote_all=True)
    return buffer.getvalue()


def parse_upload(filename: str | None, content: bytes, *, max_urls: int, max_bytes: int) -> list[UrlRecord]:
    """アップロードされたCSVからPendingのレコード一覧を作る。

    URL列はURL/url/Url/link/Linkのいずれかを受け付け、前後の空白を除去する。
    空の値は読み飛ばす。

    Args:
        filename: 元のファイル名（拡張子チェックに使う）
        content: ファイルの中身
        max_urls: 受け付ける最大URL件数
        max_bytes: 受け付ける最大ファイルサイズ

    Returns:
        list[UrlRecord]: ステータスをリセットしたレコード

    Raises:
        UnsupportedFileTypeError: 拡張子が.csvでない場合
        UploadTooLargeError: ファイルサイズが上限を超える場合
        InvalidCsvError: CSVとして解析できない場合
        NoUrlsFoundError: URLが1件もない場合
        TooManyUrlsError: URL件数が上限を超える場合
    """
    if not filename or PurePath(filename).suffix != ".csv":
        raise UnsupportedFileTypeError("Only CSV files are allowed")
    if len(content) > max_bytes:
        raise UploadTooLargeError(f"File too large. Maximum size is {max_bytes} bytes.")

    # Excelが付けるBOMを除去する
    text = content.decode("utf-8-sig", errors="replace")
    records: list[UrlRecord] = []
    try:
        for row in csv.DictReader(io.StringIO(text)):
            url = _first_value(row, *UPLOAD_URL_COLUMNS).strip()
            if url:
                records.append(UrlRecord(url=url))
    except csv.Error as e:
        raise InvalidCsvError(f"Invalid CSV file: {e}") from e

    if not records:
        raise NoUrlsFoundError('No valid URLs found in the CSV file. Make sure the CSV has a "URL" column.')
    if len(records) > max_urls:
        raise TooManyUrlsError(len(records), max_urls)
    return records
