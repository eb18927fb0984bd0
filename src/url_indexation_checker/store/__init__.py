"""URLテーブルの永続化モジュール"""

from url_indexation_checker.store.csv_codec import parse_upload, serialize_records
from url_indexation_checker.store.csv_store import CsvUrlStore
from url_indexation_checker.store.exceptions import (
    InvalidCsvError,
    MissingUploadError,
    NoUrlsFoundError,
    TooManyUrlsError,
    UnsupportedFileTypeError,
    UploadError,
    UploadTooLargeError,
)
from url_indexation_checker.store.models import NOT_YET_CHECKED, IndexationStatus, UrlRecord, format_timestamp

__all__ = [
    "NOT_YET_CHECKED",
    "CsvUrlStore",
    "IndexationStatus",
    "InvalidCsvError",
    "MissingUploadError",
    "NoUrlsFoundError",
    "TooManyUrlsError",
    "UnsupportedFileTypeError",
    "UploadError",
    "UploadTooLargeError",
    "UrlRecord",
    "format_timestamp",
    "parse_upload",
    "serialize_records",
]
