"""csv_codec モジュールのテスト"""

import csv
import io

import pytest

from url_indexation_checker.store import (
    IndexationStatus,
    InvalidCsvError,
    NoUrlsFoundError,
    TooManyUrlsError,
    UnsupportedFileTypeError,
    UploadTooLargeError,
    UrlRecord,
    parse_upload,
    serialize_records,
)

_LIMITS = {"max_urls": 1000, "max_bytes": 5 * 1024 * 1024}


class TestParseUpload:
    """parse_upload関数のテスト"""

    def test_parses_url_column(self) -> None:
        """URL列の値を前後の空白を除去してPendingのレコードにすること"""
        content = b"URL,Status\n  https://a.example  ,Indexed\nhttps://b.example,\n"

        records = parse_upload("urls.csv", content, **_LIMITS)

        assert records == [UrlRecord(url="https://a.example"), UrlRecord(url="https://b.example")]
        assert all(r.status == IndexationStatus.PENDING for r in records)

    @pytest.mark.parametrize("column", ["URL", "url", "Url", "link", "Link"])
    def test_accepts_column_variants(self, column: str) -> None:
        """URL/url/Url/link/Linkのいずれの列名も受け付けること"""
        content = f"{column}\nhttps://a.example\n".encode()

        assert parse_upload("urls.csv", content, **_LIMITS) == [UrlRecord(url="https://a.example")]

    def test_skips_blank_values(self) -> None:
        """空のURLは読み飛ばすこと"""
        content = b"URL\nhttps://a.example\n   \n\nhttps://b.example\n"

        records = parse_upload("urls.csv", content, **_LIMITS)

        assert [r.url for r in records] == ["https://a.example", "https://b.example"]

    def test_strips_utf8_bom(self) -> None:
        """BOM付きCSVでもURL列を認識すること"""
        content = "\ufeffURL\nhttps://a.example\n".encode()

        assert parse_upload("urls.csv", content, **_LIMITS) == [UrlRecord(url="https://a.example")]

    @pytest.mark.parametrize("filename", ["urls.txt", "urls.xlsx", "urls", None, "urls.csv.exe"])
    def test_rejects_non_csv_files(self, filename: str | None) -> None:
        """拡張子が.csvでないファイルはエラーになること"""
        with pytest.raises(UnsupportedFileTypeError, match="Only CSV files are allowed"):
            parse_upload(filename, b"URL\nhttps://a.example\n", **_LIMITS)

    def test_rejects_too_large_file(self) -> None:
        """ファイルサイズが上限を超えるとエラーになること"""
        with pytest.raises(UploadTooLargeError):
            parse_upload("urls.csv", b"URL\nhttps://a.example\n", max_urls=10, max_bytes=10)

    def test_rejects_file_without_urls(self) -> None:
        """URL列がない・値が空の場合はエラーになること"""
        with pytest.raises(NoUrlsFoundError, match='Make sure the CSV has a "URL" column'):
            parse_upload("urls.csv", b"Name,Notes\nfoo,bar\n", **_LIMITS)

    def test_rejects_malformed_csv(self) -> None:
        """フィールド長の上限を超えるなどCSVとして解析できない場合はエラーになること"""
        content = b'URL\n"' + b"x" * 200_000 + b'"\n'

        with pytest.raises(InvalidCsvError, match="Invalid CSV file"):
            parse_upload("urls.csv", content, **_LIMITS)

    def test_rejects_too_many_urls(self) -> None:
        """URL件数が上限を超えるとエラーになり、件数と上限を保持すること"""
        content = ("URL\n" + "".join(f"https://{i}.example\n" for i in range(4))).encode()

        with pytest.raises(TooManyUrlsError) as exc_info:
            parse_upload("urls.csv", content, max_urls=3, max_bytes=1024)

        assert exc_info.value.count == 4
        assert exc_info.value.limit == 3
        assert "Maximum 3 URLs allowed" in str(exc_info.value)


class TestSerializeRecords:
    """serialize_records関数のテスト"""

    def test_quotes_every_field(self) -> None:
        """ヘッダーを含む全フィールドがクォートされること"""
        text = serialize_records([UrlRecord(url="https://a.example", notes='say "hi", ok')])

        lines = text.splitlines()
        assert lines[0] == '"URL","Status","Last Checked Date","Notes"'
        assert lines[1] == '"https://a.example","Pending","Not yet checked","say ""hi"", ok"'

    def test_output_is_parseable_csv(self) -> None:
        """出力が標準的なCSVとして読み戻せること"""
        records = [
            UrlRecord(url="https://a.example", status=IndexationStatus.INDEXED, notes="HTTP 200 - Page accessible"),
            UrlRecord(url="not-a-url", status=IndexationStatus.INVALID_URL, notes="Invalid URL format"),
        ]

        rows = list(csv.reader(io.StringIO(serialize_records(records))))

        assert rows[1:] == [
            ["https://a.example", "Indexed", "Not yet checked", "HTTP 200 - Page accessible"],
            ["not-a-url", "Invalid URL", "Not yet checked", "Invalid URL format"],
        ]
