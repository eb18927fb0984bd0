"""CSVアップロードに関する例外"""


class UploadError(Exception):
    """アップロードされたCSVを受け付けられない場合のエラーの基底クラス"""


class UnsupportedFileTypeError(UploadError):
    """CSV以外のファイルがアップロードされた場合のエラー"""


class UploadTooLargeError(UploadError):
    """ファイルサイズが上限を超えている場合のエラー"""


class NoUrlsFoundError(UploadError):
    """URL列に値が1件もない場合のエラー"""


class TooManyUrlsError(UploadError):
    """URL件数が上限を超えている場合のエラー"""

    def __init__(self, count: int, limit: int) -> None:
        """初期化

        Args:
            count: ファイルに含まれていたURL件数
            limit: 許可されている最大件数
        """
        super().__init__(f"Too many URLs. Maximum {limit} URLs allowed. Your file contains {count} URLs.")
        self.count = count
        self.limit = limit


class InvalidCsvError(UploadError):
    """CSVとして読み込めない場合のエラー"""


class MissingUploadError(UploadError):
    """ファイルが添付されていない場合のエラー"""
