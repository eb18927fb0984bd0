"""URLのインデックス状況チェックモジュール"""

from url_indexation_checker.checker.batch import CheckResult, check_many
from url_indexation_checker.checker.classifier import IndexationResult, check_indexation
from url_indexation_checker.checker.url_validator import is_valid_url

__all__ = [
    "CheckResult",
    "IndexationResult",
    "check_indexation",
    "check_many",
    "is_valid_url",
]
