"""HTTP APIモジュール"""

from url_indexation_checker.api.app import create_app

__all__ = ["create_app"]
