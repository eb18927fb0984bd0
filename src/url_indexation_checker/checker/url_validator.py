"""URL形式チェックモジュール"""

from __future__ import annotations

import ipaddress
from urllib.parse import urlsplit

ALLOWED_SCHEMES: frozenset[str] = frozenset({"http", "https"})


def _is_bad_ipv4_host(hostname: str) -> bool:
    """ドット区切り4要素の数字なのにIPv4として不正なホスト（999.999.999.999など）かどうか"""
    labels = hostname.rstrip(".").split(".")
    if len(labels) != 4 or not all(label.isdigit() for label in labels):
        return False
    try:
        ipaddress.IPv4Address(hostname.rstrip("."))
    except ValueError:
        return True
    return False


def is_valid_url(candidate: object) -> bool:
    """URLが構文的にチェック可能かどうかを判定する。

    スキームがhttp/httpsであり、ホストが空でなくスペースを含まないことを確認する。
    DNS解決は行わない（プローブ時に暗黙的に行われる）。
    文字列以外を含む任意の入力に対してFalse/Trueのどちらかを返し、例外は送出しない。
    """
    if not isinstance(candidate, str) or not candidate:
        return False

    try:
        parsed = urlsplit(candidate)
        # ポート範囲外はここでValueErrorになる
        _ = parsed.port
    except ValueError:
        return False

    if parsed.scheme not in ALLOWED_SCHEMES:
        return False

    hostname = parsed.hostname
    if not hostname or " " in hostname:
        return False

    return not _is_bad_ipv4_host(hostname)
