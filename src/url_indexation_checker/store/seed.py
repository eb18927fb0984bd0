"""テーブル未作成時に投入する初期データ"""

from url_indexation_checker.store.models import UrlRecord

# インデックスされていそうなURL
_LIKELY_INDEXED = [
    "https://www.google.com",
    "https://www.wikipedia.org",
    "https://www.github.com",
    "https://www.stackoverflow.com",
    "https://www.youtube.com",
    "https://www.amazon.com",
    "https://www.facebook.com",
    "https://www.twitter.com",
    "https://www.linkedin.com",
    "https://www.reddit.com",
]

# インデックスされていなさそうなURL（無名サイトや深い階層）
_LIKELY_NOT_INDEXED = [
    "https://www.example.com/very/deep/page/12345",
    "https://www.testsite123456789.com",
    "https://www.myunknownwebsite.org",
    "https://subdomain.rarely-visited-site.com",
    "https://www.obscure-tech-blog.io/post/99999",
    "https://www.hidden-portfolio.net/projects",
    "https://staging.example-company.com",
    "https://www.personal-blog-2024.com/archives",
    "https://beta.newstartup.tech",
    "https://www.niche-hobby-forum.com/thread/54321",
]

# 不正なURL
_INVALID = [
    "http://thisisnotavalidurl",
    "https://999.999.999.999",
    "htp://wrong-protocol.com",
    "www.missing-protocol.com",
    "https://nonexistent-domain-12345678.xyz",
    "https://fake website.com",
    "https://.com",
    "not-a-url-at-all",
    "https://localhost:99999",
    "ftp://wrong-scheme.com",
]

SEED_URLS: tuple[str, ...] = (*_LIKELY_INDEXED, *_LIKELY_NOT_INDEXED, *_INVALID)


def build_seed_records() -> list[UrlRecord]:
    """初期データのレコード一覧を返す（全件Pending）"""
    return [UrlRecord(url=url) for url in SEED_URLS]
