"""Language detection from site URLs"""

from urllib.parse import urlparse

ENGLISH = "en"
JAPANESE = "ja"
CHINESE = "cn"

# tier4.jp serves Japanese at the bare root
DEFAULT_LANGUAGE = JAPANESE


def detect_language(url: str) -> str:
    """Return 'en', 'ja' or 'cn' for a site URL, falling back to the site default"""
    path = urlparse(url).path if "://" in url else url
    if "/en" in path:
        return ENGLISH
    if "/cn" in path or "/zh" in path:
        return CHINESE
    if "/ja" in path:
        return JAPANESE
    return DEFAULT_LANGUAGE


def is_homepage_url(url: str) -> bool:
    """True for the site root in any language (/, /en, /ja, /cn)"""
    path = urlparse(url).path.rstrip("/")
    return path in ("", "/en", "/ja", "/cn")
