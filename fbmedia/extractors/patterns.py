"""Regex tables for pulling download links and metadata out of Facebook page HTML."""

import html
import re
from typing import Optional


def _source_pattern(*keys: str) -> re.Pattern:
    # Matches hd_src:"...", "hd_src":"..." and hd_src='...'
    names = "|".join(keys)
    return re.compile(
        rf"""(?:{names})["']?\s*[=:]\s*["']([^"']+)""",
        re.IGNORECASE,
    )


def _meta_pattern(attribute: str, value: str) -> re.Pattern:
    # Matches name/property and content in either order
    return re.compile(
        rf"""<meta\b(?=[^>]*\b{attribute}=["']{re.escape(value)}["'])[^>]*?\bcontent=(["'])(.*?)\1""",
        re.IGNORECASE | re.DOTALL,
    )


# Ordered: iteration order is the key order of the resulting downloadLinks.
LINK_PATTERNS: tuple[tuple[str, re.Pattern], ...] = (
    ("hd", _source_pattern(
        "hd_src", "high_quality_src", "playable_url_quality_hd", "browser_native_hd_url"
    )),
    ("sd", _source_pattern(
        "sd_src", "standard_quality_src", "playable_url", "browser_native_sd_url"
    )),
    ("fallback", _source_pattern("video_src", "src_src")),
)

TITLE_PATTERN = re.compile(r"<title[^>]*>(.*?)</title>", re.IGNORECASE | re.DOTALL)
TITLE_SUFFIX = re.compile(r"\s*[|\-]\s*Facebook\s*$", re.IGNORECASE)
DESCRIPTION_PATTERN = _meta_pattern("name", "description")
THUMBNAIL_PATTERN = _meta_pattern("property", "og:image")

_URL_ESCAPES = (
    ("\\/", "/"),
    ("\\u0025", "%"),
    ("\\u0026", "&"),
    ("&amp;", "&"),
)


def clean_url(raw: str) -> str:
    """Undo the JSON/HTML escaping Facebook applies to inline URLs."""
    for escaped, plain in _URL_ESCAPES:
        raw = raw.replace(escaped, plain)
    return raw


def find_download_links(page: str) -> dict[str, str]:
    """Return {quality: url} for every quality pattern that matches."""
    links = {}
    for quality, pattern in LINK_PATTERNS:
        match = pattern.search(page)
        if match and match.group(1):
            links[quality] = clean_url(match.group(1))
    return links


def find_title(page: str) -> Optional[str]:
    match = TITLE_PATTERN.search(page)
    if not match:
        return None
    title = TITLE_SUFFIX.sub("", html.unescape(match.group(1)).strip())
    return title or None


def find_description(page: str) -> Optional[str]:
    match = DESCRIPTION_PATTERN.search(page)
    if not match:
        return None
    return html.unescape(match.group(2)).strip() or None


def find_thumbnail(page: str) -> Optional[str]:
    match = THUMBNAIL_PATTERN.search(page)
    if not match or not match.group(2):
        return None
    return clean_url(match.group(2))
