"""Resolve a free-form Facebook video/reel ID or URL into a MediaReference."""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import parse_qs, urlparse

from .models import MediaReference, MediaType

logger = logging.getLogger("fbmedia")

KNOWN_DOMAINS = ("facebook.com", "fb.watch")
SHORT_LINK_HOST = "fb.watch"

NUMERIC_ID = re.compile(r"^[0-9]+$")
REEL_PATH = re.compile(r"^/reels?/([0-9]+)")
SHARED_REEL_PATH = re.compile(r"/videos/reel/([0-9]+)")
SHARED_VIDEO_PATH = re.compile(r"/videos/[^/]+/([0-9]+)")
PAGE_VIDEO_PATH = re.compile(r"/videos/([0-9]+)")

SUPPORTED_FORMATS = [
    "Video ID: 123456789",
    "Video URL: https://www.facebook.com/watch/?v=123456789",
    "Video URL: https://www.facebook.com/username/videos/123456789/",
    "Shared video URL: https://www.facebook.com/username/videos/987654321/123456789/",
    "Shared video URL: https://www.facebook.com/video.php?v=123456789",
    "Reel URL: https://www.facebook.com/reel/123456789",
    "Shared reel URL: https://www.facebook.com/watch/?story_fbid=123456789",
    "FB Watch URL: https://fb.watch/abcde12345/",
]


@dataclass
class _ParsedUrl:
    host: str
    path: str
    query: dict[str, list[str]]

    def param(self, name: str) -> Optional[str]:
        values = self.query.get(name)
        if values and values[0].strip():
            return values[0].strip()
        return None

    @property
    def is_watch(self) -> bool:
        return self.path in ("/watch", "/watch/")


def _reel(url: _ParsedUrl) -> Optional[str]:
    match = REEL_PATH.match(url.path)
    return match.group(1) if match else None


def _shared_reel(url: _ParsedUrl) -> Optional[str]:
    match = SHARED_REEL_PATH.search(url.path)
    if match:
        return match.group(1)
    if url.is_watch:
        return url.param("story_fbid")
    return None


def _watch(url: _ParsedUrl) -> Optional[str]:
    if url.is_watch:
        return url.param("v")
    return None


def _shared_video(url: _ParsedUrl) -> Optional[str]:
    match = SHARED_VIDEO_PATH.search(url.path)
    if match:
        return match.group(1)
    if url.path == "/video.php":
        return url.param("v")
    return None


def _page_video(url: _ParsedUrl) -> Optional[str]:
    match = PAGE_VIDEO_PATH.search(url.path)
    return match.group(1) if match else None


def _short_link(url: _ParsedUrl) -> Optional[str]:
    if SHORT_LINK_HOST not in url.host:
        return None
    segments = [s for s in url.path.split("/") if s]
    return segments[0] if segments else None


def _story(url: _ParsedUrl) -> Optional[str]:
    return url.param("story_fbid")


# Evaluated top to bottom. Some shapes are sub-patterns of others, e.g.
# /videos/reel/<id> also matches /videos/<pageId>/<id>.
RULES: list[tuple[MediaType, Callable[[_ParsedUrl], Optional[str]]]] = [
    (MediaType.REEL, _reel),
    (MediaType.SHARED_REEL, _shared_reel),
    (MediaType.VIDEO, _watch),
    (MediaType.SHARED_VIDEO, _shared_video),
    (MediaType.VIDEO, _page_video),
    (MediaType.VIDEO, _short_link),
    (MediaType.SHARED_REEL, _story),
]


def _parse_url(value: str) -> Optional[_ParsedUrl]:
    """Parse value as a URL on a known Facebook host, or return None."""
    if "://" not in value:
        value = f"https://{value}"

    try:
        parsed = urlparse(value)
        host = parsed.hostname
    except ValueError as e:
        logger.debug(f"URL parsing error: {e}")
        return None

    if not host or any(c.isspace() for c in host):
        return None

    if host.startswith("www."):
        host = host[4:]

    if not any(domain in host for domain in KNOWN_DOMAINS):
        return None

    return _ParsedUrl(host=host, path=parsed.path, query=parse_qs(parsed.query))


def resolve(value: Optional[str]) -> Optional[MediaReference]:
    """
    Resolve a bare numeric ID or a Facebook URL into a MediaReference.
    Returns None when the input is not recognized.
    """
    if not value or not value.strip():
        return None

    value = value.strip()

    if NUMERIC_ID.match(value):
        return MediaReference(id=value, type=MediaType.VIDEO)

    url = _parse_url(value)
    if url is None:
        logger.debug(f"Not a Facebook URL: {value}")
        return None

    for media_type, extract_id in RULES:
        media_id = extract_id(url)
        if media_id:
            return MediaReference(id=media_id, type=media_type)

    logger.debug(f"No known video/reel pattern in {value}")
    return None
