"""Facebook page client using public watch/reel pages (no authentication)."""

import logging
from typing import Optional

import requests

from .config import FetchConfig
from .models import MediaReference

logger = logging.getLogger("fbmedia")

BASE_URL = "https://www.facebook.com"


class FacebookClient:
    """Fetches public Facebook video and reel pages as HTML."""

    def __init__(
        self,
        fetch_config: Optional[FetchConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        fetch_config = fetch_config or FetchConfig()
        self.timeout = fetch_config.timeout_seconds
        self.session = session or requests.Session()
        # Facebook serves a reduced page to non-browser user agents.
        self.session.headers.update(fetch_config.headers)

    @staticmethod
    def canonical_url(ref: MediaReference) -> str:
        """Public page URL for a resolved media reference."""
        if ref.type.is_reel:
            return f"{BASE_URL}/reel/{ref.id}"
        return f"{BASE_URL}/watch/?v={ref.id}"

    def fetch_page(self, url: str) -> str:
        """
        Fetch a page and return its body text.
        Raises requests.exceptions.RequestException on network or HTTP errors.
        """
        logger.debug(f"GET {url} (timeout {self.timeout}s)")
        response = self.session.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.text
