"""Facebook video/reel link extractor."""

import logging

import requests

from ..facebook_client import FacebookClient
from ..models import ExtractionResult, MediaMetadata, MediaReference
from .patterns import find_description, find_download_links, find_thumbnail, find_title

logger = logging.getLogger("fbmedia")

NOT_FOUND_MESSAGE = "Media not found"
FAILED_MESSAGE = "Failed to process media"


class MediaExtractor:
    """Fetches a media page and pulls download links and metadata from it."""

    def __init__(self, client: FacebookClient):
        self.client = client

    def extract(self, ref: MediaReference) -> ExtractionResult:
        """
        Fetch the canonical page for ref and extract links from it.
        Network and HTTP errors are returned as a failed result, never raised.
        """
        source_url = self.client.canonical_url(ref)
        logger.info(f"Extracting {ref.type.label} {ref.id} from {source_url}")

        try:
            page = self.client.fetch_page(source_url)
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.error(f"Extraction Error: {e}")
            if status == 404:
                return ExtractionResult.failure(ref, NOT_FOUND_MESSAGE, str(e))
            return ExtractionResult.failure(ref, FAILED_MESSAGE, str(e))
        except requests.exceptions.RequestException as e:
            logger.error(f"Extraction Error: {e}")
            return ExtractionResult.failure(ref, FAILED_MESSAGE, str(e))

        return self.extract_from_html(ref, source_url, page)

    @staticmethod
    def extract_from_html(
        ref: MediaReference, source_url: str, page: str
    ) -> ExtractionResult:
        """Apply the link and metadata patterns to an already fetched page."""
        links = find_download_links(page)
        if not links:
            logger.warning(f"No download links found for {ref.type.label} {ref.id}")

        metadata = MediaMetadata(
            source_url=source_url,
            title=find_title(page),
            description=find_description(page),
            thumbnail=find_thumbnail(page),
        )

        return ExtractionResult(
            success=True,
            media_id=ref.id,
            media_type=ref.type,
            download_links=links,
            metadata=metadata,
        )
