"""Media link extractors for Facebook pages."""

from typing import Optional

from ..facebook_client import FacebookClient
from ..models import ExtractionResult, MediaReference
from .facebook import MediaExtractor

__all__ = ["MediaExtractor", "extract_media"]


def extract_media(
    ref: MediaReference, client: Optional[FacebookClient] = None
) -> ExtractionResult:
    """
    Extract download links for a resolved reference.
    Uses a default-configured client when none is given.
    """
    return MediaExtractor(client or FacebookClient()).extract(ref)
