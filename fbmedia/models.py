"""Data models for resolved media references and extraction results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class MediaType(str, Enum):
    VIDEO = "video"
    REEL = "reel"
    SHARED_VIDEO = "shared_video"
    SHARED_REEL = "shared_reel"

    @property
    def is_reel(self) -> bool:
        """True for the reel family, which is served from /reel/ pages."""
        return self in (MediaType.REEL, MediaType.SHARED_REEL)

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


@dataclass(frozen=True)
class MediaReference:
    """A recognized Facebook media identifier and its type."""
    id: str
    type: MediaType


@dataclass
class MediaMetadata:
    """Optional page metadata scraped alongside the download links."""
    source_url: str
    title: Optional[str] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "title": self.title,
            "description": self.description,
            "thumbnail": self.thumbnail,
            "sourceUrl": self.source_url,
        }
        return {k: v for k, v in data.items() if v is not None}


@dataclass
class ExtractionResult:
    """Outcome of one extraction attempt."""
    success: bool
    media_id: str
    media_type: MediaType
    download_links: dict[str, str] = field(default_factory=dict)
    metadata: Optional[MediaMetadata] = None
    error_message: Optional[str] = None
    error_detail: Optional[str] = None  # low-level error text, development only

    @classmethod
    def failure(
        cls,
        ref: MediaReference,
        message: str,
        detail: Optional[str] = None,
    ) -> "ExtractionResult":
        return cls(
            success=False,
            media_id=ref.id,
            media_type=ref.type,
            error_message=message,
            error_detail=detail,
        )

    def to_dict(self, include_error_detail: bool = False) -> dict:
        """Serialize to the JSON shape returned by the API."""
        if not self.success:
            data = {
                "success": False,
                "message": self.error_message,
                "mediaId": self.media_id,
                "mediaType": self.media_type.value,
            }
            if include_error_detail and self.error_detail:
                data["error"] = self.error_detail
            return data

        data = {
            "success": True,
            "mediaId": self.media_id,
            "mediaType": self.media_type.value,
            "downloadLinks": dict(self.download_links),
        }
        if self.metadata:
            data["metadata"] = self.metadata.to_dict()
        return data
