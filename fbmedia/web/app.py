"""FastAPI web application exposing the Facebook video & reel link API."""

import logging
import time
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from .. import __version__
from ..config import Config, load_config
from ..extractors import MediaExtractor
from ..facebook_client import FacebookClient
from ..resolver import SUPPORTED_FORMATS, resolve

logger = logging.getLogger("fbmedia")

DOWNLOAD_EXAMPLES = [
    "/download?url=https://www.facebook.com/watch/?v=123456789",
    "/download?url=https://www.facebook.com/reel/123456789",
    "/download?videoId=123456789",
    "/download?reelId=123456789",
]


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _error_response(status_code: int, message: str, **extra) -> JSONResponse:
    content = {"success": False, "message": message}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


def rate_limit_exceeded(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Reply to clients over their request budget."""
    logger.warning(f"Rate limit exceeded for {get_remote_address(request)}: {exc.detail}")
    return _error_response(429, "Too many requests, please try again later.")


async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled Error on {request.url.path}: {exc}", exc_info=exc)
    return _error_response(500, "An unexpected error occurred")


def create_app(
    config: Optional[Config] = None,
    extractor: Optional[MediaExtractor] = None,
) -> FastAPI:
    """
    Build the API application.

    The extractor can be injected so tests can substitute the upstream
    transport; by default one is built from config.fetch.
    """
    config = config or load_config()
    extractor = extractor or MediaExtractor(FacebookClient(config.fetch))
    started = time.monotonic()

    app = FastAPI(title="Facebook Video & Reel Downloader API", version=__version__)

    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[config.rate_limit.limit_string],
    )
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded)
    app.add_exception_handler(Exception, unhandled_error)

    # Added last so it wraps the limiter and 429 responses carry CORS headers
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/download")
    async def download(
        video_id: Optional[str] = Query(default=None, alias="videoId"),
        reel_id: Optional[str] = Query(default=None, alias="reelId"),
        url: Optional[str] = Query(default=None),
    ):
        """Resolve a video/reel ID or URL and return its download links."""
        original_input = video_id or reel_id or url
        if not original_input:
            return _error_response(
                400,
                "Either videoId, reelId, or url parameter is required",
                examples=DOWNLOAD_EXAMPLES,
            )

        ref = resolve(original_input)
        if ref is None:
            return _error_response(
                400,
                "Invalid Facebook video/reel ID or URL format",
                supportedFormats=SUPPORTED_FORMATS,
            )

        try:
            result = await run_in_threadpool(extractor.extract, ref)

            if not result.success:
                return JSONResponse(
                    status_code=404,
                    content=result.to_dict(
                        include_error_detail=config.server.is_development
                    ),
                )

            body = {"success": True, "originalInput": original_input}
            body.update(result.to_dict())
            body["timestamp"] = _timestamp()
            return body

        except Exception as e:
            logger.exception(f"API Error: {e}")
            return _error_response(500, "Internal server error")

    @app.get("/health")
    async def health():
        """Process liveness info."""
        return {
            "status": "OK",
            "uptime": round(time.monotonic() - started, 3),
            "timestamp": _timestamp(),
        }

    @app.get("/")
    async def index():
        """Describe the API surface."""
        return {
            "service": "Facebook Video & Reel Downloader API",
            "status": "running",
            "version": __version__,
            "endpoints": {
                "download": {
                    "description": "Download video or reel by ID or URL",
                    "parameters": {
                        "videoId": "Facebook video ID",
                        "reelId": "Facebook reel ID",
                        "url": "Full Facebook video/reel URL",
                    },
                    "examples": DOWNLOAD_EXAMPLES,
                    "supportedFormats": SUPPORTED_FORMATS,
                },
                "health": "/health",
            },
        }

    return app
