"""Configuration loader and validator."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

import yaml

logger = logging.getLogger("fbmedia")

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 3000
    environment: str = "production"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


@dataclass
class FetchConfig:
    """Outbound request settings for the Facebook page fetch."""
    timeout_seconds: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    accept: str = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"
    accept_language: str = "en-US,en;q=0.9"

    @property
    def headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "Accept": self.accept,
            "Accept-Language": self.accept_language,
        }


@dataclass
class RateLimitConfig:
    window_ms: int = 15 * 60 * 1000
    max_requests: int = 100

    @property
    def limit_string(self) -> str:
        """Limit in the notation understood by slowapi, e.g. '100/900 seconds'."""
        window_seconds = max(1, -(-self.window_ms // 1000))
        return f"{self.max_requests}/{window_seconds} seconds"


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class Config:
    server: ServerConfig = field(default_factory=ServerConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default


def load_config(
    config_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Config:
    """
    Load configuration from an optional YAML file, then apply
    environment variable overrides.
    """
    data = {}
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {config_path}\n"
                "Please copy config.yaml.example to config.yaml and customize."
            )
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    if environ is None:
        environ = os.environ

    server_data = data.get("server", {})
    server = ServerConfig(
        host=environ.get("HOST") or server_data.get("host", "0.0.0.0"),
        port=_env_int(environ, "PORT", server_data.get("port", 3000)),
        environment=environ.get("APP_ENV") or server_data.get("environment", "production"),
    )

    rate_data = data.get("rate_limit", {})
    rate_limit = RateLimitConfig(
        window_ms=_env_int(
            environ, "RATE_LIMIT_WINDOW_MS", rate_data.get("window_ms", 15 * 60 * 1000)
        ),
        max_requests=_env_int(environ, "RATE_LIMIT_MAX", rate_data.get("max_requests", 100)),
    )

    log_data = data.get("logging", {})
    logging_config = LoggingConfig(
        level=environ.get("LOG_LEVEL") or log_data.get("level", "INFO"),
        file=log_data.get("file"),
    )

    if str(logging_config.level).upper() not in LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: {logging_config.level} (expected one of {', '.join(LOG_LEVELS)})"
        )
    if server.port <= 0:
        raise ValueError(f"Invalid port: {server.port}")
    if rate_limit.window_ms <= 0 or rate_limit.max_requests <= 0:
        raise ValueError("Rate limit window and max requests must be positive.")

    return Config(
        server=server,
        fetch=FetchConfig(),
        rate_limit=rate_limit,
        logging=logging_config,
    )


def setup_logging(config: LoggingConfig) -> logging.Logger:
    """Configure logging based on config."""
    logger = logging.getLogger("fbmedia")
    logger.setLevel(getattr(logging, config.level.upper()))

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if config.file:
        file_handler = logging.FileHandler(config.file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
