"""Facebook video & reel link API - server entry point."""

import argparse
import sys

import uvicorn
from dotenv import load_dotenv

from .config import load_config, setup_logging
from .web.app import create_app


def main():
    """Entry point."""
    parser = argparse.ArgumentParser(
        description="Serve direct download links for Facebook videos and reels"
    )
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to YAML configuration file (default: environment only)",
    )
    parser.add_argument("--host", help="Bind address (overrides HOST)")
    parser.add_argument("--port", type=int, help="Listen port (overrides PORT)")
    args = parser.parse_args()

    load_dotenv()

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.host:
        config.server.host = args.host
    if args.port:
        config.server.port = args.port

    logger = setup_logging(config.logging)
    logger.info(
        f"Server running in {config.server.environment} mode "
        f"on port {config.server.port}"
    )

    try:
        uvicorn.run(
            create_app(config),
            host=config.server.host,
            port=config.server.port,
            log_level=config.logging.level.lower(),
        )
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)


if __name__ == "__main__":
    main()
