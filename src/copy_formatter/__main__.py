# -*- coding: utf-8 -*-
"""
Entry point to run the service via python -m copy_formatter.

Command line flags override the HOST, PORT and LOG_LEVEL settings.
"""
import argparse
import os

import uvicorn

from copy_formatter.config import settings


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="copy-formatter", description="Copy Formatter HTTP service")
    parser.add_argument("--host", default=settings.HOST)
    parser.add_argument("--port", type=int, default=settings.PORT)
    parser.add_argument("--log-level", default=settings.LOG_LEVEL, type=str.upper,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    parser.add_argument("--reload", action="store_true", help="Restart on code changes (development)")
    return parser.parse_args(argv)


def main(argv=None):
    """Start the Uvicorn server."""
    args = parse_args(argv)
    # The environment variable reaches reloader subprocesses too
    os.environ["LOG_LEVEL"] = args.log_level
    settings.LOG_LEVEL = args.log_level

    uvicorn.run(
        "copy_formatter.api:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower(),
    )


if __name__ == "__main__":
    main()
