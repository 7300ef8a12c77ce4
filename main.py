#!/usr/bin/env python3
"""
Global Transparency Dashboard API: launch the server.

Usage:
    python main.py                          # http://127.0.0.1:8000
    python main.py --port 9000              # http://127.0.0.1:9000
    python main.py --host 0.0.0.0           # listen on every interface
    python main.py --fixtures /path/to/fixtures
    python main.py --reload                 # auto-reload on code changes
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from utils.config import AppConfig


def main() -> None:
    cfg = AppConfig.from_env()
    parser = argparse.ArgumentParser(
        description="Launch the Global Transparency Dashboard API.",
    )
    parser.add_argument(
        "--host", default=cfg.api_host,
        help=f"Bind address (default: {cfg.api_host} or APP_HOST env var)",
    )
    parser.add_argument(
        "--port", type=int, default=cfg.api_port,
        help="Port to listen on (default: 8000 or APP_PORT env var)",
    )
    parser.add_argument(
        "--fixtures", type=Path, default=None,
        help="Directory of JSON fixtures (default: data/ or APP_FIXTURES_DIR env var)",
    )
    parser.add_argument(
        "--reload", action="store_true",
        help="Enable auto-reload on file changes (development mode)",
    )
    args = parser.parse_args()

    # The app reads APP_FIXTURES_DIR at import, including in reload workers
    if args.fixtures is not None:
        os.environ["APP_FIXTURES_DIR"] = str(args.fixtures)

    fixtures_dir = AppConfig.from_env().fixtures_dir
    if not fixtures_dir.is_dir():
        print(f"Error: fixture directory not found at {fixtures_dir}")
        print("  pass --fixtures /path/to/fixtures or set APP_FIXTURES_DIR")
        sys.exit(1)

    import uvicorn

    display_host = "localhost" if args.host == "0.0.0.0" else args.host
    print(f"Starting Global Transparency Dashboard API at http://{display_host}:{args.port}")
    print(f"Fixtures: {fixtures_dir}")
    print(f"Docs:     http://{display_host}:{args.port}/docs")
    print()

    uvicorn.run(
        "api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()
