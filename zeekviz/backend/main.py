from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn

import uvicorn

from .api.main import create_app
from .config import settings
from .storage import SessionStore

logger = logging.getLogger("zeekviz.main")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="zeekviz — Zeek conn.log explorer")
    parser.add_argument("--host", default=settings.API_HOST)
    parser.add_argument("--port", type=int, default=settings.API_PORT)
    parser.add_argument(
        "--log-path", default=settings.LOG_PATH,
        help="conn.log (JSON lines) to load before accepting uploads",
    )
    parser.add_argument(
        "--log-level", default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def build_store(log_path: str | None) -> SessionStore:
    """Create the process-wide store, preloading *log_path* if given."""
    store = SessionStore()
    if log_path:
        store.load_path(log_path)
    return store


def main(argv: list[str] | None = None) -> NoReturn:
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        store = build_store(args.log_path)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to load %s: %s", args.log_path, e)
        print(f"ERROR: cannot read --log-path: {e}", file=sys.stderr)
        sys.exit(1)

    app = create_app(store=store)
    logger.info("Starting server on http://%s:%d", args.host, args.port)
    if not args.log_path:
        logger.info("Ready to accept file uploads...")

    uvicorn.run(app, host=args.host, port=args.port, log_level="warning")
    sys.exit(0)


if __name__ == "__main__":
    main()
