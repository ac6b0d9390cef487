"""Command line entry point: ``python -m gamehorizon {store,ui}``."""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

import uvicorn

from .config import load_settings

APPS = {
    "store": "gamehorizon.main:app",
    "ui": "gamehorizon.ui.app:app",
}


def build_parser() -> argparse.ArgumentParser:
    settings = load_settings()
    parser = argparse.ArgumentParser(
        prog="gamehorizon", description="Run the GameHorizon record store or UI."
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    store = subparsers.add_parser("store", help="Serve the /games record store")
    store.add_argument("--host", default=settings.store_host)
    store.add_argument("--port", type=int, default=settings.store_port)

    ui = subparsers.add_parser("ui", help="Serve the collection UI")
    ui.add_argument("--host", default=settings.ui_host)
    ui.add_argument("--port", type=int, default=settings.ui_port)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info(
        "Starting %s on port %s", args.command, args.port
    )
    uvicorn.run(APPS[args.command], host=args.host, port=args.port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
