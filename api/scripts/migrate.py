#!/usr/bin/env python3
"""Run Alembic migrations for the configured database.

Usage:
    cd api
    python -m scripts.migrate upgrade
    python -m scripts.migrate downgrade -1
    python -m scripts.migrate current
"""

from __future__ import annotations

import argparse
from pathlib import Path

from alembic import command
from alembic.config import Config

API_DIR = Path(__file__).resolve().parents[1]


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run Alembic migrations")
    sub = parser.add_subparsers(dest="cmd", required=True)

    upgrade = sub.add_parser("upgrade", help="Apply migrations")
    upgrade.add_argument("target", nargs="?", default="head")

    downgrade = sub.add_parser("downgrade", help="Revert migrations")
    downgrade.add_argument("target", nargs="?", default="-1")

    sub.add_parser("current", help="Show current revision")
    sub.add_parser("history", help="Show revision history")

    return parser.parse_args()


def get_alembic_config() -> Config:
    cfg = Config(str(API_DIR / "alembic.ini"))
    # Absolute script_location so it works from any working directory.
    cfg.set_main_option("script_location", str(API_DIR / "alembic"))
    return cfg


def main() -> None:
    args = _parse_args()
    cfg = get_alembic_config()

    match args.cmd:
        case "upgrade":
            command.upgrade(cfg, args.target)
        case "downgrade":
            command.downgrade(cfg, args.target)
        case "current":
            command.current(cfg)
        case "history":
            command.history(cfg)
        case _:
            raise ValueError(f"Unknown command: {args.cmd}")


if __name__ == "__main__":
    main()
