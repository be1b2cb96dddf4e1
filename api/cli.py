#!/usr/bin/env python3
"""CLI for Stockroom inventory management tasks.

Usage:
    python -m cli <command>

Commands:
    migrate     Run database migrations
    low-stock   Print active products at or below their stock minimum
"""

import argparse
import asyncio
import logging
import sys

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def cmd_migrate() -> int:
    """Run database migrations."""
    from alembic import command
    from scripts.migrate import get_alembic_config

    logger.info("Running database migrations...")
    command.upgrade(get_alembic_config(), "head")
    logger.info("Migrations complete")
    return 0


async def _low_stock_report() -> int:
    from core.database import create_engine, create_session_maker, dispose_engine
    from services.inventory_service import (
        get_inventory_summary,
        get_low_stock_products,
    )

    engine = create_engine()
    session_maker = create_session_maker(engine)
    try:
        async with session_maker() as session:
            products = await get_low_stock_products(session)
            summary = await get_inventory_summary(session)
    finally:
        await dispose_engine(engine)

    for product in products:
        print(
            f"{product.name:<40} {product.category.name:<25} "
            f"stock={product.stock} min={product.stock_minimum}"
        )
    print(
        f"\n{len(products)} low-stock of {summary.total_active_products} active "
        f"products, valuation {summary.total_valuation}"
    )
    return 0


def cmd_low_stock() -> int:
    """Print the low-stock report."""
    return asyncio.run(_low_stock_report())


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Stockroom inventory CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("migrate", help="Run database migrations")
    subparsers.add_parser(
        "low-stock",
        help="Print active products at or below their stock minimum",
    )

    args = parser.parse_args()

    if args.command == "migrate":
        return cmd_migrate()
    elif args.command == "low-stock":
        return cmd_low_stock()
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
