"""CLI for the alarm company manager: bootstrap and inspect a database."""

from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import date


async def cmd_init_db(args):
    """Create all tables, optionally seeding default lookups."""
    from alarm_manager.db.engine import dispose_engine, init_db, session_factory
    from alarm_manager.services.seed import seed_defaults

    await init_db()
    print("Database tables created")
    if args.seed:
        async with session_factory()() as db:
            added = await seed_defaults(db)
        print(f"Seeded {sum(added.values())} lookup rows")
    await dispose_engine()


async def cmd_seed(args):
    """Insert default lookup rows into empty lookup tables."""
    from alarm_manager.db.engine import dispose_engine, init_db, session_factory
    from alarm_manager.services.seed import seed_defaults

    await init_db()
    async with session_factory()() as db:
        added = await seed_defaults(db)
    await dispose_engine()

    if not added:
        print("Lookup tables already populated, nothing to do")
        return
    for table, count in added.items():
        print(f"  {table}: {count}")


async def cmd_next_number(args):
    """Print the work-order number the next new order would receive."""
    from alarm_manager.config import get_settings
    from alarm_manager.db.engine import dispose_engine, session_factory
    from alarm_manager.services.numbering import generate_work_order_number

    cfg = get_settings().work_orders
    today = date.fromisoformat(args.date) if args.date else date.today()
    async with session_factory()() as db:
        number = await generate_work_order_number(db, today, cfg.number_prefix, cfg.number_width)
    await dispose_engine()
    print(number)


def main():
    from alarm_manager.config import get_settings
    from alarm_manager.logging_config import configure_logging

    parser = argparse.ArgumentParser(description="Alarm Company Manager CLI")
    subparsers = parser.add_subparsers(dest="command")

    # init-db
    init = subparsers.add_parser("init-db", help="Create database tables")
    init.add_argument("--seed", action="store_true", help="Also insert default lookup rows")

    # seed
    subparsers.add_parser("seed", help="Insert default lookup rows")

    # next-number
    nn = subparsers.add_parser("next-number", help="Show the next work order number")
    nn.add_argument("--date", default="", help="Date to number for (YYYY-MM-DD, default today)")

    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(get_settings().logging)

    if args.command == "init-db":
        asyncio.run(cmd_init_db(args))
    elif args.command == "seed":
        asyncio.run(cmd_seed(args))
    elif args.command == "next-number":
        asyncio.run(cmd_next_number(args))


if __name__ == "__main__":
    main()
