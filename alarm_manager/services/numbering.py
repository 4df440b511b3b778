"""Work-order number generation: ``WO<year>-NNNN``, sequential per calendar year.

The lookup-then-increment sequence is not atomic. Two sessions creating work
orders at the same moment can compute the same number; the unique index on
``work_orders.work_order_number`` turns the second insert into an
IntegrityError. Nothing here prevents the race.
"""

from __future__ import annotations

import logging
from datetime import date, datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from alarm_manager.models import WorkOrder

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "WO"
DEFAULT_WIDTH = 4


def year_prefix(year: int, prefix: str = DEFAULT_PREFIX) -> str:
    return f"{prefix}{year}"


def format_number(year: int, sequence: int, prefix: str = DEFAULT_PREFIX, width: int = DEFAULT_WIDTH) -> str:
    return f"{year_prefix(year, prefix)}-{sequence:0{width}d}"


def next_number_after(last: str | None, year: int, prefix: str = DEFAULT_PREFIX, width: int = DEFAULT_WIDTH) -> str:
    """Increment the suffix of ``last``; start at 1 when absent or unparseable."""
    if last is None:
        return format_number(year, 1, prefix, width)
    suffix = last[len(year_prefix(year, prefix)) + 1:]
    try:
        sequence = int(suffix)
    except ValueError:
        logger.warning("Unparseable work order number suffix in %r, restarting sequence", last)
        return format_number(year, 1, prefix, width)
    return format_number(year, sequence + 1, prefix, width)


def fallback_number(now: datetime, prefix: str = DEFAULT_PREFIX) -> str:
    return f"{prefix}{now:%Y%m%d%H%M%S}"


async def generate_work_order_number(
    db: AsyncSession,
    today: date | None = None,
    prefix: str = DEFAULT_PREFIX,
    width: int = DEFAULT_WIDTH,
) -> str:
    """Next number for ``today``'s year.

    Suffixes are zero-padded, so the lexicographic maximum is the latest
    number. If the lookup itself fails, a timestamp-based number is returned
    so that work-order creation is never blocked.
    """
    today = today or date.today()
    head = f"{year_prefix(today.year, prefix)}-"
    try:
        result = await db.execute(
            select(WorkOrder.work_order_number)
            .where(WorkOrder.work_order_number.startswith(head, autoescape=True))
            .order_by(WorkOrder.work_order_number.desc())
            .limit(1)
        )
        last = result.scalars().first()
    except SQLAlchemyError:
        logger.exception("Error generating work order number")
        await db.rollback()
        return fallback_number(datetime.now(), prefix)

    return next_number_after(last, today.year, prefix, width)
