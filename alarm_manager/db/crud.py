"""Generic CRUD operations for models carrying an ``is_active`` flag.

Every aggregate and lookup table goes through these helpers, so the
soft-delete rule lives in one place: list queries see active rows only,
``get`` sees everything.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from alarm_manager.models.base import utcnow

logger = logging.getLogger(__name__)

M = TypeVar("M")


async def commit(db: AsyncSession, action: str) -> None:
    """Commit, or roll back and log before re-raising."""
    try:
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Database error while %s", action)
        raise


# ── Reads ─────────────────────────────────────────────────

async def get(db: AsyncSession, model: type[M], obj_id: str) -> M | None:
    """Fetch by primary key, including inactive rows."""
    return await db.get(model, obj_id, populate_existing=True)


async def list_active(db: AsyncSession, model: type[M], *criteria, order_by=()) -> list[M]:
    stmt = select(model).where(model.is_active == True, *criteria)
    if order_by:
        stmt = stmt.order_by(*order_by)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def first_active(db: AsyncSession, model: type[M], *criteria) -> M | None:
    result = await db.execute(select(model).where(model.is_active == True, *criteria).limit(1))
    return result.scalars().first()


async def exists_active(db: AsyncSession, model: type, *criteria) -> bool:
    result = await db.execute(
        select(model.id).where(model.is_active == True, *criteria).limit(1)
    )
    return result.first() is not None


# ── Writes ────────────────────────────────────────────────

async def create(db: AsyncSession, model: type[M], **fields: Any) -> M:
    obj = model(**fields)
    obj.is_active = True
    db.add(obj)
    await commit(db, f"creating {model.__name__}")
    await db.refresh(obj)
    return obj


async def update(db: AsyncSession, obj: M, **fields: Any) -> M:
    for k, v in fields.items():
        setattr(obj, k, v)
    if hasattr(obj, "modified_at"):
        obj.modified_at = utcnow()
    await commit(db, f"updating {type(obj).__name__} {obj.id}")
    await db.refresh(obj)
    return obj


async def soft_delete(db: AsyncSession, obj: M) -> M:
    obj.is_active = False
    if hasattr(obj, "modified_at"):
        obj.modified_at = utcnow()
    await commit(db, f"deactivating {type(obj).__name__} {obj.id}")
    await db.refresh(obj)
    return obj
