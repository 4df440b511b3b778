"""Default lookup rows for a fresh database.

Each table is only seeded while it has no rows at all, so running this
repeatedly (or after users edited the lookups) changes nothing.
"""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from alarm_manager.db.crud import commit
from alarm_manager.models import (
    CustomerType, ContactType, PanelType, MonitoringType, DeviceType,
    CommunicatorType, WorkOrderType, WorkOrderCategory, WorkOrderStatus,
)

logger = logging.getLogger(__name__)

DEFAULTS: list[tuple[type, list[dict]]] = [
    (CustomerType, [
        {"name": "Residential", "description": "Residential customers"},
        {"name": "Commercial", "description": "Commercial customers"},
        {"name": "Government", "description": "Government customers"},
        {"name": "Education", "description": "Educational institutions"},
    ]),
    (ContactType, [
        {"name": "Owner", "description": "Property owner"},
        {"name": "Primary", "description": "Primary contact"},
        {"name": "Secondary", "description": "Secondary contact"},
    ]),
    (MonitoringType, [
        {"name": "Security Monitored", "description": "Security monitoring service"},
        {"name": "Fire UL Monitored", "description": "UL listed fire monitoring"},
        {"name": "Un Monitored", "description": "Local alarm only"},
    ]),
    (DeviceType, [
        {"name": name, "description": None}
        for name in (
            "Door/Window", "Motion", "Glass Break", "Smoke", "Heat",
            "Carbon Monoxide", "Panic", "Medical", "Other",
        )
    ]),
    (CommunicatorType, [
        {"name": "GSM/Cell", "description": "Cellular communicator"},
        {"name": "AES", "description": "AES IntelliNet radio"},
        {"name": "IP", "description": "Internet communicator"},
        {"name": "POTS", "description": "Plain old telephone service"},
        {"name": "Other", "description": None},
    ]),
    (WorkOrderType, [
        {"name": "Service Call", "description": "Repair or troubleshooting visit"},
        {"name": "Installation", "description": "New system installation"},
        {"name": "Inspection", "description": "Scheduled inspection"},
    ]),
    (WorkOrderCategory, [
        {"name": "Security System", "description": None},
        {"name": "Fire System", "description": None},
        {"name": "CCTV", "description": None},
        {"name": "Access Control", "description": None},
    ]),
    (WorkOrderStatus, [
        {"name": "Unscheduled", "color_code": "#FF6B6B", "sort_order": 1},
        {"name": "Scheduled", "color_code": "#4ECDC4", "sort_order": 2},
        {"name": "In Progress", "color_code": "#45B7D1", "sort_order": 3},
        {"name": "Pending", "color_code": "#FFA726", "sort_order": 4},
        {"name": "Canceled", "color_code": "#78909C", "sort_order": 5},
        {"name": "Completed", "color_code": "#66BB6A", "sort_order": 6},
    ]),
    (PanelType, [
        {"manufacturer": "Honeywell", "model_number": "VISTA-20P"},
        {"manufacturer": "DSC", "model_number": "PC1864"},
        {"manufacturer": "2GIG", "model_number": "GC3"},
        {"manufacturer": "Qolsys", "model_number": "IQ Panel 2"},
    ]),
]


async def seed_defaults(db: AsyncSession) -> dict[str, int]:
    """Insert default lookups into empty tables. Returns rows added per table."""
    added: dict[str, int] = {}
    for model, rows in DEFAULTS:
        result = await db.execute(select(func.count(model.id)))
        if result.scalar_one():
            logger.debug("Skipping %s: table already populated", model.__tablename__)
            continue
        db.add_all(model(**row, is_active=True) for row in rows)
        added[model.__tablename__] = len(rows)
    if added:
        await commit(db, "seeding default lookups")
        logger.info("Seeded default lookups: %s", added)
    return added
