"""Settings service: lookup tables, technicians and communicators."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from alarm_manager.db import crud
from alarm_manager.errors import NotFoundError
from alarm_manager.models import Communicator, Technician, WorkOrderStatus
from alarm_manager.schemas import (
    CommunicatorCreate, CommunicatorUpdate, TechnicianCreate, TechnicianUpdate,
)
from alarm_manager.services.base import changes_for
from alarm_manager.services.lookups import (
    COMMUNICATOR_DEPENDENTS, TECHNICIAN_DEPENDENTS, Dependent, LookupKind,
    ensure_references, ensure_unreferenced, lookup_kind,
)
from alarm_manager.validation import validate

logger = logging.getLogger(__name__)


class SettingsService:
    def __init__(self, db: AsyncSession):
        self.db = db

    # ── Generic guarded operations ───────────────────────

    async def _update(self, model: type, label: str, obj_id: str, data, dependents=()) -> Any:
        obj = await crud.get(self.db, model, obj_id)
        if obj is None:
            raise NotFoundError(f"{label.capitalize()} with ID {obj_id} not found")
        changes = changes_for(model, data)
        await ensure_references(self.db, changes, obj)
        if changes.get("is_active") is False and obj.is_active:
            await ensure_unreferenced(self.db, label, obj_id, dependents)
        obj = await crud.update(self.db, obj, **changes)
        logger.info("Updated %s %s", label, obj_id)
        return obj

    async def _delete(self, model: type, label: str, obj_id: str, dependents: tuple[Dependent, ...]) -> bool:
        obj = await crud.get(self.db, model, obj_id)
        if obj is None:
            logger.warning("%s with ID %s not found for deletion", label.capitalize(), obj_id)
            return False
        await ensure_unreferenced(self.db, label, obj_id, dependents)
        await crud.soft_delete(self.db, obj)
        logger.info("Deactivated %s %s", label, obj_id)
        return True

    # ── Lookups ──────────────────────────────────────────

    async def list_lookups(self, kind: str | LookupKind) -> list:
        k = lookup_kind(kind)
        return await crud.list_active(self.db, k.model, order_by=k.ordering())

    async def get_lookup(self, kind: str | LookupKind, lookup_id: str):
        return await crud.get(self.db, lookup_kind(kind).model, lookup_id)

    async def add_lookup(self, kind: str | LookupKind, data):
        k = lookup_kind(kind)
        data = validate(k.create_schema, data)
        obj = await crud.create(self.db, k.model, **data.model_dump())
        logger.info("Added %s %r (%s)", k.label, obj.display_name, obj.id)
        return obj

    async def update_lookup(self, kind: str | LookupKind, lookup_id: str, data):
        k = lookup_kind(kind)
        data = validate(k.update_schema, data)
        return await self._update(k.model, k.label, lookup_id, data, k.dependents)

    async def delete_lookup(self, kind: str | LookupKind, lookup_id: str) -> bool:
        k = lookup_kind(kind)
        return await self._delete(k.model, k.label, lookup_id, k.dependents)

    async def get_status_by_name(self, name: str) -> WorkOrderStatus | None:
        return await crud.first_active(self.db, WorkOrderStatus, WorkOrderStatus.name == name)

    # ── Technicians ──────────────────────────────────────

    async def list_technicians(self) -> list[Technician]:
        return await crud.list_active(
            self.db, Technician, order_by=(Technician.last_name, Technician.first_name)
        )

    async def get_technician(self, technician_id: str) -> Technician | None:
        return await crud.get(self.db, Technician, technician_id)

    async def add_technician(self, data) -> Technician:
        data = validate(TechnicianCreate, data)
        tech = await crud.create(self.db, Technician, **data.model_dump())
        logger.info("Added technician %s (%s)", tech.full_name, tech.id)
        return tech

    async def update_technician(self, technician_id: str, data) -> Technician:
        data = validate(TechnicianUpdate, data)
        return await self._update(Technician, "technician", technician_id, data, TECHNICIAN_DEPENDENTS)

    async def delete_technician(self, technician_id: str) -> bool:
        """Refused while the technician holds work orders that are still open."""
        return await self._delete(Technician, "technician", technician_id, TECHNICIAN_DEPENDENTS)

    # ── Communicators ────────────────────────────────────

    async def list_communicators(self) -> list[Communicator]:
        return await crud.list_active(
            self.db, Communicator, order_by=(Communicator.manufacturer, Communicator.model_number)
        )

    async def get_communicator(self, communicator_id: str) -> Communicator | None:
        return await crud.get(self.db, Communicator, communicator_id)

    async def add_communicator(self, data) -> Communicator:
        data = validate(CommunicatorCreate, data)
        await ensure_references(self.db, data.model_dump())
        comm = await crud.create(self.db, Communicator, **data.model_dump())
        logger.info("Added communicator %s", comm.id)
        return comm

    async def update_communicator(self, communicator_id: str, data) -> Communicator:
        data = validate(CommunicatorUpdate, data)
        return await self._update(
            Communicator, "communicator", communicator_id, data, COMMUNICATOR_DEPENDENTS
        )

    async def delete_communicator(self, communicator_id: str) -> bool:
        return await self._delete(Communicator, "communicator", communicator_id, COMMUNICATOR_DEPENDENTS)
