"""Lookup-table registry and the referential guard used before soft deletes.

Each lookup kind names the active rows that may still point at it. A lookup
row is only deactivated when none of those rows exist.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from alarm_manager.db import crud
from alarm_manager.errors import NotFoundError, ReferentialIntegrityError
from alarm_manager.models import (
    CustomerType, ContactType, PanelType, MonitoringType, DeviceType,
    CommunicatorType, WorkOrderType, WorkOrderCategory, WorkOrderStatus,
    Customer, Contact, SecuritySystem, Zone, Communicator, Technician, WorkOrder,
)
from alarm_manager.schemas import (
    LookupCreate, LookupUpdate, PanelTypeCreate, PanelTypeUpdate,
    WorkOrderStatusCreate, WorkOrderStatusUpdate,
)
from alarm_manager.services.lifecycle import TERMINAL


@dataclass(frozen=True)
class Dependent:
    """Active rows of ``model`` whose ``columns`` may reference a guarded row."""

    model: type
    columns: tuple[str, ...]
    label: str
    open_work_orders_only: bool = False

    def criteria(self, obj_id: str) -> list:
        refs = or_(*(getattr(self.model, c) == obj_id for c in self.columns))
        crit = [refs]
        if self.open_work_orders_only:
            terminal_ids = select(WorkOrderStatus.id).where(WorkOrderStatus.name.in_(TERMINAL))
            crit.append(self.model.status_id.not_in(terminal_ids))
        return crit


@dataclass(frozen=True)
class LookupKind:
    key: str
    model: type
    label: str
    create_schema: type[BaseModel] = LookupCreate
    update_schema: type[BaseModel] = LookupUpdate
    order_by: tuple[str, ...] = ("name",)
    dependents: tuple[Dependent, ...] = field(default_factory=tuple)

    def ordering(self) -> tuple:
        return tuple(getattr(self.model, name) for name in self.order_by)


_WORK_ORDERS = "work orders"
_SYSTEMS = "security systems"

LOOKUP_KINDS: dict[str, LookupKind] = {
    kind.key: kind
    for kind in (
        LookupKind(
            "customer_type", CustomerType, "customer type",
            dependents=(Dependent(Customer, ("customer_type_id",), "customers"),),
        ),
        LookupKind(
            "contact_type", ContactType, "contact type",
            dependents=(Dependent(Contact, ("contact_type_id",), "contacts"),),
        ),
        LookupKind(
            "panel_type", PanelType, "panel type",
            create_schema=PanelTypeCreate, update_schema=PanelTypeUpdate,
            order_by=("manufacturer", "model_number"),
            dependents=(Dependent(SecuritySystem, ("panel_type_id",), _SYSTEMS),),
        ),
        LookupKind(
            "monitoring_type", MonitoringType, "monitoring type",
            dependents=(Dependent(SecuritySystem, ("monitoring_type_id",), _SYSTEMS),),
        ),
        LookupKind(
            "device_type", DeviceType, "device type",
            dependents=(Dependent(Zone, ("device_type_id",), "zones"),),
        ),
        LookupKind(
            "communicator_type", CommunicatorType, "communicator type",
            dependents=(Dependent(Communicator, ("communicator_type_id",), "communicators"),),
        ),
        LookupKind(
            "work_order_type", WorkOrderType, "work order type",
            dependents=(Dependent(WorkOrder, ("work_order_type_id",), _WORK_ORDERS),),
        ),
        LookupKind(
            "work_order_category", WorkOrderCategory, "work order category",
            dependents=(Dependent(WorkOrder, ("category_id",), _WORK_ORDERS),),
        ),
        LookupKind(
            "work_order_status", WorkOrderStatus, "work order status",
            create_schema=WorkOrderStatusCreate, update_schema=WorkOrderStatusUpdate,
            order_by=("sort_order", "name"),
            dependents=(Dependent(WorkOrder, ("status_id",), _WORK_ORDERS),),
        ),
    )
}

# Operational rows guarded the same way as lookups.
COMMUNICATOR_DEPENDENTS = (
    Dependent(SecuritySystem, ("primary_communicator_id", "secondary_communicator_id"), _SYSTEMS),
)
TECHNICIAN_DEPENDENTS = (
    Dependent(WorkOrder, ("technician_id",), "active work orders", open_work_orders_only=True),
)


def lookup_kind(kind: str | LookupKind) -> LookupKind:
    if isinstance(kind, LookupKind):
        return kind
    try:
        return LOOKUP_KINDS[kind]
    except KeyError:
        raise ValueError(f"Unknown lookup kind: {kind}") from None


async def ensure_unreferenced(
    db: AsyncSession, entity: str, obj_id: str, dependents: tuple[Dependent, ...]
) -> None:
    """Raise ReferentialIntegrityError naming the first dependent still in use."""
    for dep in dependents:
        if await crud.exists_active(db, dep.model, *dep.criteria(obj_id)):
            raise ReferentialIntegrityError(entity, dep.label)


# Foreign-key columns that must point at an existing, active row when written.
REFERENCES: dict[str, tuple[type, str]] = {
    "customer_type_id": (CustomerType, "Customer type"),
    "contact_type_id": (ContactType, "Contact type"),
    "panel_type_id": (PanelType, "Panel type"),
    "monitoring_type_id": (MonitoringType, "Monitoring type"),
    "device_type_id": (DeviceType, "Device type"),
    "communicator_type_id": (CommunicatorType, "Communicator type"),
    "work_order_type_id": (WorkOrderType, "Work order type"),
    "category_id": (WorkOrderCategory, "Work order category"),
    "status_id": (WorkOrderStatus, "Work order status"),
    "primary_communicator_id": (Communicator, "Communicator"),
    "secondary_communicator_id": (Communicator, "Communicator"),
    "technician_id": (Technician, "Technician"),
}


async def ensure_references(db: AsyncSession, fields: dict, current=None) -> None:
    """Raise NotFoundError when a referenced row is missing or inactive.

    With ``current`` given, values equal to what that row already holds are
    skipped.
    """
    for column, value in fields.items():
        if column not in REFERENCES or not value:
            continue
        if current is not None and getattr(current, column, None) == value:
            continue
        model, label = REFERENCES[column]
        row = await crud.get(db, model, value)
        if row is None or not row.is_active:
            raise NotFoundError(f"{label} with ID {value} not found")
