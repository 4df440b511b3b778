"""Pydantic input/output schemas."""

from alarm_manager.schemas.lookup import (
    LookupCreate, LookupUpdate, LookupRead,
    PanelTypeCreate, PanelTypeUpdate,
    WorkOrderStatusCreate, WorkOrderStatusUpdate,
)
from alarm_manager.schemas.customer import (
    CustomerCreate, CustomerUpdate, CustomerRead, ContactCreate, ContactUpdate,
)
from alarm_manager.schemas.security_system import (
    SecuritySystemCreate, SecuritySystemUpdate,
    ZoneCreate, ZoneUpdate,
    CallListEntryCreate, CallListEntryUpdate,
    CommunicatorCreate, CommunicatorUpdate,
)
from alarm_manager.schemas.technician import TechnicianCreate, TechnicianUpdate
from alarm_manager.schemas.work_order import (
    WorkOrderCreate, WorkOrderUpdate, WorkOrderRead, ScheduleRequest,
    WorkOrderItemCreate, WorkOrderItemUpdate, WorkOrderItemRead,
)

__all__ = [
    "LookupCreate", "LookupUpdate", "LookupRead",
    "PanelTypeCreate", "PanelTypeUpdate",
    "WorkOrderStatusCreate", "WorkOrderStatusUpdate",
    "CustomerCreate", "CustomerUpdate", "CustomerRead", "ContactCreate", "ContactUpdate",
    "SecuritySystemCreate", "SecuritySystemUpdate",
    "ZoneCreate", "ZoneUpdate",
    "CallListEntryCreate", "CallListEntryUpdate",
    "CommunicatorCreate", "CommunicatorUpdate",
    "TechnicianCreate", "TechnicianUpdate",
    "WorkOrderCreate", "WorkOrderUpdate", "WorkOrderRead", "ScheduleRequest",
    "WorkOrderItemCreate", "WorkOrderItemUpdate", "WorkOrderItemRead",
]
