"""SQLAlchemy ORM models."""

from alarm_manager.models.base import Base
from alarm_manager.models.lookups import (
    CustomerType, ContactType, PanelType, MonitoringType, DeviceType,
    CommunicatorType, WorkOrderType, WorkOrderCategory, WorkOrderStatus,
)
from alarm_manager.models.customer import Customer, Contact
from alarm_manager.models.security_system import SecuritySystem, Zone, CallListEntry, Communicator
from alarm_manager.models.technician import Technician
from alarm_manager.models.work_order import WorkOrder, WorkOrderItem

__all__ = [
    "Base",
    # Lookups
    "CustomerType", "ContactType", "PanelType", "MonitoringType", "DeviceType",
    "CommunicatorType", "WorkOrderType", "WorkOrderCategory", "WorkOrderStatus",
    # Aggregates
    "Customer", "Contact",
    "SecuritySystem", "Zone", "CallListEntry", "Communicator",
    "Technician",
    "WorkOrder", "WorkOrderItem",
]
