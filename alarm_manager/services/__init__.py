"""Service layer: one class per aggregate plus shared lifecycle and numbering rules."""

from alarm_manager.services.customers import CustomerService
from alarm_manager.services.dashboard import DashboardService, DashboardSummary
from alarm_manager.services.editing import EditSession
from alarm_manager.services.numbering import generate_work_order_number
from alarm_manager.services.seed import seed_defaults
from alarm_manager.services.settings import SettingsService
from alarm_manager.services.work_orders import WorkOrderService

__all__ = [
    "CustomerService", "DashboardService", "DashboardSummary", "EditSession",
    "SettingsService", "WorkOrderService",
    "generate_work_order_number", "seed_defaults",
]
