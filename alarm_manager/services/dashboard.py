"""Dashboard metrics for the landing screen."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from alarm_manager.config import WorkOrderConfig
from alarm_manager.models import Customer, SecuritySystem, WorkOrder, WorkOrderStatus
from alarm_manager.services.lifecycle import COMPLETED, TERMINAL

logger = logging.getLogger(__name__)


@dataclass
class DashboardSummary:
    total_customers: int = 0
    new_customers_this_month: int = 0
    active_security_systems: int = 0
    total_work_orders: int = 0
    open_work_orders: int = 0
    overdue_work_orders: int = 0
    completed_this_month: int = 0
    monthly_revenue: Decimal = Decimal("0")
    recent_work_orders: list[WorkOrder] = field(default_factory=list)
    upcoming_work_orders: list[WorkOrder] = field(default_factory=list)


def _month_start(today: date) -> datetime:
    return datetime(today.year, today.month, 1, tzinfo=timezone.utc)


class DashboardService:
    def __init__(self, db: AsyncSession, config: WorkOrderConfig | None = None):
        self.db = db
        self.config = config or WorkOrderConfig()

    async def _count(self, model: type, *criteria) -> int:
        result = await self.db.execute(
            select(func.count(model.id)).where(model.is_active == True, *criteria)
        )
        return result.scalar_one()

    async def summary(self, today: date | None = None) -> DashboardSummary:
        today = today or date.today()
        month_start = _month_start(today)
        terminal_ids = select(WorkOrderStatus.id).where(WorkOrderStatus.name.in_(TERMINAL))
        completed_ids = select(WorkOrderStatus.id).where(WorkOrderStatus.name == COMPLETED)
        is_open = WorkOrder.status_id.not_in(terminal_ids)
        completed_this_month = (
            WorkOrder.status_id.in_(completed_ids),
            WorkOrder.completed_at >= month_start,
        )

        revenue = await self.db.execute(
            select(func.coalesce(func.sum(WorkOrder.actual_cost), 0))
            .where(WorkOrder.is_active == True, *completed_this_month)
        )
        recent = await self.db.execute(
            select(WorkOrder).where(WorkOrder.is_active == True)
            .order_by(WorkOrder.created_at.desc(), WorkOrder.work_order_number.desc())
            .limit(self.config.recent_limit)
        )
        upcoming = await self.db.execute(
            select(WorkOrder).where(
                WorkOrder.is_active == True, is_open,
                WorkOrder.scheduled_date >= today,
                WorkOrder.scheduled_date <= today + timedelta(days=self.config.upcoming_days),
            ).order_by(WorkOrder.scheduled_date, WorkOrder.scheduled_start_time)
        )

        summary = DashboardSummary(
            total_customers=await self._count(Customer),
            new_customers_this_month=await self._count(Customer, Customer.created_at >= month_start),
            active_security_systems=await self._count(SecuritySystem),
            total_work_orders=await self._count(WorkOrder),
            open_work_orders=await self._count(WorkOrder, is_open),
            overdue_work_orders=await self._count(WorkOrder, is_open, WorkOrder.scheduled_date < today),
            completed_this_month=await self._count(WorkOrder, *completed_this_month),
            monthly_revenue=Decimal(str(revenue.scalar_one())),
            recent_work_orders=list(recent.scalars().all()),
            upcoming_work_orders=list(upcoming.scalars().all()),
        )
        logger.debug("Dashboard summary for %s: %s open, %s overdue",
                     today, summary.open_work_orders, summary.overdue_work_orders)
        return summary
