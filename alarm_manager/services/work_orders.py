"""Work order service: numbering, scheduling, status lifecycle and billable items."""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Callable

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from alarm_manager.config import WorkOrderConfig
from alarm_manager.db import crud
from alarm_manager.errors import NotFoundError, ValidationFailed
from alarm_manager.models import Customer, Technician, WorkOrder, WorkOrderItem, WorkOrderStatus
from alarm_manager.models.base import utcnow
from alarm_manager.schemas import (
    ScheduleRequest, WorkOrderCreate, WorkOrderItemCreate, WorkOrderItemUpdate, WorkOrderUpdate,
)
from alarm_manager.schemas.work_order import check_times
from alarm_manager.services import lifecycle
from alarm_manager.services.base import changes_for
from alarm_manager.services.lookups import ensure_references
from alarm_manager.services.numbering import generate_work_order_number
from alarm_manager.validation import validate

logger = logging.getLogger(__name__)

_NEWEST_FIRST = (WorkOrder.created_at.desc(), WorkOrder.work_order_number.desc())
_BY_SCHEDULE = (WorkOrder.scheduled_date, WorkOrder.scheduled_start_time, WorkOrder.work_order_number)


class WorkOrderService:
    def __init__(
        self,
        db: AsyncSession,
        config: WorkOrderConfig | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.db = db
        self.config = config or WorkOrderConfig()
        self.clock = clock

    def _today(self) -> date:
        return self.clock().date()

    async def _require(self, work_order_id: str) -> WorkOrder:
        wo = await crud.get(self.db, WorkOrder, work_order_id)
        if wo is None:
            raise NotFoundError(f"Work order with ID {work_order_id} not found")
        return wo

    async def _status_named(self, name: str) -> WorkOrderStatus:
        status = await crud.first_active(self.db, WorkOrderStatus, WorkOrderStatus.name == name)
        if status is None:
            raise NotFoundError(f"Work order status '{name}' not found")
        return status

    def _check_not_past(self, scheduled: date | None, status_name: str | None = None) -> None:
        # Completed orders keep whatever date they were worked on.
        if scheduled is None or status_name == lifecycle.COMPLETED:
            return
        if scheduled < self._today():
            raise ValidationFailed(["Scheduled date: cannot be in the past"])

    @staticmethod
    def _check_window(wo: WorkOrder, fields: dict) -> None:
        # Partial writes are checked against the times already stored.
        start = fields.get("scheduled_start_time", wo.scheduled_start_time)
        end = fields.get("end_time", wo.end_time)
        try:
            check_times(start, end)
        except ValueError as exc:
            raise ValidationFailed([str(exc)]) from exc

    async def _list(self, *criteria, order_by=_NEWEST_FIRST) -> list[WorkOrder]:
        return await crud.list_active(self.db, WorkOrder, *criteria, order_by=order_by)

    # ── Queries ──────────────────────────────────────────

    async def list_work_orders(self) -> list[WorkOrder]:
        return await self._list()

    async def get_work_order(self, work_order_id: str) -> WorkOrder | None:
        return await crud.get(self.db, WorkOrder, work_order_id)

    async def get_by_number(self, work_order_number: str) -> WorkOrder | None:
        result = await self.db.execute(
            select(WorkOrder).where(WorkOrder.work_order_number == work_order_number)
        )
        return result.scalars().first()

    async def search_work_orders(self, term: str | None) -> list[WorkOrder]:
        if term is None or not term.strip():
            return await self.list_work_orders()
        term = term.strip()
        stmt = (
            select(WorkOrder)
            .join(Customer, WorkOrder.customer_id == Customer.id)
            .outerjoin(Technician, WorkOrder.technician_id == Technician.id)
            .where(
                WorkOrder.is_active == True,
                or_(
                    WorkOrder.work_order_number.icontains(term, autoescape=True),
                    WorkOrder.description.icontains(term, autoescape=True),
                    WorkOrder.notes.icontains(term, autoescape=True),
                    Customer.first_name.icontains(term, autoescape=True),
                    Customer.last_name.icontains(term, autoescape=True),
                    Customer.company_name.icontains(term, autoescape=True),
                    Technician.first_name.icontains(term, autoescape=True),
                    Technician.last_name.icontains(term, autoescape=True),
                ),
            )
            .order_by(*_NEWEST_FIRST)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().unique().all())

    async def by_customer(self, customer_id: str) -> list[WorkOrder]:
        return await self._list(WorkOrder.customer_id == customer_id)

    async def by_technician(self, technician_id: str) -> list[WorkOrder]:
        return await self._list(WorkOrder.technician_id == technician_id, order_by=_BY_SCHEDULE)

    async def by_status(self, status_id: str) -> list[WorkOrder]:
        return await self._list(WorkOrder.status_id == status_id)

    async def by_date_range(self, start: date, end: date) -> list[WorkOrder]:
        if end < start:
            raise ValidationFailed(["End date: must not be before the start date"])
        return await self._list(
            WorkOrder.scheduled_date >= start, WorkOrder.scheduled_date <= end, order_by=_BY_SCHEDULE
        )

    async def scheduled_on(self, day: date) -> list[WorkOrder]:
        return await self._list(WorkOrder.scheduled_date == day, order_by=_BY_SCHEDULE)

    async def generate_work_order_number(self) -> str:
        return await generate_work_order_number(
            self.db, self._today(), self.config.number_prefix, self.config.number_width
        )

    # ── Mutations ────────────────────────────────────────

    async def create_work_order(self, data) -> WorkOrder:
        data = validate(WorkOrderCreate, data)
        customer = await crud.get(self.db, Customer, data.customer_id)
        if customer is None or not customer.is_active:
            raise NotFoundError(f"Customer with ID {data.customer_id} not found")
        self._check_not_past(data.scheduled_date)
        fields = data.model_dump()
        await ensure_references(self.db, fields)
        status = await self._status_named(lifecycle.UNSCHEDULED)

        number = fields.pop("work_order_number") or None
        if number is None:
            number = await self.generate_work_order_number()
        elif await self.get_by_number(number) is not None:
            raise ValidationFailed([f"Work order number: {number} is already in use"])

        wo = await crud.create(
            self.db, WorkOrder, work_order_number=number, status_id=status.id, **fields
        )
        logger.info("Work order %s created for customer %s", wo.work_order_number, wo.customer_id)
        return wo

    async def update_work_order(self, work_order_id: str, data) -> WorkOrder:
        data = validate(WorkOrderUpdate, data)
        wo = await self._require(work_order_id)
        changes = changes_for(WorkOrder, data)
        await ensure_references(self.db, changes, wo)
        self._check_window(wo, changes)

        target_name = wo.status.name
        if "status_id" in changes and changes["status_id"] != wo.status_id:
            target = await crud.get(self.db, WorkOrderStatus, changes["status_id"])
            if target is None:
                raise NotFoundError(f"Work order status with ID {changes['status_id']} not found")
            lifecycle.ensure_transition(wo.status.name, target.name)
            target_name = target.name
            if target_name == lifecycle.COMPLETED:
                changes["completed_at"] = utcnow()
        if "scheduled_date" in changes:
            self._check_not_past(changes["scheduled_date"], target_name)

        wo = await crud.update(self.db, wo, **changes)
        logger.info("Work order %s updated", wo.work_order_number)
        return wo

    async def delete_work_order(self, work_order_id: str) -> bool:
        wo = await crud.get(self.db, WorkOrder, work_order_id)
        if wo is None:
            logger.warning("Work order with ID %s not found for deletion", work_order_id)
            return False
        await crud.soft_delete(self.db, wo)
        logger.info("Work order %s deleted", wo.work_order_number)
        return True

    # ── Lifecycle ────────────────────────────────────────

    async def change_status(self, work_order_id: str, status_name: str, **fields) -> WorkOrder:
        """Move a work order to the status called ``status_name``.

        Extra keyword fields (actual hours, cost, notes) are written in the
        same commit. Raises InvalidStatusTransition for an illegal move.
        """
        wo = await self._require(work_order_id)
        target = await self._status_named(status_name)
        lifecycle.ensure_transition(wo.status.name, target.name)
        if target.name == lifecycle.COMPLETED and wo.status.name != lifecycle.COMPLETED:
            fields["completed_at"] = utcnow()
        wo = await crud.update(self.db, wo, status_id=target.id, **fields)
        logger.info("Work order %s is now %s", wo.work_order_number, target.name)
        return wo

    async def schedule(self, work_order_id: str, data) -> WorkOrder:
        data = validate(ScheduleRequest, data)
        wo = await self._require(work_order_id)
        lifecycle.ensure_transition(wo.status.name, lifecycle.SCHEDULED)
        self._check_not_past(data.scheduled_date, wo.status.name)
        fields = data.model_dump(exclude_unset=True)
        await ensure_references(self.db, fields)
        self._check_window(wo, fields)
        return await self.change_status(work_order_id, lifecycle.SCHEDULED, **fields)

    async def complete(
        self,
        work_order_id: str,
        actual_hours: Decimal | None = None,
        actual_cost: Decimal | None = None,
    ) -> WorkOrder:
        fields = {}
        if actual_hours is not None:
            fields["actual_hours"] = actual_hours
        if actual_cost is not None:
            fields["actual_cost"] = actual_cost
        return await self.change_status(work_order_id, lifecycle.COMPLETED, **fields)

    async def cancel(self, work_order_id: str) -> WorkOrder:
        return await self.change_status(work_order_id, lifecycle.CANCELED)

    # ── Items ────────────────────────────────────────────

    async def list_items(self, work_order_id: str) -> list[WorkOrderItem]:
        return await crud.list_active(
            self.db, WorkOrderItem, WorkOrderItem.work_order_id == work_order_id,
            order_by=(WorkOrderItem.created_at,),
        )

    async def add_item(self, data) -> WorkOrderItem:
        data = validate(WorkOrderItemCreate, data)
        wo = await crud.get(self.db, WorkOrder, data.work_order_id)
        if wo is None or not wo.is_active:
            raise NotFoundError(f"Work order with ID {data.work_order_id} not found")
        item = await crud.create(self.db, WorkOrderItem, **data.model_dump())
        logger.info("Item %r added to work order %s", item.description, wo.work_order_number)
        return item

    async def update_item(self, item_id: str, data) -> WorkOrderItem:
        data = validate(WorkOrderItemUpdate, data)
        item = await crud.get(self.db, WorkOrderItem, item_id)
        if item is None:
            raise NotFoundError(f"Work order item with ID {item_id} not found")
        return await crud.update(self.db, item, **changes_for(WorkOrderItem, data))

    async def delete_item(self, item_id: str) -> bool:
        item = await crud.get(self.db, WorkOrderItem, item_id)
        if item is None:
            logger.warning("Work order item with ID %s not found for deletion", item_id)
            return False
        await crud.soft_delete(self.db, item)
        return True

    async def items_total(self, work_order_id: str) -> Decimal:
        items = await self.list_items(work_order_id)
        return sum((i.total_price for i in items), Decimal("0"))
