"""Work order model: numbered jobs scheduled to technicians, with billable items."""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal

from sqlalchemy import Date, DateTime, ForeignKey, Numeric, String, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from alarm_manager.models.base import Base, ULIDMixin, AuditMixin, ActiveMixin


class WorkOrder(Base, ULIDMixin, AuditMixin):
    __tablename__ = "work_orders"

    # Assigned once at creation; updates never touch it.
    work_order_number: Mapped[str] = mapped_column(String(20), unique=True, index=True)
    customer_id: Mapped[str] = mapped_column(String(26), ForeignKey("customers.id", ondelete="RESTRICT"))
    description: Mapped[str] = mapped_column(String(500))
    work_order_type_id: Mapped[str] = mapped_column(String(26), ForeignKey("work_order_types.id"))
    category_id: Mapped[str] = mapped_column(String(26), ForeignKey("work_order_categories.id"))
    status_id: Mapped[str] = mapped_column(String(26), ForeignKey("work_order_statuses.id"))
    technician_id: Mapped[str | None] = mapped_column(
        String(26), ForeignKey("technicians.id", ondelete="SET NULL"), nullable=True, default=None
    )
    scheduled_date: Mapped[date | None] = mapped_column(Date, nullable=True, default=None, index=True)
    scheduled_start_time: Mapped[time | None] = mapped_column(Time, nullable=True, default=None)
    end_time: Mapped[time | None] = mapped_column(Time, nullable=True, default=None)
    estimated_hours: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True, default=None)
    actual_hours: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True, default=None)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, default=None)
    notes: Mapped[str | None] = mapped_column(String(1000), nullable=True, default=None)
    estimated_cost: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True, default=None)
    actual_cost: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True, default=None)
    created_by: Mapped[str] = mapped_column(String(50), default="")

    customer = relationship("Customer", back_populates="work_orders", lazy="selectin")
    work_order_type = relationship("WorkOrderType", lazy="selectin")
    category = relationship("WorkOrderCategory", lazy="selectin")
    status = relationship("WorkOrderStatus", lazy="selectin")
    technician = relationship("Technician", back_populates="work_orders", lazy="selectin")
    items = relationship(
        "WorkOrderItem", back_populates="work_order", cascade="all, delete-orphan",
        passive_deletes=True, lazy="selectin", order_by="WorkOrderItem.created_at",
    )

    @property
    def active_items(self) -> list[WorkOrderItem]:
        return [i for i in self.items if i.is_active]

    @property
    def items_total(self) -> Decimal:
        return sum((i.total_price for i in self.active_items), Decimal("0"))


class WorkOrderItem(Base, ULIDMixin, ActiveMixin):
    __tablename__ = "work_order_items"

    work_order_id: Mapped[str] = mapped_column(String(26), ForeignKey("work_orders.id", ondelete="CASCADE"))
    description: Mapped[str] = mapped_column(String(100))
    quantity: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    unit_price: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    part_number: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    notes: Mapped[str | None] = mapped_column(String(200), nullable=True, default=None)

    work_order = relationship("WorkOrder", back_populates="items")

    @property
    def total_price(self) -> Decimal:
        """Quantity times unit price; computed on read, never stored."""
        return Decimal(self.quantity) * Decimal(self.unit_price)
