from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator


def check_times(start: time | None, end: time | None) -> None:
    if start is not None and end is not None and end <= start:
        raise ValueError("End time must be after the scheduled start time")


class WorkOrderCreate(BaseModel):
    # Normally left blank and generated; set only when importing existing orders.
    work_order_number: str | None = Field(default=None, max_length=20)
    customer_id: str = Field(min_length=1)
    description: str = Field(min_length=1, max_length=500)
    work_order_type_id: str = Field(min_length=1)
    category_id: str = Field(min_length=1)
    technician_id: str | None = None
    scheduled_date: date | None = None
    scheduled_start_time: time | None = None
    end_time: time | None = None
    estimated_hours: Decimal | None = Field(default=None, ge=0, max_digits=5, decimal_places=2)
    estimated_cost: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    notes: str | None = Field(default=None, max_length=1000)
    created_by: str = Field(default="", max_length=50)

    model_config = {"str_strip_whitespace": True}

    @model_validator(mode="after")
    def validate_times(self):
        check_times(self.scheduled_start_time, self.end_time)
        return self


class WorkOrderUpdate(BaseModel):
    """Editable work-order fields. The number is immutable and rejected here."""

    description: str | None = Field(default=None, min_length=1, max_length=500)
    work_order_type_id: str | None = None
    category_id: str | None = None
    status_id: str | None = None
    technician_id: str | None = None
    scheduled_date: date | None = None
    scheduled_start_time: time | None = None
    end_time: time | None = None
    estimated_hours: Decimal | None = Field(default=None, ge=0, max_digits=5, decimal_places=2)
    actual_hours: Decimal | None = Field(default=None, ge=0, max_digits=5, decimal_places=2)
    notes: str | None = Field(default=None, max_length=1000)
    estimated_cost: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    actual_cost: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)

    model_config = {"str_strip_whitespace": True, "extra": "forbid"}

    @model_validator(mode="after")
    def validate_times(self):
        check_times(self.scheduled_start_time, self.end_time)
        return self


class ScheduleRequest(BaseModel):
    scheduled_date: date
    scheduled_start_time: time | None = None
    end_time: time | None = None
    technician_id: str | None = None

    @model_validator(mode="after")
    def validate_times(self):
        check_times(self.scheduled_start_time, self.end_time)
        return self


class WorkOrderRead(BaseModel):
    id: str
    work_order_number: str
    customer_id: str
    description: str
    work_order_type_id: str
    category_id: str
    status_id: str
    technician_id: str | None = None
    scheduled_date: date | None = None
    scheduled_start_time: time | None = None
    end_time: time | None = None
    estimated_hours: Decimal | None = None
    actual_hours: Decimal | None = None
    completed_at: datetime | None = None
    notes: str | None = None
    estimated_cost: Decimal | None = None
    actual_cost: Decimal | None = None
    items_total: Decimal = Decimal("0")
    created_by: str = ""
    is_active: bool
    created_at: datetime
    modified_at: datetime | None = None

    model_config = {"from_attributes": True}


class WorkOrderItemCreate(BaseModel):
    work_order_id: str = Field(min_length=1)
    description: str = Field(min_length=1, max_length=100)
    quantity: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    unit_price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    part_number: str | None = Field(default=None, max_length=50)
    notes: str | None = Field(default=None, max_length=200)

    model_config = {"str_strip_whitespace": True}


class WorkOrderItemUpdate(BaseModel):
    description: str | None = Field(default=None, min_length=1, max_length=100)
    quantity: Decimal | None = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    unit_price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    part_number: str | None = Field(default=None, max_length=50)
    notes: str | None = Field(default=None, max_length=200)

    model_config = {"str_strip_whitespace": True}


class WorkOrderItemRead(BaseModel):
    id: str
    work_order_id: str
    description: str
    quantity: Decimal
    unit_price: Decimal
    total_price: Decimal
    part_number: str | None = None
    notes: str | None = None

    model_config = {"from_attributes": True}
