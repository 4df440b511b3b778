"""Technician model: assigned to scheduled work orders."""

from __future__ import annotations

from datetime import date

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from alarm_manager.models.base import Base, ULIDMixin, ActiveMixin


class Technician(Base, ULIDMixin, ActiveMixin):
    __tablename__ = "technicians"

    first_name: Mapped[str] = mapped_column(String(50))
    last_name: Mapped[str] = mapped_column(String(50))
    email_address: Mapped[str | None] = mapped_column(String(100), nullable=True, default=None)
    phone_number: Mapped[str | None] = mapped_column(String(15), nullable=True, default=None)
    cell_phone: Mapped[str | None] = mapped_column(String(15), nullable=True, default=None)
    employee_number: Mapped[str | None] = mapped_column(String(20), nullable=True, default=None)
    hire_date: Mapped[date | None] = mapped_column(Date, nullable=True, default=None)
    specializations: Mapped[str | None] = mapped_column(String(200), nullable=True, default=None)
    certifications: Mapped[str | None] = mapped_column(String(200), nullable=True, default=None)

    work_orders = relationship("WorkOrder", back_populates="technician", passive_deletes=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def display_name(self) -> str:
        return self.full_name
