"""Lookup tables: small named categories referenced by operational rows."""

from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from alarm_manager.models.base import Base, ULIDMixin, ActiveMixin


class LookupMixin(ULIDMixin, ActiveMixin):
    name: Mapped[str] = mapped_column(String(50))
    description: Mapped[str | None] = mapped_column(String(200), nullable=True, default=None)

    @property
    def display_name(self) -> str:
        return self.name


class CustomerType(Base, LookupMixin):
    __tablename__ = "customer_types"


class ContactType(Base, LookupMixin):
    __tablename__ = "contact_types"


class MonitoringType(Base, LookupMixin):
    __tablename__ = "monitoring_types"


class DeviceType(Base, LookupMixin):
    __tablename__ = "device_types"


class CommunicatorType(Base, LookupMixin):
    __tablename__ = "communicator_types"


class WorkOrderType(Base, LookupMixin):
    __tablename__ = "work_order_types"


class WorkOrderCategory(Base, LookupMixin):
    __tablename__ = "work_order_categories"


class WorkOrderStatus(Base, LookupMixin):
    __tablename__ = "work_order_statuses"

    color_code: Mapped[str | None] = mapped_column(String(7), nullable=True, default=None)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)


class PanelType(Base, ULIDMixin, ActiveMixin):
    """Alarm control panel model, named by manufacturer + model number."""

    __tablename__ = "panel_types"

    manufacturer: Mapped[str] = mapped_column(String(50))
    model_number: Mapped[str] = mapped_column(String(50))
    description: Mapped[str | None] = mapped_column(String(200), nullable=True, default=None)

    @property
    def display_name(self) -> str:
        return f"{self.manufacturer} {self.model_number}"
