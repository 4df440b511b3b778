"""Security system aggregate: panel, zones, call list, communicators."""

from __future__ import annotations

from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from alarm_manager.models.base import Base, ULIDMixin, AuditMixin, ActiveMixin


class Communicator(Base, ULIDMixin, ActiveMixin):
    __tablename__ = "communicators"

    communicator_type_id: Mapped[str] = mapped_column(String(26), ForeignKey("communicator_types.id"))
    manufacturer: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    model_number: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    radio_id: Mapped[str | None] = mapped_column(String(20), nullable=True, default=None)
    ip_address: Mapped[str | None] = mapped_column(String(15), nullable=True, default=None)
    gateway: Mapped[str | None] = mapped_column(String(15), nullable=True, default=None)
    subnet: Mapped[str | None] = mapped_column(String(15), nullable=True, default=None)
    notes: Mapped[str | None] = mapped_column(String(200), nullable=True, default=None)

    communicator_type = relationship("CommunicatorType", lazy="selectin")


class SecuritySystem(Base, ULIDMixin, AuditMixin):
    __tablename__ = "security_systems"

    customer_id: Mapped[str] = mapped_column(String(26), ForeignKey("customers.id", ondelete="CASCADE"))
    central_station_number: Mapped[str | None] = mapped_column(
        String(20), nullable=True, default=None, index=True
    )
    panel_type_id: Mapped[str | None] = mapped_column(
        String(26), ForeignKey("panel_types.id"), nullable=True, default=None
    )
    monitoring_type_id: Mapped[str | None] = mapped_column(
        String(26), ForeignKey("monitoring_types.id"), nullable=True, default=None
    )
    monitoring_start_date: Mapped[date | None] = mapped_column(Date, nullable=True, default=None)
    installed_date: Mapped[date | None] = mapped_column(Date, nullable=True, default=None)
    master_security_code: Mapped[str | None] = mapped_column(String(10), nullable=True, default=None)
    code_word: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    police_phone: Mapped[str | None] = mapped_column(String(15), nullable=True, default=None)
    fire_dept_phone: Mapped[str | None] = mapped_column(String(15), nullable=True, default=None)
    ambulance_phone: Mapped[str | None] = mapped_column(String(15), nullable=True, default=None)
    city_permit_number: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    permit_due_date: Mapped[date | None] = mapped_column(Date, nullable=True, default=None)
    authority_notes: Mapped[str | None] = mapped_column(String(500), nullable=True, default=None)
    primary_communicator_id: Mapped[str | None] = mapped_column(
        String(26), ForeignKey("communicators.id", ondelete="RESTRICT"), nullable=True, default=None
    )
    secondary_communicator_id: Mapped[str | None] = mapped_column(
        String(26), ForeignKey("communicators.id", ondelete="RESTRICT"), nullable=True, default=None
    )

    customer = relationship("Customer", back_populates="security_systems")
    panel_type = relationship("PanelType", lazy="selectin")
    monitoring_type = relationship("MonitoringType", lazy="selectin")
    primary_communicator = relationship(
        "Communicator", foreign_keys=[primary_communicator_id], lazy="selectin"
    )
    secondary_communicator = relationship(
        "Communicator", foreign_keys=[secondary_communicator_id], lazy="selectin"
    )
    zones = relationship(
        "Zone", back_populates="security_system", cascade="all, delete-orphan",
        passive_deletes=True, order_by="Zone.zone_number",
    )
    call_list = relationship(
        "CallListEntry", back_populates="security_system", cascade="all, delete-orphan",
        passive_deletes=True, order_by="CallListEntry.priority",
    )


class Zone(Base, ULIDMixin, ActiveMixin):
    __tablename__ = "zones"

    security_system_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("security_systems.id", ondelete="CASCADE")
    )
    zone_number: Mapped[int] = mapped_column(Integer)
    signal: Mapped[str | None] = mapped_column(String(10), nullable=True, default=None)
    description: Mapped[str] = mapped_column(String(100))
    device_type_id: Mapped[str | None] = mapped_column(
        String(26), ForeignKey("device_types.id"), nullable=True, default=None
    )
    wireless_id: Mapped[str | None] = mapped_column(String(20), nullable=True, default=None)

    security_system = relationship("SecuritySystem", back_populates="zones")
    device_type = relationship("DeviceType", lazy="selectin")


class CallListEntry(Base, ULIDMixin, ActiveMixin):
    __tablename__ = "call_list_entries"

    security_system_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("security_systems.id", ondelete="CASCADE")
    )
    priority: Mapped[int] = mapped_column(Integer)
    name: Mapped[str] = mapped_column(String(100))
    phone_number: Mapped[str] = mapped_column(String(15))
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True, default=None)

    security_system = relationship("SecuritySystem", back_populates="call_list")
