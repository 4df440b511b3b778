"""Customer aggregate: customers and their contacts."""

from __future__ import annotations

from sqlalchemy import String, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from alarm_manager.models.base import Base, ULIDMixin, AuditMixin, ActiveMixin


class Customer(Base, ULIDMixin, AuditMixin):
    __tablename__ = "customers"
    __table_args__ = (
        Index("ix_customer_name", "last_name", "first_name"),
        Index("ix_customer_email", "email_address"),
    )

    company_name: Mapped[str | None] = mapped_column(String(100), nullable=True, default=None)
    first_name: Mapped[str] = mapped_column(String(50))
    last_name: Mapped[str] = mapped_column(String(50))
    street: Mapped[str] = mapped_column(String(100))
    city: Mapped[str] = mapped_column(String(50))
    state: Mapped[str] = mapped_column(String(2))
    zip_code: Mapped[str] = mapped_column(String(10))
    county: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    email_address: Mapped[str | None] = mapped_column(String(100), nullable=True, default=None)
    home_phone: Mapped[str | None] = mapped_column(String(15), nullable=True, default=None)
    business_phone: Mapped[str | None] = mapped_column(String(15), nullable=True, default=None)
    cell_phone: Mapped[str | None] = mapped_column(String(15), nullable=True, default=None)
    customer_type_id: Mapped[str] = mapped_column(String(26), ForeignKey("customer_types.id"))
    linked_customer_id: Mapped[str | None] = mapped_column(
        String(26), ForeignKey("customers.id", ondelete="RESTRICT"), nullable=True, default=None
    )
    created_by: Mapped[str] = mapped_column(String(50), default="")

    customer_type = relationship("CustomerType", lazy="selectin")
    linked_customer = relationship("Customer", remote_side="Customer.id", lazy="selectin", join_depth=1)
    contacts = relationship(
        "Contact", back_populates="customer", cascade="all, delete-orphan", passive_deletes=True
    )
    security_systems = relationship(
        "SecuritySystem", back_populates="customer", cascade="all, delete-orphan", passive_deletes=True
    )
    work_orders = relationship("WorkOrder", back_populates="customer", passive_deletes=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def display_name(self) -> str:
        if self.company_name:
            return f"{self.company_name} ({self.full_name})"
        return self.full_name


class Contact(Base, ULIDMixin, ActiveMixin):
    __tablename__ = "contacts"

    customer_id: Mapped[str] = mapped_column(String(26), ForeignKey("customers.id", ondelete="CASCADE"))
    name: Mapped[str] = mapped_column(String(100))
    home_phone: Mapped[str | None] = mapped_column(String(15), nullable=True, default=None)
    business_phone: Mapped[str | None] = mapped_column(String(15), nullable=True, default=None)
    cell_phone: Mapped[str | None] = mapped_column(String(15), nullable=True, default=None)
    email_address: Mapped[str | None] = mapped_column(String(100), nullable=True, default=None)
    contact_type_id: Mapped[str] = mapped_column(String(26), ForeignKey("contact_types.id"))

    customer = relationship("Customer", back_populates="contacts")
    contact_type = relationship("ContactType", lazy="selectin")
