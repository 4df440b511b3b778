"""Customer service: customers, contacts and their security systems."""

from __future__ import annotations

import logging

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession

from alarm_manager.db import crud
from alarm_manager.errors import NotFoundError, ValidationFailed
from alarm_manager.models import CallListEntry, Contact, Customer, SecuritySystem, Zone
from alarm_manager.schemas import (
    CallListEntryCreate, CallListEntryUpdate, ContactCreate, ContactUpdate,
    CustomerCreate, CustomerUpdate, SecuritySystemCreate, SecuritySystemUpdate,
    ZoneCreate, ZoneUpdate,
)
from alarm_manager.services.base import changes_for
from alarm_manager.services.lookups import ensure_references
from alarm_manager.validation import validate

logger = logging.getLogger(__name__)

_CUSTOMER_ORDER = (Customer.last_name, Customer.first_name)


class CustomerService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _require(self, model: type, obj_id: str, label: str, active: bool = False):
        obj = await crud.get(self.db, model, obj_id)
        if obj is None or (active and not obj.is_active):
            raise NotFoundError(f"{label} with ID {obj_id} not found")
        return obj

    async def _deactivate(self, model: type, obj_id: str, label: str) -> bool:
        obj = await crud.get(self.db, model, obj_id)
        if obj is None:
            logger.warning("%s with ID %s not found for deletion", label, obj_id)
            return False
        await crud.soft_delete(self.db, obj)
        logger.info("%s deleted: %s", label, obj_id)
        return True

    # ── Customers ────────────────────────────────────────

    async def list_customers(self) -> list[Customer]:
        return await crud.list_active(self.db, Customer, order_by=_CUSTOMER_ORDER)

    async def get_customer(self, customer_id: str) -> Customer | None:
        return await crud.get(self.db, Customer, customer_id)

    async def create_customer(self, data) -> Customer:
        data = validate(CustomerCreate, data)
        logger.info("Creating customer %s %s", data.first_name, data.last_name)
        if data.linked_customer_id:
            await self._require(Customer, data.linked_customer_id, "Linked customer", active=True)
        fields = data.model_dump()
        await ensure_references(self.db, fields)
        customer = await crud.create(self.db, Customer, **fields)
        logger.info("Customer created with ID: %s", customer.id)
        return customer

    async def update_customer(self, customer_id: str, data) -> Customer:
        data = validate(CustomerUpdate, data)
        customer = await self._require(Customer, customer_id, "Customer")
        changes = changes_for(Customer, data)
        linked = changes.get("linked_customer_id")
        if linked == customer_id:
            raise ValidationFailed(["Linked customer: a customer cannot be linked to itself"])
        if linked:
            await self._require(Customer, linked, "Linked customer", active=True)
        await ensure_references(self.db, changes, customer)
        customer = await crud.update(self.db, customer, **changes)
        logger.info("Customer updated: %s", customer_id)
        return customer

    async def delete_customer(self, customer_id: str) -> bool:
        return await self._deactivate(Customer, customer_id, "Customer")

    async def search_customers(self, term: str | None) -> list[Customer]:
        if term is None or not term.strip():
            return await self.list_customers()
        term = term.strip()
        text_match = or_(
            Customer.first_name.icontains(term, autoescape=True),
            Customer.last_name.icontains(term, autoescape=True),
            Customer.company_name.icontains(term, autoescape=True),
            Customer.email_address.icontains(term, autoescape=True),
            Customer.street.icontains(term, autoescape=True),
            Customer.city.icontains(term, autoescape=True),
            Customer.zip_code.contains(term, autoescape=True),
            Customer.home_phone.contains(term, autoescape=True),
            Customer.business_phone.contains(term, autoescape=True),
            Customer.cell_phone.contains(term, autoescape=True),
        )
        return await crud.list_active(self.db, Customer, text_match, order_by=_CUSTOMER_ORDER)

    async def customers_by_type(self, customer_type_id: str) -> list[Customer]:
        return await crud.list_active(
            self.db, Customer, Customer.customer_type_id == customer_type_id, order_by=_CUSTOMER_ORDER
        )

    # ── Contacts ─────────────────────────────────────────

    async def list_contacts(self, customer_id: str) -> list[Contact]:
        return await crud.list_active(
            self.db, Contact, Contact.customer_id == customer_id, order_by=(Contact.name,)
        )

    async def add_contact(self, data) -> Contact:
        data = validate(ContactCreate, data)
        await self._require(Customer, data.customer_id, "Customer", active=True)
        fields = data.model_dump()
        await ensure_references(self.db, fields)
        contact = await crud.create(self.db, Contact, **fields)
        logger.info("Contact %s added to customer %s", contact.id, contact.customer_id)
        return contact

    async def update_contact(self, contact_id: str, data) -> Contact:
        data = validate(ContactUpdate, data)
        contact = await self._require(Contact, contact_id, "Contact")
        changes = changes_for(Contact, data)
        await ensure_references(self.db, changes, contact)
        return await crud.update(self.db, contact, **changes)

    async def delete_contact(self, contact_id: str) -> bool:
        return await self._deactivate(Contact, contact_id, "Contact")

    # ── Security systems ─────────────────────────────────

    async def list_security_systems(self, customer_id: str) -> list[SecuritySystem]:
        return await crud.list_active(
            self.db, SecuritySystem, SecuritySystem.customer_id == customer_id,
            order_by=(SecuritySystem.created_at,),
        )

    async def get_security_system(self, system_id: str) -> SecuritySystem | None:
        return await crud.get(self.db, SecuritySystem, system_id)

    async def add_security_system(self, data) -> SecuritySystem:
        data = validate(SecuritySystemCreate, data)
        await self._require(Customer, data.customer_id, "Customer", active=True)
        fields = data.model_dump()
        await ensure_references(self.db, fields)
        system = await crud.create(self.db, SecuritySystem, **fields)
        logger.info("Security system %s added to customer %s", system.id, system.customer_id)
        return system

    async def update_security_system(self, system_id: str, data) -> SecuritySystem:
        data = validate(SecuritySystemUpdate, data)
        system = await self._require(SecuritySystem, system_id, "Security system")
        changes = changes_for(SecuritySystem, data)
        primary = changes.get("primary_communicator_id", system.primary_communicator_id)
        secondary = changes.get("secondary_communicator_id", system.secondary_communicator_id)
        if primary and primary == secondary:
            raise ValidationFailed(["Secondary communicator id: Primary and secondary communicator must differ"])
        await ensure_references(self.db, changes, system)
        system = await crud.update(self.db, system, **changes)
        logger.info("Security system updated: %s", system_id)
        return system

    async def delete_security_system(self, system_id: str) -> bool:
        return await self._deactivate(SecuritySystem, system_id, "Security system")

    # ── Zones ────────────────────────────────────────────

    async def list_zones(self, system_id: str) -> list[Zone]:
        return await crud.list_active(
            self.db, Zone, Zone.security_system_id == system_id, order_by=(Zone.zone_number,)
        )

    async def _ensure_zone_number_free(self, system_id: str, zone_number: int, exclude_id: str | None = None):
        crit = [Zone.security_system_id == system_id, Zone.zone_number == zone_number]
        if exclude_id:
            crit.append(Zone.id != exclude_id)
        if await crud.exists_active(self.db, Zone, *crit):
            raise ValidationFailed([f"Zone number: zone {zone_number} already exists on this system"])

    async def add_zone(self, data) -> Zone:
        data = validate(ZoneCreate, data)
        await self._require(SecuritySystem, data.security_system_id, "Security system", active=True)
        await self._ensure_zone_number_free(data.security_system_id, data.zone_number)
        fields = data.model_dump()
        await ensure_references(self.db, fields)
        return await crud.create(self.db, Zone, **fields)

    async def update_zone(self, zone_id: str, data) -> Zone:
        data = validate(ZoneUpdate, data)
        zone = await self._require(Zone, zone_id, "Zone")
        changes = changes_for(Zone, data)
        await ensure_references(self.db, changes, zone)
        if "zone_number" in changes:
            await self._ensure_zone_number_free(zone.security_system_id, changes["zone_number"], zone.id)
        return await crud.update(self.db, zone, **changes)

    async def delete_zone(self, zone_id: str) -> bool:
        return await self._deactivate(Zone, zone_id, "Zone")

    # ── Call list ────────────────────────────────────────

    async def list_call_list(self, system_id: str) -> list[CallListEntry]:
        return await crud.list_active(
            self.db, CallListEntry, CallListEntry.security_system_id == system_id,
            order_by=(CallListEntry.priority, CallListEntry.name),
        )

    async def add_call_list_entry(self, data) -> CallListEntry:
        data = validate(CallListEntryCreate, data)
        await self._require(SecuritySystem, data.security_system_id, "Security system", active=True)
        return await crud.create(self.db, CallListEntry, **data.model_dump())

    async def update_call_list_entry(self, entry_id: str, data) -> CallListEntry:
        data = validate(CallListEntryUpdate, data)
        entry = await self._require(CallListEntry, entry_id, "Call list entry")
        return await crud.update(self.db, entry, **changes_for(CallListEntry, data))

    async def delete_call_list_entry(self, entry_id: str) -> bool:
        return await self._deactivate(CallListEntry, entry_id, "Call list entry")
