from datetime import date, time
from decimal import Decimal

import pytest

from alarm_manager.errors import InvalidStatusTransition, NotFoundError, ValidationFailed
from alarm_manager.schemas import WorkOrderItemRead, WorkOrderRead
from alarm_manager.services.lifecycle import can_transition

from conftest import NOW, lookup_named, make_customer, make_work_order


@pytest.fixture
async def customer(settings_service, customer_service):
    return await make_customer(customer_service, settings_service)


@pytest.fixture
async def technician(settings_service):
    return await settings_service.add_technician({"first_name": "Rory", "last_name": "Ahn"})


async def test_new_work_order_starts_unscheduled(settings_service, work_order_service, customer):
    wo = await make_work_order(work_order_service, settings_service, customer, estimated_cost="120.50")

    fetched = await work_order_service.get_work_order(wo.id)
    assert fetched.work_order_number == "WO2024-0001"
    assert fetched.status.name == "Unscheduled"
    assert fetched.customer.id == customer.id
    assert fetched.estimated_cost == Decimal("120.50")
    assert fetched.completed_at is None
    assert await work_order_service.get_by_number("WO2024-0001") is not None


async def test_create_requires_active_customer(settings_service, customer_service, work_order_service, customer):
    await customer_service.delete_customer(customer.id)
    with pytest.raises(NotFoundError):
        await make_work_order(work_order_service, settings_service, customer)


async def test_supplied_number_must_be_unused(settings_service, work_order_service, customer):
    await make_work_order(work_order_service, settings_service, customer, work_order_number="WO2024-0100")
    with pytest.raises(ValidationFailed, match="already in use"):
        await make_work_order(work_order_service, settings_service, customer, work_order_number="WO2024-0100")


async def test_number_cannot_be_changed(settings_service, work_order_service, customer):
    wo = await make_work_order(work_order_service, settings_service, customer)
    with pytest.raises(ValidationFailed):
        await work_order_service.update_work_order(wo.id, {"work_order_number": "WO2024-9999"})

    await work_order_service.update_work_order(wo.id, {"notes": "Customer called twice"})
    fetched = await work_order_service.get_work_order(wo.id)
    assert fetched.work_order_number == wo.work_order_number
    assert fetched.notes == "Customer called twice"


async def test_schedule_then_complete(settings_service, work_order_service, customer, technician):
    wo = await make_work_order(work_order_service, settings_service, customer)

    await work_order_service.schedule(wo.id, {
        "scheduled_date": date(2024, 5, 20),
        "scheduled_start_time": time(9, 0),
        "end_time": time(11, 0),
        "technician_id": technician.id,
    })
    fetched = await work_order_service.get_work_order(wo.id)
    assert fetched.status.name == "Scheduled"
    assert fetched.technician.full_name == "Rory Ahn"

    await work_order_service.change_status(wo.id, "In Progress")
    await work_order_service.change_status(wo.id, "Pending")
    await work_order_service.change_status(wo.id, "In Progress")
    await work_order_service.complete(wo.id, actual_hours=Decimal("1.75"), actual_cost=Decimal("185.00"))

    done = await work_order_service.get_work_order(wo.id)
    assert done.status.name == "Completed"
    assert done.completed_at is not None
    assert done.actual_cost == Decimal("185.00")

    with pytest.raises(InvalidStatusTransition):
        await work_order_service.cancel(wo.id)


async def test_illegal_transitions_rejected(settings_service, work_order_service, customer):
    wo = await make_work_order(work_order_service, settings_service, customer)

    with pytest.raises(InvalidStatusTransition) as exc:
        await work_order_service.complete(wo.id)
    assert exc.value.current == "Unscheduled"
    assert exc.value.target == "Completed"

    completed = await lookup_named(settings_service, "work_order_status", "Completed")
    with pytest.raises(InvalidStatusTransition):
        await work_order_service.update_work_order(wo.id, {"status_id": completed.id})

    await work_order_service.cancel(wo.id)
    with pytest.raises(InvalidStatusTransition):
        await work_order_service.change_status(wo.id, "Scheduled")


def test_transition_table():
    assert can_transition("Unscheduled", "Scheduled")
    assert can_transition("Scheduled", "Unscheduled")
    assert can_transition("Pending", "In Progress")
    assert not can_transition("Unscheduled", "In Progress")
    assert not can_transition("Pending", "Completed")
    assert not can_transition("Completed", "In Progress")
    assert can_transition("Canceled", "Canceled")
    assert can_transition("In Progress", "Waiting on Parts")


async def test_scheduling_in_the_past_rejected(settings_service, work_order_service, customer):
    with pytest.raises(ValidationFailed, match="past"):
        await make_work_order(
            work_order_service, settings_service, customer, scheduled_date=date(2024, 5, 14)
        )

    wo = await make_work_order(work_order_service, settings_service, customer)
    with pytest.raises(ValidationFailed, match="past"):
        await work_order_service.schedule(wo.id, {"scheduled_date": date(2024, 1, 2)})

    today = await work_order_service.schedule(wo.id, {"scheduled_date": NOW.date()})
    assert today.scheduled_date == NOW.date()


async def test_end_time_must_follow_start(work_order_service, settings_service, customer):
    wo = await make_work_order(work_order_service, settings_service, customer)
    with pytest.raises(ValidationFailed, match="End time"):
        await work_order_service.schedule(wo.id, {
            "scheduled_date": date(2024, 5, 20),
            "scheduled_start_time": time(14, 0),
            "end_time": time(13, 0),
        })


async def test_items_total(settings_service, work_order_service, customer):
    wo = await make_work_order(work_order_service, settings_service, customer)

    sensor = await work_order_service.add_item(
        {"work_order_id": wo.id, "description": "Door contact", "quantity": "3", "unit_price": "12.50"}
    )
    await work_order_service.add_item(
        {"work_order_id": wo.id, "description": "Labor", "quantity": "1.5", "unit_price": "95.00"}
    )
    battery = await work_order_service.add_item(
        {"work_order_id": wo.id, "description": "Battery 12V 7Ah", "quantity": "1", "unit_price": "24.99"}
    )

    assert sensor.total_price == Decimal("37.50")
    assert await work_order_service.items_total(wo.id) == Decimal("204.99")

    await work_order_service.delete_item(battery.id)
    await work_order_service.update_item(sensor.id, {"quantity": "2"})
    assert await work_order_service.items_total(wo.id) == Decimal("167.50")
    assert [i.description for i in await work_order_service.list_items(wo.id)] == ["Door contact", "Labor"]

    read = WorkOrderRead.model_validate(await work_order_service.get_work_order(wo.id))
    assert read.items_total == Decimal("167.50")
    assert WorkOrderItemRead.model_validate(sensor).total_price == Decimal("25.00")


async def test_item_quantity_must_be_positive(settings_service, work_order_service, customer):
    wo = await make_work_order(work_order_service, settings_service, customer)
    with pytest.raises(ValidationFailed, match="Quantity"):
        await work_order_service.add_item(
            {"work_order_id": wo.id, "description": "Nothing", "quantity": "0", "unit_price": "1"}
        )


async def test_queries(settings_service, customer_service, work_order_service, customer, technician):
    other = await make_customer(customer_service, settings_service, first_name="Theo", last_name="Marsh")
    a = await make_work_order(work_order_service, settings_service, customer, description="Replace siren")
    b = await make_work_order(work_order_service, settings_service, other, description="Annual fire inspection")
    c = await make_work_order(work_order_service, settings_service, other, description="Add glass break")

    await work_order_service.schedule(b.id, {"scheduled_date": date(2024, 5, 22), "technician_id": technician.id})
    await work_order_service.schedule(c.id, {
        "scheduled_date": date(2024, 5, 20), "scheduled_start_time": time(8, 0), "technician_id": technician.id,
    })

    assert [w.id for w in await work_order_service.list_work_orders()] == [c.id, b.id, a.id]
    assert {w.id for w in await work_order_service.by_customer(other.id)} == {b.id, c.id}
    assert [w.id for w in await work_order_service.by_technician(technician.id)] == [c.id, b.id]
    assert [w.id for w in await work_order_service.scheduled_on(date(2024, 5, 22))] == [b.id]
    assert [w.id for w in await work_order_service.by_date_range(date(2024, 5, 19), date(2024, 5, 21))] == [c.id]
    with pytest.raises(ValidationFailed):
        await work_order_service.by_date_range(date(2024, 5, 21), date(2024, 5, 19))

    scheduled = await lookup_named(settings_service, "work_order_status", "Scheduled")
    assert {w.id for w in await work_order_service.by_status(scheduled.id)} == {b.id, c.id}

    assert [w.id for w in await work_order_service.search_work_orders("siren")] == [a.id]
    assert {w.id for w in await work_order_service.search_work_orders("marsh")} == {b.id, c.id}
    assert {w.id for w in await work_order_service.search_work_orders("ahn")} == {b.id, c.id}
    assert [w.id for w in await work_order_service.search_work_orders("WO2024-0001")] == [a.id]


async def test_soft_deleted_work_order_still_reachable(settings_service, work_order_service, customer):
    wo = await make_work_order(work_order_service, settings_service, customer)
    assert await work_order_service.delete_work_order(wo.id) is True

    assert await work_order_service.list_work_orders() == []
    assert await work_order_service.search_work_orders(wo.work_order_number) == []
    assert (await work_order_service.get_work_order(wo.id)).is_active is False
    assert (await work_order_service.get_by_number(wo.work_order_number)).id == wo.id
    assert await work_order_service.delete_work_order("01HZZZZZZZZZZZZZZZZZZZZZZZ") is False


async def test_partial_time_update_checked_against_stored_start(settings_service, work_order_service, customer):
    wo = await make_work_order(
        work_order_service, settings_service, customer,
        scheduled_date=date(2024, 5, 20), scheduled_start_time=time(14, 0),
    )
    with pytest.raises(ValidationFailed, match="End time"):
        await work_order_service.update_work_order(wo.id, {"end_time": time(9, 0)})

    later = await work_order_service.update_work_order(wo.id, {"end_time": time(16, 0)})
    assert later.end_time == time(16, 0)


async def test_schedule_start_checked_against_stored_end(settings_service, work_order_service, customer):
    wo = await make_work_order(work_order_service, settings_service, customer, end_time=time(10, 0))
    with pytest.raises(ValidationFailed, match="End time"):
        await work_order_service.schedule(wo.id, {
            "scheduled_date": date(2024, 5, 20), "scheduled_start_time": time(15, 0),
        })
    assert (await work_order_service.get_work_order(wo.id)).status.name == "Unscheduled"


async def test_work_order_references_must_be_active(settings_service, work_order_service, customer, technician):
    spare = await settings_service.add_lookup("work_order_type", {"name": "Takeover"})
    await settings_service.delete_lookup("work_order_type", spare.id)
    with pytest.raises(NotFoundError, match="Work order type"):
        await make_work_order(work_order_service, settings_service, customer, work_order_type_id=spare.id)
    with pytest.raises(NotFoundError, match="Work order category"):
        await make_work_order(
            work_order_service, settings_service, customer, category_id="01HZZZZZZZZZZZZZZZZZZZZZZZ"
        )

    wo = await make_work_order(work_order_service, settings_service, customer)
    hold = await settings_service.add_lookup("work_order_status", {"name": "On Hold"})
    await settings_service.delete_lookup("work_order_status", hold.id)
    with pytest.raises(NotFoundError, match="Work order status"):
        await work_order_service.update_work_order(wo.id, {"status_id": hold.id})

    await settings_service.delete_technician(technician.id)
    with pytest.raises(NotFoundError, match="Technician"):
        await work_order_service.update_work_order(wo.id, {"technician_id": technician.id})
    with pytest.raises(NotFoundError, match="Technician"):
        await work_order_service.schedule(wo.id, {"scheduled_date": date(2024, 5, 20), "technician_id": technician.id})
