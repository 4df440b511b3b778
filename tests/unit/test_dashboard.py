from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from alarm_manager.config import WorkOrderConfig
from alarm_manager.services import DashboardService, WorkOrderService

from conftest import make_customer, make_work_order


async def test_empty_database(seeded):
    summary = await DashboardService(seeded).summary(date(2024, 5, 15))
    assert summary.total_customers == 0
    assert summary.open_work_orders == 0
    assert summary.monthly_revenue == Decimal("0")
    assert summary.recent_work_orders == []


async def test_summary_counts(settings_service, customer_service):
    db = customer_service.db
    now = datetime.now(timezone.utc)
    today = now.date()
    work_orders = WorkOrderService(db, clock=lambda: now)

    customer = await make_customer(customer_service, settings_service)
    gone = await make_customer(customer_service, settings_service, first_name="Gone")
    await customer_service.delete_customer(gone.id)
    await customer_service.add_security_system({"customer_id": customer.id})

    upcoming = await make_work_order(work_orders, settings_service, customer)
    await work_orders.schedule(upcoming.id, {"scheduled_date": today + timedelta(days=3)})
    far = await make_work_order(work_orders, settings_service, customer)
    await work_orders.schedule(far.id, {"scheduled_date": today + timedelta(days=30)})

    done = await make_work_order(work_orders, settings_service, customer)
    await work_orders.schedule(done.id, {"scheduled_date": today})
    await work_orders.change_status(done.id, "In Progress")
    await work_orders.complete(done.id, actual_cost=Decimal("250.00"))

    canceled = await make_work_order(work_orders, settings_service, customer)
    await work_orders.cancel(canceled.id)

    summary = await DashboardService(db).summary(today)

    assert summary.total_customers == 1
    assert summary.new_customers_this_month == 1
    assert summary.active_security_systems == 1
    assert summary.total_work_orders == 4
    assert summary.open_work_orders == 2
    assert summary.overdue_work_orders == 0
    assert summary.completed_this_month == 1
    assert summary.monthly_revenue == Decimal("250.00")
    assert [w.id for w in summary.upcoming_work_orders] == [upcoming.id]
    assert len(summary.recent_work_orders) == 4

    later = await DashboardService(db).summary(today + timedelta(days=10))
    assert later.overdue_work_orders == 1


async def test_recent_limit_from_config(settings_service, customer_service, work_order_service):
    customer = await make_customer(customer_service, settings_service)
    for _ in range(4):
        await make_work_order(work_order_service, settings_service, customer)

    summary = await DashboardService(customer_service.db, WorkOrderConfig(recent_limit=2)).summary()
    assert [w.work_order_number for w in summary.recent_work_orders] == ["WO2024-0004", "WO2024-0003"]
