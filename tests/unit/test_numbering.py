from datetime import date, datetime

from sqlalchemy.exc import OperationalError

from alarm_manager.services.numbering import (
    fallback_number, format_number, generate_work_order_number, next_number_after,
)

from conftest import make_customer, make_work_order


def test_format_number_pads_suffix():
    assert format_number(2024, 7) == "WO2024-0007"
    assert format_number(2024, 12, prefix="SV", width=5) == "SV2024-00012"


def test_next_number_after_increments():
    assert next_number_after(None, 2024) == "WO2024-0001"
    assert next_number_after("WO2024-0037", 2024) == "WO2024-0038"
    assert next_number_after("WO2024-0999", 2024) == "WO2024-1000"


def test_unparseable_suffix_restarts_sequence():
    assert next_number_after("WO2024-ABCD", 2024) == "WO2024-0001"


async def test_first_number_of_year(db):
    assert await generate_work_order_number(db, date(2024, 3, 1)) == "WO2024-0001"


async def test_highest_existing_number_is_incremented(settings_service, customer_service, work_order_service):
    customer = await make_customer(customer_service, settings_service)
    for number in ("WO2024-0012", "WO2024-0037", "WO2024-0005"):
        await make_work_order(work_order_service, settings_service, customer, work_order_number=number)

    db = work_order_service.db
    assert await generate_work_order_number(db, date(2024, 6, 1)) == "WO2024-0038"


async def test_other_years_and_fallback_numbers_are_ignored(settings_service, customer_service, work_order_service):
    customer = await make_customer(customer_service, settings_service)
    for number in ("WO2023-0420", "WO20240101120000", "WO2025-0002"):
        await make_work_order(work_order_service, settings_service, customer, work_order_number=number)

    db = work_order_service.db
    assert await generate_work_order_number(db, date(2024, 6, 1)) == "WO2024-0001"


async def test_sequential_creation_has_no_gaps(settings_service, customer_service, work_order_service):
    customer = await make_customer(customer_service, settings_service)
    created = [
        await make_work_order(work_order_service, settings_service, customer)
        for _ in range(12)
    ]

    numbers = [wo.work_order_number for wo in created]
    assert numbers == [f"WO2024-{n:04d}" for n in range(1, 13)]
    assert len(set(numbers)) == 12


class _BrokenSession:
    """Stands in for a session whose connection has gone away."""

    def __init__(self):
        self.rolled_back = False

    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    async def rollback(self):
        self.rolled_back = True


async def test_query_failure_falls_back_to_timestamp():
    session = _BrokenSession()

    number = await generate_work_order_number(session, date(2024, 6, 1))

    assert session.rolled_back
    assert number.startswith("WO")
    assert "-" not in number
    assert len(number) == len("WO") + 14
    assert number[2:].isdigit()


def test_fallback_number_format():
    assert fallback_number(datetime(2024, 6, 1, 8, 5, 9)) == "WO20240601080509"

