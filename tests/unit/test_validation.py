import pytest

from alarm_manager.errors import ValidationFailed
from alarm_manager.schemas import CallListEntryCreate, CustomerCreate, ZoneCreate
from alarm_manager.validation import (
    clean_phone_number, format_phone_number, is_valid_email, is_valid_phone, is_valid_zip, validate,
)


@pytest.mark.parametrize("value,ok", [
    ("tech@alarmco.com", True),
    ("first.last+tag@sub.example.org", True),
    ("no-at-sign.com", False),
    ("user@host", False),
    ("", False),
    (None, False),
])
def test_email(value, ok):
    assert is_valid_email(value) is ok


@pytest.mark.parametrize("value,ok", [
    ("(860) 555-0142", True),
    ("860.555.0142", True),
    ("+1 860 555 0142", True),
    ("555-0142", False),
    ("860-555-CALL", False),
])
def test_phone(value, ok):
    assert is_valid_phone(value) is ok


@pytest.mark.parametrize("value,ok", [
    ("06355", True),
    ("06355-1234", True),
    ("6355", False),
    ("06355-12", False),
])
def test_zip(value, ok):
    assert is_valid_zip(value) is ok


def test_format_phone_number():
    assert format_phone_number("860.555.0142") == "(860) 555-0142"
    assert format_phone_number("18605550142") == "+1 (860) 555-0142"
    assert format_phone_number("555-0142") == "555-0142"
    assert format_phone_number("  ") == ""
    assert clean_phone_number("(860) 555-0142") == "8605550142"


def test_validate_collects_readable_messages():
    with pytest.raises(ValidationFailed) as exc:
        validate(CustomerCreate, {"first_name": "", "state": "Conn", "zip_code": "06355"})

    errors = exc.value.errors
    assert any(e.startswith("First name:") for e in errors)
    assert any(e.startswith("State:") for e in errors)
    assert any(e.startswith("Customer type id:") for e in errors)
    assert not any("Value error" in e for e in errors)


def test_validate_passes_schema_instances_through():
    zone = ZoneCreate(security_system_id="01HX", zone_number=2, description="Den")
    assert validate(ZoneCreate, zone) is zone


def test_blank_optional_email_becomes_none():
    data = validate(CustomerCreate, {
        "first_name": "A", "last_name": "B", "street": "1 Main", "city": "C",
        "state": "ri", "zip_code": "02840", "customer_type_id": "01HX", "email_address": "  ",
    })
    assert data.email_address is None
    assert data.state == "RI"


def test_call_list_phone_required():
    with pytest.raises(ValidationFailed, match="Phone number"):
        validate(CallListEntryCreate, {
            "security_system_id": "01HX", "priority": 1, "name": "Neighbor", "phone_number": "n/a",
        })
