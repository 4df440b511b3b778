"""Field rules and the schema-validation entry point used by every service."""

from __future__ import annotations

import re
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from alarm_manager.errors import ValidationFailed

EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
PHONE_RE = re.compile(r"^[\d\s\-\(\)\+\.]{10,}$")
ZIP_RE = re.compile(r"^\d{5}(-\d{4})?$")

S = TypeVar("S", bound=BaseModel)


def is_valid_email(value: str | None) -> bool:
    return bool(value and value.strip()) and EMAIL_RE.match(value) is not None


def is_valid_phone(value: str | None) -> bool:
    return bool(value and value.strip()) and PHONE_RE.match(value) is not None


def is_valid_zip(value: str | None) -> bool:
    return bool(value and value.strip()) and ZIP_RE.match(value) is not None


def clean_phone_number(value: str | None) -> str:
    if not value or not value.strip():
        return ""
    return "".join(ch for ch in value if ch.isdigit())


def format_phone_number(value: str | None) -> str:
    """Render 10 or 11 (leading 1) digit numbers in US style; anything else unchanged."""
    if not value or not value.strip():
        return ""
    digits = clean_phone_number(value)
    if len(digits) == 10:
        return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
    if len(digits) == 11 and digits.startswith("1"):
        return f"+1 ({digits[1:4]}) {digits[4:7]}-{digits[7:]}"
    return value


# Used by schema field validators: blank optional values collapse to None.

def optional_email(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    if not is_valid_email(value):
        raise ValueError("Invalid email address")
    return value


def optional_phone(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    if not is_valid_phone(value):
        raise ValueError("Invalid phone number")
    return value


def required_phone(value: str) -> str:
    if not is_valid_phone(value):
        raise ValueError("Invalid phone number")
    return value


def required_zip(value: str) -> str:
    if not is_valid_zip(value):
        raise ValueError("Invalid zip code (expected 12345 or 12345-6789)")
    return value


def _label(loc: tuple) -> str:
    if not loc:
        return "Value"
    return str(loc[0]).replace("_", " ").capitalize()


def _message(error: dict) -> str:
    msg = error.get("msg", "Invalid value")
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return f"{_label(error.get('loc', ()))}: {msg}"


def validate(schema: type[S], data: S | dict[str, Any]) -> S:
    """Return ``data`` as ``schema`` or raise ValidationFailed with readable messages."""
    if isinstance(data, schema):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    try:
        return schema.model_validate(data)
    except ValidationError as exc:
        raise ValidationFailed([_message(e) for e in exc.errors()]) from exc
