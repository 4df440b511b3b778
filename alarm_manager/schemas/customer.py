from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from alarm_manager.validation import optional_email, optional_phone, required_zip


def _state(v: str) -> str:
    if len(v) != 2 or not v.isalpha():
        raise ValueError("State must be a two-letter code")
    return v.upper()


class CustomerCreate(BaseModel):
    company_name: str | None = Field(default=None, max_length=100)
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    street: str = Field(min_length=1, max_length=100)
    city: str = Field(min_length=1, max_length=50)
    state: str = Field(min_length=1, max_length=2)
    zip_code: str = Field(min_length=1, max_length=10)
    county: str | None = Field(default=None, max_length=50)
    email_address: str | None = Field(default=None, max_length=100)
    home_phone: str | None = Field(default=None, max_length=15)
    business_phone: str | None = Field(default=None, max_length=15)
    cell_phone: str | None = Field(default=None, max_length=15)
    customer_type_id: str = Field(min_length=1)
    linked_customer_id: str | None = None
    created_by: str = Field(default="", max_length=50)

    model_config = {"str_strip_whitespace": True}

    @field_validator("state")
    @classmethod
    def validate_state(cls, v: str) -> str:
        return _state(v)

    @field_validator("zip_code")
    @classmethod
    def validate_zip(cls, v: str) -> str:
        return required_zip(v)

    @field_validator("email_address")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return optional_email(v)

    @field_validator("home_phone", "business_phone", "cell_phone")
    @classmethod
    def validate_phone(cls, v: str | None) -> str | None:
        return optional_phone(v)


class CustomerUpdate(BaseModel):
    company_name: str | None = Field(default=None, max_length=100)
    first_name: str | None = Field(default=None, min_length=1, max_length=50)
    last_name: str | None = Field(default=None, min_length=1, max_length=50)
    street: str | None = Field(default=None, min_length=1, max_length=100)
    city: str | None = Field(default=None, min_length=1, max_length=50)
    state: str | None = Field(default=None, min_length=1, max_length=2)
    zip_code: str | None = Field(default=None, min_length=1, max_length=10)
    county: str | None = Field(default=None, max_length=50)
    email_address: str | None = Field(default=None, max_length=100)
    home_phone: str | None = Field(default=None, max_length=15)
    business_phone: str | None = Field(default=None, max_length=15)
    cell_phone: str | None = Field(default=None, max_length=15)
    customer_type_id: str | None = None
    linked_customer_id: str | None = None

    model_config = {"str_strip_whitespace": True}

    @field_validator("state")
    @classmethod
    def validate_state(cls, v: str | None) -> str | None:
        return None if v is None else _state(v)

    @field_validator("zip_code")
    @classmethod
    def validate_zip(cls, v: str | None) -> str | None:
        return None if v is None else required_zip(v)

    @field_validator("email_address")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return optional_email(v)

    @field_validator("home_phone", "business_phone", "cell_phone")
    @classmethod
    def validate_phone(cls, v: str | None) -> str | None:
        return optional_phone(v)


class CustomerRead(BaseModel):
    id: str
    company_name: str | None = None
    first_name: str
    last_name: str
    street: str
    city: str
    state: str
    zip_code: str
    county: str | None = None
    email_address: str | None = None
    home_phone: str | None = None
    business_phone: str | None = None
    cell_phone: str | None = None
    customer_type_id: str
    linked_customer_id: str | None = None
    is_active: bool
    created_at: datetime
    modified_at: datetime | None = None

    model_config = {"from_attributes": True}


class ContactCreate(BaseModel):
    customer_id: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=100)
    home_phone: str | None = Field(default=None, max_length=15)
    business_phone: str | None = Field(default=None, max_length=15)
    cell_phone: str | None = Field(default=None, max_length=15)
    email_address: str | None = Field(default=None, max_length=100)
    contact_type_id: str = Field(min_length=1)

    model_config = {"str_strip_whitespace": True}

    @field_validator("email_address")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return optional_email(v)

    @field_validator("home_phone", "business_phone", "cell_phone")
    @classmethod
    def validate_phone(cls, v: str | None) -> str | None:
        return optional_phone(v)


class ContactUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    home_phone: str | None = Field(default=None, max_length=15)
    business_phone: str | None = Field(default=None, max_length=15)
    cell_phone: str | None = Field(default=None, max_length=15)
    email_address: str | None = Field(default=None, max_length=100)
    contact_type_id: str | None = None

    model_config = {"str_strip_whitespace": True}

    @field_validator("email_address")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return optional_email(v)

    @field_validator("home_phone", "business_phone", "cell_phone")
    @classmethod
    def validate_phone(cls, v: str | None) -> str | None:
        return optional_phone(v)
