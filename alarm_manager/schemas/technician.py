from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field, field_validator

from alarm_manager.validation import optional_email, optional_phone


class TechnicianCreate(BaseModel):
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    email_address: str | None = Field(default=None, max_length=100)
    phone_number: str | None = Field(default=None, max_length=15)
    cell_phone: str | None = Field(default=None, max_length=15)
    employee_number: str | None = Field(default=None, max_length=20)
    hire_date: date | None = None
    specializations: str | None = Field(default=None, max_length=200)
    certifications: str | None = Field(default=None, max_length=200)

    model_config = {"str_strip_whitespace": True}

    @field_validator("email_address")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return optional_email(v)

    @field_validator("phone_number", "cell_phone")
    @classmethod
    def validate_phone(cls, v: str | None) -> str | None:
        return optional_phone(v)


class TechnicianUpdate(BaseModel):
    first_name: str | None = Field(default=None, min_length=1, max_length=50)
    last_name: str | None = Field(default=None, min_length=1, max_length=50)
    email_address: str | None = Field(default=None, max_length=100)
    phone_number: str | None = Field(default=None, max_length=15)
    cell_phone: str | None = Field(default=None, max_length=15)
    employee_number: str | None = Field(default=None, max_length=20)
    hire_date: date | None = None
    specializations: str | None = Field(default=None, max_length=200)
    certifications: str | None = Field(default=None, max_length=200)
    is_active: bool | None = None

    model_config = {"str_strip_whitespace": True}

    @field_validator("email_address")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return optional_email(v)

    @field_validator("phone_number", "cell_phone")
    @classmethod
    def validate_phone(cls, v: str | None) -> str | None:
        return optional_phone(v)
