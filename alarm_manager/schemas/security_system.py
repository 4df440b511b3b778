from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field, field_validator, model_validator

from alarm_manager.validation import optional_phone, required_phone


class SecuritySystemCreate(BaseModel):
    customer_id: str = Field(min_length=1)
    central_station_number: str | None = Field(default=None, max_length=20)
    panel_type_id: str | None = None
    monitoring_type_id: str | None = None
    monitoring_start_date: date | None = None
    installed_date: date | None = None
    master_security_code: str | None = Field(default=None, max_length=10)
    code_word: str | None = Field(default=None, max_length=50)
    police_phone: str | None = Field(default=None, max_length=15)
    fire_dept_phone: str | None = Field(default=None, max_length=15)
    ambulance_phone: str | None = Field(default=None, max_length=15)
    city_permit_number: str | None = Field(default=None, max_length=50)
    permit_due_date: date | None = None
    authority_notes: str | None = Field(default=None, max_length=500)
    primary_communicator_id: str | None = None
    secondary_communicator_id: str | None = None

    model_config = {"str_strip_whitespace": True}

    @field_validator("police_phone", "fire_dept_phone", "ambulance_phone")
    @classmethod
    def validate_phone(cls, v: str | None) -> str | None:
        return optional_phone(v)

    @model_validator(mode="after")
    def distinct_communicators(self):
        if self.primary_communicator_id and self.primary_communicator_id == self.secondary_communicator_id:
            raise ValueError("Primary and secondary communicator must differ")
        return self


class SecuritySystemUpdate(BaseModel):
    central_station_number: str | None = Field(default=None, max_length=20)
    panel_type_id: str | None = None
    monitoring_type_id: str | None = None
    monitoring_start_date: date | None = None
    installed_date: date | None = None
    master_security_code: str | None = Field(default=None, max_length=10)
    code_word: str | None = Field(default=None, max_length=50)
    police_phone: str | None = Field(default=None, max_length=15)
    fire_dept_phone: str | None = Field(default=None, max_length=15)
    ambulance_phone: str | None = Field(default=None, max_length=15)
    city_permit_number: str | None = Field(default=None, max_length=50)
    permit_due_date: date | None = None
    authority_notes: str | None = Field(default=None, max_length=500)
    primary_communicator_id: str | None = None
    secondary_communicator_id: str | None = None

    model_config = {"str_strip_whitespace": True}

    @field_validator("police_phone", "fire_dept_phone", "ambulance_phone")
    @classmethod
    def validate_phone(cls, v: str | None) -> str | None:
        return optional_phone(v)


class ZoneCreate(BaseModel):
    security_system_id: str = Field(min_length=1)
    zone_number: int = Field(ge=1)
    signal: str | None = Field(default=None, max_length=10)
    description: str = Field(min_length=1, max_length=100)
    device_type_id: str | None = None
    wireless_id: str | None = Field(default=None, max_length=20)

    model_config = {"str_strip_whitespace": True}


class ZoneUpdate(BaseModel):
    zone_number: int | None = Field(default=None, ge=1)
    signal: str | None = Field(default=None, max_length=10)
    description: str | None = Field(default=None, min_length=1, max_length=100)
    device_type_id: str | None = None
    wireless_id: str | None = Field(default=None, max_length=20)

    model_config = {"str_strip_whitespace": True}


class CallListEntryCreate(BaseModel):
    security_system_id: str = Field(min_length=1)
    priority: int = Field(ge=1)
    name: str = Field(min_length=1, max_length=100)
    phone_number: str = Field(min_length=1, max_length=15)
    notes: str | None = Field(default=None, max_length=500)

    model_config = {"str_strip_whitespace": True}

    @field_validator("phone_number")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        return required_phone(v)


class CallListEntryUpdate(BaseModel):
    priority: int | None = Field(default=None, ge=1)
    name: str | None = Field(default=None, min_length=1, max_length=100)
    phone_number: str | None = Field(default=None, min_length=1, max_length=15)
    notes: str | None = Field(default=None, max_length=500)

    model_config = {"str_strip_whitespace": True}

    @field_validator("phone_number")
    @classmethod
    def validate_phone(cls, v: str | None) -> str | None:
        return None if v is None else required_phone(v)


class CommunicatorCreate(BaseModel):
    communicator_type_id: str = Field(min_length=1)
    manufacturer: str | None = Field(default=None, max_length=50)
    model_number: str | None = Field(default=None, max_length=50)
    radio_id: str | None = Field(default=None, max_length=20)
    ip_address: str | None = Field(default=None, max_length=15)
    gateway: str | None = Field(default=None, max_length=15)
    subnet: str | None = Field(default=None, max_length=15)
    notes: str | None = Field(default=None, max_length=200)

    model_config = {"str_strip_whitespace": True}


class CommunicatorUpdate(BaseModel):
    communicator_type_id: str | None = None
    manufacturer: str | None = Field(default=None, max_length=50)
    model_number: str | None = Field(default=None, max_length=50)
    radio_id: str | None = Field(default=None, max_length=20)
    ip_address: str | None = Field(default=None, max_length=15)
    gateway: str | None = Field(default=None, max_length=15)
    subnet: str | None = Field(default=None, max_length=15)
    notes: str | None = Field(default=None, max_length=200)
    is_active: bool | None = None

    model_config = {"str_strip_whitespace": True}
