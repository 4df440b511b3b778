from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

_HEX_DIGITS = set("0123456789abcdefABCDEF")


def _color_code(v: str | None) -> str | None:
    if v is None or not v.strip():
        return None
    if len(v) != 7 or v[0] != "#" or not set(v[1:]) <= _HEX_DIGITS:
        raise ValueError(f"Invalid color code: {v}")
    return v


class LookupCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=200)

    model_config = {"str_strip_whitespace": True}


class LookupUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=200)
    is_active: bool | None = None

    model_config = {"str_strip_whitespace": True}


class LookupRead(BaseModel):
    id: str
    display_name: str
    description: str | None = None
    is_active: bool

    model_config = {"from_attributes": True}


class WorkOrderStatusCreate(LookupCreate):
    color_code: str | None = None
    sort_order: int = 0

    @field_validator("color_code")
    @classmethod
    def validate_color_code(cls, v: str | None) -> str | None:
        return _color_code(v)


class WorkOrderStatusUpdate(LookupUpdate):
    color_code: str | None = None
    sort_order: int | None = None

    @field_validator("color_code")
    @classmethod
    def validate_color_code(cls, v: str | None) -> str | None:
        return _color_code(v)


class PanelTypeCreate(BaseModel):
    manufacturer: str = Field(min_length=1, max_length=50)
    model_number: str = Field(min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=200)

    model_config = {"str_strip_whitespace": True}


class PanelTypeUpdate(BaseModel):
    manufacturer: str | None = Field(default=None, min_length=1, max_length=50)
    model_number: str | None = Field(default=None, min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=200)
    is_active: bool | None = None

    model_config = {"str_strip_whitespace": True}
