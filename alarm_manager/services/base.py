"""Helpers shared by the service classes."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


def changes_for(model: type, data: BaseModel) -> dict[str, Any]:
    """Fields explicitly set on ``data``.

    An explicit None aimed at a NOT NULL column is dropped rather than
    written; optional columns accept None to clear the value.
    """
    columns = model.__table__.c
    return {
        k: v for k, v in data.model_dump(exclude_unset=True).items()
        if v is not None or k not in columns or columns[k].nullable
    }
