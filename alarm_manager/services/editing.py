"""Snapshot-edit-commit helper for forms that edit one record at a time.

An ``EditSession`` copies the record's current values into a pydantic update
schema. Callers change fields on the draft; ``commit`` sends only the fields
that differ from the snapshot through a service update function, ``discard``
restores the snapshot.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Generic, TypeVar

from pydantic import BaseModel

from alarm_manager.validation import validate

S = TypeVar("S", bound=BaseModel)


class EditSession(Generic[S]):
    def __init__(self, record: Any, schema: type[S]):
        self.record_id: str = record.id
        self.schema = schema
        self._before: dict[str, Any] = self._snapshot(record)
        self._draft: dict[str, Any] = dict(self._before)

    def _snapshot(self, record: Any) -> dict[str, Any]:
        return {
            name: getattr(record, name)
            for name in self.schema.model_fields
            if hasattr(record, name)
        }

    @property
    def draft(self) -> dict[str, Any]:
        return dict(self._draft)

    def set(self, name: str, value: Any) -> None:
        if name not in self.schema.model_fields:
            raise KeyError(f"{self.schema.__name__} has no field {name!r}")
        self._draft[name] = value

    def changes(self) -> dict[str, Any]:
        return {k: v for k, v in self._draft.items() if k not in self._before or self._before[k] != v}

    @property
    def is_dirty(self) -> bool:
        return bool(self.changes())

    async def commit(self, update: Callable[[str, S], Awaitable[Any]]) -> Any | None:
        """Validate the changed fields and pass them to ``update(record_id, data)``.

        Returns the updated record, or None when nothing changed. The snapshot
        is retaken from the returned record so normalised values (an upper-cased
        state, a formatted phone) do not read as pending edits.
        """
        changes = self.changes()
        if not changes:
            return None
        result = await update(self.record_id, validate(self.schema, changes))
        if result is None:
            self._before.update(changes)
        else:
            self._before = self._snapshot(result)
        self._draft = dict(self._before)
        return result

    def discard(self) -> None:
        self._draft = dict(self._before)
