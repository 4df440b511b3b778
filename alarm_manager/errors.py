"""Domain error definitions surfaced to the presentation layer."""

from __future__ import annotations


class AlarmManagerError(Exception):
    def __init__(self, message: str, code: str = "error"):
        self.message = message
        self.code = code
        super().__init__(message)


class NotFoundError(AlarmManagerError):
    def __init__(self, message: str = "Record not found"):
        super().__init__(message=message, code="not_found")


class ValidationFailed(AlarmManagerError):
    """One or more fields failed validation; nothing was persisted."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(message="; ".join(self.errors) or "Invalid data", code="validation_error")


class ReferentialIntegrityError(AlarmManagerError):
    def __init__(self, entity: str, dependent: str):
        self.entity = entity
        self.dependent = dependent
        super().__init__(
            message=f"Cannot delete {entity} because it is being used by {dependent}",
            code="in_use",
        )


class InvalidStatusTransition(AlarmManagerError):
    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(
            message=f"Work order cannot move from '{current}' to '{target}'",
            code="invalid_transition",
        )
