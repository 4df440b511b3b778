"""Work-order status lifecycle.

Statuses are lookup rows; the lifecycle is keyed by their names::

    Unscheduled -> Scheduled -> In Progress <-> Pending
                                In Progress -> Completed
    Scheduled -> Unscheduled
    any open status -> Canceled

Completed and Canceled are terminal. Statuses added by users under other
names are not constrained beyond the terminal rule.
"""

from __future__ import annotations

from alarm_manager.errors import InvalidStatusTransition

UNSCHEDULED = "Unscheduled"
SCHEDULED = "Scheduled"
IN_PROGRESS = "In Progress"
PENDING = "Pending"
COMPLETED = "Completed"
CANCELED = "Canceled"

TERMINAL = frozenset({COMPLETED, CANCELED})

TRANSITIONS: dict[str, frozenset[str]] = {
    UNSCHEDULED: frozenset({SCHEDULED, CANCELED}),
    SCHEDULED: frozenset({IN_PROGRESS, UNSCHEDULED, CANCELED}),
    IN_PROGRESS: frozenset({PENDING, COMPLETED, CANCELED}),
    PENDING: frozenset({IN_PROGRESS, CANCELED}),
    COMPLETED: frozenset(),
    CANCELED: frozenset(),
}


def can_transition(current: str, target: str) -> bool:
    if current == target:
        return True
    if current in TERMINAL:
        return False
    if current in TRANSITIONS and target in TRANSITIONS:
        return target in TRANSITIONS[current]
    return True


def ensure_transition(current: str, target: str) -> None:
    if not can_transition(current, target):
        raise InvalidStatusTransition(current, target)
