# core/services/lifecycle.py

"""
STATUS LIFECYCLE RULES

Every status-bearing document declares its own StatusMachine:
- an explicit table of allowed transitions
- a set of terminal states (nothing leaves them)

DESIGN PRINCIPLES:
- No database writes in validation
- Single source of truth per entity (declared next to its services)
- stamp_transition() records the acting user + time for audit fields
"""

from __future__ import annotations

from dataclasses import dataclass, field

from django.utils import timezone

from core.exceptions import InvalidTransitionError


@dataclass(frozen=True)
class StatusMachine:
    name: str
    transitions: dict[str, frozenset[str]]
    terminal: frozenset[str] = field(default_factory=frozenset)

    def can_transition(self, *, from_status: str, to_status: str) -> bool:
        if from_status in self.terminal:
            return False

        return to_status in self.transitions.get(from_status, frozenset())

    def is_terminal(self, status: str) -> bool:
        return status in self.terminal

    def allowed_targets(self, status: str) -> frozenset[str]:
        if status in self.terminal:
            return frozenset()
        return self.transitions.get(status, frozenset())

    def validate_transition(self, *, instance, target_status: str) -> None:
        current = getattr(instance, "status", None)
        if not self.can_transition(from_status=current, to_status=target_status):
            label = getattr(instance, "display_number", None) or getattr(instance, "pk", "")
            raise InvalidTransitionError(
                f"{self.name} {label} cannot transition from "
                f"'{current}' to '{target_status}'"
            )


def machine(name: str, transitions: dict[str, set[str]], terminal: set[str]) -> StatusMachine:
    return StatusMachine(
        name=name,
        transitions={k: frozenset(v) for k, v in transitions.items()},
        terminal=frozenset(terminal),
    )


def stamp_transition(instance, *, action: str, user=None, when=None) -> list[str]:
    """
    Set `<action>_at` (and `<action>_by` when the model has it).

    Returns the touched field names so callers can pass them to save(update_fields=...).
    """
    touched = []
    when = when or timezone.now()

    at_field = f"{action}_at"
    by_field = f"{action}_by"
    field_names = {f.name for f in instance._meta.get_fields()}

    if at_field in field_names:
        setattr(instance, at_field, when)
        touched.append(at_field)

    if by_field in field_names and user is not None and getattr(user, "is_authenticated", False):
        setattr(instance, by_field, user)
        touched.append(by_field)

    return touched
