"""StateTransitionPolicy — maps a requested public state onto a publish flag and a lifecycle action."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from app.domain.errors import UnsupportedStateError
from app.domain.value_objects.enums import AssignmentState


class SideEffect(str, Enum):
    ENSURE_RESTORED = "ensure_restored"
    ENSURE_DESTROYED = "ensure_destroyed"


@dataclass(frozen=True)
class StateChange:
    """Result of the policy evaluation."""

    published: bool | None  # None = leave the publish flag alone
    side_effect: SideEffect


def plan_state_change(state: AssignmentState | str) -> StateChange:
    """Pure function: translate a requested state into what the update must do.

    Business rules:
      1. unpublished  →  published=False, make sure the assignment is not deleted.
      2. published    →  published=True, make sure the assignment is not deleted.
      3. deleted      →  publish flag untouched, make sure the assignment is deleted.

    Any other state is reported by the API but cannot be requested.
    """
    value = state.value if isinstance(state, AssignmentState) else state

    if value == AssignmentState.UNPUBLISHED.value:
        return StateChange(published=False, side_effect=SideEffect.ENSURE_RESTORED)
    if value == AssignmentState.PUBLISHED.value:
        return StateChange(published=True, side_effect=SideEffect.ENSURE_RESTORED)
    if value == AssignmentState.DELETED.value:
        return StateChange(published=None, side_effect=SideEffect.ENSURE_DESTROYED)

    raise UnsupportedStateError(value)
