"""Tests for StateTransitionPolicy."""

import pytest

from app.domain.errors import UnsupportedStateError
from app.domain.policies.state_transition import SideEffect, plan_state_change
from app.domain.value_objects.enums import AssignmentState


def test_unpublished_restores_and_unpublishes():
    change = plan_state_change(AssignmentState.UNPUBLISHED)
    assert change.published is False
    assert change.side_effect == SideEffect.ENSURE_RESTORED


def test_published_restores_and_publishes():
    change = plan_state_change(AssignmentState.PUBLISHED)
    assert change.published is True
    assert change.side_effect == SideEffect.ENSURE_RESTORED


def test_deleted_destroys_and_leaves_flag_alone():
    change = plan_state_change(AssignmentState.DELETED)
    assert change.published is None
    assert change.side_effect == SideEffect.ENSURE_DESTROYED


def test_accepts_plain_strings():
    assert plan_state_change("published").published is True


@pytest.mark.parametrize(
    "state",
    [AssignmentState.DUPLICATING, AssignmentState.IMPORTING, AssignmentState.MIGRATING, "archived"],
)
def test_unrequestable_states_raise(state):
    with pytest.raises(UnsupportedStateError, match="unable to handle state change"):
        plan_state_change(state)
