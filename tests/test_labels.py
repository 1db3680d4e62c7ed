"""Tests for the CLA label transition."""

import pytest

from clabot.plugin.labels import CLA_NO, CLA_YES, LabelChanges, label_flags, label_transition


@pytest.mark.parametrize(
    "has_yes,has_no,state,to_add,to_remove",
    [
        (False, False, "success", (CLA_YES,), ()),
        (True, False, "success", (), ()),
        (False, True, "success", (CLA_YES,), (CLA_NO,)),
        (True, True, "success", (), (CLA_NO,)),
        (False, False, "failure", (CLA_NO,), ()),
        (True, False, "failure", (CLA_NO,), (CLA_YES,)),
        (False, True, "failure", (), ()),
        (True, True, "failure", (), (CLA_YES,)),
        (False, False, "error", (CLA_NO,), ()),
        (True, False, "error", (CLA_NO,), (CLA_YES,)),
        (False, True, "error", (), ()),
        (True, True, "error", (), (CLA_YES,)),
    ],
)
def test_label_transition_terminal_states(has_yes, has_no, state, to_add, to_remove) -> None:
    """Terminal verdicts decide the target label; both-present collapses to it."""
    changes = label_transition(has_yes, has_no, state)
    assert changes.to_add == to_add
    assert changes.to_remove == to_remove


@pytest.mark.parametrize("has_yes", [False, True])
@pytest.mark.parametrize("has_no", [False, True])
def test_pending_never_changes_labels(has_yes: bool, has_no: bool) -> None:
    """Pending carries no information about the final verdict."""
    assert label_transition(has_yes, has_no, "pending") == LabelChanges()


def test_unknown_state_is_noop() -> None:
    assert not label_transition(False, False, "")
    assert not label_transition(True, True, "cancelled")


def test_transition_is_idempotent() -> None:
    """Applying a transition's result and re-running yields no changes."""
    for state in ("success", "failure", "error"):
        for has_yes in (False, True):
            for has_no in (False, True):
                labels = set()
                if has_yes:
                    labels.add(CLA_YES)
                if has_no:
                    labels.add(CLA_NO)
                changes = label_transition(has_yes, has_no, state)
                labels -= set(changes.to_remove)
                labels |= set(changes.to_add)
                assert len(labels) == 1
                again = label_transition(CLA_YES in labels, CLA_NO in labels, state)
                assert not again


def test_label_changes_truthiness() -> None:
    assert not LabelChanges()
    assert LabelChanges(to_add=(CLA_YES,))
    assert LabelChanges(to_remove=(CLA_NO,))


def test_label_flags_case_insensitive() -> None:
    assert label_flags(["bug", "CNCF-CLA: YES"]) == (True, False)
    assert label_flags([CLA_NO, CLA_YES]) == (True, True)
    assert label_flags([]) == (False, False)
