"""CLA label names and the verdict -> label transition.

The two labels are meant to be mutually exclusive. The transition only
looks at the verdict to pick the target label, so a PR carrying both (or
neither) converges to the right single label on the next application.
"""

from typing import Iterable, NamedTuple, Tuple

from clabot.models import STATUS_ERROR, STATUS_FAILURE, STATUS_SUCCESS

CLA_YES = "cncf-cla: yes"
CLA_NO = "cncf-cla: no"


class LabelChanges(NamedTuple):
    """Labels to add and remove, in the order they should be applied."""

    to_add: Tuple[str, ...] = ()
    to_remove: Tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.to_add or self.to_remove)


def is_failure(state: str) -> bool:
    """Failure and error verdicts mean the same thing for labelling."""
    return state in (STATUS_FAILURE, STATUS_ERROR)


def label_flags(labels: Iterable[str]) -> Tuple[bool, bool]:
    """Return (has_yes, has_no) for a list of label names."""
    names = {label.lower() for label in labels}
    return CLA_YES.lower() in names, CLA_NO.lower() in names


def label_transition(has_yes: bool, has_no: bool, state: str) -> LabelChanges:
    """Return the label mutations needed to make labels match ``state``.

    Pending and unknown states produce no changes.
    """
    if state == STATUS_SUCCESS:
        return LabelChanges(
            to_add=() if has_yes else (CLA_YES,),
            to_remove=(CLA_NO,) if has_no else (),
        )
    if is_failure(state):
        return LabelChanges(
            to_add=() if has_no else (CLA_NO,),
            to_remove=(CLA_YES,) if has_yes else (),
        )
    return LabelChanges()
