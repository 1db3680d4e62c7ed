"""Shared pieces of the CLA plugin: wire constants, errors, label mutation."""

import logging

from clabot.adapters.base import GitPlatformAdapter, GitPlatformError
from clabot.plugin.labels import LabelChanges

PLUGIN_NAME = "cla"
# Status context posted by the CLA checking service (exact match)
CLA_CONTEXT = "EasyCLA"


class InvalidEventError(ValueError):
    """Raised for a malformed event (e.g. status without state or context)."""

    pass


def apply_label_changes(
    adapter: GitPlatformAdapter,
    org: str,
    repo: str,
    number: int,
    changes: LabelChanges,
    log: logging.Logger,
) -> None:
    """Remove then add labels; each call is independent and only logged on failure."""
    for label in changes.to_remove:
        try:
            adapter.remove_label(org, repo, number, label)
        except GitPlatformError as e:
            log.warning("Could not remove %s label from %s/%s#%s: %s", label, org, repo, number, e)
        else:
            log.info("Removed %s label from %s/%s#%s", label, org, repo, number)
    for label in changes.to_add:
        try:
            adapter.add_label(org, repo, number, label)
        except GitPlatformError as e:
            log.warning("Could not add %s label to %s/%s#%s: %s", label, org, repo, number, e)
        else:
            log.info("Added %s label to %s/%s#%s", label, org, repo, number)
