"""Recheck CLA labels when someone comments ``/check-cla`` on an open PR.

Unlike the status path, the PR is known from the comment, so no search is
needed: labels and the combined status of the current head are read live.
"""

import logging
import re

from clabot.adapters.base import GitPlatformAdapter, GitPlatformError
from clabot.models import COMMENT_CREATED, GenericCommentEvent
from clabot.plugin.base import CLA_CONTEXT, apply_label_changes
from clabot.plugin.labels import label_flags, label_transition

CHECK_CLA_RE = re.compile(r"^/check-cla\s*$", re.IGNORECASE | re.MULTILINE)


def is_check_cla_command(body: str) -> bool:
    """True if the comment has a ``/check-cla`` line."""
    return CHECK_CLA_RE.search(body or "") is not None


class CommentReconciler:
    """Handles generic comment events carrying the /check-cla command."""

    def __init__(self, adapter: GitPlatformAdapter, log: logging.Logger | None = None) -> None:
        self._adapter = adapter
        self._log = log or logging.getLogger("clabot.plugin.comment")

    def handle(self, event: GenericCommentEvent) -> None:
        # Only new comments on open PRs
        if not event.is_pr or event.issue_state != "open" or event.action != COMMENT_CREATED:
            return
        if not is_check_cla_command(event.body):
            return

        org, repo, number = event.org, event.repo, event.number
        self._log.info("/check-cla requested by %s on %s/%s#%s", event.author or "unknown", org, repo, number)

        try:
            labels = self._adapter.get_issue_labels(org, repo, number)
        except GitPlatformError as e:
            self._log.error("Failed to get the labels on %s/%s#%s: %s", org, repo, number, e)
            return
        try:
            pr = self._adapter.get_pull_request(org, repo, number)
        except GitPlatformError as e:
            self._log.error("Unable to fetch PR %s/%s#%s: %s", org, repo, number, e)
            return
        try:
            combined = self._adapter.get_combined_status(org, repo, pr.head_sha)
        except GitPlatformError as e:
            self._log.error("Failed to get statuses on %s/%s#%s: %s", org, repo, number, e)
            return

        status = next((s for s in combined.statuses if s.context == CLA_CONTEXT), None)
        if status is None:
            self._log.info("No %s status on %s/%s#%s yet", CLA_CONTEXT, org, repo, number)
            return

        has_yes, has_no = label_flags(labels)
        changes = label_transition(has_yes, has_no, status.state)
        if not changes:
            self._log.debug("PR %s/%s#%s has up-to-date CLA labels (%s)", org, repo, number, status.state)
            return
        apply_label_changes(self._adapter, org, repo, number, changes, self._log)
