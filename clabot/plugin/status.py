"""
Reconcile CLA labels from commit status events.

1. Ignore events for other contexts and pending states.
2. Search open PRs containing the event's commit. The search index can lag
   behind the status webhook, so the search is retried a few times.
3. For each PR found, only act when the commit is the PR's current head:
   the status of older commits is not authoritative.
4. Add/remove CLA labels to match the verdict.
"""

import logging
import time
from typing import Callable, List

from clabot.adapters.base import GitPlatformAdapter, GitPlatformError
from clabot.models import STATUS_PENDING, Issue, StatusEvent
from clabot.plugin.base import CLA_CONTEXT, InvalidEventError, apply_label_changes
from clabot.plugin.labels import label_flags, label_transition
from clabot.retry import retry_until

SEARCH_ATTEMPTS = 5
SEARCH_DELAY_SECONDS = 10.0


def search_query(event: StatusEvent) -> str:
    """Issue search query for open PRs containing the event's commit."""
    return f"{event.sha} repo:{event.org}/{event.repo} type:pr state:open"


class StatusReconciler:
    """Handles status events for the CLA context."""

    def __init__(
        self,
        adapter: GitPlatformAdapter,
        attempts: int = SEARCH_ATTEMPTS,
        delay: float = SEARCH_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        log: logging.Logger | None = None,
    ) -> None:
        self._adapter = adapter
        self._attempts = attempts
        self._delay = delay
        self._sleep = sleep
        self._log = log or logging.getLogger("clabot.plugin.status")

    def handle(self, event: StatusEvent) -> None:
        """Apply the label transition implied by ``event`` to matching PRs.

        Raises InvalidEventError when state or context is empty. API
        failures are logged and never raised.
        """
        if not event.state or not event.context:
            raise InvalidEventError("invalid status event delivered with empty state/context")
        if event.context != CLA_CONTEXT:
            return
        if event.state == STATUS_PENDING:
            # wait for a terminal verdict
            return

        self._log.info("Searching for PRs matching commit %s in %s/%s", event.sha, event.org, event.repo)
        try:
            issues = self._find_prs(event)
        except GitPlatformError as e:
            self._log.error("Error searching for PRs matching commit %s: %s", event.sha, e)
            return
        if not issues:
            self._log.info(
                "No open PRs found for commit %s after %d attempts",
                event.sha,
                self._attempts,
            )
            return
        self._log.info("Found %d PRs matching commit %s", len(issues), event.sha)

        for issue in issues:
            self._reconcile(event, issue)

    def _find_prs(self, event: StatusEvent) -> List[Issue]:
        query = search_query(event)
        return retry_until(
            lambda: self._adapter.find_issues(query, "", False),
            lambda found: len(found) > 0,
            attempts=self._attempts,
            delay=self._delay,
            sleep=self._sleep,
        )

    def _reconcile(self, event: StatusEvent, issue: Issue) -> None:
        org, repo, number = event.org, event.repo, issue.number
        has_yes, has_no = label_flags(issue.labels)
        changes = label_transition(has_yes, has_no, event.state)
        if not changes:
            self._log.info("PR %s/%s#%s has up-to-date CLA labels", org, repo, number)
            return

        self._log.info("PR %s/%s#%s labels may be out of date, fetching PR", org, repo, number)
        try:
            pr = self._adapter.get_pull_request(org, repo, number)
        except GitPlatformError as e:
            self._log.warning("Unable to fetch PR %s/%s#%s: %s", org, repo, number, e)
            return
        if pr.head_sha != event.sha:
            self._log.info("Status for %s is not for PR %s/%s#%s HEAD, skipping", event.sha, org, repo, number)
            return
        apply_label_changes(self._adapter, org, repo, pr.number, changes, self._log)
