"""Build event models from GitHub webhook payloads.

Comment-bearing webhooks (issue_comment, pull_request_review,
pull_request_review_comment) are normalized to GenericCommentEvent.
"""

import logging
from typing import Any, Dict

from pydantic import ValidationError

from clabot.models import (
    COMMENT_CREATED,
    COMMENT_DELETED,
    COMMENT_EDITED,
    GenericCommentEvent,
    StatusEvent,
)

LOG = logging.getLogger("clabot.webhook.events")

# pull_request_review actions -> generic comment actions
_REVIEW_ACTIONS = {
    "submitted": COMMENT_CREATED,
    "edited": COMMENT_EDITED,
    "dismissed": COMMENT_DELETED,
}
_COMMENT_ACTIONS = {COMMENT_CREATED, COMMENT_EDITED, COMMENT_DELETED}


def _org_repo(payload: Dict[str, Any]) -> tuple[str, str]:
    repo_payload = payload.get("repository") or {}
    owner = repo_payload.get("owner") or {}
    org = owner.get("login") or ""
    name = repo_payload.get("name") or ""
    if (not org or not name) and "/" in (repo_payload.get("full_name") or ""):
        org, name = repo_payload["full_name"].split("/", 1)
    return org, name


def status_event_from_payload(payload: Dict[str, Any]) -> StatusEvent | None:
    """Build StatusEvent from a status webhook payload.

    Empty state/context are kept so the reconciler can reject them.
    """
    org, repo = _org_repo(payload)
    try:
        return StatusEvent(
            sha=payload.get("sha") or "",
            state=payload.get("state") or "",
            context=payload.get("context") or "",
            org=org,
            repo=repo,
            description=payload.get("description") or "",
            target_url=payload.get("target_url"),
        )
    except ValidationError as e:
        LOG.warning("Failed to parse status event: %s", e)
        return None


def comment_event_from_payload(event: str, payload: Dict[str, Any]) -> GenericCommentEvent | None:
    """Build GenericCommentEvent from a comment-bearing webhook payload.

    Returns None for unsupported events or actions.
    """
    org, repo = _org_repo(payload)
    action = payload.get("action") or ""

    if event == "issue_comment":
        issue = payload.get("issue") or {}
        comment = payload.get("comment") or {}
        number = issue.get("number")
        is_pr = "pull_request" in issue
        state = issue.get("state") or ""
    elif event == "pull_request_review":
        action = _REVIEW_ACTIONS.get(action, "")
        comment = payload.get("review") or {}
        pull = payload.get("pull_request") or {}
        number = pull.get("number")
        is_pr = True
        state = pull.get("state") or ""
    elif event == "pull_request_review_comment":
        comment = payload.get("comment") or {}
        pull = payload.get("pull_request") or {}
        number = pull.get("number")
        is_pr = True
        state = pull.get("state") or ""
    else:
        return None

    if action not in _COMMENT_ACTIONS or number is None:
        return None
    user = comment.get("user") or {}
    try:
        return GenericCommentEvent(
            org=org,
            repo=repo,
            number=int(number),
            is_pr=is_pr,
            action=action,
            issue_state=state,
            body=comment.get("body") or "",
            author=user.get("login", ""),
            html_url=comment.get("html_url"),
        )
    except (TypeError, ValueError) as e:
        LOG.warning("Failed to parse %s event: %s", event, e)
        return None
