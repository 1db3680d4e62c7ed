"""Dispatch GitHub webhook events to the CLA reconcilers.

Handlers are built explicitly by the composition root (``build_handlers``)
and passed to ``handle_github_event``; nothing registers itself on import.
"""

import logging
from typing import Any, Callable, Dict, NamedTuple

from clabot.adapters.base import GitPlatformAdapter
from clabot.models import GenericCommentEvent, StatusEvent
from clabot.plugin import CommentReconciler, StatusReconciler
from clabot.webhook.events import comment_event_from_payload, status_event_from_payload

COMMENT_EVENTS = ("issue_comment", "pull_request_review", "pull_request_review_comment")


class HandlerSet(NamedTuple):
    """Handlers for the event types the bot reacts to."""

    status: Callable[[StatusEvent], None]
    generic_comment: Callable[[GenericCommentEvent], None]


def build_handlers(
    adapter: GitPlatformAdapter,
    log: logging.Logger | None = None,
    **status_options: Any,
) -> HandlerSet:
    """Build the CLA handler set around ``adapter``.

    ``status_options`` are passed to StatusReconciler (attempts, delay, sleep).
    """
    status = StatusReconciler(adapter, log=log, **status_options)
    comment = CommentReconciler(adapter, log=log)
    return HandlerSet(status=status.handle, generic_comment=comment.handle)


def handle_github_event(
    handlers: HandlerSet,
    event: str,
    payload: Dict[str, Any],
    log: logging.Logger | None = None,
) -> None:
    """Handle a GitHub webhook event.

    Supported events:
    - status: reconcile labels of open PRs whose head is the commit.
    - issue_comment, pull_request_review, pull_request_review_comment:
      handle the /check-cla command.

    Handler errors are raised to the caller.
    """
    logger = log or logging.getLogger("clabot.webhook.handlers")

    if event == "status":
        status_event = status_event_from_payload(payload)
        if status_event is None:
            return
        handlers.status(status_event)
        return

    if event in COMMENT_EVENTS:
        comment_event = comment_event_from_payload(event, payload)
        if comment_event is None:
            logger.debug("Skipping %s event (action=%s)", event, payload.get("action"))
            return
        handlers.generic_comment(comment_event)
        return

    logger.debug("Ignoring unsupported event %s", event)
