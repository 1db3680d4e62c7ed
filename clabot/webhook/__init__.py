"""Webhook server and handlers for GitHub events."""

from clabot.webhook.handlers import HandlerSet, build_handlers, handle_github_event
from clabot.webhook.server import run_webhook_server

__all__ = ["HandlerSet", "build_handlers", "handle_github_event", "run_webhook_server"]
