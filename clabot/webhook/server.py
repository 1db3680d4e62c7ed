"""Webhook HTTP server for GitHub events.

Serves health check, plugin help and the webhook path. Each accepted
delivery is processed on its own thread after the response is sent, so a
slow event (PR search retries) never holds up other deliveries.
"""

import hashlib
import hmac
import json
import logging
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict
from urllib.parse import parse_qs

from clabot.adapters.github import GitHubAdapter
from clabot.config import AppConfig
from clabot.plugin import InvalidEventError, plugin_help
from clabot.webhook.handlers import HandlerSet, build_handlers, handle_github_event

LOG = logging.getLogger("clabot.webhook")


def verify_signature(secret: str, body: bytes, signature: str | None) -> bool:
    """Check X-Hub-Signature-256 (``sha256=<hex hmac>``) against body."""
    if not signature or not signature.startswith("sha256="):
        return False
    expected = hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(expected, signature[len("sha256=") :])


def dispatch_event(handlers: HandlerSet, event: str, payload: Dict[str, Any]) -> None:
    """Run handlers for one delivery; errors are logged, never raised."""
    try:
        handle_github_event(handlers, event, payload)
    except InvalidEventError as e:
        LOG.warning("Rejected %s event: %s", event, e)
    except Exception as e:
        LOG.exception("Error handling %s event: %s", event, e)


class WebhookHandler(BaseHTTPRequestHandler):
    """Handle GET /health, GET /help and POST /webhook/github."""

    config: AppConfig
    handlers: HandlerSet

    def _send_json(self, code: int, data: Any) -> None:
        self.send_response(code)
        self.send_header("Content-Type", "application/json")
        self.end_headers()
        self.wfile.write(json.dumps(data).encode())

    def do_GET(self) -> None:
        if self.path == "/health" or self.path == "/":
            self._send_json(200, {"status": "ok", "service": "clabot"})
            return
        if self.path == "/help":
            self._send_json(200, plugin_help().model_dump())
            return
        self.send_response(404)
        self.end_headers()

    def do_POST(self) -> None:
        if self.path == self.config.github.webhook_path:
            self._handle_github_webhook()
            return
        self.send_response(404)
        self.end_headers()

    def _parse_webhook_body(self, body: bytes) -> dict:
        """Parse webhook body as JSON.

        Supports raw JSON and application/x-www-form-urlencoded (payload=...).
        """
        if not body:
            return {}
        content_type = self.headers.get("Content-Type", "")
        if "application/x-www-form-urlencoded" in content_type:
            parsed = parse_qs(body.decode("utf-8", errors="replace"), keep_blank_values=True)
            raw = (parsed.get("payload") or [None])[0]
            if raw is None:
                return {}
            return json.loads(raw)
        return json.loads(body.decode())

    def _handle_github_webhook(self) -> None:
        try:
            length = int(self.headers.get("Content-Length", 0))
            if length < 0:
                raise ValueError(length)
        except ValueError:
            LOG.warning("Invalid Content-Length header: %r", self.headers.get("Content-Length"))
            self._send_json(400, {"error": "invalid content-length"})
            return
        body = self.rfile.read(length) if length else b""
        secret = self.config.webhook_secret_resolved
        if secret and not verify_signature(secret, body, self.headers.get("X-Hub-Signature-256")):
            LOG.warning("Webhook signature mismatch, rejecting delivery")
            self._send_json(401, {"error": "invalid signature"})
            return
        try:
            payload = self._parse_webhook_body(body)
        except json.JSONDecodeError:
            payload_raw = body.decode("utf-8", errors="replace") if body else ""
            LOG.warning("Invalid webhook JSON. Full payload: %s", payload_raw)
            self._send_json(400, {"error": "invalid json"})
            return
        if not isinstance(payload, dict):
            LOG.warning("Webhook payload is not a JSON object, ignoring")
            self._send_json(400, {"error": "invalid payload"})
            return
        event = self.headers.get("X-GitHub-Event", "")
        LOG.info("Webhook event: %s (action: %s)", event, payload.get("action"))
        self._send_json(200, {"received": True})
        threading.Thread(
            target=dispatch_event,
            args=(self.handlers, event, payload),
            name=f"clabot-{event}",
            daemon=True,
        ).start()

    def log_message(self, format: str, *args: Any) -> None:
        LOG.debug(format, *args)


def make_server(config: AppConfig, handlers: HandlerSet) -> ThreadingHTTPServer:
    """Create (but do not start) the webhook server."""
    handler_cls = type("ConfiguredWebhookHandler", (WebhookHandler,), {"config": config, "handlers": handlers})
    return ThreadingHTTPServer((config.webhook.host, config.webhook.port), handler_cls)


def run_webhook_server(config: AppConfig) -> None:
    """Build the GitHub adapter and handlers, then serve forever."""
    token = config.github_token_resolved
    if not token:
        LOG.warning("No GitHub token configured; API calls will fail")
    adapter = GitHubAdapter(token=token or "", api_url=config.github.api_url)
    server = make_server(config, build_handlers(adapter))
    LOG.info("Webhook server listening on %s:%s", config.webhook.host, config.webhook.port)
    server.serve_forever()
