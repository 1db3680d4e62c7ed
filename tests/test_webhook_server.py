"""Tests for webhook server helpers and HTTP endpoints."""

import hashlib
import hmac
import http.client
import json
import threading
import urllib.request
from unittest.mock import Mock, patch
from urllib.error import HTTPError

import pytest

from clabot.config import AppConfig, GitHubConfig, WebhookConfig
from clabot.plugin import InvalidEventError
from clabot.webhook.handlers import HandlerSet
from clabot.webhook.server import dispatch_event, make_server, verify_signature

SECRET = "s3cret"


def _sign(secret: str, body: bytes) -> str:
    return "sha256=" + hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


def test_verify_signature() -> None:
    body = b'{"a": 1}'
    assert verify_signature(SECRET, body, _sign(SECRET, body))
    assert not verify_signature(SECRET, body, _sign("other", body))
    assert not verify_signature(SECRET, body, None)
    assert not verify_signature(SECRET, body, "sha1=abc")


def test_dispatch_event_logs_invalid_event() -> None:
    handlers = HandlerSet(status=Mock(side_effect=InvalidEventError("empty")), generic_comment=Mock())
    with patch("clabot.webhook.server.LOG") as log:
        dispatch_event(handlers, "status", {"sha": "a", "repository": {"full_name": "o/r"}})
    log.warning.assert_called_once()


def test_dispatch_event_logs_unexpected_error() -> None:
    handlers = HandlerSet(status=Mock(side_effect=RuntimeError("boom")), generic_comment=Mock())
    with patch("clabot.webhook.server.LOG") as log:
        dispatch_event(handlers, "status", {"sha": "a", "repository": {"full_name": "o/r"}})
    log.exception.assert_called_once()


@pytest.fixture
def server():
    """Serve on an ephemeral port; yields (base_url, handlers, handled event)."""
    # port 0 is outside the validated range, so skip validation here
    webhook = WebhookConfig.model_construct(host="127.0.0.1", port=0, enabled=True, secret=SECRET)
    config = AppConfig(github=GitHubConfig(webhook_path="/webhook/github"), webhook=webhook)
    handled = threading.Event()
    handlers = HandlerSet(status=Mock(side_effect=lambda e: handled.set()), generic_comment=Mock())
    httpd = make_server(config, handlers)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    host, port = httpd.server_address[:2]
    yield f"http://{host}:{port}", handlers, handled
    httpd.shutdown()
    httpd.server_close()


def _request(url: str, body: bytes | None = None, headers: dict | None = None) -> tuple[int, dict]:
    req = urllib.request.Request(url, data=body, headers=headers or {}, method="POST" if body is not None else "GET")
    try:
        with urllib.request.urlopen(req, timeout=5) as resp:
            return resp.status, json.loads(resp.read())
    except HTTPError as e:
        return e.code, json.loads(e.read() or b"{}")


def test_health(server) -> None:
    base, _, _ = server
    assert _request(f"{base}/health") == (200, {"status": "ok", "service": "clabot"})


def test_help_endpoint(server) -> None:
    base, _, _ = server
    code, data = _request(f"{base}/help")
    assert code == 200
    assert data["commands"][0]["usage"] == "/check-cla"


def test_signed_status_delivery_is_dispatched(server) -> None:
    base, handlers, handled = server
    body = json.dumps(
        {"sha": "abc", "state": "success", "context": "EasyCLA", "repository": {"full_name": "o/r"}}
    ).encode()
    headers = {
        "Content-Type": "application/json",
        "X-GitHub-Event": "status",
        "X-Hub-Signature-256": _sign(SECRET, body),
    }
    assert _request(f"{base}/webhook/github", body, headers) == (200, {"received": True})
    assert handled.wait(5)
    assert handlers.status.call_args[0][0].sha == "abc"


def test_bad_signature_rejected(server) -> None:
    base, handlers, _ = server
    body = b'{"sha": "abc"}'
    headers = {"X-GitHub-Event": "status", "X-Hub-Signature-256": _sign("wrong", body)}
    code, _ = _request(f"{base}/webhook/github", body, headers)
    assert code == 401
    handlers.status.assert_not_called()


def test_invalid_json_rejected(server) -> None:
    base, handlers, _ = server
    body = b"not json"
    headers = {
        "Content-Type": "application/json",
        "X-GitHub-Event": "status",
        "X-Hub-Signature-256": _sign(SECRET, body),
    }
    code, _ = _request(f"{base}/webhook/github", body, headers)
    assert code == 400
    handlers.status.assert_not_called()


@pytest.mark.parametrize("length", ["abc", "-5"])
def test_bad_content_length_rejected(server, length: str) -> None:
    base, handlers, _ = server
    conn = http.client.HTTPConnection(base.removeprefix("http://"), timeout=5)
    try:
        conn.putrequest("POST", "/webhook/github")
        conn.putheader("X-GitHub-Event", "status")
        conn.putheader("Content-Length", length)
        conn.endheaders()
        resp = conn.getresponse()
        assert resp.status == 400
        assert json.loads(resp.read()) == {"error": "invalid content-length"}
    finally:
        conn.close()
    handlers.status.assert_not_called()
