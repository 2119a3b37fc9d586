"""Tests for the completion webhook."""

from __future__ import annotations

from typing import Any, Dict, List

import pytest
import requests

from leadsync.errors import NotificationFailed
from leadsync.services import notification_dispatcher
from leadsync.services.notification_dispatcher import NotificationDispatcher


class _FakeResponse:
    def __init__(self, status_code: int = 200) -> None:
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")


@pytest.fixture
def posts(monkeypatch: pytest.MonkeyPatch) -> List[Dict[str, Any]]:
    calls: List[Dict[str, Any]] = []

    def fake_post(url: str, **kwargs: Any) -> _FakeResponse:
        calls.append({"url": url, **kwargs})
        return _FakeResponse()

    monkeypatch.setattr(notification_dispatcher.requests, "post", fake_post)
    return calls


def test_posts_fixed_payload_once(posts: List[Dict[str, Any]]) -> None:
    NotificationDispatcher(timeout=5).notify("https://hooks.example.com/upload", 120)

    assert posts == [
        {
            "url": "https://hooks.example.com/upload",
            "json": {"message": "Data synced successfully", "total_rows": 120},
            "timeout": 5,
        }
    ]


def test_error_status_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(notification_dispatcher.requests, "post", lambda url, **kw: _FakeResponse(502))

    with pytest.raises(NotificationFailed):
        NotificationDispatcher().notify("https://hooks.example.com/upload", 3)


def test_transport_error_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    def refuse(url: str, **kwargs: Any) -> None:
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(notification_dispatcher.requests, "post", refuse)

    with pytest.raises(NotificationFailed, match="connection refused"):
        NotificationDispatcher().notify("https://hooks.example.com/upload", 3)


def test_blank_url_sends_nothing(posts: List[Dict[str, Any]]) -> None:
    with pytest.raises(NotificationFailed):
        NotificationDispatcher().notify("   ", 3)
    assert posts == []
