"""Tests for best-effort notification delivery."""
from app.core.config import settings
from app.services.notifications import Notifier


def test_notify_keeps_no_per_call_state():
    notifier = Notifier()
    for _ in range(1000):
        assert notifier.notify("High pain warning", "Rest today") is True
    assert vars(notifier) == {}


def test_disabled_notifications_are_dropped(monkeypatch):
    monkeypatch.setattr(settings, "NOTIFICATIONS_ENABLED", False)
    calls = []
    notifier = Notifier()
    monkeypatch.setattr(notifier, "deliver", lambda title, body: calls.append(title))

    assert notifier.notify("High pain warning", "Rest today") is False
    assert calls == []


def test_delivery_failure_is_swallowed(monkeypatch):
    notifier = Notifier()

    def broken(title, body):
        raise RuntimeError("push service down")

    monkeypatch.setattr(notifier, "deliver", broken)
    assert notifier.notify("Chronic pain notice", "See a clinic") is False
