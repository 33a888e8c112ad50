"""Tests for the background receiver"""

from fastapi.testclient import TestClient

from dispatcher.config.settings import Settings
from dispatcher.v1.receiver.background import (
    render_background_message,
    render_service_worker,
)


class TestRenderBackgroundMessage:
    """Fallbacks applied to delivered messages"""

    def test_missing_title_uses_default(self):
        shown = render_background_message(
            {"notification": {"body": "Test"}}, default_title="BrightBuds Notification"
        )

        assert shown.title == "BrightBuds Notification"
        assert shown.body == "Test"

    def test_missing_notification_block(self):
        shown = render_background_message(
            {"data": {"orderId": "42"}}, default_title="Fallback", icon="/icon.png"
        )

        assert shown.title == "Fallback"
        assert shown.body == ""
        assert shown.icon == "/icon.png"

    def test_title_and_body_are_kept(self):
        shown = render_background_message(
            {"notification": {"title": "Hi", "body": "There"}}, default_title="Fallback"
        )

        assert (shown.title, shown.body) == ("Hi", "There")


def test_service_worker_script():
    settings = Settings(
        firebase_web_api_key="web-key",
        firebase_project_id="brightbuds-demo",
        firebase_messaging_sender_id="1234",
        firebase_js_sdk_version="9.23.0",
        notification_default_title="Kid's Notification",
    )

    script = render_service_worker(settings)

    assert "firebasejs/9.23.0/firebase-app-compat.js" in script
    assert "firebasejs/9.23.0/firebase-messaging-compat.js" in script
    assert '"apiKey": "web-key"' in script
    assert '"projectId": "brightbuds-demo"' in script
    assert '"messagingSenderId": "1234"' in script
    assert "payload.notification?.title || \"Kid's Notification\"" in script
    assert "payload.notification?.body || ''" in script
    assert "onBackgroundMessage" in script


def test_service_worker_route(client: TestClient):
    response = client.get("/firebase-messaging-sw.js")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/javascript")
    assert response.headers["cache-control"] == "no-store"
    assert response.headers["service-worker-allowed"] == "/"
    assert "messaging.onBackgroundMessage" in response.text
