"""
Background receiver.

Messages that reach a web client while the app is not in the foreground are
shown by the Firebase messaging service worker. The fallbacks applied there
are mirrored by render_background_message so they can be checked server side.
"""

import json
from string import Template
from typing import Any

from pydantic import BaseModel

from dispatcher.config.settings import Settings


class BackgroundNotification(BaseModel):
    """OS notification shown for a background message."""

    title: str
    body: str
    icon: str | None = None


def render_background_message(
    payload: dict[str, Any], default_title: str, icon: str | None = None
) -> BackgroundNotification:
    """Build the OS notification for a delivered message; title and body may be absent."""
    notification = payload.get("notification") or {}
    return BackgroundNotification(
        title=notification.get("title") or default_title,
        body=notification.get("body") or "",
        icon=icon,
    )


SERVICE_WORKER_TEMPLATE = Template(
    """\
importScripts('https://www.gstatic.com/firebasejs/$sdk_version/firebase-app-compat.js');
importScripts('https://www.gstatic.com/firebasejs/$sdk_version/firebase-messaging-compat.js');

firebase.initializeApp($firebase_config);

const messaging = firebase.messaging();

messaging.onBackgroundMessage(function(payload) {
  console.log('[firebase-messaging-sw.js] Received background message ', payload);

  const notificationTitle = payload.notification?.title || $default_title;
  const notificationOptions = {
    body: payload.notification?.body || '',
    icon: $icon,
  };

  self.registration.showNotification(notificationTitle, notificationOptions);
});
"""
)


def firebase_web_config(settings: Settings) -> dict[str, str]:
    return {
        "apiKey": settings.firebase_web_api_key,
        "authDomain": settings.firebase_auth_domain,
        "projectId": settings.firebase_project_id or "",
        "storageBucket": settings.firebase_storage_bucket,
        "messagingSenderId": settings.firebase_messaging_sender_id,
        "appId": settings.firebase_web_app_id,
    }


def render_service_worker(settings: Settings) -> str:
    """Render firebase-messaging-sw.js for the configured web app."""
    return SERVICE_WORKER_TEMPLATE.substitute(
        sdk_version=settings.firebase_js_sdk_version,
        firebase_config=json.dumps(firebase_web_config(settings), indent=2),
        default_title=json.dumps(settings.notification_default_title),
        icon=json.dumps(settings.notification_icon),
    )
