"""
Push senders.

FcmPushSender delivers through Firebase Cloud Messaging with the Admin SDK.
StubPushSender keeps messages in memory for development and tests.
"""

import asyncio
import uuid

from firebase_admin import exceptions as firebase_exceptions
from firebase_admin import messaging

from dispatcher.config.logging import get_logger
from dispatcher.config.settings import Settings
from dispatcher.infra.firebase import initialize_firebase
from dispatcher.v1.core.exceptions import PushSendError, SendFailureKind
from dispatcher.v1.jobs.schemas import OutboundMessage

logger = get_logger(__name__)

# First match wins; messaging subclasses come before their generic parents
_FAILURE_KINDS = [
    (messaging.UnregisteredError, SendFailureKind.UNREGISTERED_TOKEN),
    (messaging.QuotaExceededError, SendFailureKind.QUOTA_EXCEEDED),
    (messaging.SenderIdMismatchError, SendFailureKind.INVALID_ARGUMENT),
    (firebase_exceptions.InvalidArgumentError, SendFailureKind.INVALID_ARGUMENT),
    (firebase_exceptions.NotFoundError, SendFailureKind.UNREGISTERED_TOKEN),
    (firebase_exceptions.ResourceExhaustedError, SendFailureKind.QUOTA_EXCEEDED),
    (
        (firebase_exceptions.UnavailableError, firebase_exceptions.DeadlineExceededError),
        SendFailureKind.TRANSPORT_ERROR,
    ),
    # Raised by the SDK's client-side message validation
    ((ValueError, TypeError), SendFailureKind.INVALID_ARGUMENT),
]


def classify_send_error(exc: BaseException) -> SendFailureKind:
    """Map an Admin SDK error onto a send failure kind."""
    for exc_types, kind in _FAILURE_KINDS:
        if isinstance(exc, exc_types):
            return kind
    return SendFailureKind.UNKNOWN


def to_fcm_message(message: OutboundMessage) -> messaging.Message:
    return messaging.Message(
        token=message.target,
        notification=messaging.Notification(
            title=message.notification.title,
            body=message.notification.body,
        ),
        data=message.data,
    )


class FcmPushSender:
    """Firebase Cloud Messaging sender."""

    def __init__(self, settings: Settings):
        self.settings = settings

    async def send(self, message: OutboundMessage) -> str:
        try:
            app = initialize_firebase(self.settings)
        except Exception as e:
            raise PushSendError(
                f"Firebase app unavailable: {e}", SendFailureKind.UNKNOWN
            ) from e

        fcm_message = to_fcm_message(message)

        try:
            # messaging.send blocks on HTTP; keep it off the event loop
            return await asyncio.to_thread(
                messaging.send, fcm_message, self.settings.fcm_dry_run, app
            )
        except Exception as e:
            kind = classify_send_error(e)
            details = {}
            if isinstance(e, firebase_exceptions.FirebaseError):
                details["code"] = e.code
            raise PushSendError(str(e), kind, details) from e


class StubPushSender:
    """In-memory sender used when no provider is configured.

    Keeps only the most recent ``max_recorded`` messages.
    """

    def __init__(self, max_recorded: int = 100):
        self.max_recorded = max_recorded
        self.sent: list[OutboundMessage] = []

    async def send(self, message: OutboundMessage) -> str:
        message_id = f"stub-{uuid.uuid4().hex[:12]}"
        self.sent.append(message)
        del self.sent[:-self.max_recorded]
        logger.debug("Stub push recorded", token=message.target, message_id=message_id)
        return message_id

    def clear(self) -> None:
        self.sent.clear()
