"""
Job record to push message dispatch.

One created job document produces at most one send attempt. Delivery
problems are logged and reported in the returned DispatchResult; they are
never raised, retried or written back to the job.
"""

from typing import Any

from dispatcher.config.logging import get_logger
from dispatcher.v1.core.exceptions import NotFoundError, PushSendError, SendFailureKind
from dispatcher.v1.core.registries import PushSender, job_registry
from dispatcher.v1.jobs.schemas import (
    DispatchOutcome,
    DispatchResult,
    MessageNotification,
    NotificationJob,
    OutboundMessage,
)

logger = get_logger(__name__)


def build_message(job: NotificationJob) -> OutboundMessage:
    """Map a job onto the provider envelope. Title and body are not validated."""
    return OutboundMessage(
        target=job.token,
        notification=MessageNotification(title=job.title, body=job.body),
        data=dict(job.data or {}),
    )


async def dispatch(job: NotificationJob, sender: PushSender) -> DispatchResult:
    """Send one push message for a created job."""
    if not job.token:
        logger.info("No push token provided, skipping job", title=job.title)
        return DispatchResult(outcome=DispatchOutcome.SKIPPED)

    message = build_message(job)

    try:
        message_id = await sender.send(message)
    except PushSendError as e:
        return _failed(message, e.kind, e.message)
    except Exception as e:
        return _failed(message, SendFailureKind.UNKNOWN, str(e))

    logger.info(
        "Notification sent",
        token=message.target,
        title=message.notification.title,
        message_id=message_id,
    )
    return DispatchResult(
        outcome=DispatchOutcome.SENT, target=message.target, message_id=message_id
    )


def _failed(
    message: OutboundMessage, kind: SendFailureKind, error: str
) -> DispatchResult:
    logger.error(
        "Error sending notification",
        token=message.target,
        title=message.notification.title,
        error_kind=kind.value,
        error=error,
    )
    return DispatchResult(
        outcome=DispatchOutcome.FAILED,
        target=message.target,
        error_kind=kind,
        error=error,
    )


async def handle_document_created(
    collection: str, snapshot: dict[str, Any] | None
) -> DispatchResult:
    """Route a document creation to the handler registered for its collection."""
    try:
        handler = job_registry.get(collection)
    except KeyError:
        raise NotFoundError(
            f"No job handler registered for collection: {collection}",
            details={"collection": collection},
        ) from None

    return await handler.handle(snapshot or {})
