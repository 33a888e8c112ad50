"""
Cloud Functions for Firebase entry points.

Deploy with a functions ``main.py`` that re-exports ``send_notification``.
Deployed triggers always deliver through FCM; ``PUSH_PROVIDER`` only selects
the sender for the HTTP adapter.
"""

import asyncio
from typing import Any

from firebase_functions import firestore_fn

from dispatcher.config.logging import get_logger, setup_logging
from dispatcher.config.settings import PushProvider, settings
from dispatcher.v1.jobs.handlers import NotificationJobHandler
from dispatcher.v1.jobs.schemas import DispatchResult
from dispatcher.v1.push import registry_init as push_registry_init  # noqa: F401

setup_logging()
logger = get_logger(__name__)

job_handler = NotificationJobHandler(settings, provider=PushProvider.FCM)


def process_created_document(
    doc_id: str | None, snapshot: dict[str, Any] | None
) -> DispatchResult | None:
    """Run one dispatch for a created job document, to completion."""
    if snapshot is None:
        logger.warning("Job document has no snapshot", doc_id=doc_id)
        return None

    result = asyncio.run(job_handler.handle(snapshot))
    logger.info("Job document processed", doc_id=doc_id, outcome=result.outcome.value)
    return result


def process_event(event: Any) -> DispatchResult | None:
    snapshot = event.data.to_dict() if event.data is not None else None
    return process_created_document(event.params.get("docId"), snapshot)


@firestore_fn.on_document_created(document=f"{settings.jobs_collection}/{{docId}}")
def send_notification(
    event: firestore_fn.Event[firestore_fn.DocumentSnapshot | None],
) -> None:
    """Send one push notification for each created job document."""
    process_event(event)
