"""
Document creation event endpoint.

Lets a platform that pushes creation events over HTTP (or a local producer)
drive the same dispatch as the Firestore trigger.
"""

from typing import Any

from fastapi import APIRouter, Request

from dispatcher.config.logging import get_logger
from dispatcher.v1.core.exceptions import create_success_response
from dispatcher.v1.jobs.dispatch import handle_document_created
from dispatcher.v1.jobs.schemas import DocumentCreatedEvent

logger = get_logger(__name__)
router = APIRouter(prefix="/events", tags=["events"])


@router.post("/document-created", response_model=dict)
async def document_created(
    event: DocumentCreatedEvent, request: Request
) -> dict[str, Any]:
    """Dispatch a created job document. Send failures are reported, not raised."""

    logger.info(
        "Document created event received",
        collection=event.collection,
        document_id=event.document_id,
    )

    result = await handle_document_created(event.collection, event.fields)

    return create_success_response(
        data=result.model_dump(mode="json"),
        message=f"Dispatch {result.outcome.value}",
        request_id=getattr(request.state, "request_id", None),
    )
