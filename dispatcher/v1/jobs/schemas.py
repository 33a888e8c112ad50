"""
Notification job schemas.

A NotificationJob is the field snapshot of a document created in the jobs
collection; an OutboundMessage is what gets handed to the push provider.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dispatcher.v1.core.exceptions import SendFailureKind


class NotificationJob(BaseModel):
    """Snapshot of a created job document."""

    model_config = ConfigDict(extra="ignore")

    token: str | None = Field(default=None, description="Device registration token")
    title: str | None = Field(default=None, description="Notification headline")
    body: str | None = Field(default=None, description="Notification text")
    data: dict[str, str] = Field(
        default_factory=dict, description="Application payload delivered with the notification"
    )

    @field_validator("data", mode="before")
    @classmethod
    def _null_data_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class MessageNotification(BaseModel):
    """Display part of a push message."""

    title: str | None = None
    body: str | None = None


class OutboundMessage(BaseModel):
    """Message envelope sent to the push provider, one per job."""

    target: str
    notification: MessageNotification
    data: dict[str, str] = Field(default_factory=dict)


class DispatchOutcome(str, Enum):
    SENT = "sent"
    SKIPPED = "skipped"
    FAILED = "failed"


class DispatchResult(BaseModel):
    """Outcome of one dispatch attempt."""

    outcome: DispatchOutcome
    target: str | None = None
    message_id: str | None = None
    error_kind: SendFailureKind | None = None
    error: str | None = None


class DocumentCreatedEvent(BaseModel):
    """Document creation event delivered over HTTP."""

    collection: str = Field(..., min_length=1, description="Collection of the new document")
    document_id: str | None = Field(default=None, description="Key of the new document")
    fields: dict[str, Any] = Field(
        default_factory=dict, description="Field snapshot at creation time"
    )
