"""
Job handlers for created documents.

Handlers implement the JobHandler protocol and are registered in the job
registry under the collection they watch.
"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from dispatcher.config.logging import get_logger
from dispatcher.config.settings import PushProvider, Settings
from dispatcher.v1.core.exceptions import SendFailureKind
from dispatcher.v1.core.registries import push_sender_registry
from dispatcher.v1.jobs.dispatch import dispatch
from dispatcher.v1.jobs.schemas import DispatchOutcome, DispatchResult, NotificationJob

logger = get_logger(__name__)


class NotificationJobHandler:
    """
    Sends one push notification per created job document.

    Snapshot expected:
    {
        "token": "device-registration-token",
        "title": "Headline",          # optional
        "body": "Message text",       # optional
        "data": {"key": "value"}      # optional, string values only
    }
    """

    def __init__(self, settings: Settings, provider: PushProvider | None = None):
        self.settings = settings
        self.provider = provider or settings.push_provider

    async def handle(self, snapshot: dict[str, Any]) -> DispatchResult:
        """Parse the snapshot and dispatch it through the configured provider."""
        try:
            job = NotificationJob.model_validate(snapshot)
        except PydanticValidationError as e:
            logger.error(
                "Malformed notification job",
                error_count=e.error_count(),
                errors=[
                    {"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()
                ],
            )
            return DispatchResult(
                outcome=DispatchOutcome.FAILED,
                target=_raw_token(snapshot),
                error_kind=SendFailureKind.INVALID_ARGUMENT,
                error="Malformed notification job",
            )

        sender = push_sender_registry.get(self.provider.value)
        return await dispatch(job, sender)


def _raw_token(snapshot: dict[str, Any]) -> str | None:
    token = snapshot.get("token") if isinstance(snapshot, dict) else None
    return token if isinstance(token, str) else None
