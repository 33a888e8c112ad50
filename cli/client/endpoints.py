"""Dispatcher API endpoints"""

from typing import Any

from .base import APIClient
from ..utils.config_manager import config


class DispatcherClient:
    """Typed calls for the dispatcher's health and event endpoints"""

    def __init__(self, base_url: str | None = None, api: APIClient | None = None):
        self.api = api or APIClient(
            base_url=base_url or config.get("api.base_url"),
            timeout=config.get("api.timeout", 30),
        )

    def __enter__(self):
        self.api.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.api.__exit__(exc_type, exc_val, exc_tb)

    def health_check(self) -> dict[str, Any]:
        return self.api.get("/healthz")

    def document_created(
        self,
        collection: str,
        fields: dict[str, Any],
        document_id: str | None = None,
    ) -> dict[str, Any]:
        """Report a created job document and return the dispatch result"""
        payload: dict[str, Any] = {"collection": collection, "fields": fields}
        if document_id:
            payload["document_id"] = document_id
        return self.api.post("/events/document-created", payload)
