from datetime import UTC, datetime

from fastapi import APIRouter
from pydantic import BaseModel

from dispatcher.config.settings import Settings, SettingsDep
from dispatcher.infra.firebase import is_firebase_initialized
from dispatcher.v1.core.exceptions import create_success_response
from dispatcher.v1.core.registries import job_registry, push_sender_registry

router = APIRouter()


class PushHealth(BaseModel):
    """Push provider status."""

    provider: str
    registered: bool
    firebase_initialized: bool


class HealthResponse(BaseModel):
    """Health response with push provider status."""

    ok: bool
    version: str
    environment: str
    timestamp: str
    push: PushHealth
    collections: list[str]


@router.get("/healthz", response_model=dict)
async def health_check(settings: Settings = SettingsDep):
    """Health check endpoint with push provider and watched collections."""

    provider = settings.push_provider.value
    push_health = PushHealth(
        provider=provider,
        registered=provider in push_sender_registry.list(),
        firebase_initialized=is_firebase_initialized(),
    )
    collections = job_registry.list()

    health = HealthResponse(
        ok=push_health.registered and settings.jobs_collection in collections,
        version=settings.version,
        environment=settings.environment,
        timestamp=datetime.now(UTC).isoformat(),
        push=push_health,
        collections=collections,
    )

    return create_success_response(data=health.model_dump())
