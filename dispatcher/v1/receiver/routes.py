from fastapi import APIRouter
from fastapi.responses import Response

from dispatcher.config.settings import Settings, SettingsDep
from dispatcher.v1.receiver.background import render_service_worker

router = APIRouter()


@router.get("/firebase-messaging-sw.js", include_in_schema=False)
async def service_worker(settings: Settings = SettingsDep) -> Response:
    """Serve the messaging service worker from the site root."""
    return Response(
        content=render_service_worker(settings),
        media_type="application/javascript",
        headers={
            "Cache-Control": "no-store",
            "Service-Worker-Allowed": "/",
        },
    )
