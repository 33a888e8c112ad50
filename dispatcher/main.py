from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from dispatcher.config.logging import setup_logging
from dispatcher.config.settings import settings
from dispatcher.v1.core.exceptions import (
    DispatcherException,
    RequestContextMiddleware,
    dispatcher_exception_handler,
    general_exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from dispatcher.v1.core.registries import job_registry, push_sender_registry
from dispatcher.v1.healthz import router as health_router
from dispatcher.v1.jobs import registry_init as jobs_registry_init  # noqa: F401
from dispatcher.v1.jobs.routes import router as events_router
from dispatcher.v1.push import registry_init as push_registry_init  # noqa: F401
from dispatcher.v1.receiver.routes import router as receiver_router


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    setup_logging()

    app = FastAPI(
        title=settings.app_name,
        description="Push notification dispatch for created job documents",
        version=settings.version,
        debug=settings.debug,
        openapi_url="/v1/openapi.json" if settings.debug else None,
        docs_url="/v1/docs" if settings.debug else None,
        redoc_url="/v1/redoc" if settings.debug else None,
    )

    app.add_middleware(RequestContextMiddleware)

    # Add CORS middleware for development
    if settings.debug:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(DispatcherException, dispatcher_exception_handler)
    app.add_exception_handler(
        RequestValidationError, request_validation_exception_handler
    )
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(health_router, prefix="/v1", tags=["health"])
    app.include_router(events_router, prefix="/v1")
    # The service worker must be served from the root to control the whole site
    app.include_router(receiver_router)

    # Freeze registries in non-development environments to prevent runtime modifications
    if settings.environment != "development":
        job_registry.freeze()
        push_sender_registry.freeze()

    return app


# Create the app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "dispatcher.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
    )
