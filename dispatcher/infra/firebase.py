import threading

import firebase_admin
from firebase_admin import credentials

from dispatcher.config.logging import get_logger
from dispatcher.config.settings import Settings

logger = get_logger(__name__)

# Process-wide Firebase Admin app, created before the first send and never torn down
_app: firebase_admin.App | None = None
_lock = threading.Lock()


def initialize_firebase(settings: Settings) -> firebase_admin.App:
    """Get or create the process-wide Firebase Admin app."""
    global _app
    if _app is not None:
        return _app

    with _lock:
        if _app is None:
            _app = _get_or_initialize_app(settings)
    return _app


def _get_or_initialize_app(settings: Settings) -> firebase_admin.App:
    try:
        app = firebase_admin.get_app(settings.firebase_app_name)
        logger.info("Reusing Firebase app", app_name=app.name)
        return app
    except ValueError:
        pass

    credential = (
        credentials.Certificate(settings.firebase_credentials_file)
        if settings.firebase_credentials_file
        else None  # application default credentials
    )
    options = (
        {"projectId": settings.firebase_project_id}
        if settings.firebase_project_id
        else None
    )

    app = firebase_admin.initialize_app(
        credential, options, name=settings.firebase_app_name
    )
    logger.info(
        "Firebase app initialized",
        app_name=app.name,
        project_id=settings.firebase_project_id,
        credentials_file=settings.firebase_credentials_file,
    )
    return app


def is_firebase_initialized() -> bool:
    return _app is not None


def reset_firebase() -> None:
    """Forget the cached app reference (tests only; the app stays registered)."""
    global _app
    with _lock:
        _app = None
