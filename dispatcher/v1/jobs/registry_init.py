"""
Job registry initialization.

Registers the notification job handler under the watched collection.
"""

from dispatcher.config.logging import get_logger
from dispatcher.config.settings import settings
from dispatcher.v1.core.registries import job_registry
from dispatcher.v1.jobs.handlers import NotificationJobHandler

logger = get_logger(__name__)


def register_job_handlers() -> None:
    """Register all job handlers with the job registry."""

    job_registry.register(settings.jobs_collection, NotificationJobHandler(settings))

    logger.info("Job handlers registered", registered_handlers=job_registry.list())


# Auto-register handlers when module is imported
register_job_handlers()
