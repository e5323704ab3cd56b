# =============================================================================
# workers/celery_app.py - Celery Application for Report Emails
# =============================================================================
# The worker delivers the report emails that POST /api/analyze queues.
# Signal handlers log each delivery outcome so a lost email can be traced
# from the API log (task id) to the worker log.
#
# Usage:
#   celery -A workers.celery_app worker --loglevel=info -Q default,email
# =============================================================================

import logging

from celery import Celery
from celery.signals import task_failure, task_retry, task_success, worker_ready
from dotenv import load_dotenv

# Worker processes do not go through app.main, so read .env here
load_dotenv()

from app.config import settings  # noqa: E402

logger = logging.getLogger(__name__)


def _broker_host(url: str) -> str:
    """Broker URL without credentials, for logs."""
    return url.rsplit("@", 1)[-1]


celery_app = Celery(
    "ajy_stylist",
    broker=settings.REDIS_URL,
    backend=settings.REDIS_URL,
    include=["workers.tasks"],
)
celery_app.config_from_object("workers.config:CeleryConfig")


# =============================================================================
# Delivery Logging
# =============================================================================

@worker_ready.connect
def log_worker_ready(sender=None, **kwargs):
    resend = "configured" if settings.RESEND_API_KEY else "not configured, emails will be skipped"
    logger.info(f"Email worker ready (broker {_broker_host(settings.REDIS_URL)}, Resend {resend})")


@task_success.connect
def log_task_success(sender=None, result=None, **kwargs):
    """
    Log the outcome of a finished task.

    send_report_email returns {"success": False, ...} instead of raising
    once it gives up, so that case is reported as a warning here.
    """
    if isinstance(result, dict) and result.get("success") is False:
        logger.warning(f"{sender.name} gave up: {result.get('error')}")
    else:
        logger.info(f"{sender.name} succeeded")


@task_retry.connect
def log_task_retry(sender=None, request=None, reason=None, **kwargs):
    logger.warning(f"Retrying {sender.name} [{request.id}]: {reason}")


@task_failure.connect
def log_task_failure(sender=None, task_id=None, exception=None, **kwargs):
    logger.error(f"{sender.name} failed [{task_id}]: {exception}")
