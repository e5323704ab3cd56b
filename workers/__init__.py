# =============================================================================
# workers/ - Celery Background Task Workers
# =============================================================================
# This package contains the Celery configuration and task definitions for
# work that should not hold up an HTTP response.
#
# Components:
# - celery_app.py: Celery application configuration
# - tasks.py: Task definitions (report email delivery)
# - config.py: Worker-specific settings
#
# Usage:
#   # Start worker
#   celery -A workers.celery_app worker --loglevel=info -Q default,email
#
#   # Submit task (from API)
#   from workers.tasks import send_report_email
#   send_report_email.delay(email, report, "ko", style_image)
# =============================================================================

from .celery_app import celery_app
from . import tasks

__all__ = [
    "celery_app",
    "tasks",
]
