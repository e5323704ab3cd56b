#!/usr/bin/env python3
# =============================================================================
# scripts/start_worker.py - Celery Worker Entry Point
# =============================================================================
# Starts a Celery worker that delivers report emails.
#
# Usage:
#   python scripts/start_worker.py
#
#   # Or use Celery CLI directly
#   celery -A workers.celery_app worker --loglevel=info -Q default,email
#
# Prerequisites:
#   - Redis reachable at REDIS_URL
#   - RESEND_API_KEY set (.env file), otherwise emails are skipped
# =============================================================================

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from workers.celery_app import celery_app


def main():
    """Start the Celery worker on the default and email queues."""
    print("=" * 60)
    print("AJY Stylist Celery Worker")
    print("=" * 60)
    print()
    print("Queues: default, email")
    print("Press Ctrl+C to stop")
    print()

    celery_app.worker_main([
        "worker",
        "--loglevel=info",
        "--queues=default,email",
        "--concurrency=2",
    ])


if __name__ == "__main__":
    main()
