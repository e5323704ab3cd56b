# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - models/: Pydantic schemas for request/response validation
# - services/: Polar payments, Resend email, analysis orchestration
# - locale.py: Locale resolution and localized error messages
#
# Code in this package should NOT import from Celery. Services receive
# their collaborators (clients, email queue) from the caller.
# =============================================================================
