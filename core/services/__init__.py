# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .polar_service import PolarService, PolarError
from .email_service import EmailService, EmailDeliveryError
from .analysis_service import AnalysisService

__all__ = [
    "PolarService",
    "PolarError",
    "EmailService",
    "EmailDeliveryError",
    "AnalysisService",
]
