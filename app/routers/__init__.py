# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - checkout.py: Polar checkout creation
# - analyze.py: Style analysis (report + style image)
# - images.py: Standalone style image generation
# - email.py: Emailing a finished report
# - subscription.py: Subscription status and cancellation
#
# Each router is mounted in main.py under the /api prefix.
# =============================================================================

from . import health
from . import checkout
from . import analyze
from . import images
from . import email
from . import subscription

__all__ = [
    "health",
    "checkout",
    "analyze",
    "images",
    "email",
    "subscription",
]
