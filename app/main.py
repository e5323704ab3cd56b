# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the AJY Stylist API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    StylistException,
    stylist_exception_handler,
    validation_exception_handler,
)
from app.routers import health, checkout, analyze, images, email, subscription
from app.auth import routes as auth_routes

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs which providers are configured so a missing key shows up at
    startup rather than on the first request.
    """
    logger.info(f"Starting AJY Stylist API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    for name, value in (
        ("OPENAI_API_KEY", settings.OPENAI_API_KEY),
        ("POLAR_ACCESS_TOKEN", settings.POLAR_ACCESS_TOKEN),
        ("RESEND_API_KEY", settings.RESEND_API_KEY),
    ):
        if not value:
            logger.warning(f"{name} is not set; dependent endpoints will report it")

    yield

    logger.info("Shutting down AJY Stylist API")


# Create FastAPI application
app = FastAPI(
    title="AJY Stylist API",
    description="""
## AI Fashion Styling API

Upload a photo with height, weight and gender, pay once through Polar, and
receive a personal style report plus a three-look style image.

### Flow

1. **Checkout** - `POST /api/checkout` returns an embeddable Polar checkout
2. **Analyze** - `POST /api/analyze` with the paid `checkout_id`
3. **Email** - the report is emailed automatically; `POST /api/send-email`
   resends it to any address

If the analysis fails after payment, the checkout is refunded and the error
body says so (`refunded: true`).
""",
    version="1.0.0",
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Account endpoints for signed-in users",
        },
        {
            "name": "Checkout",
            "description": "Polar checkout sessions",
        },
        {
            "name": "Analysis",
            "description": "Style report and style image generation",
        },
        {
            "name": "Email",
            "description": "Report delivery by email",
        },
        {
            "name": "Subscription",
            "description": "Subscription status and cancellation",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - also answers OPTIONS preflight for every route
_origins = settings.cors_origins_list
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if "*" in _origins else _origins,
    allow_credentials="*" not in _origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(StylistException)
async def handle_stylist_exception(request: Request, exc: StylistException):
    """Handle custom AJY Stylist exceptions."""
    return await stylist_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    """Handle request bodies FastAPI could not parse."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Server error",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix=API_PREFIX,
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix=API_PREFIX,
    tags=["Health"]
)

# Checkout endpoints
app.include_router(
    checkout.router,
    prefix=API_PREFIX,
    tags=["Checkout"]
)

# Analysis endpoints
app.include_router(
    analyze.router,
    prefix=API_PREFIX,
    tags=["Analysis"]
)
app.include_router(
    images.router,
    prefix=API_PREFIX,
    tags=["Analysis"]
)

# Email endpoints
app.include_router(
    email.router,
    prefix=API_PREFIX,
    tags=["Email"]
)

# Subscription endpoints
app.include_router(
    subscription.router,
    prefix=API_PREFIX,
    tags=["Subscription"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "AJY Stylist API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": f"{API_PREFIX}/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
