# =============================================================================
# app/routers/analyze.py - Style Analysis Endpoint
# =============================================================================
# Thin HTTP layer over AnalysisService. Validation, refunds and email
# queueing all live in the service; its exceptions render themselves.
# =============================================================================

from fastapi import APIRouter

from app.dependencies import AnalysisServiceDep
from core.models.analysis import AnalyzeRequest, AnalyzeResponse

router = APIRouter()


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(request: AnalyzeRequest, service: AnalysisServiceDep):
    """
    Generate a style report (and, when possible, a style image) from a photo
    and body metrics.

    Errors:
    - 400: photo, height, weight or gender missing
    - 500: OpenAI not configured, or the report failed; the body carries
      `refunded` telling whether a paid checkout was refunded
    """
    return await service.analyze(request)
