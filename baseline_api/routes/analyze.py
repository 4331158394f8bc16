"""Analyze route (scan with optional AI fix suggestions)."""

from fastapi import APIRouter

from ..schemas import AnalyzeRequest, AnalyzeResponse, ErrorDetail
from ..services import AIService
from ..utils import run_analysis

router = APIRouter()
ai_svc = AIService()


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    response_model_by_alias=True,
    responses={400: {"model": ErrorDetail}, 404: {"model": ErrorDetail}},
)
def analyze(req: AnalyzeRequest) -> AnalyzeResponse:
    """Scan sources; with generate_fixes, also ask the AI for fallbacks."""
    result, config, code = run_analysis(req)
    ai_suggestions = None
    if config.generate_fixes:
        ai_suggestions = ai_svc.suggest_fixes(result, config.target.value, code=code)
    return AnalyzeResponse(**result.to_dict(), ai_fix_suggestions=ai_suggestions)
