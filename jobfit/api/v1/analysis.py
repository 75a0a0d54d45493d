from fastapi import APIRouter, HTTPException, Request

from jobfit.core.errors import InvalidInputError
from jobfit.core.rate_limit import analysis_rate_limit, rate_limit
from jobfit.normalize.limits import ValidationReport, validate_inputs
from jobfit.schemas.analysis import AnalysisResult
from jobfit.schemas.api import AnalysisRequest, PromptResponse
from jobfit.services.analysis_engine import MatchingEngine
from jobfit.services.prompt_export import generate_cover_letter_prompt

router = APIRouter()


def _engine(request: Request) -> MatchingEngine:
    return request.app.state.engine


def _run(request: Request, payload: AnalysisRequest) -> AnalysisResult:
    try:
        return _engine(request).run_analysis(payload.profile, payload.job_posting_text)
    except InvalidInputError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc


@router.post("/analysis", response_model=AnalysisResult)
@analysis_rate_limit()
def run_analysis(request: Request, payload: AnalysisRequest):
    return _run(request, payload)


@router.post("/analysis/validate", response_model=ValidationReport)
@rate_limit()
def validate_analysis_input(request: Request, payload: AnalysisRequest):
    _ = request
    return validate_inputs(payload.profile, payload.job_posting_text)


@router.post("/analysis/prompt", response_model=PromptResponse)
@analysis_rate_limit()
def cover_letter_prompt(request: Request, payload: AnalysisRequest):
    result = _run(request, payload)
    return PromptResponse(prompt=generate_cover_letter_prompt(result, payload.job_posting_text))
