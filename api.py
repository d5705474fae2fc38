import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from config import default_llm_config, setup_logging
from errors import (
    HireSightError,
    LLMConfigError,
    LLMError,
    MissingInputError,
    UnsupportedFileTypeError,
    UrlContentError,
)
from evaluator import analyze_interview_consistency
from file_utils import parse_document_file
from llm_client import AVAILABLE_MODELS, get_llm_client
from report_generator import build_markdown_report, generate_preliminary_decision
from resume_matcher import analyze_for_recruiter
from resume_rewriter import rewrite_resume_for_job
from schemas import (
    ConsistencyAnalysisResult,
    DocumentInput,
    LlmConfig,
    PreliminaryDecisionResult,
    RecruiterAnalysisResult,
    RewrittenResumeResult,
)
from url_parser import parse_url_content

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="HireSight")

ERROR_STATUS = [
    (MissingInputError, 400),
    (UnsupportedFileTypeError, 400),
    (LLMConfigError, 400),
    (UrlContentError, 422),
    (LLMError, 502),
]


@app.exception_handler(HireSightError)
async def hiresight_error_handler(request: Request, exc: HireSightError):
    status = next((code for cls, code in ERROR_STATUS if isinstance(exc, cls)), 500)
    logger.warning("%s %s failed with %s: %s", request.method, request.url.path, type(exc).__name__, exc)
    return JSONResponse(status_code=status, content={"detail": str(exc)})


class LlmRequest(BaseModel):
    llm: Optional[LlmConfig] = None
    language: str = "en"


class UrlRequest(BaseModel):
    url: str


class AnalyzeRequest(LlmRequest):
    job: DocumentInput
    resume: DocumentInput


class DecisionRequest(LlmRequest):
    analysis: RecruiterAnalysisResult


class ConsistencyRequest(LlmRequest):
    job: DocumentInput
    resume: DocumentInput
    interview_transcript: str
    compatibility_gaps: List[str] = Field(default_factory=list)


class ReportRequest(BaseModel):
    analysis: RecruiterAnalysisResult
    decision: Optional[PreliminaryDecisionResult] = None
    consistency: Optional[ConsistencyAnalysisResult] = None
    rewritten: Optional[RewrittenResumeResult] = None


def _client_for(body: LlmRequest):
    return get_llm_client(body.llm or default_llm_config())


@app.get("/health")
def api_health():
    return {"status": "ok"}


@app.get("/models")
def api_models() -> Dict[str, List[Dict[str, str]]]:
    return AVAILABLE_MODELS


@app.post("/documents/parse", response_model=DocumentInput)
async def api_parse_document(file: UploadFile = File(...)):
    data = await file.read()
    return parse_document_file(file.filename or "", data, file.content_type)


@app.post("/documents/url", response_model=DocumentInput)
def api_parse_url(body: UrlRequest):
    return DocumentInput.from_text(parse_url_content(body.url))


@app.post("/analyze", response_model=RecruiterAnalysisResult)
def api_analyze(body: AnalyzeRequest):
    return analyze_for_recruiter(_client_for(body), body.job, body.resume, body.language)


@app.post("/decision", response_model=PreliminaryDecisionResult)
def api_decision(body: DecisionRequest):
    return generate_preliminary_decision(_client_for(body), body.analysis, body.language)


@app.post("/consistency", response_model=ConsistencyAnalysisResult)
def api_consistency(body: ConsistencyRequest):
    return analyze_interview_consistency(
        _client_for(body),
        body.job,
        body.resume,
        body.interview_transcript,
        body.compatibility_gaps,
        body.language,
    )


@app.post("/rewrite", response_model=RewrittenResumeResult)
def api_rewrite(body: AnalyzeRequest):
    return rewrite_resume_for_job(_client_for(body), body.job, body.resume, body.language)


@app.post("/report", response_class=PlainTextResponse)
def api_report(body: ReportRequest):
    report = build_markdown_report(body.analysis, body.decision, body.consistency, body.rewritten)
    return PlainTextResponse(report, media_type="text/markdown")
