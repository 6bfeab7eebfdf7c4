"""Coverage analysis endpoints.

Routes are plain (sync) functions so FastAPI runs each load-and-analyze
call in its threadpool; a large document never blocks the event loop.
"""

import logging

from fastapi import APIRouter, HTTPException, Request, status

from owlcoverage.config import Settings
from owlcoverage.core.analyzer import CoverageAnalyzer
from owlcoverage.core.loader import load_sample
from owlcoverage.core.models import AnalysisResult, LoadFailure
from owlcoverage.web.models import (
    AnalysisResponse,
    AnalyzeRequest,
    ErrorCode,
    ErrorResponse,
    result_to_response,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analyze"])


def check_document(payload: AnalyzeRequest, settings: Settings) -> None:
    """Reject empty or oversized uploads before parsing.

    Raises:
        HTTPException: 400 if the document is blank, 413 if it is too large.
    """
    if not payload.document.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Document must not be empty",
        )

    size = len(payload.document.encode("utf-8"))
    limit = settings.web.max_document_bytes
    if size > limit:
        raise HTTPException(
            status_code=413,
            detail=ErrorResponse(
                code=ErrorCode.DOCUMENT_TOO_LARGE,
                message=f"Document is {size} bytes; the limit is {limit} bytes",
                details={"size": size, "limit": limit},
            ).model_dump(mode="json"),
        )


def failure_detail(failure: LoadFailure) -> dict:
    """Error body for a malformed document."""
    return ErrorResponse(
        code=ErrorCode.MALFORMED_DOCUMENT,
        message=failure.message,
        details={"line": failure.line, "column": failure.column},
    ).model_dump(mode="json")


def run_analysis(document: str, source: str | None) -> AnalysisResult | LoadFailure:
    """Load and analyze a document as one blocking unit of work."""
    return CoverageAnalyzer().analyze_text(document, source=source)


@router.post(
    "/analyze",
    response_model=AnalysisResponse,
    responses={
        413: {"description": "Document too large"},
        422: {"description": "Malformed document"},
    },
)
def analyze_document(payload: AnalyzeRequest, request: Request) -> AnalysisResponse:
    """Analyze the definition coverage of an uploaded OWL/XML document.

    Returns the defined and undefined class lists with the coverage
    percentage. A document that is not well-formed yields a 422 with
    code MALFORMED_DOCUMENT and the error position.
    """
    settings: Settings = request.app.state.settings
    check_document(payload, settings)

    outcome = run_analysis(payload.document, payload.source or "upload")
    if isinstance(outcome, LoadFailure):
        raise HTTPException(
            status_code=422,
            detail=failure_detail(outcome),
        )

    return result_to_response(outcome)


@router.get("/sample", response_model=AnalysisResponse)
def analyze_sample() -> AnalysisResponse:
    """Analyze the bundled pizza ontology."""
    outcome = run_analysis(load_sample(), "sample")
    if isinstance(outcome, LoadFailure):
        # The bundled document is well-formed; reaching this is a packaging bug
        logger.error(f"Bundled sample failed to load: {outcome.message}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=failure_detail(outcome),
        )
    return result_to_response(outcome)
