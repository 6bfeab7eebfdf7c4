"""HTML dashboard endpoints."""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from owlcoverage.config import Settings
from owlcoverage.core.loader import load_sample
from owlcoverage.core.models import LoadFailure
from owlcoverage.output import ReportGenerator
from owlcoverage.web.models import AnalyzeRequest
from owlcoverage.web.routes.analyze import check_document, run_analysis

router = APIRouter(tags=["dashboard"])


def render_dashboard(document: str, source: str, settings: Settings) -> HTMLResponse:
    """Analyze a document and render the dashboard or the error page."""
    report_gen = ReportGenerator(
        include_timestamps=settings.output.include_timestamps,
        show_parents=settings.output.show_parents,
    )

    outcome = run_analysis(document, source)
    if isinstance(outcome, LoadFailure):
        return HTMLResponse(
            report_gen.generate_failure_html(outcome),
            status_code=422,
        )
    return HTMLResponse(report_gen.generate_html(outcome))


@router.get("/", response_class=HTMLResponse)
def sample_dashboard(request: Request) -> HTMLResponse:
    """Dashboard for the bundled pizza ontology."""
    return render_dashboard(load_sample(), "sample", request.app.state.settings)


@router.post("/dashboard", response_class=HTMLResponse)
def upload_dashboard(payload: AnalyzeRequest, request: Request) -> HTMLResponse:
    """Dashboard for an uploaded document."""
    settings: Settings = request.app.state.settings
    check_document(payload, settings)
    return render_dashboard(payload.document, payload.source or "upload", settings)
