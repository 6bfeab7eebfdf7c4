"""API route handlers for the OWL Coverage web dashboard."""

from owlcoverage.web.routes.analyze import router as analyze_router
from owlcoverage.web.routes.dashboard import router as dashboard_router
from owlcoverage.web.routes.health import router as health_router

__all__ = [
    "analyze_router",
    "dashboard_router",
    "health_router",
]
