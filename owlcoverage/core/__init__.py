"""Core OWL Coverage functionality: loader, analyzer, and data models."""

from owlcoverage.core.analyzer import CoverageAnalyzer, analyze_text
from owlcoverage.core.identifiers import (
    class_identifier,
    first_attribute,
    local_name,
    normalize_identifier,
)
from owlcoverage.core.loader import OntologyLoader, load_sample
from owlcoverage.core.models import (
    AnalysisResult,
    AxiomKind,
    ClassRecord,
    ExpressionKind,
    LoadedOntology,
    LoadFailure,
)

__all__ = [
    # Models
    "AnalysisResult",
    "AxiomKind",
    "ClassRecord",
    "ExpressionKind",
    "LoadedOntology",
    "LoadFailure",
    # Identifiers
    "class_identifier",
    "first_attribute",
    "local_name",
    "normalize_identifier",
    # Loader
    "OntologyLoader",
    "load_sample",
    # Analyzer
    "CoverageAnalyzer",
    "analyze_text",
]
