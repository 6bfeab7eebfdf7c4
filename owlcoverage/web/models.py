"""Pydantic models for the OWL Coverage Web API.

These models define the request/response schemas for all API endpoints.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from owlcoverage.core.models import AnalysisResult, ClassRecord

# =============================================================================
# Error Codes
# =============================================================================


class ErrorCode(str, Enum):
    """Structured error codes for API responses."""

    MALFORMED_DOCUMENT = "MALFORMED_DOCUMENT"
    DOCUMENT_TOO_LARGE = "DOCUMENT_TOO_LARGE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorResponse(BaseModel):
    """Structured error response."""

    code: ErrorCode = Field(description="Error code for programmatic handling")
    message: str = Field(description="Human-readable error message")
    retryable: bool = Field(
        default=False, description="Whether the request can be retried"
    )
    details: dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )


# =============================================================================
# Health Endpoint
# =============================================================================


class HealthResponse(BaseModel):
    """Response from /api/health."""

    status: str = Field(default="ok", description="Service status")
    version: str = Field(description="OWL Coverage version")


# =============================================================================
# Analyze Endpoint
# =============================================================================


class AnalyzeRequest(BaseModel):
    """Request to analyze an uploaded document."""

    document: str = Field(description="OWL/XML markup of the ontology")
    source: str | None = Field(
        default=None,
        max_length=500,
        description="Label for the document, e.g. its file name",
    )


class ClassRecordResponse(BaseModel):
    """Definition status of one class."""

    name: str = Field(description="Normalized class identifier")
    is_defined: bool = Field(description="Whether the class has a formal definition")
    parents: list[str] = Field(description="Named superclasses, in document order")
    restriction_count: int = Field(description="Restriction expressions attached")
    has_equivalence: bool = Field(description="Subject of an EquivalentClasses axiom")
    has_disjointness: bool = Field(description="Member of a DisjointClasses axiom")


class AnalysisResponse(BaseModel):
    """Coverage analysis of a document."""

    source: str | None = Field(default=None, description="Document label")
    ontology_iri: str | None = Field(default=None, description="Ontology IRI")
    total_classes: int = Field(description="Number of declared classes")
    defined_count: int = Field(description="Number of defined classes")
    undefined_count: int = Field(description="Number of undefined classes")
    coverage_percent: float = Field(description="Defined share, one decimal")
    missing_percent: float = Field(description="Undefined share, one decimal")
    defined_classes: list[ClassRecordResponse] = Field(
        description="Defined classes, sorted by name"
    )
    undefined_classes: list[ClassRecordResponse] = Field(
        description="Undefined classes, sorted by name"
    )


def record_to_response(record: ClassRecord) -> ClassRecordResponse:
    """Convert a ClassRecord to the API response model."""
    return ClassRecordResponse(
        name=record.name,
        is_defined=record.is_defined,
        parents=list(record.parents),
        restriction_count=record.restriction_count,
        has_equivalence=record.has_equivalence,
        has_disjointness=record.has_disjointness,
    )


def result_to_response(result: AnalysisResult) -> AnalysisResponse:
    """Convert an AnalysisResult to the API response model."""
    return AnalysisResponse(
        source=result.source,
        ontology_iri=result.ontology_iri,
        total_classes=result.total_classes,
        defined_count=result.defined_count,
        undefined_count=result.undefined_count,
        coverage_percent=result.coverage_percent,
        missing_percent=result.missing_percent,
        defined_classes=[record_to_response(r) for r in result.defined_classes],
        undefined_classes=[record_to_response(r) for r in result.undefined_classes],
    )
