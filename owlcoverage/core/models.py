"""Data models for OWL Coverage.

This module defines the core Pydantic models used throughout OWL Coverage
for representing per-class definition records, the analysis result and
the loader's failure outcome.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
from xml.etree.ElementTree import Element

from pydantic import BaseModel, Field


class AxiomKind(str, Enum):
    """Axiom elements recognized by the analyzer."""

    DECLARATION = "Declaration"
    SUBCLASS_OF = "SubClassOf"
    EQUIVALENT_CLASSES = "EquivalentClasses"
    DISJOINT_CLASSES = "DisjointClasses"


class ExpressionKind(str, Enum):
    """Class expression constructors counted as structural restrictions."""

    SOME_VALUES_FROM = "ObjectSomeValuesFrom"
    ALL_VALUES_FROM = "ObjectAllValuesFrom"
    HAS_VALUE = "ObjectHasValue"
    MIN_CARDINALITY = "ObjectMinCardinality"
    MAX_CARDINALITY = "ObjectMaxCardinality"
    INTERSECTION_OF = "ObjectIntersectionOf"
    UNION_OF = "ObjectUnionOf"
    ONE_OF = "ObjectOneOf"


# Quantified and cardinality restrictions
OBJECT_RESTRICTIONS = (
    ExpressionKind.SOME_VALUES_FROM,
    ExpressionKind.ALL_VALUES_FROM,
    ExpressionKind.HAS_VALUE,
    ExpressionKind.MIN_CARDINALITY,
    ExpressionKind.MAX_CARDINALITY,
)

# Boolean and enumeration constructors
COMPOSITE_EXPRESSIONS = (
    ExpressionKind.INTERSECTION_OF,
    ExpressionKind.UNION_OF,
    ExpressionKind.ONE_OF,
)


class ClassRecord(BaseModel):
    """Definition status of one declared class.

    Built once by the analyzer and never mutated afterwards.
    """

    name: str = Field(description="Normalized class identifier, e.g., 'Pizza'")
    is_defined: bool = Field(
        description="Whether the class carries at least one definitional axiom"
    )
    parents: tuple[str, ...] = Field(
        default=(),
        description="Named superclasses from SubClassOf axioms, in document order",
    )
    restriction_count: int = Field(
        default=0,
        ge=0,
        description="Restriction expressions in axioms whose subject is this class",
    )
    has_equivalence: bool = Field(
        default=False,
        description="Whether the class is the subject of an EquivalentClasses axiom",
    )
    has_disjointness: bool = Field(
        default=False,
        description="Whether the class is a member of a DisjointClasses axiom",
    )

    model_config = {"extra": "forbid", "frozen": True}


class AnalysisResult(BaseModel):
    """Snapshot of a coverage analysis run.

    This is the only value handed to reports, the CLI and the web layer.
    """

    total_classes: int = Field(ge=0, description="Number of declared classes")
    defined_classes: tuple[ClassRecord, ...] = Field(
        default=(),
        description="Defined classes, sorted by name",
    )
    undefined_classes: tuple[ClassRecord, ...] = Field(
        default=(),
        description="Undefined classes, sorted by name",
    )
    coverage_percent: float = Field(
        ge=0.0,
        le=100.0,
        description="Share of declared classes that are defined, one decimal",
    )
    ontology_iri: Optional[str] = Field(
        default=None,
        description="The ontologyIRI attribute of the document, if present",
    )
    source: Optional[str] = Field(
        default=None,
        description="Where the document came from (file path, 'sample', upload)",
    )

    model_config = {"extra": "forbid", "frozen": True}

    @property
    def defined_count(self) -> int:
        return len(self.defined_classes)

    @property
    def undefined_count(self) -> int:
        return len(self.undefined_classes)

    @property
    def missing_percent(self) -> float:
        """Complement of the coverage, for the 'missing definitions' gauge."""
        return round(100.0 - self.coverage_percent, 1)

    @property
    def classes(self) -> list[ClassRecord]:
        """All class records, sorted by name."""
        return sorted(
            self.defined_classes + self.undefined_classes, key=lambda c: c.name
        )

    def get(self, name: str) -> Optional[ClassRecord]:
        """Look up a class record by its normalized name."""
        for record in self.defined_classes + self.undefined_classes:
            if record.name == name:
                return record
        return None


class LoadFailure(BaseModel):
    """A document that could not be parsed as well-formed markup."""

    reason: str = Field(description="Human-readable description of the failure")
    line: Optional[int] = Field(
        default=None, description="Line of the well-formedness error, if known"
    )
    column: Optional[int] = Field(
        default=None, description="Column of the well-formedness error, if known"
    )
    source: Optional[str] = Field(
        default=None, description="Where the document came from"
    )

    model_config = {"extra": "forbid", "frozen": True}

    @property
    def message(self) -> str:
        """Reason with the error position appended when known."""
        if self.line is None:
            return self.reason
        return f"{self.reason} (line {self.line}, column {self.column})"


@dataclass(frozen=True)
class LoadedOntology:
    """A parsed ontology document.

    The element tree is read-only input to the analyzer.
    """

    root: Element
    source: Optional[str] = None

    @property
    def ontology_iri(self) -> Optional[str]:
        return self.root.get("ontologyIRI")
