"""Definition coverage analysis.

This module contains the axiom extraction and classification logic:
- Declaration scan: enumerate declared classes (first declaration wins)
- Axiom indexing: collect SubClassOf, EquivalentClasses and DisjointClasses
- Association: match axioms to classes by normalized identifier
- Restriction counting: structural count of class expression constructors
- Aggregation: partition, sort and compute the coverage ratio

The analysis is purely syntactic. No reasoning is performed and the
element tree is never modified.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from xml.etree.ElementTree import Element

from owlcoverage.core.identifiers import class_identifier, local_name
from owlcoverage.core.loader import OntologyLoader
from owlcoverage.core.models import (
    COMPOSITE_EXPRESSIONS,
    OBJECT_RESTRICTIONS,
    AnalysisResult,
    AxiomKind,
    ClassRecord,
    ExpressionKind,
    LoadedOntology,
    LoadFailure,
)

logger = logging.getLogger(__name__)

CLASS_TAG = "Class"
ANNOTATION_TAG = "Annotation"
ONE_DECIMAL = Decimal("0.1")


def iter_elements(root: Element, kind: str) -> Iterator[Element]:
    """Yield every element in document order whose local tag is ``kind``."""
    for element in root.iter():
        if local_name(element.tag) == kind:
            yield element


def child_classes(axiom: Element) -> list[Element]:
    """Immediate ``Class`` children of an axiom element."""
    return [child for child in axiom if local_name(child.tag) == CLASS_TAG]


def count_expressions(axiom: Element, kinds: Iterable[ExpressionKind]) -> int:
    """Count elements of the given constructor kinds in an axiom's subtree.

    Nested expressions count individually.
    """
    wanted = {kind.value for kind in kinds}
    return sum(1 for element in axiom.iter() if local_name(element.tag) in wanted)


def axiom_subject(axiom: Element) -> str | None:
    """Normalized identifier of the axiom's subject class.

    Leading ``Annotation`` children are skipped. The subject is the first
    remaining child, and only if it is a named class. Axioms led by a
    compound expression have no subject.
    """
    first = next(
        (child for child in axiom if local_name(child.tag) != ANNOTATION_TAG), None
    )
    if first is None or local_name(first.tag) != CLASS_TAG:
        return None
    return class_identifier(first)


def percent(part: int, total: int) -> float:
    """``part / total`` as a percentage, rounded half-up to one decimal.

    Returns 0.0 when ``total`` is zero.
    """
    if not total:
        return 0.0
    ratio = Decimal(part * 100) / Decimal(total)
    return float(ratio.quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP))


def disjoint_members(axiom: Element) -> set[str]:
    """Normalized identifiers of every named class in a disjointness axiom."""
    members = set()
    for element in child_classes(axiom):
        name = class_identifier(element)
        if name is not None:
            members.add(name)
    return members


def named_parent(axiom: Element) -> str | None:
    """Normalized identifier of the second named class of a SubClassOf axiom."""
    classes = child_classes(axiom)
    if len(classes) < 2:
        return None
    return class_identifier(classes[1])


@dataclass
class _ClassAccumulator:
    """Per-class state while the axioms are being scanned."""

    name: str
    subclass_subject: bool = False
    has_equivalence: bool = False
    has_disjointness: bool = False
    parents: list[str] = field(default_factory=list)
    restriction_count: int = 0

    def freeze(self) -> ClassRecord:
        return ClassRecord(
            name=self.name,
            is_defined=(
                self.subclass_subject or self.has_equivalence or self.has_disjointness
            ),
            parents=tuple(self.parents),
            restriction_count=self.restriction_count,
            has_equivalence=self.has_equivalence,
            has_disjointness=self.has_disjointness,
        )


class CoverageAnalyzer:
    """Classifies declared classes as defined or undefined.

    A class is defined when it is the subject of a SubClassOf or
    EquivalentClasses axiom, or a member of a DisjointClasses axiom.
    Missing identifiers and axioms without named classes are skipped
    silently; the scan never raises on irregular markup.
    """

    # Restrictions counted per axiom kind
    SUBCLASS_EXPRESSIONS = OBJECT_RESTRICTIONS
    EQUIVALENCE_EXPRESSIONS = OBJECT_RESTRICTIONS + COMPOSITE_EXPRESSIONS

    def __init__(self, loader: OntologyLoader | None = None) -> None:
        """Initialize the analyzer.

        Args:
            loader: Loader used by analyze_text (default: a new OntologyLoader).
        """
        self.loader = loader or OntologyLoader()

    def analyze_text(
        self, text: str, source: str | None = None
    ) -> AnalysisResult | LoadFailure:
        """Load and analyze a document.

        Args:
            text: OWL/XML markup.
            source: Optional label for where the text came from.

        Returns:
            The analysis result, or the LoadFailure if the document is
            malformed (in which case no analysis is attempted).
        """
        loaded = self.loader.load_text(text, source=source)
        if isinstance(loaded, LoadFailure):
            return loaded
        return self.analyze(loaded)

    def analyze(self, ontology: LoadedOntology) -> AnalysisResult:
        """Analyze a parsed ontology.

        Args:
            ontology: The parsed document.

        Returns:
            The immutable analysis result.
        """
        root = ontology.root
        classes = self._scan_declarations(root)

        subclass_axioms = list(iter_elements(root, AxiomKind.SUBCLASS_OF.value))
        equivalence_axioms = list(
            iter_elements(root, AxiomKind.EQUIVALENT_CLASSES.value)
        )
        disjoint_axioms = list(iter_elements(root, AxiomKind.DISJOINT_CLASSES.value))
        logger.debug(
            f"Indexed {len(subclass_axioms)} SubClassOf, "
            f"{len(equivalence_axioms)} EquivalentClasses, "
            f"{len(disjoint_axioms)} DisjointClasses axioms"
        )

        for axiom in subclass_axioms:
            subject = axiom_subject(axiom)
            acc = classes.get(subject) if subject is not None else None
            if acc is None:
                continue
            acc.subclass_subject = True
            parent = named_parent(axiom)
            if parent is not None:
                acc.parents.append(parent)
            acc.restriction_count += count_expressions(
                axiom, self.SUBCLASS_EXPRESSIONS
            )

        for axiom in equivalence_axioms:
            subject = axiom_subject(axiom)
            acc = classes.get(subject) if subject is not None else None
            if acc is None:
                continue
            acc.has_equivalence = True
            acc.restriction_count += count_expressions(
                axiom, self.EQUIVALENCE_EXPRESSIONS
            )

        for axiom in disjoint_axioms:
            for member in disjoint_members(axiom):
                if member in classes:
                    classes[member].has_disjointness = True

        return self._aggregate(
            [acc.freeze() for acc in classes.values()], ontology
        )

    def _scan_declarations(self, root: Element) -> dict[str, _ClassAccumulator]:
        """Register each declared class once, in declaration order."""
        classes: dict[str, _ClassAccumulator] = {}
        skipped = 0

        for declaration in iter_elements(root, AxiomKind.DECLARATION.value):
            declared = child_classes(declaration)
            if not declared:
                continue  # property, individual or datatype declaration
            name = class_identifier(declared[0])
            if name is None or name in classes:
                skipped += 1
                continue
            classes[name] = _ClassAccumulator(name=name)

        if skipped:
            logger.debug(f"Skipped {skipped} duplicate or unnamed class declarations")
        return classes

    def _aggregate(
        self, records: list[ClassRecord], ontology: LoadedOntology
    ) -> AnalysisResult:
        # Ordinal comparison, independent of locale
        records.sort(key=lambda record: record.name)
        defined = tuple(r for r in records if r.is_defined)
        undefined = tuple(r for r in records if not r.is_defined)
        total = len(records)
        coverage = percent(len(defined), total)

        logger.info(
            f"Coverage for {ontology.source or 'document'}: "
            f"{len(defined)}/{total} classes defined ({coverage}%)"
        )
        return AnalysisResult(
            total_classes=total,
            defined_classes=defined,
            undefined_classes=undefined,
            coverage_percent=coverage,
            ontology_iri=ontology.ontology_iri,
            source=ontology.source,
        )


def analyze_text(text: str, source: str | None = None) -> AnalysisResult | LoadFailure:
    """Convenience function: load and analyze a document with defaults."""
    return CoverageAnalyzer().analyze_text(text, source=source)
