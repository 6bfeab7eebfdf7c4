"""Tests for the coverage analyzer.

This module tests:
- Declaration scan and deduplication
- Association of SubClassOf, EquivalentClasses and DisjointClasses axioms
- Parent extraction and restriction counting
- Sorting, partitioning and coverage arithmetic
"""

import xml.etree.ElementTree as ET

import pytest

from owlcoverage.core.analyzer import (
    CoverageAnalyzer,
    analyze_text,
    axiom_subject,
    count_expressions,
)
from owlcoverage.core.loader import OntologyLoader
from owlcoverage.core.models import (
    OBJECT_RESTRICTIONS,
    AnalysisResult,
    LoadedOntology,
    LoadFailure,
)

OWL_NS = "http://www.w3.org/2002/07/owl#"


def owl(*axioms: str) -> str:
    """Wrap axioms in an OWL/XML ontology element."""
    return (
        '<?xml version="1.0"?>\n'
        f'<Ontology xmlns="{OWL_NS}" ontologyIRI="http://example.org/test">'
        + "".join(axioms)
        + "</Ontology>"
    )


def declare(*names: str) -> str:
    return "".join(f'<Declaration><Class IRI="#{n}"/></Declaration>' for n in names)


def cls(name: str) -> str:
    return f'<Class IRI="#{name}"/>'


def some(prop: str, filler: str) -> str:
    return (
        f'<ObjectSomeValuesFrom><ObjectProperty IRI="#{prop}"/>{filler}'
        "</ObjectSomeValuesFrom>"
    )


def analyze(document: str) -> AnalysisResult:
    result = analyze_text(document)
    assert isinstance(result, AnalysisResult)
    return result


def names(records) -> list[str]:
    return [r.name for r in records]


class TestScenarios:
    """End-to-end scenarios on small documents."""

    def test_lone_declaration_is_undefined(self) -> None:
        """A lone declaration is undefined and coverage is zero."""
        result = analyze(owl(declare("A")))

        assert result.total_classes == 1
        assert result.defined_classes == ()
        assert names(result.undefined_classes) == ["A"]
        assert result.coverage_percent == 0.0

    def test_subclass_defines_subject_only(self) -> None:
        """SubClassOf(A, B) defines A with parent B; B stays undefined."""
        result = analyze(
            owl(declare("A", "B"), f"<SubClassOf>{cls('A')}{cls('B')}</SubClassOf>")
        )

        a = result.get("A")
        assert a is not None
        assert a.is_defined
        assert a.parents == ("B",)
        assert a.restriction_count == 0
        assert names(result.undefined_classes) == ["B"]
        assert result.coverage_percent == 50.0

    def test_equivalence_counts_composite_and_restriction(self) -> None:
        """Intersection plus existential restriction count as two."""
        result = analyze(
            owl(
                declare("X", "Y"),
                "<EquivalentClasses>",
                cls("X"),
                "<ObjectIntersectionOf>",
                cls("Y"),
                some("hasPart", cls("Y")),
                "</ObjectIntersectionOf>",
                "</EquivalentClasses>",
            )
        )

        x = result.get("X")
        assert x is not None
        assert x.is_defined
        assert x.has_equivalence
        assert x.restriction_count == 2
        assert x.parents == ()
        # Y only appears inside the expression
        assert names(result.undefined_classes) == ["Y"]

    def test_disjointness_defines_every_member(self) -> None:
        """DisjointClasses(P, Q, R) defines all three without parents."""
        result = analyze(
            owl(
                declare("P", "Q", "R"),
                f"<DisjointClasses>{cls('P')}{cls('Q')}{cls('R')}</DisjointClasses>",
            )
        )

        assert names(result.defined_classes) == ["P", "Q", "R"]
        for record in result.defined_classes:
            assert record.has_disjointness
            assert not record.has_equivalence
            assert record.parents == ()
        assert result.coverage_percent == 100.0

    def test_empty_ontology(self) -> None:
        """No declarations means zero classes and zero coverage."""
        result = analyze(owl())

        assert result.total_classes == 0
        assert result.coverage_percent == 0.0
        assert result.defined_classes == ()
        assert result.undefined_classes == ()


class TestDeclarationScan:
    """Tests for class enumeration."""

    def test_duplicate_declarations_yield_one_record(self) -> None:
        result = analyze(owl(declare("A", "A", "B")))

        assert result.total_classes == 2
        assert names(result.undefined_classes) == ["A", "B"]

    def test_hash_and_bare_forms_are_the_same_class(self) -> None:
        document = owl(
            '<Declaration><Class IRI="#A"/></Declaration>',
            '<Declaration><Class abbreviatedIRI="A"/></Declaration>',
        )
        assert analyze(document).total_classes == 1

    def test_abbreviated_iri_is_normalized(self) -> None:
        result = analyze(
            owl('<Declaration><Class abbreviatedIRI="pizza:Base"/></Declaration>')
        )
        assert names(result.undefined_classes) == ["pizza_Base"]

    def test_absolute_iri_takes_precedence(self) -> None:
        result = analyze(
            owl(
                '<Declaration><Class IRI="#Full" abbreviatedIRI="ex:Short"/>'
                "</Declaration>"
            )
        )
        assert names(result.undefined_classes) == ["Full"]

    def test_non_class_declarations_are_ignored(self) -> None:
        result = analyze(
            owl(
                declare("A"),
                '<Declaration><ObjectProperty IRI="#hasTopping"/></Declaration>',
                '<Declaration><DataProperty IRI="#hasCalories"/></Declaration>',
                '<Declaration><NamedIndividual IRI="#Hot"/></Declaration>',
                '<Declaration><Datatype abbreviatedIRI="xsd:integer"/></Declaration>',
            )
        )
        assert result.total_classes == 1

    def test_class_without_identifier_is_skipped(self) -> None:
        result = analyze(owl("<Declaration><Class/></Declaration>", declare("A")))
        assert result.total_classes == 1


class TestAssociation:
    """Tests for matching axioms to classes."""

    def test_compound_subject_matches_nothing(self) -> None:
        """A SubClassOf led by an expression has no subject."""
        result = analyze(
            owl(
                declare("A", "B", "C"),
                "<SubClassOf>",
                f"<ObjectIntersectionOf>{cls('A')}{cls('B')}</ObjectIntersectionOf>",
                cls("C"),
                "</SubClassOf>",
            )
        )
        assert result.defined_classes == ()
        assert result.total_classes == 3

    def test_leading_annotation_is_skipped_for_subclass(self) -> None:
        annotation = (
            '<Annotation><AnnotationProperty abbreviatedIRI="rdfs:comment"/>'
            "<Literal>A kind of B</Literal></Annotation>"
        )
        result = analyze(
            owl(
                declare("A", "B"),
                f"<SubClassOf>{annotation}{cls('A')}{cls('B')}</SubClassOf>",
            )
        )

        a = result.get("A")
        assert a is not None
        assert a.is_defined
        assert a.parents == ("B",)
        assert names(result.undefined_classes) == ["B"]

    def test_leading_annotation_is_skipped_for_equivalence(self) -> None:
        annotation = (
            '<Annotation><AnnotationProperty abbreviatedIRI="rdfs:label"/>'
            "<Literal>x</Literal></Annotation>"
        )
        result = analyze(
            owl(
                declare("X", "Y"),
                "<EquivalentClasses>",
                annotation,
                annotation,
                cls("X"),
                f"<ObjectIntersectionOf>{cls('Y')}{some('p', cls('Y'))}"
                "</ObjectIntersectionOf>",
                "</EquivalentClasses>",
            )
        )

        x = result.get("X")
        assert x is not None
        assert x.has_equivalence
        assert x.restriction_count == 2

    def test_annotation_before_compound_subject_matches_nothing(self) -> None:
        result = analyze(
            owl(
                declare("A", "B"),
                "<SubClassOf>",
                '<Annotation><AnnotationProperty IRI="#note"/>'
                "<Literal>n</Literal></Annotation>",
                f"<ObjectUnionOf>{cls('A')}{cls('B')}</ObjectUnionOf>",
                cls("B"),
                "</SubClassOf>",
            )
        )
        assert result.defined_classes == ()

    def test_subclass_with_restriction_only_is_defined(self) -> None:
        result = analyze(
            owl(
                declare("Pizza", "Base"),
                f"<SubClassOf>{cls('Pizza')}{some('hasBase', cls('Base'))}</SubClassOf>",
            )
        )

        pizza = result.get("Pizza")
        assert pizza is not None
        assert pizza.is_defined
        assert pizza.parents == ()
        assert pizza.restriction_count == 1

    def test_equivalence_only_defines_first_class(self) -> None:
        result = analyze(
            owl(
                declare("A", "B"),
                f"<EquivalentClasses>{cls('A')}{cls('B')}</EquivalentClasses>",
            )
        )

        assert names(result.defined_classes) == ["A"]
        assert names(result.undefined_classes) == ["B"]

    def test_mixed_identifier_forms_match(self) -> None:
        result = analyze(
            owl(
                declare("A", "B"),
                '<SubClassOf><Class abbreviatedIRI="A"/><Class IRI="#B"/></SubClassOf>',
            )
        )
        a = result.get("A")
        assert a is not None and a.parents == ("B",)

    def test_axiom_without_classes_matches_nothing(self) -> None:
        result = analyze(
            owl(
                declare("A"),
                "<SubClassOf/>",
                "<DisjointClasses><Class/></DisjointClasses>",
            )
        )
        assert result.defined_classes == ()

    def test_axioms_about_undeclared_classes_are_ignored(self) -> None:
        result = analyze(
            owl(
                declare("A"),
                f"<SubClassOf>{cls('Ghost')}{cls('A')}</SubClassOf>",
                f"<DisjointClasses>{cls('Ghost')}{cls('Other')}</DisjointClasses>",
            )
        )
        assert result.total_classes == 1
        assert result.get("Ghost") is None
        assert result.defined_classes == ()

    def test_disjoint_match_uses_direct_children_only(self) -> None:
        """Classes nested inside a complement are not disjointness members."""
        result = analyze(
            owl(
                declare("A", "B", "C"),
                "<DisjointClasses>",
                cls("A"),
                f"<ObjectComplementOf>{cls('C')}</ObjectComplementOf>",
                cls("B"),
                "</DisjointClasses>",
            )
        )
        assert names(result.defined_classes) == ["A", "B"]
        assert names(result.undefined_classes) == ["C"]


class TestParentsAndRestrictions:
    """Tests for parent extraction and restriction counting."""

    def test_parents_keep_order_and_duplicates(self) -> None:
        result = analyze(
            owl(
                declare("A", "B", "C"),
                f"<SubClassOf>{cls('A')}{cls('C')}</SubClassOf>",
                f"<SubClassOf>{cls('A')}{cls('B')}</SubClassOf>",
                f"<SubClassOf>{cls('A')}{cls('C')}</SubClassOf>",
            )
        )
        a = result.get("A")
        assert a is not None
        assert a.parents == ("C", "B", "C")

    def test_nested_restrictions_count_individually(self) -> None:
        nested = (
            "<ObjectSomeValuesFrom>"
            '<ObjectProperty IRI="#p"/>'
            '<ObjectAllValuesFrom><ObjectProperty IRI="#q"/>'
            '<ObjectMinCardinality cardinality="1"><ObjectProperty IRI="#r"/>'
            "</ObjectMinCardinality>"
            "</ObjectAllValuesFrom>"
            "</ObjectSomeValuesFrom>"
        )
        result = analyze(
            owl(declare("A"), f"<SubClassOf>{cls('A')}{nested}</SubClassOf>")
        )
        a = result.get("A")
        assert a is not None
        assert a.restriction_count == 3

    def test_subclass_does_not_count_composites(self) -> None:
        """Union inside a subclass axiom is not a restriction."""
        filler = (
            '<ObjectAllValuesFrom><ObjectProperty IRI="#hasTopping"/>'
            f"<ObjectUnionOf>{cls('B')}{cls('C')}</ObjectUnionOf>"
            "</ObjectAllValuesFrom>"
        )
        result = analyze(
            owl(declare("A"), f"<SubClassOf>{cls('A')}{filler}</SubClassOf>")
        )
        a = result.get("A")
        assert a is not None
        assert a.restriction_count == 1

    def test_data_restrictions_are_not_counted(self) -> None:
        filler = (
            '<DataSomeValuesFrom><DataProperty IRI="#hasCalories"/>'
            '<Datatype abbreviatedIRI="xsd:integer"/></DataSomeValuesFrom>'
        )
        result = analyze(
            owl(declare("A"), f"<SubClassOf>{cls('A')}{filler}</SubClassOf>")
        )
        a = result.get("A")
        assert a is not None
        assert a.is_defined
        assert a.restriction_count == 0

    def test_one_of_in_equivalence(self) -> None:
        result = analyze(
            owl(
                declare("Spiciness"),
                "<EquivalentClasses>",
                cls("Spiciness"),
                '<ObjectOneOf><NamedIndividual IRI="#Hot"/>'
                '<NamedIndividual IRI="#Mild"/></ObjectOneOf>',
                "</EquivalentClasses>",
            )
        )
        record = result.get("Spiciness")
        assert record is not None
        assert record.restriction_count == 1

    def test_restrictions_accumulate_across_axioms(self) -> None:
        result = analyze(
            owl(
                declare("A", "B"),
                f"<SubClassOf>{cls('A')}{some('p', cls('B'))}</SubClassOf>",
                f"<SubClassOf>{cls('A')}{some('q', cls('B'))}</SubClassOf>",
                "<EquivalentClasses>",
                cls("A"),
                f"<ObjectUnionOf>{cls('B')}{some('r', cls('B'))}</ObjectUnionOf>",
                "</EquivalentClasses>",
            )
        )
        a = result.get("A")
        assert a is not None
        assert a.restriction_count == 4

    def test_count_expressions_helper(self) -> None:
        axiom = ET.fromstring(
            f"<SubClassOf>{cls('A')}{some('p', some('q', cls('B')))}</SubClassOf>"
        )
        assert count_expressions(axiom, OBJECT_RESTRICTIONS) == 2

    def test_axiom_subject_helper(self) -> None:
        assert axiom_subject(ET.fromstring(f"<SubClassOf>{cls('A')}</SubClassOf>")) == "A"
        assert axiom_subject(ET.fromstring("<SubClassOf/>")) is None
        assert axiom_subject(ET.fromstring("<SubClassOf><Class/></SubClassOf>")) is None


class TestAggregation:
    """Tests for sorting, partitioning and coverage."""

    def test_ordinal_sort_puts_uppercase_first(self) -> None:
        result = analyze(owl(declare("b", "B", "a", "A", "_x")))
        assert names(result.undefined_classes) == ["A", "B", "_x", "a", "b"]

    @pytest.mark.parametrize(
        "defined,total,expected",
        [
            (1, 3, 33.3),
            (2, 3, 66.7),
            (1, 1, 100.0),
            (0, 4, 0.0),
            (7, 9, 77.8),
            # Exact ties round half-up
            (1, 16, 6.3),
            (5, 16, 31.3),
            (1, 8, 12.5),
        ],
    )
    def test_coverage_rounding(self, defined: int, total: int, expected: float) -> None:
        all_names = [f"C{i}" for i in range(total)]
        axioms = [
            f"<SubClassOf>{cls(n)}{cls('C0')}</SubClassOf>"
            for n in all_names[:defined]
        ]
        result = analyze(owl(declare(*all_names), *axioms))

        assert result.coverage_percent == expected
        assert result.defined_count + result.undefined_count == total

    def test_partition_is_complete(self) -> None:
        result = analyze(
            owl(
                declare("A", "B", "C", "D"),
                f"<SubClassOf>{cls('A')}{cls('B')}</SubClassOf>",
                f"<DisjointClasses>{cls('C')}{cls('A')}</DisjointClasses>",
            )
        )
        assert len(result.defined_classes) + len(result.undefined_classes) == 4
        assert {r.name for r in result.defined_classes}.isdisjoint(
            r.name for r in result.undefined_classes
        )
        assert 0.0 <= result.coverage_percent <= 100.0

    def test_analysis_is_deterministic(self) -> None:
        document = owl(
            declare("Z", "A", "m"),
            f"<SubClassOf>{cls('Z')}{cls('A')}</SubClassOf>",
            f"<DisjointClasses>{cls('m')}{cls('A')}</DisjointClasses>",
        )
        assert analyze(document) == analyze(document)

    def test_ontology_iri_and_source_are_carried(self) -> None:
        result = CoverageAnalyzer().analyze_text(owl(declare("A")), source="t.owx")
        assert isinstance(result, AnalysisResult)
        assert result.ontology_iri == "http://example.org/test"
        assert result.source == "t.owx"

    def test_missing_percent_complements_coverage(self) -> None:
        result = analyze(
            owl(declare("A", "B", "C"), f"<SubClassOf>{cls('A')}{cls('B')}</SubClassOf>")
        )
        assert result.coverage_percent == 33.3
        assert result.missing_percent == 66.7


class TestDocumentHandling:
    """Tests for document-level behavior of the analyzer."""

    def test_malformed_document_skips_analysis(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def fail(*_args, **_kwargs):
            raise AssertionError("analyze must not run on malformed input")

        monkeypatch.setattr(CoverageAnalyzer, "analyze", fail)
        outcome = CoverageAnalyzer().analyze_text("<Ontology><Declaration>")

        assert isinstance(outcome, LoadFailure)

    def test_tree_is_not_mutated(self) -> None:
        document = owl(
            declare("A", "B"),
            f"<SubClassOf>{cls('A')}{some('p', cls('B'))}</SubClassOf>",
        )
        loaded = OntologyLoader().load_text(document)
        assert isinstance(loaded, LoadedOntology)
        before = ET.tostring(loaded.root)

        CoverageAnalyzer().analyze(loaded)

        assert ET.tostring(loaded.root) == before

    def test_unprefixed_document_without_namespace(self) -> None:
        document = (
            "<Ontology>"
            '<Declaration><Class IRI="#A"/></Declaration>'
            '<Declaration><Class IRI="#B"/></Declaration>'
            '<SubClassOf><Class IRI="#A"/><Class IRI="#B"/></SubClassOf>'
            "</Ontology>"
        )
        result = analyze(document)
        assert names(result.defined_classes) == ["A"]

    def test_prefixed_owl_namespace(self) -> None:
        document = (
            f'<owl:Ontology xmlns:owl="{OWL_NS}">'
            '<owl:Declaration><owl:Class IRI="#A"/></owl:Declaration>'
            '<owl:EquivalentClasses><owl:Class IRI="#A"/>'
            '<owl:ObjectUnionOf><owl:Class IRI="#B"/><owl:Class IRI="#C"/>'
            "</owl:ObjectUnionOf></owl:EquivalentClasses>"
            "</owl:Ontology>"
        )
        result = analyze(document)
        a = result.get("A")
        assert a is not None
        assert a.has_equivalence
        assert a.restriction_count == 1
