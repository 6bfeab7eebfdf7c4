"""Turtle export of coverage results.

This module renders an AnalysisResult as an RDF graph: every declared
class as an owl:Class, extracted parents as rdfs:subClassOf, and a comment
on classes that lack a formal definition. Uses rdflib for IRI handling
and serialization.
"""

from urllib.parse import quote

from rdflib import Graph, Literal, Namespace, URIRef
from rdflib.namespace import OWL, RDF, RDFS

from owlcoverage.core.models import AnalysisResult, ClassRecord
from owlcoverage.output.report import UNDEFINED_NOTE


class TurtleExporter:
    """Generates Turtle for the classes of an analysis result."""

    def __init__(
        self,
        base_namespace: str | None = None,
        include_comments: bool = True,
    ) -> None:
        """Initialize the exporter.

        Args:
            base_namespace: Namespace used when the ontology declares no IRI.
            include_comments: Whether to prepend a header comment.
        """
        self.base_namespace = base_namespace or "http://example.org/ontology#"
        self.include_comments = include_comments

    def generate(self, result: AnalysisResult) -> str:
        """Serialize the result as Turtle.

        Args:
            result: The analysis result.

        Returns:
            Turtle syntax as a string.
        """
        graph = self.build_graph(result)
        turtle_str = graph.serialize(format="turtle")

        if self.include_comments:
            header = (
                "# OWL Coverage export\n"
                f"# Classes: {result.total_classes}\n"
                f"# Coverage: {result.coverage_percent}%\n\n"
            )
            turtle_str = header + turtle_str

        return turtle_str

    def build_graph(self, result: AnalysisResult) -> Graph:
        """Build the RDF graph for a result.

        Args:
            result: The analysis result.

        Returns:
            Graph with one owl:Class node per declared class.
        """
        ns = Namespace(self.namespace_for(result))
        graph = Graph()
        graph.bind("owl", OWL)
        graph.bind("rdf", RDF)
        graph.bind("rdfs", RDFS)
        graph.bind("", ns)

        if result.ontology_iri:
            ontology = URIRef(result.ontology_iri)
            graph.add((ontology, RDF.type, OWL.Ontology))
            graph.add(
                (
                    ontology,
                    RDFS.comment,
                    Literal(f"Definition coverage: {result.coverage_percent}%"),
                )
            )

        for record in result.classes:
            self._add_class(graph, ns, record)

        return graph

    def namespace_for(self, result: AnalysisResult) -> str:
        """Namespace for class IRIs: the ontology IRI, else the base namespace."""
        if result.ontology_iri:
            iri = result.ontology_iri
            return iri if iri.endswith(("#", "/")) else iri + "#"
        return self.base_namespace

    def validate(self, turtle_str: str) -> tuple[bool, str | None]:
        """Validate Turtle syntax by parsing with rdflib.

        Args:
            turtle_str: Turtle string to validate.

        Returns:
            Tuple of (is_valid, error_message).
        """
        try:
            graph = Graph()
            graph.parse(data=turtle_str, format="turtle")
            return True, None
        except Exception as e:
            return False, str(e)

    def _add_class(self, graph: Graph, ns: Namespace, record: ClassRecord) -> None:
        class_uri = ns[_safe_local(record.name)]
        graph.add((class_uri, RDF.type, OWL.Class))
        graph.add((class_uri, RDFS.label, Literal(record.name)))

        for parent in record.parents:
            graph.add((class_uri, RDFS.subClassOf, ns[_safe_local(parent)]))

        if not record.is_defined:
            graph.add((class_uri, RDFS.comment, Literal(UNDEFINED_NOTE, lang="en")))


def _safe_local(name: str) -> str:
    """Percent-encode characters that are not allowed in an IRI."""
    return quote(name, safe="/_-.~")
