"""OWL Coverage: definition coverage analysis for OWL/XML ontologies.

OWL Coverage reports, for every declared class, whether it carries a
formal definition (a subclass, equivalence or disjointness axiom) and
aggregates the share of defined classes across the ontology.
"""

__version__ = "1.0.0"
__author__ = "OWL Coverage Contributors"

from owlcoverage.core.models import AnalysisResult, ClassRecord, LoadFailure

__all__ = [
    "__version__",
    "AnalysisResult",
    "ClassRecord",
    "LoadFailure",
]
