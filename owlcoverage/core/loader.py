"""Ontology document loading.

This module turns raw OWL/XML text into a navigable element tree. A
document that is not well-formed markup is reported as a LoadFailure
value rather than an exception, so callers can render an error state and
skip analysis entirely.
"""

import logging
import xml.etree.ElementTree as ET
from importlib import resources
from pathlib import Path

from owlcoverage.core.models import LoadedOntology, LoadFailure

logger = logging.getLogger(__name__)

SAMPLE_DOCUMENT = "pizza.owx"


def load_sample() -> str:
    """Return the text of the bundled pizza ontology document."""
    sample = resources.files("owlcoverage") / "samples" / SAMPLE_DOCUMENT
    return sample.read_text(encoding="utf-8")


class OntologyLoader:
    """Parses OWL/XML documents into element trees.

    Only well-formedness is checked. Nothing is fetched over the network,
    external entities are not resolved and the OWL vocabulary is not
    validated.
    """

    def load_text(
        self, text: str, source: str | None = None
    ) -> LoadedOntology | LoadFailure:
        """Parse a document held in a string.

        Args:
            text: The OWL/XML markup.
            source: Optional label for where the text came from.

        Returns:
            The parsed ontology, or a LoadFailure if the markup is malformed.
        """
        if not text or not text.strip():
            return self._failure("Document is empty", source)
        return self._parse(text, source)

    def load_bytes(
        self, data: bytes, source: str | None = None
    ) -> LoadedOntology | LoadFailure:
        """Parse a document held in bytes, honoring its encoding declaration.

        Args:
            data: The raw OWL/XML document.
            source: Optional label for where the data came from.

        Returns:
            The parsed ontology, or a LoadFailure if the markup is malformed.
        """
        if not data or not data.strip():
            return self._failure("Document is empty", source)
        return self._parse(data, source)

    def load_file(self, path: str | Path) -> LoadedOntology | LoadFailure:
        """Read and parse a document from disk.

        Args:
            path: Path to the OWL/XML file.

        Returns:
            The parsed ontology, or a LoadFailure if the file cannot be read
            or is malformed.
        """
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            return self._failure(f"Cannot read {path}: {e.strerror or e}", str(path))
        return self.load_bytes(data, source=str(path))

    def _parse(
        self, document: str | bytes, source: str | None
    ) -> LoadedOntology | LoadFailure:
        try:
            root = ET.fromstring(document)
        except ET.ParseError as e:
            line, column = e.position
            return self._failure(
                f"Malformed document: {_describe(e)}", source, line, column
            )

        logger.debug(
            f"Parsed {source or 'document'}: "
            f"{sum(1 for _ in root.iter())} elements"
        )
        return LoadedOntology(root=root, source=source)

    def _failure(
        self,
        reason: str,
        source: str | None,
        line: int | None = None,
        column: int | None = None,
    ) -> LoadFailure:
        failure = LoadFailure(reason=reason, line=line, column=column, source=source)
        logger.warning(f"Could not load {source or 'document'}: {failure.message}")
        return failure


def _describe(error: ET.ParseError) -> str:
    """Expat message without its trailing position suffix."""
    message = str(error)
    return message.split(":", 1)[0] if ": line " in message else message
