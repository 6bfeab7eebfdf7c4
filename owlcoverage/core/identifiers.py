"""Class identifier handling for OWL/XML elements.

OWL/XML names entities either with an absolute ``IRI`` attribute or an
``abbreviatedIRI`` attribute. Both are reduced to a single normalized key
so that ``IRI="#Pizza"`` and ``abbreviatedIRI="Pizza"`` match, and
``abbreviatedIRI="pizza:Base"`` becomes ``pizza_Base``.
"""

from collections.abc import Sequence
from typing import Optional
from xml.etree.ElementTree import Element

# Attributes tried in order when reading an entity identifier
IDENTIFIER_ATTRIBUTES = ("IRI", "abbreviatedIRI")


def local_name(tag: str) -> str:
    """Strip a ``{namespace}`` prefix from an element tag.

    Args:
        tag: Element tag as produced by ElementTree.

    Returns:
        The local part of the tag.
    """
    if tag.startswith("{"):
        return tag.rsplit("}", 1)[-1]
    return tag


def first_attribute(element: Element, names: Sequence[str]) -> Optional[str]:
    """Return the first non-empty attribute value among ``names``.

    Args:
        element: Element to read.
        names: Attribute names in order of preference.

    Returns:
        The value, or None if none of the attributes is present.
    """
    for name in names:
        value = element.get(name)
        if value:
            return value
    return None


def normalize_identifier(raw: str) -> str:
    """Normalize a raw identifier token to a class key.

    A leading fragment marker is dropped and namespace separators become
    underscores. Normalizing an already normalized key returns it unchanged.

    Args:
        raw: Identifier as it appears in the document.

    Returns:
        Normalized identifier.
    """
    return raw.removeprefix("#").replace(":", "_")


def class_identifier(element: Element) -> Optional[str]:
    """Normalized identifier of a ``Class`` element, or None if it has none."""
    raw = first_attribute(element, IDENTIFIER_ATTRIBUTES)
    if raw is None:
        return None
    return normalize_identifier(raw)
