"""Loading configuration documents and navigating their element tree.

A configuration document is an XML tree whose root element must be named
``properties``. Each child of the root describes a component to build:

    <properties>
      <fetcher class="my.module.Fetcher">
        <params>
          <bucket>docs</bucket>
        </params>
      </fetcher>
    </properties>

Tags are compared by their local name, so namespaced documents are accepted.
"""

import logging
import os
from typing import IO, Iterator, Optional, Union
from xml.etree import ElementTree

from wirework.errors import DocumentFormatError, MissingClassAttributeError

__all__ = [
    "ROOT_TAG",
    "CLASS_ATTRIBUTE",
    "PARAMS_TAG",
    "ConfigDocument",
    "DocumentSource",
    "load_document",
    "local_name",
    "element_children",
    "text_content",
    "class_identifier",
    "params_section",
]

logger = logging.getLogger(__name__)

ROOT_TAG = "properties"
CLASS_ATTRIBUTE = "class"
PARAMS_TAG = "params"


def local_name(tag: str) -> str:
    """Strip any ``{namespace}`` prefix from an element tag."""
    if tag.startswith("{"):
        return tag.rsplit("}", 1)[1]
    return tag


def element_children(node: ElementTree.Element, tag: Optional[str] = None) -> list[ElementTree.Element]:
    """Return the element children of ``node``, optionally only those named ``tag``.

    Comments and processing instructions are skipped.
    """
    return [
        child
        for child in node
        if isinstance(child.tag, str) and (tag is None or local_name(child.tag) == tag)
    ]


def text_content(node: ElementTree.Element) -> str:
    """Return all text inside ``node`` concatenated, or an empty string."""
    return "".join(node.itertext())


def class_identifier(node: ElementTree.Element) -> str:
    """Return the mandatory class attribute of a buildable section.

    Raises:
        MissingClassAttributeError: If the attribute is absent or blank.
    """
    name = local_name(node.tag)
    identifier = (node.get(CLASS_ATTRIBUTE) or "").strip()
    if not identifier:
        raise MissingClassAttributeError(
            f"element {name} must have a '{CLASS_ATTRIBUTE}' attribute", name
        )
    return identifier


def params_section(node: ElementTree.Element) -> Optional[ElementTree.Element]:
    """Return the first ``params`` child of ``node``, if there is one."""
    sections = element_children(node, PARAMS_TAG)
    return sections[0] if sections else None


class ConfigDocument:
    """A parsed configuration document rooted at a ``properties`` element."""

    def __init__(self, root: ElementTree.Element):
        if local_name(root.tag) != ROOT_TAG:
            raise DocumentFormatError(
                f"expect {ROOT_TAG} as root node, found {local_name(root.tag)}",
                local_name(root.tag),
            )
        self.root = root

    def sections(self, tag: str) -> list[ElementTree.Element]:
        """Return every top-level section named ``tag`` in document order."""
        return element_children(self.root, tag)

    def __iter__(self) -> Iterator[ElementTree.Element]:
        return iter(element_children(self.root))


DocumentSource = Union[
    ConfigDocument, ElementTree.Element, bytes, str, os.PathLike, IO[bytes]
]
"""Anything :func:`load_document` accepts.

Strings and path-like objects are file paths; use ``bytes`` for literal XML.
"""


def load_document(source: DocumentSource) -> ConfigDocument:
    """Parse ``source`` into a :class:`ConfigDocument`.

    Args:
        source: An already-loaded document or element, XML bytes, a file path,
            or a binary file-like object.

    Returns:
        The loaded document.

    Raises:
        DocumentFormatError: If the XML is malformed or the root is not ``properties``.
        OSError: If a file path cannot be read.
    """
    if isinstance(source, ConfigDocument):
        return source
    if isinstance(source, ElementTree.Element):
        return ConfigDocument(source)

    try:
        if isinstance(source, bytes):
            root = ElementTree.fromstring(source)
        elif isinstance(source, (str, os.PathLike)):
            logger.debug("Loading configuration from %s", source)
            root = ElementTree.parse(source).getroot()
        else:
            root = ElementTree.parse(source).getroot()
    except ElementTree.ParseError as e:
        raise DocumentFormatError(f"problem loading xml: {e}") from e

    return ConfigDocument(root)
