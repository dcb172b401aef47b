"""High level entry points for building components from configuration documents."""

from typing import Any, Optional

from wirework.component_builder import ComponentBuilder
from wirework.document import DocumentSource, load_document
from wirework.registry import ClassRegistry

__all__ = ["build_single", "build_composite"]


def build_single(
    tag: str,
    capability: Any,
    source: DocumentSource,
    registry: Optional[ClassRegistry] = None,
    profiles: Optional[set[str]] = None,
) -> Any:
    """Build the single component declared under ``tag``.

    Args:
        tag: Tag name of the component's section, e.g. ``"fetcher"``.
        capability: Type the declared class must be a subtype of.
        source: The configuration document, or anything :func:`load_document` accepts.
        registry: Registry consulted before dotted import paths; the default
            registry if None.
        profiles: Active profiles used to filter registered classes. If None,
            all registered classes are considered.

    Returns:
        The configured and initialized component.

    Raises:
        ConfigError: If the document or the component is invalid.

    Example:
        >>> fetcher = build_single("fetcher", Fetcher, "tika-config.xml")
    """
    builder = ComponentBuilder(registry, profiles)
    return builder.build_single(tag, capability, load_document(source))


def build_composite(
    child_tag: str,
    child_capability: Any,
    composite_tag: str,
    source: DocumentSource,
    composite_capability: Any = object,
    registry: Optional[ClassRegistry] = None,
    profiles: Optional[set[str]] = None,
) -> Any:
    """Build the components declared under ``composite_tag`` and wrap them.

    Args:
        child_tag: Tag name of each child section, e.g. ``"filter"``.
        child_capability: Type each child's class must be a subtype of.
        composite_tag: Tag name of the enclosing section, e.g. ``"filters"``.
        source: The configuration document, or anything :func:`load_document` accepts.
        composite_capability: Type the composite's class must be a subtype of.
        registry: Registry consulted before dotted import paths; the default
            registry if None.
        profiles: Active profiles used to filter registered classes.

    Returns:
        The composite, constructed from the children in document order.

    Raises:
        ConfigError: If the document, a child or the composite is invalid.
    """
    builder = ComponentBuilder(registry, profiles)
    return builder.build_composite(
        child_tag, child_capability, composite_tag, load_document(source), composite_capability
    )
