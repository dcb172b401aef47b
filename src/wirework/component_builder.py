"""Building configured instances from the sections of a configuration document.

:class:`ComponentBuilder` resolves the class named by a section, applies the
section's parameters, and runs the initialization lifecycle. Composite builds
do the same for every child section and then wrap the ordered children in an
enclosing instance, configured from the composite section's own parameters.
"""

import inspect
import logging
from typing import Any, Optional
from xml.etree import ElementTree

from wirework.document import (
    ConfigDocument,
    DocumentSource,
    class_identifier,
    element_children,
    load_document,
)
from wirework.domain import SettingsRecord
from wirework.errors import (
    DuplicateDefinitionError,
    IncompatibleCompositeConstructorError,
    InstantiationError,
    NotFoundError,
)
from wirework.lifecycle import run_lifecycle
from wirework.params import ParameterApplier, apply_params
from wirework.registry import ClassRegistry, default_registry

__all__ = ["ComponentBuilder", "unique_section"]

logger = logging.getLogger(__name__)


def unique_section(document: ConfigDocument, tag: str) -> ElementTree.Element:
    """Return the only top-level section named ``tag``.

    Raises:
        NotFoundError: If there is no such section.
        DuplicateDefinitionError: If there is more than one.
    """
    sections = document.sections(tag)
    if not sections:
        raise NotFoundError(f"could not find {tag}", tag)
    if len(sections) > 1:
        raise DuplicateDefinitionError(f"There can only be one {tag} in a config", tag)
    return sections[0]


class ComponentBuilder:
    """Build configured instances using classes resolved from a :class:`ClassRegistry`."""

    def __init__(
        self,
        registry: Optional[ClassRegistry] = None,
        profiles: Optional[set[str]] = None,
        applier: Optional[ParameterApplier] = None,
    ):
        self._registry = registry or default_registry
        self._profiles = profiles
        self._applier = applier or ParameterApplier()

    def build_single(
        self, expected_tag: str, required_capability: Any, document: DocumentSource
    ) -> Any:
        """Build the instance described by the only section named ``expected_tag``.

        Args:
            expected_tag: Tag name of the section.
            required_capability: Type the section's class must be a subtype of.
            document: The loaded document, or anything :func:`load_document` accepts.

        Returns:
            The configured and initialized instance.

        Raises:
            NotFoundError: If no section is named ``expected_tag``.
            DuplicateDefinitionError: If several sections are.
            ConfigError: Any failure resolving, configuring or initializing the instance.
        """
        section = unique_section(load_document(document), expected_tag)
        return self.build_item(section, required_capability)

    def build_composite(
        self,
        child_tag: str,
        child_capability: Any,
        composite_tag: str,
        document: DocumentSource,
        composite_capability: Any = object,
    ) -> Any:
        """Build every child section and wrap them in the composite section's class.

        Each direct child of the composite section named ``child_tag`` is built
        as by :meth:`build_single`; duplicates are allowed and document order is
        kept. The composite class is constructed with the list of children as
        its only argument, then configured from its own params, where a
        parameter named ``child_tag`` is skipped.

        Args:
            child_tag: Tag name of the child sections.
            child_capability: Type each child's class must be a subtype of.
            composite_tag: Tag name of the composite section.
            document: The loaded document, or anything :func:`load_document` accepts.
            composite_capability: Type the composite's class must be a subtype of.

        Returns:
            The configured and initialized composite instance.

        Raises:
            IncompatibleCompositeConstructorError: If the composite class cannot be
                constructed from a single list argument.
            ConfigError: Any other failure building the children or the composite.
        """
        section = unique_section(load_document(document), composite_tag)
        identifier = class_identifier(section)
        component_class = self._registry.resolve_class(
            identifier, composite_capability, self._profiles
        )

        children = [
            self.build_item(child, child_capability)
            for child in element_children(section, child_tag)
        ]
        composite = _construct_composite(identifier, component_class.factory, children)

        apply_params(composite, section, SettingsRecord(), exclude=child_tag, applier=self._applier)
        run_lifecycle(composite)
        return composite

    def build_item(self, section: ElementTree.Element, required_capability: Any) -> Any:
        """Resolve, configure and initialize the instance described by one section."""
        identifier = class_identifier(section)
        instance = self._registry.resolve(identifier, required_capability, self._profiles)
        settings = self.configure(instance, section)
        logger.debug("Built %s with settings %s", identifier, list(settings))
        return instance

    def configure(
        self,
        instance: Any,
        section: ElementTree.Element,
        settings: Optional[SettingsRecord] = None,
    ) -> SettingsRecord:
        """Apply a section's params to an existing instance and run its lifecycle.

        Returns:
            The names of the parameters applied.
        """
        settings = SettingsRecord() if settings is None else settings
        apply_params(instance, section, settings, applier=self._applier)
        run_lifecycle(instance)
        return settings


def _construct_composite(identifier: str, factory: Any, children: list[Any]) -> Any:
    try:
        inspect.signature(factory).bind(children)
    except TypeError as e:
        raise IncompatibleCompositeConstructorError(
            f"can't build composite class {identifier}: it must accept a list of items", identifier
        ) from e
    except ValueError:
        # No introspectable signature; let the call decide.
        pass

    try:
        return factory(children)
    except Exception as e:
        raise InstantiationError(f"can't build composite class {identifier}: {e}", identifier) from e
