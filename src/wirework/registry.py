"""Registration and resolution of the classes a configuration document can name."""

import importlib
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, get_type_hints

from wirework.errors import (
    InstantiationError,
    RegistrationError,
    ResolutionError,
    TypeConstraintError,
)

__all__ = [
    "ComponentClass",
    "ClassRegistry",
    "default_registry",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComponentClass:
    """Metadata about a type a configuration document may refer to by name.

    Attributes:
        name: Identifier used in a section's ``class`` attribute.
        factory: The no-argument callable creating instances (a class or a function).
        profiles: Profile names under which the entry is active. Empty means
            active in all profiles.
        provided_type: The type instances are checked against. For classes this
            is the class itself; for factory functions it is the return annotation.

    Example:
        >>> @registry.registers(name="s3", profiles=["prod"])
        >>> class S3Fetcher(Fetcher):
        ...     pass
        >>>
        >>> # Creates ComponentClass with:
        >>> # - name: "s3"
        >>> # - factory: S3Fetcher
        >>> # - profiles: ["prod"]
        >>> # - provided_type: S3Fetcher
    """

    name: str
    factory: Callable[[], Any]
    profiles: list[str]
    provided_type: Any


def inferred_name(target: Any) -> str:
    """Derive an identifier from a class or function name, removing any 'make_' prefix.

    Example:
        >>> inferred_name(S3Fetcher)       # Returns "S3Fetcher"
        >>> inferred_name(make_fetcher)    # Returns "fetcher"
    """
    if inspect.isclass(target):
        return target.__name__

    if target.__name__.startswith("make_"):
        return target.__name__[5:]
    else:
        return target.__name__


class ClassRegistry:
    """Registry of buildable types, supporting registration and profile-based filtering.

    Identifiers not registered here are resolved as dotted import paths
    (``package.module.ClassName``), so a registry is only needed for short
    names or profile-dependent choices.
    """

    def __init__(self):
        self._classes: list[ComponentClass] = []

    def register(self, component_class: ComponentClass):
        """Register an entry explicitly.

        Args:
            component_class: The entry to be registered.
        """
        self._classes.append(component_class)

    def registered_classes(self, profiles: Optional[set[str]] = None) -> list[ComponentClass]:
        """Retrieve entries, optionally filtered by active profiles.

        Args:
            profiles: A set of active profile names. If None, returns all entries.

        Returns:
            A list of entries whose profiles match the given profile set.
        """
        if profiles is None:
            return list(self._classes)
        return [c for c in self._classes if _profiles_match(c.profiles, profiles)]

    def registers(
        self, name: Optional[str] = None, profiles: Optional[list[str]] = None
    ) -> Callable:
        """Decorator to register a class or a no-argument factory function.

        Args:
            name: Optional identifier; defaults to the class name, or the function
                name with any 'make_' prefix removed.
            profiles: Optional list of profiles for which the entry is active.

        Returns:
            A decorator that registers its target and returns it unchanged.

        Raises:
            RegistrationError: If the target is neither a class nor a function, or
                is a function without a return annotation.

        Example:
            @registry.registers(profiles=["dev"])
            def make_fetcher() -> Fetcher:
                return FileSystemFetcher("/tmp")
        """

        def decorator(obj):
            self.register(_make_component_class(obj, name or inferred_name(obj), profiles or []))
            return obj

        return decorator

    def lookup(self, type_identifier: str, profiles: Optional[set[str]] = None) -> ComponentClass:
        """Find the entry for an identifier without instantiating it.

        Registered names take precedence over dotted import paths.

        Raises:
            ResolutionError: If the identifier is unknown or ambiguous.
        """
        candidates = [c for c in self.registered_classes(profiles) if c.name == type_identifier]
        if len(candidates) > 1:
            raise ResolutionError(
                f"Multiple classes registered as '{type_identifier}' for profiles {profiles}",
                type_identifier,
            )
        if candidates:
            return candidates[0]
        return _import_component_class(type_identifier)

    def resolve(
        self,
        type_identifier: str,
        required_capability: Any = object,
        profiles: Optional[set[str]] = None,
    ) -> Any:
        """Resolve an identifier and create an unconfigured instance of it.

        Args:
            type_identifier: Registered name or dotted import path.
            required_capability: Type the resolved class must be a subtype of.
            profiles: Active profiles used to filter registered entries.

        Returns:
            A new instance created through the no-argument construction path.

        Raises:
            ResolutionError: If the identifier is unknown or ambiguous.
            TypeConstraintError: If the resolved type does not satisfy the capability.
            InstantiationError: If the type cannot be constructed without arguments.
        """
        component_class = self.resolve_class(type_identifier, required_capability, profiles)
        logger.debug("Instantiating %s for identifier %s", component_class.factory, type_identifier)
        return _instantiate(type_identifier, component_class.factory)

    def resolve_class(
        self,
        type_identifier: str,
        required_capability: Any = object,
        profiles: Optional[set[str]] = None,
    ) -> ComponentClass:
        """Find the entry for an identifier and check it against a capability.

        Raises:
            ResolutionError: If the identifier is unknown or ambiguous.
            TypeConstraintError: If the resolved type does not satisfy the capability.
        """
        component_class = self.lookup(type_identifier, profiles)
        if not _satisfies(component_class, required_capability):
            raise TypeConstraintError(type_identifier, required_capability)
        return component_class


default_registry = ClassRegistry()
"""Registry used by the high-level builders when none is supplied."""


def _make_component_class(obj: Any, name: str, profiles: list[str]) -> ComponentClass:
    if inspect.isclass(obj):
        return ComponentClass(name, obj, profiles, obj)
    if inspect.isfunction(obj):
        return_type = get_type_hints(obj).get("return", None)
        if return_type is None:
            raise RegistrationError(
                f"Factory {obj.__name__} must declare the type it returns", name
            )
        return ComponentClass(name, obj, profiles, return_type)
    raise RegistrationError(f"{obj} is not a class or function", name)


def _import_component_class(type_identifier: str) -> ComponentClass:
    """Resolve a dotted ``module.Name`` identifier by importing its module."""
    module_name, _, attribute = type_identifier.rpartition(".")
    if not module_name or not attribute or module_name.startswith("."):
        raise ResolutionError(f"Unknown class '{type_identifier}'", type_identifier)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ResolutionError(
            f"Unknown class '{type_identifier}': {e}", type_identifier
        ) from e
    except Exception as e:
        raise ResolutionError(
            f"problem importing module for '{type_identifier}': {e}", type_identifier
        ) from e

    try:
        target = getattr(module, attribute)
    except AttributeError as e:
        raise ResolutionError(f"Unknown class '{type_identifier}'", type_identifier) from e

    try:
        return _make_component_class(target, type_identifier, [])
    except RegistrationError as e:
        raise ResolutionError(str(e), type_identifier) from e


def _satisfies(component_class: ComponentClass, capability: Any) -> bool:
    provided = component_class.provided_type
    if capability is object or provided is capability:
        return True
    if not inspect.isclass(provided):
        return False
    try:
        return issubclass(provided, capability)
    except TypeError as e:
        raise ResolutionError(
            f"Cannot check {component_class.name} against {capability!r}", component_class.name
        ) from e


def _instantiate(type_identifier: str, factory: Callable[[], Any]) -> Any:
    try:
        inspect.signature(factory).bind()
    except TypeError as e:
        raise InstantiationError(
            f"{type_identifier} cannot be created without arguments: {e}", type_identifier
        ) from e
    except ValueError:
        # No introspectable signature; let the call decide.
        pass

    try:
        return factory()
    except Exception as e:
        raise InstantiationError(f"problem loading {type_identifier}: {e}", type_identifier) from e


def _profiles_match(stated: list[str], selected: set[str]) -> bool:
    """Check if an entry's profile requirements match the selected profiles.

    Normal profiles ("dev", "prod") must be in the selected set, exclusion
    profiles ("!test") must not be, and an empty list matches everything.

    Example:
        >>> _profiles_match(["dev"], {"dev"})          # True
        >>> _profiles_match(["!test"], {"dev"})        # True
        >>> _profiles_match(["!test"], {"test"})       # False
        >>> _profiles_match(["prod"], {"dev"})         # False
    """
    provided = [p for p in stated if not p.startswith("!")]
    excluded = [p[1:] for p in stated if p.startswith("!")]

    return not any(e in selected for e in excluded) and (
        not provided or any(p in selected for p in provided)
    )
