"""Exceptions raised while loading configuration and building components."""

from typing import Optional

__all__ = [
    "ConfigError",
    "DocumentFormatError",
    "NotFoundError",
    "DuplicateDefinitionError",
    "RegistrationError",
    "ResolutionError",
    "MissingClassAttributeError",
    "TypeConstraintError",
    "InstantiationError",
    "MalformedMapEntryError",
    "ParameterError",
    "NoMatchingMutatorError",
    "CoercionError",
    "MutatorInvocationError",
    "IncompatibleCompositeConstructorError",
    "LifecycleError",
]


class ConfigError(Exception):
    """Base class for every failure raised while building from a configuration document.

    Attributes:
        identifier: The tag name, class identifier or parameter name the failure
            relates to, if known.
    """

    def __init__(self, message: str, identifier: Optional[str] = None):
        super().__init__(message)
        self.identifier = identifier


class DocumentFormatError(ConfigError):
    """Raised when the source cannot be parsed or its root is not a properties node."""


class NotFoundError(ConfigError):
    """Raised when no section matches the requested tag."""


class DuplicateDefinitionError(ConfigError):
    """Raised when more than one section matches a tag that must be unique."""


class RegistrationError(ConfigError):
    """Raised when a class or factory cannot be registered."""


class ResolutionError(ConfigError):
    """Raised when a type identifier cannot be resolved to a class."""


class MissingClassAttributeError(ResolutionError):
    """Raised when a buildable section has no (or a blank) class attribute."""


class TypeConstraintError(ResolutionError):
    """Raised when a resolved type does not satisfy the required capability."""

    def __init__(self, identifier: str, capability: type):
        super().__init__(
            f"{identifier} must be of type '{_qualified_name(capability)}'", identifier
        )
        self.capability = capability


class InstantiationError(ResolutionError):
    """Raised when a resolved type cannot be constructed without arguments."""


class MalformedMapEntryError(ConfigError):
    """Raised when a map-shaped parameter has an entry without a key or value attribute."""


class ParameterError(ConfigError):
    """Base class for failures applying a single parameter to an instance."""


class NoMatchingMutatorError(ParameterError):
    """Raised when an instance has no mutator for a parameter name and value shape."""


class CoercionError(ParameterError):
    """Raised when parameter text cannot be converted to the mutator's type."""


class MutatorInvocationError(ParameterError):
    """Raised when a mutator raises while being given a value."""


class IncompatibleCompositeConstructorError(ConfigError):
    """Raised when a composite type cannot be constructed from a list of children."""


class LifecycleError(ConfigError):
    """Raised when initializing or validating a configured instance fails."""


def _qualified_name(target: type) -> str:
    module = getattr(target, "__module__", None)
    name = getattr(target, "__qualname__", repr(target))
    if module in (None, "builtins"):
        return name
    return f"{module}.{name}"
