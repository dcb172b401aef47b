"""Applying classified parameters to instances through their mutator methods.

A parameter named ``foo`` is applied by calling ``instance.set_foo(value)``.
CamelCase parameter names map to snake_case mutators, so ``extractUserMetadata``
is applied through ``set_extract_user_metadata``. The mutator's annotation
decides which value shapes it accepts and how scalar text is converted.
"""

import collections.abc
import inspect
import logging
import re
import types
from typing import Annotated, Any, Optional, Union, get_args, get_origin, get_type_hints
from xml.etree import ElementTree

from wirework.classifier import classify
from wirework.coercion import SCALAR_COERCION_ORDER, coerce
from wirework.document import element_children, local_name, params_section
from wirework.domain import KeyValueMap, OrderedList, Parameter, ParamValue, Scalar, SettingsRecord
from wirework.errors import MutatorInvocationError, NoMatchingMutatorError

__all__ = ["MUTATOR_PREFIX", "mutator_name", "ParameterApplier", "read_params", "apply_params"]

logger = logging.getLogger(__name__)

MUTATOR_PREFIX = "set_"

_UNION_ORIGINS = {Union, getattr(types, "UnionType", Union)}
_LIST_ORIGINS = {
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Collection,
    collections.abc.Iterable,
}
_MAP_ORIGINS = {
    dict,
    collections.OrderedDict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
}
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def mutator_name(parameter_name: str) -> str:
    """Return the mutator method name for a parameter.

    Example:
        >>> mutator_name("bucket")               # "set_bucket"
        >>> mutator_name("extractUserMetadata")  # "set_extract_user_metadata"
        >>> mutator_name("spool-to-temp")        # "set_spool_to_temp"
    """
    snake = _CAMEL_BOUNDARY.sub("_", parameter_name).replace("-", "_").lower()
    return MUTATOR_PREFIX + snake


class _AcceptedShapes:
    """What a mutator's value parameter accepts, derived from its annotation."""

    def __init__(self, annotation: Any):
        self.any = False
        self.scalars: set[Any] = set()
        self.list = False
        self.map = False
        self._add(annotation)

    def _add(self, annotation: Any):
        origin = get_origin(annotation)
        if annotation in (inspect.Parameter.empty, Any, object):
            self.any = True
        elif origin in _UNION_ORIGINS:
            for member in get_args(annotation):
                if member is not type(None):
                    self._add(member)
        elif origin is Annotated:
            self._add(get_args(annotation)[0])
        elif annotation in _LIST_ORIGINS or (
            origin in _LIST_ORIGINS and get_args(annotation) in ((), (str,))
        ):
            self.list = True
        elif annotation in _MAP_ORIGINS or (
            origin in _MAP_ORIGINS and get_args(annotation) in ((), (str, str))
        ):
            self.map = True
        else:
            self.scalars.add(annotation)

    def scalar_type(self) -> Optional[Any]:
        if self.any:
            return str
        return next((t for t, _ in SCALAR_COERCION_ORDER if t in self.scalars), None)


class ParameterApplier:
    """Apply classified parameter values to an instance's mutators."""

    def apply(self, instance: Any, parameter_name: str, value: ParamValue):
        """Invoke the mutator for ``parameter_name`` with ``value`` converted as needed.

        Args:
            instance: The object being configured.
            parameter_name: Name of the parameter as written in the document.
            value: The classified parameter value.

        Raises:
            NoMatchingMutatorError: If there is no mutator for the name and value shape.
            CoercionError: If scalar text cannot be converted to the mutator's type.
            MutatorInvocationError: If the mutator raises.
        """
        setter = mutator_name(parameter_name)
        mutator, shapes = self._find_mutator(instance, parameter_name, setter)

        if isinstance(value, Scalar):
            target = shapes.scalar_type()
            if target is None:
                raise _no_mutator(instance, parameter_name, setter, "a scalar")
            argument = coerce(value.text, target, parameter_name)
        elif isinstance(value, OrderedList):
            if not (shapes.any or shapes.list):
                raise _no_mutator(instance, parameter_name, setter, "a list")
            argument = list(value.values)
        elif isinstance(value, KeyValueMap):
            if not (shapes.any or shapes.map):
                raise _no_mutator(instance, parameter_name, setter, "a map")
            argument = dict(value.entries)
        else:
            raise TypeError(f"Unexpected parameter value {value!r}")

        logger.debug("Calling %s.%s(%r)", type(instance).__name__, setter, argument)
        try:
            mutator(argument)
        except Exception as e:
            raise MutatorInvocationError(f"bad parameter {setter}: {e}", parameter_name) from e

    @staticmethod
    def _find_mutator(instance: Any, parameter_name: str, setter: str):
        if not setter.isidentifier():
            raise _no_mutator(instance, parameter_name, setter)
        mutator = getattr(instance, setter, None)
        if not callable(mutator):
            raise _no_mutator(instance, parameter_name, setter)

        try:
            value_parameter = _value_parameter(mutator)
        except (TypeError, ValueError):
            value_parameter = None
        if value_parameter is None:
            raise _no_mutator(instance, parameter_name, setter)

        return mutator, _AcceptedShapes(_annotation_of(mutator, value_parameter))


def _value_parameter(mutator: Any) -> Optional[inspect.Parameter]:
    """Return the single parameter a mutator receives its value through."""
    parameters = list(inspect.signature(mutator).parameters.values())
    positional = [
        p
        for p in parameters
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    required_others = [
        p
        for p in parameters[1:]
        if p.default is inspect.Parameter.empty
        and p.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]
    if not positional or positional[0] is not parameters[0] or required_others:
        return None
    return positional[0]


def _annotation_of(mutator: Any, parameter: inspect.Parameter) -> Any:
    try:
        hints = get_type_hints(mutator, include_extras=True)
    except (NameError, TypeError):
        hints = {}
    annotation = hints.get(parameter.name, parameter.annotation)
    if isinstance(annotation, str):
        # Unresolvable forward reference; treat as unannotated.
        return inspect.Parameter.empty
    return annotation


def _no_mutator(
    instance: Any, parameter_name: str, setter: str, shape: Optional[str] = None
) -> NoMatchingMutatorError:
    accepting = f" accepting {shape}" if shape else ""
    return NoMatchingMutatorError(
        f"Couldn't find setter: {setter}{accepting} for object {type(instance)}",
        parameter_name,
    )


def read_params(section: ElementTree.Element, exclude: Optional[str] = None) -> list[Parameter]:
    """Classify every parameter of a section's ``params`` child.

    Args:
        section: A component section.
        exclude: A parameter name to skip entirely.

    Returns:
        The classified parameters in document order; empty if there is no ``params`` child.

    Raises:
        MalformedMapEntryError: If a map-shaped parameter has an incomplete entry.
    """
    params = params_section(section)
    if params is None:
        return []
    return [
        Parameter(local_name(node.tag), classify(node))
        for node in element_children(params)
        if local_name(node.tag) != exclude
    ]


def apply_params(
    instance: Any,
    section: ElementTree.Element,
    settings: SettingsRecord,
    exclude: Optional[str] = None,
    applier: Optional[ParameterApplier] = None,
):
    """Apply all parameters declared on ``section`` to ``instance``.

    Every parameter is classified before any mutator runs, so a malformed
    parameter anywhere in the section leaves the instance untouched. Each name
    applied is added to ``settings``.

    Args:
        instance: The object being configured.
        section: The component section whose ``params`` child is read.
        settings: Record of applied parameter names for this configure pass.
        exclude: A parameter name to skip entirely; it is neither applied nor recorded.
        applier: The applier to use; a new :class:`ParameterApplier` by default.
    """
    applier = applier or ParameterApplier()
    for parameter in read_params(section, exclude):
        applier.apply(instance, parameter.name, parameter.value)
        settings.add(parameter.name)
