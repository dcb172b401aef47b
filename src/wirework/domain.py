"""Domain models used throughout the framework."""

from dataclasses import dataclass
from typing import Iterator, Union

__all__ = [
    "Scalar",
    "OrderedList",
    "KeyValueMap",
    "ParamValue",
    "Parameter",
    "SettingsRecord",
]


@dataclass(frozen=True)
class Scalar:
    """A parameter given as plain text content.

    Attributes:
        text: The text content of the parameter node; empty if the node had none.
    """

    text: str


@dataclass(frozen=True)
class OrderedList:
    """A parameter given as a sequence of unlabeled child elements.

    Attributes:
        values: The non-empty text of each child, in document order.
    """

    values: tuple[str, ...]


@dataclass(frozen=True)
class KeyValueMap:
    """A parameter given as child elements carrying key/value attribute pairs.

    Attributes:
        entries: Insertion-ordered mapping; later duplicates overwrite earlier values.
    """

    entries: dict[str, str]


ParamValue = Union[Scalar, OrderedList, KeyValueMap]
"""The closed set of shapes a classified parameter can take."""


@dataclass(frozen=True)
class Parameter:
    """A named, classified entry from a params section.

    Attributes:
        name: The local tag name of the parameter node.
        value: The classified value.
    """

    name: str
    value: ParamValue


class SettingsRecord:
    """The names of parameters successfully applied during one configure pass.

    Names are kept in the order they were first applied.

    Example:
        >>> settings = SettingsRecord()
        >>> settings.add("bucket")
        >>> "bucket" in settings
        True
    """

    def __init__(self):
        self._names: dict[str, None] = {}

    def add(self, name: str):
        self._names[name] = None

    def as_set(self) -> set[str]:
        return set(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"SettingsRecord({list(self._names)!r})"
