"""Conversion of scalar parameter text to the types mutators accept.

Mutators declare the type they accept with an ordinary annotation. Python has
a single ``int`` and a single ``float``; the narrower widths are requested with
the :data:`Int32` and :data:`Float32` markers:

    def set_max_connections(self, value: Int32): ...
    def set_timeout_millis(self, value: int): ...
    def set_ratio(self, value: Float32): ...

When a mutator accepts several scalar types (for example ``Union[int, str]``)
the first entry of :data:`SCALAR_COERCION_ORDER` wins.
"""

import math
import struct
from typing import Any, Callable, NewType

from wirework.errors import CoercionError

__all__ = ["Int32", "Float32", "SCALAR_COERCION_ORDER", "coerce"]

Int32 = NewType("Int32", int)
"""Marks a mutator parameter as a 32-bit signed integer."""

Float32 = NewType("Float32", float)
"""Marks a mutator parameter as a single-precision float."""

_INT32_RANGE = (-(2**31), 2**31 - 1)
_INT64_RANGE = (-(2**63), 2**63 - 1)


def _to_text(text: str) -> str:
    return text


def _to_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueError(f"'{text}' is not 'true' or 'false'")


def _bounded_int(bounds: tuple[int, int]) -> Callable[[str], int]:
    def convert(text: str) -> int:
        value = int(text)
        lower, upper = bounds
        if not lower <= value <= upper:
            raise ValueError(f"{value} is outside [{lower}, {upper}]")
        return value

    return convert


def _to_float32(text: str) -> float:
    value = float(text)
    if math.isnan(value) or math.isinf(value):
        return value
    try:
        result = struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError as e:
        raise ValueError(f"{value} is too large for a single-precision float") from e
    if math.isinf(result):
        raise ValueError(f"{value} is too large for a single-precision float")
    return result


SCALAR_COERCION_ORDER: list[tuple[Any, Callable[[str], Any]]] = [
    (str, _to_text),
    (bool, _to_bool),
    (int, _bounded_int(_INT64_RANGE)),
    (Int32, _bounded_int(_INT32_RANGE)),
    (float, float),
    (Float32, _to_float32),
]
"""Scalar types in the order they are tried, each with its text converter."""


def coerce(text: str, target: Any, parameter_name: str) -> Any:
    """Convert ``text`` to ``target``, one of the types in :data:`SCALAR_COERCION_ORDER`.

    Raises:
        CoercionError: If the text cannot be parsed as the target type.
    """
    converter = dict(SCALAR_COERCION_ORDER)[target]
    try:
        return converter(text)
    except ValueError as e:
        raise CoercionError(
            f"bad parameter {parameter_name}: cannot convert '{text}' to {_type_name(target)}",
            parameter_name,
        ) from e


def _type_name(target: Any) -> str:
    return getattr(target, "__name__", repr(target))
