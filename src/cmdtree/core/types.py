"""
Argument type descriptors for command tree nodes.

This module contains the immutable value types describing how an argument
node captures its value: the built-in boolean, string and numeric kinds, and
the extension kind produced by pluggable resolvers.
"""

import sys
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Mapping

from attrs import field, frozen

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1
LONG_MIN = -(2**63)
LONG_MAX = 2**63 - 1
FLOAT_MAX = 3.4028234663852886e38  # largest finite binary32 value
DOUBLE_MAX = sys.float_info.max


class StringMode(Enum):
    """How a string argument consumes input."""

    SINGLE_WORD = "single_word"
    QUOTABLE_PHRASE = "quotable_phrase"
    GREEDY_PHRASE = "greedy_phrase"


@frozen
class BoolType:
    type_name: ClassVar[str] = "bool"


@frozen
class StringType:
    mode: StringMode
    type_name: ClassVar[str] = "string"


class _BoundedType:
    """Shared behaviour of the numeric argument types.

    Bounds left out of a declaration take the natural range of the numeric
    kind, so a bound is "explicit" exactly when it differs from that range.
    """

    NATURAL_MIN: ClassVar[int | float]
    NATURAL_MAX: ClassVar[int | float]

    def __attrs_post_init__(self):
        if self.min > self.max:
            raise ValueError(
                f"{self.type_name} lower bound {self.min} exceeds upper bound {self.max}"
            )

    @property
    def has_min(self) -> bool:
        return self.min != self.NATURAL_MIN

    @property
    def has_max(self) -> bool:
        return self.max != self.NATURAL_MAX

    def contains(self, value: int | float) -> bool:
        """Check whether a value lies within the bounds (inclusive)."""
        return self.min <= value <= self.max


@frozen
class IntegerType(_BoundedType):
    min: int = INT_MIN
    max: int = INT_MAX

    type_name: ClassVar[str] = "integer"
    NATURAL_MIN: ClassVar[int] = INT_MIN
    NATURAL_MAX: ClassVar[int] = INT_MAX


@frozen
class LongType(_BoundedType):
    min: int = LONG_MIN
    max: int = LONG_MAX

    type_name: ClassVar[str] = "long"
    NATURAL_MIN: ClassVar[int] = LONG_MIN
    NATURAL_MAX: ClassVar[int] = LONG_MAX


@frozen
class FloatType(_BoundedType):
    min: float = -FLOAT_MAX
    max: float = FLOAT_MAX

    type_name: ClassVar[str] = "float"
    NATURAL_MIN: ClassVar[float] = -FLOAT_MAX
    NATURAL_MAX: ClassVar[float] = FLOAT_MAX


@frozen
class DoubleType(_BoundedType):
    min: float = -DOUBLE_MAX
    max: float = DOUBLE_MAX

    type_name: ClassVar[str] = "double"
    NATURAL_MIN: ClassVar[float] = -DOUBLE_MAX
    NATURAL_MAX: ClassVar[float] = DOUBLE_MAX


def _freeze(value: Any) -> Any:
    """Return a read-only copy of nested mappings, lists and sets."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(_freeze(v) for v in value)
    return value


def _freeze_payload(payload: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return _freeze(payload or {})


@frozen
class ExtensionType:
    """
    Argument type supplied by a resolver plugin.

    Params:
        namespace: Namespace part of the type key
        name: Name part of the type key
        payload: Resolver-defined parameters; copied read-only, with nested
            mappings, lists and sets frozen
        arguments: Raw words the resolver consumed after the type name
    """

    namespace: str
    name: str
    payload: Mapping[str, Any] = field(
        factory=dict, converter=_freeze_payload, hash=False
    )
    arguments: tuple[str, ...] = field(default=(), converter=tuple)

    @property
    def key(self) -> str:
        return f"{self.namespace}:{self.name}"

    @property
    def type_name(self) -> str:
        return self.key


NumericType = IntegerType | LongType | FloatType | DoubleType

ArgumentTypeSpec = BoolType | StringType | NumericType | ExtensionType

ARGUMENT_TYPE_CLASSES = (
    BoolType,
    StringType,
    IntegerType,
    LongType,
    FloatType,
    DoubleType,
    ExtensionType,
)
