"""
Built-in argument types.

This module parses the six argument types every command tree source may use
without registering a resolver: `bool`, `string`, `integer`, `long`, `float`
and `double`. Numeric types take zero, one (lower) or two (lower, upper)
bound words; the words `min` and `max` stand for the natural range of the
numeric kind. Each built-in is also accepted under the `brigadier`
namespace (`brigadier:integer`), the spelling used by existing sources.
"""

import math
import re
from collections.abc import Callable
from typing import TYPE_CHECKING

from cmdtree.core.types import (
    ArgumentTypeSpec,
    BoolType,
    DoubleType,
    FloatType,
    IntegerType,
    LongType,
    StringMode,
    StringType,
)
from cmdtree.exceptions.core import ArgumentTypeError

if TYPE_CHECKING:
    from cmdtree.resolvers.registry import TokenStream

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

MIN_WORD = "min"
MAX_WORD = "max"


def expect_word(tokens: "TokenStream", what: str) -> str:
    """
    Consume a word token.

    Params:
        tokens: Token stream to read from
        what: Description of the expected word, used in the error message

    Returns:
        The word's text

    Raises:
        ArgumentTypeError: If the next token is not a word
    """
    token = tokens.next()
    if not token.is_word:
        raise ArgumentTypeError(f"Expected {what} but got {token}", token.line)
    return token.text


def parse_bool(tokens: "TokenStream") -> BoolType:
    return BoolType()


def parse_string(tokens: "TokenStream") -> StringType:
    line = tokens.peek().line
    mode = expect_word(tokens, "string type")
    try:
        return StringType(StringMode(mode))
    except ValueError as exc:
        valid = ", ".join(m.value for m in StringMode)
        raise ArgumentTypeError(
            f"Unknown string type: {mode} (expected one of {valid})",
            line,
            token=mode,
            cause=exc,
        ) from exc


def _parse_integral(tokens: "TokenStream", spec_cls: type) -> int:
    line = tokens.peek().line
    text = expect_word(tokens, spec_cls.type_name)
    if text == MIN_WORD:
        return spec_cls.NATURAL_MIN
    if text == MAX_WORD:
        return spec_cls.NATURAL_MAX
    if not INTEGER_PATTERN.fullmatch(text):
        raise ArgumentTypeError(
            f"Expected {spec_cls.type_name} but got '{text}'", line, token=text
        )
    value = int(text)
    if not spec_cls.NATURAL_MIN <= value <= spec_cls.NATURAL_MAX:
        raise ArgumentTypeError(
            f"Value '{text}' is out of range for {spec_cls.type_name}", line, token=text
        )
    return value


def _parse_floating(tokens: "TokenStream", spec_cls: type) -> float:
    line = tokens.peek().line
    text = expect_word(tokens, spec_cls.type_name)
    if text == MIN_WORD:
        return spec_cls.NATURAL_MIN
    if text == MAX_WORD:
        return spec_cls.NATURAL_MAX
    if not DECIMAL_PATTERN.fullmatch(text):
        raise ArgumentTypeError(
            f"Expected {spec_cls.type_name} but got '{text}'", line, token=text
        )
    value = float(text)
    if not math.isfinite(value) or not (
        spec_cls.NATURAL_MIN <= value <= spec_cls.NATURAL_MAX
    ):
        raise ArgumentTypeError(
            f"Value '{text}' is out of range for {spec_cls.type_name}", line, token=text
        )
    return value


def _bounded_parser(
    spec_cls: type, parse_bound: Callable[["TokenStream", type], int | float]
) -> Callable[["TokenStream"], ArgumentTypeSpec]:
    def parse(tokens: "TokenStream") -> ArgumentTypeSpec:
        if not tokens.peek().is_word:
            return spec_cls()
        minimum = parse_bound(tokens, spec_cls)
        if not tokens.peek().is_word:
            return spec_cls(min=minimum)
        maximum = parse_bound(tokens, spec_cls)
        if minimum > maximum:
            raise ArgumentTypeError(
                f"{spec_cls.type_name} lower bound {minimum} exceeds upper bound {maximum}",
                tokens.current_line(),
            )
        return spec_cls(min=minimum, max=maximum)

    parse.__name__ = f"parse_{spec_cls.type_name}"
    return parse


parse_integer = _bounded_parser(IntegerType, _parse_integral)
parse_long = _bounded_parser(LongType, _parse_integral)
parse_float = _bounded_parser(FloatType, _parse_floating)
parse_double = _bounded_parser(DoubleType, _parse_floating)

# Namespace under which the built-ins are also addressable as namespaced keys
BUILTIN_NAMESPACE = "brigadier"

BUILTIN_TYPES: dict[str, Callable[["TokenStream"], ArgumentTypeSpec]] = {
    BoolType.type_name: parse_bool,
    StringType.type_name: parse_string,
    IntegerType.type_name: parse_integer,
    LongType.type_name: parse_long,
    FloatType.type_name: parse_float,
    DoubleType.type_name: parse_double,
}
BUILTIN_TYPES.update(
    {f"{BUILTIN_NAMESPACE}:{name}": parse for name, parse in list(BUILTIN_TYPES.items())}
)
