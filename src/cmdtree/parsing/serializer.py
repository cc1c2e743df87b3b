"""
Command tree serialization.

This module writes a command tree back to source text. The output re-parses
to an equal tree when the same resolvers are available.
"""

from cmdtree.core.tree_node import ArgumentNode, CommandNode, LiteralNode
from cmdtree.core.types import (
    ArgumentTypeSpec,
    BoolType,
    DoubleType,
    ExtensionType,
    FloatType,
    IntegerType,
    LongType,
    StringType,
)
from cmdtree.parsing.lexer import QUOTE, is_word_char
from cmdtree.resolvers.builtin import MAX_WORD, MIN_WORD

_QUOTE_ESCAPES = {"\\": "\\\\", QUOTE: '\\"', "\n": "\\n", "\t": "\\t", "\r": "\\r"}


def format_word(text: str) -> str:
    """
    Render a word, quoting it when it would not lex back as a single word.

    Params:
        text: Word text

    Returns:
        The word as it should appear in source text
    """
    if text and all(is_word_char(c) for c in text) and not text.startswith(("//", "/*")):
        return text
    return QUOTE + "".join(_QUOTE_ESCAPES.get(c, c) for c in text) + QUOTE


def _format_bound(value: int | float) -> str:
    return repr(value) if isinstance(value, float) else str(value)


def format_argument_type(spec: ArgumentTypeSpec) -> str:
    """Render an argument type declaration (type name plus parameter words)."""
    match spec:
        case BoolType():
            return spec.type_name
        case StringType():
            return f"{spec.type_name} {spec.mode.value}"
        case IntegerType() | LongType() | FloatType() | DoubleType():
            words = [spec.type_name]
            if spec.has_max:
                words.append(_format_bound(spec.min) if spec.has_min else MIN_WORD)
                words.append(_format_bound(spec.max))
            elif spec.has_min:
                words.append(_format_bound(spec.min))
            return " ".join(words)
        case ExtensionType():
            return " ".join(format_word(w) for w in (spec.key, *spec.arguments))
    raise TypeError(f"Unsupported argument type: {type(spec).__name__}")


def _format_node(node: CommandNode, indent: str, level: int, lines: list[str]) -> None:
    prefix = indent * level
    match node:
        case ArgumentNode():
            head = f"{format_word(node.name)} {format_argument_type(node.argument_type)}"
        case LiteralNode():
            head = format_word(node.name)
        case _:
            raise TypeError(f"Unsupported node type: {type(node).__name__}")

    if not node.children:
        lines.append(f"{prefix}{head};")
        return
    lines.append(f"{prefix}{head} {{")
    for child in node.children:
        _format_node(child, indent, level + 1, lines)
    lines.append(f"{prefix}}}")


def format_tree(node: CommandNode, *, indent: str = "    ") -> str:
    """
    Render a command tree as source text.

    Params:
        node: Root node
        indent: Indentation used per nesting level

    Returns:
        Source text ending with a newline
    """
    lines: list[str] = []
    _format_node(node, indent, 0, lines)
    return "\n".join(lines) + "\n"
