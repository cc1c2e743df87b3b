"""
Recursive-descent parser for command tree sources.

Grammar:

    tree := node EOF
    node := WORD [argtype] ( '{' node* '}' | ';' )

A node whose name is followed by another word is an argument node, and that
word starts its argument type declaration; otherwise the node is a literal.
The root of a tree must be a literal node.

Every failure is fatal to the current parse and is reported as a
`CommandTreeError` carrying the line of the token at which the problem was
detected. For a scope left open at the end of the input that is the line of
the end-of-input token; the message names the line where the scope opened.
"""

import io
import logging
import os
from pathlib import Path
from typing import BinaryIO, TextIO

from cmdtree.config import ParserConfig
from cmdtree.core.tree_node import ArgumentNode, CommandNode, LiteralNode
from cmdtree.core.types import ArgumentTypeSpec
from cmdtree.exceptions.core import (
    CommandTreeError,
    DuplicateChildError,
    LexError,
    NestingDepthError,
    ParseError,
)
from cmdtree.parsing.lexer import SOURCE_ENCODING, Lexer, TokenType
from cmdtree.resolvers.registry import ResolverRegistry

logger = logging.getLogger(__name__)

Source = str | bytes | bytearray | TextIO | BinaryIO | os.PathLike


class CommandTreeParser:
    """Parser turning a token stream into a command tree."""

    def __init__(
        self,
        lexer: Lexer,
        resolvers: ResolverRegistry | None = None,
        *,
        config: ParserConfig | None = None,
    ):
        self.lexer = lexer
        self.config = config or ParserConfig()
        # the config's default namespace applies whichever registry is used
        self.resolvers = resolvers if resolvers is not None else ResolverRegistry()

    def parse(self) -> LiteralNode:
        """
        Parse a complete tree.

        Returns:
            The root literal node

        Raises:
            LexError: On character-level errors or read failures
            ParseError: On grammar or argument type errors
        """
        root_line = self.lexer.peek().line
        try:
            root = self._parse_node(depth=1)
        except RecursionError as exc:
            raise NestingDepthError(
                "Command tree is nested too deeply to parse",
                self.lexer.current_line(),
                cause=exc,
            ) from exc

        match root:
            case LiteralNode():
                pass
            case ArgumentNode():
                raise ParseError(
                    f"Root command node '{root.name}' is not a literal node",
                    root_line,
                    token=root.name,
                )

        token = self.lexer.peek()
        if not token.is_eof:
            raise ParseError(
                f"Expected end of input but got {token}", token.line, token=token.text
            )

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Parsed command tree '%s' (%d nodes)", root.name, root.node_count()
            )
        return root

    def _parse_node(self, depth: int) -> CommandNode:
        token = self.lexer.next()
        if not token.is_word:
            raise ParseError(
                f"Expected word for node name but got {token}",
                token.line,
                token=token.text,
            )
        if self.config.max_depth is not None and depth > self.config.max_depth:
            raise NestingDepthError(
                f"Node '{token.text}' exceeds the maximum nesting depth of "
                f"{self.config.max_depth}",
                token.line,
                token=token.text,
            )

        name = token.text
        argument_type = None
        if self.lexer.peek().is_word:
            argument_type = self._parse_argument_type()

        children = self._parse_body(name, depth)
        if argument_type is None:
            return LiteralNode(name=name, children=children)
        return ArgumentNode(name=name, argument_type=argument_type, children=children)

    def _parse_argument_type(self) -> ArgumentTypeSpec:
        type_name = self.lexer.next().text
        return self.resolvers.resolve_type(
            type_name, self.lexer, default_namespace=self.config.default_namespace
        )

    def _parse_body(self, name: str, depth: int) -> tuple[CommandNode, ...]:
        token = self.lexer.next()
        if token.type is TokenType.TERMINATOR:
            return ()
        if token.type is not TokenType.OPEN_SCOPE:
            raise ParseError(
                f"Node definition '{name}' not ended with ';' or '{{', got {token}",
                token.line,
                token=token.text,
            )

        opened_at = token.line
        children: list[CommandNode] = []
        seen: set[str] = set()
        while True:
            token = self.lexer.peek()
            if token.type is TokenType.CLOSE_SCOPE:
                self.lexer.next()
                return tuple(children)
            if token.is_eof:
                raise ParseError(
                    f"Expected '}}' to close node '{name}' opened at line {opened_at} "
                    f"but got {token}",
                    token.line,
                )
            child = self._parse_node(depth + 1)
            if child.name in seen:
                raise DuplicateChildError(child.name, name, token.line)
            seen.add(child.name)
            children.append(child)


def _parse_reader(
    reader: TextIO,
    resolvers: ResolverRegistry | None,
    config: ParserConfig | None,
    source_name: str | None,
) -> LiteralNode:
    parser = CommandTreeParser(Lexer(reader), resolvers, config=config)
    try:
        return parser.parse()
    except CommandTreeError as exc:
        if source_name is None:
            raise
        raise exc.with_source_name(source_name) from exc.cause


def parse(
    source: Source,
    resolvers: ResolverRegistry | None = None,
    *,
    config: ParserConfig | None = None,
    source_name: str | None = None,
) -> LiteralNode:
    """
    Parse a command tree.

    Params:
        source: Source text, UTF-8 bytes, a text or binary file object, or a
            path (`os.PathLike`; plain strings are always source text)
        resolvers: Registry for extension argument types
        config: Parser configuration
        source_name: Name used in error locations

    Returns:
        The root literal node

    Raises:
        LexError: On character-level errors or read failures
        ParseError: On grammar or argument type errors
    """
    if isinstance(source, os.PathLike):
        return parse_file(source, resolvers, config=config, source_name=source_name)
    if isinstance(source, str):
        return _parse_reader(io.StringIO(source), resolvers, config, source_name)
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(bytes(source))
    buffered = None
    if isinstance(source, io.RawIOBase):
        source = buffered = io.BufferedReader(source)
    if isinstance(source, io.BufferedIOBase):
        reader = io.TextIOWrapper(source, encoding=SOURCE_ENCODING, newline="")
        try:
            return _parse_reader(reader, resolvers, config, source_name)
        finally:
            # leave the caller's stream open
            reader.detach()
            if buffered is not None:
                buffered.detach()
    return _parse_reader(source, resolvers, config, source_name)


def parse_file(
    path: str | os.PathLike,
    resolvers: ResolverRegistry | None = None,
    *,
    config: ParserConfig | None = None,
    source_name: str | None = None,
) -> LiteralNode:
    """
    Parse a command tree from a UTF-8 encoded file.

    Params:
        path: Path to the file
        resolvers: Registry for extension argument types
        config: Parser configuration
        source_name: Name used in error locations (defaults to the path)

    Returns:
        The root literal node

    Raises:
        LexError: If the file cannot be opened or read, or on character-level errors
        ParseError: On grammar or argument type errors
    """
    path = Path(path)
    source_name = source_name or str(path)
    try:
        reader = path.open("r", encoding=SOURCE_ENCODING, newline="")
    except OSError as exc:
        raise LexError(
            f"Failed to open source: {exc}", 1, source_name=source_name, cause=exc
        ) from exc
    with reader:
        return _parse_reader(reader, resolvers, config, source_name)
