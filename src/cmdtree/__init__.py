"""
cmdtree - A compiler for textual command tree descriptions

cmdtree parses a small brace-and-semicolon DSL describing a command-argument
tree into an immutable tree of literal and typed argument nodes, with
pluggable resolution of extension argument types.
"""

from importlib.metadata import version

from cmdtree.config import ParserConfig
from cmdtree.core.tree_node import ArgumentNode, CommandNode, LiteralNode
from cmdtree.exceptions.core import (
    ArgumentTypeError,
    CommandTreeError,
    LexError,
    ParseError,
)
from cmdtree.parsing.parser import parse, parse_file
from cmdtree.parsing.serializer import format_tree
from cmdtree.resolvers.registry import ArgumentTypeResolver, ResolverRegistry

__version__ = version("cmdtree")

__all__ = [
    "__version__",
    "parse",
    "parse_file",
    "format_tree",
    "ParserConfig",
    "CommandNode",
    "LiteralNode",
    "ArgumentNode",
    "ArgumentTypeResolver",
    "ResolverRegistry",
    "CommandTreeError",
    "LexError",
    "ParseError",
    "ArgumentTypeError",
]
