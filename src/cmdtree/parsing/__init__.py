"""
Command tree source parsing.

This package provides the lexer, the recursive-descent parser and the
serializer for the command tree source format.
"""

from cmdtree.parsing.lexer import Lexer, Token, TokenType, tokenize
from cmdtree.parsing.parser import CommandTreeParser, parse, parse_file
from cmdtree.parsing.serializer import format_argument_type, format_tree, format_word

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    "CommandTreeParser",
    "parse",
    "parse_file",
    "format_tree",
    "format_argument_type",
    "format_word",
]
