"""
Command tree exception classes.

This package provides all exception types raised while lexing, parsing and
resolving argument types of command tree sources.
"""

from cmdtree.exceptions.core import (
    ArgumentTypeError,
    CommandTreeError,
    DuplicateChildError,
    ErrorContext,
    LexError,
    NestingDepthError,
    ParseError,
)

__all__ = [
    "CommandTreeError",
    "ErrorContext",
    "LexError",
    "ParseError",
    "ArgumentTypeError",
    "DuplicateChildError",
    "NestingDepthError",
]
