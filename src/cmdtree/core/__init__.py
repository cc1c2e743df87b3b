"""
Core command tree components.

This package provides the node classes and argument type descriptors that
make up a parsed command tree.
"""

from cmdtree.core.tree_node import ArgumentNode, CommandNode, LiteralNode
from cmdtree.core.types import (
    ARGUMENT_TYPE_CLASSES,
    ArgumentTypeSpec,
    BoolType,
    DoubleType,
    ExtensionType,
    FloatType,
    IntegerType,
    LongType,
    NumericType,
    StringMode,
    StringType,
)

__all__ = [
    "CommandNode",
    "LiteralNode",
    "ArgumentNode",
    "ARGUMENT_TYPE_CLASSES",
    "ArgumentTypeSpec",
    "NumericType",
    "BoolType",
    "StringMode",
    "StringType",
    "IntegerType",
    "LongType",
    "FloatType",
    "DoubleType",
    "ExtensionType",
]
