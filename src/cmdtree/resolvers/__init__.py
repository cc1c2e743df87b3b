"""
Argument type resolution for cmdtree.

This package provides the built-in argument type table, the resolver plugin
interface and registry, and the bundled namespaced resolvers.
"""

from cmdtree.resolvers.builtin import BUILTIN_TYPES, expect_word
from cmdtree.resolvers.minecraft import (
    KeyedArgumentTypeResolver,
    MinecraftArgumentTypeResolver,
)
from cmdtree.resolvers.registry import (
    ArgumentTypeResolver,
    ResolverRegistry,
    TokenStream,
    load_resolver,
)

__all__ = [
    "BUILTIN_TYPES",
    "expect_word",
    "ArgumentTypeResolver",
    "ResolverRegistry",
    "TokenStream",
    "load_resolver",
    "KeyedArgumentTypeResolver",
    "MinecraftArgumentTypeResolver",
]
