"""
Shared test fixtures and utilities for the cmdtree test suite.
"""

import io

import pytest

from cmdtree.core.types import ExtensionType
from cmdtree.parsing.lexer import Lexer
from cmdtree.resolvers.minecraft import MinecraftArgumentTypeResolver
from cmdtree.resolvers.registry import ResolverRegistry


class CustomResolver:
    """Resolver claiming a single key and consuming a fixed number of words.

    Usage:
        resolver = CustomResolver("my_mod", "custom", params=1)
    """

    def __init__(self, namespace: str, name: str, params: int = 0):
        self.namespace = namespace
        self.name = name
        self.params = params
        self.calls: list[tuple[str, str]] = []

    def can_resolve(self, namespace, name):
        return namespace == self.namespace and name == self.name

    def resolve(self, namespace, name, tokens):
        self.calls.append((namespace, name))
        words = [tokens.next().text for _ in range(self.params)]
        return ExtensionType(namespace, name, {"params": tuple(words)})


@pytest.fixture
def minecraft_registry():
    """Registry with the bundled minecraft resolver."""
    return ResolverRegistry([MinecraftArgumentTypeResolver()])


@pytest.fixture
def make_lexer():
    """Factory building a lexer over a source string."""

    def _make(text: str, chunk_size: int = 8192) -> Lexer:
        return Lexer(io.StringIO(text), chunk_size=chunk_size)

    return _make


@pytest.fixture
def custom_resolver():
    """Factory building a CustomResolver."""
    return CustomResolver
