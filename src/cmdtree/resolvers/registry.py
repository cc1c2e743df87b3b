"""
Registry of argument type resolvers.

This module resolves the argument type declared after an argument node's
name. The built-in table is consulted first; any other type name is read as a
`namespace:name` key and handed to the first registered resolver that claims
it. Resolvers receive the token stream so they can consume further words as
parameters of their type.

The registry is meant to be populated before parsing starts and read-only
afterwards; registration is not synchronised.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from attrs import evolve

from cmdtree.config import DEFAULT_NAMESPACE
from cmdtree.core.types import ARGUMENT_TYPE_CLASSES, ArgumentTypeSpec, ExtensionType
from cmdtree.exceptions.core import ArgumentTypeError, CommandTreeError
from cmdtree.resolvers.builtin import BUILTIN_TYPES

if TYPE_CHECKING:
    from cmdtree.config import ParserConfig
    from cmdtree.parsing.lexer import Token

logger = logging.getLogger(__name__)

# Stands for "the registry's own default namespace"
_REGISTRY_DEFAULT = object()


@runtime_checkable
class TokenStream(Protocol):
    """Peekable token source handed to resolvers."""

    def next(self) -> Token: ...

    def peek(self) -> Token: ...

    def current_line(self) -> int: ...


@runtime_checkable
class ArgumentTypeResolver(Protocol):
    """Plugin interface for extension argument types."""

    def can_resolve(self, namespace: str, name: str) -> bool: ...

    def resolve(
        self, namespace: str, name: str, tokens: TokenStream
    ) -> ArgumentTypeSpec: ...


class _RecordingTokenStream:
    """Token stream proxy that remembers the words consumed through it."""

    def __init__(self, tokens: TokenStream):
        self._tokens = tokens
        self.words: list[str] = []

    def next(self) -> Token:
        token = self._tokens.next()
        if token.is_word:
            self.words.append(token.text)
        return token

    def peek(self) -> Token:
        return self._tokens.peek()

    def current_line(self) -> int:
        return self._tokens.current_line()


def load_resolver(import_path: str) -> ArgumentTypeResolver:
    """
    Instantiate a resolver class from an import path.

    Params:
        import_path: "package.module:ClassName"

    Returns:
        A new instance of the named class, created without arguments

    Raises:
        ValueError: If the path is malformed
        ImportError: If the module or class cannot be found
    """
    module_name, _, attribute = import_path.partition(":")
    if not module_name or not attribute:
        raise ValueError(
            f"Invalid resolver path '{import_path}', expected 'package.module:ClassName'"
        )
    module = importlib.import_module(module_name)
    try:
        resolver_cls = getattr(module, attribute)
    except AttributeError as exc:
        raise ImportError(
            f"Module '{module_name}' has no resolver '{attribute}'"
        ) from exc
    return resolver_cls()


class ResolverRegistry:
    """Ordered collection of argument type resolvers.

    Resolvers are consulted in registration order; the first one whose
    `can_resolve` returns True handles the type.
    """

    def __init__(
        self,
        resolvers: Iterable[ArgumentTypeResolver] = (),
        *,
        default_namespace: str | None = DEFAULT_NAMESPACE,
    ):
        self._resolvers: list[ArgumentTypeResolver] = []
        self.default_namespace = default_namespace
        for resolver in resolvers:
            self.register(resolver)

    @classmethod
    def from_config(cls, config: ParserConfig) -> ResolverRegistry:
        """Build a registry from the resolver import paths in a config."""
        return cls(
            (load_resolver(path) for path in config.resolvers),
            default_namespace=config.default_namespace,
        )

    def register(self, resolver: ArgumentTypeResolver) -> ArgumentTypeResolver:
        """
        Append a resolver.

        Params:
            resolver: Object implementing `can_resolve` and `resolve`

        Returns:
            The registered resolver

        Raises:
            TypeError: If the object does not implement the resolver interface
        """
        if not isinstance(resolver, ArgumentTypeResolver):
            raise TypeError(
                f"{type(resolver).__name__} does not implement can_resolve/resolve"
            )
        self._resolvers.append(resolver)
        logger.debug("Registered argument type resolver %r", resolver)
        return resolver

    def __iter__(self) -> Iterator[ArgumentTypeResolver]:
        return iter(self._resolvers)

    def __len__(self) -> int:
        return len(self._resolvers)

    def split_key(
        self, type_name: str, line: int, default_namespace=_REGISTRY_DEFAULT
    ) -> tuple[str, str]:
        """
        Split an extension type name into namespace and name.

        Names without a colon take the default namespace, if one is set.

        Params:
            type_name: The word naming the type
            line: Line reported on failure
            default_namespace: Replaces the registry's default namespace;
                None requires every name to carry a namespace

        Raises:
            ArgumentTypeError: If the name is not a valid namespaced key
        """
        if default_namespace is _REGISTRY_DEFAULT:
            default_namespace = self.default_namespace
        parts = type_name.split(":")
        if len(parts) == 1 and default_namespace:
            parts = [default_namespace, type_name]
        if len(parts) != 2 or not all(parts):
            raise ArgumentTypeError(
                f"Invalid key for argument type: '{type_name}'", line, token=type_name
            )
        return parts[0], parts[1]

    def find(self, namespace: str, name: str) -> ArgumentTypeResolver | None:
        """Return the first resolver claiming the key, or None."""
        for resolver in self._resolvers:
            if resolver.can_resolve(namespace, name):
                return resolver
        return None

    def resolve_type(
        self,
        type_name: str,
        tokens: TokenStream,
        *,
        default_namespace=_REGISTRY_DEFAULT,
    ) -> ArgumentTypeSpec:
        """
        Resolve an argument type declaration.

        The type name has already been consumed; the resolver may consume the
        parameter words that follow it.

        Params:
            type_name: The word naming the type
            tokens: Token stream positioned after the type name
            default_namespace: Replaces the registry's default namespace

        Returns:
            The resolved argument type

        Raises:
            ArgumentTypeError: If no built-in or resolver handles the name, or
                the resolver fails
        """
        builtin = BUILTIN_TYPES.get(type_name)
        if builtin is not None:
            return builtin(tokens)

        line = tokens.current_line()
        namespace, name = self.split_key(type_name, line, default_namespace)
        key = f"{namespace}:{name}"
        recording = _RecordingTokenStream(tokens)
        try:
            resolver = self.find(namespace, name)
            if resolver is None:
                raise ArgumentTypeError(
                    f"Unknown argument type '{key}'", line, token=type_name
                )
            logger.debug("Resolving argument type %s with %r", key, resolver)
            spec = resolver.resolve(namespace, name, recording)
        except CommandTreeError:
            raise
        except Exception as exc:
            raise ArgumentTypeError(
                f"Resolver for argument type '{key}' failed: {exc}",
                tokens.current_line(),
                token=type_name,
                cause=exc,
            ) from exc

        if not isinstance(spec, ARGUMENT_TYPE_CLASSES):
            raise ArgumentTypeError(
                f"Resolver for argument type '{key}' returned {type(spec).__name__}, "
                "not an argument type",
                tokens.current_line(),
                token=type_name,
            )
        if isinstance(spec, ExtensionType) and recording.words and not spec.arguments:
            spec = evolve(spec, arguments=recording.words)
        return spec
