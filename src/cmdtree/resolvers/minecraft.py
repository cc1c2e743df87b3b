"""
Resolvers for namespaced extension argument types.

`KeyedArgumentTypeResolver` claims a fixed set of parameterless type names in
one namespace. `MinecraftArgumentTypeResolver` covers the `minecraft`
namespace, including the two parameterised types: `entity`, followed by a
selection word, and `score_holder`, optionally followed by `true`/`false`.
"""

from collections.abc import Iterable

from cmdtree.core.types import ExtensionType
from cmdtree.exceptions.core import ArgumentTypeError
from cmdtree.resolvers.builtin import expect_word
from cmdtree.resolvers.registry import TokenStream

MINECRAFT_NAMESPACE = "minecraft"

# Parameterless argument types known to the host's argument registry
MINECRAFT_ARGUMENT_TYPES = frozenset(
    {
        "angle",
        "block_pos",
        "block_predicate",
        "block_state",
        "color",
        "column_pos",
        "component",
        "dimension",
        "entity_anchor",
        "float_range",
        "function",
        "game_profile",
        "gamemode",
        "heightmap",
        "int_range",
        "item_predicate",
        "item_slot",
        "item_stack",
        "message",
        "nbt_compound_tag",
        "nbt_path",
        "nbt_tag",
        "objective",
        "objective_criteria",
        "operation",
        "particle",
        "resource_location",
        "rotation",
        "scoreboard_slot",
        "swizzle",
        "team",
        "template_mirror",
        "template_rotation",
        "time",
        "uuid",
        "vec2",
        "vec3",
    }
)

# selection word -> (single, players_only)
ENTITY_SELECTORS = {
    "entity": (True, False),
    "entities": (False, False),
    "player": (True, True),
    "players": (False, True),
}


class KeyedArgumentTypeResolver:
    """Resolver for a fixed set of parameterless types in one namespace."""

    def __init__(self, namespace: str, names: Iterable[str]):
        self.namespace = namespace
        self.names = frozenset(names)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.namespace!r}, {len(self.names)} names)"

    def can_resolve(self, namespace: str, name: str) -> bool:
        return namespace == self.namespace and name in self.names

    def resolve(self, namespace: str, name: str, tokens: TokenStream) -> ExtensionType:
        return ExtensionType(namespace, name)


class MinecraftArgumentTypeResolver(KeyedArgumentTypeResolver):
    """Resolver for the `minecraft` argument type namespace."""

    def __init__(self, extra_names: Iterable[str] = ()):
        super().__init__(
            MINECRAFT_NAMESPACE,
            MINECRAFT_ARGUMENT_TYPES | {"entity", "score_holder"} | set(extra_names),
        )

    def resolve(self, namespace: str, name: str, tokens: TokenStream) -> ExtensionType:
        if name == "entity":
            return self._resolve_entity(tokens)
        if name == "score_holder":
            return self._resolve_score_holder(tokens)
        return super().resolve(namespace, name, tokens)

    def _resolve_entity(self, tokens: TokenStream) -> ExtensionType:
        line = tokens.peek().line
        selection = expect_word(tokens, "entity selection type")
        if selection not in ENTITY_SELECTORS:
            raise ArgumentTypeError(
                f"Unknown entity selection type: {selection} "
                f"(expected one of {', '.join(ENTITY_SELECTORS)})",
                line,
                token=selection,
            )
        single, players_only = ENTITY_SELECTORS[selection]
        return ExtensionType(
            MINECRAFT_NAMESPACE,
            "entity",
            {"single": single, "players_only": players_only},
        )

    def _resolve_score_holder(self, tokens: TokenStream) -> ExtensionType:
        multiple = False
        if tokens.peek().is_word:
            line = tokens.peek().line
            value = expect_word(tokens, "boolean")
            if value not in ("true", "false"):
                raise ArgumentTypeError(
                    f"Expected true/false but got {value}", line, token=value
                )
            multiple = value == "true"
        return ExtensionType(MINECRAFT_NAMESPACE, "score_holder", {"multiple": multiple})
