"""
Command tree node classes.

This module contains the immutable node types produced by parsing a command
tree source. A tree is a strict forest: every node owns its children, there
are no back-references, and nodes are never mutated once built. A node is
either a `LiteralNode` or an `ArgumentNode`; the `kind` field tells them apart
when a tree is rebuilt from plain data.
"""

from collections.abc import Iterator
from types import MappingProxyType
from typing import Annotated, Literal, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from cmdtree.core.types import ArgumentTypeSpec

ChildNode = Annotated[
    Union["LiteralNode", "ArgumentNode"], Field(discriminator="kind")
]


class CommandNode(BaseModel):
    """
    Base class for command tree nodes.

    Nodes are frozen pydantic models. Children are kept in declaration order
    and their names are unique among siblings. Only the two subclasses can be
    instantiated.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    children: tuple[ChildNode, ...] = ()

    @field_validator("children")
    @classmethod
    def _unique_child_names(
        cls, children: tuple["CommandNode", ...]
    ) -> tuple["CommandNode", ...]:
        seen: set[str] = set()
        for child in children:
            if child.name in seen:
                raise ValueError(f"Duplicate child node '{child.name}'")
            seen.add(child.name)
        return children

    @model_validator(mode="after")
    def _concrete_kind(self) -> "CommandNode":
        if type(self) is CommandNode:
            raise ValueError(
                "CommandNode cannot be instantiated, use LiteralNode or ArgumentNode"
            )
        return self

    @property
    def is_literal(self) -> bool:
        return isinstance(self, LiteralNode)

    @property
    def is_argument(self) -> bool:
        return isinstance(self, ArgumentNode)

    @property
    def children_by_name(self) -> Mapping[str, "CommandNode"]:
        """Read-only, insertion-ordered mapping of child name to child node."""
        return MappingProxyType({child.name: child for child in self.children})

    def get_child(self, name: str) -> "CommandNode | None":
        for child in self.children:
            if child.name == name:
                return child
        return None

    def find(self, *path: str) -> "CommandNode | None":
        """
        Look up a descendant by its name path.

        Params:
            path: Child names to follow, starting below this node

        Returns:
            The node at the end of the path, or None if any step is missing
        """
        node: CommandNode | None = self
        for name in path:
            node = node.get_child(name)
            if node is None:
                return None
        return node

    def walk(self) -> Iterator[tuple[tuple[str, ...], "CommandNode"]]:
        """Yield (path, node) pairs depth-first, parents before children."""
        stack: list[tuple[tuple[str, ...], CommandNode]] = [((self.name,), self)]
        while stack:
            path, node = stack.pop()
            yield path, node
            for child in reversed(node.children):
                stack.append((path + (child.name,), child))

    def node_count(self) -> int:
        return sum(1 for _ in self.walk())

    def rename(self, new_name: str) -> "CommandNode":
        """
        Return a copy of this node under a different name.

        Children are shared with the original. Used to register a subtree
        under an alias.
        """
        return self.model_copy(update={"name": new_name})


class LiteralNode(CommandNode):
    """Node matched by an exact keyword."""

    kind: Literal["literal"] = "literal"


class ArgumentNode(CommandNode):
    """Node that captures a value of a declared argument type."""

    kind: Literal["argument"] = "argument"
    argument_type: ArgumentTypeSpec


CommandNode.model_rebuild()
LiteralNode.model_rebuild()
ArgumentNode.model_rebuild()
