"""
Parser configuration for cmdtree.

This module provides the settings that shape how command tree sources are
parsed: the nesting depth limit, the namespace assumed for bare extension type
names, and the resolver plugins to load.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from dataclasses import fields as dataclass_fields
from pathlib import Path
from typing import Any

DEFAULT_MAX_DEPTH = 256
DEFAULT_NAMESPACE = "minecraft"


@dataclass
class ParserConfig:
    """Configuration for command tree parsing.

    Can be created from dict, YAML, or Path with partial overrides.
    Only specified values override defaults.

    Examples:
        # All defaults
        config = ParserConfig()

        # Partial override from dict
        config = ParserConfig.from_dict({"max_depth": 64})

        # From YAML file
        config = ParserConfig.from_yaml("cmdtree.yaml")

        # Require every extension type to be written as namespace:name
        config = ParserConfig(default_namespace=None)
    """

    # Deepest allowed node nesting; None disables the limit
    max_depth: int | None = DEFAULT_MAX_DEPTH

    # Namespace assumed for extension type names written without a colon
    default_namespace: str | None = DEFAULT_NAMESPACE

    # Resolver plugins as "package.module:ClassName" import paths
    resolvers: list[str] = field(default_factory=list)

    def __post_init__(self):
        if self.max_depth is not None and self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> ParserConfig:
        """Create from dict, only overriding specified values.

        Args:
            config: Dictionary with partial overrides. Only keys matching
                   dataclass fields will be used.

        Returns:
            ParserConfig instance with specified overrides
        """
        valid_fields = {f.name for f in dataclass_fields(cls)}
        filtered = {k: v for k, v in config.items() if k in valid_fields}
        if "resolvers" in filtered:
            filtered["resolvers"] = list(filtered["resolvers"] or [])
        return cls(**filtered)

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> ParserConfig:
        """Create from YAML file with partial overrides.

        Args:
            yaml_path: Path to YAML file containing configuration

        Returns:
            ParserConfig instance with YAML overrides

        Example YAML:
            max_depth: 64
            default_namespace: null
            resolvers:
              - cmdtree.resolvers.minecraft:MinecraftArgumentTypeResolver
        """
        import yaml

        path = Path(yaml_path)
        with path.open() as f:
            config = yaml.safe_load(f) or {}

        return cls.from_dict(config)
