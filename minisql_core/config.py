"""MiniSQL Configuration - Parser settings.

Settings can be built directly, loaded from a YAML file, or read from
``MINISQL_*`` environment variables.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union

import yaml

logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for statement parsing."""

    require_semicolon: bool = False
    max_expression_depth: int = 200

    def __post_init__(self) -> None:
        if not isinstance(self.require_semicolon, bool):
            raise ValueError(f"require_semicolon must be a boolean, got {self.require_semicolon!r}")
        if isinstance(self.max_expression_depth, bool) or not isinstance(self.max_expression_depth, int):
            raise ValueError(f"max_expression_depth must be an integer, got {self.max_expression_depth!r}")
        if self.max_expression_depth < 1:
            raise ValueError(f"max_expression_depth must be positive, got {self.max_expression_depth}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Build configuration from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown parser config keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "ParserConfig":
        """Load configuration from YAML file."""
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Parser config in {path} must be a mapping")
        logger.debug(f"Loaded parser config from {path}")
        return cls.from_dict(data)

    @classmethod
    def from_env(cls) -> "ParserConfig":
        """Load configuration from environment variables."""
        return cls(
            require_semicolon=os.getenv("MINISQL_REQUIRE_SEMICOLON", "false").strip().lower() in _TRUE_VALUES,
            max_expression_depth=int(os.getenv("MINISQL_MAX_EXPRESSION_DEPTH", "200")),
        )


DEFAULT_CONFIG = ParserConfig()
