"""Lexer options and TOML config loading."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

CONFIG_NAME = "tokentree.toml"


@dataclass(frozen=True, slots=True)
class LexerOptions:
    """Tunable lexer limits."""

    max_depth: int = 256  # open parens, strings and splices at once
    filename: str = "input.an"

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")


def load_config(config_path: Path | None, directory: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else directory / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(config: dict[str, Any], **overrides: Any) -> LexerOptions:
    """Merge the ``[lexer]`` table and keyword overrides into LexerOptions.

    Precedence: defaults < config file < overrides. Values of the wrong type
    in the config file are ignored.
    """
    values: dict[str, Any] = {}

    cfg_lexer = config.get("lexer")
    if isinstance(cfg_lexer, dict):
        max_depth = cfg_lexer.get("max_depth")
        # bool is an int subclass; reject it explicitly
        if isinstance(max_depth, int) and not isinstance(max_depth, bool):
            values["max_depth"] = max_depth
        filename = cfg_lexer.get("filename")
        if isinstance(filename, str):
            values["filename"] = filename

    values.update({k: v for k, v in overrides.items() if v is not None})
    return LexerOptions(**values)
