"""
Converter configuration: notation conventions (indent unit, fold/unfold
operators, comment marker, quote char) and output layout.

Loaded from YAML on disk, or from the packaged 'cirru_sexpr.assets'.
"""

from __future__ import annotations

import logging
import yaml
from dataclasses import dataclass, fields, asdict
from importlib.resources import files as pkg_files
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "default_config.yaml"

_DELIMITERS = set(" \t()")


@dataclass(frozen=True)
class ConverterConfig:
    indent_unit: int = 2
    fold_operator: str = "$"
    unfold_operator: Optional[str] = ","
    comment_marker: Optional[str] = ";;"
    quote_char: str = '"'
    separator: str = "\n"

    def __post_init__(self):
        if not isinstance(self.indent_unit, int) or isinstance(self.indent_unit, bool) or self.indent_unit < 1:
            raise ValueError(f"indent_unit must be a positive integer, got {self.indent_unit!r}")
        if len(self.quote_char) != 1 or self.quote_char in _DELIMITERS or self.quote_char == "\\":
            raise ValueError(f"quote_char must be a single non-delimiter character, got {self.quote_char!r}")
        _check_operator("fold_operator", self.fold_operator, self.quote_char)
        if self.unfold_operator is not None:
            _check_operator("unfold_operator", self.unfold_operator, self.quote_char)
            if self.unfold_operator == self.fold_operator:
                raise ValueError("fold_operator and unfold_operator must differ")
        if self.comment_marker is not None and not self.comment_marker.strip():
            raise ValueError("comment_marker must not be blank")

    @classmethod
    def from_dict(cls, meta: Optional[Dict[str, Any]]) -> "ConverterConfig":
        meta = dict(meta or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(meta) - known)
        if unknown:
            raise ValueError(f"Unknown converter config key(s): {', '.join(unknown)}")

        kwargs: Dict[str, Any] = {}
        for name, value in meta.items():
            # nullable operators may be disabled explicitly; the rest fall back to defaults
            if value is None and name not in {"unfold_operator", "comment_marker"}:
                logger.debug(f"Config key '{name}' is null, keeping default")
                continue
            if name == "indent_unit":
                kwargs[name] = int(value)
            elif value is None:
                kwargs[name] = None
            else:
                kwargs[name] = str(value)
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ConverterConfig":
        with open(path, "r", encoding="utf-8") as f:
            y = yaml.safe_load(f)
        if y is not None and not isinstance(y, dict):
            raise ValueError(f"Config file must hold a mapping: {path}")
        return cls.from_dict(y)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _check_operator(name: str, value: str, quote_char: str) -> None:
    if not value or any(ch in _DELIMITERS or ch == quote_char for ch in value):
        raise ValueError(f"{name} must be a non-empty token without spaces, parens or quotes, got {value!r}")


def _load_packaged_yaml(name: str) -> Dict[str, Any]:
    cand = pkg_files("cirru_sexpr.assets") / name
    if not cand.is_file():
        raise FileNotFoundError(f"Config not found under cirru_sexpr.assets/{name}")
    with cand.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_config(path: str | Path | None = None) -> ConverterConfig:
    """Load a config from disk, or the packaged defaults when no path is given."""
    if path is None:
        return ConverterConfig.from_dict(_load_packaged_yaml(DEFAULT_CONFIG_NAME))
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    logger.debug(f"Loading converter config from {p}")
    return ConverterConfig.from_yaml(p)
