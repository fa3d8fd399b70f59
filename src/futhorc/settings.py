"""
Editor settings and TOML configuration.

Two toggles drive the engine:
- mark_separators: show spaces as the runic separator ᛫
- pronunciation: track words as they are typed and hand completed words
  to the word converter (on unless switched off)

The config file is looked up as futhorc.toml in the working directory:

    [settings]
    mark_separators = false
    pronunciation = true

    [lexicon]
    paths = ["data/*.tsv"]
    builtin = true

Usage:
    from futhorc.settings import Settings, load_config

    settings = Settings.from_config("futhorc.toml")
"""

from __future__ import annotations

import glob
import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "futhorc.toml"


@dataclass(slots=True)
class Settings:
    mark_separators: bool = False
    pronunciation: bool = True

    @classmethod
    def from_mapping(cls, data: dict[str, Any] | None) -> Settings:
        """Build settings from a [settings] table; missing keys keep defaults."""
        if not data:
            return cls()
        return cls(
            mark_separators=bool(data.get("mark_separators", False)),
            pronunciation=bool(data.get("pronunciation", True)),
        )

    @classmethod
    def from_config(cls, config_path: str | Path = DEFAULT_CONFIG) -> Settings:
        cfg = load_config(config_path)
        return cls.from_mapping(cfg.get("settings"))

    def summary(self) -> str:
        lines = ["Settings"]
        lines.append(f"  Mark separators: {'on' if self.mark_separators else 'off'}")
        lines.append(f"  Pronunciation:   {'on' if self.pronunciation else 'off'}")
        return "\n".join(lines)


def find_default_config() -> Path | None:
    """Look for futhorc.toml in the working directory."""
    candidate = Path(DEFAULT_CONFIG)
    if candidate.exists():
        return candidate
    return None


def load_config(config_path: str | Path) -> dict[str, Any]:
    """Read a TOML config file."""
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")

    with config_path.open("rb") as f:
        cfg = tomllib.load(f)
    logger.debug("loaded config %s (%s)", config_path, ", ".join(cfg) or "empty")
    return cfg


def resolve_config_paths(raw_paths: list[str], base_dir: Path) -> list[Path]:
    """Resolve config paths relative to base_dir, expanding globs."""
    result = []
    for p in raw_paths:
        full = base_dir / p if not Path(p).is_absolute() else Path(p)
        full_str = str(full)
        if "*" in full_str or "?" in full_str:
            result.extend(Path(m) for m in sorted(glob.glob(full_str)))
        else:
            result.append(full)
    return result
