"""Configuration helpers for the link placement engine."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml


class ConfigError(ValueError):
    """Raised when a configuration file cannot be used."""


@dataclass(frozen=True)
class EngineConfig:
    """Typed wrapper around the engine configuration dictionary."""

    raw: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.raw.get(key, default)

    def length_bonus(self, words: int) -> float:
        bonuses = self.raw.get("length_bonus", {})
        return float(bonuses.get(words, bonuses.get(str(words), 0.0)))

    @property
    def min_paragraph_words(self) -> int:
        return int(self.raw.get("min_paragraph_words", 12))

    @property
    def min_anchor_chars(self) -> int:
        return int(self.raw.get("min_anchor_chars", 4))

    @property
    def min_link_spacing_words(self) -> int:
        return int(self.raw.get("min_link_spacing_words", 250))

    @property
    def max_links(self) -> int:
        return int(self.raw.get("max_links", 10))


DEFAULTS: Dict[str, Any] = {
    "min_paragraph_words": 12,
    "min_window_words": 3,
    "max_window_words": 7,
    "ratio_weight": 40.0,
    "overlap_weight": 8.0,
    "title_weight": 5.0,
    "length_bonus": {3: 2.0, 4: 8.0, 5: 10.0, 6: 8.0, 7: 3.0},
    "window_score_floor": 15.0,
    "fallback_word_score": 5.0,
    "fallback_min_score": 10.0,
    "fallback_max_words": 4,
    "fallback_min_words": 2,
    "min_link_spacing_words": 250,
    "max_links": 10,
    "max_display_score": 100.0,
    "min_anchor_chars": 4,
    "snippet_window": 60,
    "link_title_template": "Learn more about {anchor}",
}


def load_config(path: str | Path | None = None) -> EngineConfig:
    """Load configuration from YAML, merging with defaults."""

    data: Dict[str, Any] = copy.deepcopy(DEFAULTS)

    if path is not None and Path(path).exists():
        with Path(path).open("r", encoding="utf-8") as stream:
            user = yaml.safe_load(stream) or {}
        if not isinstance(user, dict):
            raise ConfigError(f"Engine config {path} must contain a mapping, got {type(user).__name__}")
        merge_into(data, user)

    return EngineConfig(data)


def merge_into(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Recursively merge override into base dict."""

    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_into(base[key], value)
        else:
            base[key] = value
