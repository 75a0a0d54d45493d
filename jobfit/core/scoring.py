from __future__ import annotations

import math
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

DEFAULT_SCORING_PATH = Path(__file__).resolve().with_name("scoring.yaml")
REQUIRED_SECTIONS = ("limits", "matching", "ats", "role_focus", "summary")


def load_scoring_config(path: Path) -> dict[str, Any]:
    """Parse a scoring policy file and check that every pipeline stage has a section."""
    if not path.exists():
        raise RuntimeError(f"Scoring config not found at '{path}'.")

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(f"Failed to read scoring config '{path}': {exc}") from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in scoring config '{path}': {exc}") from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(f"Invalid scoring config '{path}': expected a top-level mapping.")

    missing = [section for section in REQUIRED_SECTIONS if not isinstance(parsed.get(section), dict)]
    if missing:
        raise RuntimeError(f"Scoring config '{path}' is missing sections: {', '.join(missing)}")
    return parsed


@lru_cache(maxsize=1)
def get_scoring_config() -> dict[str, Any]:
    return load_scoring_config(DEFAULT_SCORING_PATH)


def get_scoring_value(path: str, default: Any = None) -> Any:
    """Get nested config value using dot path notation, e.g. 'ats.weights.coverage'."""
    if not path:
        return default

    current: Any = get_scoring_config()
    for key in path.split("."):
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current


def get_scoring_float(path: str, default: float) -> float:
    return float(get_scoring_value(path, default))


def get_scoring_int(path: str, default: int) -> int:
    return int(get_scoring_value(path, default))


def round_half_up(value: float) -> int:
    """Round halves up; the builtin ``round`` rounds halves to even."""
    return int(math.floor(value + 0.5))
