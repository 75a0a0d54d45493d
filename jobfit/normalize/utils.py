from __future__ import annotations

import re

_BULLET_CHARS = "•◦▪▫●○■□◆◇▶►-–—*·"
_BULLET_PATTERN = re.compile(rf"^\s*(?:[{re.escape(_BULLET_CHARS)}]|(?:\d+[\.\)]))\s+")
_MIN_INDENT = 2


def enumerate_lines(text: str) -> list[tuple[int, str]]:
    return [(index + 1, line) for index, line in enumerate(text.splitlines())]


def is_bullet_like(line: str) -> bool:
    return bool(_BULLET_PATTERN.match(line))


def strip_bullet_prefix(line: str) -> str:
    return _BULLET_PATTERN.sub("", line).strip()


def is_indented(line: str) -> bool:
    stripped = line.lstrip()
    return bool(stripped) and len(line) - len(stripped) >= _MIN_INDENT


def parse_bullet_points(text: str) -> list[str]:
    """Return the cleaned text of every bullet, numbered or indented line."""
    items: list[str] = []
    for _, raw_line in enumerate_lines(text):
        if not raw_line.strip():
            continue
        if is_bullet_like(raw_line):
            cleaned = strip_bullet_prefix(raw_line)
        elif is_indented(raw_line):
            cleaned = raw_line.strip()
        else:
            continue
        if cleaned:
            items.append(cleaned)
    return items
