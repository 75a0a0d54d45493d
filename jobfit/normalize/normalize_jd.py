from __future__ import annotations

import logging
import re

from jobfit.schemas.analysis import JobRequirements

from .limits import cap_job_text
from .tokenize import split_words
from .utils import parse_bullet_points

logger = logging.getLogger(__name__)

_MUST_HAVE_HEADER_RE = re.compile(
    r"^(?:anforderungen|must-have|must have|erforderlich|wir erwarten|voraussetzungen"
    r"|requirements|required|we expect)",
    re.IGNORECASE,
)
_NICE_TO_HAVE_HEADER_RE = re.compile(
    r"^(?:nice-to-have|nice to have|wünschenswert|wunschkriterien|preferred|bonus|zusätzlich)",
    re.IGNORECASE,
)
_RESPONSIBILITIES_HEADER_RE = re.compile(
    r"^(?:aufgaben|verantwortlichkeiten|responsibilities|tätigkeiten|beschreibung)",
    re.IGNORECASE,
)
_SECTION_PATTERNS = (
    ("must_have", _MUST_HAVE_HEADER_RE),
    ("nice_to_have", _NICE_TO_HAVE_HEADER_RE),
    ("responsibilities", _RESPONSIBILITIES_HEADER_RE),
)

_FALLBACK_LINE_COUNT = 15
_FALLBACK_MAX_RESULTS = 30
_FALLBACK_TRIGRAM_LIMIT = 20
_FALLBACK_MIN_LINE_LENGTH = 10
_HEADER_MAX_LENGTH = 30
_WHOLE_LINE_MIN_LENGTH = 20
_WHOLE_LINE_MAX_LENGTH = 200
_LIST_START_RE = re.compile(r"^[-*•\d]")


def detect_section(line: str) -> str | None:
    normalized = line.strip().lower()
    for section, pattern in _SECTION_PATTERNS:
        if pattern.match(normalized):
            return section
    return None


def extract_fallback_requirements(text: str) -> list[str]:
    """Phrase candidates from the top of an unstructured posting."""
    found: dict[str, None] = {}

    for raw_line in text.split("\n")[:_FALLBACK_LINE_COUNT]:
        line = raw_line.strip()
        if len(line) < _FALLBACK_MIN_LINE_LENGTH:
            continue
        # Short all-caps lines are headings.
        if len(line) < _HEADER_MAX_LENGTH and line == line.upper():
            continue

        words = split_words(line)
        for first, second in zip(words, words[1:]):
            phrase = f"{first} {second}"
            if len(phrase) > 5:
                found.setdefault(phrase, None)
        if len(words) >= 3 and len(found) < _FALLBACK_TRIGRAM_LIMIT:
            for first, second, third in zip(words, words[1:], words[2:]):
                phrase = f"{first} {second} {third}"
                if len(phrase) > 8:
                    found.setdefault(phrase, None)

        if _WHOLE_LINE_MIN_LENGTH <= len(line) < _WHOLE_LINE_MAX_LENGTH and not _LIST_START_RE.match(line):
            found.setdefault(line, None)

    return list(found)[:_FALLBACK_MAX_RESULTS]


def parse_job_requirements(job_text: str | None) -> JobRequirements:
    if not job_text or not job_text.strip():
        return JobRequirements()

    job_text = cap_job_text(job_text)
    lines = job_text.split("\n")
    sections: dict[str, list[str]] = {"must_have": [], "nice_to_have": [], "responsibilities": []}

    current: str | None = None
    start = 0
    found_section = False
    for index, line in enumerate(lines):
        section = detect_section(line)
        if section is None:
            continue
        if current is not None:
            sections[current].extend(parse_bullet_points("\n".join(lines[start:index])))
        current = section
        start = index + 1
        found_section = True

    if current is not None:
        sections[current].extend(parse_bullet_points("\n".join(lines[start:])))

    if not found_section:
        sections["must_have"] = extract_fallback_requirements(job_text)
        logger.debug("job_requirements_fallback extracted=%s", len(sections["must_have"]))

    return JobRequirements(**sections)
