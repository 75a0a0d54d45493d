from __future__ import annotations

import re

from jobfit.schemas.analysis import CandidateSignals
from jobfit.schemas.profile import CandidateProfile

from .tokenize import tokenize_many, tokenize_text

LEADERSHIP_KEYWORDS = frozenset(
    {
        # English
        "lead", "leader", "leading", "leadership", "manage", "manager", "management",
        "direct", "director", "directing", "head", "chief", "senior", "principal",
        "architect", "architecting", "strategic", "strategy", "strategist",
        "executive", "exec", "vp", "vice president", "c-level", "cto", "cfo", "ceo",
        "team lead", "tech lead", "engineering lead", "product lead",
        "mentor", "mentoring", "coach", "coaching", "supervise", "supervisor",
        "oversee", "overseeing", "responsible", "responsibility", "accountable",
        "decision", "decisions", "decision-making", "stakeholder", "stakeholders",
        # German
        "führen", "führung", "führend", "leiten", "leitung", "leitend",
        "direktor", "direktorin", "geschäftsführer", "geschäftsführerin",
        "abteilungsleiter", "abteilungsleiterin", "teamleiter", "teamleiterin",
        "projektleiter", "projektleiterin", "verantwortlich", "verantwortung",
        "verantwortlichkeiten", "strategisch", "strategie",
        "entscheidung", "entscheidungen", "entscheidungsfindung", "stakeholdern",
    }
)

EXPERIENCE_INDICATORS = frozenset(
    {
        "years", "jahr", "jahre", "jahren", "experience", "erfahrung",
        "experienced", "erfahren", "expert", "expertise", "expertin",
        "veteran", "veteranin", "seasoned",
    }
)

SENIORITY_KEYWORDS = LEADERSHIP_KEYWORDS | EXPERIENCE_INDICATORS

_KEYWORD_PATTERNS = tuple(
    (keyword, re.compile(rf"\b{re.escape(keyword)}\b", re.IGNORECASE))
    for keyword in sorted(SENIORITY_KEYWORDS)
)
_YEARS_RE = re.compile(
    r"\b(\d+)\+?\s*(?:years?|jahr|jahre|jahren)\s*(?:of\s*)?(?:experience|erfahrung)?",
    re.IGNORECASE,
)
_ROLE_PATTERNS = (
    re.compile(r"\b(?:lead|senior|principal|chief|head|director|manager|vp|executive)\s+\w+", re.IGNORECASE),
    re.compile(r"\b\w+\s+(?:lead|manager|director|architect|executive)\b", re.IGNORECASE),
)
_ROLE_MIN_LENGTH = 3
_ROLE_MAX_LENGTH = 50


def years_signal(years: str | int) -> str:
    return f"{years} years experience"


def extract_seniority_signals(text: str) -> list[str]:
    """Leadership keywords, "N years experience" mentions and short leadership role phrases."""
    if not text or not text.strip():
        return []

    signals: dict[str, None] = {}
    for keyword, pattern in _KEYWORD_PATTERNS:
        if pattern.search(text):
            signals.setdefault(keyword, None)

    for match in _YEARS_RE.finditer(text):
        signals.setdefault(years_signal(match.group(1)), None)

    for pattern in _ROLE_PATTERNS:
        for match in pattern.finditer(text):
            role = match.group(0).strip()
            if _ROLE_MIN_LENGTH < len(role) < _ROLE_MAX_LENGTH:
                signals.setdefault(role.lower(), None)

    return list(signals)


def extract_candidate_signals(profile: CandidateProfile | None) -> CandidateSignals:
    """Token sets and seniority signals of an already size-capped profile."""
    if profile is None:
        return CandidateSignals()

    skills_tokens = frozenset(tokenize_text(profile.skills))
    experience_tokens = tokenize_many(
        [experience.role for experience in profile.experiences]
        + [experience.description for experience in profile.experiences]
        + [profile.profile_summary, profile.projects]
    )
    seniority = extract_seniority_signals(" ".join(profile.text_fields()))

    return CandidateSignals(
        skills_tokens=skills_tokens,
        experience_tokens=experience_tokens,
        seniority_signals=frozenset(seniority),
    )
