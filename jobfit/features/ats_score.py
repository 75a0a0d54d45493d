from __future__ import annotations

import re
from collections.abc import Sequence

from jobfit.core.errors import warn_performance
from jobfit.core.scoring import get_scoring_float, get_scoring_int, round_half_up
from jobfit.normalize.tokenize import tokenize_many, tokenize_text
from jobfit.schemas.analysis import ATSAnalysis, ATSScoreBreakdown
from jobfit.schemas.profile import CandidateProfile, ExperienceItem

STRUCTURE_WEIGHT = 0.25
COVERAGE_WEIGHT = 0.30
PLACEMENT_WEIGHT = 0.25
CONTEXT_WEIGHT = 0.20
TODO_THRESHOLD = 70
MAX_MUST_HAVE = 500
MUST_HAVE_WARNING_THRESHOLD = 200

ACTION_VERBS = (
    "developed", "implemented", "led", "managed", "created", "built", "designed",
    "architected", "optimized", "improved", "increased", "reduced", "delivered",
    "achieved", "established", "launched", "maintained", "supported", "collaborated",
    "coordinated", "executed", "performed", "analyzed", "evaluated", "resolved",
    "enhanced", "streamlined", "transformed", "initiated", "spearheaded", "orchestrated",
    "facilitated", "supervised", "mentored", "trained", "guided", "influenced",
    "negotiated", "presented", "communicated", "documented", "tested", "debugged",
    "deployed", "monitored", "troubleshot", "upgraded", "migrated", "integrated",
)
OUTCOME_INDICATORS = (
    "improved", "increased", "reduced", "optimized", "enhanced", "decreased",
    "boosted", "accelerated", "expanded", "scaled", "grew", "achieved",
)
COMMON_TECH_TERMS = (
    "typescript", "javascript", "react", "node", "python", "java", "sql",
    "database", "api", "rest", "aws", "docker", "kubernetes", "git",
    "testing", "agile", "scrum", "devops", "frontend", "backend",
)
# Compared in normalized form, the same way profile text is tokenized.
_COMMON_TECH_TOKENS = tokenize_many(COMMON_TECH_TERMS)

_BULLET_RE = re.compile(r"^\s*[-•*]\s|^\s*\d+[.)]\s", re.MULTILINE)
_ACTION_VERB_RE = re.compile(rf"\b(?:{'|'.join(map(re.escape, ACTION_VERBS))})\w*\b", re.IGNORECASE)
_OUTCOME_RE = re.compile(rf"\b(?:{'|'.join(map(re.escape, OUTCOME_INDICATORS))})\b", re.IGNORECASE)
_NUMBER_RE = re.compile(r"\d")

_MISSING_PROFILE_TODO = "Profile data is missing. Please add profile information."
_WELL_OPTIMIZED_TODO = "Profile is well-optimized for ATS. Continue maintaining current format and content quality."


def _has_value(value: str | None) -> bool:
    return bool(value and value.strip())


def _limit_must_have(must_have: Sequence[str] | None) -> Sequence[str] | None:
    if not must_have:
        return must_have
    max_count = get_scoring_int("ats.must_have.max_count", MAX_MUST_HAVE)
    warning_threshold = get_scoring_int("ats.must_have.warning_threshold", MUST_HAVE_WARNING_THRESHOLD)
    if len(must_have) > max_count:
        warn_performance(f"compute_ats_score_requirements_truncated count={len(must_have)} limit={max_count}")
        return must_have[:max_count]
    if len(must_have) > warning_threshold:
        warn_performance(f"compute_ats_score_large_requirements count={len(must_have)}")
    return must_have


def calculate_structure_score(experiences: Sequence[ExperienceItem]) -> int:
    if not experiences:
        return 0

    fields_weight = get_scoring_float("ats.structure.fields_weight", 40)
    bullets_weight = get_scoring_float("ats.structure.bullets_weight", 60)

    present = sum(
        _has_value(value)
        for item in experiences
        for value in (item.employer, item.role, item.start_date, item.end_date)
    )
    fields_score = present / (len(experiences) * 4) * fields_weight

    bulleted = sum(1 for item in experiences if item.description and _BULLET_RE.search(item.description))
    bullets_score = bulleted / len(experiences) * bullets_weight

    return round_half_up(fields_score + bullets_score)


def _terms_sought(must_have: Sequence[str] | None) -> frozenset[str]:
    if must_have:
        return tokenize_many(must_have)
    return _COMMON_TECH_TOKENS


def calculate_coverage_score(profile: CandidateProfile, must_have: Sequence[str] | None = None) -> int:
    all_text = profile.full_text()
    if not all_text.strip():
        return 0

    profile_tokens = frozenset(tokenize_text(all_text))
    if must_have:
        sought = tokenize_many(must_have)
        if not sought:
            return 0
        return round_half_up(len(sought & profile_tokens) / len(sought) * 100)

    expected = get_scoring_int("ats.coverage.expected_common_terms", 5)
    matched = len(_COMMON_TECH_TOKENS & profile_tokens)
    return min(100, round_half_up(matched / expected * 100))


def calculate_placement_score(profile: CandidateProfile, must_have: Sequence[str] | None = None) -> int:
    """Share of sought terms that appear inside experience entries, not only in the skills list."""
    experiences = profile.experiences
    if not experiences:
        return 0

    sought = _terms_sought(must_have)
    if not sought:
        return 0

    found: set[str] = set()
    entries_with_terms = 0
    for item in experiences:
        hits = sought & frozenset(tokenize_text(item.text))
        if hits:
            found.update(hits)
            entries_with_terms += 1

    base_score = len(found) / len(sought) * 100
    spread_bonus = get_scoring_float("ats.placement.spread_bonus", 0.2)
    multiplier = min(1 + spread_bonus, 1 + entries_with_terms / len(experiences) * spread_bonus)
    return min(100, round_half_up(base_score * multiplier))


def calculate_context_score(experiences: Sequence[ExperienceItem]) -> int:
    described = [item.description for item in experiences if _has_value(item.description)]
    if not described:
        return 0

    verb_weight = get_scoring_float("ats.context.action_verb_weight", 50)
    outcome_weight = get_scoring_float("ats.context.outcome_weight", 50)

    with_verbs = sum(1 for text in described if _ACTION_VERB_RE.search(text))
    with_outcomes = sum(1 for text in described if _NUMBER_RE.search(text) or _OUTCOME_RE.search(text))

    return round_half_up(with_verbs / len(described) * verb_weight + with_outcomes / len(described) * outcome_weight)


def calculate_overall_score(breakdown: ATSScoreBreakdown) -> int:
    weighted = (
        breakdown.structure * get_scoring_float("ats.weights.structure", STRUCTURE_WEIGHT)
        + breakdown.coverage * get_scoring_float("ats.weights.coverage", COVERAGE_WEIGHT)
        + breakdown.placement * get_scoring_float("ats.weights.placement", PLACEMENT_WEIGHT)
        + breakdown.context * get_scoring_float("ats.weights.context", CONTEXT_WEIGHT)
    )
    return max(0, min(100, round_half_up(weighted)))


def generate_ats_todos(breakdown: ATSScoreBreakdown) -> list[str]:
    threshold = get_scoring_int("ats.todos.threshold", TODO_THRESHOLD)
    fields_below = get_scoring_int("ats.todos.structure_fields_below", 40)
    bullets_below = get_scoring_int("ats.todos.structure_bullets_below", 60)
    verbs_below = get_scoring_int("ats.todos.context_verbs_below", 50)

    categories = sorted(
        (
            ("structure", breakdown.structure),
            ("coverage", breakdown.coverage),
            ("placement", breakdown.placement),
            ("context", breakdown.context),
        ),
        key=lambda item: item[1],
    )

    todos: list[str] = []
    for category, score in categories:
        if score >= threshold:
            continue
        if category == "structure":
            if score < fields_below:
                todos.append("Add missing employer, role, and date fields to all experience entries")
            if score < bullets_below:
                todos.append("Use bullet points (• or -) in experience descriptions for better ATS parsing")
        elif category == "coverage":
            todos.append("Include more relevant keywords in skills/experience sections")
        elif category == "placement":
            todos.append("Move key terms from skills section to experience descriptions for better ATS parsing")
        else:
            if score < verbs_below:
                todos.append("Add action verbs (e.g., 'developed', 'led', 'implemented') to experience descriptions")
            todos.append("Include quantifiable outcomes (numbers, percentages) in experience descriptions")

    if not todos:
        todos.append(_WELL_OPTIMIZED_TODO)
    return todos


def compute_ats_score(profile: CandidateProfile | None, must_have: Sequence[str] | None = None) -> ATSAnalysis:
    if profile is None:
        return ATSAnalysis(score=0, breakdown=ATSScoreBreakdown(), todos=[_MISSING_PROFILE_TODO])

    must_have = _limit_must_have(must_have)
    breakdown = ATSScoreBreakdown(
        structure=calculate_structure_score(profile.experiences),
        coverage=calculate_coverage_score(profile, must_have),
        placement=calculate_placement_score(profile, must_have),
        context=calculate_context_score(profile.experiences),
    )
    return ATSAnalysis(
        score=calculate_overall_score(breakdown),
        breakdown=breakdown,
        todos=generate_ats_todos(breakdown),
    )
