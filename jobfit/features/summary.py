from __future__ import annotations

from collections.abc import Sequence

from jobfit.core.scoring import get_scoring_float, get_scoring_int
from jobfit.schemas.analysis import (
    ATSAnalysis,
    ExecutiveSummary,
    GapActionCard,
    MatchLabel,
    RoleFocusRisk,
    SkillFit,
)

STRETCH_MUST_HAVE_RATIO = 0.3
STRETCH_ATS_SCORE = 40
STRETCH_HIGH_MISSING_GAPS = 3
GOOD_FIT_MUST_HAVE_RATIO = 0.7
GOOD_FIT_ATS_SCORE = 60
GOOD_FIT_MAX_MISSING_GAPS = 2
ATS_LOW_BELOW = 60
ATS_HIGH_FROM = 80
ATS_TODO_BELOW = 70
MAX_BULLETS = 3

_RELEVANCE_ORDER = {"high": 0, "medium": 1, "low": 2}
_ACTION_TEXT = {
    "rephrase": "rephrase",
    "evidence": "add evidence",
    "learn": "learn",
    "ignore": "ignore",
}
_PADDING_BULLETS: dict[MatchLabel, str] = {
    "good fit": "Profile aligns well with the job requirements",
    "partial fit": "A few profile adjustments could improve the fit",
    "stretch role": "Significant profile adjustments are needed",
}


def _high_missing(gaps: Sequence[GapActionCard]) -> list[GapActionCard]:
    return [gap for gap in gaps if gap.status == "missing" and gap.relevance == "high"]


def classify_match(
    must_have_ratio: float,
    gaps: Sequence[GapActionCard],
    role_focus: RoleFocusRisk,
    ats: ATSAnalysis,
) -> MatchLabel:
    missing_count = sum(1 for gap in gaps if gap.status == "missing")
    high_missing_count = len(_high_missing(gaps))

    if (
        must_have_ratio < get_scoring_float("summary.stretch.must_have_ratio_below", STRETCH_MUST_HAVE_RATIO)
        or ats.score < get_scoring_int("summary.stretch.ats_below", STRETCH_ATS_SCORE)
        or role_focus.risk == "high"
        or high_missing_count >= get_scoring_int("summary.stretch.high_missing_gaps", STRETCH_HIGH_MISSING_GAPS)
    ):
        return "stretch role"

    if (
        must_have_ratio >= get_scoring_float("summary.good_fit.must_have_ratio_from", GOOD_FIT_MUST_HAVE_RATIO)
        and ats.score >= get_scoring_int("summary.good_fit.ats_from", GOOD_FIT_ATS_SCORE)
        and role_focus.risk in ("low", "medium")
        and missing_count <= get_scoring_int("summary.good_fit.max_missing_gaps", GOOD_FIT_MAX_MISSING_GAPS)
    ):
        return "good fit"

    return "partial fit"


def _coverage_bullet(label: MatchLabel, met: int, total: int) -> str:
    if label == "good fit":
        return f"Good fit: {met} of {total} must-have requirements met"
    if label == "partial fit":
        return f"Partial fit: {met} of {total} must-have requirements met, some gaps remain"
    return f"Stretch role: {met} of {total} must-have requirements met, several important gaps"


def _notable_bullet(role_focus: RoleFocusRisk, ats: ATSAnalysis) -> str | None:
    if role_focus.risk == "high":
        return f"Role focus risk: {role_focus.risk}"
    if ats.score < get_scoring_int("summary.ats_notable.low_below", ATS_LOW_BELOW):
        return f"ATS score: {ats.score}/100 (optimization recommended)"
    if ats.score >= get_scoring_int("summary.ats_notable.high_from", ATS_HIGH_FROM):
        return f"ATS score: {ats.score}/100 (very good)"
    return None


def _focus_bullet(gaps: Sequence[GapActionCard], role_focus: RoleFocusRisk, ats: ATSAnalysis) -> str | None:
    key_gaps = [gap.requirement for gap in _high_missing(gaps)[:3]]
    if key_gaps:
        text = ", ".join(key_gaps[:2])
        if len(key_gaps) > 2:
            text += " and more"
        return f"Key gaps: {text}"
    if role_focus.risk != "low" and role_focus.recommendations:
        return f"Recommendation: {role_focus.recommendations[0]}"
    if ats.todos and ats.score < get_scoring_int("summary.ats_todo_below", ATS_TODO_BELOW):
        return f"ATS optimization: {ats.todos[0]}"
    return None


def build_executive_summary(
    skill_fit: SkillFit,
    gaps: Sequence[GapActionCard],
    role_focus: RoleFocusRisk,
    ats: ATSAnalysis,
) -> ExecutiveSummary:
    total = len(skill_fit.must_have)
    met = sum(1 for match in skill_fit.must_have if match.status == "met")
    ratio = met / total if total else 0.0

    label = classify_match(ratio, gaps, role_focus, ats)
    bullets = [_coverage_bullet(label, met, total)]
    for bullet in (_notable_bullet(role_focus, ats), _focus_bullet(gaps, role_focus, ats)):
        if bullet:
            bullets.append(bullet)
    if len(bullets) < 2:
        bullets.append(_PADDING_BULLETS[label])

    return ExecutiveSummary(match_label=label, bullets=bullets[:MAX_BULLETS])


def build_next_steps(
    ats_todos: Sequence[str],
    gaps: Sequence[GapActionCard],
    role_focus_recommendations: Sequence[str],
) -> list[str]:
    """Role-focus fixes first, then ATS todos, then gaps from high to low relevance."""
    steps = [f"Role focus: {item}" for item in role_focus_recommendations]
    steps.extend(f"ATS: {todo}" for todo in ats_todos)
    for gap in sorted(gaps, key=lambda card: _RELEVANCE_ORDER[card.relevance]):
        steps.append(f"Gap: {gap.requirement} - {_ACTION_TEXT[gap.recommended_action]}")
    return steps
