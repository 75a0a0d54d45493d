from __future__ import annotations

import logging

from jobfit.core.errors import warn_performance
from jobfit.core.scoring import get_scoring_float, get_scoring_int, round_half_up
from jobfit.normalize.normalize_profile import SENIORITY_KEYWORDS, extract_candidate_signals
from jobfit.normalize.tokenize import phrase_in_tokens, tokenize_many
from jobfit.schemas.analysis import CandidateSignals, JobRequirements, RiskLevel, RoleFocusRisk
from jobfit.schemas.profile import CandidateProfile

logger = logging.getLogger(__name__)

MEDIUM_UNRELATED_RATIO = 0.3
HIGH_UNRELATED_RATIO = 0.5
MEDIUM_MISMATCH_COUNT = 1
HIGH_MISMATCH_COUNT = 2
MAX_JOB_REQUIREMENTS = 500
JOB_REQUIREMENTS_WARNING_THRESHOLD = 200

NO_REQUIREMENTS_RECOMMENDATION = "No job requirements available. Role focus risk could not be assessed."
MISSING_PROFILE_RECOMMENDATION = "Profile data is missing. Please add profile information."


def _limit_requirements(requirements: JobRequirements) -> JobRequirements:
    total = len(requirements.must_have) + len(requirements.nice_to_have)
    max_count = get_scoring_int("role_focus.requirements.max_count", MAX_JOB_REQUIREMENTS)
    warning_threshold = get_scoring_int(
        "role_focus.requirements.warning_threshold", JOB_REQUIREMENTS_WARNING_THRESHOLD
    )
    if total > max_count:
        warn_performance(f"compute_role_focus_risk_requirements_truncated count={total} limit={max_count}")
        must_have = requirements.must_have[:max_count]
        nice_to_have = requirements.nice_to_have[: max(0, max_count - len(must_have))]
        return requirements.model_copy(update={"must_have": must_have, "nice_to_have": nice_to_have})
    if total > warning_threshold:
        warn_performance(f"compute_role_focus_risk_large_requirements count={total}")
    return requirements


def unrelated_token_ratio(signals: CandidateSignals, job_tokens: frozenset[str]) -> float:
    profile_tokens = signals.profile_tokens()
    if not profile_tokens:
        return 0.0
    return len(profile_tokens - job_tokens) / len(profile_tokens)


def detect_leadership_mismatch(signals: CandidateSignals, job_tokens: frozenset[str]) -> list[str]:
    """Seniority signals of the candidate that the posting never mentions.

    Any seniority keyword in the posting makes the whole set relevant.
    """
    if any(phrase_in_tokens(keyword, job_tokens) for keyword in SENIORITY_KEYWORDS):
        return []
    return sorted(signal for signal in signals.seniority_signals if not phrase_in_tokens(signal, job_tokens))


def classify_risk(unrelated_ratio: float, mismatch_count: int) -> RiskLevel:
    medium_ratio = get_scoring_float("role_focus.unrelated_ratio.medium", MEDIUM_UNRELATED_RATIO)
    high_ratio = get_scoring_float("role_focus.unrelated_ratio.high", HIGH_UNRELATED_RATIO)
    medium_count = get_scoring_int("role_focus.leadership_mismatch.medium", MEDIUM_MISMATCH_COUNT)
    high_count = get_scoring_int("role_focus.leadership_mismatch.high", HIGH_MISMATCH_COUNT)

    if unrelated_ratio > high_ratio or mismatch_count >= high_count:
        return "high"
    if unrelated_ratio >= medium_ratio or mismatch_count >= medium_count:
        return "medium"
    return "low"


def _risk_reasons(unrelated_ratio: float, mismatch_count: int) -> list[str]:
    medium_ratio = get_scoring_float("role_focus.unrelated_ratio.medium", MEDIUM_UNRELATED_RATIO)
    high_ratio = get_scoring_float("role_focus.unrelated_ratio.high", HIGH_UNRELATED_RATIO)

    reasons: list[str] = []
    if unrelated_ratio > medium_ratio:
        reasons.append(
            f"Profile contains many skills/experiences ({round_half_up(unrelated_ratio * 100)}%) "
            "that are not mentioned in the job requirements"
        )
    if mismatch_count == 1:
        reasons.append("Seniority/leadership terms appear in the profile but not in the job posting")
    elif mismatch_count > 1:
        reasons.append(
            f"Several seniority/leadership terms ({mismatch_count}) appear in the profile but not in the job posting"
        )
    if unrelated_ratio > high_ratio:
        reasons.append("Profile covers several domains outside the scope of this role")
    if not reasons and unrelated_ratio >= medium_ratio:
        reasons.append("Profile shows some deviation from the job requirements")
    return reasons


def _risk_recommendations(risk: RiskLevel, unrelated_ratio: float, mismatch_count: int) -> list[str]:
    medium_ratio = get_scoring_float("role_focus.unrelated_ratio.medium", MEDIUM_UNRELATED_RATIO)
    high_ratio = get_scoring_float("role_focus.unrelated_ratio.high", HIGH_UNRELATED_RATIO)

    if risk == "high":
        recommendations: list[str] = []
        if unrelated_ratio > high_ratio:
            recommendations.append("De-emphasize unrelated skills in the profile summary")
            recommendations.append("Move unrelated experience into an optional section")
        if mismatch_count > 0:
            recommendations.append("Mention seniority and leadership experience only where it is relevant to the role")
        recommendations.append("Focus the profile on the job requirements")
        return recommendations

    if risk == "medium":
        recommendations = []
        if unrelated_ratio >= medium_ratio:
            recommendations.append("Move less relevant skills/experience into an optional section")
        if mismatch_count > 0:
            recommendations.append("Highlight leadership experience only where it is relevant to the role")
        recommendations.append("Highlight only the relevant experience")
        return recommendations

    return ["Profile is well focused; keep aligning it with the job requirements"]


def compute_role_focus_risk(
    profile: CandidateProfile | None,
    requirements: JobRequirements,
    signals: CandidateSignals | None = None,
) -> RoleFocusRisk:
    if profile is None:
        return RoleFocusRisk(risk="low", reasons=[], recommendations=[MISSING_PROFILE_RECOMMENDATION])

    if requirements.is_empty:
        return RoleFocusRisk(risk="low", reasons=[], recommendations=[NO_REQUIREMENTS_RECOMMENDATION])

    requirements = _limit_requirements(requirements)
    if signals is None:
        signals = extract_candidate_signals(profile)

    job_tokens = tokenize_many([*requirements.must_have, *requirements.nice_to_have])
    unrelated_ratio = unrelated_token_ratio(signals, job_tokens)
    mismatched = detect_leadership_mismatch(signals, job_tokens)
    risk = classify_risk(unrelated_ratio, len(mismatched))

    logger.debug(
        "role_focus_assessed risk=%s unrelated_ratio=%.2f leadership_mismatch=%s",
        risk,
        unrelated_ratio,
        len(mismatched),
    )
    return RoleFocusRisk(
        risk=risk,
        reasons=_risk_reasons(unrelated_ratio, len(mismatched)),
        recommendations=_risk_recommendations(risk, unrelated_ratio, len(mismatched)),
    )
