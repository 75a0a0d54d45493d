from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from jobfit.core.errors import warn_performance
from jobfit.core.scoring import get_scoring_float, get_scoring_int, round_half_up
from jobfit.normalize.tokenize import phrase_in_tokens, tokenize_text
from jobfit.schemas.analysis import CandidateSignals, MatchStatus, Relevance, RequirementMatch
from jobfit.taxonomy import SynonymProvider, get_default_synonym_index

MET_THRESHOLD = 0.7
PARTIAL_THRESHOLD = 0.3
HIGH_RELEVANCE_ABOVE = 0.8
MEDIUM_RELEVANCE_FROM = 0.5
MAX_REQUIREMENTS = 1_000
REQUIREMENTS_WARNING_THRESHOLD = 500


@dataclass(frozen=True)
class _TierResult:
    status: MatchStatus
    similarity: float
    evidence: str


def _limit_requirements(requirements: Sequence[str], caller: str) -> Sequence[str]:
    max_count = get_scoring_int("matching.requirements.max_count", MAX_REQUIREMENTS)
    warning_threshold = get_scoring_int("matching.requirements.warning_threshold", REQUIREMENTS_WARNING_THRESHOLD)
    if len(requirements) > max_count:
        warn_performance(f"{caller}_requirements_truncated count={len(requirements)} limit={max_count}")
        return requirements[:max_count]
    if len(requirements) > warning_threshold:
        warn_performance(f"{caller}_large_requirements count={len(requirements)}")
    return requirements


def _exact_match(tokens: list[str], candidate_tokens: frozenset[str]) -> _TierResult | None:
    joined = " ".join(tokens)
    if joined in candidate_tokens:
        return _TierResult("met", 1.0, f"Found in skills/experience: {joined}")
    if all(token in candidate_tokens for token in tokens):
        return _TierResult("met", 1.0, f"Found all tokens: {', '.join(tokens)}")
    return None


def find_synonym_hits(
    tokens: list[str],
    candidate_tokens: frozenset[str],
    synonym_index: SynonymProvider,
) -> tuple[int, list[str]]:
    """Count requirement tokens covered directly or through an equivalent term.

    Each token counts at most once. Returns the count and the ``token → synonym``
    pairs that were only found through an equivalent.
    """
    matched = 0
    via_synonym: list[str] = []
    for token in tokens:
        if token in candidate_tokens:
            matched += 1
            continue
        for synonym in sorted(synonym_index.get_synonyms(token)):
            if synonym != token and phrase_in_tokens(synonym, candidate_tokens):
                matched += 1
                via_synonym.append(f"{token} → {synonym}")
                break
    return matched, via_synonym


def _synonym_match(
    tokens: list[str],
    candidate_tokens: frozenset[str],
    synonym_index: SynonymProvider,
    met_threshold: float,
) -> _TierResult | None:
    matched, via_synonym = find_synonym_hits(tokens, candidate_tokens, synonym_index)
    if not matched:
        return None
    similarity = matched / len(tokens)
    status: MatchStatus = "met" if similarity >= met_threshold else "partial"
    if via_synonym:
        evidence = f"Found via synonym: {', '.join(via_synonym)}"
    else:
        direct = [token for token in tokens if token in candidate_tokens]
        evidence = f"Found in skills/experience: {', '.join(direct)}"
    return _TierResult(status, similarity, evidence)


def _overlap_match(
    tokens: list[str],
    candidate_tokens: frozenset[str],
    met_threshold: float,
    partial_threshold: float,
) -> _TierResult:
    similarity = sum(1 for token in tokens if token in candidate_tokens) / len(tokens)
    status: MatchStatus
    if similarity >= met_threshold:
        status = "met"
    elif similarity >= partial_threshold:
        status = "partial"
    else:
        status = "missing"
    if similarity > 0:
        evidence = f"Partial match: {round_half_up(similarity * 100)}% token overlap"
    else:
        evidence = "No matching tokens found"
    return _TierResult(status, similarity, evidence)


def classify_relevance(similarity: float, exact_or_synonym: bool) -> Relevance:
    high_above = get_scoring_float("matching.relevance.high_above", HIGH_RELEVANCE_ABOVE)
    medium_from = get_scoring_float("matching.relevance.medium_from", MEDIUM_RELEVANCE_FROM)
    if exact_or_synonym or similarity > high_above:
        return "high"
    if similarity >= medium_from:
        return "medium"
    return "low"


def match_requirements(
    requirements: Sequence[str] | None,
    signals: CandidateSignals | None,
    synonym_index: SynonymProvider | None = None,
) -> list[RequirementMatch]:
    """Match every non-blank requirement against the candidate, preserving order.

    Tiers are tried in order: exact (all tokens present), synonym (at least one
    token present directly or through an equivalent term) and plain token overlap.
    """
    if not requirements:
        return []

    requirements = _limit_requirements(requirements, "match_requirements")

    if signals is None:
        return [
            RequirementMatch(
                requirement=requirement,
                status="missing",
                similarity=0.0,
                relevance="low",
                evidence="No candidate signals provided",
            )
            for requirement in requirements
            if requirement and requirement.strip()
        ]

    met_threshold = get_scoring_float("matching.similarity_thresholds.met", MET_THRESHOLD)
    partial_threshold = get_scoring_float("matching.similarity_thresholds.partial", PARTIAL_THRESHOLD)
    index = synonym_index or get_default_synonym_index()
    candidate_tokens = signals.all_tokens()

    results: list[RequirementMatch] = []
    for requirement in requirements:
        if not requirement or not requirement.strip():
            continue

        tokens = tokenize_text(requirement)
        if not tokens:
            results.append(
                RequirementMatch(
                    requirement=requirement,
                    status="missing",
                    similarity=0.0,
                    relevance="low",
                    evidence="Requirement contains no valid tokens after normalization",
                )
            )
            continue

        outcome = _exact_match(tokens, candidate_tokens) or _synonym_match(
            tokens, candidate_tokens, index, met_threshold
        )
        exact_or_synonym = outcome is not None
        if outcome is None:
            outcome = _overlap_match(tokens, candidate_tokens, met_threshold, partial_threshold)

        results.append(
            RequirementMatch(
                requirement=requirement,
                status=outcome.status,
                similarity=outcome.similarity,
                relevance=classify_relevance(outcome.similarity, exact_or_synonym),
                evidence=outcome.evidence,
            )
        )

    return results
