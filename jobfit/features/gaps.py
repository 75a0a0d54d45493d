from __future__ import annotations

from collections.abc import Sequence

from jobfit.matching.requirement_matcher import find_synonym_hits
from jobfit.normalize.tokenize import tokenize_text
from jobfit.schemas.analysis import (
    CandidateSignals,
    GapAction,
    GapActionCard,
    RequirementMatch,
    SuggestionType,
)
from jobfit.taxonomy import SynonymProvider, get_default_synonym_index


def recommend_action(
    match: RequirementMatch,
    candidate_tokens: frozenset[str],
    synonym_index: SynonymProvider,
) -> tuple[GapAction, SuggestionType | None]:
    if match.relevance == "low":
        return "ignore", None

    matched, via_synonym = find_synonym_hits(tokenize_text(match.requirement), candidate_tokens, synonym_index)

    if match.status == "partial":
        return "rephrase", "synonym_match" if via_synonym else "partial_match"
    # Missing, but related terms exist: the skill is probably there without proof.
    if matched:
        return "evidence", "synonym_match"
    return "learn", None


def identify_gaps(
    matches: Sequence[RequirementMatch] | None,
    signals: CandidateSignals | None,
    synonym_index: SynonymProvider | None = None,
) -> list[GapActionCard]:
    """Turn partial and missing matches into action cards; low-relevance ones are dropped."""
    if not matches or signals is None:
        return []

    index = synonym_index or get_default_synonym_index()
    candidate_tokens = signals.all_tokens()

    cards: list[GapActionCard] = []
    for match in matches:
        if match.status == "met":
            continue
        action, suggestion = recommend_action(match, candidate_tokens, index)
        if action == "ignore":
            continue
        cards.append(
            GapActionCard(
                requirement=match.requirement,
                relevance=match.relevance,
                status=match.status,
                recommended_action=action,
                suggestion_type=suggestion,
            )
        )
    return cards
