from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Executor

from jobfit.core.errors import InvalidInputError
from jobfit.features import (
    build_executive_summary,
    build_next_steps,
    compute_ats_score,
    compute_role_focus_risk,
    identify_gaps,
)
from jobfit.matching.requirement_matcher import match_requirements
from jobfit.normalize.limits import cap_job_text, cap_profile
from jobfit.normalize.normalize_jd import parse_job_requirements
from jobfit.normalize.normalize_profile import extract_candidate_signals
from jobfit.schemas.analysis import AnalysisResult, SkillFit
from jobfit.schemas.profile import CandidateProfile, ProfileRecord
from jobfit.taxonomy import SynonymProvider, get_default_synonym_index

from .analysis_cache import ResultCache, create_analysis_hash

logger = logging.getLogger(__name__)

UsageRecorder = Callable[[AnalysisResult, str], None]


def _resolve_profile(profile: CandidateProfile | ProfileRecord | None) -> CandidateProfile:
    if isinstance(profile, ProfileRecord):
        profile = profile.data
    if profile is None:
        raise InvalidInputError("Profile data is required")
    return profile


class MatchingEngine:
    """Runs the full matching pipeline and memoizes results by content hash.

    One engine is built per process. The synonym index is shared read-only and
    the result cache is the only mutable state. With an executor the usage
    recorder is submitted to it and never delays the caller; without one it
    runs inline.
    """

    def __init__(
        self,
        synonym_index: SynonymProvider | None = None,
        cache: ResultCache | None = None,
        usage_recorder: UsageRecorder | None = None,
        usage_executor: Executor | None = None,
    ) -> None:
        self.synonym_index = synonym_index or get_default_synonym_index()
        self.cache = cache if cache is not None else ResultCache()
        self.usage_recorder = usage_recorder
        self.usage_executor = usage_executor

    def run_analysis(
        self,
        profile: CandidateProfile | ProfileRecord | None,
        job_text: str | None,
    ) -> AnalysisResult:
        candidate = _resolve_profile(profile)
        if not job_text or not job_text.strip():
            raise InvalidInputError("Job posting text is required")

        cache_key = create_analysis_hash(candidate, job_text)
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("analysis_cache_hit key=%s", cache_key[:12])
            return cached
        logger.debug("analysis_cache_miss key=%s", cache_key[:12])

        result = self._analyze(cap_profile(candidate), cap_job_text(job_text))
        self.cache.put(cache_key, result)
        self._record_usage(result, job_text)
        return result

    def _analyze(self, profile: CandidateProfile, job_text: str) -> AnalysisResult:
        requirements = parse_job_requirements(job_text)
        signals = extract_candidate_signals(profile)

        must_have = match_requirements(requirements.must_have, signals, self.synonym_index)
        nice_to_have = match_requirements(requirements.nice_to_have, signals, self.synonym_index)
        skill_fit = SkillFit(must_have=must_have, nice_to_have=nice_to_have)

        ats = compute_ats_score(profile, requirements.must_have)
        role_focus = compute_role_focus_risk(profile, requirements, signals)
        gaps = identify_gaps(must_have, signals, self.synonym_index)

        summary = build_executive_summary(skill_fit, gaps, role_focus, ats)
        next_steps = build_next_steps(ats.todos, gaps, role_focus.recommendations)

        logger.info(
            "analysis_completed label=%s ats=%s risk=%s must_have=%s gaps=%s",
            summary.match_label,
            ats.score,
            role_focus.risk,
            len(must_have),
            len(gaps),
        )
        return AnalysisResult(
            summary=summary,
            skill_fit=skill_fit,
            gaps=gaps,
            ats=ats,
            role_focus=role_focus,
            next_steps=next_steps,
        )

    def _record_usage(self, result: AnalysisResult, job_text: str) -> None:
        if self.usage_recorder is None:
            return
        if self.usage_executor is None:
            self._safe_record(result, job_text)
            return
        try:
            self.usage_executor.submit(self._safe_record, result, job_text)
        except RuntimeError as exc:
            # Executor already shut down.
            logger.warning("usage_recording_skipped error=%s", exc)

    def _safe_record(self, result: AnalysisResult, job_text: str) -> None:
        try:
            self.usage_recorder(result, job_text)
        except Exception as exc:
            logger.warning("usage_recording_failed error=%s", exc)
