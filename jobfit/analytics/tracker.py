from __future__ import annotations

import logging

from jobfit.core.config import settings
from jobfit.schemas.analysis import AnalysisResult

from .clustering import extract_industry_cluster, extract_role_cluster, get_ats_score_bucket
from .db import record_analysis

logger = logging.getLogger(__name__)


def track_analysis(result: AnalysisResult, job_text: str) -> None:
    """Count one analysis by coarse buckets only; no profile or posting text is stored."""
    if not settings.statistics_enabled:
        return
    role_cluster = extract_role_cluster(job_text)
    industry_cluster = extract_industry_cluster(job_text)
    ats_bucket = get_ats_score_bucket(result.ats.score)
    record_analysis(role_cluster=role_cluster, industry_cluster=industry_cluster, ats_bucket=ats_bucket)
    logger.debug(
        "analysis_tracked role=%s industry=%s ats_bucket=%s",
        role_cluster,
        industry_cluster,
        ats_bucket,
    )
