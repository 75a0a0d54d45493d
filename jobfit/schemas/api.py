from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .profile import CandidateProfile

_CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalysisRequest(BaseModel):
    model_config = _CAMEL_CONFIG

    profile: CandidateProfile | None = None
    job_posting_text: str = ""


class PromptResponse(BaseModel):
    prompt: str


class StatisticsResponse(BaseModel):
    enabled: bool
    total_analyses: int = 0
    role_cluster_counts: dict[str, int] = Field(default_factory=dict)
    industry_cluster_counts: dict[str, int] = Field(default_factory=dict)
    ats_score_buckets: dict[str, int] = Field(default_factory=dict)
    updated_at: str | None = None


class StatisticsResetResponse(BaseModel):
    deleted: int


class ProfileDeleteResponse(BaseModel):
    deleted: int
