from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

MatchStatus = Literal["met", "partial", "missing"]
Relevance = Literal["high", "medium", "low"]
RiskLevel = Literal["low", "medium", "high"]
MatchLabel = Literal["good fit", "partial fit", "stretch role"]
GapAction = Literal["rephrase", "evidence", "learn", "ignore"]
SuggestionType = Literal["synonym_match", "partial_match"]

_VALUE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class JobRequirements(BaseModel):
    model_config = _VALUE_CONFIG

    must_have: list[str] = Field(default_factory=list)
    nice_to_have: list[str] = Field(default_factory=list)
    responsibilities: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.must_have and not self.nice_to_have


class CandidateSignals(BaseModel):
    model_config = _VALUE_CONFIG

    skills_tokens: frozenset[str] = frozenset()
    experience_tokens: frozenset[str] = frozenset()
    seniority_signals: frozenset[str] = frozenset()

    @field_serializer("skills_tokens", "experience_tokens", "seniority_signals")
    def _serialize_sorted(self, value: frozenset[str]) -> list[str]:
        return sorted(value)

    def profile_tokens(self) -> frozenset[str]:
        return self.skills_tokens | self.experience_tokens

    def all_tokens(self) -> frozenset[str]:
        return self.skills_tokens | self.experience_tokens | self.seniority_signals


class RequirementMatch(BaseModel):
    model_config = _VALUE_CONFIG

    requirement: str
    status: MatchStatus
    similarity: float = Field(ge=0.0, le=1.0)
    relevance: Relevance
    evidence: str


class ATSScoreBreakdown(BaseModel):
    model_config = _VALUE_CONFIG

    structure: int = Field(default=0, ge=0, le=100)
    coverage: int = Field(default=0, ge=0, le=100)
    placement: int = Field(default=0, ge=0, le=100)
    context: int = Field(default=0, ge=0, le=100)


class ATSAnalysis(BaseModel):
    model_config = _VALUE_CONFIG

    score: int = Field(ge=0, le=100)
    breakdown: ATSScoreBreakdown
    todos: list[str] = Field(default_factory=list)


class RoleFocusRisk(BaseModel):
    model_config = _VALUE_CONFIG

    risk: RiskLevel
    reasons: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class GapActionCard(BaseModel):
    model_config = _VALUE_CONFIG

    requirement: str
    relevance: Relevance
    status: Literal["partial", "missing"]
    recommended_action: GapAction
    suggestion_type: SuggestionType | None = None


class ExecutiveSummary(BaseModel):
    model_config = _VALUE_CONFIG

    match_label: MatchLabel
    bullets: list[str] = Field(min_length=2, max_length=3)


class SkillFit(BaseModel):
    model_config = _VALUE_CONFIG

    must_have: list[RequirementMatch] = Field(default_factory=list)
    nice_to_have: list[RequirementMatch] = Field(default_factory=list)


class AnalysisResult(BaseModel):
    model_config = _VALUE_CONFIG

    summary: ExecutiveSummary
    skill_fit: SkillFit
    gaps: list[GapActionCard] = Field(default_factory=list)
    ats: ATSAnalysis
    role_focus: RoleFocusRisk
    next_steps: list[str] = Field(default_factory=list)
