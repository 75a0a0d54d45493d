from .analysis import (
    AnalysisResult,
    ATSAnalysis,
    ATSScoreBreakdown,
    CandidateSignals,
    ExecutiveSummary,
    GapActionCard,
    JobRequirements,
    RequirementMatch,
    RoleFocusRisk,
    SkillFit,
)
from .profile import CandidateProfile, EducationItem, ExperienceItem, ProfileRecord

__all__ = [
    "AnalysisResult",
    "ATSAnalysis",
    "ATSScoreBreakdown",
    "CandidateSignals",
    "ExecutiveSummary",
    "GapActionCard",
    "JobRequirements",
    "RequirementMatch",
    "RoleFocusRisk",
    "SkillFit",
    "CandidateProfile",
    "EducationItem",
    "ExperienceItem",
    "ProfileRecord",
]
