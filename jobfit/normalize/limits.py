from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from jobfit.core.errors import warn_performance
from jobfit.core.scoring import get_scoring_int
from jobfit.schemas.profile import CandidateProfile

logger = logging.getLogger(__name__)

MAX_JOB_TEXT_LENGTH = 100_000
MAX_PROFILE_TEXT_LENGTH = 40_000
FORM_JOB_TEXT_LENGTH = 25_000
SINGLE_FIELD_LENGTH = 10_000


class ValidationReport(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)


def profile_text_length(profile: CandidateProfile | None) -> int:
    if profile is None:
        return 0
    total = len(profile.profile_summary or "") + len(profile.skills or "") + len(profile.projects or "")
    for experience in profile.experiences:
        total += len(experience.role) + len(experience.description)
    for education in profile.education:
        total += len(education.notes or "")
    return total


def cap_job_text(text: str) -> str:
    limit = get_scoring_int("limits.max_job_text_length", MAX_JOB_TEXT_LENGTH)
    if len(text) <= limit:
        return text
    warn_performance(f"job_text_truncated original={len(text)} limit={limit}")
    return text[:limit]


def cap_profile(profile: CandidateProfile) -> CandidateProfile:
    """Return a copy whose text fits the profile budget.

    Fields are trimmed in a fixed order (skills, summary, projects, experience
    descriptions, education notes) so the result is deterministic.
    """
    limit = get_scoring_int("limits.max_profile_text_length", MAX_PROFILE_TEXT_LENGTH)
    total = profile_text_length(profile)
    if total <= limit:
        return profile

    warn_performance(f"profile_text_truncated original={total} limit={limit}")
    excess = total - limit

    def trim(value: str | None) -> str | None:
        nonlocal excess
        if not value or excess <= 0:
            return value
        cut = min(len(value), excess)
        excess -= cut
        return value[: len(value) - cut]

    skills = trim(profile.skills) or ""
    summary = trim(profile.profile_summary)
    projects = trim(profile.projects)
    experiences = [
        experience.model_copy(update={"description": trim(experience.description) or ""})
        for experience in profile.experiences
    ]
    education = [item.model_copy(update={"notes": trim(item.notes)}) for item in profile.education]
    # Roles are never trimmed; if they alone exceed the budget the remainder stays.
    if excess > 0:
        logger.warning("profile_text_over_budget_after_truncation excess=%s", excess)

    return profile.model_copy(
        update={
            "skills": skills,
            "profile_summary": summary,
            "projects": projects,
            "experiences": experiences,
            "education": education,
        }
    )


def _limit_error(label: str, length: int, limit: int) -> str:
    excess = length - limit
    return (
        f"{label} exceeds the limit of {limit:,} characters. "
        f"Current: {length:,} characters. Please shorten it by {excess:,} characters."
    )


def validate_inputs(profile: CandidateProfile | None, job_text: str | None) -> ValidationReport:
    """Collect every form-level limit breach; analysis still runs on capped input."""
    errors: list[str] = []

    profile_limit = get_scoring_int("limits.max_profile_text_length", MAX_PROFILE_TEXT_LENGTH)
    total = profile_text_length(profile)
    if total > profile_limit:
        errors.append(_limit_error("The profile", total, profile_limit))

    job_limit = get_scoring_int("limits.form_job_text_length", FORM_JOB_TEXT_LENGTH)
    job_length = len(job_text or "")
    if job_length > job_limit:
        errors.append(_limit_error("The job posting", job_length, job_limit))

    field_limit = get_scoring_int("limits.single_field_length", SINGLE_FIELD_LENGTH)
    if profile is not None:
        fields: list[tuple[str, str | None]] = [
            ("Profile summary", profile.profile_summary),
            ("Skills", profile.skills),
            ("Projects", profile.projects),
        ]
        fields.extend(
            (f"Experience {index} description", experience.description)
            for index, experience in enumerate(profile.experiences, start=1)
        )
        fields.extend(
            (f"Education {index} notes", item.notes)
            for index, item in enumerate(profile.education, start=1)
        )
        for label, value in fields:
            if value and len(value) > field_limit:
                errors.append(_limit_error(f'The field "{label}"', len(value), field_limit))

    return ValidationReport(valid=not errors, errors=errors)
