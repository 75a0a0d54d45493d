from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _none_to_empty(value: Any) -> Any:
    return "" if value is None else value


class ExperienceItem(BaseModel):
    model_config = _CAMEL_CONFIG

    employer: str = ""
    role: str = ""
    start_date: str = ""
    end_date: str = ""
    description: str = ""

    @field_validator("employer", "role", "start_date", "end_date", "description", mode="before")
    @classmethod
    def _coerce_missing(cls, value: Any) -> Any:
        return _none_to_empty(value)

    @property
    def text(self) -> str:
        return f"{self.role} {self.description}"


class EducationItem(BaseModel):
    model_config = _CAMEL_CONFIG

    degree: str | None = None
    institution: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    notes: str | None = None


class CandidateProfile(BaseModel):
    """CV data as captured by the profile form; read-only to the analysis pipeline."""

    model_config = _CAMEL_CONFIG

    profile_summary: str | None = None
    experiences: list[ExperienceItem] = Field(default_factory=list)
    education: list[EducationItem] = Field(default_factory=list)
    skills: str = ""
    projects: str | None = None

    @field_validator("skills", mode="before")
    @classmethod
    def _coerce_skills(cls, value: Any) -> Any:
        return _none_to_empty(value)

    @field_validator("experiences", "education", mode="before")
    @classmethod
    def _coerce_lists(cls, value: Any) -> Any:
        return [] if value is None else value

    def text_fields(self) -> list[str]:
        """Skills, summary, projects and each experience's role + description."""
        chunks = [self.skills or "", self.profile_summary or "", self.projects or ""]
        chunks.extend(experience.text for experience in self.experiences)
        return chunks

    def full_text(self) -> str:
        return " ".join(self.text_fields())


class ProfileRecord(BaseModel):
    model_config = _CAMEL_CONFIG

    id: str | None = None
    name: str
    created_at: str | None = None
    updated_at: str | None = None
    data: CandidateProfile | None = None

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("name must not be empty")
        return stripped
