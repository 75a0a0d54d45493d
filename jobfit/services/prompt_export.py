from __future__ import annotations

from jobfit.schemas.analysis import AnalysisResult

MAX_TITLE_LENGTH = 100
MAX_STRENGTHS = 5
MAX_GAPS = 2
DEFAULT_ROLE_TITLE = "Job posting"

_NEGATIVE_LEADERSHIP_PHRASES = (
    "keine führung",
    "keine leadership",
    "keine strategie",
    "no leadership",
    "no strategy",
    "nicht erforderlich",
    "not required",
)
_LEADERSHIP_PHRASES = (
    "leadership",
    "führung",
    "führen",
    "teamleitung",
    "team lead",
    "manager",
    "management",
    "strategie",
    "strategy",
    "strategisch",
    "strategic",
    "leitend",
    "leading",
)


def extract_role_title(job_text: str | None) -> str:
    for line in (job_text or "").split("\n"):
        line = line.strip()
        if line:
            if len(line) > MAX_TITLE_LENGTH:
                return line[: MAX_TITLE_LENGTH - 3] + "..."
            return line
    return DEFAULT_ROLE_TITLE


def requires_leadership(job_text: str | None) -> bool:
    text = (job_text or "").lower()
    if not text.strip():
        return False
    if any(phrase in text for phrase in _NEGATIVE_LEADERSHIP_PHRASES):
        return False
    return any(phrase in text for phrase in _LEADERSHIP_PHRASES)


def generate_cover_letter_prompt(result: AnalysisResult, job_text: str | None) -> str:
    """Curated cover-letter brief for an external assistant.

    Only the role title, the strongest matches and the most important gaps are
    included; the profile and the posting themselves never are.
    """
    strengths = [
        f"- {match.requirement} ({match.evidence})" if match.evidence else f"- {match.requirement}"
        for match in result.skill_fit.must_have
        if match.status == "met"
    ][:MAX_STRENGTHS]
    key_gaps = [
        gap.requirement for gap in result.gaps if gap.status == "missing" and gap.relevance == "high"
    ][:MAX_GAPS]

    lines = [f"**Role:** {extract_role_title(job_text)}", ""]

    if strengths:
        lines.append("**Strengths (top matches):**")
        lines.extend(strengths)
        lines.append("")

    if key_gaps:
        lines.append("**Key gaps (address carefully in the letter):**")
        lines.extend(f"- {gap}" for gap in key_gaps)
        lines.append("")

    lines.append("**Guidance for the cover letter:**")
    lines.append("- Professional, precise tone")
    lines.append("- Do not mention salary expectations")
    lines.append("- Do not claim skills that are not listed")
    if not requires_leadership(job_text):
        lines.append("- Do not mention leadership or strategy experience (not part of the requirements)")

    lines.append("")
    lines.append("**Please write a cover letter based on this information.**")
    return "\n".join(lines)
