from __future__ import annotations

import re

_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")
_ROLE_WINDOW = 500

# Checked in order; the first keyword found wins.
ROLE_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("software engineer", "Software Engineer"),
    ("software developer", "Software Engineer"),
    ("entwickler", "Software Engineer"),
    ("programmierer", "Software Engineer"),
    ("full stack", "Software Engineer"),
    ("fullstack", "Software Engineer"),
    ("backend", "Software Engineer"),
    ("frontend", "Software Engineer"),
    ("data scientist", "Data Scientist"),
    ("data analyst", "Data Scientist"),
    ("data engineer", "Data Scientist"),
    ("data science", "Data Scientist"),
    ("machine learning", "Data Scientist"),
    ("ml engineer", "Data Scientist"),
    ("ai engineer", "Data Scientist"),
    ("product manager", "Product Manager"),
    ("produktmanager", "Product Manager"),
    ("product owner", "Product Manager"),
    ("po ", "Product Manager"),
    ("scrum master", "Product Manager"),
    ("designer", "Designer"),
    ("ux ui", "Designer"),
    ("devops", "DevOps Engineer"),
    ("sre", "DevOps Engineer"),
    ("site reliability", "DevOps Engineer"),
    ("cloud engineer", "DevOps Engineer"),
    ("infrastructure", "DevOps Engineer"),
    ("qa engineer", "QA Engineer"),
    ("test engineer", "QA Engineer"),
    ("quality assurance", "QA Engineer"),
    ("tester", "QA Engineer"),
)

# Finance comes before Technology so "fintech" is not counted as tech.
INDUSTRY_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("fintech", "Finance"),
    ("finance", "Finance"),
    ("banking", "Finance"),
    ("financial", "Finance"),
    ("healthcare", "Healthcare"),
    ("health", "Healthcare"),
    ("medical", "Healthcare"),
    ("pharma", "Healthcare"),
    ("e commerce", "E-commerce"),
    ("ecommerce", "E-commerce"),
    ("retail", "E-commerce"),
    ("online shop", "E-commerce"),
    ("software", "Technology"),
    ("information technology", "Technology"),
    ("it ", "Technology"),
    ("saas", "Technology"),
    ("tech", "Technology"),
)

ATS_SCORE_BUCKETS: tuple[tuple[int, int, str], ...] = (
    (0, 20, "very_low"),
    (21, 40, "low"),
    (41, 60, "medium"),
    (61, 80, "high"),
    (81, 100, "very_high"),
)
UNKNOWN_BUCKET = "unknown"


def _normalize(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", _PUNCTUATION_RE.sub(" ", text.lower()))


def _first_cluster(text: str, keywords: tuple[tuple[str, str], ...], default: str) -> str:
    for keyword, cluster in keywords:
        if keyword in text:
            return cluster
    return default


def extract_role_cluster(job_text: str | None) -> str:
    if not job_text or not job_text.strip():
        return "Other"
    return _first_cluster(_normalize(job_text[:_ROLE_WINDOW]), ROLE_KEYWORDS, "Other")


def extract_industry_cluster(job_text: str | None) -> str:
    if not job_text or not job_text.strip():
        return "Unknown"
    return _first_cluster(_normalize(job_text), INDUSTRY_KEYWORDS, "Unknown")


def get_ats_score_bucket(score: int | float) -> str:
    for low, high, bucket in ATS_SCORE_BUCKETS:
        if low <= score <= high:
            return bucket
    return UNKNOWN_BUCKET
