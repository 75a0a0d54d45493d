from .ats_score import compute_ats_score, generate_ats_todos
from .gaps import identify_gaps
from .role_focus import compute_role_focus_risk
from .summary import build_executive_summary, build_next_steps

__all__ = [
    "compute_ats_score",
    "generate_ats_todos",
    "identify_gaps",
    "compute_role_focus_risk",
    "build_executive_summary",
    "build_next_steps",
]
