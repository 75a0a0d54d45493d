import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from jobfit.features import build_executive_summary, build_next_steps, identify_gaps  # noqa: E402
from jobfit.schemas.analysis import (  # noqa: E402
    ATSAnalysis,
    ATSScoreBreakdown,
    CandidateSignals,
    GapActionCard,
    RequirementMatch,
    RoleFocusRisk,
    SkillFit,
)


def _match(requirement: str, status: str, relevance: str, similarity: float = 0.0) -> RequirementMatch:
    return RequirementMatch(
        requirement=requirement,
        status=status,
        similarity=similarity,
        relevance=relevance,
        evidence="",
    )


def _gap(requirement: str, relevance: str = "high", status: str = "missing", action: str = "learn") -> GapActionCard:
    return GapActionCard(requirement=requirement, relevance=relevance, status=status, recommended_action=action)


def _ats(score: int, todos: list[str] | None = None) -> ATSAnalysis:
    return ATSAnalysis(score=score, breakdown=ATSScoreBreakdown(), todos=todos or [])


class GapTests(unittest.TestCase):
    def test_gap_actions(self):
        signals = CandidateSignals(skills_tokens=frozenset({"sql"}))
        matches = [
            _match("TypeScript", "met", "high", 1.0),
            _match("Kafka Streams", "partial", "medium", 0.5),
            _match("Databases", "missing", "high"),
            _match("Rust", "missing", "high"),
            _match("Cobol", "missing", "low"),
        ]
        gaps = identify_gaps(matches, signals)
        self.assertEqual([gap.requirement for gap in gaps], ["Kafka Streams", "Databases", "Rust"])
        self.assertEqual([gap.recommended_action for gap in gaps], ["rephrase", "evidence", "learn"])
        self.assertEqual([gap.suggestion_type for gap in gaps], ["partial_match", "synonym_match", None])

    def test_direct_token_hit_on_missing_requirement_asks_for_evidence(self):
        signals = CandidateSignals(skills_tokens=frozenset({"sql"}))
        gaps = identify_gaps([_match("SQL Rust", "missing", "high")], signals)
        self.assertEqual(len(gaps), 1)
        self.assertEqual(gaps[0].recommended_action, "evidence")
        self.assertEqual(gaps[0].suggestion_type, "synonym_match")

    def test_no_signals_means_no_gaps(self):
        self.assertEqual(identify_gaps([_match("Rust", "missing", "high")], None), [])
        self.assertEqual(identify_gaps([], CandidateSignals()), [])


class SummaryTests(unittest.TestCase):
    def test_good_fit(self):
        skill_fit = SkillFit(must_have=[_match("Python", "met", "high", 1.0)])
        summary = build_executive_summary(skill_fit, [], RoleFocusRisk(risk="low"), _ats(85))
        self.assertEqual(summary.match_label, "good fit")
        self.assertEqual(
            summary.bullets,
            ["Good fit: 1 of 1 must-have requirements met", "ATS score: 85/100 (very good)"],
        )

    def test_stretch_role(self):
        skill_fit = SkillFit(must_have=[_match("Rust", "missing", "high")])
        summary = build_executive_summary(skill_fit, [_gap("Rust")], RoleFocusRisk(risk="low"), _ats(30))
        self.assertEqual(summary.match_label, "stretch role")
        self.assertEqual(
            summary.bullets,
            [
                "Stretch role: 0 of 1 must-have requirements met, several important gaps",
                "ATS score: 30/100 (optimization recommended)",
                "Key gaps: Rust",
            ],
        )

    def test_partial_fit_is_padded_to_two_bullets(self):
        skill_fit = SkillFit(
            must_have=[_match("Python", "met", "high", 1.0), _match("Kafka", "partial", "medium", 0.5)]
        )
        summary = build_executive_summary(skill_fit, [], RoleFocusRisk(risk="low"), _ats(65))
        self.assertEqual(summary.match_label, "partial fit")
        self.assertEqual(len(summary.bullets), 2)
        self.assertEqual(summary.bullets[1], "A few profile adjustments could improve the fit")

    def test_key_gaps_are_abbreviated(self):
        gaps = [_gap("Rust"), _gap("Go"), _gap("Scala")]
        skill_fit = SkillFit(must_have=[_match(gap.requirement, "missing", "high") for gap in gaps])
        summary = build_executive_summary(skill_fit, gaps, RoleFocusRisk(risk="low"), _ats(70))
        self.assertEqual(summary.match_label, "stretch role")
        self.assertIn("Key gaps: Rust, Go and more", summary.bullets)
        self.assertLessEqual(len(summary.bullets), 3)

    def test_no_requirements_is_a_stretch(self):
        summary = build_executive_summary(SkillFit(), [], RoleFocusRisk(risk="low"), _ats(90))
        self.assertEqual(summary.match_label, "stretch role")
        self.assertGreaterEqual(len(summary.bullets), 2)

    def test_next_steps_order(self):
        gaps = [
            _gap("Kafka", relevance="medium", status="partial", action="rephrase"),
            _gap("Rust", relevance="high", action="learn"),
            _gap("SQL", relevance="high", action="evidence"),
        ]
        steps = build_next_steps(["Fix A"], gaps, ["Focus"])
        self.assertEqual(
            steps,
            [
                "Role focus: Focus",
                "ATS: Fix A",
                "Gap: Rust - learn",
                "Gap: SQL - add evidence",
                "Gap: Kafka - rephrase",
            ],
        )


if __name__ == "__main__":
    unittest.main()
