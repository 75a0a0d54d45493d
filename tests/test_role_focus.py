import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from jobfit.features.role_focus import (  # noqa: E402
    NO_REQUIREMENTS_RECOMMENDATION,
    classify_risk,
    compute_role_focus_risk,
    detect_leadership_mismatch,
)
from jobfit.normalize.tokenize import tokenize_many  # noqa: E402
from jobfit.schemas.analysis import CandidateSignals, JobRequirements  # noqa: E402
from jobfit.schemas.profile import CandidateProfile, ExperienceItem  # noqa: E402


class RoleFocusTests(unittest.TestCase):
    def test_no_requirements(self):
        risk = compute_role_focus_risk(CandidateProfile(skills="Python"), JobRequirements())
        self.assertEqual(risk.risk, "low")
        self.assertEqual(risk.reasons, [])
        self.assertEqual(risk.recommendations, [NO_REQUIREMENTS_RECOMMENDATION])
        self.assertIn("No job requirements", risk.recommendations[0])

    def test_missing_profile(self):
        risk = compute_role_focus_risk(None, JobRequirements(must_have=["Python"]))
        self.assertEqual(risk.risk, "low")
        self.assertEqual(len(risk.recommendations), 1)

    def test_focused_profile(self):
        risk = compute_role_focus_risk(
            CandidateProfile(skills="Python, Django"),
            JobRequirements(must_have=["Python", "Django"]),
        )
        self.assertEqual(risk.risk, "low")
        self.assertEqual(risk.reasons, [])
        self.assertEqual(len(risk.recommendations), 1)

    def test_unrelated_skills_raise_risk(self):
        risk = compute_role_focus_risk(
            CandidateProfile(skills="Python, Photoshop, Illustrator, Figma, Premiere"),
            JobRequirements(must_have=["Python"]),
        )
        self.assertEqual(risk.risk, "high")
        self.assertIn("Profile covers several domains outside the scope of this role", risk.reasons)
        self.assertIn("De-emphasize unrelated skills in the profile summary", risk.recommendations)

    def test_leadership_terms_outside_the_posting(self):
        profile = CandidateProfile(
            skills="Python",
            experiences=[ExperienceItem(role="Engineering Manager", description="Defined strategy for the platform")],
        )
        risk = compute_role_focus_risk(profile, JobRequirements(must_have=["Python", "SQL"]))
        self.assertEqual(risk.risk, "high")
        self.assertTrue(any("leadership" in reason.lower() for reason in risk.reasons))

    def test_leadership_mismatch_counts_every_seniority_signal(self):
        signals = CandidateSignals(seniority_signals=frozenset({"team lead", "5 years experience", "experience"}))
        self.assertEqual(
            detect_leadership_mismatch(signals, tokenize_many(["Python"])),
            ["5 years experience", "experience", "team lead"],
        )

    def test_years_of_experience_outside_the_posting_raise_risk(self):
        profile = CandidateProfile(experiences=[ExperienceItem(description="Python. 5 years experience")])
        risk = compute_role_focus_risk(profile, JobRequirements(must_have=["Python Developer"]))
        self.assertEqual(risk.risk, "high")
        self.assertTrue(any("seniority" in reason.lower() for reason in risk.reasons))

    def test_experience_keyword_in_posting_suppresses_mismatch(self):
        signals = CandidateSignals(seniority_signals=frozenset({"5 years experience", "senior"}))
        job_tokens = tokenize_many(["Python", "Proven experience with SQL"])
        self.assertEqual(detect_leadership_mismatch(signals, job_tokens), [])

    def test_leadership_in_posting_suppresses_mismatch(self):
        signals = CandidateSignals(seniority_signals=frozenset({"team lead", "strategy"}))
        job_tokens = tokenize_many(["Leadership of a small team"])
        self.assertEqual(detect_leadership_mismatch(signals, job_tokens), [])

    def test_classify_risk(self):
        self.assertEqual(classify_risk(0.29, 0), "low")
        self.assertEqual(classify_risk(0.3, 0), "medium")
        self.assertEqual(classify_risk(0.5, 0), "medium")
        self.assertEqual(classify_risk(0.51, 0), "high")
        self.assertEqual(classify_risk(0.0, 1), "medium")
        self.assertEqual(classify_risk(0.0, 2), "high")

    def test_wording_never_calls_candidate_overqualified(self):
        cases = [
            (CandidateProfile(skills="Python"), JobRequirements()),
            (CandidateProfile(skills="Python, Django"), JobRequirements(must_have=["Python"])),
            (
                CandidateProfile(
                    skills="Python, Photoshop, Figma",
                    profile_summary="Director and head of strategy, 15 years experience",
                ),
                JobRequirements(must_have=["Python"]),
            ),
        ]
        for profile, requirements in cases:
            risk = compute_role_focus_risk(profile, requirements)
            for text in risk.reasons + risk.recommendations:
                self.assertNotIn("overqualified", text.lower())
                self.assertNotIn("over-qualified", text.lower())


if __name__ == "__main__":
    unittest.main()
