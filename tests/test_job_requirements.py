import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from jobfit.core.errors import PerformanceWarning  # noqa: E402
from jobfit.normalize.normalize_jd import (  # noqa: E402
    detect_section,
    extract_fallback_requirements,
    parse_job_requirements,
)


class JobRequirementsTests(unittest.TestCase):
    def test_german_requirements_section(self):
        requirements = parse_job_requirements("Anforderungen:\n- TypeScript\n- React")
        self.assertEqual(requirements.must_have, ["TypeScript", "React"])
        self.assertEqual(requirements.nice_to_have, [])
        self.assertEqual(requirements.responsibilities, [])

    def test_english_sections(self):
        text = (
            "Requirements:\n- Python\n- SQL\n\n"
            "Nice to have:\n- AWS\n\n"
            "Responsibilities:\n- Build APIs"
        )
        requirements = parse_job_requirements(text)
        self.assertEqual(requirements.must_have, ["Python", "SQL"])
        self.assertEqual(requirements.nice_to_have, ["AWS"])
        self.assertEqual(requirements.responsibilities, ["Build APIs"])

    def test_numbered_and_indented_items(self):
        text = (
            "Aufgaben:\n* Entwicklung von Services\n"
            "Wir erwarten:\n1. Python\n2. Docker\n"
            "Wünschenswert:\n  Kubernetes"
        )
        requirements = parse_job_requirements(text)
        self.assertEqual(requirements.responsibilities, ["Entwicklung von Services"])
        self.assertEqual(requirements.must_have, ["Python", "Docker"])
        self.assertEqual(requirements.nice_to_have, ["Kubernetes"])

    def test_unmarked_lines_inside_a_section_are_ignored(self):
        requirements = parse_job_requirements("Requirements:\nPython experience\n- Docker")
        self.assertEqual(requirements.must_have, ["Docker"])

    def test_detect_section(self):
        self.assertEqual(detect_section("  Must-have:"), "must_have")
        self.assertEqual(detect_section("Preferred qualifications"), "nice_to_have")
        self.assertEqual(detect_section("Tätigkeiten"), "responsibilities")
        self.assertIsNone(detect_section("We are a growing team"))

    def test_fallback_phrases_when_no_headers(self):
        requirements = parse_job_requirements("We need Python and React experience.")
        self.assertEqual(
            requirements.must_have,
            [
                "need python",
                "python react",
                "react experience",
                "need python react",
                "python react experience",
                "We need Python and React experience.",
            ],
        )
        self.assertEqual(requirements.nice_to_have, [])
        self.assertEqual(requirements.responsibilities, [])

    def test_fallback_skips_all_caps_headings(self):
        must_have = extract_fallback_requirements("SENIOR ENGINEER\nWe build data platforms with Python")
        self.assertNotIn("senior engineer", must_have)
        self.assertIn("data platforms", must_have)

    def test_fallback_is_capped(self):
        lines = [f"skill{i}a skill{i}b skill{i}c skill{i}d skill{i}e" for i in range(15)]
        must_have = extract_fallback_requirements("\n".join(lines))
        self.assertEqual(len(must_have), 30)
        self.assertEqual(len(must_have), len(set(must_have)))

    def test_blank_posting(self):
        requirements = parse_job_requirements("   ")
        self.assertTrue(requirements.is_empty)
        self.assertEqual(requirements.responsibilities, [])

    def test_oversized_posting_warns(self):
        with self.assertWarns(PerformanceWarning):
            parse_job_requirements("x" * 100_001)


if __name__ == "__main__":
    unittest.main()
