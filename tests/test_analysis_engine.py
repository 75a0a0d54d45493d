import sys
import threading
import unittest
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from unittest.mock import MagicMock

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from jobfit.core.errors import InvalidInputError, PerformanceWarning  # noqa: E402
from jobfit.schemas.profile import CandidateProfile, ExperienceItem, ProfileRecord  # noqa: E402
from jobfit.services.analysis_cache import ResultCache, create_analysis_hash  # noqa: E402
from jobfit.services.analysis_engine import MatchingEngine  # noqa: E402

JOB_TEXT = (
    "Senior Frontend Engineer\n"
    "Anforderungen:\n- TypeScript\n- React\n"
    "Nice to have:\n- GraphQL"
)


def _profile() -> CandidateProfile:
    return CandidateProfile(
        skills="TypeScript, React, Node.js",
        profile_summary="Frontend engineer building web applications",
        experiences=[
            ExperienceItem(
                employer="Acme",
                role="Frontend Engineer",
                start_date="2020",
                end_date="2024",
                description="- Built React dashboards in TypeScript\n- Reduced bundle size by 30%",
            )
        ],
    )


class ResultCacheTests(unittest.TestCase):
    def test_oldest_entry_is_evicted_first(self):
        cache = ResultCache(max_size=2)
        first, second, third = object(), object(), object()
        cache.put("a", first)
        cache.put("b", second)
        cache.get("a")
        cache.put("c", third)
        self.assertNotIn("a", cache)
        self.assertIs(cache.get("b"), second)
        self.assertIs(cache.get("c"), third)
        self.assertEqual(len(cache), 2)

    def test_replacing_a_key_does_not_evict(self):
        cache = ResultCache(max_size=2)
        cache.put("a", object())
        cache.put("b", object())
        replacement = object()
        cache.put("a", replacement)
        self.assertEqual(len(cache), 2)
        self.assertIs(cache.get("a"), replacement)

    def test_missing_key_and_clear(self):
        cache = ResultCache()
        self.assertIsNone(cache.get("missing"))
        cache.put("a", object())
        cache.clear()
        self.assertEqual(len(cache), 0)

    def test_size_must_be_positive(self):
        with self.assertRaises(ValueError):
            ResultCache(max_size=0)

    def test_hash_is_stable_and_ignores_surrounding_whitespace(self):
        profile = _profile()
        key = create_analysis_hash(profile, JOB_TEXT)
        self.assertEqual(key, create_analysis_hash(_profile(), f"  {JOB_TEXT}\n"))
        self.assertEqual(len(key), 64)
        self.assertNotEqual(key, create_analysis_hash(profile.model_copy(update={"skills": "Go"}), JOB_TEXT))
        self.assertNotEqual(key, create_analysis_hash(profile, JOB_TEXT + "\n- Rust"))


class MatchingEngineTests(unittest.TestCase):
    def test_pipeline_result(self):
        result = MatchingEngine().run_analysis(_profile(), JOB_TEXT)
        self.assertEqual([match.requirement for match in result.skill_fit.must_have], ["TypeScript", "React"])
        self.assertTrue(all(match.status == "met" for match in result.skill_fit.must_have))
        self.assertEqual([match.requirement for match in result.skill_fit.nice_to_have], ["GraphQL"])
        self.assertGreaterEqual(len(result.summary.bullets), 2)
        self.assertLessEqual(len(result.summary.bullets), 3)
        self.assertTrue(all(gap.recommended_action != "ignore" for gap in result.gaps))
        self.assertGreaterEqual(result.ats.score, 0)
        self.assertLessEqual(result.ats.score, 100)

    def test_repeated_analysis_is_served_from_cache(self):
        engine = MatchingEngine(cache=ResultCache(max_size=10))
        first = engine.run_analysis(_profile(), JOB_TEXT)
        second = engine.run_analysis(_profile(), JOB_TEXT)
        self.assertIs(first, second)
        self.assertEqual(len(engine.cache), 1)

    def test_results_are_deterministic_across_engines(self):
        first = MatchingEngine().run_analysis(_profile(), JOB_TEXT)
        second = MatchingEngine().run_analysis(_profile(), JOB_TEXT)
        self.assertEqual(first.model_dump_json(), second.model_dump_json())

    def test_saved_profile_record_is_accepted(self):
        record = ProfileRecord(name="Frontend", data=_profile())
        result = MatchingEngine().run_analysis(record, JOB_TEXT)
        self.assertEqual(len(result.skill_fit.must_have), 2)

    def test_invalid_input(self):
        engine = MatchingEngine()
        with self.assertRaises(InvalidInputError):
            engine.run_analysis(None, JOB_TEXT)
        with self.assertRaises(InvalidInputError):
            engine.run_analysis(ProfileRecord(name="Empty"), JOB_TEXT)
        with self.assertRaises(InvalidInputError):
            engine.run_analysis(_profile(), "   ")
        with self.assertRaises(InvalidInputError):
            engine.run_analysis(_profile(), None)

    def test_usage_recorder_runs_once_per_computed_result(self):
        recorder = MagicMock()
        engine = MatchingEngine(usage_recorder=recorder)
        result = engine.run_analysis(_profile(), JOB_TEXT)
        engine.run_analysis(_profile(), JOB_TEXT)
        recorder.assert_called_once_with(result, JOB_TEXT)

    def test_usage_recorder_failure_does_not_fail_analysis(self):
        engine = MatchingEngine(usage_recorder=MagicMock(side_effect=RuntimeError("boom")))
        with self.assertLogs("jobfit.services.analysis_engine", level="WARNING") as logs:
            result = engine.run_analysis(_profile(), JOB_TEXT)
        self.assertEqual(len(result.skill_fit.must_have), 2)
        self.assertTrue(any("usage_recording_failed" in line for line in logs.output))

    def test_oversized_posting_is_truncated_with_warning(self):
        engine = MatchingEngine()
        with self.assertWarns(PerformanceWarning):
            result = engine.run_analysis(_profile(), "Requirements:\n- TypeScript\n" + "x" * 100_001)
        self.assertEqual(result.skill_fit.must_have[0].requirement, "TypeScript")

    def test_oversized_profile_is_capped_once(self):
        profile = CandidateProfile(skills="Python", experiences=[ExperienceItem(role="Engineer " * 5_000)])
        with self.assertWarns(PerformanceWarning), self.assertLogs("jobfit", level="WARNING") as logs:
            MatchingEngine().run_analysis(profile, "Requirements:\n- Python")
        truncated = [line for line in logs.output if "profile_text_truncated" in line]
        over_budget = [line for line in logs.output if "profile_text_over_budget_after_truncation" in line]
        self.assertEqual(len(truncated), 1)
        self.assertEqual(len(over_budget), 1)

    def test_partially_covered_must_haves_become_rephrase_gaps(self):
        job_text = "Requirements:\n- Python Django Flask\n- Docker Kubernetes Helm"
        result = MatchingEngine().run_analysis(CandidateProfile(skills="Python, Docker"), job_text)
        self.assertEqual([match.status for match in result.skill_fit.must_have], ["partial", "partial"])
        self.assertEqual(
            [(gap.requirement, gap.relevance, gap.recommended_action) for gap in result.gaps],
            [
                ("Python Django Flask", "high", "rephrase"),
                ("Docker Kubernetes Helm", "high", "rephrase"),
            ],
        )
        self.assertTrue(any("Python Django Flask" in step for step in result.next_steps))


class UsageExecutorTests(unittest.TestCase):
    def setUp(self):
        self.executor = ThreadPoolExecutor(max_workers=1)
        self.addCleanup(self.executor.shutdown, wait=True)

    def test_recorder_does_not_block_the_caller(self):
        release = threading.Event()
        recorded = []

        def recorder(result, job_text):
            release.wait(timeout=5)
            recorded.append(job_text)

        engine = MatchingEngine(usage_recorder=recorder, usage_executor=self.executor)
        result = engine.run_analysis(_profile(), JOB_TEXT)
        self.assertEqual(len(result.skill_fit.must_have), 2)
        self.assertEqual(recorded, [])

        release.set()
        self.executor.shutdown(wait=True)
        self.assertEqual(recorded, [JOB_TEXT])

    def test_background_failure_is_logged(self):
        engine = MatchingEngine(
            usage_recorder=MagicMock(side_effect=RuntimeError("boom")),
            usage_executor=self.executor,
        )
        with self.assertLogs("jobfit.services.analysis_engine", level="WARNING") as logs:
            engine.run_analysis(_profile(), JOB_TEXT)
            self.executor.shutdown(wait=True)
        self.assertTrue(any("usage_recording_failed" in line for line in logs.output))

    def test_shut_down_executor_skips_recording(self):
        recorder = MagicMock()
        self.executor.shutdown(wait=True)
        engine = MatchingEngine(usage_recorder=recorder, usage_executor=self.executor)
        with self.assertLogs("jobfit.services.analysis_engine", level="WARNING") as logs:
            result = engine.run_analysis(_profile(), JOB_TEXT)
        self.assertEqual(len(result.skill_fit.must_have), 2)
        recorder.assert_not_called()
        self.assertTrue(any("usage_recording_skipped" in line for line in logs.output))


if __name__ == "__main__":
    unittest.main()
