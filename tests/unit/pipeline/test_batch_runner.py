"""
Unit tests for concurrent batch scoring.
"""
import asyncio
import unittest

from core.exceptions import OracleUnavailableError
from core.scorer import CandidateScore, MatchStatus, ScoreBreakdown
from pipeline.runner import run_batch_scoring


def _score(candidate_id, overall=80):
    return CandidateScore(
        candidate_id=candidate_id,
        job_id="job-1",
        score=ScoreBreakdown(overall_score=overall),
        status=MatchStatus.TOP_FIT,
    )


class TestRunBatchScoring(unittest.IsolatedAsyncioTestCase):
    async def test_failures_are_isolated(self):
        async def score_one(candidate_id):
            if candidate_id == "c2":
                raise OracleUnavailableError("timeout")
            if candidate_id == "c3":
                return None
            return _score(candidate_id)

        result = await run_batch_scoring("job-1", ["c1", "c2", "c3", "c4"], score_one)

        self.assertEqual([s.candidate_id for s in result.scored], ["c1", "c4"])
        self.assertEqual(result.failures, {"c2": "timeout"})
        self.assertEqual(result.discarded, ["c3"])
        self.assertFalse(result.success)

    async def test_concurrency_is_bounded(self):
        in_flight = 0
        peak = 0

        async def score_one(candidate_id):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return _score(candidate_id)

        result = await run_batch_scoring("job-1", [f"c{i}" for i in range(10)], score_one, max_concurrency=3)

        self.assertEqual(len(result.scored), 10)
        self.assertLessEqual(peak, 3)
        self.assertTrue(result.success)

    async def test_empty_batch(self):
        async def score_one(candidate_id):
            raise AssertionError("should not be called")

        result = await run_batch_scoring("job-1", [], score_one)

        self.assertEqual(result.scored, [])
        self.assertTrue(result.success)
        self.assertGreaterEqual(result.execution_time, 0.0)


if __name__ == '__main__':
    unittest.main()
