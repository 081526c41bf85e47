"""
Unit tests for pipeline ranking and statistics.
"""
import unittest

from core.scorer import CandidateScore, MatchStatus, ScoreBreakdown, ThresholdPolicy
from core.state import Repositories
from pipeline.aggregator import PipelineAggregator

POLICY = ThresholdPolicy()


def _score(candidate_id, job_id, overall, tailoring=False):
    return CandidateScore(
        candidate_id=candidate_id,
        job_id=job_id,
        score=ScoreBreakdown(overall_score=overall),
        status=POLICY.classify(overall),
        has_tailoring_potential=tailoring,
    )


class TestPipelineAggregator(unittest.TestCase):
    def setUp(self):
        self.repos = Repositories()
        self.aggregator = PipelineAggregator(self.repos)
        self.job = self.repos.jobs.create({"title": "Engineer"})
        self.a = self.repos.candidates.create({"name": "A"})
        self.b = self.repos.candidates.create({"name": "B"})
        self.c = self.repos.candidates.create({"name": "C"})

    def test_ranked_by_score_ties_keep_insertion_order(self):
        # Committed out of order on purpose
        self.repos.commit_score(_score(self.c.id, self.job.id, 70))
        self.repos.commit_score(_score(self.b.id, self.job.id, 90))
        self.repos.commit_score(_score(self.a.id, self.job.id, 90))

        entries = self.aggregator.pipeline(self.job.id)

        self.assertEqual([e.candidate.name for e in entries], ["A", "B", "C"])
        self.assertEqual([e.rank for e in entries], [1, 2, 3])

    def test_empty_pipeline(self):
        summary = self.aggregator.summarize(self.job.id, threshold=75)

        self.assertEqual(summary.size, 0)
        self.assertEqual(summary.average_score, 0.0)
        self.assertEqual(summary.above_threshold, 0)
        self.assertEqual(summary.status_counts, {"top_fit": 0, "borderline": 0, "not_suitable": 0})

    def test_summary_statistics(self):
        self.repos.commit_score(_score(self.a.id, self.job.id, 90))
        self.repos.commit_score(_score(self.b.id, self.job.id, 65, tailoring=True))
        self.repos.commit_score(_score(self.c.id, self.job.id, 40))

        summary = self.aggregator.summarize(self.job.id, threshold=60)

        self.assertAlmostEqual(summary.average_score, 65.0)
        self.assertEqual(summary.above_threshold, 2)
        self.assertEqual(summary.status_counts, {"top_fit": 1, "borderline": 1, "not_suitable": 1})
        self.assertEqual(summary.tailoring_flags, {self.a.id: False, self.b.id: True, self.c.id: False})

    def test_summarize_is_idempotent(self):
        self.repos.commit_score(_score(self.a.id, self.job.id, 90))

        first = self.aggregator.summarize(self.job.id, threshold=75)
        second = self.aggregator.summarize(self.job.id, threshold=75)

        self.assertEqual(first, second)

    def test_only_scores_for_the_job(self):
        other = self.repos.jobs.create({"title": "Designer"})
        self.repos.commit_score(_score(self.a.id, self.job.id, 90))
        self.repos.commit_score(_score(self.b.id, other.id, 50))

        self.assertEqual([c.name for c in self.aggregator.pipeline_candidates(self.job.id)], ["A"])

    def test_dashboard(self):
        other = self.repos.jobs.create({"title": "Designer"})
        self.repos.commit_score(_score(self.a.id, self.job.id, 90))
        self.repos.commit_score(_score(self.b.id, self.job.id, 50))
        self.repos.commit_score(_score(self.a.id, other.id, 85))

        dashboard = self.aggregator.dashboard()

        self.assertEqual(dashboard.total_jobs, 2)
        self.assertEqual(dashboard.total_candidates, 3)
        self.assertEqual(dashboard.total_scores, 3)
        self.assertEqual(dashboard.top_fit_matches, 2)
        self.assertEqual(dashboard.candidates_per_job, {self.job.id: 2, other.id: 1})

    def test_status_comes_from_stored_score(self):
        self.repos.commit_score(_score(self.a.id, self.job.id, 85))

        entry = self.aggregator.pipeline(self.job.id)[0]

        self.assertIs(entry.score.status, MatchStatus.TOP_FIT)


if __name__ == '__main__':
    unittest.main()
