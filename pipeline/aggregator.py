#!/usr/bin/env python3
"""
Pipeline Aggregator - ranked pipelines and pipeline statistics.

A pipeline is derived, never stored: the scores of one job joined to their
candidates and ordered by overall score (descending). Ties keep candidate
insertion order because Python's sort is stable and the input is pre-sorted
by insertion index. Every method is pure and idempotent.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from core.models import Candidate, Job
from core.scorer.models import CandidateScore, MatchStatus
from core.state.repositories import Repositories

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineEntry:
    rank: int
    candidate: Candidate
    score: CandidateScore

    @property
    def overall_score(self) -> float:
        return self.score.overall_score

    @property
    def needs_tailoring(self) -> bool:
        return self.score.has_tailoring_potential


@dataclass
class PipelineSummary:
    job_id: str
    entries: List[PipelineEntry] = field(default_factory=list)
    status_counts: Dict[str, int] = field(default_factory=dict)
    average_score: float = 0.0
    above_threshold: int = 0
    tailoring_flags: Dict[str, bool] = field(default_factory=dict)

    @property
    def size(self) -> int:
        return len(self.entries)


@dataclass
class DashboardSummary:
    total_jobs: int
    total_candidates: int
    total_scores: int
    top_fit_matches: int
    candidates_per_job: Dict[str, int]


def empty_status_counts() -> Dict[str, int]:
    return {status.value: 0 for status in MatchStatus}


class PipelineAggregator:
    """Read-only views over the repositories."""

    def __init__(self, repos: Repositories):
        self.repos = repos

    def pipeline(self, job_id: str) -> List[PipelineEntry]:
        """Scores for a job joined to candidates, ranked by overall score.

        Scores whose candidate is missing are skipped.
        """
        with self.repos.lock:
            order = self.repos.candidates.insertion_order()
            candidates = {c.id: c for c in self.repos.candidates.list()}
            scores = [s for s in self.repos.scores.for_job(job_id) if s.candidate_id in candidates]

        scores.sort(key=lambda s: order[s.candidate_id])
        scores.sort(key=lambda s: s.overall_score, reverse=True)

        return [
            PipelineEntry(rank=i + 1, candidate=candidates[s.candidate_id], score=s)
            for i, s in enumerate(scores)
        ]

    def summarize(self, job_id: str, threshold: Optional[float] = None) -> PipelineSummary:
        entries = self.pipeline(job_id)

        counts = empty_status_counts()
        for entry in entries:
            counts[entry.score.status.value] += 1

        average = sum(e.overall_score for e in entries) / len(entries) if entries else 0.0
        above = sum(1 for e in entries if e.overall_score >= threshold) if threshold is not None else 0

        return PipelineSummary(
            job_id=job_id,
            entries=entries,
            status_counts=counts,
            average_score=average,
            above_threshold=above,
            tailoring_flags={e.candidate.id: e.needs_tailoring for e in entries},
        )

    def pipeline_candidates(self, job_id: str) -> List[Candidate]:
        return [e.candidate for e in self.pipeline(job_id)]

    def dashboard(self) -> DashboardSummary:
        with self.repos.lock:
            jobs: List[Job] = self.repos.jobs.list()
            scores = self.repos.scores.list()
            total_candidates = len(self.repos.candidates.list())

        per_job = {job.id: 0 for job in jobs}
        for score in scores:
            if score.job_id in per_job:
                per_job[score.job_id] += 1

        return DashboardSummary(
            total_jobs=len(jobs),
            total_candidates=total_candidates,
            total_scores=len(scores),
            top_fit_matches=sum(1 for s in scores if s.status is MatchStatus.TOP_FIT),
            candidates_per_job=per_job,
        )
