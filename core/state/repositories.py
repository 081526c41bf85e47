#!/usr/bin/env python3
"""
In-memory repositories for jobs, candidates and scores.

All three share one re-entrant lock so that cascading deletes and score
commits are atomic with respect to readers: nobody can observe a Score
whose Job has already been removed.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from core.exceptions import NotFoundError, ValidationError
from core.models import Candidate, Job
from core.scorer.models import CandidateScore
from core.utils import coerce_str_list, dedupe_preserving_order, new_id, utc_now_iso

logger = logging.getLogger(__name__)

JOB_LIST_FIELDS = ("required_skills", "nice_to_have_skills", "required_certifications")


class ScoreRepository:
    """Scores keyed by (candidate_id, job_id); re-scoring replaces in place."""

    def __init__(self, lock: threading.RLock):
        self._lock = lock
        self._scores: Dict[Tuple[str, str], CandidateScore] = {}

    def upsert(self, score: CandidateScore) -> bool:
        """Insert or replace the score for its pair. Returns True if it replaced one."""
        with self._lock:
            replaced = score.key in self._scores
            self._scores[score.key] = score
            return replaced

    def get(self, candidate_id: str, job_id: str) -> Optional[CandidateScore]:
        with self._lock:
            return self._scores.get((candidate_id, job_id))

    def for_job(self, job_id: str) -> List[CandidateScore]:
        with self._lock:
            return [s for s in self._scores.values() if s.job_id == job_id]

    def count_for_job(self, job_id: str) -> int:
        with self._lock:
            return sum(1 for s in self._scores.values() if s.job_id == job_id)

    def remove_for_job(self, job_id: str) -> int:
        with self._lock:
            doomed = [key for key, s in self._scores.items() if s.job_id == job_id]
            for key in doomed:
                del self._scores[key]
            return len(doomed)

    def list(self) -> List[CandidateScore]:
        with self._lock:
            return list(self._scores.values())

    def replace_all(self, scores: Iterable[CandidateScore]) -> None:
        with self._lock:
            self._scores = {}
            for score in scores:
                self._scores[score.key] = score


class JobRepository:
    """Requisitions, newest first. Deleting a job cascades to its scores."""

    def __init__(self, lock: threading.RLock, scores: ScoreRepository):
        self._lock = lock
        self._scores = scores
        self._jobs: List[Job] = []

    def create(self, fields: Dict[str, Any]) -> Job:
        title = str(fields.get("title") or "").strip()
        if not title:
            raise ValidationError("Job title is required")

        data = dict(fields)
        data["title"] = title
        for name in JOB_LIST_FIELDS:
            try:
                data[name] = dedupe_preserving_order(coerce_str_list(data.get(name)))
            except ValueError as e:
                raise ValidationError(f"{name}: {e}")
        data["id"] = new_id("job")
        data["created_at"] = utc_now_iso()
        job = Job.from_dict(data)

        with self._lock:
            self._jobs.insert(0, job)
        logger.info(f"Created job {job.id}: {job.title}")
        return job

    def delete(self, job_id: str) -> int:
        """Remove the job and every score referencing it. Returns the number of scores removed."""
        with self._lock:
            index = self._index(job_id)
            if index is None:
                raise NotFoundError("Job", job_id)
            del self._jobs[index]
            removed = self._scores.remove_for_job(job_id)
        logger.info(f"Deleted job {job_id} and {removed} scores")
        return removed

    def get(self, job_id: str) -> Job:
        with self._lock:
            index = self._index(job_id)
            if index is None:
                raise NotFoundError("Job", job_id)
            return self._jobs[index]

    def exists(self, job_id: str) -> bool:
        with self._lock:
            return self._index(job_id) is not None

    def list(self) -> List[Job]:
        with self._lock:
            return list(self._jobs)

    def search(self, query: str) -> List[Job]:
        needle = (query or "").strip().lower()
        jobs = self.list()
        if not needle:
            return jobs
        return [j for j in jobs if needle in j.title.lower() or needle in j.department.lower()]

    def replace_all(self, jobs: Iterable[Job]) -> None:
        with self._lock:
            self._jobs = list(jobs)

    def _index(self, job_id: str) -> Optional[int]:
        for i, job in enumerate(self._jobs):
            if job.id == job_id:
                return i
        return None


class CandidateRepository:
    """The shared talent pool, in insertion order. Candidates are never cascaded away."""

    def __init__(self, lock: threading.RLock):
        self._lock = lock
        self._candidates: List[Candidate] = []

    def create(self, fields: Dict[str, Any]) -> Candidate:
        data = dict(fields)
        data["id"] = new_id("cand")
        data["created_at"] = utc_now_iso()
        candidate = Candidate.from_dict(data)
        with self._lock:
            self._candidates.append(candidate)
        logger.info(f"Created candidate {candidate.id}: {candidate.name}")
        return candidate

    def get(self, candidate_id: str) -> Candidate:
        with self._lock:
            for candidate in self._candidates:
                if candidate.id == candidate_id:
                    return candidate
        raise NotFoundError("Candidate", candidate_id)

    def exists(self, candidate_id: str) -> bool:
        with self._lock:
            return any(c.id == candidate_id for c in self._candidates)

    def list(self) -> List[Candidate]:
        with self._lock:
            return list(self._candidates)

    def insertion_order(self) -> Dict[str, int]:
        with self._lock:
            return {c.id: i for i, c in enumerate(self._candidates)}

    def search(self, query: str) -> List[Candidate]:
        needle = (query or "").strip().lower()
        candidates = self.list()
        if not needle:
            return candidates
        return [
            c for c in candidates
            if needle in c.name.lower() or any(needle in s.lower() for s in c.skills)
        ]

    def replace_all(self, candidates: Iterable[Candidate]) -> None:
        with self._lock:
            self._candidates = list(candidates)


@dataclass
class Repositories:
    """The three repositories bound to one lock."""
    lock: threading.RLock = field(default_factory=threading.RLock)

    def __post_init__(self):
        self.scores = ScoreRepository(self.lock)
        self.jobs = JobRepository(self.lock, self.scores)
        self.candidates = CandidateRepository(self.lock)

    def commit_score(self, score: CandidateScore) -> bool:
        """Store a score unless its job or candidate has disappeared. Returns True if stored."""
        with self.lock:
            if not self.jobs.exists(score.job_id):
                logger.warning(f"Discarding score for deleted job {score.job_id}")
                return False
            if not self.candidates.exists(score.candidate_id):
                logger.warning(f"Discarding score for unknown candidate {score.candidate_id}")
                return False
            self.scores.upsert(score)
            return True
