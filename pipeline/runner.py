"""Batch scoring runner.

Scores many candidates against one job concurrently. Each candidate is an
independent unit: a failure is recorded against that candidate and never
cancels or affects the others.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, List, Optional

from core.scorer.models import CandidateScore

logger = logging.getLogger(__name__)

ScoreOne = Callable[[str], Awaitable[Optional[CandidateScore]]]


@dataclass
class BatchResult:
    """Result of a batch scoring run."""
    job_id: str
    scored: List[CandidateScore] = field(default_factory=list)
    discarded: List[str] = field(default_factory=list)  # Superseded or stale results
    failures: Dict[str, str] = field(default_factory=dict)
    execution_time: float = 0.0

    @property
    def success(self) -> bool:
        return not self.failures


async def run_batch_scoring(
    job_id: str,
    candidate_ids: List[str],
    score_one: ScoreOne,
    max_concurrency: int = 4,
) -> BatchResult:
    """Run ``score_one`` for every candidate with bounded concurrency.

    Args:
        job_id: Job every candidate is scored against
        candidate_ids: Candidates to score, in submission order
        score_one: Coroutine scoring one candidate; returns the committed
            score, or None when the result was discarded
        max_concurrency: Upper bound on simultaneous oracle calls

    Returns:
        BatchResult; results keep submission order
    """
    start = time.time()
    semaphore = asyncio.Semaphore(max(1, max_concurrency))

    async def guarded(candidate_id: str) -> Optional[CandidateScore]:
        async with semaphore:
            return await score_one(candidate_id)

    logger.info(f"Batch scoring {len(candidate_ids)} candidates for job {job_id}")
    outcomes = await asyncio.gather(*(guarded(cid) for cid in candidate_ids), return_exceptions=True)

    result = BatchResult(job_id=job_id)
    for candidate_id, outcome in zip(candidate_ids, outcomes):
        if isinstance(outcome, asyncio.CancelledError):
            result.failures[candidate_id] = "cancelled"
        elif isinstance(outcome, Exception):
            logger.warning(f"Scoring failed for candidate {candidate_id}: {outcome}")
            result.failures[candidate_id] = str(outcome)
        elif outcome is None:
            result.discarded.append(candidate_id)
        else:
            result.scored.append(outcome)

    result.execution_time = time.time() - start
    logger.info(
        f"Batch for job {job_id} finished in {result.execution_time:.2f}s: "
        f"{len(result.scored)} scored, {len(result.discarded)} discarded, {len(result.failures)} failed"
    )
    return result
