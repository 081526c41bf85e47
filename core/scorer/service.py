#!/usr/bin/env python3
"""
Scoring Service - the scoring oracle client.

Sends one (job, candidate) pair to the oracle and turns the reply into a
validated CandidateScore:
- every sub-score and the overall score is clamped to [0, 100]
- status is derived locally from the overall score and the threshold policy
- a mismatch reason is required for anything that is not a top fit
- tailoring potential and transferable skills are kept exactly as returned

Any failure raises ScoreGenerationError (or OracleUnavailableError) and
produces no Score at all; persisting the result is the caller's job.
"""

from typing import Any, Dict
import logging

from core.exceptions import MalformedResponseError, ScoreGenerationError
from core.llm.oracle import OracleClient, OracleTask
from core.models import Candidate, Job
from core.scorer.models import CandidateScore, MatchStatus, ScoreBreakdown
from core.scorer.thresholds import ThresholdPolicy
from core.utils import clamp_score, coerce_str_list, utc_now_iso

logger = logging.getLogger(__name__)

SUB_SCORES = ("skills_match", "experience_match", "education_match", "location_match")


def build_score(
    data: Dict[str, Any],
    candidate_id: str,
    job_id: str,
    policy: ThresholdPolicy,
) -> CandidateScore:
    """Validate a decoded oracle reply and build the CandidateScore.

    Raises:
        ScoreGenerationError: If required fields are missing, not numeric, or list
            fields are neither lists nor strings.
    """
    breakdown = data.get("score")
    if not isinstance(breakdown, dict) or breakdown.get("overall_score") is None:
        raise ScoreGenerationError("Oracle reply is missing score.overall_score", task=OracleTask.SCORE.value)

    try:
        overall = clamp_score(breakdown["overall_score"])
        subs = {name: clamp_score(breakdown.get(name) or 0) for name in SUB_SCORES}
    except (TypeError, ValueError) as e:
        raise ScoreGenerationError(f"Non-numeric score in oracle reply: {e}", task=OracleTask.SCORE.value)

    try:
        flags = coerce_str_list(data.get("flags"))
        transferable_skills = coerce_str_list(data.get("transferable_skills"))
    except ValueError as e:
        raise ScoreGenerationError(f"Malformed list field in oracle reply: {e}", task=OracleTask.SCORE.value)

    status = policy.classify(overall)
    oracle_status = data.get("status")
    if oracle_status and oracle_status != status.value:
        logger.debug(
            f"Oracle status {oracle_status!r} disagrees with policy status {status.value!r} "
            f"for overall={overall}; using policy"
        )

    mismatch_reason = str(data.get("mismatch_reason") or "").strip()
    if status is not MatchStatus.TOP_FIT and not mismatch_reason:
        raise ScoreGenerationError(
            f"Oracle reply has no mismatch_reason for a {status.value} candidate",
            task=OracleTask.SCORE.value,
        )

    return CandidateScore(
        candidate_id=candidate_id,
        job_id=job_id,
        score=ScoreBreakdown(overall_score=overall, **subs),
        status=status,
        analysis=str(data.get("analysis") or ""),
        mismatch_reason=mismatch_reason,
        flags=flags,
        has_tailoring_potential=data.get("has_tailoring_potential") is True,
        transferable_skills=transferable_skills,
        scored_at=utc_now_iso(),
    )


class ScoringService:
    """Scores candidates against jobs through the oracle."""

    def __init__(self, oracle: OracleClient, policy: ThresholdPolicy):
        self.oracle = oracle
        self.policy = policy

    async def score(self, job: Job, candidate: Candidate) -> CandidateScore:
        """Produce exactly one Score for the pair, or raise.

        Raises:
            ScoreGenerationError: Malformed or incomplete oracle output.
            OracleUnavailableError: The oracle could not be reached.
        """
        logger.info(f"Scoring candidate {candidate.id} against job {job.id}")
        try:
            data = await self.oracle.call_json(
                OracleTask.SCORE,
                {"job": job.to_dict(), "candidate": candidate.to_dict()},
            )
        except MalformedResponseError as e:
            raise ScoreGenerationError(str(e), task=OracleTask.SCORE.value) from e

        score = build_score(data, candidate.id, job.id, self.policy)
        logger.info(
            f"Scored candidate {candidate.id} for job {job.id}: "
            f"{score.overall_score:.1f} ({score.status.value})"
        )
        return score
