#!/usr/bin/env python3
"""
Conversions from domain records to API response models.
"""

from core.models import Candidate, Job, Principal, TrialInfo
from core.scorer.models import CandidateScore
from pipeline.aggregator import PipelineEntry

from .models.responses import (
    CandidateResponse,
    JobResponse,
    PipelineEntryResponse,
    PrincipalResponse,
    ScoreResponse,
    TrialResponse,
)


def job_response(job: Job, candidate_count: int = 0) -> JobResponse:
    return JobResponse(**job.to_dict(), candidate_count=candidate_count)


def candidate_response(candidate: Candidate) -> CandidateResponse:
    data = candidate.to_dict()
    data.pop("raw_text", None)
    return CandidateResponse(**data)


def score_response(score: CandidateScore) -> ScoreResponse:
    return ScoreResponse(**score.to_dict())


def entry_response(entry: PipelineEntry) -> PipelineEntryResponse:
    return PipelineEntryResponse(
        rank=entry.rank,
        candidate=candidate_response(entry.candidate),
        score=score_response(entry.score),
        needs_tailoring=entry.needs_tailoring,
    )


def principal_response(principal: Principal) -> PrincipalResponse:
    return PrincipalResponse(
        username=principal.username,
        name=principal.name,
        role=principal.role,
        tier=principal.tier,
    )


def trial_response(trial: TrialInfo) -> TrialResponse:
    return TrialResponse(
        start_date=trial.start_date,
        is_expired=trial.is_expired,
        days_remaining=trial.days_remaining,
    )
