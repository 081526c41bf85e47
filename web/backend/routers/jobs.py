#!/usr/bin/env python3
"""
Job endpoints - requisitions, their pipelines and everything scored against them.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, Request, UploadFile
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from core.screening_service import ScreeningService
from etl.resume import ResumeParser

from ..config import get_config
from ..dependencies import get_active_screening, get_screening
from ..models.requests import JobCreateRequest, JobParseRequest
from ..models.responses import (
    BatchUploadResponse,
    DeleteJobResponse,
    JobDraftResponse,
    JobResponse,
    JobsResponse,
    PipelineResponse,
    ReportResponse,
    ScoreResultResponse,
    TailoredResumeResponse,
    UploadResponse,
)
from ..utils import candidate_response, entry_response, job_response, score_response

logger = logging.getLogger(__name__)

RESUME_MAX_SIZE = 5 * 1024 * 1024
UPLOAD_RATE_LIMIT = get_config().web.upload_rate_limit

limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


def add_rate_limit_handlers(app):
    """Add rate limit exception handlers to the FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"success": False, "error": str(exc), "type": "RateLimitExceeded"}
    )


async def _read_upload(file: UploadFile) -> bytes:
    """Validate name, format and size of an upload and return its bytes."""
    if not file.filename:
        raise HTTPException(status_code=400, detail="No file provided")

    if not ResumeParser().is_supported(file.filename):
        supported = ', '.join(ResumeParser.get_supported_formats())
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file format. Supported formats: {supported}"
        )

    content = await file.read()
    if len(content) == 0:
        raise HTTPException(status_code=400, detail=f"Empty file: {file.filename}")
    if len(content) > RESUME_MAX_SIZE:
        raise HTTPException(status_code=400, detail=f"File size exceeds {RESUME_MAX_SIZE // (1024*1024)}MB limit")
    return content


@router.get("", response_model=JobsResponse)
def list_jobs(
    q: Optional[str] = Query(default=None, description="Search title or department"),
    screening: ScreeningService = Depends(get_screening),
):
    """List requisitions, newest first."""
    counts = screening.dashboard().candidates_per_job
    jobs = [job_response(job, counts.get(job.id, 0)) for job in screening.list_jobs(q)]
    return JobsResponse(count=len(jobs), jobs=jobs)


@router.post("", response_model=JobResponse, status_code=201)
def create_job(body: JobCreateRequest, screening: ScreeningService = Depends(get_screening)):
    job = screening.create_job(body.model_dump())
    return job_response(job)


@router.post("/parse", response_model=JobDraftResponse)
async def parse_job(body: JobParseRequest, screening: ScreeningService = Depends(get_active_screening)):
    """
    AI auto-fill: parse a raw description into job fields.

    Parsed values replace the submitted form values; form values survive
    only where the parser found nothing. Nothing is saved.
    """
    draft = await screening.autofill_job(body.text, body.form)
    return JobDraftResponse(draft=draft)


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: str, screening: ScreeningService = Depends(get_screening)):
    job = screening.get_job(job_id)
    return job_response(job, screening.state.repos.scores.count_for_job(job_id))


@router.delete("/{job_id}", response_model=DeleteJobResponse)
def delete_job(job_id: str, screening: ScreeningService = Depends(get_screening)):
    """Delete a requisition and every score against it. Candidates stay in the talent pool."""
    removed = screening.delete_job(job_id)
    return DeleteJobResponse(job_id=job_id, removed_scores=removed)


@router.get("/{job_id}/pipeline", response_model=PipelineResponse)
def get_pipeline(job_id: str, screening: ScreeningService = Depends(get_screening)):
    """Ranked candidates for a job with bucket counts and average score."""
    summary = screening.pipeline(job_id)
    return PipelineResponse(
        job_id=job_id,
        size=summary.size,
        average_score=summary.average_score,
        above_threshold=summary.above_threshold,
        scoring_threshold=screening.settings.scoring_threshold,
        status_counts=summary.status_counts,
        entries=[entry_response(e) for e in summary.entries],
    )


@router.post("/{job_id}/resumes", response_model=UploadResponse)
@limiter.limit(UPLOAD_RATE_LIMIT)
async def upload_resume(
    request: Request,
    job_id: str,
    file: UploadFile = File(...),
    screening: ScreeningService = Depends(get_active_screening),
):
    """
    Upload one resume, parse it into a candidate and score it against the job.

    Supports: .json, .yaml, .yml, .txt, .docx, .pdf. The file is processed in
    memory and never written to disk. If scoring fails the candidate is kept
    unscored and the error is returned.
    """
    content = await _read_upload(file)
    outcome = await screening.ingest_resume(job_id, content, file.filename)
    return UploadResponse(
        success=outcome.error is None,
        candidate=candidate_response(outcome.candidate),
        score=score_response(outcome.score) if outcome.score else None,
        error=outcome.error,
    )


@router.post("/{job_id}/resumes/batch", response_model=BatchUploadResponse)
@limiter.limit(UPLOAD_RATE_LIMIT)
async def upload_resumes_batch(
    request: Request,
    job_id: str,
    files: List[UploadFile] = File(...),
    screening: ScreeningService = Depends(get_active_screening),
):
    """Upload several resumes; they are scored concurrently and fail independently."""
    uploads = []
    rejected = {}
    for file in files:
        try:
            uploads.append((await _read_upload(file), file.filename))
        except HTTPException as e:
            rejected[file.filename or "<unnamed>"] = e.detail

    outcome = await screening.ingest_batch(job_id, uploads)
    scoring = outcome.scoring
    parse_failures = {**rejected, **outcome.parse_failures}

    return BatchUploadResponse(
        success=not parse_failures and scoring.success,
        job_id=job_id,
        candidates=[candidate_response(c) for c in outcome.candidates],
        scores=[score_response(s) for s in scoring.scored],
        parse_failures=parse_failures,
        scoring_failures=scoring.failures,
        discarded=scoring.discarded,
        execution_time=scoring.execution_time,
    )


@router.post("/{job_id}/candidates/{candidate_id}/score", response_model=ScoreResultResponse)
async def score_candidate(
    job_id: str,
    candidate_id: str,
    screening: ScreeningService = Depends(get_active_screening),
):
    """Score (or re-score) an existing candidate; a newer score replaces the old one."""
    score = await screening.score_candidate(job_id, candidate_id)
    if score is None:
        return ScoreResultResponse(
            success=False,
            message="Result discarded: superseded by a newer scoring request or the job was deleted",
        )
    return ScoreResultResponse(score=score_response(score))


@router.post("/{job_id}/candidates/{candidate_id}/tailor", response_model=TailoredResumeResponse)
async def tailor_candidate(
    job_id: str,
    candidate_id: str,
    screening: ScreeningService = Depends(get_active_screening),
):
    """Suggest a reframed summary and experience bullets for this job."""
    result = await screening.tailor(job_id, candidate_id)
    if result is None:
        raise HTTPException(status_code=409, detail="Another job was selected while tailoring; result discarded")
    return TailoredResumeResponse(**result.to_dict())


@router.post("/{job_id}/report", response_model=ReportResponse)
async def generate_report(job_id: str, screening: ScreeningService = Depends(get_active_screening)):
    """Talent intelligence report for the whole pipeline; the pipeline must not be empty."""
    report = await screening.generate_report(job_id)
    if report is None:
        raise HTTPException(status_code=409, detail="Another job was selected while reporting; result discarded")
    return ReportResponse(**report.to_dict())
