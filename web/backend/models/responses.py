#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict


class PrincipalResponse(BaseModel):
    username: str
    name: str
    role: str
    tier: str


class TrialResponse(BaseModel):
    start_date: str
    is_expired: bool
    days_remaining: int = Field(ge=0)


class AuthResponse(BaseModel):
    success: bool = True
    user: Optional[PrincipalResponse] = None
    trial: Optional[TrialResponse] = None
    message: str = ""


class JobResponse(BaseModel):
    id: str
    title: str
    department: str
    location: str
    description: str
    min_years_experience: int
    required_skills: List[str]
    nice_to_have_skills: List[str]
    required_certifications: List[str]
    education_level: str
    salary_band: Optional[str]
    created_at: str
    candidate_count: int = 0


class JobsResponse(BaseModel):
    success: bool = True
    count: int
    jobs: List[JobResponse]


class JobDraftResponse(BaseModel):
    """Merged auto-fill result; the client populates its form with it."""
    success: bool = True
    draft: Dict[str, object]


class DeleteJobResponse(BaseModel):
    success: bool = True
    job_id: str
    removed_scores: int


class ExperienceResponse(BaseModel):
    title: str
    company: str
    duration: str
    description: str


class CandidateResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    location: str
    summary: str
    total_years_experience: float
    skills: List[str]
    education: List[str]
    experience: List[ExperienceResponse]
    certifications: List[str]
    created_at: str


class CandidatesResponse(BaseModel):
    success: bool = True
    count: int
    candidates: List[CandidateResponse]


class ScoreBreakdownResponse(BaseModel):
    skills_match: float = Field(ge=0, le=100)
    experience_match: float = Field(ge=0, le=100)
    education_match: float = Field(ge=0, le=100)
    location_match: float = Field(ge=0, le=100)
    overall_score: float = Field(ge=0, le=100)


class ScoreResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "candidate_id": "cand-3f9a1c2b7d4e",
                "job_id": "job-8b2e6f0a1c3d",
                "score": {
                    "skills_match": 90,
                    "experience_match": 85,
                    "education_match": 80,
                    "location_match": 100,
                    "overall_score": 88
                },
                "status": "top_fit",
                "analysis": "Strong Go background with production Rust.",
                "mismatch_reason": "",
                "flags": [],
                "has_tailoring_potential": False,
                "transferable_skills": [],
                "scored_at": "2026-02-01T12:00:00+00:00"
            }
        }
    )

    candidate_id: str
    job_id: str
    score: ScoreBreakdownResponse
    status: str
    analysis: str
    mismatch_reason: str
    flags: List[str]
    has_tailoring_potential: bool
    transferable_skills: List[str]
    scored_at: str


class ScoreResultResponse(BaseModel):
    """Outcome of one scoring call; ``score`` is null when the result was discarded."""
    success: bool = True
    score: Optional[ScoreResponse] = None
    message: str = ""


class PipelineEntryResponse(BaseModel):
    rank: int
    candidate: CandidateResponse
    score: ScoreResponse
    needs_tailoring: bool


class PipelineResponse(BaseModel):
    success: bool = True
    job_id: str
    size: int
    average_score: float
    above_threshold: int
    scoring_threshold: float
    status_counts: Dict[str, int]
    entries: List[PipelineEntryResponse]


class UploadResponse(BaseModel):
    success: bool
    candidate: CandidateResponse
    score: Optional[ScoreResponse] = None
    error: Optional[str] = None


class BatchUploadResponse(BaseModel):
    success: bool
    job_id: str
    candidates: List[CandidateResponse]
    scores: List[ScoreResponse]
    parse_failures: Dict[str, str]
    scoring_failures: Dict[str, str]
    discarded: List[str]
    execution_time: float


class ExperienceRewriteResponse(BaseModel):
    original_title: str
    suggested_bullets: List[str]


class TailoredResumeResponse(BaseModel):
    success: bool = True
    candidate_id: str
    job_id: str
    suggested_summary: str
    optimized_experience: List[ExperienceRewriteResponse]
    justification: str


class ReportResponse(BaseModel):
    success: bool = True
    job_id: str
    summary: str
    strengths: List[str]
    weaknesses: List[str]
    recommendation: str
    pipeline_health_score: float = Field(ge=0, le=100)
    generated_at: str


class DashboardResponse(BaseModel):
    total_jobs: int
    total_candidates: int
    total_scores: int
    top_fit_matches: int
    candidates_per_job: Dict[str, int]


class SettingsResponse(BaseModel):
    user_name: str
    user_role: str
    scoring_threshold: float
    auto_archive: bool
    notifications: Dict[str, bool]
    ai_model: str


class AssistantResponse(BaseModel):
    success: bool = True
    reply: str


class EnhanceResponse(BaseModel):
    success: bool = True
    content: str


class ResumeBuilderResponse(BaseModel):
    success: bool = True
    data: Dict[str, object]
