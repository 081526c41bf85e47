#!/usr/bin/env python3
"""
Screening Models - Jobs, candidates and the artefacts the oracle produces for them.

All records serialize to plain dicts (``to_dict``) for the snapshot store and are
rebuilt with ``from_dict``, which fills any missing or null field with its
empty default so that nothing downstream has to handle None.
"""

from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any, Optional


def _str(value: Any, default: str = "") -> str:
    return default if value is None else str(value)


def _str_list(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value if v is not None]


def _number(value: Any, default: float = 0.0) -> float:
    try:
        return float(value) if value is not None else default
    except (TypeError, ValueError):
        return default


@dataclass
class Job:
    """An open requisition. Immutable once created except for deletion."""
    id: str
    title: str
    department: str = ""
    location: str = ""
    description: str = ""
    min_years_experience: int = 0
    required_skills: List[str] = field(default_factory=list)
    nice_to_have_skills: List[str] = field(default_factory=list)
    required_certifications: List[str] = field(default_factory=list)
    education_level: str = "Bachelors"
    salary_band: Optional[str] = None
    created_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Job":
        return cls(
            id=_str(data.get("id")),
            title=_str(data.get("title")),
            department=_str(data.get("department")),
            location=_str(data.get("location")),
            description=_str(data.get("description")),
            min_years_experience=int(_number(data.get("min_years_experience"))),
            required_skills=_str_list(data.get("required_skills")),
            nice_to_have_skills=_str_list(data.get("nice_to_have_skills")),
            required_certifications=_str_list(data.get("required_certifications")),
            education_level=_str(data.get("education_level"), "Bachelors"),
            salary_band=data.get("salary_band") or None,
            created_at=_str(data.get("created_at")),
        )


@dataclass
class Experience:
    title: str = ""
    company: str = ""
    duration: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Experience":
        data = data or {}
        return cls(
            title=_str(data.get("title")),
            company=_str(data.get("company")),
            duration=_str(data.get("duration")),
            description=_str(data.get("description")),
        )


@dataclass
class Candidate:
    """A parsed applicant profile, shared by reference across any number of jobs."""
    id: str
    name: str = "Anonymous Applicant"
    email: str = ""
    phone: str = ""
    location: str = ""
    summary: str = ""
    total_years_experience: float = 0.0
    skills: List[str] = field(default_factory=list)
    education: List[str] = field(default_factory=list)
    experience: List[Experience] = field(default_factory=list)
    certifications: List[str] = field(default_factory=list)
    raw_text: str = ""
    created_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Candidate":
        return cls(
            id=_str(data.get("id")),
            name=_str(data.get("name")) or "Anonymous Applicant",
            email=_str(data.get("email")),
            phone=_str(data.get("phone")),
            location=_str(data.get("location")),
            summary=_str(data.get("summary")),
            total_years_experience=_number(data.get("total_years_experience")),
            skills=_str_list(data.get("skills")),
            education=_str_list(data.get("education")),
            experience=[Experience.from_dict(e) for e in data.get("experience") or [] if isinstance(e, dict)],
            certifications=_str_list(data.get("certifications")),
            raw_text=_str(data.get("raw_text")),
            created_at=_str(data.get("created_at")),
        )


@dataclass
class ExperienceRewrite:
    original_title: str = ""
    suggested_bullets: List[str] = field(default_factory=list)


@dataclass
class TailoredResume:
    """Reframing suggestion for one candidate against one job."""
    candidate_id: str
    job_id: str
    suggested_summary: str = ""
    optimized_experience: List[ExperienceRewrite] = field(default_factory=list)
    justification: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class TalentReport:
    """Aggregate assessment of a whole pipeline."""
    job_id: str
    summary: str
    strengths: List[str]
    weaknesses: List[str]
    recommendation: str
    pipeline_health_score: float
    generated_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ResumeBuilderData:
    """Editable resume structure used by the resume builder before any scoring."""
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    summary: str = ""
    skills: List[str] = field(default_factory=list)
    experience: List[Experience] = field(default_factory=list)
    education: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResumeBuilderData":
        return cls(
            name=_str(data.get("name")),
            email=_str(data.get("email")),
            phone=_str(data.get("phone")),
            location=_str(data.get("location")),
            summary=_str(data.get("summary")),
            skills=_str_list(data.get("skills")),
            experience=[Experience.from_dict(e) for e in data.get("experience") or [] if isinstance(e, dict)],
            education=_str_list(data.get("education")),
        )


def default_notifications() -> Dict[str, bool]:
    return {"email": True, "browser": False, "summary": True}


@dataclass
class RecruiterSettings:
    user_name: str = "Guest Recruiter"
    user_role: str = "Talent Partner"
    scoring_threshold: float = 75.0  # Shortlist cut-off shown on pipelines
    auto_archive: bool = True
    notifications: Dict[str, bool] = field(default_factory=default_notifications)
    ai_model: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], ai_model: str = "") -> "RecruiterSettings":
        notifications = default_notifications()
        notifications.update({k: bool(v) for k, v in (data.get("notifications") or {}).items()})
        defaults = cls()
        return cls(
            user_name=_str(data.get("user_name"), defaults.user_name),
            user_role=_str(data.get("user_role"), defaults.user_role),
            scoring_threshold=_number(data.get("scoring_threshold"), defaults.scoring_threshold),
            auto_archive=bool(data.get("auto_archive", defaults.auto_archive)),
            notifications=notifications,
            ai_model=_str(data.get("ai_model")) or ai_model,
        )


@dataclass
class Principal:
    """The authenticated recruiter gating access to everything else."""
    username: str
    name: str
    role: str = "Recruiter"
    tier: str = "free"  # free|pro
    last_activity_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Principal":
        return cls(
            username=_str(data.get("username")),
            name=_str(data.get("name")),
            role=_str(data.get("role"), "Recruiter"),
            tier=_str(data.get("tier"), "free"),
            last_activity_at=_str(data.get("last_activity_at")),
        )


@dataclass
class TrialInfo:
    start_date: str
    is_expired: bool
    days_remaining: int
