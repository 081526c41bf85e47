#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring results.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Any


class MatchStatus(str, Enum):
    TOP_FIT = "top_fit"
    BORDERLINE = "borderline"
    NOT_SUITABLE = "not_suitable"


@dataclass
class ScoreBreakdown:
    """Sub-scores and overall score, each within [0, 100]."""
    skills_match: float = 0.0
    experience_match: float = 0.0
    education_match: float = 0.0
    location_match: float = 0.0
    overall_score: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {
            "skills_match": self.skills_match,
            "experience_match": self.experience_match,
            "education_match": self.education_match,
            "location_match": self.location_match,
            "overall_score": self.overall_score,
        }


@dataclass
class CandidateScore:
    """Result of matching one candidate against one job; unique per (candidate_id, job_id)."""
    candidate_id: str
    job_id: str
    score: ScoreBreakdown
    status: MatchStatus
    analysis: str = ""
    mismatch_reason: str = ""
    flags: List[str] = field(default_factory=list)
    has_tailoring_potential: bool = False
    transferable_skills: List[str] = field(default_factory=list)
    scored_at: str = ""

    @property
    def key(self) -> tuple:
        return (self.candidate_id, self.job_id)

    @property
    def overall_score(self) -> float:
        return self.score.overall_score

    def to_dict(self) -> Dict[str, Any]:
        return {
            "candidate_id": self.candidate_id,
            "job_id": self.job_id,
            "score": self.score.to_dict(),
            "status": self.status.value,
            "analysis": self.analysis,
            "mismatch_reason": self.mismatch_reason,
            "flags": list(self.flags),
            "has_tailoring_potential": self.has_tailoring_potential,
            "transferable_skills": list(self.transferable_skills),
            "scored_at": self.scored_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CandidateScore":
        breakdown = data.get("score") or {}
        return cls(
            candidate_id=data["candidate_id"],
            job_id=data["job_id"],
            score=ScoreBreakdown(
                skills_match=float(breakdown.get("skills_match", 0.0)),
                experience_match=float(breakdown.get("experience_match", 0.0)),
                education_match=float(breakdown.get("education_match", 0.0)),
                location_match=float(breakdown.get("location_match", 0.0)),
                overall_score=float(breakdown.get("overall_score", 0.0)),
            ),
            status=MatchStatus(data.get("status", MatchStatus.NOT_SUITABLE.value)),
            analysis=data.get("analysis") or "",
            mismatch_reason=data.get("mismatch_reason") or "",
            flags=list(data.get("flags") or []),
            has_tailoring_potential=bool(data.get("has_tailoring_potential", False)),
            transferable_skills=list(data.get("transferable_skills") or []),
            scored_at=data.get("scored_at") or "",
        )
