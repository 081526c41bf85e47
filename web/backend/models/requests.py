#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class SignUpRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    name: str = Field(default="", description="Display name; defaults to the username")


class LoginRequest(BaseModel):
    username: str
    password: str


class ResetPasswordRequest(BaseModel):
    username: str
    new_password: str = Field(..., min_length=1)


class JobCreateRequest(BaseModel):
    """Request to open a requisition."""
    title: str = Field(..., min_length=1)
    department: str = ""
    location: str = ""
    description: str = ""
    min_years_experience: int = Field(default=0, ge=0)
    required_skills: List[str] = Field(default_factory=list)
    nice_to_have_skills: List[str] = Field(default_factory=list)
    required_certifications: List[str] = Field(default_factory=list)
    education_level: str = "Bachelors"
    salary_band: Optional[str] = None


class JobParseRequest(BaseModel):
    """AI auto-fill: parse a description and merge it over the current form."""
    text: str = Field(..., min_length=1, description="Raw job description")
    form: Dict[str, Any] = Field(default_factory=dict, description="Values already typed into the form")


class SettingsUpdate(BaseModel):
    """Partial settings update; omitted fields keep their values."""
    user_name: Optional[str] = None
    user_role: Optional[str] = None
    scoring_threshold: Optional[float] = Field(None, ge=0, le=100)
    auto_archive: Optional[bool] = None
    notifications: Optional[Dict[str, bool]] = None
    ai_model: Optional[str] = None


class AssistantRequest(BaseModel):
    query: str = Field(..., min_length=1)
    current_view: str = Field(default="dashboard", description="View the recruiter is looking at")


class EnhanceRequest(BaseModel):
    kind: str = Field(..., description="summary or experience")
    content: str = Field(..., min_length=1)


class ResumeBuilderTailorRequest(BaseModel):
    data: Dict[str, Any] = Field(..., description="Resume builder data")
    job_description: str = Field(..., min_length=1)
