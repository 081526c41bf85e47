#!/usr/bin/env python3
"""
Resume builder endpoints - polish or tailor a draft resume before it is scored.
"""

from fastapi import APIRouter, Depends

from core.models import ResumeBuilderData
from core.screening_service import ScreeningService

from ..dependencies import get_active_screening
from ..models.requests import EnhanceRequest, ResumeBuilderTailorRequest
from ..models.responses import EnhanceResponse, ResumeBuilderResponse

router = APIRouter(prefix="/api/resume-builder", tags=["resume-builder"])


@router.post("/enhance", response_model=EnhanceResponse)
async def enhance(body: EnhanceRequest, screening: ScreeningService = Depends(get_active_screening)):
    """Rewrite a summary or experience section in a more professional register."""
    content = await screening.enhance_content(body.kind, body.content)
    return EnhanceResponse(content=content)


@router.post("/tailor", response_model=ResumeBuilderResponse)
async def tailor(body: ResumeBuilderTailorRequest, screening: ScreeningService = Depends(get_active_screening)):
    """Align the whole draft with a job description, keeping its structure."""
    result = await screening.tailor_builder_data(ResumeBuilderData.from_dict(body.data), body.job_description)
    return ResumeBuilderResponse(data=result.to_dict())
