#!/usr/bin/env python3
"""
Assistant endpoint - recruiting chat aware of the current view and job.
"""

from fastapi import APIRouter, Depends

from core.screening_service import ScreeningService

from ..dependencies import get_active_screening
from ..models.requests import AssistantRequest
from ..models.responses import AssistantResponse

router = APIRouter(prefix="/api/assistant", tags=["assistant"])


@router.post("", response_model=AssistantResponse)
async def ask_assistant(body: AssistantRequest, screening: ScreeningService = Depends(get_active_screening)):
    reply = await screening.ask(body.query, body.current_view)
    return AssistantResponse(reply=reply)
