#!/usr/bin/env python3
"""
Candidate endpoints - the shared talent pool.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from core.screening_service import ScreeningService

from ..dependencies import get_screening
from ..models.responses import CandidateResponse, CandidatesResponse
from ..utils import candidate_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/candidates", tags=["candidates"])


@router.get("", response_model=CandidatesResponse)
def list_candidates(
    q: Optional[str] = Query(default=None, description="Search name or skills"),
    screening: ScreeningService = Depends(get_screening),
):
    candidates = [candidate_response(c) for c in screening.list_candidates(q)]
    return CandidatesResponse(count=len(candidates), candidates=candidates)


@router.get("/{candidate_id}", response_model=CandidateResponse)
def get_candidate(candidate_id: str, screening: ScreeningService = Depends(get_screening)):
    return candidate_response(screening.get_candidate(candidate_id))
