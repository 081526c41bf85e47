#!/usr/bin/env python3
"""
Dashboard endpoint - totals across all requisitions.
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from core.screening_service import ScreeningService

from ..dependencies import get_screening
from ..models.responses import DashboardResponse

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
def get_dashboard(screening: ScreeningService = Depends(get_screening)):
    return DashboardResponse(**asdict(screening.dashboard()))
