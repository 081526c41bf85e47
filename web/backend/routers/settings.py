#!/usr/bin/env python3
"""
Settings endpoints - recruiter profile and preferences.
"""

import logging
from fastapi import APIRouter, Depends

from core.screening_service import ScreeningService

from ..dependencies import get_screening
from ..models.requests import SettingsUpdate
from ..models.responses import SettingsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("", response_model=SettingsResponse)
def get_settings(screening: ScreeningService = Depends(get_screening)):
    return SettingsResponse(**screening.settings.to_dict())


@router.patch("", response_model=SettingsResponse)
def update_settings(body: SettingsUpdate, screening: ScreeningService = Depends(get_screening)):
    """
    Merge a partial update into the current settings.

    Notification flags are merged key by key.
    """
    settings = screening.update_settings(body.model_dump(exclude_none=True))
    logger.info(f"Settings updated: {sorted(body.model_dump(exclude_none=True))}")
    return SettingsResponse(**settings.to_dict())
