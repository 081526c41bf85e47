"""API route handlers."""

from .auth import router as auth_router
from .jobs import router as jobs_router
from .candidates import router as candidates_router
from .dashboard import router as dashboard_router
from .settings import router as settings_router
from .assistant import router as assistant_router
from .resume_builder import router as resume_builder_router
