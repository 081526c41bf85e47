"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For oracle and storage doubles, see tests/mocks/oracle_mocks.py
"""

import pytest

from core.assistant_service import AssistantService
from core.config_loader import AppConfig
from core.llm.oracle import OracleClient
from core.report_service import ReportService
from core.scorer import ScoringService, ThresholdPolicy
from core.screening_service import ScreeningService
from core.state.app_state import AppState
from core.tailoring_service import TailoringService
from database.database import init_db, make_session_factory
from etl.ingestion import IngestionService
from tests.mocks.oracle_mocks import MemorySnapshotStore, ScriptedLLMProvider


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as using a SQLite database file (deselect with '-m \"not db\"')"
    )


@pytest.fixture
def provider():
    return ScriptedLLMProvider()


@pytest.fixture
def oracle(provider):
    return OracleClient(provider, report_model="report-model")


@pytest.fixture
def store():
    return MemorySnapshotStore()


@pytest.fixture
def app_state(store):
    state = AppState(store, namespace="smartscreen", ai_model="test-model")
    state.load()
    return state


@pytest.fixture
def screening(app_state, oracle):
    """Controller wired to the scripted oracle and an in-memory store."""
    return ScreeningService(
        state=app_state,
        ingestion=IngestionService(oracle),
        scoring=ScoringService(oracle, ThresholdPolicy()),
        tailoring=TailoringService(oracle),
        reports=ReportService(oracle),
        assistant=AssistantService(oracle),
        max_concurrency=4,
    )


@pytest.fixture
def session_factory(tmp_path):
    """SQLite database in a temp directory with all tables created."""
    factory = make_session_factory(f"sqlite:///{tmp_path / 'smartscreen.db'}")
    init_db(factory)
    return factory


@pytest.fixture
def app_config(tmp_path):
    return AppConfig.model_validate({
        "database": {"url": f"sqlite:///{tmp_path / 'smartscreen.db'}"},
        "llm": {"model": "test-model"},
    })
