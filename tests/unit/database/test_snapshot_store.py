"""
Tests for the SQL-backed snapshot store and its repositories (SQLite in a temp dir).
"""
import pytest

from core.state.app_state import AppState
from database.snapshot import SnapshotStore
from database.uow import state_uow

pytestmark = pytest.mark.db


def test_save_load_and_overwrite(session_factory):
    store = SnapshotStore(session_factory)

    store.save("smartscreen", "jobs", [{"id": "job-1", "title": "Engineer"}])
    store.save("smartscreen", "jobs", [])
    store.save("smartscreen", "settings", {"scoring_threshold": 80})

    assert store.load("smartscreen") == {"jobs": [], "settings": {"scoring_threshold": 80}}


def test_namespaces_are_isolated(session_factory):
    store = SnapshotStore(session_factory)
    store.save("a", "jobs", [1])
    store.save("b", "jobs", [2])

    assert store.load("a") == {"jobs": [1]}
    assert store.load("missing") == {}


def test_delete(session_factory):
    store = SnapshotStore(session_factory)
    store.save("smartscreen", "session", {"username": "sam"})

    store.delete("smartscreen", "session")
    store.delete("smartscreen", "session")

    assert store.load("smartscreen") == {}
    with state_uow(session_factory) as repo:
        assert repo.get("smartscreen", "session") is None
        assert repo.delete("smartscreen", "session") is False


def test_app_state_survives_restart(session_factory):
    state = AppState(SnapshotStore(session_factory), ai_model="m")
    state.load()
    job = state.add_job({"title": "Engineer", "required_skills": ["Go"]})
    state.add_candidate({"name": "Ada", "skills": ["Go"]})
    state.update_settings({"scoring_threshold": 82})

    restarted = AppState(SnapshotStore(session_factory), ai_model="m")
    restarted.load()

    assert restarted.repos.jobs.get(job.id).title == "Engineer"
    assert [c.name for c in restarted.repos.candidates.list()] == ["Ada"]
    assert restarted.settings.scoring_threshold == 82
