"""
Unit tests for AppState: snapshot load/persist, settings and session handling.
"""
import pytest

from core.exceptions import ValidationError
from core.models import Principal, TalentReport
from core.state.app_state import AppState
from tests.mocks.oracle_mocks import MemorySnapshotStore


class TestLoad:
    def test_empty_store_gives_defaults(self, app_state):
        assert app_state.repos.jobs.list() == []
        assert app_state.principal is None
        assert app_state.settings.scoring_threshold == 75.0
        assert app_state.settings.ai_model == "test-model"

    def test_missing_and_null_fields_filled(self):
        store = MemorySnapshotStore({"smartscreen": {
            "jobs": [{"id": "job-1", "title": "Engineer", "required_skills": None}],
            "candidates": [{"id": "cand-1", "name": None, "skills": "Go"}],
            "settings": {"scoring_threshold": 80},
        }})
        state = AppState(store, ai_model="m")
        state.load()

        job = state.repos.jobs.get("job-1")
        assert job.required_skills == []
        assert job.education_level == "Bachelors"
        candidate = state.repos.candidates.get("cand-1")
        assert candidate.name == "Anonymous Applicant"
        assert candidate.skills == ["Go"]
        assert state.settings.scoring_threshold == 80
        assert state.settings.notifications == {"email": True, "browser": False, "summary": True}

    def test_round_trip_through_store(self, store, app_state):
        job = app_state.add_job({"title": "Engineer", "required_skills": ["Go"]})
        app_state.add_candidate({"name": "Ada"})
        app_state.set_principal(Principal(username="sam", name="Sam"))

        reloaded = AppState(store, ai_model="test-model")
        reloaded.load()

        assert reloaded.repos.jobs.get(job.id).required_skills == ["Go"]
        assert [c.name for c in reloaded.repos.candidates.list()] == ["Ada"]
        assert reloaded.principal.username == "sam"


class TestMutations:
    def test_each_mutation_persists_its_collection(self, store, app_state):
        job = app_state.add_job({"title": "Engineer"})
        app_state.delete_job(job.id)

        assert store.saves == [
            ("smartscreen", "jobs"),
            ("smartscreen", "jobs"),
            ("smartscreen", "scores"),
        ]
        assert store.data["smartscreen"]["jobs"] == []

    def test_settings_merge_keeps_unchanged_fields(self, app_state):
        settings = app_state.update_settings({"user_name": "Sam", "notifications": {"browser": True}, "bogus": 1})

        assert settings.user_name == "Sam"
        assert settings.user_role == "Talent Partner"
        assert settings.notifications == {"email": True, "browser": True, "summary": True}

    @pytest.mark.parametrize("threshold", [-1, 100.5])
    def test_threshold_out_of_range_rejected(self, app_state, threshold):
        with pytest.raises(ValidationError):
            app_state.update_settings({"scoring_threshold": threshold})
        assert app_state.settings.scoring_threshold == 75.0

    def test_clear_session_drops_principal_and_transients(self, store, app_state):
        app_state.set_principal(Principal(username="sam", name="Sam"))
        app_state.selected_job_id = "job-1"
        app_state.active_report = TalentReport("job-1", "s", [], [], "r", 50)

        app_state.clear_session()

        assert app_state.principal is None
        assert app_state.selected_job_id is None
        assert app_state.active_report is None
        assert "session" not in store.data["smartscreen"]

    def test_selecting_another_job_clears_results(self, app_state):
        app_state.select_job("job-1")
        app_state.active_report = TalentReport("job-1", "s", [], [], "r", 50)

        app_state.select_job("job-1")
        assert app_state.active_report is not None

        app_state.select_job("job-2")
        assert app_state.active_report is None
        assert app_state.selected_job_id == "job-2"

    def test_deleting_selected_job_clears_selection(self, app_state):
        job = app_state.add_job({"title": "Engineer"})
        app_state.select_job(job.id)

        app_state.delete_job(job.id)

        assert app_state.selected_job_id is None
