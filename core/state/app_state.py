#!/usr/bin/env python3
"""
Application state - the explicit owner of everything a session can see.

Lifecycle:
- load() once at startup from the snapshot store
- every committed mutation rewrites the whole affected collection
- clear_session() on sign-out drops the principal and transient results

The snapshot store is anything with ``load(namespace) -> dict``,
``save(namespace, key, payload)`` and ``delete(namespace, key)``
(see database.snapshot.SnapshotStore).
"""

import logging
from typing import Any, Dict, List, Optional

from core.exceptions import ValidationError
from core.models import Candidate, Job, Principal, RecruiterSettings, TailoredResume, TalentReport
from core.scorer.models import CandidateScore
from core.state.repositories import Repositories

logger = logging.getLogger(__name__)

JOBS_KEY = "jobs"
CANDIDATES_KEY = "candidates"
SCORES_KEY = "scores"
SETTINGS_KEY = "settings"
SESSION_KEY = "session"


class AppState:
    def __init__(self, store, namespace: str = "smartscreen", ai_model: str = ""):
        self.store = store
        self.namespace = namespace
        self.ai_model = ai_model

        self.repos = Repositories()
        self.settings = RecruiterSettings(ai_model=ai_model)
        self.principal: Optional[Principal] = None

        # Transient view state (never persisted)
        self.selected_job_id: Optional[str] = None
        self.active_report: Optional[TalentReport] = None
        self.tailored_result: Optional[TailoredResume] = None

    # ---------- Lifecycle ----------
    def load(self) -> None:
        """Rebuild state from the snapshot; absent keys fall back to empty/defaults."""
        snapshot = self.store.load(self.namespace) or {}

        self.repos.jobs.replace_all(Job.from_dict(j) for j in snapshot.get(JOBS_KEY) or [])
        self.repos.candidates.replace_all(Candidate.from_dict(c) for c in snapshot.get(CANDIDATES_KEY) or [])
        self.repos.scores.replace_all(CandidateScore.from_dict(s) for s in snapshot.get(SCORES_KEY) or [])
        self.settings = RecruiterSettings.from_dict(snapshot.get(SETTINGS_KEY) or {}, ai_model=self.ai_model)

        session = snapshot.get(SESSION_KEY)
        self.principal = Principal.from_dict(session) if session else None

        logger.info(
            f"Loaded state '{self.namespace}': {len(self.repos.jobs.list())} jobs, "
            f"{len(self.repos.candidates.list())} candidates, {len(self.repos.scores.list())} scores"
        )

    def persist(self, *keys: str) -> None:
        """Rewrite the given collections wholesale."""
        for key in keys:
            self.store.save(self.namespace, key, self._payload(key))

    def clear_session(self) -> None:
        self.principal = None
        self.selected_job_id = None
        self.active_report = None
        self.tailored_result = None
        self.store.delete(self.namespace, SESSION_KEY)

    def snapshot(self) -> Dict[str, Any]:
        return {key: self._payload(key) for key in (JOBS_KEY, CANDIDATES_KEY, SCORES_KEY, SETTINGS_KEY, SESSION_KEY)}

    def _payload(self, key: str) -> Any:
        with self.repos.lock:
            if key == JOBS_KEY:
                return [j.to_dict() for j in self.repos.jobs.list()]
            if key == CANDIDATES_KEY:
                return [c.to_dict() for c in self.repos.candidates.list()]
            if key == SCORES_KEY:
                return [s.to_dict() for s in self.repos.scores.list()]
        if key == SETTINGS_KEY:
            return self.settings.to_dict()
        if key == SESSION_KEY:
            return self.principal.to_dict() if self.principal else None
        raise ValueError(f"Unknown state key: {key}")

    # ---------- Committed mutations ----------
    def add_job(self, fields: Dict[str, Any]) -> Job:
        job = self.repos.jobs.create(fields)
        self.persist(JOBS_KEY)
        return job

    def delete_job(self, job_id: str) -> int:
        removed = self.repos.jobs.delete(job_id)
        self.persist(JOBS_KEY, SCORES_KEY)
        if self.selected_job_id == job_id:
            self.selected_job_id = None
            self.active_report = None
            self.tailored_result = None
        return removed

    def add_candidate(self, fields: Dict[str, Any]) -> Candidate:
        candidate = self.repos.candidates.create(fields)
        self.persist(CANDIDATES_KEY)
        return candidate

    def commit_score(self, score: CandidateScore) -> bool:
        stored = self.repos.commit_score(score)
        if stored:
            self.persist(SCORES_KEY)
        return stored

    def update_settings(self, changes: Dict[str, Any]) -> RecruiterSettings:
        merged = self.settings.to_dict()
        for key, value in changes.items():
            if value is None or key not in merged:
                continue
            if key == "notifications":
                merged[key] = {**merged[key], **value}
            else:
                merged[key] = value

        threshold = float(merged["scoring_threshold"])
        if not 0.0 <= threshold <= 100.0:
            raise ValidationError(f"scoring_threshold must be within [0, 100], got {threshold}")

        self.settings = RecruiterSettings.from_dict(merged, ai_model=self.ai_model)
        self.persist(SETTINGS_KEY)
        return self.settings

    def set_principal(self, principal: Principal) -> None:
        self.principal = principal
        self.persist(SESSION_KEY)

    def select_job(self, job_id: Optional[str]) -> None:
        if job_id != self.selected_job_id:
            self.active_report = None
            self.tailored_result = None
        self.selected_job_id = job_id

    def job_ids(self) -> List[str]:
        return [j.id for j in self.repos.jobs.list()]
