#!/usr/bin/env python3
"""
Screening Service - the top-level controller.

Owns the AppState and routes every user-facing operation through the
oracle-backed services. Oracle failures are raised to the caller after
logging; none of them leaves partial state behind.

Ordering rules for concurrent oracle calls:
- each scoring call takes a generation ticket for its (candidate, job) pair;
  a result commits only if its ticket is newer than the last committed one,
  so the last-issued successful call wins regardless of completion order
- a failed call commits nothing and does not block earlier calls
- a score is also dropped if its job was deleted while the call was pending
- tailoring and report results are dropped if the selected job changed
  while the call was pending
"""

import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from core.assistant_service import AssistantContext, AssistantService
from core.exceptions import OracleError, ValidationError
from core.models import Candidate, Job, RecruiterSettings, ResumeBuilderData, TailoredResume, TalentReport
from core.report_service import ReportService
from core.scorer.models import CandidateScore
from core.scorer.service import ScoringService
from core.state.app_state import AppState
from core.tailoring_service import TailoringService
from etl.ingestion import IngestionService, merge_job_draft
from pipeline.aggregator import DashboardSummary, PipelineAggregator, PipelineSummary
from pipeline.runner import BatchResult, run_batch_scoring

logger = logging.getLogger(__name__)


@dataclass
class IngestOutcome:
    """One uploaded resume: the candidate created and its score, if any."""
    candidate: Candidate
    score: Optional[CandidateScore] = None
    error: Optional[str] = None


@dataclass
class BatchIngestOutcome:
    job_id: str
    candidates: List[Candidate] = field(default_factory=list)
    parse_failures: Dict[str, str] = field(default_factory=dict)  # file name -> error
    scoring: Optional[BatchResult] = None


class ScreeningService:
    def __init__(
        self,
        state: AppState,
        ingestion: IngestionService,
        scoring: ScoringService,
        tailoring: TailoringService,
        reports: ReportService,
        assistant: AssistantService,
        max_concurrency: int = 4,
    ):
        self.state = state
        self.ingestion = ingestion
        self.scoring = scoring
        self.tailoring = tailoring
        self.reports = reports
        self.assistant = assistant
        self.aggregator = PipelineAggregator(state.repos)
        self.max_concurrency = max_concurrency

        self._committed: Dict[Tuple[str, str], int] = {}  # pair -> last committed ticket
        self._pending: Dict[Tuple[str, str], int] = {}  # pair -> calls in flight
        self._ticket_counter = itertools.count(1)

    # ---------- Jobs ----------
    def list_jobs(self, query: Optional[str] = None) -> List[Job]:
        return self.state.repos.jobs.search(query) if query else self.state.repos.jobs.list()

    def get_job(self, job_id: str) -> Job:
        return self.state.repos.jobs.get(job_id)

    def create_job(self, fields: Dict[str, Any]) -> Job:
        return self.state.add_job(fields)

    def delete_job(self, job_id: str) -> int:
        return self.state.delete_job(job_id)

    async def autofill_job(self, text: str, form: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Parse a description and merge the draft over the recruiter's form."""
        draft = await self.ingestion.parse_job_description(text)
        return merge_job_draft(form or {}, draft)

    def select_job(self, job_id: Optional[str]) -> None:
        if job_id is not None:
            self.state.repos.jobs.get(job_id)
        self.state.select_job(job_id)

    # ---------- Candidates ----------
    def list_candidates(self, query: Optional[str] = None) -> List[Candidate]:
        return self.state.repos.candidates.search(query) if query else self.state.repos.candidates.list()

    def get_candidate(self, candidate_id: str) -> Candidate:
        return self.state.repos.candidates.get(candidate_id)

    def add_candidate(self, fields: Dict[str, Any]) -> Candidate:
        return self.state.add_candidate(fields)

    # ---------- Scoring ----------
    def _issue_ticket(self, pair: Tuple[str, str]) -> int:
        self._pending[pair] = self._pending.get(pair, 0) + 1
        return next(self._ticket_counter)

    def _release_ticket(self, pair: Tuple[str, str]) -> None:
        self._pending[pair] -= 1
        if not self._pending[pair]:
            del self._pending[pair]
            self._committed.pop(pair, None)

    async def score_candidate(self, job_id: str, candidate_id: str) -> Optional[CandidateScore]:
        """Score one pair and commit it.

        Returns the committed score, or None when the result was superseded
        by a later call for the same pair or its job was deleted meanwhile.
        """
        job = self.state.repos.jobs.get(job_id)
        candidate = self.state.repos.candidates.get(candidate_id)
        pair = (candidate_id, job_id)
        ticket = self._issue_ticket(pair)
        try:
            score = await self.scoring.score(job, candidate)

            if ticket < self._committed.get(pair, 0):
                logger.info(f"Discarding superseded score for {pair} (ticket {ticket})")
                return None
            if not self.state.commit_score(score):
                return None
            self._committed[pair] = ticket
            return score
        finally:
            self._release_ticket(pair)

    async def ingest_resume(self, job_id: str, content: bytes, file_name: str) -> IngestOutcome:
        """Parse an upload into a candidate, then score it against the job.

        Parse failures raise; a scoring failure keeps the candidate (unscored)
        and is reported on the outcome.
        """
        self.state.repos.jobs.get(job_id)
        fields = await self.ingestion.parse_resume(content, file_name)
        candidate = self.state.add_candidate(fields)
        try:
            score = await self.score_candidate(job_id, candidate.id)
        except OracleError as e:
            logger.error(f"Scoring failed for {candidate.id} against {job_id}: {e}")
            return IngestOutcome(candidate=candidate, error=str(e))
        return IngestOutcome(candidate=candidate, score=score)

    async def ingest_batch(self, job_id: str, files: List[Tuple[bytes, str]]) -> BatchIngestOutcome:
        """Parse every upload, then score all parsed candidates concurrently."""
        self.state.repos.jobs.get(job_id)
        outcome = BatchIngestOutcome(job_id=job_id)

        for content, file_name in files:
            try:
                fields = await self.ingestion.parse_resume(content, file_name)
            except (ValidationError, OracleError) as e:
                logger.warning(f"Skipping {file_name}: {e}")
                outcome.parse_failures[file_name] = str(e)
                continue
            outcome.candidates.append(self.state.add_candidate(fields))

        outcome.scoring = await run_batch_scoring(
            job_id,
            [c.id for c in outcome.candidates],
            lambda candidate_id: self.score_candidate(job_id, candidate_id),
            max_concurrency=self.max_concurrency,
        )
        return outcome

    async def rescore_job(self, job_id: str, candidate_ids: Optional[List[str]] = None) -> BatchResult:
        """Score (or re-score) existing candidates against a job."""
        self.state.repos.jobs.get(job_id)
        if candidate_ids is None:
            candidate_ids = [c.id for c in self.aggregator.pipeline_candidates(job_id)]
        return await run_batch_scoring(
            job_id,
            candidate_ids,
            lambda candidate_id: self.score_candidate(job_id, candidate_id),
            max_concurrency=self.max_concurrency,
        )

    # ---------- Pipeline ----------
    def pipeline(self, job_id: str) -> PipelineSummary:
        self.state.repos.jobs.get(job_id)
        return self.aggregator.summarize(job_id, threshold=self.state.settings.scoring_threshold)

    def dashboard(self) -> DashboardSummary:
        return self.aggregator.dashboard()

    # ---------- Tailoring & reports ----------
    async def tailor(self, job_id: str, candidate_id: str) -> Optional[TailoredResume]:
        """Tailor a candidate for a job; returns None if the selected job changed meanwhile."""
        job = self.state.repos.jobs.get(job_id)
        candidate = self.state.repos.candidates.get(candidate_id)
        self.select_job(job_id)

        result = await self.tailoring.tailor(candidate, job)

        if self.state.selected_job_id != job_id:
            logger.info(f"Discarding stale tailoring result for job {job_id}")
            return None
        self.state.tailored_result = result
        return result

    async def generate_report(self, job_id: str) -> Optional[TalentReport]:
        """Report on a job's pipeline; returns None if the selected job changed meanwhile."""
        job = self.state.repos.jobs.get(job_id)
        self.select_job(job_id)
        entries = self.aggregator.pipeline(job_id)

        report = await self.reports.generate(job, entries)

        if self.state.selected_job_id != job_id:
            logger.info(f"Discarding stale report for job {job_id}")
            return None
        self.state.active_report = report
        return report

    # ---------- Resume builder ----------
    async def enhance_content(self, kind: str, content: str) -> str:
        return await self.tailoring.enhance_content(kind, content)

    async def tailor_builder_data(self, data: ResumeBuilderData, job_description: str) -> ResumeBuilderData:
        return await self.tailoring.tailor_builder_data(data, job_description)

    # ---------- Assistant ----------
    def assistant_context(self, current_view: str = "dashboard") -> AssistantContext:
        job_id = self.state.selected_job_id
        active_job = None
        pipeline_count = 0
        if job_id and self.state.repos.jobs.exists(job_id):
            active_job = self.state.repos.jobs.get(job_id).title
            pipeline_count = self.state.repos.scores.count_for_job(job_id)
        return AssistantContext(
            current_view=current_view,
            active_job=active_job,
            pipeline_count=pipeline_count,
            total_jobs=len(self.state.repos.jobs.list()),
        )

    async def ask(self, query: str, current_view: str = "dashboard") -> str:
        return await self.assistant.ask(query, self.assistant_context(current_view))

    # ---------- Settings ----------
    @property
    def settings(self) -> RecruiterSettings:
        return self.state.settings

    def update_settings(self, changes: Dict[str, Any]) -> RecruiterSettings:
        return self.state.update_settings(changes)
