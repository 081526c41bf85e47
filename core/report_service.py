#!/usr/bin/env python3
"""
Report Service - talent intelligence reports for a whole pipeline.
"""

import logging
from typing import Any, Dict, List

from core.exceptions import MalformedResponseError, ReportGenerationError, ValidationError
from core.llm.oracle import OracleClient, OracleTask
from core.models import Job, TalentReport
from core.utils import clamp_score, coerce_str_list, utc_now_iso
from pipeline.aggregator import PipelineEntry

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("summary", "strengths", "weaknesses", "recommendation", "pipeline_health_score")
TOP_SKILLS = 5


def pipeline_payload(entries: List[PipelineEntry]) -> List[Dict[str, Any]]:
    return [
        {
            "name": e.candidate.name,
            "overall_score": e.overall_score,
            "status": e.score.status.value,
            "top_skills": e.candidate.skills[:TOP_SKILLS],
            "analysis": e.score.analysis,
        }
        for e in entries
    ]


def build_report(data: Dict[str, Any], job_id: str) -> TalentReport:
    missing = [f for f in REQUIRED_FIELDS if data.get(f) is None]
    if missing:
        raise ReportGenerationError(
            f"Oracle reply is missing {', '.join(missing)}", task=OracleTask.REPORT.value
        )
    try:
        health = clamp_score(data["pipeline_health_score"])
    except (TypeError, ValueError) as e:
        raise ReportGenerationError(f"Non-numeric pipeline_health_score: {e}", task=OracleTask.REPORT.value)

    try:
        strengths = coerce_str_list(data["strengths"])
        weaknesses = coerce_str_list(data["weaknesses"])
    except ValueError as e:
        raise ReportGenerationError(f"Malformed list field in oracle reply: {e}", task=OracleTask.REPORT.value)

    return TalentReport(
        job_id=job_id,
        summary=str(data["summary"]),
        strengths=strengths,
        weaknesses=weaknesses,
        recommendation=str(data["recommendation"]),
        pipeline_health_score=health,
        generated_at=utc_now_iso(),
    )


class ReportService:
    def __init__(self, oracle: OracleClient):
        self.oracle = oracle

    async def generate(self, job: Job, entries: List[PipelineEntry]) -> TalentReport:
        """Produce a report for a non-empty pipeline.

        Raises:
            ValidationError: The pipeline is empty (no oracle call is made).
            ReportGenerationError: Malformed or incomplete oracle output.
        """
        if not entries:
            raise ValidationError("No candidates in the pipeline to report on.")

        logger.info(f"Generating talent report for job {job.id} ({len(entries)} candidates)")
        try:
            data = await self.oracle.call_json(
                OracleTask.REPORT,
                {"job": job.to_dict(), "pipeline": pipeline_payload(entries)},
            )
        except MalformedResponseError as e:
            raise ReportGenerationError(str(e), task=OracleTask.REPORT.value) from e
        return build_report(data, job.id)
