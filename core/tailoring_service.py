#!/usr/bin/env python3
"""
Tailoring Service - resume reframing through the oracle.

Covers the pipeline flow (rewrite a scored candidate's narrative for a job)
and the resume builder flow (polish a single section, or align a whole draft
resume with a job description). Failures raise TailoringError and never touch
existing scores.
"""

import logging
from typing import Any, Dict

from core.exceptions import MalformedResponseError, TailoringError, ValidationError
from core.llm.oracle import OracleClient, OracleTask
from core.models import Candidate, Experience, ExperienceRewrite, Job, ResumeBuilderData, TailoredResume
from core.utils import coerce_str_list

logger = logging.getLogger(__name__)

ENHANCE_KINDS = ("summary", "experience")


def build_tailored_resume(data: Dict[str, Any], candidate_id: str, job_id: str) -> TailoredResume:
    if not isinstance(data.get("suggested_summary"), str) or not data["suggested_summary"].strip():
        raise TailoringError("Oracle reply is missing suggested_summary", task=OracleTask.TAILOR.value)

    experience = data.get("optimized_experience") or []
    if not isinstance(experience, list):
        raise TailoringError(
            f"optimized_experience must be a list, got {type(experience).__name__}", task=OracleTask.TAILOR.value
        )

    rewrites = []
    for item in experience:
        if not isinstance(item, dict):
            continue
        try:
            bullets = coerce_str_list(item.get("suggested_bullets"))
        except ValueError as e:
            raise TailoringError(f"Malformed suggested_bullets in oracle reply: {e}", task=OracleTask.TAILOR.value)
        rewrites.append(ExperienceRewrite(
            original_title=str(item.get("original_title") or ""),
            suggested_bullets=bullets,
        ))

    return TailoredResume(
        candidate_id=candidate_id,
        job_id=job_id,
        suggested_summary=data["suggested_summary"].strip(),
        optimized_experience=rewrites,
        justification=str(data.get("justification") or ""),
    )


class TailoringService:
    def __init__(self, oracle: OracleClient):
        self.oracle = oracle

    async def tailor(self, candidate: Candidate, job: Job) -> TailoredResume:
        """Rewrite a candidate's summary and experience bullets for a job."""
        logger.info(f"Tailoring candidate {candidate.id} for job {job.id}")
        try:
            data = await self.oracle.call_json(
                OracleTask.TAILOR,
                {"candidate": candidate.to_dict(), "job": job.to_dict()},
            )
        except MalformedResponseError as e:
            raise TailoringError(str(e), task=OracleTask.TAILOR.value) from e
        return build_tailored_resume(data, candidate.id, job.id)

    async def enhance_content(self, kind: str, content: str) -> str:
        """Polish one resume section; returns the input unchanged if the oracle answers with nothing."""
        if kind not in ENHANCE_KINDS:
            raise ValidationError(f"kind must be one of {', '.join(ENHANCE_KINDS)}, got {kind!r}")
        if not content or not content.strip():
            raise ValidationError("Nothing to enhance: content is empty")

        text = await self.oracle.call_text(OracleTask.ENHANCE, {"kind": kind, "content": content})
        return text.strip() or content

    async def tailor_builder_data(self, data: ResumeBuilderData, job_description: str) -> ResumeBuilderData:
        """Align a draft resume with a job description, keeping the draft's structure.

        Fields the oracle leaves out keep their original values.
        """
        if not job_description or not job_description.strip():
            raise ValidationError("A job description is required to tailor a resume")

        try:
            reply = await self.oracle.call_json(
                OracleTask.TAILOR_BUILDER,
                {"data": data.to_dict(), "job_description": job_description},
            )
        except MalformedResponseError as e:
            raise TailoringError(str(e), task=OracleTask.TAILOR_BUILDER.value) from e

        merged = data.to_dict()
        for key, value in reply.items():
            if key in merged and value not in (None, "", []):
                merged[key] = value
        result = ResumeBuilderData.from_dict(merged)
        if not result.experience and data.experience:
            result.experience = [Experience(**vars(e)) for e in data.experience]
        return result
