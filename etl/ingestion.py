"""Ingestion Service - raw job descriptions and resume files into record fields.

The service never writes to state; callers hand the returned field dicts to
the repositories. Oracle failures surface as ParseError.
"""
import logging
from typing import Any, Dict

from core.exceptions import MalformedResponseError, ParseError, ValidationError
from core.llm.oracle import OracleClient, OracleTask, normalize_keys
from etl.resume.parser import ResumeParser

logger = logging.getLogger(__name__)

JOB_DRAFT_FIELDS = (
    "title", "department", "location", "min_years_experience", "required_skills",
    "nice_to_have_skills", "required_certifications", "education_level", "salary_band",
)

CANDIDATE_FIELDS = (
    "name", "email", "phone", "location", "summary", "total_years_experience",
    "skills", "education", "experience", "certifications",
)


def merge_job_draft(form: Dict[str, Any], draft: Dict[str, Any]) -> Dict[str, Any]:
    """AI auto-fill: draft values win; form values survive only where the draft is silent."""
    merged = dict(form)
    for key, value in draft.items():
        if value not in (None, "", []):
            merged[key] = value
    return merged


class IngestionService:
    """Service for turning unstructured inputs into structured fields.

    Usage:
        service = IngestionService(oracle)
        draft = await service.parse_job_description(text)
        fields = await service.parse_resume(content, "cv.pdf")
    """

    def __init__(self, oracle: OracleClient, parser: ResumeParser = None):
        self.oracle = oracle
        self.parser = parser or ResumeParser()

    async def parse_job_description(self, text: str) -> Dict[str, Any]:
        """Extract a job field draft from free text.

        Raises:
            ValidationError: Empty description
            ParseError: Oracle output unusable or missing title/required_skills
        """
        if not text or not text.strip():
            raise ValidationError("Job description text is empty")

        try:
            data = await self.oracle.call_json(OracleTask.PARSE_JOB, {"text": text})
        except MalformedResponseError as e:
            raise ParseError(str(e), task=OracleTask.PARSE_JOB.value) from e

        if not str(data.get("title") or "").strip() or not isinstance(data.get("required_skills"), list):
            raise ParseError("Parsed job is missing title or required_skills", task=OracleTask.PARSE_JOB.value)

        draft = {key: data[key] for key in JOB_DRAFT_FIELDS if key in data}
        draft["description"] = text
        logger.info(f"Parsed job description: {draft['title']} ({len(draft['required_skills'])} required skills)")
        return draft

    async def parse_resume(self, content: bytes, file_name: str) -> Dict[str, Any]:
        """Read a resume upload and extract candidate fields.

        JSON/YAML uploads that already carry a skills list are taken as-is;
        everything else goes through the resume parsing oracle.

        Raises:
            ValidationError: Unsupported, empty or unreadable file
            ParseError: Oracle output unusable
        """
        try:
            parsed = self.parser.parse_bytes(content, file_name)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        if parsed.data is not None and "skills" in parsed.data:
            logger.info(f"Using structured fields from {file_name}")
            data = normalize_keys(parsed.data)
        else:
            try:
                data = await self.oracle.call_json(
                    OracleTask.PARSE_RESUME, {"text": parsed.text, "file_name": file_name}
                )
            except MalformedResponseError as e:
                raise ParseError(str(e), task=OracleTask.PARSE_RESUME.value) from e

        fields = {key: data[key] for key in CANDIDATE_FIELDS if key in data}
        fields["raw_text"] = f"Document: {file_name}"
        return fields
