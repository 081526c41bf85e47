"""
Oracle boundary - the single request/response contract for every AI task.

Everything outside ``core.llm`` talks to the model through ``OracleClient``:
a request names a task and carries a JSON-serializable payload; the reply is
either a JSON object (structured tasks) or plain text (chat, rewrites).
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple
import json
import logging
import re

from core.exceptions import MalformedResponseError, OracleError, OracleUnavailableError
from core.llm.interfaces import LLMProvider
from core.llm import schema_models
from core.llm import system_prompts

logger = logging.getLogger(__name__)


class OracleTask(str, Enum):
    PARSE_JOB = "parse_job"
    PARSE_RESUME = "parse_resume"
    SCORE = "score"
    TAILOR = "tailor"
    REPORT = "report"
    CHAT = "chat"
    ENHANCE = "enhance"
    TAILOR_BUILDER = "tailor_builder"


TEXT_TASKS = frozenset({OracleTask.CHAT, OracleTask.ENHANCE})

SCHEMAS: Dict[OracleTask, Dict[str, Any]] = {
    OracleTask.PARSE_JOB: schema_models.JOB_PARSE_SCHEMA,
    OracleTask.PARSE_RESUME: schema_models.RESUME_PARSE_SCHEMA,
    OracleTask.SCORE: schema_models.SCORE_SCHEMA,
    OracleTask.TAILOR: schema_models.TAILOR_SCHEMA,
    OracleTask.REPORT: schema_models.REPORT_SCHEMA,
    OracleTask.TAILOR_BUILDER: schema_models.RESUME_BUILDER_SCHEMA,
}


@dataclass(frozen=True)
class OracleRequest:
    task: OracleTask
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass
class OracleResponse:
    task: OracleTask
    text: str
    data: Optional[Dict[str, Any]] = None


_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)
_CAMEL_RE = re.compile(r"(?<=[a-z0-9])([A-Z])")


def _snake_case(key: str) -> str:
    return _CAMEL_RE.sub(r"_\1", key).lower()


def normalize_keys(value: Any) -> Any:
    """Recursively convert camelCase object keys to snake_case."""
    if isinstance(value, dict):
        return {_snake_case(k) if isinstance(k, str) else k: normalize_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [normalize_keys(v) for v in value]
    return value


def parse_json_response(text: Optional[str], task: str = "unknown") -> Dict[str, Any]:
    """Decode a model reply into a JSON object, tolerating common wrapping.

    Strips markdown code fences, then tries a direct decode; failing that,
    decodes the span from the first '{' to the last '}'.

    Raises:
        MalformedResponseError: If no JSON object can be recovered.
    """
    if not text or not text.strip():
        raise MalformedResponseError("Empty response from oracle", task=task, raw_text=text or "")

    cleaned = _FENCE_RE.sub("", text).strip()
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.warning(f"Oracle reply for {task} is not plain JSON ({e}); trying brace span")
        first, last = text.find("{"), text.rfind("}")
        if first == -1 or last <= first:
            raise MalformedResponseError(f"No JSON object in oracle reply: {e}", task=task, raw_text=text)
        try:
            data = json.loads(text[first:last + 1])
        except json.JSONDecodeError as inner:
            raise MalformedResponseError(f"Brace-span decode failed: {inner}", task=task, raw_text=text)

    if not isinstance(data, dict):
        raise MalformedResponseError(
            f"Expected a JSON object, got {type(data).__name__}", task=task, raw_text=text
        )
    return normalize_keys(data)


def _dump(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)


def build_messages(request: OracleRequest) -> Tuple[str, str]:
    """Render (system_prompt, user_message) for a request."""
    task, payload = request.task, request.payload

    if task is OracleTask.PARSE_JOB:
        return (
            system_prompts.JOB_PARSE_SYSTEM_PROMPT,
            f"<JOB_DESCRIPTION>\n{payload.get('text', '')}\n</JOB_DESCRIPTION>\n\nParse this job description into JSON.",
        )
    if task is OracleTask.PARSE_RESUME:
        return (
            system_prompts.RESUME_PARSE_SYSTEM_PROMPT,
            f"Source file: {payload.get('file_name', 'unknown')}\n\nResume:\n{payload.get('text', '')}",
        )
    if task is OracleTask.SCORE:
        return (
            system_prompts.SCORE_SYSTEM_PROMPT,
            f"Analyze Candidate vs Job.\nJob: {_dump(payload.get('job'))}\nCandidate: {_dump(payload.get('candidate'))}",
        )
    if task is OracleTask.TAILOR:
        return (
            system_prompts.TAILOR_SYSTEM_PROMPT,
            f"Candidate: {_dump(payload.get('candidate'))}\nJob: {_dump(payload.get('job'))}",
        )
    if task is OracleTask.REPORT:
        job = payload.get('job') or {}
        return (
            system_prompts.REPORT_SYSTEM_PROMPT,
            f"Job: {job.get('title', '')} in {job.get('department', '')}\n"
            f"Requirements: {', '.join(job.get('required_skills') or [])}\n\n"
            f"Pipeline Data:\n{_dump(payload.get('pipeline'))}",
        )
    if task is OracleTask.TAILOR_BUILDER:
        return (
            system_prompts.RESUME_BUILDER_SYSTEM_PROMPT,
            f"Job Description: {payload.get('job_description', '')}\nResume Data: {_dump(payload.get('data'))}",
        )
    if task is OracleTask.ENHANCE:
        return (
            system_prompts.ENHANCE_SYSTEM_PROMPT.format(kind=payload.get('kind', 'summary')),
            f"Content to rewrite: \"{payload.get('content', '')}\"",
        )
    if task is OracleTask.CHAT:
        context = payload.get('context') or {}
        return (
            system_prompts.ASSISTANT_SYSTEM_PROMPT.format(
                current_view=context.get('current_view', 'dashboard'),
                active_job=context.get('active_job') or 'None',
                pipeline_count=context.get('pipeline_count') or 0,
                total_jobs=context.get('total_jobs') or 0,
            ),
            payload.get('query', ''),
        )
    raise ValueError(f"Unsupported oracle task: {task}")


class OracleClient:
    """
    Narrow gateway to the external intelligence service.

    Swapping the oracle (mock for tests, another vendor in production) only
    requires a different ``LLMProvider``.
    """

    def __init__(self, provider: LLMProvider, report_model: Optional[str] = None):
        self.provider = provider
        self.report_model = report_model

    async def request(self, request: OracleRequest) -> OracleResponse:
        system_prompt, user_message = build_messages(request)
        task_name = request.task.value
        model = self.report_model if request.task is OracleTask.REPORT else None

        logger.info(f"Oracle call: {task_name}")
        try:
            if request.task in TEXT_TASKS:
                text = await self.provider.generate_text(system_prompt, user_message, model=model)
                return OracleResponse(task=request.task, text=(text or "").strip())

            text = await self.provider.generate_json(
                system_prompt, user_message, SCHEMAS[request.task], model=model
            )
        except OracleError as e:
            e.task = task_name
            logger.error(f"Oracle call {task_name} failed: {e}")
            raise
        except (ConnectionError, TimeoutError) as e:
            logger.error(f"Oracle call {task_name} failed: {e}")
            raise OracleUnavailableError(str(e), task=task_name) from e

        return OracleResponse(task=request.task, text=text, data=parse_json_response(text, task_name))

    async def call_json(self, task: OracleTask, payload: Dict[str, Any]) -> Dict[str, Any]:
        response = await self.request(OracleRequest(task=task, payload=payload))
        return response.data or {}

    async def call_text(self, task: OracleTask, payload: Dict[str, Any]) -> str:
        response = await self.request(OracleRequest(task=task, payload=payload))
        return response.text
