"""
OpenAI Service - LLM implementation using the OpenAI chat-completions API.

Works against any OpenAI-compatible endpoint (OpenAI, Gemini's OpenAI
endpoint, Ollama) by configuring ``base_url``.
"""
from typing import Dict, Any, Optional, Tuple
import copy
import logging
import re

import openai
from openai import AsyncOpenAI
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from core.exceptions import OracleUnavailableError
from core.llm.interfaces import LLMProvider

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Retry helpers
# ---------------------------------------------------------------------------

RETRYABLE_ERRORS = (
    openai.RateLimitError,
    openai.APITimeoutError,
    openai.APIConnectionError,
    openai.InternalServerError,
)


def _log_retry(retry_state: RetryCallState) -> None:
    """Log a warning before each retry sleep."""
    exc = retry_state.outcome.exception()
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    if isinstance(exc, openai.RateLimitError):
        logger.warning(
            "Rate limit hit (attempt %s). Waiting %.1fs before retry. Details: %s",
            retry_state.attempt_number, wait, exc,
        )
    else:
        logger.warning(
            "Transient API error (attempt %s). Waiting %.1fs before retry. Details: %s",
            retry_state.attempt_number, wait, exc,
        )


def _parse_reset_duration(value: str) -> float:
    """Parse a reset-timer header value like '1s', '500ms', '1m30s' into seconds."""
    total = 0.0
    for amount, unit in re.findall(r"([\d.]+)(ms|s|m|h)", value or ""):
        a = float(amount)
        if unit == "ms":
            total += a / 1000
        elif unit == "s":
            total += a
        elif unit == "m":
            total += a * 60
        else:  # h
            total += a * 3600
    return total


def _wait_from_rate_limit_headers(exc: openai.RateLimitError) -> float:
    """Longest wait declared by ``retry-after`` or the ``x-ratelimit-reset-*`` headers; 0.0 if none."""
    headers = getattr(getattr(exc, "response", None), "headers", None)
    if not headers:
        return 0.0

    waits = []
    retry_after = headers.get("retry-after", "")
    if retry_after:
        try:
            waits.append(float(retry_after))
        except ValueError:
            logger.debug("Ignoring non-numeric retry-after header: %r", retry_after)

    for header in ("x-ratelimit-reset-requests", "x-ratelimit-reset-tokens"):
        parsed = _parse_reset_duration(headers.get(header, ""))
        if parsed > 0:
            waits.append(parsed)

    return max(waits) if waits else 0.0


def _wait_respecting_retry_after(retry_state: RetryCallState) -> float:
    """Honour server-declared rate-limit timers, else capped exponential backoff."""
    exc = retry_state.outcome.exception()
    if isinstance(exc, openai.RateLimitError):
        wait = _wait_from_rate_limit_headers(exc)
        if wait > 0:
            return min(wait, 120)

    return wait_exponential(multiplier=1, min=2, max=60)(retry_state)


def _unwrap_schema_spec(spec: Dict[str, Any]) -> Tuple[str, bool, Dict[str, Any]]:
    """Unwrap a schema spec to extract name, strict flag, and raw JSON schema.

    Args:
        spec: Either a wrapped spec {'name': str, 'strict': bool, 'schema': {...}}
              or a raw JSON schema dict

    Returns:
        Tuple of (name, strict, raw_schema)
    """
    if isinstance(spec, dict) and "schema" in spec and "name" in spec:
        return spec.get("name", "oracle_response"), bool(spec.get("strict", False)), spec["schema"]
    return "oracle_response", False, spec


class OpenAIService(LLMProvider):
    """
    OpenAI LLM Service.

    Provides JSON-schema constrained generation and free-text generation.
    Transient errors are retried with backoff; anything left over surfaces
    as ``OracleUnavailableError``.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: str = "gpt-4o-mini",
        temperature: float = 0.2,
        timeout_seconds: float = 60.0,
        max_retries: int = 5,
    ):
        client_kwargs: Dict[str, Any] = {"timeout": timeout_seconds, "max_retries": 0}
        if api_key:
            client_kwargs['api_key'] = api_key
        if base_url:
            client_kwargs['base_url'] = base_url

        self.client = AsyncOpenAI(**client_kwargs)
        self.model = model
        self.temperature = temperature
        self.max_retries = max(1, max_retries)

    def _retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            wait=_wait_respecting_retry_after,
            stop=stop_after_attempt(self.max_retries),
            before_sleep=_log_retry,
            reraise=True,
        )

    async def _complete(self, **kwargs) -> str:
        try:
            async for attempt in self._retrying():
                with attempt:
                    response = await self.client.chat.completions.create(**kwargs)
        except openai.APIError as e:
            logger.error(f"LLM request failed after retries: {e}")
            raise OracleUnavailableError(str(e)) from e

        try:
            return response.choices[0].message.content or ""
        except (IndexError, AttributeError) as e:
            logger.error(f"Unexpected completion payload: {e}")
            raise OracleUnavailableError(f"Unexpected completion payload: {e}") from e

    async def generate_json(
        self,
        system_prompt: str,
        user_message: str,
        schema_spec: Dict,
        model: Optional[str] = None,
    ) -> str:
        """Generate JSON using JSON Schema mode.

        Args:
            system_prompt: Task instructions
            user_message: Task input
            schema_spec: Either a wrapped spec {'name', 'strict', 'schema'} or raw JSON schema
            model: Optional model override
        """
        name, strict, raw_schema = _unwrap_schema_spec(schema_spec)
        runtime_schema = copy.deepcopy(raw_schema)

        if runtime_schema.get("type") != "object" or "properties" not in runtime_schema:
            raise ValueError(f"Not a valid JSON Schema object. Top-level keys: {list(runtime_schema.keys())}")

        return await self._complete(
            model=model or self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            temperature=self.temperature,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": name,
                    "schema": runtime_schema,
                    "strict": strict,
                },
            },
        )

    async def generate_text(
        self,
        system_prompt: str,
        user_message: str,
        model: Optional[str] = None,
    ) -> str:
        """Generate free-form text (chat, rewrites)."""
        return await self._complete(
            model=model or self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            temperature=self.temperature,
        )
