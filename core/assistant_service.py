"""Assistant Service - free-form recruiting chat grounded in the current app context."""

import logging
from dataclasses import dataclass, asdict
from typing import Optional

from core.exceptions import ValidationError
from core.llm.oracle import OracleClient, OracleTask

logger = logging.getLogger(__name__)

FALLBACK_REPLY = "I'm sorry, I couldn't process that request."


@dataclass
class AssistantContext:
    current_view: str = "dashboard"
    active_job: Optional[str] = None  # Title of the selected job
    pipeline_count: int = 0
    total_jobs: int = 0


class AssistantService:
    def __init__(self, oracle: OracleClient):
        self.oracle = oracle

    async def ask(self, query: str, context: AssistantContext) -> str:
        if not query or not query.strip():
            raise ValidationError("Query must not be empty")
        reply = await self.oracle.call_text(OracleTask.CHAT, {"query": query, "context": asdict(context)})
        return reply or FALLBACK_REPLY
