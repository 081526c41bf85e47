"""LLM Module - LLM services, the oracle boundary and interfaces."""
from core.llm.interfaces import LLMProvider
from core.llm.openai_service import OpenAIService
from core.llm.oracle import OracleClient, OracleRequest, OracleResponse, OracleTask, parse_json_response

__all__ = [
    'LLMProvider',
    'OpenAIService',
    'OracleClient',
    'OracleRequest',
    'OracleResponse',
    'OracleTask',
    'parse_json_response',
]
