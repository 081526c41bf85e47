"""
LLM Provider Interface - Abstract base for AI service providers.

This module defines the interface for LLM services (OpenAI, Gemini's
OpenAI-compatible endpoint, Ollama, etc.). Providers return raw model text;
decoding and validation happen at the oracle boundary (core.llm.oracle).
"""
from abc import ABC, abstractmethod
from typing import Dict, Optional


class LLMProvider(ABC):
    """
    Abstract Interface for AI Service Providers.

    Implementations must raise ``OracleUnavailableError`` for transport or
    service failures so callers never see vendor-specific exceptions.
    """

    @abstractmethod
    async def generate_json(
        self,
        system_prompt: str,
        user_message: str,
        schema_spec: Dict,
        model: Optional[str] = None,
    ) -> str:
        """
        Ask the model for a JSON document adhering to a schema.

        Args:
            system_prompt: Task instructions
            user_message: Task input
            schema_spec: Either a wrapped spec {'name', 'strict', 'schema'} or raw JSON schema
            model: Optional model override

        Returns:
            The raw response text (expected, but not guaranteed, to be JSON)
        """
        pass

    @abstractmethod
    async def generate_text(
        self,
        system_prompt: str,
        user_message: str,
        model: Optional[str] = None,
    ) -> str:
        """
        Ask the model for free-form text.
        """
        pass
