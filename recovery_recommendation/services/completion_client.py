"""LLM completion client

Thin async wrapper over OpenAI chat completions in JSON mode. Every way the
call can go wrong surfaces as CompletionError so the service has a single
failure to route to its local fallback.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Protocol

import openai
from openai import AsyncOpenAI
from langsmith import traceable

from recovery_recommendation.config import settings

logger = logging.getLogger(__name__)


class CompletionError(Exception):
    """Remote completion failed or returned something that is not JSON"""


class CompletionClient(Protocol):
    async def complete_json(self, messages: List[Dict[str, Any]]) -> Dict[str, Any]:
        ...


class OpenAICompletionClient:
    """OpenAI JSON-mode completions

    One attempt per call: retries are disabled and the request is bounded by
    the configured timeout.
    """

    def __init__(
        self,
        openai_client: Optional[AsyncOpenAI] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        temperature: float = 0.4,
    ):
        """
        Args:
            openai_client: AsyncOpenAI client (created lazily if omitted)
            model: model name (default: settings.openai_model)
            timeout: per-call timeout in seconds
            temperature: sampling temperature
        """
        self._openai = openai_client
        self._model = model or settings.openai_model
        self._timeout = timeout or settings.openai_timeout_seconds
        self._temperature = temperature

    def _get_client(self) -> AsyncOpenAI:
        """Return the OpenAI client (lazy init)"""
        if self._openai is None:
            self._openai = AsyncOpenAI(
                api_key=settings.openai_api_key or None,
                timeout=self._timeout,
                max_retries=0,
            )
        return self._openai

    @traceable(run_type="llm", name="recovery_llm_completion")
    async def complete_json(self, messages: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Run a JSON-mode completion

        Args:
            messages: chat messages

        Returns:
            decoded JSON object

        Raises:
            CompletionError: network / quota / timeout / decoding failure
        """
        try:
            response = await self._get_client().chat.completions.create(
                model=self._model,
                messages=messages,
                response_format={"type": "json_object"},
                temperature=self._temperature,
                timeout=self._timeout,
            )
        except openai.OpenAIError as e:
            raise CompletionError(f"{type(e).__name__}: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise CompletionError("Empty completion")

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise CompletionError(f"Completion is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise CompletionError("Completion JSON is not an object")
        return data
