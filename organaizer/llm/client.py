"""
Chat completion client for OrganAIzer.

Talks to an OpenAI-compatible endpoint (OpenRouter by default).
"""

import json
import logging
import re
from typing import Any, Protocol

from openai import OpenAI, OpenAIError

from ..errors import LLMError
from .models import APP_REFERER, APP_TITLE

logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    """Anything that turns role-tagged messages into completion text."""

    def complete(self, messages: list[dict[str, str]], temperature: float) -> str:
        ...


class ChatClient:
    """
    Thin wrapper around the OpenAI SDK chat completion call.

    Every failure (network, timeout, HTTP error, empty answer) is raised as
    LLMError so callers can fall back with a single except clause.
    """

    def __init__(self, settings):
        if not settings.api_key:
            raise LLMError("OPENROUTER_API_KEY is not configured")

        self.model = settings.model
        self._client = OpenAI(
            base_url=settings.api_url,
            api_key=settings.api_key,
            timeout=settings.ai_timeout,
            max_retries=settings.ai_retries,
            default_headers={
                "HTTP-Referer": APP_REFERER,
                "X-Title": APP_TITLE,
            },
        )

    def complete(self, messages: list[dict[str, str]], temperature: float) -> str:
        """
        Send messages to the model and return the completion text.

        Args:
            messages: List of {"role", "content"} dicts.
            temperature: Sampling temperature.

        Returns:
            The raw response text from the model.

        Raises:
            LLMError: If the call fails or returns no content.
        """
        logger.debug("Calling %s with %d messages", self.model, len(messages))
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
            )
        except OpenAIError as e:
            raise LLMError(f"Chat completion failed: {e}") from e

        if not response.choices:
            raise LLMError("Model returned no choices")

        content = response.choices[0].message.content
        if not content:
            raise LLMError("Model returned empty content")

        return content


def create_client(settings) -> ChatClient | None:
    """Build a ChatClient when AI is enabled, otherwise return None."""
    if not settings.ai_enabled:
        return None
    return ChatClient(settings)


def extract_json_text(response_text: str) -> str:
    """
    Cut the JSON object out of a model answer.

    A fenced ```json block wins; otherwise everything from the first "{" to
    the last "}" is taken. If neither is present the stripped text is
    returned unchanged.
    """
    text = response_text.strip()

    if "```" in text:
        fence_match = re.search(r'```(?:json)?\s*([\s\S]*?)```', text)
        if fence_match:
            return fence_match.group(1).strip()

    brace_match = re.search(r'\{[\s\S]*\}', text)
    if brace_match:
        return brace_match.group(0)

    return text


def parse_llm_json(response_text: str) -> Any:
    """
    Parse JSON from an LLM response, handling markdown formatting.

    Args:
        response_text: Raw response text from the model.

    Returns:
        The parsed JSON value.

    Raises:
        json.JSONDecodeError: If parsing fails.
    """
    return json.loads(extract_json_text(response_text))
