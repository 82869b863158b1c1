"""
LLM integration module for OrganAIzer.

Provides:
- Chat completion client
- Prompt builders for categorize, suggest and search
- Model and operation configuration
"""

from .client import ChatClient, CompletionClient, create_client, extract_json_text, parse_llm_json
from .models import DEFAULT_API_URL, DEFAULT_MODEL_ID, get_operation_config
from .prompts import (
    build_categories_prompt,
    build_suggest_prompt,
    build_search_prompt,
)

__all__ = [
    "ChatClient",
    "CompletionClient",
    "create_client",
    "extract_json_text",
    "parse_llm_json",
    "DEFAULT_API_URL",
    "DEFAULT_MODEL_ID",
    "get_operation_config",
    "build_categories_prompt",
    "build_suggest_prompt",
    "build_search_prompt",
]
