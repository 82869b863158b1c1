"""
Operation dispatch for OrganAIzer.

The Organizer composes the tree, category, rename and search helpers and
decides when the AI collaborator is consulted. Collaborator failures never
escape an operation: each one has a deterministic fallback and the result
says so.
"""

import logging

from .categories import (
    determine_categories_with_ai,
    get_fallback_categories,
    group_by_extension,
    map_files_to_categories,
)
from .errors import CategoryParseError, InvalidRequestError, LLMError
from .llm import build_search_prompt, build_suggest_prompt, get_operation_config
from .renaming import suggest_renaming
from .search import parse_ai_search_response, perform_basic_keyword_search
from .suggestions import GENERIC_SUGGESTIONS, generate_suggested_structure
from .tree import analyze_folder, extract_all_files, summarize_folder_structure

logger = logging.getLogger(__name__)

OPTIONS = ("categorize", "rename", "suggest", "search")

AI_DISABLED_NOTE = "Limited AI functionality. Configure an OpenRouter API key for better results."
CATEGORY_FALLBACK_NOTE = "AI categorization failed, the built-in category table was used."
SUGGEST_FALLBACK_NOTE = "AI suggestions failed, generic suggestions were returned."
KEYWORD_ONLY_NOTE = "Keyword-based search. Semantic search requires an OpenRouter API key."
KEYWORD_FALLBACK_NOTE = "Fell back to keyword search because of an AI error."


def _matches_payload(matches) -> list[dict] | dict:
    if isinstance(matches, list):
        return [m.to_dict() for m in matches]
    return matches


class Organizer:
    """
    Runs one organize operation per call.

    Args:
        settings: Service Settings.
        client: Completion client; AI is used only when settings enable it
            and a client is given.
    """

    def __init__(self, settings, client=None):
        self.settings = settings
        self.client = client
        self._handlers = {
            "categorize": self.categorize,
            "rename": self.rename,
            "suggest": self.suggest,
            "search": self.search,
        }

    @property
    def ai_enabled(self) -> bool:
        return self.settings.ai_enabled and self.client is not None

    def organize(self, folder_data, option: str, user_input: str | None = None) -> dict:
        """
        Dispatch one operation.

        Raises:
            InvalidRequestError: If folder data is missing or option is unknown.
        """
        if folder_data is None:
            raise InvalidRequestError("Missing folder data")

        handler = self._handlers.get(option)
        if handler is None:
            raise InvalidRequestError("Invalid option")

        logger.info("Running %s (AI %s)", option, "enabled" if self.ai_enabled else "disabled")
        result = handler(folder_data, user_input)

        if not self.ai_enabled:
            result["aiStatus"] = "disabled"
            result["aiNote"] = AI_DISABLED_NOTE

        return result

    def categorize(self, folder_data, user_input: str | None = None) -> dict:
        files = extract_all_files(folder_data)
        files_by_extension = group_by_extension(files)
        result = {"action": "categorize"}

        if self.ai_enabled:
            try:
                categories = determine_categories_with_ai(
                    files_by_extension, self.client, self.settings.language
                )
            except (LLMError, CategoryParseError) as e:
                logger.warning("AI categorization failed, using fallback: %s", e)
                categories = get_fallback_categories(files_by_extension)
                result["aiFallback"] = CATEGORY_FALLBACK_NOTE
        else:
            categories = get_fallback_categories(files_by_extension)

        result["categories"] = categories.to_dict()
        result["filesByCategory"] = map_files_to_categories(files, categories)
        return result

    def rename(self, folder_data, user_input: str | None = None) -> dict:
        files = extract_all_files(folder_data)
        return {
            "action": "rename",
            "pattern": user_input,
            "suggestions": suggest_renaming(files, user_input),
        }

    def suggest(self, folder_data, user_input: str | None = None) -> dict:
        stats = analyze_folder(folder_data).to_dict()
        result = {"action": "suggest", "folderStats": stats}

        ai_text = None
        if self.ai_enabled:
            messages = build_suggest_prompt(
                stats, summarize_folder_structure(folder_data), self.settings.language
            )
            try:
                ai_text = self.client.complete(messages, get_operation_config("suggest")["temperature"])
            except LLMError as e:
                logger.warning("AI suggestions failed, using generic advice: %s", e)
                result["error"] = str(e)
                result["note"] = SUGGEST_FALLBACK_NOTE

        result["suggestions"] = ai_text or GENERIC_SUGGESTIONS
        result["suggestedStructure"] = generate_suggested_structure(folder_data, ai_text)
        return result

    def search(self, folder_data, user_input: str | None = None) -> dict:
        files = extract_all_files(folder_data)
        result = {"action": "search", "query": user_input}

        if not self.ai_enabled:
            result["matches"] = _matches_payload(perform_basic_keyword_search(files, user_input))
            result["note"] = KEYWORD_ONLY_NOTE
            return result

        if not (user_input or "").strip():
            result["matches"] = _matches_payload(perform_basic_keyword_search(files, user_input))
            return result

        messages = build_search_prompt(files, user_input, self.settings.language)
        try:
            ai_text = self.client.complete(messages, get_operation_config("search")["temperature"])
        except LLMError as e:
            logger.warning("AI search failed, using keyword search: %s", e)
            result["matches"] = _matches_payload(perform_basic_keyword_search(files, user_input))
            result["error"] = str(e)
            result["note"] = KEYWORD_FALLBACK_NOTE
            return result

        result["matches"] = _matches_payload(parse_ai_search_response(ai_text, files))
        return result
