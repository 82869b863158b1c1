"""
OrganAIzer
==========

An HTTP service that suggests how to organize a folder tree: categories,
renames, general advice and search, backed by an OpenRouter chat model with
deterministic fallbacks when no model is available.
"""

__version__ = "1.0.0"

from .categories import CategoryMap, get_fallback_categories, map_files_to_categories
from .config import Settings
from .renaming import suggest_renaming
from .search import parse_ai_search_response, perform_basic_keyword_search
from .service import Organizer
from .tree import analyze_folder, extract_all_files, summarize_folder_structure

__all__ = [
    "CategoryMap",
    "get_fallback_categories",
    "map_files_to_categories",
    "Settings",
    "suggest_renaming",
    "parse_ai_search_response",
    "perform_basic_keyword_search",
    "Organizer",
    "analyze_folder",
    "extract_all_files",
    "summarize_folder_structure",
]
