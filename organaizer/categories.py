"""
Category engine for OrganAIzer.

Extensions are grouped into named categories either by the AI collaborator
or by a fixed rule table. Category order is explicit: when an extension is
listed by more than one category, the first category in order claims it.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from .errors import CategoryParseError
from .llm import build_categories_prompt, get_operation_config, parse_llm_json
from .tree import NO_EXTENSION, file_extension


OTHER_CATEGORY = "Other"

BASE_CATEGORIES = (
    ("Documents", [".pdf", ".doc", ".docx", ".txt", ".rtf", ".md", ".markdown"]),
    ("Images", [".jpg", ".jpeg", ".png", ".gif", ".bmp", ".tiff", ".svg", ".ico"]),
    ("Code", [".js", ".ts", ".jsx", ".tsx", ".py", ".java", ".html", ".css", ".json",
              ".c", ".cpp", ".h", ".php", ".rb"]),
    ("Data", [".csv", ".xlsx", ".xls", ".db", ".sql", ".xml", ".yml", ".yaml"]),
    ("Archives", [".zip", ".rar", ".7z", ".tar", ".gz"]),
    (OTHER_CATEGORY, [NO_EXTENSION]),
)

# Checked in order for extensions the base table does not cover
EXTENSION_GROUPS = (
    ("Video", re.compile(r'\.(mp4|avi|mov|wmv|mkv|flv)$', re.IGNORECASE)),
    ("Audio", re.compile(r'\.(mp3|wav|ogg|flac|aac)$', re.IGNORECASE)),
    ("Code", re.compile(r'\.(js|ts|py|java|c|cpp|rb|go|rs|php|html|css|jsx|tsx)$', re.IGNORECASE)),
    ("Images", re.compile(r'\.(jpg|jpeg|png|gif|bmp|tiff|webp|svg|ico)$', re.IGNORECASE)),
    ("Documents", re.compile(r'\.(doc|docx|pdf|txt|rtf|md|odt)$', re.IGNORECASE)),
)


@dataclass
class Category:
    """A named group of extensions."""
    name: str
    extensions: list[str] = field(default_factory=list)


class CategoryMap:
    """
    Ordered list of categories.

    Lookups scan categories in order, so the first category listing an
    extension is the one that owns it.
    """

    def __init__(self, categories: Iterable[Category] = ()):
        self.categories: list[Category] = list(categories)

    def __iter__(self) -> Iterator[Category]:
        return iter(self.categories)

    def __len__(self) -> int:
        return len(self.categories)

    def names(self) -> list[str]:
        return [c.name for c in self.categories]

    def get(self, name: str) -> Category | None:
        for category in self.categories:
            if category.name == name:
                return category
        return None

    def add_extension(self, name: str, ext: str) -> None:
        """Add ext to the named category, appending the category if missing."""
        category = self.get(name)
        if category is None:
            category = Category(name)
            self.categories.append(category)
        category.extensions.append(ext)

    def category_for(self, ext: str) -> str | None:
        for category in self.categories:
            if ext in category.extensions:
                return category.name
        return None

    def covers(self, ext: str) -> bool:
        return self.category_for(ext) is not None

    def to_dict(self) -> dict[str, list[str]]:
        return {c.name: list(c.extensions) for c in self.categories}

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, list[str]]]) -> "CategoryMap":
        return cls(Category(name, list(exts)) for name, exts in pairs)


def base_category_map() -> CategoryMap:
    """Return a fresh copy of the base category table."""
    return CategoryMap.from_pairs(BASE_CATEGORIES)


def group_by_extension(files: Iterable[dict]) -> dict[str, list[dict]]:
    """Group files by extension, keeping first-seen order."""
    groups: dict[str, list[dict]] = {}
    for f in files:
        groups.setdefault(file_extension(f), []).append(f)
    return groups


def classify_extension(ext: str) -> str:
    """Pick a category name for an extension using the suffix groups."""
    for name, pattern in EXTENSION_GROUPS:
        if pattern.search(ext):
            return name
    return OTHER_CATEGORY


def get_fallback_categories(extensions: Iterable[str]) -> CategoryMap:
    """
    Build the deterministic category map for the observed extensions.

    Starts from the base table; every observed extension it does not cover
    is classified by suffix group, and anything unrecognised lands in Other.

    Args:
        extensions: Observed extensions (a files_by_extension dict works too).

    Returns:
        A CategoryMap in which every observed extension appears exactly once.
    """
    categories = base_category_map()

    for ext in extensions:
        if categories.covers(ext):
            continue
        categories.add_extension(classify_extension(ext), ext)

    return categories


def normalize_extension(ext: str) -> str:
    text = ext.strip().lower()
    if text == NO_EXTENSION:
        return text
    if not text.startswith("."):
        text = "." + text
    return text


def parse_category_response(response_text: str) -> CategoryMap:
    """
    Parse the model's category answer into a CategoryMap.

    Args:
        response_text: Raw completion text.

    Returns:
        CategoryMap in the order the model listed the categories.

    Raises:
        CategoryParseError: If the text holds no usable JSON object.
    """
    try:
        data = parse_llm_json(response_text)
    except json.JSONDecodeError as e:
        raise CategoryParseError(f"Category answer is not valid JSON: {e}") from e

    if not isinstance(data, dict) or not data:
        raise CategoryParseError("Category answer is not a non-empty JSON object")

    categories = CategoryMap()
    for name, exts in data.items():
        if not isinstance(name, str) or not name.strip():
            raise CategoryParseError("Category names must be non-empty strings")
        if not isinstance(exts, list) or not all(isinstance(e, str) for e in exts):
            raise CategoryParseError(f"Category {name!r} must map to a list of extensions")

        extensions = [normalize_extension(e) for e in exts if e.strip()]
        # Names differing only in surrounding whitespace are one category
        existing = categories.get(name.strip())
        if existing is None:
            categories.categories.append(Category(name.strip(), extensions))
        else:
            existing.extensions.extend(extensions)

    return categories


def determine_categories_with_ai(files_by_extension: dict[str, list[dict]], client, language: str) -> CategoryMap:
    """
    Ask the AI collaborator for a category map.

    Raises:
        LLMError: If the call fails.
        CategoryParseError: If the answer cannot be used.
    """
    messages = build_categories_prompt(files_by_extension, language)
    temperature = get_operation_config("categorize")["temperature"]
    response_text = client.complete(messages, temperature)
    return parse_category_response(response_text)


def map_files_to_categories(files: Iterable[dict], categories: CategoryMap) -> dict[str, list[dict]]:
    """
    Assign each file to the first category that lists its extension.

    Every category of the map appears in the result (in map order), plus an
    Other bucket that receives the files no category claims.
    """
    result: dict[str, list[dict]] = {name: [] for name in categories.names()}
    result.setdefault(OTHER_CATEGORY, [])

    for f in files:
        name = categories.category_for(file_extension(f))
        result[name if name is not None else OTHER_CATEGORY].append(f)

    return result
