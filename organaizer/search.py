"""
File search for OrganAIzer.

Two strategies share the SearchMatch result type:
- Keyword scoring over name, path and extension (no AI needed)
- Interpretation of free-text model answers of the form ``"name": score``
"""

import logging
import math
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

MAX_KEYWORD_RESULTS = 10
MIN_KEYWORD_LENGTH = 3
SIMILARITY_THRESHOLD = 0.3

NO_KEYWORDS_NOTE = "No meaningful keywords found in the query. Try being more specific."
NO_MATCHES_NOTE = "No files found matching these keywords."
UNSTRUCTURED_NOTE = "Could not extract structured matches from the AI response."
AI_MATCH_REASON = "Matches the user's query"

# "name": 85 / 'name' - 85 / name: 85
# Labels never cross a line break and are capped in length
MAX_LABEL_LENGTH = 255
SCORE_PATTERN = re.compile(
    r'''(['"]?)([^'"\n]{1,%d})\1\s*[:|-]\s*(\d+)''' % MAX_LABEL_LENGTH
)


@dataclass
class SearchMatch:
    """A file judged relevant to a query, with a 0-100 score."""
    file: dict
    relevance_score: int
    reason: str

    def __post_init__(self):
        self.relevance_score = max(0, min(100, int(self.relevance_score)))

    def to_dict(self) -> dict:
        return {
            "file": self.file,
            "relevanceScore": self.relevance_score,
            "reason": self.reason,
        }


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def extract_keywords(query: str | None) -> list[str]:
    """Lowercase and split a query, dropping tokens of two characters or less."""
    if not query:
        return []
    return [k for k in query.lower().split() if len(k) >= MIN_KEYWORD_LENGTH]


def keyword_score(search_string: str, keywords: list[str]) -> tuple[int, int]:
    """
    Score one searchable string.

    Returns:
        (number of keywords found, score 0-100). Occurrences are counted
        literally and without overlap.
    """
    matched = 0
    occurrences = 0
    for keyword in keywords:
        count = search_string.count(keyword)
        if count > 0:
            matched += 1
        occurrences += count

    total = len(keywords)
    score = min(100, _round_half_up((matched / total) * 70 + (occurrences / total) * 30))
    return matched, score


def perform_basic_keyword_search(files: list[dict], query: str | None) -> list[SearchMatch] | dict:
    """
    Rank files by keyword occurrences in name, path and extension.

    Args:
        files: Flattened file nodes.
        query: Free-text query.

    Returns:
        Up to 10 SearchMatch objects sorted by descending score (ties keep
        input order), or a {"note": ...} dict when the query has no usable
        keywords or nothing matches.
    """
    keywords = extract_keywords(query)
    if not keywords:
        return {"note": NO_KEYWORDS_NOTE}

    results = []
    for file in files:
        search_string = f"{file.get('name', '')} {file.get('path', '')} {file.get('extension') or ''}".lower()
        matched, score = keyword_score(search_string, keywords)
        if matched == 0:
            continue
        results.append(SearchMatch(
            file=file,
            relevance_score=score,
            reason=f"Contains {matched} of the searched keywords",
        ))

    results.sort(key=lambda m: -m.relevance_score)
    results = results[:MAX_KEYWORD_RESULTS]

    if not results:
        return {"note": NO_MATCHES_NOTE}
    return results


def calculate_similarity(a: str, b: str) -> float:
    """
    Character-overlap similarity in [0, 1].

    Counts the characters of the shorter string (per position, duplicates
    included) that occur anywhere in the longer one, divided by the longer
    length. The pair is ordered by (length, text) first, so the result does
    not depend on argument order.
    """
    shorter, longer = sorted((a, b), key=lambda s: (len(s), s))
    if not longer:
        return 0.0
    shared = sum(1 for ch in shorter if ch in longer)
    return shared / len(longer)


def find_best_file_name_match(label: str, files: list[dict]) -> dict | None:
    """
    Resolve a label from model output to one of the known files.

    A case-insensitive substring match in either direction wins first, in
    file order. Otherwise the file with the highest character similarity is
    returned if it scores above 0.3.
    """
    needle = label.lower()
    if not needle:
        return None

    for file in files:
        name = str(file.get("name", "")).lower()
        if name and (needle in name or name in needle):
            return file

    best_match = None
    best_score = 0.0
    for file in files:
        score = calculate_similarity(str(file.get("name", "")).lower(), needle)
        if score > best_score:
            best_score = score
            best_match = file

    return best_match if best_score > SIMILARITY_THRESHOLD else None


def parse_ai_search_response(response_text: str, files: list[dict]) -> list[SearchMatch] | dict:
    """
    Recover (file, score) pairs from a free-text model answer.

    Args:
        response_text: Raw completion text.
        files: Flattened file nodes the labels are resolved against.

    Returns:
        SearchMatch list sorted by descending score, or
        {"rawAIResponse", "note"} when no pair could be extracted.
    """
    matches = []

    for match in SCORE_PATTERN.finditer(response_text):
        label = match.group(2).strip()
        score = int(match.group(3))

        file = find_best_file_name_match(label, files)
        if file is None:
            logger.debug("Dropping unresolved label %r", label)
            continue

        matches.append(SearchMatch(file=file, relevance_score=score, reason=AI_MATCH_REASON))

    if not matches:
        return {
            "rawAIResponse": response_text,
            "note": UNSTRUCTURED_NOTE,
        }

    matches.sort(key=lambda m: -m.relevance_score)
    return matches
