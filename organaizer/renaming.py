"""
Rename planning for OrganAIzer.

Expands a token pattern against each file's metadata. Names are only
proposed; nothing is renamed and collisions are not resolved.
"""

import re
from pathlib import PurePosixPath

from .categories import get_fallback_categories
from .tree import NO_EXTENSION, file_extension, file_mtime, file_size, format_file_size

DEFAULT_PATTERN = "{name}_{counter}"

TOKEN_PATTERN = re.compile(r'\{(name|extension|date|size|counter|type|parent)\}')


def strip_extension(name: str) -> str:
    """Drop the last ".suffix" from a file name."""
    return re.sub(r'\.[^/.]+$', '', name)


def _raw_extension(file: dict) -> str:
    ext = file.get("extension")
    if not ext or not isinstance(ext, str) or ext == NO_EXTENSION:
        return ""
    return ext


def _parent_name(file: dict) -> str:
    path = str(file.get("path") or "").replace("\\", "/")
    return PurePosixPath(path).parent.name


def token_values(file: dict, position: int) -> dict[str, str]:
    """
    Compute every token value for one file.

    Args:
        file: File node.
        position: 1-based position of the file in the input sequence.
    """
    ext = file_extension(file)
    mtime = file_mtime(file)
    return {
        "name": strip_extension(str(file.get("name", ""))),
        "extension": _raw_extension(file),
        "date": mtime.date().isoformat() if mtime else "",
        "size": format_file_size(file_size(file)),
        "counter": str(position),
        "type": get_fallback_categories([ext]).category_for(ext),
        "parent": _parent_name(file),
    }


def render_name(pattern: str, values: dict[str, str]) -> str:
    """
    Substitute tokens in a single pass.

    Only the first occurrence of each token is replaced; repeats and any
    other text are copied through literally. Substituted values are never
    rescanned for tokens.
    """
    used = set()

    def replace(match: re.Match) -> str:
        token = match.group(1)
        if token in used:
            return match.group(0)
        used.add(token)
        return values[token]

    return TOKEN_PATTERN.sub(replace, pattern)


def suggest_renaming(files: list[dict], pattern: str | None = None) -> list[dict]:
    """
    Propose a new name for every file.

    Supported tokens: {name}, {extension}, {date}, {size}, {counter},
    {type}, {parent}. If the file has an extension that does not appear
    anywhere in the produced name, it is appended.

    Args:
        files: Flattened file nodes.
        pattern: Token pattern, defaults to "{name}_{counter}".

    Returns:
        List of {originalPath, originalName, suggestedName} dicts.
    """
    pattern = pattern or DEFAULT_PATTERN
    suggestions = []

    for position, file in enumerate(files, 1):
        new_name = render_name(pattern, token_values(file, position))

        ext = _raw_extension(file)
        if ext and ext not in new_name:
            new_name += ext

        suggestions.append({
            "originalPath": file.get("path"),
            "originalName": file.get("name"),
            "suggestedName": new_name,
        })

    return suggestions
