"""
Folder tree traversal and statistics.

Functions for flattening the submitted folder tree, computing aggregate
statistics and building a bounded structural digest for prompts.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

NO_EXTENSION = "no_extension"

SIZE_UNITS = ["Bytes", "KB", "MB", "GB", "TB"]

# Numeric mtimes above this are epoch milliseconds (JavaScript clients), below it seconds
_EPOCH_MS_THRESHOLD = 1e11

MAX_SUMMARY_CHILDREN = 10


def is_file_node(node: Any) -> bool:
    return isinstance(node, dict) and node.get("type") == "file"


def file_extension(file: dict) -> str:
    """Return the lowercase extension of a file node, or the no-extension sentinel."""
    ext = file.get("extension")
    if not ext or not isinstance(ext, str):
        return NO_EXTENSION
    return ext.lower()


def file_size(file: dict) -> int:
    stats = file.get("stats") or {}
    size = stats.get("size", 0) if isinstance(stats, dict) else 0
    if isinstance(size, bool) or not isinstance(size, (int, float)):
        return 0
    return int(size)


def parse_mtime(value: Any) -> datetime | None:
    """
    Parse a modification time into an aware UTC datetime.

    Accepts ISO 8601 strings (a trailing "Z" is allowed) and numeric epoch
    timestamps in seconds or milliseconds.

    Returns:
        The parsed datetime, or None if the value cannot be interpreted.
    """
    if isinstance(value, bool) or value is None:
        return None

    if isinstance(value, (int, float)):
        seconds = value / 1000 if abs(value) > _EPOCH_MS_THRESHOLD else value
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            return None
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)

    return None


def file_mtime(file: dict) -> datetime | None:
    stats = file.get("stats") or {}
    if not isinstance(stats, dict):
        return None
    return parse_mtime(stats.get("mtime"))


def extract_all_files(node: Any, results: list[dict] | None = None) -> list[dict]:
    """
    Recursively collect every file node of a tree, depth-first in child order.

    Directory nodes never appear in the output. Nodes that are not dicts and
    directories without a usable ``children`` list are skipped silently.

    Args:
        node: Root node of the tree.
        results: Accumulator, created when omitted.

    Returns:
        Flat list of file nodes.
    """
    if results is None:
        results = []

    if is_file_node(node):
        results.append(node)
    elif isinstance(node, dict):
        children = node.get("children")
        if isinstance(children, list):
            for child in children:
                extract_all_files(child, results)

    return results


@dataclass
class FolderStats:
    """Aggregate statistics for the files of one submitted tree."""
    total_files: int = 0
    file_types: list[str] = field(default_factory=list)
    total_size: int = 0
    largest_files: list[dict] = field(default_factory=list)
    oldest_file: dict | None = None
    newest_file: dict | None = None

    def to_dict(self) -> dict:
        return {
            "totalFiles": self.total_files,
            "fileTypes": list(self.file_types),
            "totalSize": self.total_size,
            "largestFiles": [
                {"name": f.get("name"), "path": f.get("path"), "size": file_size(f)}
                for f in self.largest_files
            ],
            "oldestFile": self.oldest_file,
            "newestFile": self.newest_file,
        }


def analyze_folder(root: Any) -> FolderStats:
    """
    Compute statistics for a folder tree.

    Args:
        root: Root node of the tree.

    Returns:
        FolderStats with counts, sizes, the five largest files and the
        oldest/newest files. Files without a parseable mtime are ignored for
        the oldest/newest computation.
    """
    files = extract_all_files(root)

    file_types = list(dict.fromkeys(file_extension(f) for f in files))
    total_size = sum(file_size(f) for f in files)

    # sorted() is stable, so equal sizes keep flatten order
    largest = sorted(files, key=lambda f: -file_size(f))[:5]

    oldest = newest = None
    oldest_time = newest_time = None
    for f in files:
        mtime = file_mtime(f)
        if mtime is None:
            continue
        if oldest_time is None or mtime < oldest_time:
            oldest, oldest_time = f, mtime
        if newest_time is None or mtime > newest_time:
            newest, newest_time = f, mtime

    return FolderStats(
        total_files=len(files),
        file_types=file_types,
        total_size=total_size,
        largest_files=largest,
        oldest_file=oldest,
        newest_file=newest,
    )


def summarize_folder_structure(node: Any, depth: int = 0, max_depth: int = 2) -> Any:
    """
    Build a depth- and breadth-limited digest of the tree for prompts.

    Files become their bare name. Directories become ``{"name", "children"}``
    with at most the first 10 children; directories below ``max_depth`` are
    collapsed into a single placeholder string.
    """
    if not isinstance(node, dict):
        return str(node)

    name = node.get("name", "")

    if node.get("type") == "file":
        return name

    if depth > max_depth:
        return f"{name} (and other items...)"

    result = {"name": name, "children": []}

    children = node.get("children")
    if isinstance(children, list):
        result["children"] = [
            summarize_folder_structure(child, depth + 1, max_depth)
            for child in children[:MAX_SUMMARY_CHILDREN]
        ]
        if len(children) > MAX_SUMMARY_CHILDREN:
            result["children"].append(
                f"... and {len(children) - MAX_SUMMARY_CHILDREN} other items"
            )

    return result


def format_file_size(size: int) -> str:
    """Format a byte count as e.g. "0 Bytes", "1.5 KB" or "2 MB"."""
    if not size:
        return "0 Bytes"

    value = float(size)
    unit = 0
    while abs(value) >= 1024 and unit < len(SIZE_UNITS) - 1:
        value /= 1024
        unit += 1

    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {SIZE_UNITS[unit]}"
