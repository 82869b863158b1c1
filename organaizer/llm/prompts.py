"""
Prompt builders for the AI-backed operations.

Each builder returns a list of role-tagged messages ready for
CompletionClient.complete().
"""

import json

from ..tree import file_mtime, file_size, format_file_size


def _messages(system: str, user: str) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]


def build_categories_prompt(files_by_extension: dict[str, list[dict]], language: str) -> list[dict[str, str]]:
    """
    Build the prompt asking for a category -> extensions map.

    Args:
        files_by_extension: Files grouped by extension.
        language: Language for the category names.

    Returns:
        Messages for the chat completion call.
    """
    lines = []
    for ext, files in files_by_extension.items():
        examples = ", ".join(f.get("name", "") for f in files[:3])
        lines.append(f"{ext}: {len(files)} files (examples: {examples})")
    extension_summary = "\n".join(lines)

    prompt = f"""Given these file types in a folder:

{extension_summary}

Suggest logical categories to organize them, following these rules:
1. Group similar extensions (e.g., .jpg, .png under "Images")
2. Create 4-7 categories, not more
3. Assign each extension to only one category
4. Use meaningful category names in {language}

Provide the result as JSON with format:
{{ "categoryName": ["extension1", "extension2", ...], ... }}
"""
    return _messages("You are an expert in file organization.", prompt)


def build_suggest_prompt(stats: dict, structure, language: str) -> list[dict[str, str]]:
    """
    Build the prompt asking for organization advice.

    Args:
        stats: FolderStats.to_dict() output.
        structure: Output of summarize_folder_structure().
        language: Response language.
    """
    largest = ", ".join(f["name"] or "" for f in stats.get("largestFiles", []))

    prompt = f"""Analyze this folder structure and suggest the best way to organize it:

Total files: {stats.get('totalFiles', 0)}
File types present: {', '.join(stats.get('fileTypes', []))}
Total size: {format_file_size(stats.get('totalSize', 0))}
Largest files: {largest}

Current structure is:
{json.dumps(structure, indent=2, ensure_ascii=False)}

Provide 3-5 specific suggestions on how to better organize this folder.
Respond in {language}.
"""
    return _messages("You are an assistant expert in file and folder organization.", prompt)


def build_search_prompt(files: list[dict], query: str, language: str) -> list[dict[str, str]]:
    """
    Build the prompt asking the model to score files against a description.

    The answer is expected as lines of ``"file name": score``.
    """
    descriptions = []
    for f in files:
        mtime = file_mtime(f)
        descriptions.append({
            "path": f.get("path"),
            "name": f.get("name"),
            "type": f.get("extension"),
            "size": file_size(f),
            "modified": mtime.isoformat() if mtime else None,
        })

    prompt = f"""Given these files:
{json.dumps(descriptions, indent=2, ensure_ascii=False)}

Find the ones that best match the following description: "{query}"
Provide a relevance score from 0 to 100 for each file that might match,
one per line, formatted as "file name": score.
Respond in {language}.
"""
    return _messages("You are an assistant expert in file analysis and search.", prompt)
