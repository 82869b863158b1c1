"""
Organization advice used when the AI collaborator has nothing to offer,
and the structure digest returned alongside the advice.
"""

GENERIC_SUGGESTIONS = """Some general suggestions for organizing your files:

1. Create a folder structure based on projects or categories
2. Use a consistent naming scheme for your files
3. Keep source files apart from compiled or generated files
4. Regularly archive old or unused files
5. Use folders such as "Documents", "Images" and "Projects" for easier navigation

Note: this answer was generated automatically because AI features are not available."""

GENERIC_CHANGES = [
    "1. Organize files into folders by type (Documents, Images, Code, etc.)",
    "2. Use consistent file names",
    "3. Keep source files apart from generated files",
    "4. Regularly archive files that are no longer used",
    "5. Consider tags or prefixes to group related files",
]

BASIC_STRUCTURE = {
    "Documents/": {
        "description": "Text files, documents and PDFs",
        "extensions": [".pdf", ".doc", ".txt", ".md"],
    },
    "Images/": {
        "description": "Image files",
        "extensions": [".jpg", ".png", ".gif", ".svg"],
    },
    "Code/": {
        "description": "Source code files",
        "extensions": [".js", ".ts", ".py", ".html", ".css"],
    },
    "Resources/": {
        "description": "Assets and miscellaneous resources",
        "extensions": [".svg", ".json", ".xml"],
    },
    "Archives/": {
        "description": "Compressed files",
        "extensions": [".zip", ".rar", ".7z"],
    },
}


def generate_suggested_structure(folder_data: dict, ai_suggestions: str | None) -> dict:
    """
    Describe the proposed structure for a folder.

    Without AI text a generic blueprint is returned; otherwise the AI
    advice is split into its non-empty lines.
    """
    root_name = folder_data.get("name") if isinstance(folder_data, dict) else None

    if not ai_suggestions:
        return {
            "currentRoot": root_name,
            "suggestedChanges": list(GENERIC_CHANGES),
            "suggestedFolders": BASIC_STRUCTURE,
            "note": "This is a generic structure. Enable AI for personalized suggestions.",
        }

    return {
        "currentRoot": root_name,
        "suggestedChanges": [line.strip() for line in ai_suggestions.splitlines() if line.strip()],
    }
