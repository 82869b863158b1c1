"""
LLM model configurations.
"""

# OpenRouter-compatible chat completion endpoint
DEFAULT_API_URL = "https://openrouter.ai/api/v1"

# Default model identifier sent to the endpoint
DEFAULT_MODEL_ID = "google/gemini-2.5-pro-exp-03-25:free"

# Headers OpenRouter uses to attribute requests
APP_REFERER = "https://organaizer-api.onrender.com"
APP_TITLE = "OrganAIzer"

# Operation-specific configuration
OPERATION_CONFIG = {
    "categorize": {
        "temperature": 0.2,  # Stable category names
    },
    "suggest": {
        "temperature": 0.7,  # Free-form advice
    },
    "search": {
        "temperature": 0.2,  # Scores should be reproducible
    },
}


def get_operation_config(operation: str) -> dict:
    """
    Get configuration for a specific operation.

    Args:
        operation: Operation name (categorize, suggest, search).

    Returns:
        Configuration dict with temperature.
    """
    return OPERATION_CONFIG.get(operation, OPERATION_CONFIG["suggest"])
