"""
Configuration for the OrganAIzer service.

Settings are read once from the environment (and a .env file, if present)
and passed explicitly to the components that need them.
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from .llm.models import DEFAULT_API_URL, DEFAULT_MODEL_ID


def _env_list(name: str, default: str) -> tuple[str, ...]:
    raw = os.getenv(name, default)
    if raw.strip() == "*":
        return ("*",)
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    """
    Immutable service configuration.

    The AI collaborator is considered enabled only when an API key is set.
    """
    api_key: str | None = None
    model: str = DEFAULT_MODEL_ID
    api_url: str = DEFAULT_API_URL
    host: str = "0.0.0.0"
    port: int = 3000
    ai_timeout: float = 45.0
    ai_retries: int = 1
    language: str = "English"
    cors_origins: tuple[str, ...] = field(default=("*",))
    log_level: str = "INFO"

    def __post_init__(self):
        if not (1 <= self.port <= 65535):
            raise ValueError(f"Invalid port number: {self.port}")
        if self.ai_timeout <= 0:
            raise ValueError(f"ai_timeout must be positive: {self.ai_timeout}")
        if self.ai_retries < 0:
            raise ValueError(f"ai_retries cannot be negative: {self.ai_retries}")

    @property
    def ai_enabled(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            load_dotenv_file: Load a .env file into the environment first.

        Returns:
            A validated Settings instance.
        """
        if load_dotenv_file:
            load_dotenv()

        return cls(
            api_key=os.getenv("OPENROUTER_API_KEY") or None,
            model=os.getenv("OPENROUTER_MODEL", DEFAULT_MODEL_ID),
            api_url=os.getenv("OPENROUTER_API_URL", DEFAULT_API_URL),
            host=os.getenv("ORGANAIZER_HOST", "0.0.0.0"),
            port=int(os.getenv("ORGANAIZER_PORT", os.getenv("PORT", "3000"))),
            ai_timeout=float(os.getenv("ORGANAIZER_AI_TIMEOUT", "45")),
            ai_retries=int(os.getenv("ORGANAIZER_AI_RETRIES", "1")),
            language=os.getenv("ORGANAIZER_LANGUAGE", "English"),
            cors_origins=_env_list("ORGANAIZER_CORS_ORIGINS", "*"),
            log_level=os.getenv("ORGANAIZER_LOG_LEVEL", "INFO").upper(),
        )
