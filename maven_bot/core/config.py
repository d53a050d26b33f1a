from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # .env may carry unrelated keys
    )

    app_name: str = "Maven"
    debug: bool = False

    # Telegram
    telegram_bot_token: str = ""

    # Redis FSM storage for the intake form; memory storage when unset
    redis_url: Optional[str] = None

    # Text generation
    generation_provider: Literal["anthropic", "openai"] = "anthropic"
    anthropic_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    anthropic_model: str = "claude-opus-4-5"
    openai_model: str = "gpt-4o"
    generation_timeout_seconds: float = Field(default=60.0, gt=0)

    # Output ceilings
    coaching_max_tokens: int = Field(default=700, gt=0)
    coaching_max_words: int = Field(default=350, gt=0)
    guide_max_tokens: int = Field(default=1000, gt=0)

    # Unfinished coaching sessions
    session_ttl_seconds: float = Field(default=3600.0, gt=0)
    max_sessions: int = Field(default=10000, ge=1)

    # Logging
    log_dir: Path = Path("logs")
    log_to_file: bool = False
    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process (environment + .env)."""
    return Settings()
