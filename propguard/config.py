"""Library configuration via environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Engine settings loaded from PROPGUARD_* environment variables."""

    # Logging
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    # Execution policy
    RESET_OPTIONAL_PER_PRIORITY: bool = False
    SLOW_RULE_THRESHOLD_MS: float = 250.0

    model_config = {
        "env_prefix": "PROPGUARD_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    return Settings()
