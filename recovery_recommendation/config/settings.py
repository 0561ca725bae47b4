"""Recovery Recommendation settings

Environment variables:
- OPENAI_API_KEY: OpenAI API key
- OPENAI_MODEL: completion model (default: gpt-4o)
- RATE_LIMIT_PER_MINUTE / RATE_LIMIT_PER_HOUR: local LLM call budget
- DATA_DIR: directory holding exercises.json
- LOG_LEVEL: service log level (default: INFO)
"""

from pathlib import Path

from pydantic_settings import BaseSettings
from pydantic import Field

HOUR = 60 * 60
DAY = 24 * HOUR


class RecoverySettings(BaseSettings):
    """Recovery recommendation settings"""

    # API Keys
    openai_api_key: str = Field(default="", description="OpenAI API Key")

    # OpenAI
    openai_model: str = Field(default="gpt-4o", description="LLM model")
    openai_timeout_seconds: float = Field(
        default=30.0, gt=0, description="Timeout for a single completion call"
    )

    # Rate limit (per process)
    rate_limit_per_minute: int = Field(default=10, ge=1, description="Calls per minute")
    rate_limit_per_hour: int = Field(default=100, ge=1, description="Calls per hour")

    # Cache TTL (seconds)
    cache_default_ttl_seconds: float = Field(default=DAY, gt=0)
    recommendation_ttl_seconds: float = Field(default=12 * HOUR, gt=0)
    recovery_plan_ttl_seconds: float = Field(default=DAY, gt=0)
    movement_analysis_ttl_seconds: float = Field(default=7 * DAY, gt=0)
    feedback_analysis_ttl_seconds: float = Field(default=30 * DAY, gt=0)
    cache_sweep_interval_seconds: float = Field(
        default=HOUR, gt=0, description="Expired entry sweep interval"
    )

    # Plan prompt
    max_prompt_exercises: int = Field(
        default=20, ge=1, description="Catalog exercises embedded in the plan prompt"
    )

    # Data path
    data_dir: Path = Field(
        default=Path(__file__).parent.parent.parent / "data",
        description="Data directory",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level for the service loggers")

    # Server
    host: str = Field(default="0.0.0.0", description="Host")
    port: int = Field(default=8000, description="Port")

    class Config:
        env_prefix = ""
        env_file = ".env"
        extra = "ignore"


settings = RecoverySettings()
