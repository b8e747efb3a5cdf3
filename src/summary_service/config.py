"""
Configuration settings for the Meeting Summary Service.

All settings are loaded from environment variables with sensible defaults.
Use a .env file for local development.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Meeting Summary Service"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # === Completion endpoint (OpenAI-compatible /chat/completions) ===
    COMPLETION_BASE_URL: str = "https://api.openai.com/v1"
    COMPLETION_API_KEY: str = ""
    COMPLETION_MODEL: str = "gpt-4o-mini"
    COMPLETION_TIMEOUT: float = 60.0  # seconds, per attempt
    COMPLETION_TEMPERATURE: float = 0.3
    COMPLETION_MAX_TOKENS: int = 1500

    # === Transport retry ===
    MAX_RETRIES: int = 3  # total attempts per completion
    RETRY_BASE_DELAY_MS: int = 1000
    RETRY_BACKOFF_MULTIPLIER: float = 2.0
    RETRY_MAX_DELAY_MS: int = 60000
    RETRY_JITTER_FRACTION: float = 0.1

    # === Output quality ===
    MIN_SUMMARY_LENGTH: int = 50  # chars, after trimming
    QUALITY_MAX_ATTEMPTS: int = 2  # generations judged before giving up

    # === Prompt ===
    PROMPT_TEMPLATES_DIR: str = ""  # empty = bundled templates
    PROMPT_VERSION: str = "summarize-v1"
    CONTENT_TRUNCATION_LIMIT: int = 60000  # chars of transcript sent to the model

    # === Pipeline ===
    PIPELINE_TIMEOUT_SECONDS: float = 300.0

    # === Redis ===
    REDIS_URL: str = "redis://redis:6379/0"
    REDIS_MAX_CONNECTIONS: int = 50

    # === Audit ===
    AUDIT_SAMPLE_CHARS: int = 200
    AUDIT_TO_REDIS: bool = True
    AUDIT_LOG_KEY: str = "audit:summary"
    AUDIT_LOG_MAX_ENTRIES: int = 10000

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
