"""
Configuration settings for Review Insight.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
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
    APP_NAME: str = "Review Insight"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"
    
    # === Inference API ===
    INFERENCE_URL: str = (
        "https://api-inference.huggingface.co/models/tiiuae/falcon-7b-instruct"
        "?wait_for_model=true"
    )
    SCORING_URL: str = (
        "https://api-inference.huggingface.co/models/siebert/sentiment-roberta-large-english"
    )
    HF_API_TOKEN: str | None = None  # Server-side fallback when the caller sends none
    REQUIRE_AUTH_TOKEN: bool = False  # True: refuse before calling the API without a token
    REQUEST_TIMEOUT: float = 60.0  # seconds
    
    # === Warmup Retry ===
    WARMUP_RETRY_DELAY_SECONDS: float = 1.2
    ERROR_BODY_CAPTURE_LIMIT: int = 800  # chars of an error body kept in messages
    
    # === Dataset ===
    DATASET_PATH: str = "reviews_test.tsv"
    
    # === Local State ===
    STATE_FILE: str = ".review_insight_state.json"
    
    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
