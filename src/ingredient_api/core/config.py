"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Google Gemini vision
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_primary_model: str = "gemini-2.5-pro"
    gemini_fallback_model: str = "gemini-1.5-flash"
    gemini_timeout: float = 30.0
    gemini_fallback_timeout: float = 25.0

    # Result shaping
    vision_confidence_threshold: float = 0.5
    vision_max_results: int = 12

    # Retry policy (backoff = attempt * delay)
    retry_max_attempts: int = 3
    retry_network_delay: float = 2.0
    retry_overloaded_delay: float = 3.0
    retry_rate_limited_delay: float = 6.0

    # Matching calibration
    corroboration_boost: float = 0.15
    dominance_ratio: float = 0.7
    substring_similarity_cutoff: float = 0.6
    fuzzy_similarity_cutoff: float = 0.8

    # Known-ingredient resolution: confidence multipliers for names outside the food database
    unknown_model_discount: float = 0.95
    unknown_tagger_discount: float = 0.9

    # Generic object tagger
    tagger_enabled: bool = False
    tagger_base_url: str = "http://localhost:8000"
    tagger_timeout: float = 15.0

    # Reference ingredient catalog (TheMealDB)
    catalog_base_url: str = "https://www.themealdb.com/api/json/v1/1"
    catalog_timeout: float = 10.0
    catalog_ttl_hours: float = 24.0
    catalog_serve_stale: bool = False  # Serve an expired cache if refresh fails
    catalog_stale_retry_seconds: float = 60.0  # Wait between refetches while serving stale

    # App
    debug: bool = False
    log_level: str = "INFO"
    app_name: str = "Ingredient Recognition API"
    api_version: str = "1.0.0"

    @property
    def is_vision_configured(self) -> bool:
        """Check if the vision provider has credentials."""
        return bool(self.gemini_api_key)

    @property
    def catalog_ttl_seconds(self) -> float:
        return self.catalog_ttl_hours * 3600


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
