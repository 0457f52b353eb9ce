"""Application configuration using Pydantic Settings."""

from enum import Enum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMProvider(str, Enum):
    """Supported LLM providers."""
    OPENAI = "openai"
    GEMINI = "gemini"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    db_name: str = "nutriscan_db"

    # LLM Provider Selection (vision model used for food identification)
    llm_provider: LLMProvider = LLMProvider.GEMINI

    # Google Gemini Configuration
    google_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"

    # OpenAI Configuration
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    # LLM Settings
    llm_temperature: float = 0.0

    # USDA FoodData Central
    usda_api_key: str = ""
    usda_api_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    usda_timeout: float = 30.0

    # Uploads
    max_image_size_mb: int = 10

    # App
    debug: bool = False
    app_name: str = "NutriScan API"
    api_version: str = "1.0.0"

    @property
    def is_llm_configured(self) -> bool:
        """Check if the selected LLM provider is configured."""
        if self.llm_provider == LLMProvider.OPENAI:
            return bool(self.openai_api_key)
        elif self.llm_provider == LLMProvider.GEMINI:
            return bool(self.google_api_key)
        return False

    @property
    def is_usda_configured(self) -> bool:
        """Check if USDA nutrition lookup has an API key."""
        return bool(self.usda_api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
