"""
Configuration settings for the TechDocGen backend.
Loads environment variables and provides application-wide settings.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # AI Gateway Configuration
    AI_GATEWAY_URL: str = "https://ai.gateway.lovable.dev/v1"
    AI_GATEWAY_API_KEY: Optional[str] = None
    AI_MODEL: str = "google/gemini-2.5-flash"
    AI_GATEWAY_TIMEOUT: float = 120.0  # seconds; completions can be slow

    # Sampling Configuration
    GENERATION_TEMPERATURE: float = 0.7
    CHAT_TEMPERATURE: float = 0.7
    CHAT_MAX_TOKENS: int = 500

    # Server Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @property
    def gateway_configured(self) -> bool:
        return bool(self.AI_GATEWAY_API_KEY)


# Global settings instance
settings = Settings()
