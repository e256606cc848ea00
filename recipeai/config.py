"""Application configuration using pydantic-settings."""

from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Keys
    gemini_api_key: str

    # Server
    port: int = 8080
    host: str = "0.0.0.0"

    # Logging
    log_level: str = "INFO"

    # HTTP Settings
    max_request_size: int = 10 * 1024 * 1024  # 10MB

    # Rate Limiting
    rate_limit_per_hour: int = 100

    # CORS
    cors_origins: str = "*"  # Comma-separated origins or "*" for all

    # Gemini Settings
    gemini_model: str = "gemini-2.0-flash"
    gemini_image_model: str = "gemini-2.0-flash-exp"
    gemini_temperature: float = 0.4
    gemini_top_p: float = 0.9
    gemini_top_k: int = 32
    gemini_max_tokens: int = 2048
    gemini_vision_max_tokens: int = 1024
    gemini_image_temperature: float = 0.7

    # Allergens checked when the client does not send its own list
    default_user_allergens: str = "peanuts,gluten,shellfish"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Get list of CORS origins."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def default_user_allergens_list(self) -> List[str]:
        """Get list of default user allergens."""
        return [a.strip() for a in self.default_user_allergens.split(",") if a.strip()]


# Global settings instance
settings = Settings()
