"""Application configuration."""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Application settings."""

    # Upstream survey API
    SURVEY_API_BASE_URL: str = "http://localhost:8080/api"
    SURVEY_API_TIMEOUT: float = 30.0

    # Results
    RESULTS_REFRESH_SECONDS: float = 5.0
    NO_RESPONSE_LABEL: str = "no response"

    # CORS
    ALLOWED_ORIGINS: str = "http://localhost:19006,http://localhost:3000"

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]


settings = Settings()
