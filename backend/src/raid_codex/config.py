"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Settings
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS - comma-separated origins (env var: CORS_ORIGINS)
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Snapshot location (champions.json / guides.json), relative to repo root
    data_dir: str = "data"
    # Downloaded avatar images
    image_dir: str = "public/champions"

    # Third-party champion sources
    inteleria_api_url: str = "https://www.inteleria.com/wp-json/in-champions/v1/champions"
    inteleria_list_length: int = 1200
    hellhades_api_url: str = "https://hellhades.com/wp-json/hh-api/v3/champions?mode=all"
    hellhades_skills_url: str = "https://hellhades.com/wp-json/hh-api/v3/raid/skills/{id}"

    # Enrichment rate limiting
    request_timeout: float = 10.0
    enrichment_batch_size: int = 20
    enrichment_batch_delay: float = 0.5
    save_interval: int = 50

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
