"""Client configuration using Pydantic Settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Gateway settings loaded from environment variables."""

    # Kyivstar OAuth2
    client_id: str
    client_secret: str

    # Gateway
    use_sandbox: bool = False
    timeout: float = 30.0

    model_config = SettingsConfigDict(
        env_prefix="KYIVSTAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get gateway settings instance."""
    return Settings()
