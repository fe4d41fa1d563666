from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PY_GALAXY_",
        extra="ignore",
    )

    # Database Configuration
    database_url: str = Field(
        default="sqlite:///./py_galaxy.db", description="SQLAlchemy database URL"
    )
    database_echo: bool = Field(default=False, description="Echo SQL statements")

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (json or console)")

    # Generation Configuration
    default_seed: str = Field(
        default="default", min_length=1, description="Seed used when none is given"
    )


# Instantiate singleton settings object
settings = Settings()
