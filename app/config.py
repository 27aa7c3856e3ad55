"""
Application configuration using Pydantic settings.
"""
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Planting / Summary Parameters
    planting_strategy: str = Field(
        default="auto",
        description="Planting density strategy: auto, area or pipes"
    )
    unassigned_label: str = Field(
        default="not defined",
        description="Crop name and irrigation type reported for unassigned zones"
    )
    lateral_emitter_tolerance_m: float = Field(
        default=1.5,
        description="Maximum distance in meters for an emitter to count as mounted on a lateral"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (use specific origins in production)"
    )

    # Rate Limiting
    rate_limit_requests: int = Field(
        default=100,
        description="Maximum requests per minute per client"
    )

    # Application Settings
    app_name: str = Field(
        default="Irrigation Planner Statistics",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode"
    )

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
