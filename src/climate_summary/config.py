from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Runtime configuration for the climate summary.
    Reads from CLIMATE_* environment variables and an optional .env file.
    """

    # Logging
    log_level: str = Field(default="WARNING", description="Level for the JSON log on stderr")
    log_file: str | None = Field(default=None, description="Optional additional log file")

    # Aggregation
    max_states: int | None = Field(
        default=None,
        ge=1,
        description="Fixed capacity of distinct state codes (unbounded if unset)",
    )
    strict_numeric: bool = Field(
        default=False, description="Skip lines with non-numeric fields instead of reading zero"
    )

    # Input / Output
    encoding: str = Field(default="utf-8", description="Encoding of the input files")
    summary_json: str | None = Field(
        default=None, description="Write the per-state summary as JSON to this path"
    )

    model_config = SettingsConfigDict(
        env_prefix="CLIMATE_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


# Global settings instance
settings = Settings()
