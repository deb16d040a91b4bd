"""Application configuration."""

from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings, overridable via RASTERSTAG_* environment variables."""

    # Paths
    IMAGE_DIR: Path = Path("res") / "images"  # Named images are read from and written to here

    # Output
    OUTPUT_FORMAT: str = "png"
    OVERWRITE: Literal["ask", "always", "never"] = "ask"  # Policy for existing output files

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    model_config = {"env_prefix": "RASTERSTAG_"}

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_case_level(cls, value):
        return value.upper() if isinstance(value, str) else value
