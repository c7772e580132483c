"""Routine editor configuration loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings


class RoutineConfig(BaseSettings):
    """Routine editor configuration loaded from environment variables.

    Settings are loaded from environment variables with sensible defaults.
    For local development, create a .env file in the project root.
    """

    # Class source (supplies the initial list of class names)
    class_sections_url: str = Field(
        default="http://localhost:8000/api/class-sections",
        description="Endpoint returning {success, count, data: [{name, sections}]}",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for a single class source request",
    )

    # Document
    routine_title: str = Field(
        default="First terminal exam routine",
        description="Default display and export title of the routine table",
    )
    export_dir: str = Field(
        default="data/exports",
        description="Directory the export CLI writes payloads into",
    )

    # Logging
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format (for production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Singleton pattern
_config: RoutineConfig | None = None


def get_config() -> RoutineConfig:
    """Get the routine configuration singleton.

    Returns:
        RoutineConfig: Routine configuration instance
    """
    global _config
    if _config is None:
        _config = RoutineConfig()
    return _config
