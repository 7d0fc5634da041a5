"""Configuration management for the Playwright recorder."""

from enum import Enum
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    """Supported log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class RecorderSettings(BaseSettings):
    """Recorder settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RECORDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Session
    default_url: str = Field("https://wikipedia.org/", description="URL suggested when none is given")
    refresh_interval_ms: int = Field(500, gt=0, description="Delay between render passes")

    # Output document
    output_path: str = Field("./recording.spec.js", description="File the generated code is written to")
    template_path: Optional[str] = Field(None, description="Code skeleton, bundled template when unset")
    placeholder: str = Field("    // <<CONTENT>>", description="Template line replaced by the statements")
    indent: str = Field("    ", description="Indent unit for each generated statement")
    escape_values: bool = Field(False, description="Escape quotes in targets, keys and field values")

    # Browser
    headless: bool = Field(False, description="Run the recording browser headless")
    binding_name: str = Field(
        "playwrightRecorderActionTracker",
        description="Name of the binding the injected script reports events to"
    )

    # Logging
    log_level: LogLevel = Field(LogLevel.INFO, description="Log level")
    json_logs: bool = Field(False, description="Output logs as JSON")

    @property
    def refresh_interval(self) -> float:
        """Refresh interval in seconds."""
        return self.refresh_interval_ms / 1000


def get_settings(**overrides) -> RecorderSettings:
    """Get recorder settings."""
    return RecorderSettings(**overrides)
