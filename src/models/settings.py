"""
Engine settings - validated `engine:` section of the YAML configuration
"""

from pydantic import BaseModel, Field, field_validator

from models.enums import LogLevel


class EngineSettings(BaseModel):
    """Runtime settings shared by all transitions"""
    tick_interval_ms: int = Field(
        10,
        ge=1,
        description="Clock period for transitions built without an explicit interval"
    )
    log_level: LogLevel = Field(LogLevel.INFO, description="Minimum log level (DEBUG/INFO/WARN/ERROR)")
    use_colors: bool = Field(True, description="ANSI colors in console log output")

    @field_validator("log_level", mode="before")
    @classmethod
    def parse_log_level(cls, value):
        if isinstance(value, str):
            try:
                return LogLevel[value.upper()]
            except KeyError:
                raise ValueError(f"Unknown log level: {value}. Available: {[l.name for l in LogLevel]}")
        return value


# === Global instance helpers ===
_settings = EngineSettings()

def get_settings() -> EngineSettings:
    return _settings

def set_settings(settings: EngineSettings) -> None:
    global _settings
    _settings = settings
