# olastretch/config/models.py

"""
Pydantic models for defining the structure and validation of the olastretch
configuration (olastretch.toml). Uses Pydantic V2 syntax.
"""

from pathlib import Path
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from olastretch.core.timescale.session import (
    DEFAULT_RAMP_PROPORTION,
    DEFAULT_SCALE_FACTOR,
    DEFAULT_WINDOW_LENGTH,
    MAX_SCALE_FACTOR,
)

# --- Helper Functions ---

def _resolve_path(path: Union[str, Path]) -> Path:
    """Resolves and expands user paths."""
    return Path(path).expanduser().resolve()

# --- Model Definitions ---

class DefaultsConfig(BaseModel):
    """Default I/O parameters."""
    default_sample_rate: int = Field(0, ge=0, description="Sample rate to load audio at; 0 keeps the file's native rate.")
    default_output_subtype: str = Field("PCM_16", description="soundfile subtype used when writing results.")

class PathsConfig(BaseModel):
    """Configuration for file paths used by olastretch."""
    log_directory: Path = Field(default=Path("./olastretch_logs"), description="Directory for log files.")

    @field_validator('log_directory', mode='before')
    @classmethod
    def resolve_paths_before_validation(cls, value: Any) -> Path:
        """Resolves paths before Pydantic validates them."""
        if isinstance(value, (str, Path)):
            return _resolve_path(value)
        return value

class TimeScaleConfig(BaseModel):
    """Default overlap-add parameters for the time scaler."""
    window_length: int = Field(DEFAULT_WINDOW_LENGTH, ge=2, description="Analysis window length in samples (even).")
    ramp_proportion: float = Field(DEFAULT_RAMP_PROPORTION, ge=0.0, le=1.0, description="Fraction of the window used for crossfades.")
    scale_factor: float = Field(DEFAULT_SCALE_FACTOR, gt=0.0, lt=MAX_SCALE_FACTOR, description="Output duration / input duration.")

    @field_validator('window_length')
    @classmethod
    def check_even(cls, value: int) -> int:
        if value % 2 != 0:
            raise ValueError(f"window_length must be even, got {value}")
        return value

class LoggingConfig(BaseModel):
    """Logging configuration settings."""
    log_file_enabled: bool = Field(False, description="Enable/disable persistent file logging.")
    log_filename_template: str = Field("olastretch_run_{timestamp:%Y%m%d_%H%M%S}.log", description="Naming pattern for log files.")
    log_level_file: str = Field("DEBUG", description="Minimum level for file logs (DEBUG, INFO, WARNING, ERROR, CRITICAL).")
    log_format: str = Field("%(asctime)s [%(levelname)-8s] %(name)-30s - %(message)s (%(filename)s:%(lineno)d)", description="Format string for file log entries.")
    log_level_console: str = Field("WARNING", description="Default minimum level for console output (overridden by verbosity flags).")

    @field_validator('log_level_file', 'log_level_console')
    @classmethod
    def check_log_level(cls, value: str) -> str:
        """Validate log level strings."""
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in allowed_levels:
            raise ValueError(f"Invalid log level '{value}'. Must be one of {allowed_levels}")
        return upper_value

class OlaStretchConfig(BaseModel):
    """Root configuration model for olastretch."""
    model_config = ConfigDict(
        extra='ignore',
        validate_assignment=True
    )

    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    timescale: TimeScaleConfig = Field(default_factory=TimeScaleConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
