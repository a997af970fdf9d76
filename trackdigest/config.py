"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
Every field can be overridden with a TRACKDIGEST_* environment variable.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict

from trackdigest.shared.constants import (
    BoundaryMode,
    DEFAULT_CANVAS_SIZE,
    DEFAULT_SMOOTHING_WINDOW,
    VINCENTY_MAX_ITERATIONS,
    VINCENTY_TOLERANCE,
)


class Settings(BaseSettings):
    """Pipeline settings with validation."""

    # === Core ===
    log_level: str = Field(default="INFO", description="Logging level")

    # === Elevation profile ===
    canvas_size: int = Field(
        default=DEFAULT_CANVAS_SIZE,
        gt=0,
        description="Side of the square logical canvas the profile is quantized to"
    )
    smoothing_window: int = Field(
        default=DEFAULT_SMOOTHING_WINDOW,
        ge=3,
        description="Moving average window for elevation smoothing (odd)"
    )
    boundary_mode: BoundaryMode = Field(
        default=BoundaryMode.FULL,
        description="'full' uses every point, 'legacy' drops the trailing point"
    )

    # === Geodesy ===
    geodesic_max_iterations: int = Field(default=VINCENTY_MAX_ITERATIONS, gt=0)
    geodesic_tolerance: float = Field(default=VINCENTY_TOLERANCE, gt=0)
    strict_geodesy: bool = Field(
        default=False,
        description="Raise on Vincenty non-convergence instead of using 0 m"
    )

    # === Input ===
    read_chunk_size: int = Field(
        default=64 * 1024,
        gt=0,
        description="Bytes read from the source per parser feed"
    )

    @field_validator('smoothing_window')
    @classmethod
    def check_odd_window(cls, v: int) -> int:
        """A centered window needs an odd size."""
        if v % 2 == 0:
            raise ValueError("smoothing_window must be odd")
        return v

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    model_config = ConfigDict(
        env_prefix="TRACKDIGEST_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return settings
