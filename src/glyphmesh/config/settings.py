"""Configuration settings for Glyphmesh."""

from pathlib import Path

from pydantic import BaseModel, Field


class GeometryConfig(BaseModel):
    """Configuration for contour cleanup and curve flattening.

    Tolerances are in document units (after the path's own coordinate
    system, before the group transform is applied).
    """

    epsilon: float = Field(
        default=1e-11,
        gt=0.0,
        le=1e-3,
        description="Maximum per-axis difference for two vertices to be the same",
    )
    max_loop_span: int = Field(
        default=2,
        ge=1,
        le=16,
        description="Largest number of edges a removable repeated-vertex loop may enclose",
    )
    curve_tolerance: float = Field(
        default=0.1,
        gt=0.0,
        le=100.0,
        description="Maximum distance between a curve and its flattened polyline (output units)",
    )

    def scaled_curve_tolerance(self, scale_x: float, scale_y: float) -> float:
        """Convert the output-space curve tolerance into path space.

        The transform's scale terms stretch path coordinates, so the
        tolerance shrinks by the larger of the two.

        Args:
            scale_x: Transform coefficient a
            scale_y: Transform coefficient d

        Returns:
            Tolerance to use while flattening path data
        """
        scale = max(abs(scale_x), abs(scale_y))
        if scale == 0.0:
            return self.curve_tolerance
        return self.curve_tolerance / scale


class InputConfig(BaseModel):
    """Configuration for reading SVG documents."""

    require_transform: bool = Field(
        default=True,
        description="Fail when the document has no <g transform> (identity otherwise)",
    )


class OutputConfig(BaseModel):
    """Configuration for OBJ output."""

    precision: int = Field(
        default=10,
        ge=6,
        le=17,
        description="Significant digits written for vertex coordinates",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class GlyphMeshSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    input: InputConfig = Field(default_factory=InputConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> GlyphMeshSettings:
    """Get default application settings."""
    return GlyphMeshSettings()
