"""Configuration management for glyphmesh.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Vertex epsilon, loop guard and curve tolerance
- InputConfig: SVG reading settings
- OutputConfig: OBJ formatting settings
- LoggingConfig: Logging settings
- GlyphMeshSettings: Main application settings
"""

from glyphmesh.config.settings import (
    GeometryConfig,
    GlyphMeshSettings,
    InputConfig,
    LoggingConfig,
    OutputConfig,
    get_default_settings,
)

__all__ = [
    "GeometryConfig",
    "GlyphMeshSettings",
    "InputConfig",
    "LoggingConfig",
    "OutputConfig",
    "get_default_settings",
]
