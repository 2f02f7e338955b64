"""
Tile text layout package.
Fits a short phrase onto a fixed-size tile using preset font size profiles.
"""

from .errors import TileRenderingError, LayoutConfigurationError, LayoutError
from .measurement import validate_font_name, measure_text, make_measure_factory
from .layout_profiles import (
    ASCENT_RATIO,
    DEFAULT_FONT_NAME,
    SIZE_PROFILES,
    TileGeometry,
    LabelSpec,
    LayoutProfile,
    TileConfig,
    derive_layout_profile,
    derive_layout_profiles,
    build_tile_config,
)
from .text_fitting import (
    LineBreakResult,
    fittable_length,
    break_lines,
    resolve_fit,
)

__all__ = [
    # Errors
    'TileRenderingError',
    'LayoutConfigurationError',
    'LayoutError',
    # Measurement
    'validate_font_name',
    'measure_text',
    'make_measure_factory',
    # Layout profiles
    'ASCENT_RATIO',
    'DEFAULT_FONT_NAME',
    'SIZE_PROFILES',
    'TileGeometry',
    'LabelSpec',
    'LayoutProfile',
    'TileConfig',
    'derive_layout_profile',
    'derive_layout_profiles',
    'build_tile_config',
    # Text fitting
    'LineBreakResult',
    'fittable_length',
    'break_lines',
    'resolve_fit',
]
