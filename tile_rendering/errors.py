"""
Exceptions raised by the tile text layout code.
"""


class TileRenderingError(Exception):
    """Base class for all tile rendering errors."""


class LayoutConfigurationError(TileRenderingError, ValueError):
    """
    The tile geometry, font or size profiles cannot produce a usable layout.

    Raised while building the configuration, before any phrase is rendered.
    """


class LayoutError(TileRenderingError):
    """A phrase cannot be laid out at all (not even one character fits a line)."""
