"""
Tile geometry and font size profiles.
Derives the per-profile start offset and line budget from the tile constants.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .errors import LayoutConfigurationError
from .measurement import validate_font_name

_LOGGER = logging.getLogger(__name__)

# Tile size in points (one pixel per point when exported at 72 DPI)
TILE_SPECS = {
    "width": 720,
    "height": 405,
    "margin": 60,
}

LABEL_SPECS = {
    "text": "LITTLE-KNOWN FACT",
    "font_name": "Helvetica",
    "font_size": 18,
    "line_height": 10,
    "color": "#ff6222",
    # Extra space after every character, in points
    "char_space": 2,
}

TILE_COLORS = {
    "background": "#000000",
    "text": "#EEEEEE",
}

# (name, font size, line height), largest first
SIZE_PROFILES = [
    ("biggest", 100, 112),
    ("bigger", 80, 88),
    ("smaller", 56, 63),
]

DEFAULT_FONT_NAME = "Helvetica"

# Fraction of the font size between the text top and the first baseline
ASCENT_RATIO = 0.83


@dataclass(frozen=True)
class TileGeometry:
    width: float
    height: float
    margin: float

    def __post_init__(self):
        for field_name in ("width", "height", "margin"):
            value = getattr(self, field_name)
            if value <= 0:
                raise LayoutConfigurationError(
                    f"Tile {field_name} must be positive, got {value}"
                )
        if self.width - 2 * self.margin <= 0:
            raise LayoutConfigurationError(
                f"Tile width {self.width} leaves no room for text with margin {self.margin}"
            )

    @property
    def max_line_width(self) -> float:
        """Width available to a text line between the side margins."""
        return self.width - 2 * self.margin


@dataclass(frozen=True)
class LabelSpec:
    text: str
    font_name: str
    font_size: float
    line_height: float
    color: str
    char_space: float = 0


@dataclass(frozen=True)
class LayoutProfile:
    """
    One font size preset.

    ``start_y`` is the first baseline measured from the tile top and
    ``max_lines`` the number of lines the tile can hold at this size.
    ``guaranteed_fit`` is False for a profile kept although the tile is too
    small for even one of its lines.
    """

    name: str
    font_size: float
    line_height: float
    start_y: int
    max_lines: int
    guaranteed_fit: bool = True


@dataclass(frozen=True)
class TileConfig:
    geometry: TileGeometry
    label: LabelSpec
    profiles: Tuple[LayoutProfile, ...]
    font_name: str = DEFAULT_FONT_NAME
    background_color: str = TILE_COLORS["background"]
    text_color: str = TILE_COLORS["text"]

    @property
    def max_line_width(self) -> float:
        return self.geometry.max_line_width

    @property
    def smallest_profile(self) -> LayoutProfile:
        return self.profiles[-1]


def derive_layout_profile(
    name, font_size, line_height, geometry, label_line_height, strict=True
):
    """
    Compute start offset and line budget of a single size profile.

    :param name: Profile name used in log messages
    :param font_size: Font size in points
    :param line_height: Distance between baselines in points
    :param geometry: TileGeometry the profile is rendered on
    :param label_line_height: Height reserved for the label line
    :param strict: Raise instead of clamping when not even one line fits
    :return: LayoutProfile
    """
    if font_size <= 0 or line_height <= 0:
        raise LayoutConfigurationError(
            f"Profile '{name}' needs a positive font size and line height, "
            f"got {font_size}/{line_height}"
        )

    text_top = geometry.margin
    start_y = math.ceil(text_top + font_size * ASCENT_RATIO)
    available_height = geometry.height - label_line_height - geometry.margin - start_y
    max_lines = 1 + math.floor(available_height / line_height)

    if max_lines >= 1:
        return LayoutProfile(name, font_size, line_height, start_y, max_lines)

    if strict:
        raise LayoutConfigurationError(
            f"Tile {geometry.width}x{geometry.height} is too small for profile "
            f"'{name}' ({font_size}pt): computed max_lines={max_lines}"
        )

    _LOGGER.warning(
        f"Profile '{name}' ({font_size}pt) does not fit the tile; keeping it with "
        f"max_lines=1 but the text may overflow"
    )
    return LayoutProfile(name, font_size, line_height, start_y, 1, guaranteed_fit=False)


def derive_layout_profiles(geometry, label_line_height, size_profiles, strict=True):
    """
    Build the ordered profile catalog from raw (name, font size, line height) entries.

    The entries must be ordered from the largest to the smallest font size,
    the fit resolver relies on that order.
    """
    if not size_profiles:
        raise LayoutConfigurationError("At least one size profile is required")

    profiles = []
    for name, font_size, line_height in size_profiles:
        if profiles and font_size >= profiles[-1].font_size:
            raise LayoutConfigurationError(
                f"Size profiles must be ordered largest to smallest: "
                f"'{name}' ({font_size}pt) follows '{profiles[-1].name}' "
                f"({profiles[-1].font_size}pt)"
            )
        profiles.append(
            derive_layout_profile(
                name, font_size, line_height, geometry, label_line_height, strict
            )
        )

    for profile in profiles:
        _LOGGER.debug(
            f"Profile {profile.name}: {profile.font_size}pt, start_y={profile.start_y}, "
            f"max_lines={profile.max_lines}"
        )
    return tuple(profiles)


def build_tile_config(
    font_name: str = DEFAULT_FONT_NAME,
    width: Optional[float] = None,
    height: Optional[float] = None,
    margin: Optional[float] = None,
    size_profiles: Optional[Sequence[Tuple[str, float, float]]] = None,
    strict: bool = True,
) -> TileConfig:
    """
    Assemble the immutable tile configuration from the module constants.

    Keyword arguments override single constants (e.g. from command line flags).
    """
    validate_font_name(font_name)
    validate_font_name(LABEL_SPECS["font_name"])

    geometry = TileGeometry(
        width=TILE_SPECS["width"] if width is None else width,
        height=TILE_SPECS["height"] if height is None else height,
        margin=TILE_SPECS["margin"] if margin is None else margin,
    )
    label = LabelSpec(**LABEL_SPECS)
    profiles = derive_layout_profiles(
        geometry,
        label.line_height,
        SIZE_PROFILES if size_profiles is None else size_profiles,
        strict=strict,
    )
    return TileConfig(geometry=geometry, label=label, profiles=profiles, font_name=font_name)
