"""
Text fitting for tile rendering.
Wraps a phrase into lines for a size profile and picks the largest profile that fits.
"""

import logging
import re
from collections import deque
from dataclasses import dataclass, replace
from typing import Tuple

from .errors import LayoutConfigurationError, LayoutError
from .layout_profiles import LayoutProfile

_LOGGER = logging.getLogger(__name__)

# Paragraphs are separated by any CR or LF; they are never joined into one line
HARD_BREAK_PATTERN = re.compile(r"[\n\r]")


@dataclass(frozen=True)
class LineBreakResult:
    """
    Wrapped lines of a phrase for one profile.

    ``fits`` tells whether the wrapped lines fitted the profile's line budget.
    It stays False when the fit resolver clipped the lines, ``truncated`` is
    set in that case.
    """

    lines: Tuple[str, ...]
    fits: bool
    profile: LayoutProfile
    truncated: bool = False


def _check_width_budget(width_budget):
    if width_budget <= 0:
        raise LayoutConfigurationError(f"Width budget must be positive, got {width_budget}")


def fittable_length(token, width_budget, measure):
    """
    Number of leading characters of token that fit into width_budget.

    Grows the prefix one character at a time and stops at the first prefix
    that is too wide, so it needs at most len(token) measurements.

    :param token: Single word without spaces
    :param width_budget: Maximum width in points
    :param measure: Function returning the width of a string
    :return: Length of the longest fitting prefix (0 if not even one character fits)
    """
    _check_width_budget(width_budget)

    fitted = 0
    for end in range(1, len(token) + 1):
        if measure(token[:end]) > width_budget:
            break
        fitted = end
    return fitted


def _take_line(words, width_budget, measure):
    """Consume words from the front of the queue for one line and return the line."""
    last_word = words.popleft()
    line = last_word

    while len(words) > 0 and measure(line) <= width_budget:
        last_word = words.popleft()
        line += " " + last_word

    if measure(line) <= width_budget:
        return line

    if " " in line:
        # The last word overflowed, it starts the next line
        words.appendleft(last_word)
        return line[: line.rindex(" ")]

    # A single word wider than the line: break it
    fitted = fittable_length(line, width_budget, measure)
    if fitted == 0:
        raise LayoutError(
            f"Character {line[0]!r} is wider than the available line width {width_budget}"
        )
    words.appendleft(line[fitted:])
    return line[:fitted]


def break_lines(phrase, profile, width_budget, measure):
    """
    Wrap phrase into lines no wider than width_budget.

    :param phrase: Text, CR/LF start a new paragraph
    :param profile: LayoutProfile whose max_lines decides the fit
    :param width_budget: Maximum line width in points
    :param measure: Function returning the width of a string at the profile's font size
    :return: LineBreakResult
    """
    _check_width_budget(width_budget)

    lines = []
    for paragraph in HARD_BREAK_PATTERN.split(phrase):
        if not paragraph:
            continue
        words = deque(paragraph.split(" "))
        while len(words) > 0:
            lines.append(_take_line(words, width_budget, measure))

    return LineBreakResult(
        lines=tuple(lines),
        fits=len(lines) <= profile.max_lines,
        profile=profile,
    )


def resolve_fit(phrase, profiles, width_budget, measure_factory):
    """
    Wrap phrase with the largest profile whose line budget it fits.

    Profiles are tried in order (largest font first); smaller profiles are not
    evaluated once one fits. If none fits, the result of the last profile is
    clipped to its max_lines and returned with fits=False. A profile where a
    single character is wider than the line is skipped, except the smallest.

    :param phrase: Text to lay out
    :param profiles: LayoutProfile sequence ordered largest to smallest
    :param width_budget: Maximum line width in points
    :param measure_factory: factory(font_size) -> measure(text) -> width
    :return: LineBreakResult
    """
    if not profiles:
        raise LayoutConfigurationError("No layout profiles to fit the phrase into")

    result = None
    smallest = profiles[-1]
    for profile in profiles:
        measure = measure_factory(profile.font_size)
        if profile is smallest:
            result = break_lines(phrase, profile, width_budget, measure)
        else:
            try:
                result = break_lines(phrase, profile, width_budget, measure)
            except LayoutError as e:
                _LOGGER.debug(
                    f"  Profile {profile.name} ({profile.font_size}pt): does not fit ({e})"
                )
                continue
        if result.fits:
            _LOGGER.debug(
                f"  Profile {profile.name} ({profile.font_size}pt): "
                f"{len(result.lines)}/{profile.max_lines} lines - FITS"
            )
            _LOGGER.info(f"Best fitting profile: {profile.name} with {len(result.lines)} lines")
            return result
        _LOGGER.debug(
            f"  Profile {profile.name} ({profile.font_size}pt): "
            f"{len(result.lines)}/{profile.max_lines} lines - TOO MANY LINES"
        )

    _LOGGER.warning(
        f"Phrase is too long even for profile {smallest.name} ({smallest.font_size}pt). "
        f"Truncating from {len(result.lines)} to {smallest.max_lines} lines. "
        f"Phrase length: {len(phrase)} characters."
    )
    return replace(result, lines=result.lines[: smallest.max_lines], truncated=True)
