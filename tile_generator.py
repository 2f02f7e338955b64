"""
Draws a quote tile: a dark rectangle with a small label and the phrase
set in the largest font size that fits.
"""

import logging
from io import BytesIO

from reportlab.lib.colors import HexColor
from reportlab.pdfgen import canvas

from tile_rendering import build_tile_config, make_measure_factory, resolve_fit

_LOGGER = logging.getLogger(__name__)


def prepare_phrase(raw_phrase):
    """Strip surrounding whitespace from the typed phrase."""
    return (raw_phrase or "").strip()


def resolve_tile_text(phrase, config):
    """
    Trim the phrase and wrap it with the best fitting profile of config.

    :param phrase: Raw phrase as typed
    :param config: TileConfig
    :return: LineBreakResult (clipped with fits=False if the phrase is too long)
    """
    return resolve_fit(
        prepare_phrase(phrase),
        config.profiles,
        config.max_line_width,
        make_measure_factory(config.font_name),
    )


def vertical_center_offset(config, line_count, line_height):
    """Offset that centers label and lines between the top and bottom margins."""
    geometry = config.geometry
    message_height = config.label.line_height + line_count * line_height
    return (geometry.height - 2 * geometry.margin - message_height) / 2


def compute_text_layout(result, config):
    """
    Baseline positions of the label and each line, measured from the tile top.

    :param result: LineBreakResult to place
    :param config: TileConfig
    :return: dict with 'offset', 'label' ((x, y) or None) and 'lines' ([(text, x, y), ...])
    """
    lines = result.lines[: result.profile.max_lines]
    if not lines:
        return {"offset": 0, "label": None, "lines": []}

    margin = config.geometry.margin
    line_height = result.profile.line_height
    label_bottom = margin + config.label.line_height
    offset = vertical_center_offset(config, len(lines), line_height)

    placed = [
        (line, margin, label_bottom + line_height * (1 + index) + offset)
        for index, line in enumerate(lines)
    ]
    return {"offset": offset, "label": (margin, label_bottom + offset), "lines": placed}


def draw_tile(c, result, config):
    """
    Draw background, label and wrapped lines on a ReportLab canvas.

    The canvas page must have the tile size; layout positions are measured
    from the top and flipped to PDF coordinates here.

    :param c: ReportLab canvas object
    :param result: LineBreakResult from resolve_tile_text
    :param config: TileConfig
    """
    width = config.geometry.width
    height = config.geometry.height

    c.setFillColor(HexColor(config.background_color))
    c.rect(0, 0, width, height, stroke=0, fill=1)

    layout = compute_text_layout(result, config)
    if layout["label"] is None:
        return

    label = config.label
    label_x, label_y = layout["label"]
    c.setFillColor(HexColor(label.color))
    label_text = c.beginText(label_x, height - label_y)
    label_text.setFont(label.font_name, label.font_size)
    label_text.setCharSpace(label.char_space)
    label_text.textOut(label.text)
    c.drawText(label_text)

    c.setFillColor(HexColor(config.text_color))
    c.setFont(config.font_name, result.profile.font_size)
    for line, x, y in layout["lines"]:
        c.drawString(x, height - y, line)


def generate_tile(phrase, output, config=None):
    """
    Render phrase onto a single page tile PDF.

    :param phrase: Raw phrase as typed
    :param output: Output path or binary file object
    :param config: TileConfig (default configuration if None)
    :return: LineBreakResult that was drawn
    """
    if config is None:
        config = build_tile_config()

    result = resolve_tile_text(phrase, config)
    if not result.fits:
        _LOGGER.warning(
            f"Phrase does not fit the tile; rendering the first {len(result.lines)} lines "
            f"at {result.profile.font_size}pt"
        )

    c = canvas.Canvas(output, pagesize=(config.geometry.width, config.geometry.height))
    c.setTitle("Quote tile")
    draw_tile(c, result, config)
    c.showPage()
    c.save()

    _LOGGER.info(
        f"Tile rendered with profile {result.profile.name} "
        f"({result.profile.font_size}pt, {len(result.lines)} lines)"
    )
    return result


def generate_tile_bytes(phrase, config=None):
    """
    Render phrase into an in-memory tile PDF.

    :return: (pdf_bytes, LineBreakResult)
    """
    buffer = BytesIO()
    result = generate_tile(phrase, buffer, config)
    return buffer.getvalue(), result
