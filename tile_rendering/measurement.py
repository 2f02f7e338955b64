"""
Text width measurement based on ReportLab font metrics.
"""

from reportlab.pdfbase import pdfmetrics

from .errors import LayoutConfigurationError


def validate_font_name(font_name):
    """
    Make sure ReportLab can resolve the font without registering anything.

    :param font_name: Standard PDF font name (e.g. 'Helvetica')
    :raises LayoutConfigurationError: if the font is unknown
    """
    try:
        pdfmetrics.getFont(font_name)
    except Exception as e:
        raise LayoutConfigurationError(
            f"Unknown font '{font_name}'. Use one of the standard PDF fonts: "
            f"{', '.join(pdfmetrics.standardFonts)}"
        ) from e


def measure_text(text, font_name, font_size):
    """
    Width of text in points.

    :param text: Text to measure
    :param font_name: Font name
    :param font_size: Font size in points
    :return: Rendered width in points
    """
    return pdfmetrics.stringWidth(text, font_name, font_size)


def make_measure_factory(font_name):
    """
    Create a factory producing a measure function bound to one font size.

    :param font_name: Font name used for all measurements
    :return: factory(font_size) -> measure(text) -> width
    """
    validate_font_name(font_name)

    def factory(font_size):
        def measure(text):
            return measure_text(text, font_name, font_size)

        return measure

    return factory
