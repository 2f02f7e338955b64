import fitz  # PyMuPDF
import pytest

from tile_generator import (
    compute_text_layout,
    draw_tile,
    generate_tile_bytes,
    prepare_phrase,
    resolve_tile_text,
    vertical_center_offset,
)
from tile_rendering import build_tile_config

LONG_PHRASE = (
    "Honey never spoils: archaeologists have found pots of honey in ancient "
    "Egyptian tombs that are over three thousand years old and still "
    "perfectly edible, which is more than can be said for most sandwiches"
)


class RecordingTextObject:
    def __init__(self, x, y):
        self.x = x
        self.y = y
        self.font = None
        self.char_space = 0
        self.text = ""

    def setFont(self, name, size):
        self.font = (name, size)

    def setCharSpace(self, char_space):
        self.char_space = char_space

    def textOut(self, text):
        self.text += text


class RecordingCanvas:
    """Stands in for a ReportLab canvas and records the drawing calls."""

    def __init__(self):
        self.calls = []

    def beginText(self, x, y):
        return RecordingTextObject(x, y)

    def drawText(self, text_object):
        self.calls.append(("drawText", text_object))

    def texts(self):
        return [call[1] for call in self.calls if call[0] == "drawText"]

    def setFillColor(self, color):
        self.calls.append(("setFillColor", color.hexval()))

    def setFont(self, name, size):
        self.calls.append(("setFont", name, size))

    def rect(self, x, y, width, height, stroke=1, fill=0):
        self.calls.append(("rect", x, y, width, height))

    def drawString(self, x, y, text):
        self.calls.append(("drawString", x, y, text))

    def strings(self):
        return [call for call in self.calls if call[0] == "drawString"]


@pytest.fixture(scope="module")
def config():
    return build_tile_config()


def test_prepare_phrase_strips_whitespace():
    assert prepare_phrase("  hello \n") == "hello"
    assert prepare_phrase(None) == ""


def test_short_phrase_uses_biggest_profile(config):
    result = resolve_tile_text("  Hello world  ", config)
    assert result.profile.name == "biggest"
    assert result.lines == ("Hello world",)
    assert result.fits is True


def test_vertical_center_offset(config):
    # (405 - 2*60 - (10 + 1*112)) / 2
    assert vertical_center_offset(config, 1, 112) == pytest.approx(81.5)


def test_layout_positions_from_top(config):
    result = resolve_tile_text("Hello world", config)
    layout = compute_text_layout(result, config)

    assert layout["label"] == (60, pytest.approx(151.5))
    assert layout["lines"] == [("Hello world", 60, pytest.approx(263.5))]


def test_layout_of_empty_phrase_is_empty(config):
    layout = compute_text_layout(resolve_tile_text("   ", config), config)
    assert layout["label"] is None
    assert layout["lines"] == []


def test_draw_tile_flips_to_pdf_coordinates(config):
    c = RecordingCanvas()
    draw_tile(c, resolve_tile_text("Hello world", config), config)

    assert c.calls[0] == ("setFillColor", "0x000000")
    assert c.calls[1] == ("rect", 0, 0, 720, 405)
    (label,) = c.texts()
    assert (label.x, label.y) == (60, pytest.approx(253.5))
    assert label.text == "LITTLE-KNOWN FACT"
    assert label.font == ("Helvetica", 18)
    assert label.char_space == config.label.char_space
    (line,) = c.strings()
    assert line[1:] == (60, pytest.approx(141.5), "Hello world")
    assert ("setFont", "Helvetica", 100) in c.calls


def test_draw_empty_tile_only_fills_background(config):
    c = RecordingCanvas()
    draw_tile(c, resolve_tile_text("", config), config)
    assert c.strings() == []
    assert c.texts() == []
    assert [call[0] for call in c.calls] == ["setFillColor", "rect"]


def test_overlong_phrase_is_truncated_to_smallest_profile(config):
    c = RecordingCanvas()
    result = resolve_tile_text(LONG_PHRASE, config)
    draw_tile(c, result, config)

    assert result.profile.name == "smaller"
    assert result.fits is False
    assert len(result.lines) == config.smallest_profile.max_lines
    assert len(c.texts()) == 1
    assert len(c.strings()) == config.smallest_profile.max_lines


def test_generate_tile_bytes_writes_a_pdf(config):
    pdf_bytes, result = generate_tile_bytes("Cats sleep most of the day", config)
    assert pdf_bytes.startswith(b"%PDF")
    assert result.fits is True


def test_generate_tile_with_default_config():
    pdf_bytes, result = generate_tile_bytes("Short")
    assert pdf_bytes.startswith(b"%PDF")
    assert result.profile.name == "biggest"


def test_pdf_label_uses_only_the_label_font():
    pdf_bytes, _ = generate_tile_bytes("Hello")

    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        page = doc.load_page(0)
        text = "".join(page.get_text().split())
        fonts = {font[3] for font in page.get_fonts()}

    assert "LITTLE-KNOWNFACT" in text
    assert "Hello" in text
    assert fonts == {"Helvetica"}
