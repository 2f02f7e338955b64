import io

import fitz  # PyMuPDF

from quote_tile import main


def test_main_renders_pdf_and_png(tmp_path, capsys):
    pdf_path = tmp_path / "tile.pdf"
    png_path = tmp_path / "tile.png"

    exit_code = main(["Sharks are older than trees", "--output", str(pdf_path), "--png", str(png_path)])

    assert exit_code == 0
    assert pdf_path.read_bytes().startswith(b"%PDF")
    assert png_path.exists()
    assert "profile" in capsys.readouterr().out


def test_main_rejects_margin_wider_than_tile(tmp_path):
    assert main(["x", "--output", str(tmp_path / "t.pdf"), "--margin", "400"]) == 2


def test_main_rejects_unknown_font(tmp_path):
    assert main(["x", "--output", str(tmp_path / "t.pdf"), "--font", "NoSuchFontAnywhere"]) == 2


def test_main_reports_unplaceable_character(tmp_path):
    # 30pt of line width cannot hold a 100pt glyph
    args = ["W", "--output", str(tmp_path / "t.pdf"), "--width", "150", "--margin", "60"]
    assert main(args) == 1


def test_interactive_mode_renders_each_line(tmp_path, monkeypatch, capsys):
    pdf_path = tmp_path / "tile.pdf"
    monkeypatch.setattr("sys.stdin", io.StringIO("first phrase\nsecond\\nphrase\n"))

    assert main(["--interactive", "--output", str(pdf_path)]) == 0

    out = capsys.readouterr().out
    assert out.count(str(pdf_path)) == 2
    assert pdf_path.exists()


def test_main_exports_png_at_requested_dpi(tmp_path):
    pdf_path = tmp_path / "tile.pdf"
    png_path = tmp_path / "tile.png"

    exit_code = main(
        ["Owls cannot move their eyes", "--output", str(pdf_path), "--png", str(png_path), "--dpi", "144"]
    )

    assert exit_code == 0
    pix = fitz.Pixmap(str(png_path))
    assert (pix.width, pix.height) == (1440, 810)
