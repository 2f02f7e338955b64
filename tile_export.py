"""
Rasterises tile PDFs to PNG, JPEG or WEBP images with PyMuPDF.
"""

import logging

import fitz  # PyMuPDF

_LOGGER = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("PNG", "JPEG", "JPG", "WEBP")


def _open_pdf(pdf_source):
    if isinstance(pdf_source, (bytes, bytearray)):
        return fitz.open(stream=bytes(pdf_source), filetype="pdf")
    return fitz.open(pdf_source)


def export_tile_image(
    pdf_source,
    output_path,
    dpi=72,
    width=None,
    compression="PNG",
    quality=95,
):
    """
    Rasterise the tile page of a tile PDF.

    Args:
        pdf_source (str or bytes): Path to the tile PDF or its content
        output_path (str): Path where the image will be saved
        dpi (int): DPI for rendering (default: 72, one pixel per tile point)
        width (int, optional): Target width in pixels, overrides dpi and keeps the aspect ratio
        compression (str): Image format ("PNG", "JPEG" or "WEBP")
        quality (int): JPEG quality (1-100, only applies to JPEG format)

    Returns:
        tuple: (success: bool, error_message: str or None)
    """
    fmt = compression.upper()
    if fmt not in SUPPORTED_FORMATS:
        _LOGGER.error(f"Unsupported image format {compression}")
        return False, f"Unsupported image format {compression}"

    _LOGGER.info(f"Exporting tile image -> {output_path}")

    try:
        doc = _open_pdf(pdf_source)
        try:
            if doc.page_count < 1:
                return False, "Tile PDF has no pages."

            page = doc.load_page(0)
            if width:
                scale = width / page.rect.width
            else:
                scale = dpi / 72.0  # 72 DPI is the default PDF resolution
            pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)

            if fmt in ("JPEG", "JPG"):
                pix.save(output_path, output="jpeg", jpg_quality=quality)
            elif fmt == "WEBP":
                # MuPDF has no WEBP writer, Pillow encodes it
                pix.pil_save(output_path, format="WEBP")
            else:
                pix.save(output_path, output="png")
        finally:
            doc.close()

        _LOGGER.info(f"Tile image saved to {output_path} ({pix.width}x{pix.height})")
        return True, None

    except Exception as e:
        _LOGGER.error(f"Error exporting tile image: {e}")
        return False, str(e)


def export_tile_png(pdf_source, output_path, dpi=72, width=None):
    """Export the tile as PNG at the given DPI (or the given pixel width)."""
    return export_tile_image(
        pdf_source=pdf_source,
        output_path=output_path,
        dpi=dpi,
        width=width,
        compression="PNG",
    )
