"""Decode uploaded certificates into RGB raster images."""

from __future__ import annotations

import io
from typing import Any

from PIL import Image, UnidentifiedImageError

try:
    import fitz
except Exception:  # pragma: no cover - optional dependency at runtime
    fitz: Any
    fitz = None

from certverify.exceptions import DocumentLoadError
from certverify.logging import get_logger

logger = get_logger(__name__)

PDF_MAGIC = b"%PDF"
DEFAULT_RENDER_SCALE = 2.0


def is_pdf(data: bytes, *, file_name: str | None = None) -> bool:
    """Return whether an upload is a PDF document.

    Args:
        data: Upload bytes.
        file_name: Optional original file name.

    Returns:
        bool: True for PDF payloads.
    """
    if data.startswith(PDF_MAGIC):
        return True
    return bool(file_name) and file_name.lower().endswith(".pdf")


def render_pdf_first_page(data: bytes, *, scale: float = DEFAULT_RENDER_SCALE) -> Image.Image:
    """Render the first page of a PDF into an RGB image.

    Args:
        data: PDF bytes.
        scale: Zoom factor; 2.0 renders at 144 DPI, which suits OCR.

    Raises:
        DocumentLoadError: If PyMuPDF is unavailable or rendering fails.

    Returns:
        Image.Image: Rendered page.
    """
    if fitz is None:
        raise DocumentLoadError(message="PyMuPDF is required for PDF rendering")

    try:
        with fitz.open(stream=data, filetype="pdf") as doc:
            if len(doc) == 0:
                raise DocumentLoadError(message="PDF has no pages")
            page = doc.load_page(0)
            pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
            image = Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
    except DocumentLoadError:
        raise
    except Exception as exc:  # pragma: no cover - depends on file and fitz internals
        raise DocumentLoadError(message="Failed to render PDF") from exc

    logger.info("PDF rendered", extra={"width": image.width, "height": image.height})
    return image


def decode_image(data: bytes) -> Image.Image:
    """Decode raster image bytes into an RGB image.

    Args:
        data: Image bytes (PNG, JPEG, ...).

    Raises:
        DocumentLoadError: If the bytes are not a decodable image.

    Returns:
        Image.Image: Decoded image.
    """
    try:
        with Image.open(io.BytesIO(data)) as opened:
            opened.load()
            return opened.convert("RGB")
    except (UnidentifiedImageError, OSError) as exc:
        raise DocumentLoadError(message="Failed to decode image") from exc


def load_document_image(
    data: bytes,
    *,
    file_name: str | None = None,
    scale: float = DEFAULT_RENDER_SCALE,
) -> tuple[Image.Image, bool]:
    """Turn an upload into the raster image the analyses run on.

    Args:
        data: Upload bytes.
        file_name: Optional original file name.
        scale: PDF render zoom factor.

    Raises:
        DocumentLoadError: If the upload is empty or cannot be decoded.

    Returns:
        tuple[Image.Image, bool]: Image and whether the upload was a PDF.
    """
    if not data:
        raise DocumentLoadError(message="Uploaded document is empty")
    if is_pdf(data, file_name=file_name):
        return render_pdf_first_page(data, scale=scale), True
    return decode_image(data), False
