from __future__ import annotations

import io

import pytest
from PIL import Image

from certverify.exceptions import DocumentLoadError
from certverify.pdf_render import decode_image, is_pdf, load_document_image, render_pdf_first_page


class _FakePixmap:
    width = 4
    height = 2
    samples = bytes([10, 20, 30]) * 8


class _FakePage:
    def get_pixmap(self, matrix: tuple[float, float], alpha: bool) -> _FakePixmap:  # noqa: FBT001
        assert matrix == (2.0, 2.0)
        assert alpha is False
        return _FakePixmap()


class _FakeDoc:
    def __init__(self, pages: int = 1) -> None:
        self._pages = pages

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        return None

    def __len__(self) -> int:
        return self._pages

    def load_page(self, idx: int) -> _FakePage:
        assert idx == 0
        return _FakePage()


class _FakeFitzModule:
    @staticmethod
    def Matrix(sx: float, sy: float) -> tuple[float, float]:  # noqa: N802
        return (sx, sy)

    @staticmethod
    def open(*, stream: bytes, filetype: str) -> _FakeDoc:
        assert stream.startswith(b"%PDF")
        assert filetype == "pdf"
        return _FakeDoc()


class _FakeFitzEmpty(_FakeFitzModule):
    @staticmethod
    def open(*, stream: bytes, filetype: str) -> _FakeDoc:
        _ = (stream, filetype)
        return _FakeDoc(pages=0)


def _png_bytes(color: tuple[int, int, int] = (255, 0, 0)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (3, 3), color).save(buffer, format="PNG")
    return buffer.getvalue()


def test_is_pdf_detects_magic_and_extension() -> None:
    assert is_pdf(b"%PDF-1.7 ...")
    assert is_pdf(b"not-magic", file_name="Scan.PDF")
    assert not is_pdf(_png_bytes(), file_name="scan.png")


def test_render_pdf_first_page_with_fake_fitz(monkeypatch) -> None:
    monkeypatch.setattr("certverify.pdf_render.fitz", _FakeFitzModule)

    image = render_pdf_first_page(b"%PDF-1.7", scale=2.0)

    assert image.size == (4, 2)
    assert image.getpixel((0, 0)) == (10, 20, 30)


def test_render_pdf_first_page_rejects_empty_document(monkeypatch) -> None:
    monkeypatch.setattr("certverify.pdf_render.fitz", _FakeFitzEmpty)

    with pytest.raises(DocumentLoadError, match="no pages"):
        render_pdf_first_page(b"%PDF-1.7")


def test_render_pdf_first_page_requires_pymupdf(monkeypatch) -> None:
    monkeypatch.setattr("certverify.pdf_render.fitz", None)

    with pytest.raises(DocumentLoadError, match="PyMuPDF"):
        render_pdf_first_page(b"%PDF-1.7")


def test_decode_image_converts_to_rgb() -> None:
    buffer = io.BytesIO()
    Image.new("L", (2, 2), 128).save(buffer, format="PNG")

    image = decode_image(buffer.getvalue())

    assert image.mode == "RGB"
    assert image.getpixel((0, 0)) == (128, 128, 128)


def test_decode_image_rejects_garbage() -> None:
    with pytest.raises(DocumentLoadError, match="Failed to decode image"):
        decode_image(b"definitely not an image")


def test_load_document_image_routes_by_type(monkeypatch) -> None:
    monkeypatch.setattr("certverify.pdf_render.fitz", _FakeFitzModule)

    pdf_image, pdf_flag = load_document_image(b"%PDF-1.7", file_name="cert.pdf", scale=2.0)
    png_image, png_flag = load_document_image(_png_bytes(), file_name="cert.png")

    assert pdf_flag is True
    assert pdf_image.size == (4, 2)
    assert png_flag is False
    assert png_image.getpixel((1, 1)) == (255, 0, 0)


def test_load_document_image_rejects_empty_upload() -> None:
    with pytest.raises(DocumentLoadError, match="empty"):
        load_document_image(b"", file_name="cert.png")
