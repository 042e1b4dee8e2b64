"""Text recognition backends."""

from certverify.backends.tesseract import TesseractRecognizer
from certverify.typing.protocol import TextRecognizer

__all__ = [
    "TesseractRecognizer",
    "TextRecognizer",
]
