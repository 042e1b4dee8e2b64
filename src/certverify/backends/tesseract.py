"""Tesseract text recognizer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

try:
    import pytesseract
except Exception:  # pragma: no cover - optional dependency at runtime
    pytesseract: Any
    pytesseract = None

from certverify.exceptions import RecognitionError
from certverify.typing.models import BoundingBox, RecognizedText, RecognizedWord

if TYPE_CHECKING:
    from collections.abc import Callable

    from PIL.Image import Image


class TesseractRecognizer:
    """Text recognizer backed by the Tesseract CLI through `pytesseract`."""

    def __init__(self, *, language: str = "eng", tesseract_cmd: str | None = None) -> None:
        """Initialize the recognizer.

        Args:
            language (str): Tesseract language code(s).
            tesseract_cmd (str | None): Explicit tesseract executable path.
        """
        self._language = language
        self._tesseract_cmd = tesseract_cmd

    def recognize(
        self,
        image: Image,
        *,
        on_progress: Callable[[int], None] | None = None,
    ) -> RecognizedText:
        """Recognize text and word boxes in an image.

        Args:
            image (Image): RGB raster image.
            on_progress (Callable[[int], None] | None): Progress callback (0-100).

        Raises:
            RecognitionError: If tesseract is unavailable or fails.

        Returns:
            RecognizedText: Text plus per-word confidence and boxes.
        """
        if pytesseract is None:
            raise RecognitionError(message="pytesseract is required for text recognition")
        if self._tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = self._tesseract_cmd

        _report(on_progress, 0)
        try:
            text = pytesseract.image_to_string(image, lang=self._language)
            _report(on_progress, 50)
            data = pytesseract.image_to_data(image, lang=self._language, output_type=pytesseract.Output.DICT)
        except Exception as exc:
            raise RecognitionError(message=f"Tesseract recognition failed: {exc}") from exc
        _report(on_progress, 100)

        return RecognizedText(text=text, words=tuple(words_from_tesseract_data(data)))


def _report(on_progress: Callable[[int], None] | None, value: int) -> None:
    if on_progress is not None:
        on_progress(value)


def words_from_tesseract_data(data: dict[str, list[Any]]) -> list[RecognizedWord]:
    """Convert `image_to_data` output into recognized words.

    Non-word rows (blocks, lines, empty text) carry a confidence of -1 and are skipped.

    Args:
        data (dict[str, list[Any]]): Column-oriented tesseract output.

    Returns:
        list[RecognizedWord]: Words in reading order.
    """
    words: list[RecognizedWord] = []
    for index, raw_text in enumerate(data.get("text", [])):
        text = str(raw_text).strip()
        confidence = float(data["conf"][index])
        if not text or confidence < 0:
            continue
        left = int(data["left"][index])
        top = int(data["top"][index])
        words.append(
            RecognizedWord(
                text=text,
                confidence=min(confidence, 100.0),
                bbox=BoundingBox(
                    x0=left,
                    y0=top,
                    x1=left + int(data["width"][index]),
                    y1=top + int(data["height"][index]),
                ),
            ),
        )
    return words
