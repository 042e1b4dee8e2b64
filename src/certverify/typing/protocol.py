"""Collaborator interfaces."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable

    from PIL.Image import Image

    from certverify.typing.models import RecognizedText


class TextRecognizer(Protocol):
    """OCR engine turning a raster image into text and word data."""

    def recognize(
        self,
        image: Image,
        *,
        on_progress: Callable[[int], None] | None = None,
    ) -> RecognizedText:
        """Recognize text in an image.

        Args:
            image: Decoded RGB raster image.
            on_progress: Optional callback receiving progress from 0 to 100.

        Returns:
            RecognizedText: Recognized text plus per-word confidence and boxes.
        """
