"""Text recognition payload models."""

from pydantic import ConfigDict, Field

from certverify.typing.models.base import DomainModel


class BoundingBox(DomainModel):
    """Word bounding box in pixel coordinates."""

    model_config = ConfigDict(frozen=True)

    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def height(self) -> int:
        """Return box height in pixels."""
        return self.y1 - self.y0


class RecognizedWord(DomainModel):
    """One recognized word with its OCR confidence."""

    model_config = ConfigDict(frozen=True)

    text: str
    confidence: float = Field(ge=0.0, le=100.0)
    bbox: BoundingBox | None = None


class RecognizedText(DomainModel):
    """Recognizer output for one raster image."""

    model_config = ConfigDict(frozen=True)

    text: str = ""
    words: tuple[RecognizedWord, ...] = ()
