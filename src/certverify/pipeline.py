"""Certificate analysis orchestration."""

from __future__ import annotations

import asyncio
from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING

from certverify import logger
from certverify.analyzers import aggregate_confidence, detect_font_style, detect_signature, detect_theme
from certverify.async_runner import gather_in_threads, run_async
from certverify.backends.tesseract import TesseractRecognizer
from certverify.exceptions import RecognitionError
from certverify.matching import match_record
from certverify.pdf_render import load_document_image
from certverify.processing.field_extraction import extract_fields
from certverify.settings import get_settings
from certverify.typing.models import AnalysisResult, CertificateReport, DocumentMetadata

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from PIL.Image import Image

    from certverify.settings import Settings
    from certverify.typing.models import RecognizedText, ReferenceRecord
    from certverify.typing.protocol import TextRecognizer


def default_recognizer(settings: Settings) -> TesseractRecognizer:
    """Build the configured Tesseract recognizer.

    Args:
        settings (Settings): Runtime settings.

    Returns:
        TesseractRecognizer: Recognizer instance.
    """
    return TesseractRecognizer(language=settings.ocr_language, tesseract_cmd=settings.tesseract_cmd)


def _recognize(
    recognizer: TextRecognizer,
    image: Image,
    on_progress: Callable[[int], None] | None,
) -> RecognizedText:
    """Run the recognizer, folding any failure into `RecognitionError`.

    Args:
        recognizer (TextRecognizer): OCR collaborator.
        image (Image): Decoded image.
        on_progress (Callable[[int], None] | None): Progress callback.

    Raises:
        RecognitionError: If recognition fails for any reason.

    Returns:
        RecognizedText: Recognizer output.
    """
    try:
        return recognizer.recognize(image, on_progress=on_progress)
    except RecognitionError:
        raise
    except Exception as exc:
        raise RecognitionError(message=f"Text recognition failed: {exc}") from exc


def _read_source(source: Path | bytes, file_name: str | None) -> tuple[bytes, str]:
    if isinstance(source, Path):
        return source.read_bytes(), file_name or source.name
    return source, file_name or "upload"


async def aanalyze_certificate(
    source: Path | bytes,
    *,
    file_name: str | None = None,
    recognizer: TextRecognizer | None = None,
    settings: Settings | None = None,
    on_progress: Callable[[int], None] | None = None,
) -> AnalysisResult:
    """Analyze one uploaded certificate.

    Recognition runs first. Field extraction and the three visual analyses
    then run concurrently and join in the confidence aggregator. A
    recognition failure aborts the call; a failing pixel analysis only
    degrades its own finding.

    Args:
        source (Path | bytes): Upload path or bytes.
        file_name (str | None): Original file name for raw bytes.
        recognizer (TextRecognizer | None): OCR collaborator, Tesseract by default.
        settings (Settings | None): Runtime settings.
        on_progress (Callable[[int], None] | None): OCR progress callback (0-100).

    Raises:
        RecognitionError: If text recognition fails.

    Returns:
        AnalysisResult: Complete analysis.
    """
    config = settings or get_settings()
    data, name = _read_source(source, file_name)
    image, is_pdf = load_document_image(data, file_name=name, scale=config.pdf_render_scale)
    ocr = recognizer or default_recognizer(config)

    recognized = await asyncio.to_thread(_recognize, ocr, image, on_progress)
    logger.info("Text recognized", extra={"file_name": name, "words": len(recognized.words)})

    fields, signature, theme, font = await gather_in_threads(
        partial(extract_fields, recognized.text),
        partial(detect_signature, image),
        partial(detect_theme, image, scale=config.theme_sample_scale),
        partial(detect_font_style, recognized),
    )

    fields_found = fields.found_count()
    overall = aggregate_confidence(fields_found, signature, font, theme)
    logger.info(
        "Certificate analyzed",
        extra={"file_name": name, "fields_found": fields_found, "overall_confidence": overall},
    )

    return AnalysisResult(
        raw_text=recognized.text,
        extracted_fields=fields,
        signature=signature,
        theme=theme,
        font=font,
        overall_confidence=overall,
        fields_found=fields_found,
        metadata=DocumentMetadata(file_name=name, file_size=len(data), is_pdf=is_pdf),
    )


def analyze_certificate(
    source: Path | bytes,
    *,
    file_name: str | None = None,
    recognizer: TextRecognizer | None = None,
    settings: Settings | None = None,
    on_progress: Callable[[int], None] | None = None,
) -> AnalysisResult:
    """Sync facade over `aanalyze_certificate`.

    Returns:
        AnalysisResult: Complete analysis.
    """
    return run_async(
        aanalyze_certificate(
            source,
            file_name=file_name,
            recognizer=recognizer,
            settings=settings,
            on_progress=on_progress,
        ),
    )


def verify_certificate(
    source: Path | bytes,
    candidates: Sequence[ReferenceRecord],
    *,
    revoked: Iterable[str] = (),
    file_name: str | None = None,
    recognizer: TextRecognizer | None = None,
    settings: Settings | None = None,
    on_progress: Callable[[int], None] | None = None,
) -> CertificateReport:
    """Analyze a certificate and cross-reference it against reference records.

    Args:
        source (Path | bytes): Upload path or bytes.
        candidates (Sequence[ReferenceRecord]): Reference records snapshot.
        revoked (Iterable[str]): Revoked certificate numbers.
        file_name (str | None): Original file name for raw bytes.
        recognizer (TextRecognizer | None): OCR collaborator.
        settings (Settings | None): Runtime settings.
        on_progress (Callable[[int], None] | None): OCR progress callback.

    Returns:
        CertificateReport: Analysis plus match report.
    """
    config = settings or get_settings()
    analysis = analyze_certificate(
        source,
        file_name=file_name,
        recognizer=recognizer,
        settings=config,
        on_progress=on_progress,
    )
    match = match_record(
        analysis.extracted_fields,
        candidates,
        revoked=revoked,
        missing_sentinel=config.missing_value_sentinel,
    )
    return CertificateReport(analysis=analysis, match=match)


def persist_report(report: CertificateReport, path: Path) -> None:
    """Persist a certificate report as camelCase JSON.

    Args:
        report (CertificateReport): Report payload.
        path (Path): Output path.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(report.model_dump_json(indent=2, by_alias=True), encoding="utf-8")
