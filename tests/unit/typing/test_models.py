from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from certverify.typing.enums import CertificateField
from certverify.typing.models import (
    AnalyzeRequest,
    BoundingBox,
    DominantColor,
    ExtractedFields,
    MatchReport,
    ReferenceRecord,
    ThemeFinding,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_extracted_fields_count_and_lookup() -> None:
    fields = ExtractedFields(cert_number="X-1", year="2020")

    assert fields.found_count() == 2
    assert fields.get(CertificateField.YEAR) == "2020"
    assert fields.get(CertificateField.NAME) == ""


def test_models_accept_and_emit_camel_case() -> None:
    fields = ExtractedFields.model_validate({"certNumber": "X-1"})

    assert fields.cert_number == "X-1"
    assert fields.model_dump(by_alias=True)["certNumber"] == "X-1"


def test_domain_models_reject_unknown_keys() -> None:
    with pytest.raises(ValidationError):
        ExtractedFields.model_validate({"certNumber": "X-1", "gpa": "9.0"})


def test_reference_record_coerces_year_and_ignores_extra_keys() -> None:
    record = ReferenceRecord.model_validate({"certNumber": "X-1", "year": 2020, "createdAt": "2024-01-01"})

    assert record.year == "2020"
    assert record.degree == ""


def test_theme_finding_caps_dominant_colors() -> None:
    colors = [DominantColor(rgb="rgb(0, 0, 0)", hex="#000000", percentage=10.0)] * 6

    with pytest.raises(ValidationError):
        ThemeFinding(theme_name="Dark Theme", dominant_colors=colors)


def test_match_report_score_is_bounded() -> None:
    with pytest.raises(ValidationError):
        MatchReport(matched=True, match_score=101)


def test_bounding_box_height() -> None:
    assert BoundingBox(x0=1, y0=10, x1=5, y1=32).height == 22


def test_analyze_request_requires_existing_file(tmp_path: Path) -> None:
    with pytest.raises(ValidationError, match="does not exist"):
        AnalyzeRequest(input_path=tmp_path / "missing.png")

    with pytest.raises(ValidationError, match="not a file"):
        AnalyzeRequest(input_path=tmp_path)

    image = tmp_path / "cert.png"
    image.write_bytes(b"png")
    assert AnalyzeRequest(input_path=image).output_path is None
