from __future__ import annotations

import pytest

from certverify.processing.field_extraction import (
    CERT_NUMBER_PATTERNS,
    extract_fields,
    extract_first_match,
    extract_year,
)
from certverify.typing.models import ExtractedFields


@pytest.mark.parametrize("text", ["", "   ", "\n\n", "lorem ipsum", "%%%% 12 ####"])
def test_extract_fields_always_returns_strings(text: str) -> None:
    fields = extract_fields(text)

    assert isinstance(fields, ExtractedFields)
    for value in fields.model_dump().values():
        assert isinstance(value, str)


def test_extract_fields_on_empty_text_is_all_empty() -> None:
    assert extract_fields("") == ExtractedFields()
    assert extract_fields("").found_count() == 0


def test_labelled_certificate_number() -> None:
    assert extract_fields("Certificate No: ABC-12345").cert_number == "ABC-12345"


def test_certificate_label_wins_over_registration_label() -> None:
    text = "Registration No: REG-0042\nCertificate No: CERT-9999"

    assert extract_fields(text).cert_number == "CERT-9999"


def test_structural_certificate_number_when_no_label() -> None:
    assert extract_fields("Serial code AB-123456 on file").cert_number == "AB-123456"


def test_roll_number_is_used_as_certificate_number() -> None:
    assert extract_first_match("Roll No. 20931847", CERT_NUMBER_PATTERNS) == "20931847"


def test_name_from_certify_that_phrase() -> None:
    text = "This is to certify that Jane Doe has successfully completed the programme"

    assert extract_fields(text).name == "Jane Doe"


def test_labelled_name_stops_at_line_break() -> None:
    fields = extract_fields("Name: John Smith\nRoll No: 12345")

    assert fields.name == "John Smith"
    assert fields.cert_number == "12345"


def test_labelled_institution() -> None:
    assert extract_fields("Institution: State University").institution == "State University"


def test_degree_after_degree_keyword() -> None:
    text = "is hereby awarded the degree of Bachelor of Science in Physics"

    assert extract_fields(text).degree == "Bachelor of Science"


def test_bachelor_pattern_precedes_master_pattern() -> None:
    assert extract_fields("Master of Arts\nBachelor of Commerce").degree == "Bachelor of Commerce"


def test_degree_abbreviation_without_capture_group() -> None:
    assert extract_fields("Qualification: MBBS").degree == "MBBS"


def test_year_prefers_maximum_without_context() -> None:
    assert extract_year("Issued 2019 and renewed 2021") == "2021"


def test_year_prefers_contextual_match() -> None:
    assert extract_year("graduation year: 2019\nPrinted 2023") == "2019"


def test_year_context_beats_letterhead_year() -> None:
    assert extract_year("Founded 1985. Batch 2015") == "2015"


def test_year_outside_plausible_range_is_ignored() -> None:
    assert extract_year("Established 1875, reprinted 2045") == ""


def test_extracted_values_are_whitespace_collapsed() -> None:
    assert extract_fields("Name:   Jane \t  Doe  ").name == "Jane Doe"
