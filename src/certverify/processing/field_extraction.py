"""Pattern-based certificate field extraction from recognized text.

Each field has an ordered tuple of patterns, from labelled forms
("Certificate No: X") down to loose structural shapes (``LETTERS-DIGITS``).
The first pattern that matches wins, so precedence is part of the contract:
an embedded serial can still be picked up as a certificate number when no
labelled form is present.

Captured values never span a line break; OCR text is line oriented.
"""

from __future__ import annotations

import re

from certverify.processing.normalization import collapse_whitespace
from certverify.typing.models import ExtractedFields

_FLAGS = re.IGNORECASE

CERT_NUMBER_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(?:certificate\s*(?:no|number|#|id|serial|s/n)[.:;\s]*)\s*([A-Z0-9\-/]{4,20})", _FLAGS),
    re.compile(r"(?:reg(?:istration)?\s*(?:no|number|#|id)[.:;\s]*)\s*([A-Z0-9\-/]{4,20})", _FLAGS),
    re.compile(r"(?:roll\s*(?:no|number|#)[.:;\s]*)\s*([A-Z0-9\-/]{4,20})", _FLAGS),
    re.compile(r"(?:serial\s*(?:no|number|#)[.:;\s]*)\s*([A-Z0-9\-/]{4,20})", _FLAGS),
    re.compile(r"(?:ref(?:erence)?\s*(?:no|number|#)[.:;\s]*)\s*([A-Z0-9\-/]{4,20})", _FLAGS),
    re.compile(r"\b([A-Z]{2,5}[\-/][0-9]{4,10})\b"),
    re.compile(r"\b(UPLD-[0-9]{6,10})\b", _FLAGS),
    re.compile(r"\b([A-Z]{3,6}-\d{4}-\d{3,10})\b"),
    re.compile(r"(?:S/N|UID|ID|CERT)[.:;\s]*\s*([A-Z0-9\-]{6,20})", _FLAGS),
)

NAME_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(
        r"(?:name\s*(?:of\s*(?:the\s*)?(?:candidate|student|graduate|holder))?)[.:;\s]+([A-Z][A-Z .'\t]{2,50})",
        _FLAGS,
    ),
    re.compile(
        r"(?:this\s*is\s*to\s*certify\s*that)\s+(?:Mr\.|Mrs\.|Ms\.|Dr\.)?\s*([A-Z][A-Z .'\t]{2,50}?)\s+"
        r"(?:has|son|daughter|s/o|d/o|of|completed|successfully|is\s*awarded)",
        _FLAGS,
    ),
    re.compile(r"(?:awarded\s*to)\s+([A-Z][A-Z .'\t]{2,50})", _FLAGS),
    re.compile(r"(?:conferred\s*(?:upon|on))\s+([A-Z][A-Z .'\t]{2,50})", _FLAGS),
    re.compile(r"(?:presented\s*to)\s+([A-Z][A-Z .'\t]{2,50})", _FLAGS),
    re.compile(r"(?:certify\s*that\s*(?:Mr\.|Mrs\.|Ms\.|Dr\.)?)\s*([A-Z][A-Z .'\t]{2,50})", _FLAGS),
    re.compile(r"(?:graduated?|alumnus)\s+([A-Z][A-Z .'\t]{2,50})", _FLAGS),
)

INSTITUTION_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(?:institution|issuing\s*body)\s*[.:;]\s*([A-Z][A-Z0-9 .,'&\t]{3,80})", _FLAGS),
    re.compile(
        r"(?:university|institute|college|school|academy|polytechnic|board|vidyalaya)[\s:of]+([A-Z][A-Z0-9 .,\t]{3,80})",
        _FLAGS,
    ),
    re.compile(r"(university[ \t]+of[ \t]+[A-Z][A-Z \t]{3,60})", _FLAGS),
    re.compile(r"([A-Z][A-Z \t]{3,60}[ \t]+university)", _FLAGS),
    re.compile(r"([A-Z][A-Z \t]{3,60}[ \t]+institute[ \t]+of[ \t]+[A-Z \t]{3,40})", _FLAGS),
    re.compile(r"(Indian[ \t]+Institute[ \t]+of[ \t]+[A-Z][A-Z \t]{3,40})", _FLAGS),
    re.compile(r"(National[ \t]+(?:Law[ \t]+)?University[A-Z][A-Z \t,]{0,40})", _FLAGS),
    re.compile(r"(?:issued?\s*by|awarded\s*by)\s+([A-Z][A-Z .,\t]{3,80})", _FLAGS),
    re.compile(r"^([A-Z][A-Z .,\t]{3,80})[ \t]+(?:University|Institute|College|Academy)", _FLAGS),
)

DEGREE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(
        r"(?:degree\s*(?:of|in)?)\s*([A-Z][A-Za-z \t.]+"
        r"(?:Engineering|Science|Arts|Commerce|Technology|Law|Medicine|Management|Philosophy|Business|Design))",
        _FLAGS,
    ),
    re.compile(r"\b(Bachelor[ \t]+of[ \t]+[A-Z][A-Za-z \t.]{3,50})\b", _FLAGS),
    re.compile(r"\b(Master[ \t]+of[ \t]+[A-Z][A-Za-z \t.]{3,50})\b", _FLAGS),
    re.compile(r"\b(Doctor[ \t]+of[ \t]+[A-Z][A-Za-z \t.]{3,50})\b", _FLAGS),
    re.compile(r"\b(B\.?(?:Tech|Sc|A|Com|E|Ed|Arch|Pharm|BA|B\.Sc|B\.Com)\.?(?:\s*\([^)]+\))?)\b", _FLAGS),
    re.compile(r"\b(M\.?(?:Tech|Sc|A|Com|E|Ed|BA|Phil|MBA|M\.Sc|M\.A)\.?(?:\s*\([^)]+\))?)\b", _FLAGS),
    re.compile(r"\b(Ph\.?D\.?)\b", _FLAGS),
    re.compile(r"\b(Diploma[ \t]+in[ \t]+[A-Z][A-Za-z \t.]{3,50})\b", _FLAGS),
    re.compile(r"(?:qualification\s*of)\s+([A-Z][A-Za-z \t.]{3,60})", _FLAGS),
    re.compile(r"\b(?:BDS|MBBS|BAMS|BHMS|B\.?P\.?T|LLB|LLM)\b", _FLAGS),
)

YEAR_PATTERN = re.compile(r"\b(19[89][0-9]|20[0-2][0-9]|2030)\b")
YEAR_CONTEXT_PATTERN = re.compile(
    r"(?:year|batch|passing|graduation|graduated|passed|date)\s*(?:of|:)?\s*(199[0-9]|20[0-2][0-9]|2030)",
    _FLAGS,
)


def extract_first_match(text: str, patterns: tuple[re.Pattern[str], ...]) -> str:
    """Return the first pattern hit, trimmed and whitespace-collapsed.

    Args:
        text (str): Recognized text.
        patterns (tuple[re.Pattern[str], ...]): Patterns in precedence order.

    Returns:
        str: Captured value, or an empty string when nothing matches.
    """
    for pattern in patterns:
        match = pattern.search(text)
        if match is None:
            continue
        value = match.group(1) if match.re.groups else match.group(0)
        return collapse_whitespace(value or "")
    return ""


def extract_year(text: str) -> str:
    """Return the graduation year found in text.

    A year next to a context keyword ("year", "batch", "passing", ...) wins;
    otherwise the most recent plausible year is returned. Documents carrying
    unrelated years (e.g. a founding year on letterhead) can be misread.

    Args:
        text (str): Recognized text.

    Returns:
        str: Four-digit year, or an empty string.
    """
    years = [int(match.group(1)) for match in YEAR_PATTERN.finditer(text)]
    if not years:
        return ""

    context = YEAR_CONTEXT_PATTERN.search(text)
    if context is not None:
        return context.group(1)
    return str(max(years))


def extract_fields(text: str) -> ExtractedFields:
    """Extract the five certificate fields from recognized text.

    Args:
        text (str): Recognized text; may be empty.

    Returns:
        ExtractedFields: Extracted fields, empty strings where absent.
    """
    text = text or ""
    return ExtractedFields(
        cert_number=extract_first_match(text, CERT_NUMBER_PATTERNS),
        name=extract_first_match(text, NAME_PATTERNS),
        institution=extract_first_match(text, INSTITUTION_PATTERNS),
        year=extract_year(text),
        degree=extract_first_match(text, DEGREE_PATTERNS),
    )
