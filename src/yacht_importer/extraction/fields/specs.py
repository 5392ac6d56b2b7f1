# ABOUTME: Year, length, type and location extraction from free listing text
# ABOUTME: Ordered first-match-wins pattern tables; each hit adds a fixed weight to confidence.specs

import re
from datetime import datetime

from yacht_importer.core.models import LengthUnit, ListingRecord, YachtType

from .text import clean_text

YEAR_WEIGHT = 20
LENGTH_WEIGHT = 20
TYPE_WEIGHT = 15
LOCATION_WEIGHT = 15
# An explicit location element is worth more than a location pattern found in free text
EXPLICIT_LOCATION_WEIGHT = 20

MIN_MODEL_YEAR = 1950
MIN_LENGTH = 15
MAX_LENGTH = 500

_YEAR_RE = re.compile(r"\b(19\d{2}|20\d{2})\b")

# Feet patterns are tried before metre patterns; prefix forms before suffix forms.
LENGTH_PATTERNS: list[tuple[re.Pattern[str], LengthUnit]] = [
    (re.compile(r"(?:length|loa)[:\s]*(\d+(?:\.\d+)?)\s*(?:ft|feet|')", re.IGNORECASE), LengthUnit.FEET),
    (re.compile(r"(\d+(?:\.\d+)?)\s*(?:ft|feet|')\s*(?:length|loa)?", re.IGNORECASE), LengthUnit.FEET),
    (re.compile(r"(?:length|loa)[:\s]*(\d+(?:\.\d+)?)\s*(?:m|meters?|metres?)\b", re.IGNORECASE), LengthUnit.METERS),
    (re.compile(r"(\d+(?:\.\d+)?)\s*(?:m|meters?|metres?)\b\s*(?:length|loa)?", re.IGNORECASE), LengthUnit.METERS),
]

# Table order is the priority order.
TYPE_KEYWORDS: list[tuple[str, YachtType]] = [
    ("motor yacht", YachtType.MOTOR),
    ("motoryacht", YachtType.MOTOR),
    ("power boat", YachtType.MOTOR),
    ("sailing yacht", YachtType.SAIL),
    ("sailboat", YachtType.SAIL),
    ("sloop", YachtType.SAIL),
    ("ketch", YachtType.SAIL),
    ("catamaran", YachtType.CATAMARAN),
    ("multihull", YachtType.CATAMARAN),
    ("superyacht", YachtType.SUPERYACHT),
    ("megayacht", YachtType.SUPERYACHT),
    ("mega yacht", YachtType.SUPERYACHT),
    ("sportfish", YachtType.MOTOR),
    ("sport fish", YachtType.MOTOR),
    ("express cruiser", YachtType.MOTOR),
    ("trawler", YachtType.MOTOR),
    ("flybridge", YachtType.MOTOR),
    ("sedan", YachtType.MOTOR),
]

LOCATION_PATTERNS: list[re.Pattern[str]] = [
    # Explicit "Location: Fort Lauderdale" style prefix
    re.compile(r"\b(?:location|located|port)[:\s]+([A-Za-z][A-Za-z\s,]+?)(?:\.|$|\n|<)", re.IGNORECASE),
    # City, ST
    re.compile(r"\b([A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)*,[ \t]*[A-Z]{2})\b"),
    # City, Country
    re.compile(r"\b([A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)*,[ \t]*[A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)*)\b"),
]


def extract_year(text: str, current_year: int | None = None) -> str | None:
    """First four-digit year between 1950 and the current year (inclusive)."""
    latest = current_year or datetime.now().year
    for match in _YEAR_RE.finditer(text):
        if MIN_MODEL_YEAR <= int(match.group(1)) <= latest:
            return match.group(1)
    return None


def extract_length(text: str) -> tuple[str, LengthUnit] | None:
    for pattern, unit in LENGTH_PATTERNS:
        match = pattern.search(text)
        if match and MIN_LENGTH <= float(match.group(1)) <= MAX_LENGTH:
            return match.group(1), unit
    return None


def extract_type(text: str) -> YachtType | None:
    lowered = text.lower()
    for keyword, yacht_type in TYPE_KEYWORDS:
        if keyword in lowered:
            return yacht_type
    return None


def extract_location(text: str) -> str | None:
    for pattern in LOCATION_PATTERNS:
        match = pattern.search(text)
        if match and 3 <= len(match.group(1)) <= 50:
            return clean_text(match.group(1))
    return None


def extract_specs(text: str, record: ListingRecord, current_year: int | None = None) -> ListingRecord:
    """Fill year, length, type and location on the record from free text.

    Fields that are already populated (e.g. from an explicit element) are left alone.
    Every field filled here adds its weight to ``record.confidence.specs``.
    """
    if not text:
        return record

    if not record.year:
        year = extract_year(text, current_year)
        if year:
            record.year = year
            record.confidence.specs += YEAR_WEIGHT

    if not record.length:
        length = extract_length(text)
        if length:
            record.length, record.length_unit = length
            record.confidence.specs += LENGTH_WEIGHT

    if not record.type:
        yacht_type = extract_type(text)
        if yacht_type:
            record.type = yacht_type
            record.confidence.specs += TYPE_WEIGHT

    if not record.location:
        location = extract_location(text)
        if location:
            record.location = location
            record.confidence.specs += LOCATION_WEIGHT

    return record
