# ABOUTME: Confidence scoring, field-level validation and deduplication of listing records
# ABOUTME: Deterministic functions applied to every record after the extraction strategies run

from yacht_importer.core.models import (
    JSON_LD_SOURCE,
    MICRODATA_SOURCE,
    POA_PRICE,
    SEE_DETAILS_PRICE,
    Issue,
    ListingRecord,
    Severity,
)
from yacht_importer.extraction.fields import detect_price_sentinel, extract_price

# Field weights; they sum to 100
TITLE_WEIGHT = 35
IMAGES_WEIGHT = 25
PRICE_WEIGHT = 15
YEAR_WEIGHT = 10
LENGTH_WEIGHT = 5
TYPE_WEIGHT = 5
LOCATION_WEIGHT = 5
MAX_SCORE = TITLE_WEIGHT + IMAGES_WEIGHT + PRICE_WEIGHT + YEAR_WEIGHT + LENGTH_WEIGHT + TYPE_WEIGHT + LOCATION_WEIGHT

TRUSTED_SOURCE_BONUS = 10
TRUSTED_SOURCES = frozenset({JSON_LD_SOURCE, MICRODATA_SOURCE, "red-ensign"})


def calculate_confidence(record: ListingRecord) -> int:
    """Overall confidence 0-100 from which fields are present, plus a bonus for trusted sources."""
    score = 0
    if record.title:
        score += TITLE_WEIGHT
    if record.images:
        score += IMAGES_WEIGHT
    if record.price_raw and record.price_raw > 0:
        score += PRICE_WEIGHT
    if record.year:
        score += YEAR_WEIGHT
    if record.length:
        score += LENGTH_WEIGHT
    if record.type:
        score += TYPE_WEIGHT
    if record.location:
        score += LOCATION_WEIGHT

    if record.source in TRUSTED_SOURCES:
        score += TRUSTED_SOURCE_BONUS

    return min(100, round(score / MAX_SCORE * 100))


def validate_listing(record: ListingRecord) -> list[Issue]:
    """Field-level gaps, in a fixed order: title, price, images, year, length, type, location."""
    issues = []

    if not record.title:
        issues.append(Issue(field="title", severity=Severity.ERROR, message="Missing title"))

    if not record.price:
        issues.append(Issue(field="price", severity=Severity.ERROR, message="Missing price"))
    elif record.price in (SEE_DETAILS_PRICE, POA_PRICE) or record.price_raw == 0:
        issues.append(Issue(field="price", severity=Severity.WARNING, message="Price not shown"))

    if not record.images:
        issues.append(Issue(field="images", severity=Severity.WARNING, message="No images"))
    if not record.year:
        issues.append(Issue(field="year", severity=Severity.WARNING, message="Missing year"))
    if not record.length:
        issues.append(Issue(field="length", severity=Severity.WARNING, message="Missing length"))
    if not record.type:
        issues.append(Issue(field="type", severity=Severity.WARNING, message="Missing type"))
    if not record.location:
        issues.append(Issue(field="location", severity=Severity.WARNING, message="Missing location"))

    return issues


def dedup_key(record: ListingRecord) -> str:
    if record.detail_url:
        return f"url:{record.detail_url}"
    return f"title:{record.title.lower().strip()}|{record.price_raw or 0}"


def deduplicate_listings(records: list[ListingRecord]) -> list[ListingRecord]:
    """Drop later records that share a detail URL, or title and price, with an earlier one."""
    seen: set[str] = set()
    unique = []
    for record in records:
        key = dedup_key(record)
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)
    return unique


def rescore_listing(record: ListingRecord) -> ListingRecord:
    """Recompute derived state after a reviewer edited a record.

    A display price typed without a numeric value is parsed again; issues and overall
    confidence are then rebuilt from the edited fields.
    """
    if record.price and not record.price_raw:
        sentinel = detect_price_sentinel(record.price)
        parsed = extract_price(record.price)
        if parsed.raw:
            record.price_raw = parsed.raw
            record.currency = parsed.currency
        elif sentinel:
            record.price = sentinel
            record.price_raw = 0

    record.issues = validate_listing(record)
    record.confidence.overall = calculate_confidence(record)
    return record
