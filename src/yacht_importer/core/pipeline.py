# ABOUTME: Parse pipeline turning one HTML document into scored, filtered yacht listings
# ABOUTME: Runs structured data, then site adapters, then the generic heuristic, and builds the debug report

import uuid

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from yacht_importer.config import Config, get_config
from yacht_importer.core.models import DebugReport, ListingRecord, ParseResult
from yacht_importer.core.scoring import calculate_confidence, deduplicate_listings, validate_listing
from yacht_importer.extraction.adapters import default_registry, dispatch_adapters
from yacht_importer.extraction.base import DocumentParseError, SiteAdapter
from yacht_importer.extraction.fields import is_allowed_image_url
from yacht_importer.extraction.generic import generic_heuristic_parse
from yacht_importer.extraction.structured import extract_structured_data
from yacht_importer.extraction.validator import validate_site
from yacht_importer.utils.logging import get_logger, with_operation_context

logger = get_logger(__name__)

SAMPLE_HTML_LENGTH = 5000

STRUCTURED_STRATEGY = "structured-data"
ADAPTER_STRATEGY = "adapter"
GENERIC_STRATEGY = "generic"

# Elements that never hold visible listing content
NON_CONTENT_TAGS = ["script", "style", "noscript", "template"]


def parse_document(html: str) -> BeautifulSoup:
    """Parse raw HTML, raising DocumentParseError when the markup cannot be read."""
    if not isinstance(html, str):
        raise DocumentParseError(f"Expected HTML text, got {type(html).__name__}")
    try:
        return BeautifulSoup(html, "html.parser")
    except (ParserRejectedMarkup, AssertionError) as e:
        raise DocumentParseError(f"Could not parse HTML document: {e}") from e


def _sanitize_images(images: list[str]) -> list[str]:
    clean: list[str] = []
    for src in images:
        if is_allowed_image_url(src) and src not in clean:
            clean.append(src)
    return clean


def _run_strategies(
    soup: BeautifulSoup, source_url: str, config: Config, adapters: list[SiteAdapter], report: DebugReport
) -> list[ListingRecord]:
    structured = extract_structured_data(soup, source_url)
    report.structured_data_found = bool(structured)
    if structured:
        report.strategy = STRUCTURED_STRATEGY
        return structured

    # Scripts were only needed for JSON-LD; drop them so card text stays clean
    for node in soup(NON_CONTENT_TAGS):
        node.decompose()

    dispatch = dispatch_adapters(adapters, soup, source_url)
    report.empty_adapters = dispatch.empty_adapters
    if dispatch.listings:
        report.strategy = ADAPTER_STRATEGY
        report.adapter = dispatch.adapter
        return dispatch.listings

    if config.debug:
        logger.debug("Using generic fallback parser", url=source_url)
    listings = generic_heuristic_parse(soup, source_url, config)
    if listings:
        report.strategy = GENERIC_STRATEGY
    return listings


def _score_and_filter(
    candidates: list[ListingRecord], source_url: str, run_id: str, config: Config, report: DebugReport
) -> list[ListingRecord]:
    accepted = []
    for i, record in enumerate(candidates):
        record.id = f"yacht-{run_id}-{i}"
        record.source_url = source_url
        record.images = _sanitize_images(record.images)
        record.confidence.overall = calculate_confidence(record)
        record.issues = validate_listing(record)

        if record.confidence.overall < config.min_listing_confidence:
            report.listings_rejected += 1
            report.rejection_reasons.append(
                f"Low confidence ({record.confidence.overall}): {record.title or 'No title'}"
            )
            continue

        if not record.title and not record.price_raw:
            report.listings_rejected += 1
            report.rejection_reasons.append("No title or price")
            continue

        accepted.append(record)
    return accepted


@with_operation_context("parse_listings")
def parse_listings(
    html: str,
    source_url: str,
    *,
    config: Config | None = None,
    adapters: list[SiteAdapter] | None = None,
) -> ParseResult:
    """Extract yacht listings from one HTML document.

    Strategies run in strict priority order and the first one producing any record
    wins: schema.org structured data, then the site adapters, then the generic
    heuristic. Every record is scored, annotated with issues, filtered against the
    confidence floor and deduplicated.

    Args:
        html: Raw HTML of the page
        source_url: Absolute address the page was fetched from
        config: Extraction thresholds (defaults to the process configuration)
        adapters: Adapter instances in dispatch order (defaults to the shipped catalog)

    Returns:
        ParseResult with the accepted listings, an error for rejected input, and the
        debug report of this run
    """
    config = config or get_config()
    if adapters is None:
        adapters = default_registry.create(config)

    report = DebugReport(
        url=source_url,
        html_length=len(html) if isinstance(html, str) else 0,
        sample_html=html[:SAMPLE_HTML_LENGTH] if isinstance(html, str) else "",
    )

    try:
        soup = parse_document(html)
    except DocumentParseError as e:
        logger.warning("Document could not be parsed", url=source_url, error=str(e))
        report.validation_reason = str(e)
        return ParseResult(error=str(e), report=report)

    validation = validate_site(html, config)
    report.keywords_found = validation.keywords_found
    report.valid = validation.valid
    report.validation_reason = validation.reason
    if not validation.valid:
        logger.info("Page rejected by site validation", url=source_url, reason=validation.reason)
        return ParseResult(error=validation.reason, report=report)

    candidates = _run_strategies(soup, source_url, config, adapters, report)
    report.listings_attempted = len(candidates)

    run_id = uuid.uuid4().hex[:8]
    accepted = _score_and_filter(candidates, source_url, run_id, config, report)
    listings = deduplicate_listings(accepted)
    report.duplicates_dropped = len(accepted) - len(listings)
    report.listings_accepted = len(listings)

    logger.info(
        "Parse complete",
        url=source_url,
        strategy=report.strategy,
        adapter=report.adapter,
        attempted=report.listings_attempted,
        accepted=report.listings_accepted,
        rejected=report.listings_rejected,
        duplicates=report.duplicates_dropped,
    )
    return ParseResult(listings=listings, report=report)
