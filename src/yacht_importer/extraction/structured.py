# ABOUTME: Structured-data strategy reading schema.org Product/Vehicle markup
# ABOUTME: JSON-LD script blocks first, then microdata itemscopes; highest-trust source of listings

import json
import re
from typing import Any

from bs4 import BeautifulSoup, Tag

from yacht_importer.core.models import JSON_LD_SOURCE, MICRODATA_SOURCE, ListingRecord, new_listing
from yacht_importer.utils.logging import get_logger

from .fields import (
    clean_text,
    detect_price_sentinel,
    extract_price,
    flat_text,
    format_price,
    resolve_url,
)
from .fields.price import CURRENCY_SYMBOLS, normalize_amount

logger = get_logger(__name__)

LISTING_TYPES = {"Product", "Vehicle"}
CANDIDATE_TYPES = LISTING_TYPES | {"Offer"}

JSON_LD_OVERALL = 85
JSON_LD_FIELD_CONFIDENCE = 90
MICRODATA_OVERALL = 80

_JSON_LD_YEAR_RE = re.compile(r"\b(19[89]\d|20[0-2]\d)\b")
_MICRODATA_SELECTOR = '[itemtype*="schema.org/Product"], [itemtype*="schema.org/Vehicle"]'
_PLAIN_NUMBER_RE = re.compile(r"[\d.,\s]+")


def _types(item: dict[str, Any]) -> set[str]:
    value = item.get("@type")
    if isinstance(value, str):
        return {value}
    if isinstance(value, list):
        return {v for v in value if isinstance(v, str)}
    return set()


def _as_text(value: Any) -> str:
    return clean_text(value) if isinstance(value, str) else ""


def _json_ld_images(value: Any, base_url: str) -> list[str]:
    entries = value if isinstance(value, list) else [value]
    images = []
    for entry in entries:
        src = entry.get("url") if isinstance(entry, dict) else entry
        resolved = resolve_url(src, base_url) if isinstance(src, str) else None
        if resolved:
            images.append(resolved)
    return images


def _json_ld_amount(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        return normalize_amount(value)
    return None


def parse_json_ld_listing(data: dict[str, Any], base_url: str = "", index: int = 0) -> ListingRecord:
    """Build a record from a schema.org Product or Vehicle object."""
    record = new_listing(index, source=JSON_LD_SOURCE)
    record.confidence.overall = JSON_LD_OVERALL

    record.title = _as_text(data.get("name"))
    record.description = _as_text(data.get("description"))
    if isinstance(data.get("url"), str):
        record.detail_url = resolve_url(data["url"], base_url)

    offers = data.get("offers")
    offer = offers[0] if isinstance(offers, list) and offers else offers
    if isinstance(offer, dict):
        raw = _json_ld_amount(offer.get("price"))
        if raw is None:
            raw = _json_ld_amount(offer.get("lowPrice"))
        currency = str(offer.get("priceCurrency") or "USD").upper()
        record.price_raw = raw or None
        record.currency = currency if raw and currency in CURRENCY_SYMBOLS else None
        record.price = format_price(raw, currency) if raw else ""
        record.confidence.price = JSON_LD_FIELD_CONFIDENCE

    if data.get("image"):
        record.images = _json_ld_images(data["image"], base_url)
        record.confidence.images = JSON_LD_FIELD_CONFIDENCE

    year = _JSON_LD_YEAR_RE.search(f"{record.title} {record.description}")
    if year:
        record.year = year.group(1)

    return record


def _json_ld_products(item: dict[str, Any]) -> list[dict[str, Any]]:
    """Product/Vehicle objects carried by one top-level JSON-LD item."""
    graph = item.get("@graph")
    if isinstance(graph, list):
        candidates = graph
    elif _types(item) & CANDIDATE_TYPES:
        candidates = [item]
    else:
        return []

    products = []
    for candidate in candidates:
        if not isinstance(candidate, dict):
            continue
        types = _types(candidate)
        if types & LISTING_TYPES:
            products.append(candidate)
        elif "Offer" in types and isinstance(candidate.get("itemOffered"), dict):
            offered = candidate["itemOffered"]
            if _types(offered) & LISTING_TYPES:
                # The offer wraps the product; keep its price when the product has none
                products.append({"offers": candidate, **offered})
    return products


def extract_json_ld(soup: BeautifulSoup, base_url: str = "") -> list[ListingRecord]:
    records: list[ListingRecord] = []
    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        payload = script.string or script.get_text()
        try:
            data = json.loads(payload)
        except (json.JSONDecodeError, TypeError) as e:
            logger.debug("Skipping malformed JSON-LD block", error=str(e))
            continue

        items = data if isinstance(data, list) else [data]
        for item in items:
            if not isinstance(item, dict):
                continue
            for product in _json_ld_products(item):
                records.append(parse_json_ld_listing(product, base_url, len(records)))
    return records


def _itemprop(scope: Tag, prop: str) -> str:
    node = scope.select_one(f'[itemprop="{prop}"]')
    if node is None:
        return ""
    for attribute in ("content", "src", "href"):
        value = node.get(attribute)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return flat_text(node)


def parse_microdata_listing(scope: Tag, base_url: str = "", index: int = 0) -> ListingRecord:
    """Build a record from a schema.org Product or Vehicle itemscope."""
    record = new_listing(index, source=MICRODATA_SOURCE)
    record.confidence.overall = MICRODATA_OVERALL

    record.title = _itemprop(scope, "name")
    record.description = _itemprop(scope, "description")

    price_text = _itemprop(scope, "price") or _itemprop(scope, "lowPrice")
    currency = (_itemprop(scope, "priceCurrency") or "USD").upper()
    record.price = price_text
    if price_text:
        parsed = extract_price(price_text)
        plain = normalize_amount(price_text) if _PLAIN_NUMBER_RE.fullmatch(price_text) else None
        if parsed.raw:
            record.price, record.price_raw, record.currency = parsed.formatted, parsed.raw, parsed.currency
        elif plain:
            record.price, record.price_raw = format_price(plain, currency), plain
            record.currency = currency if currency in CURRENCY_SYMBOLS else None
        else:
            sentinel = detect_price_sentinel(price_text)
            if sentinel:
                record.price, record.price_raw = sentinel, 0

    image = resolve_url(_itemprop(scope, "image"), base_url)
    if image:
        record.images = [image]

    detail_url = _itemprop(scope, "url")
    if detail_url:
        record.detail_url = resolve_url(detail_url, base_url)

    return record


def extract_microdata(soup: BeautifulSoup, base_url: str = "") -> list[ListingRecord]:
    scopes = soup.select(_MICRODATA_SELECTOR)
    # A Vehicle nested inside a Product describes the same boat
    scope_ids = {id(scope) for scope in scopes}
    outermost = [scope for scope in scopes if not any(id(parent) in scope_ids for parent in scope.parents)]
    return [parse_microdata_listing(scope, base_url, i) for i, scope in enumerate(outermost)]


def extract_structured_data(soup: BeautifulSoup, base_url: str = "") -> list[ListingRecord]:
    """Listings declared through schema.org JSON-LD or microdata.

    Must run before script elements are stripped from the document.
    """
    records = extract_json_ld(soup, base_url)
    records.extend(extract_microdata(soup, base_url))
    logger.debug("Structured data found", count=len(records))
    return records
