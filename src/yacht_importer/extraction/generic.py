# ABOUTME: Generic heuristic strategy for sites no adapter recognises
# ABOUTME: Finds repeated card-like elements and reads price, title, images and specs from each

from bs4 import BeautifulSoup, Tag

from yacht_importer.config import Config, get_config
from yacht_importer.core.models import ListingRecord, new_listing
from yacht_importer.utils.logging import get_logger

from .fields import (
    background_image_url,
    extract_price,
    extract_specs,
    flat_text,
    has_currency_amount,
    is_allowed_image_url,
    is_valid_image,
    node_text,
    resolve_image,
    resolve_url,
)
from .fields.links import closest_link, link_href
from .fields.specs import EXPLICIT_LOCATION_WEIGHT

logger = get_logger(__name__)

# Tried in order; the first selector matching a plausible number of elements wins
CANDIDATE_SELECTORS = [
    "article",
    ".item",
    ".card",
    ".product",
    ".result",
    '[class*="listing"]',
    '[class*="yacht"]',
    '[class*="boat"]',
    '[class*="product"]',
    '[class*="result"]',
    '[class*="item"]',
]
MIN_CANDIDATES = 2
MAX_CANDIDATES = 100

MIN_GROUP_SIZE = 2
MAX_GROUP_SIZE = 50

MIN_CARD_TEXT = 20
MAX_CARD_TEXT = 5000

TITLE_SELECTOR = 'h1, h2, h3, h4, h5, a[href*="boat"], a[href*="yacht"]'
LOCATION_SELECTOR = '[class*="location"], [class*="port"], [class*="city"]'
MAX_BACKGROUND_IMAGES = 3

GENERIC_PRICE_CONFIDENCE = 70
GENERIC_TITLE_CONFIDENCE = 65
GENERIC_IMAGE_CONFIDENCE = 70


def _card_title(card: Tag, base_url: str, record: ListingRecord) -> None:
    for node in card.select(TITLE_SELECTOR):
        text = flat_text(node)
        if 5 <= len(text) <= 150 and not text.startswith(("$", "€", "£")):
            record.title = text
            record.confidence.title = GENERIC_TITLE_CONFIDENCE
            link = closest_link(node) or node.find("a", href=True)
            record.detail_url = resolve_url(link_href(link), base_url)
            return


def _card_images(card: Tag, base_url: str, config: Config) -> list[str]:
    images = []
    for img in card.find_all("img"):
        if is_valid_image(img, config):
            src = resolve_image(img, base_url)
            if src:
                images.append(src)
    if images:
        return images

    styled = card.select('[style*="background"]')
    if "background" in (card.get("style") or ""):
        styled.insert(0, card)
    for node in styled:
        src = resolve_url(background_image_url(node), base_url)
        if src and is_allowed_image_url(src):
            images.append(src)
        if len(images) >= MAX_BACKGROUND_IMAGES:
            break
    return images


def extract_from_generic_card(
    card: Tag, base_url: str, index: int = 0, config: Config | None = None
) -> ListingRecord | None:
    """Best-effort record from an arbitrary card element, or None when it is not a listing."""
    config = config or get_config()
    text = node_text(card)
    if not MIN_CARD_TEXT <= len(text) <= MAX_CARD_TEXT:
        return None

    record = new_listing(index)

    parsed = extract_price(text)
    if parsed.raw and config.min_yacht_price <= parsed.raw <= config.max_yacht_price:
        record.price = parsed.formatted
        record.price_raw = parsed.raw
        record.currency = parsed.currency
        record.confidence.price = GENERIC_PRICE_CONFIDENCE

    _card_title(card, base_url, record)

    record.images = _card_images(card, base_url, config)
    record.confidence.images = GENERIC_IMAGE_CONFIDENCE if record.images else 0

    location_node = card.select_one(LOCATION_SELECTOR)
    location = flat_text(location_node) if location_node is not None else ""
    if 3 <= len(location) <= 50:
        record.location = location
        record.confidence.specs += EXPLICIT_LOCATION_WEIGHT

    extract_specs(text, record)

    if not record.title and not record.price_raw:
        return None
    return record


def find_repeated_structures(soup: BeautifulSoup) -> list[Tag]:
    """Elements sharing a class signature where at least half show a currency amount."""
    groups: dict[str, list[Tag]] = {}
    for node in soup.find_all(["div", "article", "section", "li"]):
        classes = node.get("class") or []
        if len(" ".join(classes)) > 5:
            groups.setdefault("|".join(sorted(classes)), []).append(node)

    for signature, nodes in groups.items():
        if not MIN_GROUP_SIZE <= len(nodes) <= MAX_GROUP_SIZE:
            continue
        priced = sum(1 for node in nodes if has_currency_amount(flat_text(node)))
        if priced >= len(nodes) * 0.5:
            logger.debug("Repeated structure found", signature=signature, size=len(nodes))
            return nodes
    return []


def find_candidate_cards(soup: BeautifulSoup) -> list[Tag]:
    for selector in CANDIDATE_SELECTORS:
        found = soup.select(selector)
        if MIN_CANDIDATES <= len(found) <= MAX_CANDIDATES:
            logger.debug("Generic candidates found", selector=selector, count=len(found))
            return found
    return find_repeated_structures(soup)


def generic_heuristic_parse(soup: BeautifulSoup, url: str, config: Config | None = None) -> list[ListingRecord]:
    """Last-resort strategy: treat repeated card-like elements as listings."""
    config = config or get_config()
    records = []
    for i, card in enumerate(find_candidate_cards(soup)):
        record = extract_from_generic_card(card, url, i, config)
        if record is not None:
            records.append(record)
    return records
