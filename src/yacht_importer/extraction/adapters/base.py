# ABOUTME: Shared behaviour for adapters that read a repeating listing card layout
# ABOUTME: Title/detail link, sentinel-aware price, primary image and spec helpers

from bs4 import BeautifulSoup, Tag

from yacht_importer.config import Config
from yacht_importer.core.models import ListingRecord, new_listing
from yacht_importer.utils.logging import get_logger

from ..fields import (
    background_image_url,
    detect_price_sentinel,
    extract_price,
    extract_specs,
    flat_text,
    is_allowed_image_url,
    is_valid_image,
    node_text,
    resolve_image,
    resolve_url,
)
from ..fields.links import closest_link, link_href
from ..fields.specs import EXPLICIT_LOCATION_WEIGHT, YEAR_WEIGHT, extract_year

logger = get_logger(__name__)


class CardAdapter:
    """Base class for adapters over a page of repeated listing cards.

    Subclasses set ``name``, ``detect_selector`` and ``card_selector`` (and optionally
    ``url_markers``) and fill each record in ``parse_card``.
    """

    name: str = ""
    detect_selector: str = ""
    card_selector: str = ""
    url_markers: tuple[str, ...] = ()

    def __init__(self, config: Config):
        self.config = config

    def detect(self, soup: BeautifulSoup, url: str) -> bool:
        if any(marker in url.lower() for marker in self.url_markers):
            return True
        return bool(self.detect_selector) and soup.select_one(self.detect_selector) is not None

    def parse(self, soup: BeautifulSoup, url: str) -> list[ListingRecord]:
        cards = soup.select(self.card_selector)
        records = []
        for i, card in enumerate(cards):
            record = new_listing(i, source=self.name)
            self.parse_card(card, url, record)
            if self.keep(record):
                records.append(record)

        if self.config.debug:
            logger.debug("Adapter parsed cards", adapter=self.name, cards=len(cards), kept=len(records))
        return records

    def parse_card(self, card: Tag, url: str, record: ListingRecord) -> None:
        raise NotImplementedError

    def keep(self, record: ListingRecord) -> bool:
        return bool(record.title)

    # Field helpers shared by the concrete adapters

    def read_title(
        self, card: Tag, selector: str, url: str, record: ListingRecord, confidence: int, with_link: bool = True
    ) -> Tag | None:
        node = card.select_one(selector)
        if node is None:
            return None
        record.title = flat_text(node)
        if record.title:
            record.confidence.title = confidence
        if with_link:
            record.detail_url = resolve_url(link_href(closest_link(node)), url)
        return node

    def read_price(self, card: Tag, selector: str, record: ListingRecord, confidence: int) -> None:
        """Price from the first matching element; sold/POA labels become sentinel prices."""
        node = card.select_one(selector)
        if node is None:
            return
        text = flat_text(node)
        sentinel = detect_price_sentinel(text)
        if sentinel:
            record.price = sentinel
            record.price_raw = 0
            return
        parsed = extract_price(text)
        if parsed.raw:
            record.price = parsed.formatted
            record.price_raw = parsed.raw
            record.currency = parsed.currency
            record.confidence.price = confidence

    def read_image(self, card: Tag, selector: str, url: str, record: ListingRecord, confidence: int) -> bool:
        img = card.select_one(selector)
        if img is None or not is_valid_image(img, self.config):
            return False
        src = resolve_image(img, url)
        if not src:
            return False
        record.images = [src]
        record.confidence.images = confidence
        return True

    def read_background_image(
        self, card: Tag, selector: str, url: str, record: ListingRecord, confidence: int
    ) -> bool:
        for node in card.select(selector):
            src = resolve_url(background_image_url(node), url)
            if src and is_allowed_image_url(src):
                record.images = [src]
                record.confidence.images = confidence
                return True
        return False

    def read_year(self, card: Tag, selector: str, record: ListingRecord) -> None:
        node = card.select_one(selector)
        year = extract_year(flat_text(node)) if node is not None else None
        if year:
            record.year = year
            record.confidence.specs += YEAR_WEIGHT

    def read_location(self, card: Tag, selector: str, record: ListingRecord) -> None:
        node = card.select_one(selector)
        location = flat_text(node) if node is not None else ""
        if location:
            record.location = location
            record.confidence.specs += EXPLICIT_LOCATION_WEIGHT

    def read_specs(self, node: Tag | None, record: ListingRecord) -> None:
        if node is not None:
            extract_specs(node_text(node), record)
