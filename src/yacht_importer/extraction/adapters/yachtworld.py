# ABOUTME: Adapter for YachtWorld and sites sharing its search-result card markup
# ABOUTME: Keeps cards that have either a title or a parsed price

from bs4 import Tag

from yacht_importer.core.models import ListingRecord

from ..fields import resolve_url
from ..fields.links import closest_link, link_href
from .base import CardAdapter
from .registry import default_registry


@default_registry.register
class YachtWorldAdapter(CardAdapter):
    name = "yachtworld-style"
    detect_selector = ".listing-card, .yacht-listing, .boat-listing, .search-result-item"
    card_selector = (
        '.listing-card, .yacht-listing, .boat-listing, .search-result-item, [class*="listing-card"], [class*="boat-card"]'
    )
    url_markers = ("yachtworld",)

    def parse_card(self, card: Tag, url: str, record: ListingRecord) -> None:
        title = self.read_title(
            card, 'h2, h3, .title, .listing-title, [class*="title"], a[class*="name"]', url, record, 80, with_link=False
        )
        if title is not None:
            record.detail_url = self._detail_link(card, title, url)

        self.read_price(card, '.price, [class*="price"], .amount', record, confidence=85)
        self.read_image(
            card, 'img[src*="yacht"], img[src*="boat"], img.primary, img.main, img:first-of-type', url, record, 80
        )
        self.read_specs(card, record)

    def _detail_link(self, card: Tag, title: Tag, url: str) -> str | None:
        link = closest_link(title) or title.select_one("a[href]") or card.select_one("a[href]")
        return resolve_url(link_href(link), url)

    def keep(self, record: ListingRecord) -> bool:
        return bool(record.title or record.price_raw)
