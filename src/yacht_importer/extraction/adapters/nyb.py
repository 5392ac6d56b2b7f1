# ABOUTME: Adapter for Network Yacht Brokers style sites
# ABOUTME: .outline cards with ltboats-* detail classes and CSS background images

from bs4 import Tag

from yacht_importer.core.models import ListingRecord

from .base import CardAdapter
from .registry import default_registry


@default_registry.register
class NetworkYachtBrokersAdapter(CardAdapter):
    name = "nyb-style"
    detect_selector = '.outline, .ltboats-details-title, .ltboats-img, [class*="ltboats"]'
    card_selector = ".outline, .boat-card, .yacht-card"
    url_markers = ("networkyachtbrokers",)

    def parse_card(self, card: Tag, url: str, record: ListingRecord) -> None:
        self.read_title(card, '.ltboats-details-title, .boat-title, h3 a, h4 a, a[href*="/boats"]', url, record, 90)
        self.read_year(card, '.ltboats-details-year, .boat-year, [class*="year"]', record)
        self.read_price(card, '.ltboats-details-price, .boat-price, [class*="price"]', record, confidence=90)
        self.read_location(card, '.ltboats-details-location, .boat-location, [class*="location"]', record)

        if not self.read_background_image(
            card, '.ltboats-img, [class*="boat-img"], [style*="background"]', url, record, confidence=85
        ):
            self.read_image(card, "img", url, record, confidence=80)

        self.read_specs(card, record)
