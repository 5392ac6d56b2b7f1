# ABOUTME: Adapter for WordPress property/listing themes used by many small brokers
# ABOUTME: Reads .listing_wrapper / .property_listing cards

from bs4 import Tag

from yacht_importer.core.models import ListingRecord

from .base import CardAdapter
from .registry import default_registry


@default_registry.register
class WordPressListingAdapter(CardAdapter):
    name = "wp-listing-theme"
    detect_selector = ".listing_wrapper, .property_listing, .listing-unit-img-wrapper, .listing_unit_price_wrapper"
    card_selector = ".listing_wrapper, .property_listing"

    def parse_card(self, card: Tag, url: str, record: ListingRecord) -> None:
        self.read_title(card, "h4 a, .listing-title a, .property-title a", url, record, confidence=90)
        self.read_price(
            card, '.price_wrapper, .listing_unit_price_wrapper span, .price, [class*="price"]', record, confidence=90
        )
        self.read_image(card, ".listing-unit-img-wrapper img, .property-img img, img", url, record, confidence=85)

        # Theme metadata block first, then the whole card
        self.read_specs(card.select_one(".property_location, .listing-meta, .property-meta"), record)
        self.read_specs(card, record)
