# ABOUTME: Adapter for grid/card layouts: a container whose children are listing cards
# ABOUTME: Each child is read with the generic card extractor and tagged as card-grid

from bs4 import BeautifulSoup, Tag

from yacht_importer.core.models import ListingRecord

from ..generic import extract_from_generic_card
from .base import CardAdapter
from .registry import default_registry

NAMED_CONTAINERS = ".grid, .cards, .listings, .inventory, .results"
LOOSE_CONTAINERS = '[class*="grid"], [class*="cards"], [class*="listing"], [class*="boats-list"], [class*="yacht-list"]'
MIN_CHILDREN = 2
MAX_CHILDREN = 50


@default_registry.register
class CardGridAdapter(CardAdapter):
    name = "card-grid"
    detect_selector = (
        '.grid, .cards, .listings, .inventory, .results, .outline, [class*="grid"], [class*="cards"], '
        '[class*="boats"], [class*="yachts"]'
    )

    def parse(self, soup: BeautifulSoup, url: str) -> list[ListingRecord]:
        records: list[ListingRecord] = []
        seen: set[int] = set()

        for container in [*soup.select(NAMED_CONTAINERS), *soup.select(LOOSE_CONTAINERS)]:
            if id(container) in seen:
                continue
            seen.add(id(container))

            children = [child for child in container.children if isinstance(child, Tag)]
            if not MIN_CHILDREN <= len(children) <= MAX_CHILDREN:
                continue

            for i, card in enumerate(children):
                record = extract_from_generic_card(card, url, i, self.config)
                if record is not None and (record.title or record.price_raw):
                    record.source = self.name
                    records.append(record)

            if len(records) >= 2:
                break

        return records
