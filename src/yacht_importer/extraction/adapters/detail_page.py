# ABOUTME: Adapter for single-yacht detail pages
# ABOUTME: One record from the h1, first plausible price, gallery images and full-page specs

from bs4 import BeautifulSoup

from yacht_importer.core.models import ListingRecord, new_listing

from ..fields import clean_text, extract_price, is_valid_image, node_text, resolve_image
from .base import CardAdapter
from .registry import default_registry

DETAIL_MARKERS = ".yacht-detail, .boat-detail, .vessel-detail, .product-detail, #yacht, #boat"
SPEC_MARKERS = '.specifications, .specs, .details, [class*="spec"]'
GALLERY_MARKERS = ".gallery img, .carousel img, .slider img"
GALLERY_IMAGES = '.gallery img, .carousel img, .slider img, .photos img, [class*="gallery"] img'
PRICE_SELECTORS = [".price", '[class*="price"]', ".amount", '[class*="amount"]']
DESCRIPTION_SELECTOR = '.description, [class*="description"], .details p, article p'

MIN_GALLERY_IMAGES = 3
MAX_GALLERY_IMAGES = 20
MAX_FALLBACK_IMAGES = 10
MAX_DESCRIPTION = 2000


@default_registry.register
class DetailPageAdapter(CardAdapter):
    name = "detail-page"

    def detect(self, soup: BeautifulSoup, url: str) -> bool:
        if soup.select_one(DETAIL_MARKERS) is not None:
            return True
        has_specs = soup.select_one(SPEC_MARKERS) is not None
        return has_specs and len(soup.select(GALLERY_MARKERS)) >= MIN_GALLERY_IMAGES

    def parse(self, soup: BeautifulSoup, url: str) -> list[ListingRecord]:
        record = new_listing(0, source=self.name)

        h1 = soup.find("h1")
        if h1 is not None:
            record.title = clean_text(h1.get_text(" "))

        for selector in PRICE_SELECTORS:
            node = soup.select_one(selector)
            if node is None:
                continue
            parsed = extract_price(node.get_text(" "))
            if parsed.raw and parsed.raw >= self.config.min_yacht_price:
                record.price = parsed.formatted
                record.price_raw = parsed.raw
                record.currency = parsed.currency
                record.confidence.price = 85
                break

        record.images = self._images(soup, GALLERY_IMAGES, url, MAX_GALLERY_IMAGES)
        if not record.images:
            record.images = self._images(soup, "img", url, MAX_FALLBACK_IMAGES)
        record.confidence.images = 80 if record.images else 0

        self.read_specs(soup.body or soup, record)

        description = soup.select_one(DESCRIPTION_SELECTOR)
        if description is not None:
            record.description = node_text(description).replace("\n", " ")[:MAX_DESCRIPTION]

        return [record] if record.title or record.price_raw else []

    def _images(self, soup: BeautifulSoup, selector: str, url: str, limit: int) -> list[str]:
        images = []
        for img in soup.select(selector):
            if not is_valid_image(img, self.config):
                continue
            src = resolve_image(img, url)
            if src and src not in images:
                images.append(src)
            if len(images) >= limit:
                break
        return images
