# ABOUTME: End-to-end tests for the HTML parse pipeline
# ABOUTME: Strategy priority, site validation, filtering gates, dedup counts and the debug report

import json

import pytest

from yacht_importer.config import Config
from yacht_importer.core.models import JSON_LD_SOURCE, Severity, new_listing
from yacht_importer.core.pipeline import parse_document, parse_listings
from yacht_importer.extraction.base import DocumentParseError

URL = "https://broker.com/boats-for-sale"


class _FixedAdapter:
    """Adapter that recognises every page and returns prepared records."""

    name = "fixed"

    def __init__(self, records):
        self.records = records

    def detect(self, soup, url):
        return True

    def parse(self, soup, url):
        return self.records


class _EmptyAdapter(_FixedAdapter):
    name = "empty"

    def __init__(self):
        super().__init__([])


JSON_LD_PAGE = """
<html>
  <head>
    <title>Yachts for sale | Blue Water Brokerage</title>
    <script type="application/ld+json">{payload}</script>
  </head>
  <body><h1>Motor yacht for sale</h1><p>Contact our yacht broker about this boat.</p></body>
</html>
"""

AZIMUT = {
    "@context": "https://schema.org",
    "@type": "Product",
    "name": "2019 Azimut 60 Flybridge",
    "image": "https://broker.com/img/azimut-1.jpg",
    "url": "/boats/azimut-60",
    "offers": {"@type": "Offer", "price": "1850000", "priceCurrency": "EUR"},
}


class TestParseDocument:
    """Test raw document parsing."""

    def test_parses_html(self):
        assert parse_document("<p>Boats</p>").p.get_text() == "Boats"

    def test_rejects_non_text(self):
        with pytest.raises(DocumentParseError):
            parse_document(b"<p>Boats</p>")


class TestStrategyPriority:
    """Test that the first productive strategy wins."""

    def test_json_ld_page(self, config):
        result = parse_listings(JSON_LD_PAGE.format(payload=json.dumps(AZIMUT)), URL, config=config)

        assert result.ok
        assert len(result.listings) == 1
        listing = result.listings[0]
        assert listing.source == JSON_LD_SOURCE
        assert listing.confidence.overall >= 85
        assert listing.source_url == URL
        assert result.report.strategy == "structured-data"
        assert result.report.structured_data_found

    def test_structured_data_beats_adapters(self, config):
        html = JSON_LD_PAGE.format(payload=json.dumps(AZIMUT))
        adapter = _FixedAdapter([new_listing(0, title="From the adapter", price_raw=100000)])

        result = parse_listings(html, URL, config=config, adapters=[adapter])

        assert [r.title for r in result.listings] == ["2019 Azimut 60 Flybridge"]

    def test_card_grid_page(self, config, listing_page):
        result = parse_listings(listing_page(5), URL, config=config)

        assert len(result.listings) == 5
        for listing in result.listings:
            assert listing.confidence.overall >= 40
            blocking = [i for i in listing.issues if i.field in ("title", "price") and i.severity == Severity.ERROR]
            assert blocking == []
        assert result.report.strategy == "adapter"
        assert result.report.adapter == "card-grid"

    def test_malformed_detail_link_leaves_url_empty(self, config, listing_page):
        html = listing_page(5).replace('href="/boats/listing-0"', 'href="//[broken"')

        result = parse_listings(html, URL, config=config)

        assert result.error is None
        assert len(result.listings) == 5
        broken = next(r for r in result.listings if "Oceanis 40" in r.title)
        assert broken.detail_url is None
        assert all(r.detail_url for r in result.listings if r is not broken)

    def test_generic_fallback_after_empty_adapter(self, config, listing_page):
        result = parse_listings(listing_page(3), URL, config=config, adapters=[_EmptyAdapter()])

        assert len(result.listings) == 3
        assert result.report.strategy == "generic"
        assert result.report.empty_adapters == ["empty"]
        assert all(r.source == "generic" for r in result.listings)


class TestSiteValidation:
    """Test rejection before any strategy runs."""

    def test_non_yacht_page(self, config):
        html = "<html><body><h1>Best pizza in town</h1><p>Order online tonight</p></body></html>"
        result = parse_listings(html, "https://pizza.example.com/", config=config)

        assert result.listings == []
        assert "yacht or boat sales website" in result.error
        assert not result.report.valid
        assert result.report.listings_attempted == 0

    def test_unparseable_document_fails_closed(self, config):
        result = parse_listings(None, URL, config=config)

        assert result.listings == []
        assert result.error
        assert result.report.html_length == 0


class TestFilteringAndReport:
    """Test scoring gates, dedup accounting and report contents."""

    def test_record_without_title_or_price_never_output(self, yacht_page_shell):
        config = Config(_env_file=None, min_listing_confidence=0)
        records = [
            new_listing(0, images=["https://broker.com/photos/a.jpg"], year="2001", location="Miami, FL"),
            new_listing(1, title="Nordhavn 47"),
        ]
        result = parse_listings(yacht_page_shell(), URL, config=config, adapters=[_FixedAdapter(records)])

        assert [r.title for r in result.listings] == ["Nordhavn 47"]
        assert result.report.listings_rejected == 1
        assert result.report.rejection_reasons == ["No title or price"]

    def test_low_confidence_rejected(self, config, yacht_page_shell):
        records = [new_listing(0, title="Nordhavn 47")]
        result = parse_listings(yacht_page_shell(), URL, config=config, adapters=[_FixedAdapter(records)])

        assert result.listings == []
        assert result.report.rejection_reasons == ["Low confidence (35): Nordhavn 47"]

    def test_duplicates_counted_separately(self, config, yacht_page_shell):
        records = [
            new_listing(0, title="Nordhavn 47", price="$895,000", price_raw=895000, year="2008"),
            new_listing(1, title="Nordhavn 47", price="$895,000", price_raw=895000, year="2008"),
        ]
        result = parse_listings(yacht_page_shell(), URL, config=config, adapters=[_FixedAdapter(records)])

        assert len(result.listings) == 1
        assert result.report.listings_attempted == 2
        assert result.report.duplicates_dropped == 1
        assert result.report.listings_rejected == 0
        assert result.report.listings_accepted == 1

    def test_ids_unique_and_images_sanitized(self, config, yacht_page_shell):
        images = [
            "data:image/png;base64,iVBOR",
            "https://broker.com/site-logo.png",
            "https://broker.com/photos/grand-banks.jpg",
            "https://broker.com/photos/grand-banks.jpg",
        ]
        records = [
            new_listing(0, title="Grand Banks 46", price_raw=495000, images=images),
            new_listing(0, title="Grand Banks 52", price_raw=795000, images=images),
        ]
        result = parse_listings(yacht_page_shell(), URL, config=config, adapters=[_FixedAdapter(records)])

        assert len({r.id for r in result.listings}) == 2
        assert all(r.images == ["https://broker.com/photos/grand-banks.jpg"] for r in result.listings)

    def test_report_contents(self, config, listing_page):
        html = listing_page(2)
        result = parse_listings(html, URL, config=config)
        report = result.report

        assert report.url == URL
        assert report.html_length == len(html)
        assert report.sample_html == html[:5000]
        assert report.valid
        assert "boats" in report.keywords_found
        assert not report.structured_data_found
        assert report.listings_attempted == 2
        assert report.listings_accepted == 2
