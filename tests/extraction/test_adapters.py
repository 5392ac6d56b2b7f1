# ABOUTME: Tests for the site adapter catalog, the shipped adapters and dispatch
# ABOUTME: Each adapter is exercised against markup in the layout it targets

from bs4 import BeautifulSoup

from yacht_importer.core.models import LengthUnit, ListingRecord, YachtType, new_listing
from yacht_importer.extraction.adapters import (
    AdapterRegistry,
    CardGridAdapter,
    DetailPageAdapter,
    NetworkYachtBrokersAdapter,
    WordPressListingAdapter,
    YachtWorldAdapter,
    default_registry,
    dispatch_adapters,
)


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


class _StubAdapter:
    """Adapter double with canned detection and output."""

    def __init__(self, name: str, detects: bool, listings: list[ListingRecord]):
        self.name = name
        self.detects = detects
        self.listings = listings
        self.parsed = False

    def detect(self, soup, url):
        return self.detects

    def parse(self, soup, url):
        self.parsed = True
        return self.listings


class TestAdapterRegistry:
    """Test adapter registration and instantiation."""

    def test_default_order(self):
        assert default_registry.names == [
            "wp-listing-theme",
            "nyb-style",
            "yachtworld-style",
            "card-grid",
            "detail-page",
        ]

    def test_create_instantiates_in_order(self, config):
        adapters = default_registry.create(config)
        assert [type(a) for a in adapters] == [
            WordPressListingAdapter,
            NetworkYachtBrokersAdapter,
            YachtWorldAdapter,
            CardGridAdapter,
            DetailPageAdapter,
        ]
        assert all(a.config is config for a in adapters)

    def test_register_decorator(self, config):
        registry = AdapterRegistry()

        @registry.register
        class MarinaAdapter(CardGridAdapter):
            name = "marina"

        registry.register(MarinaAdapter)

        assert len(registry) == 1
        assert registry.names == ["marina"]
        assert isinstance(registry.create(config)[0], MarinaAdapter)


class TestDispatch:
    """Test first-productive-match dispatch."""

    def test_first_productive_adapter_wins(self):
        first = _StubAdapter("first", True, [new_listing(0, title="Riva 56")])
        second = _StubAdapter("second", True, [new_listing(0, title="Riva 68")])

        outcome = dispatch_adapters([first, second], _soup("<p></p>"), "https://broker.com")

        assert outcome.adapter == "first"
        assert [r.title for r in outcome.listings] == ["Riva 56"]
        assert not second.parsed

    def test_empty_adapter_reported_and_skipped(self):
        empty = _StubAdapter("empty", True, [])
        blind = _StubAdapter("blind", False, [new_listing(0, title="Never")])
        productive = _StubAdapter("productive", True, [new_listing(0, title="Azimut 55")])

        outcome = dispatch_adapters([empty, blind, productive], _soup("<p></p>"), "https://broker.com")

        assert outcome.adapter == "productive"
        assert outcome.empty_adapters == ["empty"]
        assert not blind.parsed

    def test_nothing_matches(self):
        outcome = dispatch_adapters([_StubAdapter("empty", True, [])], _soup("<p></p>"), "https://broker.com")
        assert outcome.adapter is None
        assert outcome.listings == []
        assert outcome.empty_adapters == ["empty"]

    def test_real_catalog_falls_through_empty_theme_adapter(self, config, listing_page):
        html = listing_page(extra='<div class="listing_wrapper"><p>New listings coming soon</p></div>')
        outcome = dispatch_adapters(default_registry.create(config), _soup(html), "https://broker.com/boats-for-sale")

        assert outcome.empty_adapters == ["wp-listing-theme"]
        assert outcome.adapter == "card-grid"
        assert len(outcome.listings) == 5


WP_PAGE = """
<div class="listing_wrapper">
  <div class="listing-unit-img-wrapper"><img src="/wp-content/uploads/2023/05/riva-76.jpg"></div>
  <h4><a href="/boats/riva-76-perseo">2016 Riva 76 Perseo</a></h4>
  <div class="listing_unit_price_wrapper"><span>$3,450,000</span></div>
  <div class="property_location">Fort Lauderdale, FL</div>
  <p>76 ft motor yacht</p>
</div>
<div class="listing_wrapper">
  <h4><a href="/boats/hatteras-54">1998 Hatteras 54 Convertible</a></h4>
  <div class="listing_unit_price_wrapper"><span>SOLD</span></div>
</div>
<div class="listing_wrapper"><p>Featured broker of the month</p></div>
"""


class TestWordPressListingAdapter:
    """Test the WordPress listing theme adapter."""

    def test_detect(self, config):
        adapter = WordPressListingAdapter(config)
        assert adapter.detect(_soup(WP_PAGE), "https://broker.com/inventory/")
        assert not adapter.detect(_soup("<div class='grid'></div>"), "https://broker.com/inventory/")

    def test_parse(self, config):
        records = WordPressListingAdapter(config).parse(_soup(WP_PAGE), "https://broker.com/inventory/")

        assert len(records) == 2
        riva, hatteras = records
        assert riva.title == "2016 Riva 76 Perseo"
        assert riva.detail_url == "https://broker.com/boats/riva-76-perseo"
        assert riva.price == "$3,450,000"
        assert riva.price_raw == 3450000
        assert riva.images == ["https://broker.com/wp-content/uploads/2023/05/riva-76.jpg"]
        assert riva.location == "Fort Lauderdale, FL"
        assert riva.year == "2016"
        assert riva.length == "76"
        assert riva.type == YachtType.MOTOR
        assert riva.source == "wp-listing-theme"
        assert riva.confidence.title == 90
        assert riva.confidence.price == 90
        assert riva.confidence.images == 85
        assert riva.confidence.specs == 15 + 20 + 20 + 15

        assert hatteras.price == "Sold"
        assert hatteras.price_raw == 0
        assert hatteras.images == []


NYB_PAGE = """
<div class="outline">
  <div class="ltboats-img" style="background-image: url('/images/boats/prestige-420.jpg')"></div>
  <a href="/boats/prestige-420"><div class="ltboats-details-title">Prestige 420 Flybridge</div></a>
  <div class="ltboats-details-year">2017</div>
  <div class="ltboats-details-price">POA</div>
  <div class="ltboats-details-location">Southampton, UK</div>
</div>
<div class="outline">
  <img src="/images/boats/fairline-targa.jpg">
  <a href="/boats/fairline-targa-43"><div class="ltboats-details-title">Fairline Targa 43</div></a>
  <div class="ltboats-details-price">£239,950</div>
</div>
"""


class TestNetworkYachtBrokersAdapter:
    """Test the Network Yacht Brokers layout adapter."""

    def test_detect_by_url(self, config):
        adapter = NetworkYachtBrokersAdapter(config)
        assert adapter.detect(_soup("<p></p>"), "https://www.networkyachtbrokers.com/boats/")

    def test_parse(self, config):
        records = NetworkYachtBrokersAdapter(config).parse(_soup(NYB_PAGE), "https://broker.co.uk/used-boats/")

        assert len(records) == 2
        prestige, fairline = records

        assert prestige.title == "Prestige 420 Flybridge"
        assert prestige.detail_url == "https://broker.co.uk/boats/prestige-420"
        assert prestige.year == "2017"
        assert prestige.price == "POA"
        assert prestige.price_raw == 0
        assert prestige.location == "Southampton, UK"
        assert prestige.images == ["https://broker.co.uk/images/boats/prestige-420.jpg"]
        assert prestige.confidence.images == 85
        assert prestige.type == YachtType.MOTOR
        assert prestige.confidence.specs == 20 + 20 + 15

        assert fairline.price_raw == 239950
        assert fairline.currency == "GBP"
        assert fairline.images == ["https://broker.co.uk/images/boats/fairline-targa.jpg"]
        assert fairline.confidence.images == 80


YACHTWORLD_PAGE = """
<div class="listing-card">
  <a href="/yacht/2012-ferretti-800-123/"><img src="https://images.yachtworld.com/boat-123.jpg"></a>
  <h2>2012 Ferretti 800</h2>
  <div class="price">US$2,995,000</div>
  <p>24.5 m</p>
</div>
<div class="listing-card"><div class="price">$450,000</div></div>
<div class="listing-card"><p>Sponsored</p></div>
"""


class TestYachtWorldAdapter:
    """Test the YachtWorld layout adapter."""

    def test_detect(self, config):
        adapter = YachtWorldAdapter(config)
        assert adapter.detect(_soup("<p></p>"), "https://www.yachtworld.com/boats-for-sale/")
        assert adapter.detect(_soup(YACHTWORLD_PAGE), "https://broker.com/")
        assert not adapter.detect(_soup("<p></p>"), "https://broker.com/")

    def test_parse_keeps_title_or_price(self, config):
        url = "https://www.yachtworld.com/boats-for-sale/"
        records = YachtWorldAdapter(config).parse(_soup(YACHTWORLD_PAGE), url)

        assert len(records) == 2
        ferretti, untitled = records
        assert ferretti.title == "2012 Ferretti 800"
        assert ferretti.detail_url == "https://www.yachtworld.com/yacht/2012-ferretti-800-123/"
        assert ferretti.price_raw == 2995000
        assert ferretti.confidence.price == 85
        assert ferretti.images == ["https://images.yachtworld.com/boat-123.jpg"]
        assert ferretti.length == "24.5"
        assert ferretti.length_unit == LengthUnit.METERS
        assert ferretti.year == "2012"

        assert untitled.title == ""
        assert untitled.price_raw == 450000


class TestCardGridAdapter:
    """Test the grid/card layout adapter."""

    def test_parse_grid(self, config, listing_page):
        adapter = CardGridAdapter(config)
        soup = _soup(listing_page(3))

        assert adapter.detect(soup, "https://broker.com/boats-for-sale")
        records = adapter.parse(soup, "https://broker.com/boats-for-sale")

        assert [r.title for r in records] == [
            "2010 Beneteau Oceanis 40",
            "2011 Beneteau Oceanis 41",
            "2012 Beneteau Oceanis 42",
        ]
        assert all(r.source == "card-grid" for r in records)
        assert records[1].detail_url == "https://broker.com/boats/listing-1"
        assert records[1].price_raw == 315000

    def test_container_with_single_child_ignored(self, config, make_card):
        html = f'<div class="results">{make_card(0)}</div>'
        assert CardGridAdapter(config).parse(_soup(html), "https://broker.com/") == []


DETAIL_PAGE = """
<html><body>
<div class="yacht-detail">
  <h1>2014 Princess 72 Motor Yacht</h1>
  <div class="price">€2,350,000</div>
  <div class="gallery">
    <img src="/g/1.jpg"><img src="/g/2.jpg"><img src="/g/1.jpg"><img src="/g/logo.png">
  </div>
  <div class="specifications"><p>LOA: 72 ft</p><p>Location: Palma, Spain</p></div>
  <div class="description"><p>Fully serviced.</p><p>Two owners.</p></div>
</div>
</body></html>
"""


class TestDetailPageAdapter:
    """Test the single-yacht detail page adapter."""

    def test_detect_by_marker(self, config):
        assert DetailPageAdapter(config).detect(_soup(DETAIL_PAGE), "https://broker.com/boats/princess-72")

    def test_detect_by_specs_and_gallery(self, config):
        adapter = DetailPageAdapter(config)
        gallery = '<div class="carousel">' + '<img src="/g/a.jpg">' * 3 + "</div>"
        assert adapter.detect(_soup(f'<div class="specs"></div>{gallery}'), "https://broker.com/x")

        small = '<div class="carousel">' + '<img src="/g/a.jpg">' * 2 + "</div>"
        assert not adapter.detect(_soup(f'<div class="specs"></div>{small}'), "https://broker.com/x")

    def test_parse(self, config):
        records = DetailPageAdapter(config).parse(_soup(DETAIL_PAGE), "https://broker.com/boats/princess-72")

        assert len(records) == 1
        record = records[0]
        assert record.title == "2014 Princess 72 Motor Yacht"
        assert record.price == "€2,350,000"
        assert record.currency == "EUR"
        assert record.confidence.price == 85
        assert record.images == ["https://broker.com/g/1.jpg", "https://broker.com/g/2.jpg"]
        assert record.confidence.images == 80
        assert record.year == "2014"
        assert record.length == "72"
        assert record.type == YachtType.MOTOR
        assert record.location == "Palma, Spain"
        assert record.description == "Fully serviced. Two owners."
        assert record.source == "detail-page"

    def test_nothing_to_read(self, config):
        assert DetailPageAdapter(config).parse(_soup("<div class='yacht-detail'></div>"), "https://broker.com/") == []
