# ABOUTME: Shared fixtures for the yacht importer test suite
# ABOUTME: Isolated config plus builders for realistic broker page HTML

import pytest

from yacht_importer.config import Config

BROKER_URL = "https://broker.com/boats-for-sale"


@pytest.fixture
def config() -> Config:
    """Default configuration that ignores any local .env file."""
    return Config(_env_file=None)


@pytest.fixture
def broker_url() -> str:
    return BROKER_URL


@pytest.fixture
def make_card():
    """Build one generic listing card; index varies year, model, price and detail link."""

    def _make_card(i: int, prefix: str = "listing") -> str:
        return f"""
        <div class="card">
          <img src="/photos/{prefix}-{i}.jpg" alt="Beneteau">
          <h3><a href="/boats/{prefix}-{i}">201{i} Beneteau Oceanis 4{i}</a></h3>
          <p class="price">$3{i}5,000</p>
          <p>4{i} ft sailboat</p>
        </div>
        """

    return _make_card


@pytest.fixture
def listing_page(make_card):
    """Build a boats-for-sale page with a results grid of ``count`` cards."""

    def _listing_page(count: int = 5, prefix: str = "listing", extra: str = "") -> str:
        cards = "".join(make_card(i, prefix) for i in range(count))
        return f"""
        <html>
          <head><title>Boats for sale | Harbour Brokerage</title></head>
          <body>
            <h1>Boats for sale</h1>
            <div class="results">{cards}</div>
            {extra}
          </body>
        </html>
        """

    return _listing_page


@pytest.fixture
def yacht_page_shell():
    """Wrap body markup in a page that passes the yacht-site pre-filter."""

    def _shell(body: str = "") -> str:
        return f"""
        <html>
          <body>
            <h1>Yachts for sale</h1>
            <p>Motor yacht and sailing boat brokerage</p>
            {body}
          </body>
        </html>
        """

    return _shell
