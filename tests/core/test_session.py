# ABOUTME: Tests for the import session that crawls inventory and pagination pages
# ABOUTME: Uses an in-memory fetcher so crawl order, failures and caps can be asserted exactly

import pytest

from yacht_importer.config import Config
from yacht_importer.core.session import ImportSession
from yacht_importer.utils.retry import FetchError

START_URL = "https://broker.com/"
INVENTORY_URL = "https://broker.com/boats-for-sale"
PAGE_TWO_URL = "https://broker.com/boats-for-sale/page/2"
ABOUT_URL = "https://broker.com/about"

HOME_PAGE = """
<html>
  <body>
    <nav><a href="/boats-for-sale">Boats for Sale</a><a href="/about">About us</a></nav>
    <h1>Welcome to Harbour Brokerage</h1>
  </body>
</html>
"""

PAGINATION = """
<div class="pagination">
  <a class="current" href="/boats-for-sale">1</a>
  <a href="/boats-for-sale/page/2">2</a>
  <a href="/boats-for-sale/page/2">Next</a>
</div>
"""


class FakeFetcher:
    """Serves canned pages and fails like a 404 for anything else."""

    def __init__(self, pages: dict[str, str]):
        self.pages = pages
        self.requested: list[str] = []

    async def fetch(self, url: str) -> str:
        self.requested.append(url)
        if url not in self.pages:
            raise FetchError(f"HTTP 404 for {url}")
        return self.pages[url]


@pytest.fixture
def site(listing_page):
    return {
        START_URL: HOME_PAGE,
        INVENTORY_URL: listing_page(3, prefix="inv", extra=PAGINATION),
        PAGE_TWO_URL: listing_page(2, prefix="p2"),
    }


class TestImportSessionRun:
    """Test crawling a broker site from its home page."""

    @pytest.mark.asyncio
    async def test_follows_inventory_and_pagination(self, config, site):
        fetcher = FakeFetcher(site)
        result = await ImportSession(fetcher=fetcher, config=config).run(START_URL)

        assert result.total_found == 5
        assert len(result.listings) == 5
        assert result.pages_scanned == [START_URL, INVENTORY_URL, PAGE_TWO_URL]
        assert result.failed_pages == [ABOUT_URL]
        assert result.inventory_candidates == [INVENTORY_URL, ABOUT_URL]
        assert result.error is None
        assert fetcher.requested == [START_URL, INVENTORY_URL, PAGE_TWO_URL, ABOUT_URL]

    @pytest.mark.asyncio
    async def test_display_cap_keeps_total(self, site):
        config = Config(_env_file=None, max_listings_display=3)
        result = await ImportSession(fetcher=FakeFetcher(site), config=config).run(START_URL)

        assert len(result.listings) == 3
        assert result.total_found == 5

    @pytest.mark.asyncio
    async def test_start_page_with_listings_follows_its_pagination(self, config, listing_page):
        pages = {
            INVENTORY_URL: listing_page(3, prefix="inv", extra=PAGINATION),
            PAGE_TWO_URL: listing_page(2, prefix="p2"),
        }
        result = await ImportSession(fetcher=FakeFetcher(pages), config=config).run(INVENTORY_URL)

        assert result.total_found == 5
        assert result.pages_scanned == [INVENTORY_URL, PAGE_TWO_URL]

    @pytest.mark.asyncio
    async def test_duplicates_across_pages_dropped(self, config, listing_page):
        pages = {
            INVENTORY_URL: listing_page(3, prefix="inv", extra=PAGINATION),
            PAGE_TWO_URL: listing_page(3, prefix="inv"),
        }
        result = await ImportSession(fetcher=FakeFetcher(pages), config=config).run(INVENTORY_URL)

        assert result.total_found == 3

    @pytest.mark.asyncio
    async def test_start_page_fetch_failure_raises(self, config):
        session = ImportSession(fetcher=FakeFetcher({}), config=config)
        with pytest.raises(FetchError):
            await session.run(START_URL)

    @pytest.mark.asyncio
    async def test_no_listings_suggests_inventory_pages(self, config):
        result = await ImportSession(fetcher=FakeFetcher({START_URL: HOME_PAGE}), config=config).run(START_URL)

        assert result.listings == []
        assert result.total_found == 0
        assert "We found these potential inventory pages" in result.error
        assert INVENTORY_URL in result.error
        assert result.failed_pages == [INVENTORY_URL, ABOUT_URL]

    @pytest.mark.asyncio
    async def test_no_listings_reports_validation_error(self, config):
        pizza = "<html><body><h1>Best pizza in town</h1></body></html>"
        result = await ImportSession(fetcher=FakeFetcher({START_URL: pizza}), config=config).run(START_URL)

        assert "yacht or boat sales website" in result.error

    @pytest.mark.asyncio
    async def test_malformed_links_do_not_abort_crawl(self, config, site):
        broken = '<a href="//[broken">Yachts for sale</a>'
        site[START_URL] = HOME_PAGE.replace("<nav>", f"<nav>{broken}")
        site[INVENTORY_URL] = site[INVENTORY_URL].replace("</body>", f"{broken}</body>")

        result = await ImportSession(fetcher=FakeFetcher(site), config=config).run(START_URL)

        assert result.total_found == 5
        assert result.pages_scanned == [START_URL, INVENTORY_URL, PAGE_TWO_URL]
        assert result.inventory_candidates == [INVENTORY_URL, ABOUT_URL]

    @pytest.mark.asyncio
    async def test_last_report_is_last_parsed_page(self, config, site):
        session = ImportSession(fetcher=FakeFetcher(site), config=config)
        await session.run(START_URL)

        assert session.get_last_report().url == PAGE_TWO_URL


class TestImportSessionParse:
    """Test single-document parsing through a session."""

    def test_parse_keeps_report(self, config, listing_page):
        session = ImportSession(config=config)
        assert session.get_last_report() is None

        result = session.parse(listing_page(2), INVENTORY_URL)

        assert len(result.listings) == 2
        assert session.get_last_report() is result.report

    @pytest.mark.asyncio
    async def test_run_without_fetcher(self, config):
        with pytest.raises(FetchError, match="No page fetcher"):
            await ImportSession(config=config).run(START_URL)
