# ABOUTME: Caller-owned import session: parse pages, crawl inventory/pagination, keep the last debug report
# ABOUTME: Pools listings from every productive page and deduplicates them once at the end

from pydantic import BaseModel, Field

from yacht_importer.config import Config, get_config
from yacht_importer.core.models import DebugReport, ListingRecord, ParseResult
from yacht_importer.core.pipeline import parse_listings
from yacht_importer.core.scoring import deduplicate_listings
from yacht_importer.discovery import discover_inventory_links, discover_pagination_links
from yacht_importer.extraction.adapters import default_registry
from yacht_importer.extraction.base import SiteAdapter
from yacht_importer.fetch import PageFetcher
from yacht_importer.utils.logging import get_logger, log_extraction_step, with_pipeline_context
from yacht_importer.utils.retry import FetchError

MAX_SUGGESTED_PAGES = 5


class ImportResult(BaseModel):
    """Outcome of crawling one broker site."""

    listings: list[ListingRecord] = Field(default_factory=list, description="Deduplicated listings, display-capped")
    total_found: int = 0
    pages_scanned: list[str] = Field(default_factory=list)
    failed_pages: list[str] = Field(default_factory=list)
    inventory_candidates: list[str] = Field(default_factory=list)
    error: str | None = None


class ImportSession:
    """Runs the parse pipeline for one caller and remembers the most recent debug report.

    The session holds no listing state between runs; ``last_report`` is replaced on
    every parse so a caller can pull diagnostics for the page it just processed.
    """

    def __init__(
        self,
        fetcher: PageFetcher | None = None,
        config: Config | None = None,
        adapters: list[SiteAdapter] | None = None,
    ):
        self.fetcher = fetcher
        self.config = config or get_config()
        self.adapters = adapters if adapters is not None else default_registry.create(self.config)
        self.last_report: DebugReport | None = None
        self.logger = get_logger(__name__)

    def parse(self, html: str, url: str) -> ParseResult:
        """Parse one document and keep its debug report."""
        result = parse_listings(html, url, config=self.config, adapters=self.adapters)
        self.last_report = result.report
        return result

    def get_last_report(self) -> DebugReport | None:
        return self.last_report

    @log_extraction_step("fetch_page")
    async def _fetch_page(self, url: str) -> str:
        if self.fetcher is None:
            raise FetchError("No page fetcher configured for this session")
        return await self.fetcher.fetch(url)

    async def _fetch_and_parse(self, url: str, failed_pages: list[str]) -> tuple[str, ParseResult] | None:
        """Fetch and parse a secondary page; failures are logged and recorded, never raised."""
        try:
            html = await self._fetch_page(url)
        except FetchError as e:
            self.logger.warning("Skipping page that could not be fetched", url=url, error=str(e))
            failed_pages.append(url)
            return None
        return html, self.parse(html, url)

    async def _follow_pagination(
        self,
        html: str,
        url: str,
        pool: list[ListingRecord],
        pages_scanned: list[str],
        failed_pages: list[str],
    ) -> None:
        for page_url in discover_pagination_links(html, url)[: self.config.max_pagination_pages]:
            if page_url in pages_scanned:
                continue
            fetched = await self._fetch_and_parse(page_url, failed_pages)
            if fetched and fetched[1].listings:
                pool.extend(fetched[1].listings)
                pages_scanned.append(page_url)
                self.logger.info("Found listings on page", url=page_url, count=len(fetched[1].listings))

    async def run(self, url: str) -> ImportResult:
        """Import listings starting from a broker URL.

        The start page is always parsed. Discovered inventory pages are followed even
        when the start page produced listings, since home pages often show only a few
        featured boats. Pagination is followed on every productive page.

        Raises:
            FetchError: If the start page itself cannot be fetched
        """
        with with_pipeline_context("site_import", url=url) as log:
            html = await self._fetch_page(url)
            result = self.parse(html, url)

            pool = list(result.listings)
            pages_scanned = [url]
            failed_pages: list[str] = []

            inventory_links = discover_inventory_links(html, url)
            log.debug("Discovered inventory links", links=inventory_links)

            for inventory_url in inventory_links[: self.config.max_inventory_pages]:
                if inventory_url in pages_scanned:
                    continue
                fetched = await self._fetch_and_parse(inventory_url, failed_pages)
                if not fetched or not fetched[1].listings:
                    continue

                inventory_html, inventory_result = fetched
                pool.extend(inventory_result.listings)
                pages_scanned.append(inventory_url)
                log.info("Found listings on inventory page", page=inventory_url, count=len(inventory_result.listings))
                await self._follow_pagination(inventory_html, inventory_url, pool, pages_scanned, failed_pages)

            if result.listings:
                await self._follow_pagination(html, url, pool, pages_scanned, failed_pages)

            listings = deduplicate_listings(pool)
            import_result = ImportResult(
                listings=listings[: self.config.max_listings_display],
                total_found=len(listings),
                pages_scanned=pages_scanned,
                failed_pages=failed_pages,
                inventory_candidates=inventory_links[:MAX_SUGGESTED_PAGES],
            )

            if not listings:
                import_result.error = self._no_listings_message(result, import_result.inventory_candidates)
                log.warning("No listings found", error=import_result.error)
            else:
                log.info(
                    "Import complete",
                    total_found=import_result.total_found,
                    shown=len(import_result.listings),
                    pages=len(pages_scanned),
                    failed=len(failed_pages),
                )
            return import_result

    @staticmethod
    def _no_listings_message(start_result: ParseResult, candidates: list[str]) -> str:
        if candidates:
            pages = "\n".join(candidates)
            return (
                "No yacht listings could be extracted.\n\n"
                f"We found these potential inventory pages:\n{pages}\n\n"
                "Try entering one of these URLs directly."
            )
        if start_result.error:
            return start_result.error
        return (
            "No yacht listings found on this page. Try navigating to the \"Boats for Sale\" or "
            "\"Inventory\" page; some websites block automated access."
        )
