# ABOUTME: Ordered registry of site adapters and the first-productive-match dispatcher
# ABOUTME: New adapters register themselves; dispatch order is registration order

from bs4 import BeautifulSoup
from pydantic import BaseModel, Field

from yacht_importer.config import Config
from yacht_importer.core.models import ListingRecord
from yacht_importer.utils.logging import get_logger

from ..base import SiteAdapter

logger = get_logger(__name__)


class AdapterRegistry:
    """Ordered catalog of adapter classes.

    Usage:
        registry = AdapterRegistry()

        @registry.register
        class MyBrokerAdapter(CardAdapter):
            ...

        adapters = registry.create(config)
    """

    def __init__(self):
        self._adapters: list[type] = []

    def register(self, adapter_cls: type) -> type:
        """Append an adapter class; usable as a class decorator."""
        if adapter_cls not in self._adapters:
            self._adapters.append(adapter_cls)
        return adapter_cls

    @property
    def names(self) -> list[str]:
        return [adapter_cls.name for adapter_cls in self._adapters]

    def create(self, config: Config) -> list[SiteAdapter]:
        """Instantiate every registered adapter in registration order."""
        return [adapter_cls(config) for adapter_cls in self._adapters]

    def __len__(self) -> int:
        return len(self._adapters)


default_registry = AdapterRegistry()


class AdapterDispatch(BaseModel):
    """Outcome of running the adapter catalog against one page."""

    adapter: str | None = None
    listings: list[ListingRecord] = Field(default_factory=list)
    empty_adapters: list[str] = Field(default_factory=list)


def dispatch_adapters(adapters: list[SiteAdapter], soup: BeautifulSoup, url: str) -> AdapterDispatch:
    """Use the first adapter that both recognises the page and yields at least one listing.

    An adapter that recognises the page but yields nothing is reported and skipped, so
    the next adapter (and ultimately the generic strategy) still gets a chance.
    """
    outcome = AdapterDispatch()
    for adapter in adapters:
        if not adapter.detect(soup, url):
            continue

        listings = adapter.parse(soup, url)
        if listings:
            logger.debug("Using adapter", adapter=adapter.name, url=url, listings=len(listings))
            outcome.adapter = adapter.name
            outcome.listings = listings
            return outcome

        logger.warning("Adapter matched page but produced no listings", adapter=adapter.name, url=url)
        outcome.empty_adapters.append(adapter.name)

    return outcome
