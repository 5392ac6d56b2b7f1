# ABOUTME: Protocol interface shared by every listing extraction strategy
# ABOUTME: Defines the site adapter contract and the extraction error hierarchy

from typing import Protocol

from bs4 import BeautifulSoup

from yacht_importer.core.models import ListingRecord


class SiteAdapter(Protocol):
    """Protocol for site-specific listing extractors. An adapter recognises a family of
    sites by markup or address and knows where that family keeps its listing fields."""

    name: str

    def detect(self, soup: BeautifulSoup, url: str) -> bool:
        """Decide whether this adapter understands the page.

        Args:
            soup: Parsed document
            url: Absolute address the document was fetched from

        Returns:
            True when the adapter should be asked to parse the page
        """
        ...

    def parse(self, soup: BeautifulSoup, url: str) -> list[ListingRecord]:
        """Extract candidate listings from the page.

        Args:
            soup: Parsed document
            url: Absolute address used to resolve relative links and images

        Returns:
            Candidate records, possibly empty
        """
        ...


class ExtractionError(Exception):
    """Raised when listing extraction fails."""

    pass


class DocumentParseError(ExtractionError):
    """Raised when the HTML document cannot be parsed at all."""

    pass
