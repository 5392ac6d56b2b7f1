# ABOUTME: Page fetching layer
# ABOUTME: PageFetcher protocol and the httpx-based default fetcher

from .client import HttpPageFetcher, PageFetcher

__all__ = ["HttpPageFetcher", "PageFetcher"]
