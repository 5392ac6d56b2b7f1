# ABOUTME: Link discovery for crawling a broker site beyond the page the user gave us
# ABOUTME: Scores same-host links that look like inventory pages and finds pagination links

import re
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag

from yacht_importer.extraction.fields import flat_text, resolve_url
from yacht_importer.utils.logging import get_logger

logger = get_logger(__name__)

INVENTORY_URL_PATTERNS = [
    re.compile(r"/boats?/?$", re.IGNORECASE),
    re.compile(r"/yachts?/?$", re.IGNORECASE),
    re.compile(r"/inventory/?$", re.IGNORECASE),
    re.compile(r"/listings?/?$", re.IGNORECASE),
    re.compile(r"/for-?sale/?$", re.IGNORECASE),
    re.compile(r"/brokerage/?$", re.IGNORECASE),
    re.compile(r"/used-?(boats?|yachts?)", re.IGNORECASE),
    re.compile(r"/new-?(boats?|yachts?)", re.IGNORECASE),
    re.compile(r"/motor-?yacht", re.IGNORECASE),
    re.compile(r"/sail(ing)?-?yacht", re.IGNORECASE),
    re.compile(r"/search", re.IGNORECASE),
    re.compile(r"/browse", re.IGNORECASE),
    re.compile(r"/fleet", re.IGNORECASE),
    re.compile(r"/vessels?", re.IGNORECASE),
    re.compile(r"/results/?$", re.IGNORECASE),
    re.compile(r"/boats[_-]for[_-]sale", re.IGNORECASE),
]

INVENTORY_LINK_KEYWORDS = [
    "boats for sale",
    "yachts for sale",
    "inventory",
    "our boats",
    "our yachts",
    "browse",
    "search boats",
    "search yachts",
    "view all",
    "see all",
    "all boats",
    "all yachts",
    "fleet",
    "brokerage",
    "for sale",
    "listings",
    "motor yachts",
    "sailing yachts",
    "search",
    "find a boat",
    "find a yacht",
    "results",
]

URL_PATTERN_SCORE = 10
LINK_TEXT_SCORE = 5
NAVIGATION_SCORE = 3
PROMINENT_SCORE = 2
MAX_INVENTORY_LINKS = 10

NAVIGATION_TAGS = {"nav", "header"}
NAVIGATION_CLASSES = {"nav", "menu", "navigation"}
PROMINENT_TAGS = {"h1", "h2", "h3"}
PROMINENT_CLASSES = {"hero", "banner", "cta"}

_NON_HTML_RE = re.compile(r"\.(jpg|png|gif|pdf|doc|css|js)$", re.IGNORECASE)

PAGINATION_CONTAINERS = (
    '.pagination, .paging, .page-numbers, .wp-pagenavi, nav[aria-label*="pagination"], [class*="pagination"]'
)
_PREVIOUS_RE = re.compile(r"prev|previous|«|‹", re.IGNORECASE)
_NEXT_PAGE_TEXT_RE = re.compile(r"^[2-9]$|^next$|^›$|^»$", re.IGNORECASE)
_PAGE_PATH_RE = re.compile(r"/page/\d+", re.IGNORECASE)
_PAGE_URL_RES = [re.compile(r"[?&/]page[=/]?\d+", re.IGNORECASE), re.compile(r"/\d+/?$")]


def _as_soup(document: BeautifulSoup | str) -> BeautifulSoup:
    return BeautifulSoup(document, "html.parser") if isinstance(document, str) else document


def _same_host(url: str, base_url: str) -> bool:
    return urlparse(url).hostname == urlparse(base_url).hostname


def _inside(link: Tag, tags: set[str], classes: set[str]) -> bool:
    """Whether the link, or any ancestor, is one of the tags or carries one of the classes."""
    for node in [link, *link.parents]:
        if node.name in tags or classes & set(node.get("class") or []):
            return True
    return False


def score_inventory_link(link: Tag, href: str) -> int:
    score = 0
    lowered = href.lower()
    if any(pattern.search(lowered) for pattern in INVENTORY_URL_PATTERNS):
        score += URL_PATTERN_SCORE

    text = flat_text(link).lower()
    if any(keyword in text for keyword in INVENTORY_LINK_KEYWORDS):
        score += LINK_TEXT_SCORE

    if _inside(link, NAVIGATION_TAGS, NAVIGATION_CLASSES):
        score += NAVIGATION_SCORE
    if _inside(link, PROMINENT_TAGS, PROMINENT_CLASSES):
        score += PROMINENT_SCORE
    return score


def discover_inventory_links(document: BeautifulSoup | str, base_url: str) -> list[str]:
    """Same-host links most likely to lead to the full boats-for-sale inventory, best first."""
    soup = _as_soup(document)
    scores: dict[str, int] = {}

    for link in soup.find_all("a", href=True):
        raw = link["href"].strip()
        if not raw or raw.startswith("#") or raw.lower().startswith("javascript:"):
            continue

        href = resolve_url(raw, base_url)
        if href is None or not _same_host(href, base_url):
            continue
        if _NON_HTML_RE.search(href):
            continue
        if href in (base_url, base_url + "/"):
            continue

        score = score_inventory_link(link, href)
        if score > 0:
            scores[href] = max(scores.get(href, 0), score)

    # sorted() is stable, so equal scores keep document order
    ranked = sorted(scores, key=lambda href: scores[href], reverse=True)[:MAX_INVENTORY_LINKS]
    logger.debug("Discovered inventory links", url=base_url, links=ranked)
    return ranked


def _pagination_from_containers(soup: BeautifulSoup, base_url: str) -> list[str]:
    urls: list[str] = []
    for container in soup.select(PAGINATION_CONTAINERS):
        for link in container.select("a[href]"):
            text = flat_text(link)
            href = link["href"]
            if _PREVIOUS_RE.search(text):
                continue
            if {"current", "active"} & set(link.get("class") or []):
                continue
            if not (_NEXT_PAGE_TEXT_RE.search(text) or _PAGE_PATH_RE.search(href)):
                continue

            full = resolve_url(href, base_url)
            if full is not None and _same_host(full, base_url) and full not in urls:
                urls.append(full)
    return urls


def _pagination_from_url_patterns(soup: BeautifulSoup, base_url: str) -> list[str]:
    urls: list[str] = []
    for link in soup.find_all("a", href=True):
        href = link["href"]
        if not any(pattern.search(href) for pattern in _PAGE_URL_RES):
            continue
        full = resolve_url(href, base_url)
        if full is not None and _same_host(full, base_url) and full != base_url and full not in urls:
            urls.append(full)
    return urls


def discover_pagination_links(document: BeautifulSoup | str, base_url: str) -> list[str]:
    """Further result pages of a listings page, in document order."""
    soup = _as_soup(document)
    urls = _pagination_from_containers(soup, base_url) or _pagination_from_url_patterns(soup, base_url)
    logger.debug("Pagination links found", url=base_url, links=urls)
    return urls
