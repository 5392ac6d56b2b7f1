# ABOUTME: Image URL resolution and filtering for listing photos
# ABOUTME: Rejects data URLs, logos/tracking pixels and undersized images; reads lazy-load attributes

import re
from urllib.parse import urljoin, urlparse

from bs4 import Tag

from yacht_importer.config import Config

# Substrings that mark decorative or tracking images rather than listing photos
IMAGE_DENYLIST = (
    "logo",
    "icon",
    "placeholder",
    "loading",
    "spinner",
    "avatar",
    "banner",
    "header",
    "footer",
    "social",
    "facebook",
    "twitter",
    "linkedin",
    "instagram",
    "pinterest",
    "youtube",
    "button",
    "1x1",
    "pixel",
    "tracking",
    "beacon",
    "spacer",
)

# Lazy-loading themes park the real URL in one of these before JavaScript swaps it in
IMAGE_SOURCE_ATTRIBUTES = ("src", "data-src", "data-lazy-src", "data-original")

# Assumed size when the markup carries no width/height attributes
DEFAULT_IMAGE_WIDTH = 300
DEFAULT_IMAGE_HEIGHT = 200

_BACKGROUND_URL_RE = re.compile(r"url\(['\"]?([^'\")\s]+)['\"]?\)")


def resolve_url(url: str | None, base_url: str) -> str | None:
    """Resolve a possibly relative URL against the page address.

    Returns None for empty values, data: URLs, malformed URLs and anything that does not resolve to
    an http(s) address.
    """
    if not url:
        return None
    url = url.strip()
    if not url or url.lower().startswith("data:"):
        return None
    try:
        resolved = url if url.startswith(("http://", "https://")) else urljoin(base_url, url)
        if urlparse(resolved).scheme not in ("http", "https"):
            return None
    except ValueError:
        # Malformed authority, e.g. an unclosed IPv6 bracket in "//[broken"
        return None
    return resolved


def is_allowed_image_url(url: str | None) -> bool:
    if not url or url.lower().startswith("data:"):
        return False
    lowered = url.lower()
    return not any(pattern in lowered for pattern in IMAGE_DENYLIST)


def image_source(img: Tag) -> str | None:
    """First usable source attribute of an <img>, skipping inline data: placeholders."""
    for attribute in IMAGE_SOURCE_ATTRIBUTES:
        value = img.get(attribute)
        if isinstance(value, str) and value.strip() and not value.strip().lower().startswith("data:"):
            return value.strip()
    return None


def _dimension(img: Tag, attribute: str, default: int) -> int:
    value = img.get(attribute)
    if not isinstance(value, str):
        return default
    match = re.match(r"\s*(\d+)", value)
    if not match or int(match.group(1)) == 0:
        return default
    return int(match.group(1))


def is_valid_image(img: Tag | None, config: Config) -> bool:
    """Check an <img> against the denylist and the minimum display size."""
    if img is None:
        return False

    src = image_source(img)
    if src and not is_allowed_image_url(src):
        return False

    width = _dimension(img, "width", DEFAULT_IMAGE_WIDTH)
    height = _dimension(img, "height", DEFAULT_IMAGE_HEIGHT)
    return width >= config.min_image_width and height >= config.min_image_height


def background_image_url(node: Tag | None) -> str | None:
    """URL inside an inline ``background``/``background-image`` style, if any."""
    if node is None:
        return None
    style = node.get("style")
    if not isinstance(style, str):
        return None
    match = _BACKGROUND_URL_RE.search(style)
    return match.group(1) if match else None


def resolve_image(img: Tag, base_url: str) -> str | None:
    return resolve_url(image_source(img), base_url)
