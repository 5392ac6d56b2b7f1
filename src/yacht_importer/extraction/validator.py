# ABOUTME: Cheap keyword pre-filter deciding whether a page is a yacht listings page
# ABOUTME: Counts yacht vocabulary and looks for inventory markers before any parsing work

from yacht_importer.config import Config, get_config
from yacht_importer.core.models import SiteValidation
from yacht_importer.utils.logging import get_logger

logger = get_logger(__name__)

YACHT_KEYWORDS = (
    "yacht",
    "yachts",
    "boat",
    "boats",
    "vessel",
    "vessels",
    "marine",
    "sailing",
    "sailboat",
    "motor yacht",
    "catamaran",
    "trimaran",
    "brokerage",
    "broker",
    "for sale",
    "buy",
    "sell",
    "length overall",
    "loa",
    "beam",
    "draft",
    "hull",
    "engine",
    "knots",
    "nautical",
    "marina",
    "cruiser",
    "sportfish",
    "trawler",
    "express",
    "flybridge",
    "cockpit",
    "galley",
    "cabin",
    "berth",
    "stateroom",
    "helm",
)

INVENTORY_MARKERS = ("/boats/", "/yachts/", "/inventory/", "/listings/", "for sale", "brokerage")


def count_yacht_keywords(html: str) -> list[str]:
    """Distinct vocabulary terms present in the page, in vocabulary order."""
    lowered = html.lower()
    return [keyword for keyword in YACHT_KEYWORDS if keyword in lowered]


def validate_site(html: str, config: Config | None = None) -> SiteValidation:
    """Reject pages that are not yacht listing pages before running the strategies."""
    config = config or get_config()
    found = count_yacht_keywords(html)

    if config.debug:
        logger.debug("Keywords found", count=len(found), keywords=found[:10])

    if len(found) < config.min_yacht_keywords:
        return SiteValidation(
            valid=False,
            reason=(
                "This doesn't appear to be a yacht or boat sales website. "
                f"Found only {len(found)} yacht-related terms (minimum: {config.min_yacht_keywords})."
            ),
            keywords_found=found,
        )

    lowered = html.lower()
    if not any(marker in lowered for marker in INVENTORY_MARKERS):
        return SiteValidation(
            valid=False,
            reason=(
                "This doesn't appear to be a yacht listings page. "
                "Please navigate to the inventory or boats for sale page."
            ),
            keywords_found=found,
        )

    return SiteValidation(valid=True, keywords_found=found)
