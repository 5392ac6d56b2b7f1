# ABOUTME: Business logic and orchestration layer
# ABOUTME: Listing models, scoring rules, the parse pipeline and the crawl session

"""
Core Layer: Business logic and workflow orchestration

This layer handles:
- Domain models for listings and diagnostics
- Confidence scoring, validation and deduplication
- The parse pipeline that runs the extraction strategies in priority order
- Crawl sessions that follow inventory and pagination links

Data Flow: fetched HTML → extraction/ strategies → scored, filtered listings
"""

from .models import (
    Confidence,
    DebugReport,
    Issue,
    LengthUnit,
    ListingRecord,
    ParseResult,
    Severity,
    SiteValidation,
    YachtType,
)

# Import pipeline and session on-demand to avoid circular imports
# Use: from yacht_importer.core.pipeline import parse_listings

__all__ = [
    "Confidence",
    "DebugReport",
    "Issue",
    "LengthUnit",
    "ListingRecord",
    "ParseResult",
    "Severity",
    "SiteValidation",
    "YachtType",
]
