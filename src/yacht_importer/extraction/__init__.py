# ABOUTME: Listing extraction strategies and field extractors
# ABOUTME: Structured data, site adapters and the generic heuristic, plus the site pre-filter

"""
Extraction Layer: Get candidate listings out of raw HTML

This layer handles:
- Keyword pre-filtering of pages that are not yacht listing pages
- schema.org JSON-LD and microdata reading
- Site adapters for known broker layouts (pluggable registry)
- Generic card heuristics for everything else
- Shared price, spec, image and text field extractors

Data Flow: HTML document → candidate ListingRecords → core/ scoring and filtering
"""

# Strategies are imported from their modules directly; importing the adapters
# package registers the shipped adapters with the default registry
