# ABOUTME: Field-level extractors shared by every extraction strategy
# ABOUTME: Price, spec (year/length/type/location), image and text helpers

from .images import (
    background_image_url,
    image_source,
    is_allowed_image_url,
    is_valid_image,
    resolve_image,
    resolve_url,
)
from .price import PriceParse, detect_price_sentinel, extract_price, format_price, has_currency_amount
from .specs import extract_specs
from .text import clean_text, flat_text, node_text

__all__ = [
    "PriceParse",
    "background_image_url",
    "clean_text",
    "detect_price_sentinel",
    "extract_price",
    "extract_specs",
    "flat_text",
    "format_price",
    "has_currency_amount",
    "image_source",
    "is_allowed_image_url",
    "is_valid_image",
    "node_text",
    "resolve_image",
    "resolve_url",
]
