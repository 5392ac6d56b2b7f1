# ABOUTME: Site adapter catalog; importing this package registers the shipped adapters
# ABOUTME: Registration order is dispatch order: wp-listing-theme, nyb-style, yachtworld-style, card-grid, detail-page

from . import wp_listing, nyb, yachtworld, card_grid, detail_page  # noqa: F401  (registration side effect)
from .base import CardAdapter
from .card_grid import CardGridAdapter
from .detail_page import DetailPageAdapter
from .nyb import NetworkYachtBrokersAdapter
from .registry import AdapterDispatch, AdapterRegistry, default_registry, dispatch_adapters
from .wp_listing import WordPressListingAdapter
from .yachtworld import YachtWorldAdapter

__all__ = [
    "AdapterDispatch",
    "AdapterRegistry",
    "CardAdapter",
    "CardGridAdapter",
    "DetailPageAdapter",
    "NetworkYachtBrokersAdapter",
    "WordPressListingAdapter",
    "YachtWorldAdapter",
    "default_registry",
    "dispatch_adapters",
]
