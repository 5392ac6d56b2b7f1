# ABOUTME: Link discovery for multi-page crawls
# ABOUTME: Inventory-page and pagination link finders

from .links import discover_inventory_links, discover_pagination_links

__all__ = ["discover_inventory_links", "discover_pagination_links"]
