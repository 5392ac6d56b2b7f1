# ABOUTME: Anchor helpers for listing cards
# ABOUTME: Finds the enclosing anchor of a node and reads its href

from bs4 import Tag


def closest_link(node: Tag) -> Tag | None:
    """The node itself when it is an anchor, otherwise its nearest enclosing anchor."""
    if node.name == "a":
        return node
    return node.find_parent("a")


def link_href(node: Tag | None) -> str | None:
    if node is None:
        return None
    href = node.get("href")
    return href if isinstance(href, str) else None
