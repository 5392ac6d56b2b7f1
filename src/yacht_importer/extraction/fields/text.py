# ABOUTME: Whitespace and visible-text helpers shared by every extractor
# ABOUTME: Collapses runs of whitespace in element text

import re

from bs4 import Tag


def clean_text(s: str | None) -> str:
    """Clean and normalize text by collapsing whitespace."""
    if not s:
        return ""
    return re.sub(r"\s+", " ", s).strip()


def node_text(node: Tag | None) -> str:
    """Visible text of a node, one cleaned line per text fragment.

    Line breaks are kept between fragments so that patterns anchored on a line end
    (e.g. "Location: Miami, FL") stop at element boundaries.
    """
    if node is None:
        return ""
    lines = (clean_text(fragment) for fragment in node.get_text("\n").split("\n"))
    return "\n".join(line for line in lines if line)


def flat_text(node: Tag | None) -> str:
    """Visible text of a node on a single line."""
    if node is None:
        return ""
    return clean_text(node.get_text(" "))
