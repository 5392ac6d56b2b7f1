# ABOUTME: Price parsing for free-text listing prices in USD, EUR and GBP
# ABOUTME: Ordered currency patterns, European grouping normalisation and sold/POA sentinels

import re

from pydantic import BaseModel

from yacht_importer.core.models import POA_PRICE, SOLD_PRICE

MIN_PLAUSIBLE_PRICE = 1000

CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£"}

# Digits with separators; a space only counts as a separator before an exact group of three digits
_GROUPED_NUMBER = r"(\d[\d,.]*(?:[ \u00a0\u202f]\d{3}(?!\d)[\d,.]*)*)"

# Order matters: the first pattern producing a plausible amount wins.
PRICE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    # USD formats
    (re.compile(r"\$\s*([\d,]+(?:\.\d{2})?)\s*(?:USD|usd)?"), "USD"),
    (re.compile(r"USD\s*\$?\s*([\d,]+)", re.IGNORECASE), "USD"),
    (re.compile(r"([\d,]+)\s*(?:USD|dollars?)", re.IGNORECASE), "USD"),
    # EUR formats
    (re.compile(r"€\s*" + _GROUPED_NUMBER), "EUR"),
    (re.compile(r"EUR\s*€?\s*" + _GROUPED_NUMBER, re.IGNORECASE), "EUR"),
    (re.compile(_GROUPED_NUMBER + r"\s*(?:EUR|euros?)", re.IGNORECASE), "EUR"),
    # GBP formats
    (re.compile(r"£\s*([\d,]+)"), "GBP"),
    (re.compile(r"GBP\s*£?\s*([\d,]+)", re.IGNORECASE), "GBP"),
    # Generic asking price, assumed USD
    (re.compile(r"(?:price|asking)[:\s]*\$?\s*([\d,]+)", re.IGNORECASE), "USD"),
]

_QUALIFIER_RE = re.compile(r"\b(?:from|now|asking)\s*:?\s*(?=[$€£]|USD|EUR|GBP)", re.IGNORECASE)
_EURO_THOUSANDS_DOT_RE = re.compile(r"\.(?=\d{3}(?!\d))")
_DECIMAL_COMMA_RE = re.compile(r"(.*),(\d{1,2})")
_SOLD_RE = re.compile(r"\bsold\b", re.IGNORECASE)
_POA_RE = re.compile(r"\bpoa\b|price on application|price on request|contact", re.IGNORECASE)

CURRENCY_AMOUNT_RE = re.compile(r"[$€£]\s?\d[\d,]*")


class PriceParse(BaseModel):
    """Result of parsing a price out of free text."""

    raw: float | None = None
    formatted: str = ""
    currency: str | None = None


def normalize_amount(num_str: str) -> float | None:
    """Turn a captured amount such as '1,234,567' or '1.234.567,00' into a float.

    A dot followed by exactly three digits and then a non-digit is a thousands
    separator, so '1.234' reads as 1234. A trailing comma with one or two digits is a
    decimal comma; every other comma is a thousands separator.
    """
    s = re.sub(r"\s", "", num_str).strip(".,")
    if not s:
        return None

    s = _EURO_THOUSANDS_DOT_RE.sub("", s)

    decimal_comma = _DECIMAL_COMMA_RE.fullmatch(s)
    if decimal_comma:
        s = decimal_comma.group(1).replace(",", "") + "." + decimal_comma.group(2)
    else:
        s = s.replace(",", "")

    try:
        return float(s)
    except ValueError:
        return None


def format_price(num: float | None, currency: str | None = "USD") -> str:
    """Display string with the currency symbol and thousands grouping."""
    if not num:
        return ""
    symbol = CURRENCY_SYMBOLS.get(currency or "USD", "$")
    return f"{symbol}{num:,.0f}"


def extract_price(text: str | None) -> PriceParse:
    """Find the first plausible price in a text blob."""
    if not text:
        return PriceParse()

    text = _QUALIFIER_RE.sub("", text)

    for pattern, currency in PRICE_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        raw = normalize_amount(match.group(1))
        if raw is not None and raw >= MIN_PLAUSIBLE_PRICE:
            return PriceParse(raw=raw, formatted=format_price(raw, currency), currency=currency)

    return PriceParse()


def detect_price_sentinel(text: str | None) -> str | None:
    """Return 'Sold' or 'POA' when the text states a deliberate non-numeric price."""
    if not text:
        return None
    if _SOLD_RE.search(text):
        return SOLD_PRICE
    if _POA_RE.search(text):
        return POA_PRICE
    return None


def has_currency_amount(text: str) -> bool:
    return bool(CURRENCY_AMOUNT_RE.search(text))
