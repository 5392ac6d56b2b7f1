# ABOUTME: Domain models for extracted yacht listings and per-run diagnostics
# ABOUTME: Listing records, confidence sub-scores, field issues, debug reports and parse results

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

JSON_LD_SOURCE = "json-ld"
MICRODATA_SOURCE = "microdata"
GENERIC_SOURCE = "generic"

# Price strings that stand for "no numeric price on purpose"
SOLD_PRICE = "Sold"
POA_PRICE = "POA"
SEE_DETAILS_PRICE = "See Details"
SENTINEL_PRICES = frozenset({SOLD_PRICE, POA_PRICE, SEE_DETAILS_PRICE})


class YachtType(str, Enum):
    """Closed set of yacht categories; UNKNOWN when nothing matched."""

    MOTOR = "motor"
    SAIL = "sail"
    CATAMARAN = "catamaran"
    SUPERYACHT = "superyacht"
    UNKNOWN = ""


class LengthUnit(str, Enum):
    FEET = "ft"
    METERS = "m"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class _CamelModel(BaseModel):
    """Base model serialising with the camelCase keys reviewers and importers expect."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, use_enum_values=True)


class Confidence(_CamelModel):
    """Confidence sub-scores (0-100, specs is additive and may exceed 100)."""

    overall: int = 50
    title: int = 0
    price: int = 0
    images: int = 0
    specs: int = 0


class Issue(_CamelModel):
    """A field-level extraction gap found during validation."""

    field: str
    severity: Severity
    message: str


class ListingRecord(_CamelModel):
    """One candidate yacht listing extracted from a page."""

    id: str
    title: str = ""
    price: str = Field(default="", description="Display price, e.g. '$1,250,000', 'Sold' or 'POA'")
    price_raw: float | None = Field(default=None, description="Numeric magnitude, 0 for sentinel prices")
    currency: str | None = Field(default=None, description="Currency tag of price_raw (never converted)")
    year: str = ""
    length: str = ""
    length_unit: LengthUnit = LengthUnit.FEET
    type: YachtType = YachtType.UNKNOWN
    location: str = ""
    description: str = ""
    images: list[str] = Field(default_factory=list, description="Absolute image URLs, primary first")
    detail_url: str | None = None
    source_url: str = ""
    source: str = GENERIC_SOURCE
    confidence: Confidence = Field(default_factory=Confidence)
    issues: list[Issue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == Severity.ERROR for issue in self.issues)

    @property
    def has_sentinel_price(self) -> bool:
        return self.price in SENTINEL_PRICES or self.price_raw == 0


def new_listing(index: int = 0, run_id: str = "draft", **fields) -> ListingRecord:
    """Create an empty listing with an id that is unique within one run."""
    return ListingRecord(id=f"yacht-{run_id}-{index}", **fields)


class SiteValidation(BaseModel):
    """Outcome of the cheap keyword pre-filter."""

    valid: bool
    reason: str | None = None
    keywords_found: list[str] = Field(default_factory=list)


class DebugReport(BaseModel):
    """Diagnostic snapshot of a single parse run."""

    url: str
    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    html_length: int = 0
    keywords_found: list[str] = Field(default_factory=list)
    valid: bool = False
    validation_reason: str | None = None
    structured_data_found: bool = False
    strategy: str | None = Field(default=None, description="structured-data, adapter or generic")
    adapter: str | None = None
    empty_adapters: list[str] = Field(
        default_factory=list, description="Adapters that detected the page but produced no listings"
    )
    listings_attempted: int = 0
    listings_accepted: int = 0
    listings_rejected: int = 0
    duplicates_dropped: int = 0
    rejection_reasons: list[str] = Field(default_factory=list)
    sample_html: str = ""


class ParseResult(BaseModel):
    """Records extracted from one document plus its diagnostics."""

    listings: list[ListingRecord] = Field(default_factory=list)
    error: str | None = None
    report: DebugReport

    @property
    def ok(self) -> bool:
        return self.error is None
