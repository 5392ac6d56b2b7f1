# ABOUTME: Rich table builders for listing results, parse diagnostics and logging status
# ABOUTME: Styled key-value and multi-column tables shared by the CLI commands

from enum import Enum
from typing import Any

from rich.box import ROUNDED, SIMPLE
from rich.console import Console
from rich.table import Table

from yacht_importer.core.models import DebugReport, ListingRecord


def create_key_value_table(
    title: str,
    data: dict[str, str],
    title_style: str = "bold cyan",
    key_style: str = "bold blue",
    value_style: str = "green",
    box_style=ROUNDED,
) -> Table:
    """Create a two-column Field/Value table.

    Args:
        title: Table title with emoji/styling
        data: Dictionary of key-value pairs to display
        title_style: Style for the table title
        key_style: Style for the key column
        value_style: Style for the value column
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
        expand=False,
    )

    table.add_column("Field", style=key_style, no_wrap=False)
    table.add_column("Value", style=value_style, no_wrap=False)

    for key, value in data.items():
        table.add_row(key, str(value))

    return table


def create_multi_column_table(
    title: str,
    columns: list[tuple[str, str]],
    rows: list[list[str]],
    title_style: str = "bold cyan",
    header_style: str = "bold magenta",
    alternate_row_styles: list[str] | None = None,
    box_style=ROUNDED,
) -> Table:
    """Create a multi-column table with zebra striping.

    Args:
        title: Table title with emoji/styling
        columns: List of (column_name, column_style) tuples
        rows: List of row data
        title_style: Style for the table title
        header_style: Style for column headers
        alternate_row_styles: Alternating row styles for zebra striping
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style=header_style,
        border_style="cyan",
        title_justify="left",
        row_styles=alternate_row_styles or ["", "dim"],
        expand=True,
    )

    for name, style in columns:
        table.add_column(name, style=style)

    for row in rows:
        table.add_row(*row)

    return table


def _styled_confidence(value: int) -> str:
    if value >= 80:
        return f"[bold green]{value}[/bold green]"
    if value >= 60:
        return f"[bold yellow]{value}[/bold yellow]"
    return f"[bold red]{value}[/bold red]"


def _plain(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def _truncate(text: str, length: int) -> str:
    return text[:length] + "..." if len(text) > length else text


def create_listings_table(listings: list[ListingRecord], total_found: int | None = None) -> Table:
    """Create the results table: one row per listing with its confidence and issue count.

    Args:
        listings: Listings to display
        total_found: Total before the display cap, shown in the title when larger

    Returns:
        Styled listings table
    """
    columns = [
        ("Title", "bold white"),
        ("Price", "green"),
        ("Year", "cyan"),
        ("Length", "cyan"),
        ("Type", "magenta"),
        ("Location", "blue"),
        ("Confidence", "white"),
        ("Issues", "yellow"),
    ]

    rows = []
    for listing in listings:
        errors = sum(1 for issue in listing.issues if issue.severity == "error")
        issue_count = f"[bold red]{len(listing.issues)}[/bold red]" if errors else str(len(listing.issues))
        rows.append(
            [
                _truncate(listing.title or "-", 60),
                listing.price or "-",
                listing.year or "-",
                f"{listing.length} {_plain(listing.length_unit)}" if listing.length else "-",
                _plain(listing.type) or "-",
                listing.location or "-",
                _styled_confidence(listing.confidence.overall),
                issue_count,
            ]
        )

    shown = len(listings)
    title = f"⛵ {shown} Listings"
    if total_found is not None and total_found > shown:
        title = f"⛵ Showing {shown} of {total_found} Listings"

    return create_multi_column_table(title=title, columns=columns, rows=rows)


def create_debug_report_table(report: DebugReport) -> Table:
    """Create a diagnostics table for one parse run.

    Args:
        report: Debug report of the most recent parse

    Returns:
        Styled key-value table of the report
    """
    report_data = {
        "🌐 URL": report.url,
        "📅 Timestamp": report.timestamp,
        "📄 HTML Length": f"{report.html_length:,} chars",
        "🔑 Keywords": f"{len(report.keywords_found)} ({', '.join(report.keywords_found[:10])})",
        "✅ Valid": "Yes" if report.valid else f"No - {report.validation_reason}",
        "🧩 Structured Data": "Found" if report.structured_data_found else "None",
        "🧭 Strategy": report.strategy or "None",
        "🔌 Adapter": report.adapter or "-",
        "📊 Attempted / Accepted / Rejected": (
            f"{report.listings_attempted} / {report.listings_accepted} / {report.listings_rejected}"
        ),
        "♻️ Duplicates Dropped": str(report.duplicates_dropped),
    }
    if report.empty_adapters:
        report_data["⚠️ Empty Adapters"] = ", ".join(report.empty_adapters)
    for i, reason in enumerate(report.rejection_reasons[:10], start=1):
        report_data[f"🚫 Rejection {i}"] = reason

    return create_key_value_table(
        title="🔍 Parse Debug Report",
        data=report_data,
        title_style="bold magenta",
        key_style="cyan",
        value_style="white",
        box_style=SIMPLE,
    )


def create_logging_status_table(status: dict[str, Any]) -> Table:
    """Create a logging configuration status table.

    Args:
        status: Logging status dictionary

    Returns:
        Styled logging configuration table
    """
    logging_data = {
        "🔧 Mode": status["mode"].title(),
        "📁 Log Directory": status["log_directory"] or "N/A (production mode)",
        "🔇 Suppressed Libraries": ", ".join(status["third_party_suppressed"]),
    }

    if status["log_files"]["main"]:
        logging_data["📝 Main Log"] = status["log_files"]["main"]
    if status["log_files"]["json"]:
        logging_data["📊 JSON Log"] = status["log_files"]["json"]
    if status["log_files"]["errors"]:
        logging_data["🚨 Error Log"] = status["log_files"]["errors"]

    return create_key_value_table(
        title="🔍 Logging Configuration",
        data=logging_data,
        title_style="bold green",
        key_style="blue",
        value_style="white",
    )


def print_rich_table(console: Console, table: Table) -> None:
    """Print a rich table with consistent spacing.

    Args:
        console: Rich console instance
        table: Configured table to print
    """
    console.print()
    console.print(table)
    console.print()
