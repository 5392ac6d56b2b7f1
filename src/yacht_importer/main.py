# ABOUTME: Main CLI application entry point using asyncclick for native async support
# ABOUTME: Provides commands to parse saved broker pages, crawl live sites and inspect logging

from pathlib import Path

import asyncclick as click
from rich.console import Console
from rich.panel import Panel

from yacht_importer.config import get_config
from yacht_importer.core.models import ParseResult
from yacht_importer.core.session import ImportResult, ImportSession
from yacht_importer.fetch import HttpPageFetcher
from yacht_importer.utils.logging import (
    LoggingMode,
    configure_logging,
    get_logging_status,
    with_page_context,
)
from yacht_importer.utils.retry import FetchError
from yacht_importer.utils.rich_tables import (
    create_debug_report_table,
    create_listings_table,
    create_logging_status_table,
    print_rich_table,
)

console = Console()


def _display_parse_result(result: ParseResult, debug_report: bool) -> None:
    if result.error:
        console.print(f"[red]❌ {result.error}[/red]")
    elif not result.listings:
        console.print("[yellow]No yacht listings could be extracted from this page.[/yellow]")
    else:
        print_rich_table(console, create_listings_table(result.listings))

    if debug_report:
        print_rich_table(console, create_debug_report_table(result.report))


def _display_import_result(result: ImportResult) -> None:
    if result.listings:
        print_rich_table(console, create_listings_table(result.listings, result.total_found))
    if result.error:
        console.print(Panel(result.error, title="⚠️ No Listings", border_style="yellow"))

    console.print(f"📄 Pages scanned: [bold blue]{', '.join(result.pages_scanned)}[/bold blue]")
    if result.failed_pages:
        console.print(f"[yellow]⚠️ Pages skipped after fetch errors: {', '.join(result.failed_pages)}[/yellow]")


@click.command(name="parse")
@click.argument("html_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--url", required=True, help="Address the page was saved from (used to resolve links)")
@click.option("--debug-report", is_flag=True, help="Show the diagnostics of the parse run")
@click.pass_context
async def parse_file(ctx, html_file: Path, url: str, debug_report: bool):
    """
    📄 Extract yacht listings from a saved HTML page.
    """
    json_output = ctx.obj["json_output"]

    with with_page_context(url) as logger:
        html = html_file.read_text(encoding="utf-8", errors="replace")
        logger.info("Parsing saved page", file=str(html_file), html_length=len(html))

        session = ImportSession(config=get_config())
        result = session.parse(html, url)

        if json_output:
            exclude = None if debug_report else {"report"}
            click.echo(result.model_dump_json(by_alias=True, exclude=exclude, indent=2))
        else:
            _display_parse_result(result, debug_report)

    if result.error:
        ctx.exit(1)


@click.command(name="fetch")
@click.argument("url")
@click.option("--debug-report", is_flag=True, help="Show the diagnostics of the last parsed page")
@click.pass_context
async def fetch_site(ctx, url: str, debug_report: bool):
    """
    ⛵ Crawl a broker website and extract its yacht listings.

    Follows discovered inventory pages and pagination, then deduplicates the results.
    """
    json_output = ctx.obj["json_output"]
    config = get_config()

    async with HttpPageFetcher(config=config) as fetcher:
        session = ImportSession(fetcher=fetcher, config=config)
        try:
            if json_output:
                result = await session.run(url)
            else:
                with console.status(f"🔭 Scanning {url} for listings..."):
                    result = await session.run(url)
        except FetchError as e:
            if json_output:
                click.echo(ImportResult(error=str(e)).model_dump_json(by_alias=True, indent=2))
            else:
                console.print(f"[red]❌ Failed to fetch the website: {e}[/red]")
            ctx.exit(1)

    if json_output:
        click.echo(result.model_dump_json(by_alias=True, indent=2))
    else:
        _display_import_result(result)
        report = session.get_last_report()
        if debug_report and report is not None:
            print_rich_table(console, create_debug_report_table(report))


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    try:
        config = get_config()

        # Use config defaults when CLI parameters are not provided; --json always logs JSON
        mode = LoggingMode.PRODUCTION if json_output else config.log_mode
        final_log_level = log_level or config.log_level
        final_log_file = log_file or (str(config.log_file) if config.log_file else None)

        configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)
    except (FileNotFoundError, PermissionError, OSError):
        # Log directory unavailable (read-only checkout, parallel test runs)
        mode = LoggingMode.PRODUCTION if json_output else None
        configure_logging(mode=mode, log_level=log_level or "INFO", log_file=log_file)


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    logging_table = create_logging_status_table(status)
    print_rich_table(console, logging_table)


@click.group(invoke_without_command=True)
@click.option("--json", is_flag=True, help="Output JSON instead of rich tables (and JSON logs)")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.pass_context
def app(ctx, json: bool, log_level: str | None, log_file: str | None):
    """
    ⛵ Yacht Importer - Pull yacht listings from broker websites

    Extracts listings using structured data, known site layouts and generic
    heuristics, scoring every listing so gaps are easy to review.
    """
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json

    # Initialize logging once here instead of in each command
    _initialize_logging(json, log_level, log_file)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


app.add_command(parse_file)
app.add_command(fetch_site)
app.add_command(logging_status)


if __name__ == "__main__":
    app()
