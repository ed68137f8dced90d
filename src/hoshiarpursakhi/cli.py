#!/usr/bin/env python3
"""
HoshiarpurSakhi - CLI Entry Point

Browse, search and quality-check the religious sites directory from the
terminal.

Usage:
    hoshiarpursakhi                          # List all sites
    hoshiarpursakhi -q hanuman               # Free-text search
    hoshiarpursakhi -t gurdwara -f langar    # Gurdwaras with a langar
    hoshiarpursakhi --validate               # Data-quality report
    hoshiarpursakhi --stats                  # Directory statistics
"""

import argparse
import json
import logging
import sys

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from hoshiarpursakhi.database import RequirementsReport, SiteDatabase
from hoshiarpursakhi.models import ReligiousSite, SearchFilters, SiteType
from hoshiarpursakhi.search import SORT_FIELDS, sort_sites
from hoshiarpursakhi.utils.loader import save_sites_file
from hoshiarpursakhi.validation import DatabaseReport

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_arguments() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="HoshiarpurSakhi - Temples and gurdwaras of Hoshiarpur district",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Filters:
  All filters are combined: a site must match every one that is given.
  Matching is case-insensitive and by substring, so "-f park" finds
  sites offering "Parking".

Examples:
  hoshiarpursakhi                              # List all sites
  hoshiarpursakhi -q shiv                      # Search names, descriptions, history
  hoshiarpursakhi -l dasuya -t gurdwara        # Gurdwaras in Dasuya
  hoshiarpursakhi -f parking -f "langar"       # Sites with parking and a langar
  hoshiarpursakhi -s location --desc           # Sort by address, descending
  hoshiarpursakhi -d sites.json --validate     # Validate a data file
  hoshiarpursakhi -q mandir -o results.json    # Save matches to a file
        """,
    )

    parser.add_argument(
        "-d",
        "--data",
        default=None,
        help="Sites JSON file (default: bundled dataset)",
    )

    parser.add_argument(
        "-u",
        "--url",
        default=None,
        help="Fetch the sites JSON from a URL instead of a file",
    )

    parser.add_argument("-q", "--query", default="", help="Free-text search term")

    parser.add_argument(
        "-t",
        "--type",
        dest="site_type",
        default=SiteType.ALL,
        choices=[SiteType.ALL, *SiteType.ALL_TYPES],
        help="Site type to show (default: all)",
    )

    parser.add_argument("-l", "--location", default="", help="City or address term")

    parser.add_argument(
        "-f",
        "--facility",
        action="append",
        dest="facilities",
        default=None,
        help="Required facility (can be specified multiple times)",
    )

    parser.add_argument(
        "-s",
        "--sort",
        default="name",
        choices=SORT_FIELDS,
        help="Sort results by field (default: name)",
    )

    parser.add_argument("--desc", action="store_true", help="Sort in descending order")

    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write matching sites to a JSON file",
    )

    parser.add_argument(
        "--json", action="store_true", help="Print matching sites as JSON"
    )

    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate the dataset and check publishing requirements",
    )

    parser.add_argument("--stats", action="store_true", help="Show directory statistics")

    parser.add_argument(
        "--locations", action="store_true", help="List known cities and localities"
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose (debug) logging"
    )

    args = parser.parse_args()
    if args.data and args.url:
        parser.error("--data and --url cannot be used together")
    return args


def print_header() -> None:
    """Print application header."""
    console.print(
        Panel.fit(
            "[bold blue]HoshiarpurSakhi v1.2[/bold blue]\n"
            "[dim]Temples and Gurdwaras of Hoshiarpur District[/dim]",
            border_style="blue",
        )
    )
    console.print()


def print_filters(filters: SearchFilters) -> None:
    """Print the active filters."""
    if not filters.has_active_filters:
        return

    table = Table(title="Filters", show_header=False, box=None)
    table.add_column("Filter", style="cyan")
    table.add_column("Value", style="green")

    if filters.query.strip():
        table.add_row("Search", filters.query)
    if filters.type != SiteType.ALL:
        table.add_row("Type", SiteType.get_display_name(filters.type))
    if filters.location.strip():
        table.add_row("Location", filters.location)
    if filters.facilities:
        table.add_row("Facilities", ", ".join(filters.facilities))

    console.print(table)
    console.print()


def format_facilities(facilities: list[str]) -> str:
    """Show at most three facilities, summarizing the rest."""
    if not facilities:
        return "None listed"
    if len(facilities) <= 3:
        return ", ".join(facilities)
    return f"{', '.join(facilities[:3])} +{len(facilities) - 3} more"


def print_sites(sites: list[ReligiousSite], total: int) -> None:
    """Print the site directory table."""
    if not sites:
        console.print("[yellow]No sites match your current filters[/yellow]")
        console.print("[dim]Try adjusting your search or filters[/dim]")
        return

    table = Table(title=f"Showing {len(sites)} of {total} sites", show_lines=True)
    table.add_column("Name", style="cyan", max_width=32)
    table.add_column("Type")
    table.add_column("Location", style="green", max_width=36)
    table.add_column("Timings", style="yellow")
    table.add_column("Facilities", max_width=40)

    for site in sites:
        table.add_row(
            site.name,
            SiteType.get_display_name(site.type),
            site.address,
            f"{site.timings.weekdays}\n[dim]Weekends: {site.timings.weekends}[/dim]",
            format_facilities(site.facilities),
        )

    console.print(table)


def print_validation_report(report: DatabaseReport) -> None:
    """Print a database validation report."""
    table = Table(title="Database Statistics", show_header=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Total sites", str(report.total_sites))
    table.add_row("Valid sites", str(report.valid_sites))
    table.add_row("Invalid sites", str(len(report.invalid_entries)))
    table.add_row("Temples", str(report.summary.temples))
    table.add_row("Gurdwaras", str(report.summary.gurdwaras))
    table.add_row("Sites with contact", str(report.summary.sites_with_contact))
    table.add_row("Sites with images", str(report.summary.sites_with_images))
    console.print(table)
    console.print()

    if report.invalid_entries:
        console.print("[bold red]Invalid sites:[/bold red]")
        for entry in report.invalid_entries:
            label = entry.id or f"site-{entry.index}"
            console.print(f"  Site {entry.index} ([cyan]{label}[/cyan]):")
            for error in entry.errors:
                console.print(f"    [red]-[/red] {error}")
        console.print()

    if report.advisories:
        console.print("[bold yellow]Advisories:[/bold yellow]")
        for advisory in report.advisories:
            console.print(f"  [dim]-[/dim] {advisory}")
        console.print()


def print_requirements(requirements: RequirementsReport) -> None:
    """Print the publishing requirements check."""
    console.print("[bold]Requirements check:[/bold]")
    if requirements.meets_requirements:
        console.print("  [green]All requirements met[/green]")
    for issue in requirements.issues:
        console.print(f"  [red]x[/red] {issue}")
    console.print()


def run_validation(database: SiteDatabase) -> bool:
    """Validate the dataset, print the reports and return overall success."""
    report = database.validation_report
    print_validation_report(report)

    requirements = database.check_requirements()
    print_requirements(requirements)

    passed = report.is_valid and requirements.meets_requirements
    if passed:
        console.print(Panel.fit("[bold green]Database validation PASSED[/bold green]", border_style="green"))
    else:
        console.print(Panel.fit("[bold red]Database validation FAILED[/bold red]", border_style="red"))
    return passed


def print_stats(database: SiteDatabase) -> None:
    """Print directory statistics."""
    stats = database.get_stats()

    table = Table(title="Directory Statistics", show_header=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Total sites", str(stats.total_sites))
    table.add_row("Temples", str(stats.temples))
    table.add_row("Gurdwaras", str(stats.gurdwaras))
    table.add_row("Sites with contact", str(stats.sites_with_contact))
    table.add_row("Sites with images", str(stats.sites_with_images))
    table.add_row("Average description length", str(stats.average_description_length))
    table.add_row("Average history length", str(stats.average_history_length))
    console.print(table)
    console.print()

    console.print(f"[bold]Facilities ({len(stats.unique_facilities)}):[/bold]")
    for facility in stats.unique_facilities:
        console.print(f"  [dim]-[/dim] {facility}")


def print_locations(database: SiteDatabase) -> None:
    """Print the known cities and localities."""
    locations = database.get_unique_locations()
    console.print(f"[bold]Locations ({len(locations)}):[/bold]")
    for location in locations:
        console.print(f"  [dim]-[/dim] {location}")


def main() -> None:
    """Main entry point."""
    args = parse_arguments()
    setup_logging(args.verbose)

    database = SiteDatabase(path=args.data, url=args.url)
    filters = SearchFilters(
        query=args.query,
        type=args.site_type,
        location=args.location,
        facilities=args.facilities or [],
    )

    if args.json:
        # Keep stdout machine-readable
        sites = sort_sites(database.filter_sites(filters), args.sort, args.desc)
        print(json.dumps([site.to_dict() for site in sites], indent=2, ensure_ascii=False))
        return

    print_header()

    if args.validate:
        if not run_validation(database):
            sys.exit(1)
        return

    if args.stats:
        print_stats(database)
        return

    if args.locations:
        print_locations(database)
        return

    print_filters(filters)

    result = database.load()
    if not result.sites and not result.is_valid:
        console.print("[red]The sites database could not be loaded.[/red]")
        for entry in result.validation_report.invalid_entries:
            for error in entry.errors:
                console.print(f"  [red]-[/red] {error}")
        sys.exit(1)

    sites = sort_sites(database.filter_sites(filters), args.sort, args.desc)
    print_sites(sites, total=len(result.sites))

    if args.output:
        save_sites_file([site.to_dict() for site in sites], args.output)
        console.print(f"\n[green]Output saved to: {args.output}[/green]")


if __name__ == "__main__":
    main()
