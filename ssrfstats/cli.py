"""Click-based CLI entry point for ssrfstats."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from ssrfstats.config import DEFAULT_FILENAME, DEFAULT_SORT, EXIT_FILE_ERROR, EXIT_PARSE_ERROR, SORT_KEYS


def _list_slots(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    from ssrfstats.classify.slots import get_all_slot_tables

    for name, table in get_all_slot_tables().items():
        click.echo(f"{name} ({table.unit}): {', '.join(table.labels)}")
    ctx.exit()


@click.command()
@click.version_option(version="0.1.0")
@click.option(
    "-filename",
    "--filename",
    "filename",
    type=click.Path(path_type=Path),
    default=str(DEFAULT_FILENAME),
    show_default=True,
    help="Subsurface .ssrf export to be parsed.",
)
@click.option(
    "-sort",
    "--sort",
    "sort_by",
    default=DEFAULT_SORT,
    show_default=True,
    help=f"Field used for sorting: {', '.join(SORT_KEYS)}.",
)
@click.option("--progress/--no-progress", default=False, help="Show a progress bar while aggregating.")
@click.option(
    "--list-slots",
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=_list_slots,
    help="Print the slot labels of every classifier and exit.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(filename: Path, sort_by: str, progress: bool, verbose: bool):
    """Print dive frequency tables from a Subsurface dive log."""
    from ssrfstats.parsers.ssrf_parser import DiveLogParseError, parse_ssrf_file
    from ssrfstats.stats.aggregate import DiveSiteIndex, aggregate_dives

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        stream=sys.stdout,
    )

    try:
        divelog = parse_ssrf_file(filename)
    except OSError as e:
        click.echo(e)
        sys.exit(EXIT_FILE_ERROR)
    except DiveLogParseError as e:
        click.echo(e)
        sys.exit(EXIT_PARSE_ERROR)

    sites = DiveSiteIndex(divelog.sites)
    stats = aggregate_dives(divelog.iter_dives(), sites, progress=progress)
    stats.print_report(sort_by)


if __name__ == "__main__":
    main()
