#!/usr/bin/env python3
"""
csv2qif CLI

Converts a brokerage CSV export into QIF files for Quicken.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.

Usage:
    python src/cli.py --help
    python src/cli.py -c securities.qif -l "Brokerage Cash" -o out/ Schwab_Transactions.csv
"""

import logging
import sys

import click
from tabulate import tabulate

# Local application imports
import constants as const
import util
from brokers.baseclassifier import format_row
from converter import convert_file
from exceptions import ConversionError, FormatNotRecognized


logger = logging.getLogger(__name__)


@click.command()
@click.option("-c", "--current-securities", type=click.Path(exists=True, dir_okay=False),
              help="Securities .qif exported from Quicken (securities already in the ledger)")
@click.option("-l", "--linked-account", help="Linked cash account that receives cash only transactions")
@click.option("-o", "--outdir", type=click.Path(exists=True, file_okay=False),
              help="Output directory (default: current directory)")
@click.option("--log-level", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              default=None, help="Log level (default: LOG_LEVEL or INFO)")
@click.version_option(const.VERSION, prog_name="csv2qif")
@click.argument("transactions", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def cli(ctx, current_securities, linked_account, outdir, log_level, transactions):
    """Convert brokerage TRANSACTIONS csv into .qif files"""
    util.setup_logger(name=None, level=log_level, console=True, console_level="ERROR")
    logger.info(f"Convert - transactions: {transactions}, securities: {current_securities}, "
                f"linked: {linked_account}, outdir: {outdir}")

    debug = log_level is not None and log_level.upper() == "DEBUG"
    try:
        conversion, file_names, summary, lines = convert_file(
            transactions, current_securities=current_securities, linked_account=linked_account, outdir=outdir,
            debug=debug)
    except (ConversionError, OSError) as e:
        logger.error(f"Unable to convert {transactions}: {e}", exc_info=True)
        click.secho(f"\n✗ Unable to convert {transactions}: {e}\n", fg="red", err=True)
        if isinstance(e, FormatNotRecognized) and e.supported:
            click.secho(f"Supported formats: {', '.join(e.supported)}", fg="cyan", err=True)
        ctx.exit(1)

    click.secho(f"✓ Detected format: {conversion.profile.brokerage.value.capitalize()}", fg="green")
    click.echo()

    for notice in conversion.notices:
        click.secho(notice.message, fg="yellow")
        click.echo(format_row(notice.row))
        click.echo()

    if summary.securities:
        rows = [(s.symbol, s.name, s.security_type.as_qif()) for s in summary.securities]
        click.echo(tabulate(rows, headers=["Symbol", "Name", "Type"]))
        click.echo()

    for line in lines:
        click.echo(line)


if __name__ == "__main__":
    try:
        cli()
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        click.secho(f"\n✗ Fatal error: {e}\n", fg="red", err=True)
        sys.exit(1)
