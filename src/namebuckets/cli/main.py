'''
Command-line entry point. Builds the frequency table once (`prepare`), then computes
surname buckets from it (`buckets`) or checks how evenly they split (`check`).
'''

import csv
import io
import os

import click

from namebuckets import config
from namebuckets.data.table import FrequencyTable
from namebuckets.errors import BoundaryInvariantError, NameBucketsError
from namebuckets.eval.metrics import sweep
from namebuckets.logging_utils import configure_logging
from namebuckets.runner.engine import Partitioner

HEADER = ("start_letter", "end_letter", "percentage")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _load_table(path):
    if not os.path.exists(path):
        raise click.ClickException(f"Table {path} not found. Run `namebuckets prepare` first.")
    try:
        return FrequencyTable.load(path)
    except NameBucketsError as e:
        raise click.ClickException(str(e))


@click.group()
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False), default=None,
              help='Logging level (default from NAMEBUCKETS_LOG_LEVEL or WARNING)')
def main(log_level):
    '''namebuckets: split surnames into alphabetic ranges of equal frequency'''
    level = (log_level or config.log_level()).upper()
    if level not in LOG_LEVELS:
        raise click.UsageError(f"NAMEBUCKETS_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {level!r}")
    configure_logging(level)


@main.command()
@click.argument('source', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', default=None, help='Where to write the table manifest (default NAMEBUCKETS_TABLE)')
@click.option('--key-column', default=1, show_default=True, help='Zero-based column of the surname')
@click.option('--frequency-column', default=2, show_default=True, help='Zero-based column of the frequency')
def prepare(source, output, key_column, frequency_column):
    '''Aggregate a raw name-frequency CSV into a cumulative table'''
    output = output or config.table_path()
    try:
        table = FrequencyTable.from_csv(source, key_column=key_column, frequency_column=frequency_column)
    except NameBucketsError as e:
        raise click.ClickException(str(e))
    table.save(output)
    click.echo(f"Wrote {len(table)} keys (total {table.total}) to {output}", err=True)


@main.command()
@click.option('-n', '--no_buckets', type=int, default=None, help='Number of buckets of names to create (default 4)')
@click.option('-p', '--percentage', type=int, default=None,
              help='How evenly the buckets should be matched (default 2 = 2%)')
@click.option('--table', 'table_path', default=None, help='Prepared table (default NAMEBUCKETS_TABLE)')
@click.option('--search-radius', type=int, default=None, help='Rows scanned each way when refining a cut')
def buckets(no_buckets, percentage, table_path, search_radius):
    """Print bucket ranges as CSV"""
    try:
        cfg = config.load_config().override(no_buckets, percentage, search_radius)
        table = _load_table(table_path or config.table_path())
        ranges = Partitioner.from_config(table, cfg).run(cfg)
    except NameBucketsError as e:
        raise click.ClickException(str(e))
    except BoundaryInvariantError as e:
        raise click.ClickException(f"internal invariant violation: {e}")

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator='\n')
    writer.writerow(HEADER)
    for bucket in ranges:
        writer.writerow(bucket.as_row())
    click.echo(buf.getvalue(), nl=False)


@main.command()
@click.option('--max-buckets', default=50, show_default=True, help='Check bucket counts 2..max-buckets-1')
@click.option('-p', '--percentage', type=int, default=None, help='Tolerance in whole percent (default 2)')
@click.option('--table', 'table_path', default=None, help='Prepared table (default NAMEBUCKETS_TABLE)')
def check(max_buckets, percentage, table_path):
    """Report the biggest share deviation for each bucket count"""
    try:
        cfg = config.load_config().override(percentage=percentage)
        table = _load_table(table_path or config.table_path())
        reports = sweep(Partitioner.from_config(table, cfg), range(2, max_buckets), cfg.max_deviation_percentage)
    except NameBucketsError as e:
        raise click.ClickException(str(e))
    except BoundaryInvariantError as e:
        raise click.ClickException(f"internal invariant violation: {e}")

    failed = [r for r in reports if not r.within_tolerance]
    for r in reports:
        marker = "ok" if r.within_tolerance else "EXCEEDED"
        click.echo(f"{r.no_buckets:>3} buckets: biggest deviation {r.biggest_deviation * 100:.3f}% {marker}")
    if failed:
        raise click.ClickException(
            f"{len(failed)} bucket counts exceed {cfg.max_deviation_percentage * 100:g}% deviation"
        )


if __name__ == "__main__":
    main()
