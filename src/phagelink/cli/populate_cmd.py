"""Populate command: append CheckV and INPHARED annotations to an abundance table.

Orchestrates:
1. Load config
2. Read abundance, completeness and CheckV genome tables
3. Read or download the INPHARED phage table
4. Resolve, dispatch and align annotations
5. Print the annotated table to stdout
"""

import logging
import sys
from pathlib import Path

import click

from phagelink.config.loader import load_config
from phagelink.linkage import run_populate
from phagelink.output import TableEmitter
from phagelink.references import (
    read_reference_db,
    read_table_text,
    resolve_phage_source,
    split_table_lines,
)

logger = logging.getLogger(__name__)


@click.command('populate')
@click.option(
    '-a', '--abundance',
    required=True,
    type=click.Path(path_type=Path),
    help='Abundance table (rows: contigs, columns: samples), header first'
)
@click.option(
    '-c', '--completeness',
    required=True,
    type=click.Path(path_type=Path),
    help='completeness.tsv produced by CheckV'
)
@click.option(
    '-d', '--db',
    required=True,
    type=click.Path(path_type=Path),
    help='CheckV database directory (containing genome_db/)'
)
@click.option(
    '-p', '--phage',
    type=click.Path(path_type=Path),
    default=None,
    help='Local INPHARED phage table (downloaded when omitted)'
)
@click.pass_context
def populate(ctx, abundance, completeness, db, phage):
    """Append CheckV and INPHARED annotations to an abundance table.

    Each contig is linked to its CheckV top hit through completeness.tsv.
    The hit's prefix selects the annotation source: DTR (CheckV circular),
    GCA (CheckV GenBank), LR/NC (INPHARED). The annotated table is printed
    to stdout in the original row order.

    Examples:

        phagelink populate -a abundance.tsv -c completeness.tsv -d checkv-db-v1.2 > annotated.tsv

        phagelink populate -a abundance.tsv -c completeness.tsv -d checkv-db-v1.2 -p 1Aug2022_data.tsv
    """
    config_path = ctx.obj['config_path']

    try:
        config = load_config(config_path)

        click.echo("Reading input tables...", err=True)
        abundance_lines = split_table_lines(read_table_text(abundance, "abundance file"))
        completeness_text = read_table_text(completeness, "completeness file")
        reference_db = read_reference_db(db, config.sources)

        source = resolve_phage_source(phage, config)
        click.echo(f"Loading phage table from {source!r}...", err=True)
        phage_text = source.fetch_reference_table()

        result = run_populate(
            abundance_lines=abundance_lines,
            completeness_text=completeness_text,
            reference_db=reference_db,
            phage_text=phage_text,
        )
    except Exception as e:
        click.echo(click.style(f"Error: {e}", fg='red'), err=True)
        logger.debug("populate failed", exc_info=True)
        sys.exit(1)

    report = result.report
    click.echo(
        f"Linked {report.resolved}/{report.total_subjects} contigs "
        f"({report.resolution_rate:.1%}), annotated {report.annotated}",
        err=True,
    )
    if report.ambiguous_ids:
        click.echo(click.style(
            f"  {len(report.ambiguous_ids)} contigs had several completeness rows; first row used",
            fg='yellow'
        ), err=True)

    TableEmitter(click.get_text_stream('stdout')).emit_all(result.lines)
