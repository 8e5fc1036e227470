"""Host command: closest INPHARED phage and its host for each contig."""

import logging
import sys
from pathlib import Path

import click

from phagelink.config.loader import load_config_with_overrides
from phagelink.distance import MashRunner, run_host
from phagelink.output import TableEmitter
from phagelink.references import resolve_phage_source

logger = logging.getLogger(__name__)


@click.command('host')
@click.option(
    '-m', '--mash-db',
    required=True,
    type=click.Path(path_type=Path),
    help='Mash sketch built from the INPHARED genomes'
)
@click.option(
    '-c', '--contigs',
    required=True,
    type=click.Path(path_type=Path),
    help='FASTA of query contigs'
)
@click.option(
    '-p', '--phage-genome-db',
    type=click.Path(path_type=Path),
    default=None,
    help='Local INPHARED phage table (downloaded when omitted)'
)
@click.option(
    '-a', '--all-info',
    is_flag=True,
    help='Append the full phage table row instead of the host column'
)
@click.option(
    '--mash',
    'mash_executable',
    default=None,
    help='mash executable (overrides distance.executable)'
)
@click.option(
    '--max-p-value',
    type=click.FloatRange(0.0, 1.0),
    default=None,
    help='Maximum Mash p-value to report (overrides distance.max_p_value)'
)
@click.pass_context
def host(ctx, mash_db, contigs, phage_genome_db, all_info, mash_executable, max_p_value):
    """Assign each contig its closest INPHARED phage by Mash distance.

    Runs `mash dist -i` (mash must be on PATH), keeps the smallest distance
    per contig (ties: first reported), and looks the phage up in the
    INPHARED table. Output goes to stdout, one line per contig.

    Examples:

        phagelink host -m inphared.msh -c contigs.fna -p 1Aug2022_data.tsv

        phagelink host -m inphared.msh -c contigs.fna --all-info
    """
    config_path = ctx.obj['config_path']

    try:
        config = load_config_with_overrides(config_path, {
            'distance.executable': mash_executable,
            'distance.max_p_value': max_p_value,
        })

        source = resolve_phage_source(phage_genome_db, config)
        click.echo(f"Loading phage table from {source!r}...", err=True)
        phage_text = source.fetch_reference_table()

        click.echo("Running mash dist...", err=True)
        distance_text = MashRunner.from_config(config).compute_distances(mash_db, contigs)

        result = run_host(distance_text, phage_text, all_info=all_info)
    except Exception as e:
        click.echo(click.style(f"Error: {e}", fg='red'), err=True)
        logger.debug("host failed", exc_info=True)
        sys.exit(1)

    click.echo(f"Assigned {len(result.best_hits)} contigs", err=True)
    TableEmitter(click.get_text_stream('stdout')).emit_all(result.lines)
