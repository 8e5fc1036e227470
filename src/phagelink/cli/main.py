"""Main CLI entry point for phagelink.

Provides the command group with global options and the populate/host
subcommands. Table output goes to stdout; progress and logs go to stderr.
"""

import logging
from pathlib import Path

import click
import structlog

from phagelink import __version__
from phagelink.config.loader import load_config
from phagelink.cli.populate_cmd import populate
from phagelink.cli.host_cmd import host


# Configure logging (stderr, so stdout carries only table data)
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.processors.KeyValueRenderer(key_order=['event']),
    ],
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
)


@click.group()
@click.version_option(__version__, prog_name='phagelink')
@click.option(
    '--config',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help='Path to pipeline configuration YAML file (built-in defaults if omitted)'
)
@click.option(
    '--verbose',
    is_flag=True,
    help='Enable verbose logging (DEBUG level)'
)
@click.pass_context
def cli(ctx, config, verbose):
    """phagelink: annotate viral contigs with CheckV and INPHARED references.

    populate appends CheckV/INPHARED annotations to an abundance table;
    host assigns each contig its closest INPHARED phage by Mash distance.
    """
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config
    ctx.obj['verbose'] = verbose

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.debug("Verbose logging enabled")


@cli.command()
@click.pass_context
def info(ctx):
    """Display version and configuration summary."""
    config_path = ctx.obj['config_path']

    click.echo(f"phagelink v{__version__}")
    click.echo(f"Config: {config_path or '(built-in defaults)'}")
    click.echo()

    try:
        config = load_config(config_path)

        click.echo(f"Config Hash: {config.config_hash()[:16]}...")
        click.echo()

        click.echo(click.style("Reference Sources:", bold=True))
        click.echo(f"  Phage Table URL: {config.sources.phage_table_url}")
        click.echo(f"  Circular Table:  {config.sources.circular_table}")
        click.echo(f"  GenBank Table:   {config.sources.genbank_table}")
        click.echo()

        click.echo(click.style("HTTP:", bold=True))
        click.echo(f"  Cache Directory: {config.cache_dir}")
        click.echo(f"  Cache Enabled: {config.api.use_cache}")
        click.echo(f"  Max Attempts: {config.api.max_retries}")
        click.echo(f"  Timeout: {config.api.timeout_seconds}s")
        click.echo()

        click.echo(click.style("Distance Tool:", bold=True))
        click.echo(f"  Executable: {config.distance.executable}")
        click.echo(f"  Max p-value: {config.distance.max_p_value}")

    except Exception as e:
        click.echo(click.style(f"Error loading config: {e}", fg='red'), err=True)
        ctx.exit(1)


cli.add_command(populate)
cli.add_command(host)


if __name__ == '__main__':
    cli()
