#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command-line interface for Microsat.

This module provides the main CLI entry point and all subcommands for
converting ms output into microsatellite repeat-length data.
"""

import sys
import click
from pathlib import Path
import yaml

from .version import __version__
from .errors import ConfigurationError, MicrosatError
from .config.parser import ConfigParser
from .config.schema import load_config, save_config_template, validate_config
from .config.settings import OutputMode, RunConfig
from .utils.logging_setup import resolve_log_level, setup_logging
from .utils.pipeline import convert_files


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.pass_context
def main(ctx, verbose, quiet):
    """
    Microsat: microsatellite data from ms coalescent simulations

    Converts ms output into repeat lengths under a single-step mutation
    model, optionally spreading segregating sites over several fully-linked
    loci.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)
    ctx.obj['VERBOSE'] = verbose
    ctx.obj['QUIET'] = quiet


# ============================================================================
# Conversion
# ============================================================================

@main.command()
@click.option('--ancestral-state', '-a', type=int, default=None,
              help='Repeat length before mutation (default: 0)')
@click.option('--loci', '-l', type=int, default=None,
              help='Number of fully-linked loci; follow with one theta proportion per locus')
@click.argument('thetas', nargs=-1, type=float)
@click.option('--per-individual', '-i', is_flag=True,
              help="One line per individual, datasets closed by '//' (default: one line per dataset)")
@click.option('--seed', '-s', type=int, default=None,
              help='Random seed for reproducible runs')
@click.option('--input', 'input_path', type=click.Path(allow_dash=True), default=None,
              help="ms output file, '.gz' allowed (default: stdin)")
@click.option('--output', '-o', 'output_path', type=click.Path(allow_dash=True), default=None,
              help='Output file (default: stdout)')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True), default=None,
              help='YAML configuration file (command-line values take precedence)')
@click.pass_context
def convert(ctx, ancestral_state, loci, thetas, per_individual, seed,
            input_path, output_path, config_file):
    """
    Convert ms output to microsatellite repeat lengths.

    \b
    Example:
      ms 10 5 -t 4.0 | microsat convert -a 30 -l 2 0.4 0.6 > msat.dat
    """
    try:
        parser = ConfigParser(config_file)
        parser.merge_cli_overrides({
            'simulation.ancestral_state': ancestral_state,
            'simulation.loci': loci,
            'simulation.thetas': list(thetas) or None,
            'simulation.output_mode': OutputMode.PER_INDIVIDUAL.value if per_individual else None,
            'simulation.seed': seed,
            'io.input': input_path,
            'io.output': output_path,
        })
        run_config = RunConfig.from_dict(parser.to_dict())
    except ConfigurationError as e:
        click.echo(f"✗ Error: {e}", err=True)
        sys.exit(1)

    setup_logging(resolve_log_level(
        verbose=ctx.obj.get('VERBOSE', False),
        quiet=ctx.obj.get('QUIET', False),
        configured=parser.get('logging.level'),
    ))

    try:
        convert_files(parser.get('io.input'), parser.get('io.output'), run_config)
    except (MicrosatError, OSError) as e:
        click.echo(f"✗ Error: {e}", err=True)
        sys.exit(1)


# ============================================================================
# Configuration Management Commands
# ============================================================================

@main.group()
def config():
    """Configuration management commands."""
    pass


@config.command('init')
@click.option('--output', '-o', type=click.Path(), default='microsat_config.yaml',
              help='Output configuration file path')
@click.option('--template', '-t',
              type=click.Choice(['default', 'linked', 'per_individual']),
              default='default', help='Configuration template type')
def config_init(output, template):
    """Generate a template configuration file with all available parameters."""
    click.echo(f"Generating {template} configuration template: {output}")

    try:
        save_config_template(Path(output), template=template)
    except (OSError, ConfigurationError) as e:
        click.echo(f"✗ Error creating configuration: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Configuration file created: {output}")
    click.echo("\nEdit this file to set the mutation model, then run:")
    click.echo(f"  microsat convert --config {output}")


@config.command('validate')
@click.argument('config_file', type=click.Path(exists=True))
def config_validate(config_file):
    """Validate a configuration file."""
    click.echo(f"Validating configuration file: {config_file}")

    try:
        config = load_config(Path(config_file))
    except ConfigurationError as e:
        click.echo(f"✗ Error validating configuration: {e}", err=True)
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        click.echo("\n✗ Configuration validation failed:")
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    run_config = RunConfig.from_dict(config)
    click.echo("✓ Configuration is valid")
    click.echo("\nKey Settings:")
    click.echo(f"  Loci: {run_config.loci}")
    click.echo(f"  Thetas: {', '.join(str(t) for t in run_config.thetas)}")
    click.echo(f"  Output mode: {run_config.output_mode.value}")


@config.command('show')
@click.argument('config_file', type=click.Path(exists=True))
@click.option('--format', '-f', type=click.Choice(['yaml', 'summary']), default='summary',
              help='Output format')
def config_show(config_file, format):
    """Display configuration settings."""
    try:
        config = load_config(Path(config_file))
    except ConfigurationError as e:
        click.echo(f"✗ Error reading configuration: {e}", err=True)
        sys.exit(1)

    if format == 'yaml':
        click.echo(yaml.dump(config, default_flow_style=False, sort_keys=False))
        return

    simulation = config['simulation']
    click.echo(f"Configuration from: {config_file}")
    click.echo("=" * 60)

    click.echo("\nMutation model:")
    click.echo(f"  Ancestral state: {simulation['ancestral_state']}")
    click.echo(f"  Linked loci: {simulation['loci']}")
    if simulation.get('thetas'):
        click.echo(f"  Thetas: {', '.join(str(t) for t in simulation['thetas'])}")
    click.echo(f"  Seed: {simulation['seed'] if simulation['seed'] is not None else 'random'}")

    click.echo("\nInput / Output:")
    click.echo(f"  Input: {'stdin' if config['io']['input'] == '-' else config['io']['input']}")
    click.echo(f"  Output: {'stdout' if config['io']['output'] == '-' else config['io']['output']}")
    click.echo(f"  Layout: {simulation['output_mode']}")

    click.echo(f"\nLogging level: {config['logging']['level']}")


if __name__ == '__main__':
    main()
