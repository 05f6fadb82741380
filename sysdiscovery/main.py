"""
System discovery — CLI entrypoint.

Usage:
    sysdiscovery
    sysdiscovery --no-install --subnet 10.0.0.0/24
    python -m sysdiscovery.main --help
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click

from sysdiscovery import __version__
from sysdiscovery.core.observability.logging_config import (
    ENV_FILE,
    ENV_FILE_LEVEL,
    resolve_level,
    setup_logging,
)


@click.command()
@click.version_option(version=__version__, prog_name="sysdiscovery")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
@click.option("--quiet", "-q", is_flag=True, help="Only log errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to discovery.yml (default: auto-detect).",
)
@click.option("--no-install", is_flag=True, help="Never install missing tools.")
@click.option("--no-sudo", is_flag=True, help="Never prefix commands with sudo.")
@click.option("--subnet", default=None, metavar="CIDR", help="Subnet for the host sweep.")
@click.option(
    "--strict",
    is_flag=True,
    help="Exit with status 1 when any step was skipped.",
)
def cli(
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    no_install: bool,
    no_sudo: bool,
    subnet: str | None,
    strict: bool,
) -> None:
    """Enumerate host, user, network and share information."""
    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug, verbose, quiet),
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
    )

    from sysdiscovery.core.config.loader import ConfigError, load_config
    from sysdiscovery.core.use_cases.discover import run_discovery
    from sysdiscovery.ui.cli.transcript import ClickTranscript

    try:
        config = load_config(Path(config_path) if config_path else None)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    # CLI flags win over the file
    if no_install:
        config.install.enabled = False
    if no_sudo:
        config.elevation.use_sudo = False
    if subnet:
        config.scan.subnet = subnet

    report = run_discovery(config, transcript=ClickTranscript())

    if strict and not report.all_executed:
        sys.exit(1)


if __name__ == "__main__":
    cli()
