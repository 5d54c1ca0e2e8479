"""
CLI Utilities - Shared helper functions for command line operations.

This module provides common functionality used across the commands:
formatted printing, logging setup and the scan pipeline (directory ->
catalog -> containment graph).
"""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Tuple

import click

from ..core.catalog import ArchiveCatalog, build_catalog
from ..core.discovery import discover_archives
from ..core.errors import DirectoryScanError
from ..core.graph import ContainmentGraph, build_containment_graph
from ..core.types import ScanIssue
from ..parsing.archive import ZipByteSource

logger = logging.getLogger(__name__)


@dataclass
class ScanOptions:
    """Options shared by every command, set on the group."""

    directory: Path = field(default_factory=lambda: Path("."))
    jobs: int = 1
    source: ZipByteSource = field(default_factory=ZipByteSource)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr; per-archive problems are echoed separately."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    """
    Print a warning message with a yellow alert symbol to stderr.

    Args:
        message (str): The warning message to display.
    """
    click.echo(click.style(f"⚠️  {message}", fg="yellow"), err=True)


def echo_info(message: str) -> None:
    """Print a dimmed status message to stderr."""
    click.echo(click.style(message, dim=True), err=True)


def echo_issues(issues: Iterable[ScanIssue]) -> None:
    """Print every recoverable problem met while producing the output."""
    issues = list(issues)
    if not issues:
        return
    click.echo(err=True)
    echo_warning(f"{len(issues)} problem(s) found while reading mods:")
    for issue in issues:
        click.echo(click.style(f"   {issue}", fg="yellow"), err=True)


def load_scan(options: ScanOptions) -> Tuple[ArchiveCatalog, ContainmentGraph]:
    """
    Run the scan pipeline for ``options.directory``.

    Exits with status 1 when the directory cannot be listed; every other
    problem is kept as an issue on the catalog or the graph.
    """
    echo_info(f"Reading mods in {options.directory}...")
    try:
        paths = discover_archives(options.directory)
    except DirectoryScanError as e:
        echo_error(str(e))
        sys.exit(1)

    catalog = build_catalog(paths, options.source, max_workers=options.jobs)
    graph = build_containment_graph(catalog, options.source)
    return catalog, graph
