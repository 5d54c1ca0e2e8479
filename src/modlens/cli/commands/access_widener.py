"""
Access Widener Command - Print the access wideners of every mod in the folder.
"""

from typing import Optional

import click

from ...analysis.listers import list_access_wideners
from ...parsing.access_widener import HEADER_KEYWORD
from ..utils import ScanOptions, echo_issues, load_scan

INDENT = "    "


@click.command()
@click.option("--filter", "needle",
              help="Only show rules whose class, member or descriptor contains this string")
@click.pass_obj
def access_widener(options: ScanOptions, needle: Optional[str]) -> None:
    """
    Prints access widener files in mods in the current folder.
    """
    catalog, graph = load_scan(options)
    listing = list_access_wideners(graph.archive_entries(), options.source, needle)

    if not listing.groups:
        if needle:
            click.echo("No jars that match the given filter found!")
        else:
            click.echo("No jars with AWs found!")

    for group in listing.groups:
        widener = group.widener
        click.echo(click.style(group.header, bold=True))
        click.echo(f"{INDENT}{HEADER_KEYWORD} {widener.version_tag} {widener.namespace}")
        for rule in widener.rules:
            click.echo(f"{INDENT}{rule.render()}")

    echo_issues([*catalog.issues, *graph.issues, *listing.issues])
