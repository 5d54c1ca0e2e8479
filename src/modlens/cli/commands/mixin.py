"""
Mixin Command - List the mixin classes of every mod in the folder.
"""

from typing import Optional

import click

from ...analysis.listers import list_mixins
from ...core.types import Environment
from ..utils import ScanOptions, echo_issues, load_scan

INDENT = "    "


@click.command()
@click.option("--filter", "needle", help="Filter the list of mixins using this search string")
@click.pass_obj
def mixin(options: ScanOptions, needle: Optional[str]) -> None:
    """
    Lists mixins in mods in the current folder.

    Embedded (jar-in-jar) mods are listed too. Client and server mixins are
    shown under their own heading after the common ones.
    """
    catalog, graph = load_scan(options)
    listing = list_mixins(graph.archive_entries(), options.source, needle)

    if not listing.groups:
        if needle:
            click.echo("No jars that match the given filter found!")
        else:
            click.echo("No valid jars found!")

    for group in listing.groups:
        click.echo(click.style(group.header, bold=True))
        by_side = group.by_side()
        for entry in by_side[Environment.COMMON]:
            click.echo(f"{INDENT}{entry.class_name}")
        for side in (Environment.CLIENT, Environment.SERVER):
            if not by_side[side]:
                continue
            click.echo(f"{side.value.title()}:")
            for entry in by_side[side]:
                click.echo(f"{INDENT}{entry.class_name}")
        for plugin in group.plugins:
            click.echo(click.style(f"Plugin: {plugin}", dim=True))

    echo_issues([*catalog.issues, *graph.issues, *listing.issues])
