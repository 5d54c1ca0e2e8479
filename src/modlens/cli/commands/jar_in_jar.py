"""
Jar-in-Jar Command - Show which jars embed which other jars.
"""

from typing import Optional

import click
from rich.console import Console

from ...graph.tree import format_lines, render_forest, to_rich_tree
from ..utils import ScanOptions, echo_issues, load_scan

console = Console()


@click.command()
@click.option("-r", "--reverse", is_flag=True,
              help="Display the reverse tree, only showing jars which are contained by other jars")
@click.option("--filter", "needle",
              help="Filter the list of top-level mods (by mod id or name) using this search string")
@click.option("--rich", "use_rich", is_flag=True, help="Draw tree guides and colors")
@click.pass_obj
def jar_in_jar(options: ScanOptions, reverse: bool, needle: Optional[str], use_rich: bool) -> None:
    """
    Displays the Jar in Jar tree for the current folder.

    \b
    Markers:
      [cycle detected]   the jar already appears higher up on this branch
      [unresolved: ...]  the declared jar could not be read
      (Not a mod)        the embedded jar has no fabric.mod.json
    """
    catalog, graph = load_scan(options)
    forest = render_forest(graph, reverse=reverse, needle=needle)

    if not forest:
        if needle:
            click.echo("No jars that match the given filter found!")
        elif reverse:
            click.echo("No embedded jars found!")
        else:
            click.echo("No valid jars found!")
    elif use_rich:
        title = "Embedded by" if reverse else "Jar-in-Jar"
        console.print(to_rich_tree(forest, title=title))
    else:
        for line in format_lines(forest):
            click.echo(line)

    echo_issues([*catalog.issues, *graph.issues])
