"""
Raw Command - Dump the scan result as JSON.
"""

import json

import click

from ..utils import ScanOptions, load_scan


@click.command()
@click.pass_obj
def raw(options: ScanOptions) -> None:
    """
    Prints raw traversal output.

    Includes every archive read (top-level and embedded), the containment
    edges, skipped archives and all recorded problems.
    """
    catalog, graph = load_scan(options)
    data = graph.to_dict()
    data["skipped"] = catalog.skipped
    data["issues"] = [issue.model_dump() for issue in [*catalog.issues, *graph.issues]]
    click.echo(json.dumps(data, indent=2))
