"""
modlens CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

from pathlib import Path

import click

from ..config import DEFAULT_WORKERS
from .commands import access_widener, jar_in_jar, mixin, raw
from .utils import ScanOptions, configure_logging


@click.group()
@click.version_option(package_name="modlens")
@click.option("-d", "--directory", default=".", type=click.Path(file_okay=False),
              help="Folder containing the mod jars (default: current folder)")
@click.option("-j", "--jobs", default=DEFAULT_WORKERS, type=click.IntRange(min=1),
              help="Number of jars read in parallel")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
@click.pass_context
def main(ctx: click.Context, directory: str, jobs: int, verbose: bool):
    """modlens: inspect the Fabric mods in a folder.

    Reads every .jar in the folder (not recursively) without modifying it.

    \b
    Quick Start:
      modlens mixin --filter MinecraftClient
      modlens jij
      modlens jij --reverse --filter fabric-api
      modlens aw --filter net/minecraft/class_1937
    """
    configure_logging(verbose)
    ctx.obj = ScanOptions(directory=Path(directory), jobs=jobs)


# Register commands
main.add_command(mixin.mixin)
main.add_command(jar_in_jar.jar_in_jar, name="jar-in-jar")
main.add_command(jar_in_jar.jar_in_jar, name="jij")
main.add_command(access_widener.access_widener, name="access-widener")
main.add_command(access_widener.access_widener, name="aw")
main.add_command(raw.raw)

if __name__ == "__main__":
    main()
