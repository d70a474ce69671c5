"""Lighthouse CLI entry point - assembles all command groups."""
import click

from lighthouse import __version__

from .offline_cmd import offline


@click.group()
@click.version_option(version=__version__)
def cli():
    """Lighthouse: offline outbox for the study tracker."""
    pass


cli.add_command(offline)


if __name__ == "__main__":
    cli()
