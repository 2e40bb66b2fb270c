# src/clusterinfo/cli/main.py
"""
This module is the main entry point for the clusterinfo CLI.

It aggregates all commands from the submodules (start, reconcile, show).
"""

import logging

import typer

from ..core.config import config
from . import reconcile, show, start

logging.basicConfig(
    level=config.LOG_LEVEL.upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


app = typer.Typer(
    name="clusterinfo",
    help="Keep per-deployment cluster topology and hardware cost in sync with the node inventory.",
    add_completion=False,
)


def version_callback(value: bool):
    """
    Prints the version of clusterinfo.
    """
    if value:
        from .. import __version__

        typer.echo(f"clusterinfo version: {__version__}")
        raise typer.Exit()


@app.command()
def version():
    """
    Show the version of clusterinfo.
    """
    from .. import __version__

    typer.echo(f"clusterinfo version: {__version__}")


@app.command()
def api():
    """
    Serve the read-only cluster info API.
    """
    from ..api.app import main as api_main

    api_main()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
):
    """
    clusterinfo CLI main entry point.
    """
    pass


app.add_typer(start.app, name="start")
app.add_typer(reconcile.app, name="reconcile")
app.add_typer(show.app, name="show")


if __name__ == "__main__":
    app()
