"""
Main CLI entry point for pydecenttree.

Provides subcommands:
- tree: Build trees from distance matrices and list algorithms
"""

from __future__ import annotations

import typer
from rich import print as rprint

from pydecenttree import __version__

app = typer.Typer(
    name="pydecenttree",
    help="Distance-matrix phylogenetic tree construction",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        rprint(f"pydecenttree version {__version__}")
        raise typer.Exit


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """
    pydecenttree: build phylogenetic trees from distance matrices with
    NJ, BIONJ or UPGMA.
    """


# Import subcommands
from pydecenttree.cli import tree

# Register subcommands
app.add_typer(tree.app, name="tree")


if __name__ == "__main__":
    app()
