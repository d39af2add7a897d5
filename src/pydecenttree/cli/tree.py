"""
Tree commands for building phylogenetic trees from distance matrices.

Provides subcommands:
- build: Build a Newick tree from a PHYLIP or CSV/TSV distance matrix
- algorithms: List the registered tree-construction algorithms
"""
from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pydecenttree.cli.utils import QuietConsole, configure_logging, spinner_progress

app = typer.Typer(
    name="tree",
    help="Build phylogenetic trees from distance matrices",
    no_args_is_help=True,
)

console = Console()


@app.command(name="build")
def build(
    algorithm: str = typer.Option(
        "NJ",
        "--algorithm",
        "-a",
        help="Tree construction algorithm (see 'pydecenttree tree algorithms')",
    ),
    matrix: Path = typer.Option(
        ...,
        "--matrix",
        "-m",
        help="Distance matrix: PHYLIP (.phy, .dist, ...) or CSV/TSV with names in the first column",
        exists=True,
        dir_okay=False,
    ),
    output: Path = typer.Option(
        ...,
        "--output",
        "-o",
        help="Output Newick tree file",
    ),
    threads: int | None = typer.Option(
        None,
        "--threads",
        "-t",
        help="Worker threads (0 = default)",
    ),
    precision: int | None = typer.Option(
        None,
        "--precision",
        "-p",
        help="Decimal digits for branch lengths (default: 6)",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML file with construction options",
        exists=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show the algorithm's progress messages",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress progress output",
    ),
) -> None:
    """
    Build a phylogenetic tree from a distance matrix.

    Examples:

        # NJ tree from a PHYLIP distance matrix
        pydecenttree tree build --matrix dist.phy --output tree.nwk

        # BIONJ with 4 threads and 8 digit branch lengths
        pydecenttree tree build -a BIONJ -m dist.phy -o tree.nwk -t 4 -p 8

        # UPGMA from a CSV matrix
        pydecenttree tree build -a UPGMA -m dist.csv -o tree.nwk
    """
    import yaml

    from pydecenttree.api import construct_tree
    from pydecenttree.core.exceptions import DecentTreeError
    from pydecenttree.core.io_utils import read_distance_matrix, write_newick
    from pydecenttree.models.config import ConstructionOptions

    out = QuietConsole(console, quiet=quiet)
    configure_logging(console, verbose)

    out.print("\n[bold blue]pydecenttree Tree Builder[/bold blue]\n")
    out.print(f"[bold]Algorithm:[/bold] {algorithm}")

    try:
        options = ConstructionOptions.from_yaml(config) if config else ConstructionOptions()
        options = options.merged(
            number_of_threads=threads,
            precision=precision,
            verbosity=1 if verbose else None,
        )
    except (ValueError, yaml.YAMLError) as e:
        out.console.print(f"[red]Error: invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from None

    out.print(f"[bold]Distance matrix:[/bold] {matrix}")
    try:
        distances = read_distance_matrix(matrix)
    except DecentTreeError as e:
        out.console.print(f"[red]{escape(e.message)}[/red]")
        raise typer.Exit(code=1) from None

    out.print(f"[bold]Sequences:[/bold] {distances.size}")

    try:
        with spinner_progress(
            f"Building {algorithm} tree from {distances.size} sequences...",
            console,
            quiet or verbose,
        ):
            newick = construct_tree(
                algorithm,
                distances.labels,
                distances.matrix,
                number_of_threads=options.number_of_threads,
                precision=options.precision,
                verbosity=options.verbosity,
            )
    except DecentTreeError as e:
        out.console.print(f"[red]{escape(e.message)}[/red]")
        if e.suggestion:
            out.console.print(f"[dim]{escape(e.suggestion)}[/dim]")
        raise typer.Exit(code=1) from None

    write_newick(newick, output)

    out.print("\n[bold green]Tree built successfully![/bold green]")
    out.print(f"[bold]Output:[/bold] {output}")
    out.print()


@app.command(name="algorithms")
def algorithms() -> None:
    """List the registered tree-construction algorithms."""
    from pydecenttree.core.registry import default_registry

    table = Table(
        title=f"Registered algorithms ({len(default_registry)})",
        show_header=True,
        header_style="bold",
    )
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    for name, description in default_registry.descriptions().items():
        table.add_row(name, description)
    console.print(table)
