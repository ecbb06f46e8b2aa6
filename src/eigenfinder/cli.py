"""
Command-line interface for Eigenfinder.

Usage:
    eigenfinder solve "4 -2; 1 1"     Eigenpairs of a square matrix
    eigenfinder qr "1 2 3; 4 5 6"     Householder QR decomposition
    eigenfinder presets               Show solver configuration presets
"""

import json
import logging
import sys
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from eigenfinder import __version__
from eigenfinder.algorithms import (
    EIGENVECTOR_METHODS,
    Matrix,
    Vector,
    decompose,
    solve as solve_eigenpairs,
)
from eigenfinder.data import (
    eigenpairs_to_payload,
    format_complex,
    get_config,
    list_presets,
    parse_matrix_text,
)
from eigenfinder.errors import EigenfinderError

app = typer.Typer(
    name="eigenfinder",
    help="Eigenvalues and eigenvectors by the unshifted QR algorithm",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"eigenfinder version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _read_matrix(source: str, *, square: bool = True) -> Matrix:
    """Parse MATRIX argument, reading stdin for '-'."""
    text = sys.stdin.read() if source == "-" else source
    try:
        return parse_matrix_text(text, square=square)
    except EigenfinderError as exc:
        err_console.print(f"[red]Error:[/] {exc}")
        raise typer.Exit(code=2) from exc


def _matrix_table(title: str, matrix: Matrix) -> Table:
    table = Table(title=title, show_header=False)
    for _ in range(matrix.column_count):
        table.add_column(justify="right")
    for row in matrix:
        table.add_row(*[format_complex(z) for z in row])
    return table


@app.callback()  # type: ignore[misc]
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Eigenfinder - QR-algorithm eigenvalue solver."""
    pass


@app.command()  # type: ignore[misc]
def solve(
    matrix: Annotated[
        str,
        typer.Argument(help="Square matrix, e.g. '4 -2; 1 1' (use '-' for stdin)"),
    ],
    preset: Annotated[
        str,
        typer.Option("--preset", "-p", help="Configuration preset"),
    ] = "default",
    max_iterations: Annotated[
        int | None,
        typer.Option("--max-iter", "-i", help="Maximum QR iterations"),
    ] = None,
    tolerance: Annotated[
        float | None,
        typer.Option("--tolerance", "-t", help="Convergence tolerance"),
    ] = None,
    method: Annotated[
        str,
        typer.Option("--method", "-m", help="Eigenvector method: schur or inverse_iteration"),
    ] = "schur",
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the API response payload as JSON"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging"),
    ] = False,
) -> None:
    """Compute eigenvalues and eigenvectors of a square matrix."""
    _configure_logging(verbose)
    A = _read_matrix(matrix)

    if method not in EIGENVECTOR_METHODS:
        valid = list(EIGENVECTOR_METHODS)
        err_console.print(f"[red]Error:[/] unknown method '{method}'. Valid: {valid}")
        raise typer.Exit(code=2)

    try:
        config = get_config(preset).with_overrides(
            max_iterations=max_iterations,
            tolerance=tolerance,
        )
    except EigenfinderError as exc:
        err_console.print(f"[red]Error:[/] {exc}")
        raise typer.Exit(code=2) from exc

    trace = solve_eigenpairs(A, config, eigenvector_method=method)

    if as_json:
        console.print_json(json.dumps(eigenpairs_to_payload(trace.eigenpairs)))
        return

    table = Table(title=f"Eigenpairs ({A.row_count}×{A.column_count})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Eigenvalue", style="cyan", no_wrap=True)
    table.add_column("Eigenvector")
    table.add_column("Residual", justify="right")

    for i, pair in enumerate(trace.eigenpairs):
        vector = Vector.from_column(pair.eigenvector, 0)
        table.add_row(
            str(i),
            format_complex(pair.eigenvalue),
            "[" + ", ".join(format_complex(z) for z in vector) + "]",
            f"{pair.residual(A):.2e}",
        )

    console.print(table)
    console.print(f"  Iterations: {trace.iterations}")
    if trace.converged:
        console.print("  [green]Converged[/]")
    else:
        console.print(
            f"\n[yellow]Note:[/] did not converge within {config.max_iterations} iterations "
            f"(max sub-diagonal {trace.final_off_diagonal:.2e}). "
            "Values from 2×2 blocks are still reported."
        )
    if method == "schur":
        console.print(
            "  [dim]Eigenvectors are Schur vectors paired by position; "
            "use --method inverse_iteration for per-eigenvalue vectors.[/]"
        )


@app.command()  # type: ignore[misc]
def qr(
    matrix: Annotated[
        str,
        typer.Argument(help="Matrix, e.g. '1 2; 3 4; 5 6' (use '-' for stdin)"),
    ],
    unitary: Annotated[
        bool,
        typer.Option("--unitary", help="Use conjugate transposes (complex input)"),
    ] = False,
) -> None:
    """Householder QR decomposition (rectangular input accepted)."""
    A = _read_matrix(matrix, square=False)

    result = decompose(A, unitary=unitary)
    error = (result.reconstruct() - A).frobenius_norm()

    console.print(_matrix_table("Q", result.q))
    console.print(_matrix_table("R", result.r))
    console.print(f"  Reflections: {result.reflections}")
    console.print(f"  ‖QR − A‖_F: {error:.2e}")


@app.command()  # type: ignore[misc]
def presets() -> None:
    """Display the available solver configuration presets."""
    table = Table(title="Solver Presets")

    table.add_column("Preset", style="cyan", no_wrap=True)
    table.add_column("Epsilon", justify="right")
    table.add_column("Tolerance", justify="right")
    table.add_column("Max iterations", justify="right")
    table.add_column("Unitary", justify="center")

    for preset in list_presets():
        config = get_config(preset)
        table.add_row(
            preset.value,
            f"{config.epsilon:.0e}",
            f"{config.tolerance:.0e}",
            str(config.max_iterations),
            "✓" if config.unitary else "✗",
        )

    console.print(table)


if __name__ == "__main__":
    app()
