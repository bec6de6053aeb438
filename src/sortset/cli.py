from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import load_config
from .dataset import Dataset
from .generator import pool_size, swap_count
from .kinds import Datatype
from .logs import configure_logging
from .plotting import plot_dataset, plot_kinds
from .shape import violations
from .summarize import summarize_survey
from .survey import run_survey

app = typer.Typer(
    help="sortset CLI: generate integral test datasets (random, sorted, reverse-sorted, nearly-sorted, few-unique) for sorting benchmarks.",
    rich_markup_mode="rich",
)
console = Console()
err_console = Console(stderr=True)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging on stderr"),
):
    configure_logging(logging.DEBUG if verbose else logging.WARNING)


def _build(length: int, kind: Datatype, min_value: int, max_value: int, dtype: str, seed: Optional[int]) -> Dataset:
    try:
        return Dataset(length, kind, min_value, max_value, dtype=dtype, seed=seed)
    except (ValueError, TypeError) as e:
        err_console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(2)


@app.command()
def generate(
    length: int = typer.Option(20, "--length", "-n", help="Number of elements"),
    kind: Datatype = typer.Option(Datatype.RANDOM, case_sensitive=False, help="Distribution kind"),
    min_value: int = typer.Option(0, "--min", help="Inclusive lower bound"),
    max_value: int = typer.Option(1000, "--max", help="Inclusive upper bound"),
    dtype: str = typer.Option("int64", help="NumPy integer dtype of the elements"),
    seed: Optional[int] = typer.Option(None, help="Seed for reproducible output (default: fresh entropy)"),
):
    """Print one dataset as whitespace separated values.

    [bold]Example:[/bold]
        sortset generate --length 20 --kind nearly_sorted --max 100
    """
    data = _build(length, kind, min_value, max_value, dtype, seed)
    data.display(sys.stdout)


@app.command()
def describe(
    length: int = typer.Option(1000, "--length", "-n", help="Number of elements"),
    kind: Datatype = typer.Option(Datatype.RANDOM, case_sensitive=False, help="Distribution kind"),
    min_value: int = typer.Option(0, "--min", help="Inclusive lower bound"),
    max_value: int = typer.Option(1000, "--max", help="Inclusive upper bound"),
    dtype: str = typer.Option("int64", help="NumPy integer dtype of the elements"),
    seed: Optional[int] = typer.Option(None, help="Seed for reproducible output (default: fresh entropy)"),
    repeats: int = typer.Option(5, "--repeats", "-r", min=1, help="Number of regenerations to measure"),
):
    """Measure the shape of several draws and check them against the kind's invariants."""
    data = _build(length, kind, min_value, max_value, dtype, seed)

    table = Table(title=f"{kind.value} x{length} in [{min_value}, {max_value}]")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Min", justify="right")
    table.add_column("Max", justify="right")
    table.add_column("Distinct", justify="right")
    table.add_column("Displaced", justify="right")
    table.add_column("Check")

    bad = 0
    for i in range(repeats):
        if i:
            data.regenerate(min_value, max_value)
        info = data.describe()
        problems = violations(data.view(), kind, min_value, max_value)
        bad += bool(problems)
        table.add_row(
            str(i + 1),
            str(info["min"]),
            str(info["max"]),
            str(info["distinct"]),
            str(info["displaced"]),
            "[green]✓ ok[/green]" if not problems else "[red]✗ " + "; ".join(problems) + "[/red]",
        )
    console.print(table)
    if bad:
        raise typer.Exit(1)


@app.command()
def kinds():
    """List the dataset kinds and how each one is produced."""
    table = Table(title="Dataset kinds")
    table.add_column("Kind", style="bold")
    table.add_column("Shape")
    table.add_column("Parameter", justify="right")
    rows = {
        Datatype.RANDOM: ("independent uniform draws", "-"),
        Datatype.SORTED: ("uniform draws, ascending", "-"),
        Datatype.REVERSE_SORTED: ("uniform draws, descending", "-"),
        Datatype.NEARLY_SORTED: ("ascending, then a few random swaps", "swaps = ⌊n^¼⌋"),
        Datatype.FEW_UNIQUE: ("copies of a small sampled pool", "pool = ⌊√n⌋"),
    }
    for kind, (shape, param) in rows.items():
        table.add_row(kind.value, shape, param)
    console.print(table)
    console.print(
        f"[dim]n = 1024 gives {swap_count(1024)} swaps and a pool of {pool_size(1024)} values.[/dim]"
    )


@app.command()
def survey(
    config: Path = typer.Option(..., exists=True, dir_okay=False, help="Path to YAML survey config"),
    out_dir: Path = typer.Option(Path("artifacts"), help="Directory for survey records"),
    seed: Optional[int] = typer.Option(None, help="Seed overriding the config (default: config seed or fresh entropy)"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress progress output"),
):
    """Generate every configured grid point and record shape metrics as JSONL.

    [bold]Example:[/bold]
        sortset survey --config examples/survey.yaml --out-dir artifacts
    """
    try:
        cfg = load_config(config)
    except (ValueError, TypeError) as e:
        err_console.print(f"[red]✗[/red] Invalid config {config}: {e}")
        raise typer.Exit(2)
    out_dir.mkdir(parents=True, exist_ok=True)
    results_path = out_dir / "survey.jsonl"

    if not quiet:
        console.rule("[bold blue]sortset - Dataset Survey[/bold blue]")
        console.print(f"[dim]Config:[/dim] {config}")
        console.print(f"[dim]Output:[/dim] {out_dir}")

    bad = run_survey(cfg, results_path, seed=seed)

    if not quiet:
        console.print(f"[green]✓[/green] Wrote records to [bold]{results_path}[/bold]")
        console.print("[dim]Next step:[/dim]")
        console.print(f"  sortset summarize --runs {results_path}")
    if bad:
        console.print(Panel(
            f"[red bold]⚠ {bad} record(s) were not ok.[/red bold]\n\n"
            "Inspect the JSONL records for the violations or errors.",
            title="Survey Alert",
            border_style="red",
        ))
        raise typer.Exit(1)


@app.command()
def summarize(
    runs: Path = typer.Option(Path("artifacts/survey.jsonl"), exists=True, dir_okay=False),
    out_csv: Path = typer.Option(Path("artifacts/summary.csv"), dir_okay=False),
):
    """Summarize survey JSONL into CSV with medians and means per kind and length."""
    df = summarize_survey(runs)
    out_csv.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out_csv, index=False)
    console.print(f"Wrote summary to {out_csv}")


@app.command()
def plot(
    length: int = typer.Option(200, "--length", "-n", help="Number of elements per kind"),
    min_value: int = typer.Option(0, "--min", help="Inclusive lower bound"),
    max_value: int = typer.Option(1000, "--max", help="Inclusive upper bound"),
    seed: Optional[int] = typer.Option(None, help="Seed for reproducible output"),
    kind: Optional[Datatype] = typer.Option(None, case_sensitive=False, help="Chart only this kind"),
    out_html: Path = typer.Option(Path("artifacts/kinds.html"), help="Output path for the chart"),
):
    """Chart one dataset of every kind side by side, or of a single kind."""
    try:
        if kind is not None:
            data = Dataset(length, kind, min_value, max_value, seed=seed)
            chart = plot_dataset(data.view(), title=f"{kind.value} x{length}")
        else:
            chart = plot_kinds(length, min_value, max_value, seed=seed)
    except (ValueError, TypeError) as e:
        err_console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(2)
    out_html.parent.mkdir(parents=True, exist_ok=True)
    chart.save(out_html)
    console.print(f"[green]✓[/green] Chart saved to [bold]{out_html}[/bold]")


if __name__ == "__main__":
    app()
