"""Iris CLI — command-line interface for underwriter appetite matching.

Scores a client profile against a file of appetite records and prints the
ranked results.  Uses Typer for argument parsing and Rich for formatted
terminal output.

Usage::

    python -m iris.cli --help
    python -m iris.cli match --client client.json --records appetites.json
    python -m iris.cli score --client client.json --records appetites.json --underwriter "Hiscox"
    python -m iris.cli config
    python -m iris.cli serve --port 8002
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from iris.config import settings
from iris.matching import (
    AppetiteDataError,
    AppetiteScorer,
    MatchResult,
    ScoringConfig,
    load_appetite_records,
    load_client_profile,
)

# ---------------------------------------------------------------------------
# App & console setup
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="iris",
    help="Iris appetite matching CLI — rank underwriters for a client risk profile.",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True, style="bold red")

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("iris.cli")

_CONFIDENCE_COLORS = {"high": "green", "medium": "yellow", "low": "red"}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _build_scorer(nearest_misses: Optional[int] = None) -> AppetiteScorer:
    config = ScoringConfig.from_settings(settings)
    if nearest_misses is not None:
        config = config.model_copy(update={"nearest_miss_limit": nearest_misses})
    return AppetiteScorer(config)


def _matches_table(title: str, matches: list[MatchResult], start: int = 1) -> Table:
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Rank", style="dim", width=6)
    table.add_column("Underwriter", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Confidence", justify="center")
    table.add_column("Approach")
    table.add_column("Concerns", style="yellow")

    for i, m in enumerate(matches, start):
        color = _CONFIDENCE_COLORS.get(m.confidence_level, "white")
        table.add_row(
            str(i),
            m.underwriter_name,
            str(m.match_score),
            f"[{color}]{m.confidence_level}[/{color}]",
            m.recommended_approach,
            "\n".join(m.concerns) or "-",
        )
    return table


def _print_match_detail(match: MatchResult) -> None:
    color = _CONFIDENCE_COLORS.get(match.confidence_level, "white")
    console.print(
        Panel(
            f"[bold cyan]{match.underwriter_name}[/bold cyan]\n"
            f"Score: [bold]{match.match_score}[/bold]/100  "
            f"Confidence: [{color}]{match.confidence_level}[/{color}]\n"
            f"{match.recommended_approach}",
            title="Match",
            expand=False,
        )
    )

    breakdown = Table(title="Appetite Alignment", box=box.SIMPLE)
    breakdown.add_column("Dimension", style="cyan")
    breakdown.add_column("Fit", justify="right")
    for name, value in match.alignment_breakdown.model_dump().items():
        breakdown.add_row(name.replace("_", " ").title(), str(value))
    console.print(breakdown)

    for reason in match.match_reasons:
        console.print(f"  [green]+ {reason}[/green]")
    for concern in match.concerns:
        console.print(f"  [yellow]- {concern}[/yellow]")


# ---------------------------------------------------------------------------
# Command: match
# ---------------------------------------------------------------------------


@app.command("match")
def match(
    client: Path = typer.Option(..., "--client", "-c", help="Client profile JSON file"),
    records: Path = typer.Option(..., "--records", "-r", help="Appetite records JSON file"),
    nearest_misses: Optional[int] = typer.Option(
        None, "--nearest-misses", min=0, help="Number of nearest misses to show"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the ranked result as JSON"),
) -> None:
    """Rank every underwriter in the records file for a client.

    Examples:

      iris match --client acme.json --records appetites.json

      iris match -c acme.json -r appetites.json --nearest-misses 5 --json
    """
    try:
        profile = load_client_profile(client)
        appetite_records = load_appetite_records(records)
    except AppetiteDataError as exc:
        logger.error("CLI match command failed: %s", exc)
        err_console.print(f"Match failed: {exc}")
        raise typer.Exit(1)

    ranked = _build_scorer(nearest_misses).rank(profile, appetite_records)

    if as_json:
        typer.echo(ranked.model_dump_json(indent=2))
        return

    console.print(
        Panel(
            f"[bold cyan]Iris Appetite Matcher[/bold cyan]\n"
            f"Client: [yellow]{profile.client_name or 'unnamed'}[/yellow]  "
            f"Industry: [yellow]{profile.industry or 'unknown'}[/yellow]  "
            f"Revenue: [yellow]{profile.revenue_band or 'unknown'}[/yellow]  "
            f"Risk: [yellow]{profile.risk_profile or 'unknown'}[/yellow]",
            title="Match",
            expand=False,
        )
    )

    if ranked.total_evaluated == 0:
        console.print("[yellow]No appetite records found.[/yellow]")
        return

    if ranked.top_matches:
        console.print(_matches_table("Strong Matches", ranked.top_matches))
    else:
        console.print("[yellow]No strong appetite matches for this client.[/yellow]")

    if ranked.nearest_misses:
        console.print(_matches_table("Nearest Misses", ranked.nearest_misses))

    console.print(f"[dim]{ranked.total_evaluated} underwriter(s) evaluated.[/dim]")


# ---------------------------------------------------------------------------
# Command: score
# ---------------------------------------------------------------------------


@app.command("score")
def score(
    client: Path = typer.Option(..., "--client", "-c", help="Client profile JSON file"),
    records: Path = typer.Option(..., "--records", "-r", help="Appetite records JSON file"),
    underwriter: str = typer.Option(..., "--underwriter", "-u", help="Underwriter name"),
    as_json: bool = typer.Option(False, "--json", help="Print the match as JSON"),
) -> None:
    """Show the full scoring breakdown for one underwriter."""
    try:
        profile = load_client_profile(client)
        appetite_records = load_appetite_records(records)
    except AppetiteDataError as exc:
        logger.error("CLI score command failed: %s", exc)
        err_console.print(f"Score failed: {exc}")
        raise typer.Exit(1)

    wanted = underwriter.strip().casefold()
    record = next(
        (r for r in appetite_records if r.underwriter_name.casefold() == wanted),
        None,
    )
    if record is None:
        logger.warning("Underwriter %r not found in %s", underwriter, records)
        err_console.print(f"Underwriter not found in {records}: {underwriter}")
        raise typer.Exit(1)

    result = _build_scorer().score(profile, record)
    if as_json:
        typer.echo(result.model_dump_json(indent=2))
        return
    _print_match_detail(result)


# ---------------------------------------------------------------------------
# Command: config
# ---------------------------------------------------------------------------


@app.command("config")
def show_config(
    as_json: bool = typer.Option(False, "--json", help="Print the configuration as JSON"),
) -> None:
    """Print the active scoring configuration."""
    config = ScoringConfig.from_settings(settings)
    dumped = config.model_dump(mode="json")
    if as_json:
        typer.echo(json.dumps(dumped, indent=2, ensure_ascii=False))
        return

    table = Table(title="Scoring Configuration", box=box.SIMPLE)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in dumped.items():
        if isinstance(value, dict) and set(value) == {"fit", "points"}:
            value = f"fit {value['fit']}, +{value['points']} pts"
        table.add_row(key, str(value))
    console.print(table)


# ---------------------------------------------------------------------------
# Command: serve
# ---------------------------------------------------------------------------


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", help="Port (default: IRIS_API_PORT)"),
) -> None:
    """Run the matching API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "iris.api.routes:app",
        host=host,
        port=port or settings.iris_api_port,
        log_level=settings.log_level.lower(),
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    app()
