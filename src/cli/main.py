"""
CLI entry point: roundtrip analyze | export | show.

Every command loads config from --config (default config.yaml, or
$ROUNDTRIP_CONFIG), loads fills, reconstructs round-trip positions and
prints them. analyze also appends results to the journal.
"""

import json
import logging
import sys

import click
from dotenv import load_dotenv

from config import AppConfig, load_config

load_dotenv()

logger = logging.getLogger("roundtrip")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s  %(message)s",
        stream=sys.stderr,
    )


def _load(ctx: click.Context) -> AppConfig:
    try:
        return load_config(ctx.obj["config_path"])
    except (FileNotFoundError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc


def _reconstruct(cfg: AppConfig, fills_path: str | None, skip_invalid: bool):
    """Load fills from the configured source and run the engine."""
    from cli.structured_log import StructuredEventLogger
    from data import FillNormalizationError, FillSourceError, JsonFileFillSource
    from roundtrip_core import reconstruct

    path = fills_path or cfg.data.fills_path
    events = StructuredEventLogger(str(path), enabled=cfg.alerting.structured_logs)
    try:
        result = JsonFileFillSource(path).fetch(
            symbol_filter=cfg.data.symbol_filter,
            strict=not (skip_invalid or cfg.data.skip_invalid),
        )
    except (FillSourceError, FillNormalizationError) as exc:
        events.error("Failed to load fills", detail=str(exc))
        raise click.ClickException(str(exc)) from exc

    analysis = reconstruct(
        result.fills,
        zero_tolerance=cfg.engine.zero_tolerance,
        id_assignment=cfg.engine.id_assignment,
    )
    return result, analysis, events


@click.group()
@click.option(
    "--config", "config_path", default="config.yaml", envvar="ROUNDTRIP_CONFIG",
    show_envvar=True, help="Path to config file.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Debug logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: str, verbose: bool) -> None:
    """roundtrip: reconstruct round-trip positions and exact PnL from trade fills."""
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


# ---------- roundtrip analyze ----------


@cli.command()
@click.option("--fills", "fills_path", default=None, help="Fills JSON file (overrides data.fills_path).")
@click.option("--journal/--no-journal", default=True, help="Append results to the journal.")
@click.option("--skip-invalid", is_flag=True, default=False, help="Skip malformed fill records instead of failing.")
@click.pass_context
def analyze(ctx: click.Context, fills_path: str | None, journal: bool, skip_invalid: bool) -> None:
    """Reconstruct positions and print the table, open positions and summary."""
    cfg = _load(ctx)
    from cli.output import (
        format_no_positions,
        format_open_segments,
        format_positions_table,
        format_summary,
    )
    from journal import JournalWriter

    result, analysis, events = _reconstruct(cfg, fills_path, skip_invalid)
    events.run_start(fills=len(result.fills), symbols=result.symbols)

    if analysis.positions:
        click.echo(f"Found {len(analysis.positions)} completed position(s):\n")
        click.echo(format_positions_table(analysis.positions))
    else:
        click.echo(format_no_positions())
    click.echo("")
    click.echo(format_open_segments(analysis.open_segments))
    click.echo("")
    click.echo(format_summary(analysis.summary))

    for position in analysis.positions:
        events.position_closed(position)
    for segment in analysis.open_segments.values():
        events.open_segment(segment)
    events.run_complete(analysis.summary, open_segments=len(analysis.open_segments))

    if journal:
        writer = JournalWriter(cfg.journal.path, echo_stdout=cfg.journal.echo_stdout)
        for position in analysis.positions:
            writer.position(position, source=result.source)
        for segment in analysis.open_segments.values():
            writer.open_segment(segment, source=result.source)
        writer.summary(analysis.summary, source=result.source)
        logger.info("Journal updated: %s", writer.path)


# ---------- roundtrip export ----------


@cli.command()
@click.option("--fills", "fills_path", default=None, help="Fills JSON file (overrides data.fills_path).")
@click.option("--output", "output_path", default=None, type=click.Path(dir_okay=False), help="Write JSON here instead of stdout.")
@click.option("--skip-invalid", is_flag=True, default=False, help="Skip malformed fill records instead of failing.")
@click.pass_context
def export(ctx: click.Context, fills_path: str | None, output_path: str | None, skip_invalid: bool) -> None:
    """Export positions as detailed JSON records with their executions."""
    cfg = _load(ctx)
    from cli.output import positions_to_records

    _, analysis, _ = _reconstruct(cfg, fills_path, skip_invalid)
    text = json.dumps(positions_to_records(analysis.positions), indent=2)
    if output_path:
        with open(output_path, "w") as f:
            f.write(text + "\n")
        click.echo(f"Wrote {len(analysis.positions)} position(s) to {output_path}")
    else:
        click.echo(text)


# ---------- roundtrip show ----------


@cli.command()
@click.argument("position_id", type=int)
@click.option("--fills", "fills_path", default=None, help="Fills JSON file (overrides data.fills_path).")
@click.option("--skip-invalid", is_flag=True, default=False, help="Skip malformed fill records instead of failing.")
@click.pass_context
def show(ctx: click.Context, position_id: int, fills_path: str | None, skip_invalid: bool) -> None:
    """Show one position's breakdown and its executions."""
    cfg = _load(ctx)
    from cli.output import format_position_detail

    _, analysis, _ = _reconstruct(cfg, fills_path, skip_invalid)
    position = analysis.get(position_id)
    if position is None:
        raise click.ClickException(
            f"No position #{position_id} ({len(analysis.positions)} completed position(s) found)"
        )
    click.echo(format_position_detail(position))


if __name__ == "__main__":
    cli()
