from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import AppConfig, dump_config, load_config
from ..core import ConversionError, ConversionService, FileConversion
from ..history import HistoryLog
from ..models import (
    ConversionFailure,
    ConversionMode,
    ConversionOptions,
    ConversionSuccess,
    OutputFormat,
    Statistics,
)

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(help="Markdown <-> HTML conversion toolkit")


def _load_config(path: Path | None) -> AppConfig:
    try:
        return load_config(path)
    except ValueError as exc:
        # tomllib.TOMLDecodeError and bad option values both land here
        err_console.print(f"[red]Invalid configuration[/red]: {escape(str(exc))}")
        raise typer.Exit(1) from exc


def _history_log(cfg: AppConfig) -> HistoryLog:
    return HistoryLog(cfg.runtime.history_path, cfg.runtime.max_history_entries)


def _stats_table(stats: Statistics) -> Table:
    table = Table(title="Conversion statistics")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    for key, value in stats.as_dict().items():
        table.add_row(key, str(value))
    return table


def _run_conversion(
    service: ConversionService,
    file: Path,
    options: ConversionOptions,
    output: Path | None,
    detect: bool,
) -> FileConversion:
    try:
        return service.convert_file(file, options, output=output, detect=detect)
    except ConversionError as exc:
        err_console.print(f"[red]Conversion failed[/red]: {exc.code} - {exc}")
        raise typer.Exit(1) from exc


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def convert(
    file: Path,
    mode: ConversionMode | None = typer.Option(None, "--mode", help="Conversion direction (detected from the file type by default)"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the result to this file"),
    output_format: OutputFormat | None = typer.Option(None, "--format", help="HTML output format"),
    toc: bool | None = typer.Option(None, "--toc/--no-toc", help="Generate a table of contents"),
    tables: bool | None = typer.Option(None, "--tables/--no-tables"),
    strikethrough: bool | None = typer.Option(None, "--strikethrough/--no-strikethrough"),
    task_lists: bool | None = typer.Option(None, "--task-lists/--no-task-lists"),
    autolinks: bool | None = typer.Option(None, "--autolinks/--no-autolinks"),
    sanitize: bool | None = typer.Option(None, "--sanitize/--no-sanitize", help="Strip unsafe HTML"),
    heading_offset: int | None = typer.Option(None, "--heading-offset", min=-5, max=5),
    show_stats: bool = typer.Option(False, "--stats", help="Print conversion statistics"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    cfg = _load_config(config)
    service = ConversionService(cfg)
    options = ConversionOptions.from_mapping(
        {
            "mode": mode,
            "output_format": output_format,
            "generate_toc": toc,
            "enable_tables": tables,
            "enable_strikethrough": strikethrough,
            "enable_task_lists": task_lists,
            "enable_autolinks": autolinks,
            "sanitize_html": sanitize,
            "heading_offset": heading_offset,
        },
        base=cfg.conversion,
    )
    conversion = _run_conversion(service, file, options, output, detect=mode is None)

    match conversion.result:
        case ConversionSuccess(output=text, stats=result_stats):
            if conversion.output_path is not None:
                console.print(f"[green]Success[/green]: {file.name} -> {conversion.output_path}")
            else:
                typer.echo(text)
            if show_stats:
                console.print(_stats_table(result_stats))
        case ConversionFailure(error=message, code=code):
            err_console.print(f"[red]Conversion failed[/red]: {code} - {message}")
            raise typer.Exit(1)


@app.command()
def stats(
    file: Path,
    mode: ConversionMode | None = typer.Option(None, "--mode", help="Conversion direction"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    cfg = _load_config(config)
    service = ConversionService(cfg, record_history=False)
    options = cfg.conversion if mode is None else cfg.conversion.with_mode(mode)
    conversion = _run_conversion(service, file, options, None, detect=mode is None)
    match conversion.result:
        case ConversionSuccess(stats=result_stats):
            console.print(_stats_table(result_stats))
        case ConversionFailure(error=message, code=code):
            err_console.print(f"[red]Conversion failed[/red]: {code} - {message}")
            raise typer.Exit(1)


@app.command()
def history(
    limit: int = typer.Option(20, "--limit", min=1, help="Number of entries to show"),
    export: Path | None = typer.Option(None, "--export", help="Export the history as CSV"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    log = _history_log(_load_config(config))
    if export is not None:
        count = log.export_csv(export)
        console.print(f"Exported {count} entries to {export}")
        return
    entries = log.entries(limit)
    if not entries:
        console.print("No conversion history.")
        return
    table = Table(title="Conversion history")
    table.add_column("Entry")
    table.add_column("When")
    table.add_column("Mode")
    table.add_column("Input", justify="right")
    table.add_column("Output", justify="right")
    for entry in entries:
        row = entry.as_row()
        table.add_row(row[0], row[2], row[3], row[4], row[5])
    console.print(table)


@app.command("clear-history")
def clear_history(
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    log = _history_log(_load_config(config))
    log.clear()
    console.print(f"Removed history at {log.path}")


@app.command("config")
def show_config(
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    typer.echo(dump_config(_load_config(config)))


if __name__ == "__main__":
    app()
