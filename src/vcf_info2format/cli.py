"""vcf-info2format: move INFO fields of a single-sample VCF into FORMAT fields."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import ConfigValidationError, TransferConfig, load_config
from .errors import TransferError
from .pipeline import TransferPipeline
from .reporting import DEFAULT_REPORT_INTERVAL, LoggingReporter, RichProgressReporter


def version_callback(value: bool) -> None:
    if value:
        print(__version__)
        raise typer.Exit()


app = typer.Typer(
    name="vcf-info2format",
    help="Copy INFO fields of a single-sample VCF into FORMAT fields",
    add_completion=False,
)
# VCF output may go to STDOUT, so everything for humans goes to STDERR
console = Console(stderr=True, soft_wrap=True)


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", callback=version_callback, is_eager=True, help="Show version and exit"
        ),
    ] = None,
) -> None:
    pass


def setup_logging(verbosity: int, quiet: bool, log_level: str | None = None) -> int:
    """Configure logging from the ``-v`` count, ``--quiet`` or a configured level."""
    if quiet:
        level = logging.ERROR
    elif verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    elif log_level:
        level = getattr(logging, log_level.upper(), logging.WARNING)
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("vcf_info2format").setLevel(level)
    return level


@app.command()
def transfer(
    input_path: Annotated[
        str | None,
        typer.Option("--input", "-i", help='Path to the input VCF or "-" to read from STDIN'),
    ] = None,
    output_path: Annotated[
        str | None,
        typer.Option("--output", "-o", help='Path to the output VCF or "-" to write to STDOUT'),
    ] = None,
    fields: Annotated[
        list[str] | None,
        typer.Option("--field", "-f", help="INFO field to copy over to FORMAT (repeatable)"),
    ] = None,
    qual: bool = typer.Option(False, "--qual", "-q", help="Transfer also QUAL into FORMAT"),
    verbose: int = typer.Option(
        0, "--verbose", "-v", count=True, help="Verbose output (-v info, -vv debug)"
    ),
    verbose_report: int | None = typer.Option(
        None,
        "--verbose-report",
        min=1,
        help=f"How often to report progress, in records [default: {DEFAULT_REPORT_INTERVAL}]",
    ),
    config_file: Annotated[
        Path | None, typer.Option("--config", "-c", help="TOML configuration file")
    ] = None,
    log_file: Annotated[Path | None, typer.Option("--log", help="Write log to file")] = None,
    quiet: bool = typer.Option(False, "--quiet", help="Suppress non-error output"),
    progress: bool = typer.Option(True, "--progress/--no-progress", help="Show progress spinner"),
) -> None:
    """Move INFO fields into FORMAT fields of the single sample.

    Each --field must be declared as INFO in the input header. The fields are
    removed from INFO and written as FORMAT values; --qual adds a QUAL FORMAT
    field holding the record's quality score.
    """
    overrides: dict = {}
    if input_path is not None:
        overrides["input_path"] = input_path
    if output_path is not None:
        overrides["output_path"] = output_path
    if fields:
        overrides["fields"] = list(fields)
    if qual:
        overrides["transfer_qual"] = True
    if verbose_report is not None:
        overrides["report_interval"] = verbose_report

    if config_file:
        try:
            config = load_config(config_file, overrides)
        except (ConfigValidationError, FileNotFoundError) as e:
            console.print(f"[red]Configuration Error: {escape(str(e))}[/red]")
            raise typer.Exit(1) from None
    else:
        config = TransferConfig(**overrides)

    setup_logging(verbose, quiet, config.log_level if config_file else None)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        logging.getLogger("vcf_info2format").addHandler(file_handler)

    if not config.has_work:
        console.print(
            "[red]Error: No field for conversion identified. Use '-q' or '-f' options[/red]"
        )
        raise typer.Exit(1)

    if input_path is None and not config_file:
        console.print("[red]Error: Missing option '--input'[/red]")
        raise typer.Exit(1)
    if output_path is None and not config_file:
        console.print("[red]Error: Missing option '--output'[/red]")
        raise typer.Exit(1)

    if progress and not quiet and console.is_terminal:
        reporter = RichProgressReporter(console, config.report_interval)
    else:
        reporter = LoggingReporter(config.report_interval)

    pipeline = TransferPipeline(config, reporter)
    try:
        result = pipeline.run()
    except (TransferError, OSError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from None

    if not quiet:
        console.print(
            f"[green]✓[/green] Transferred fields for {result.records_transformed:,} records"
        )
        moved = result.fields + (["QUAL"] if result.transfer_qual else [])
        console.print(f"  Fields: {', '.join(moved)}")
