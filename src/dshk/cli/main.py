"""dshk command-line interface.

Usage::

    dshk --help
    dshk decode <ds_tlm.bin>
    dshk decode <ds_tlm.bin> --format table --apid 0x0B8
    dshk decode <ds_tlm.bin> --format csv --output hk.csv
    dshk version
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click
import structlog
from rich.console import Console

from dshk.__version__ import __version__
from dshk.cli.render import render_record, summary_table
from dshk.core.errors import DecodeError
from dshk.core.reader import ReaderConfig, RecordFileReader
from dshk.models.log import HousekeepingLog
from dshk.observability.logging import configure_logging
from dshk.observability.metrics import DecodeMetrics

console = Console()
log = structlog.get_logger(__name__)


class _IntParam(click.ParamType):
    """Integer option that also accepts hex (``0x0B8``) notation."""

    name = "integer"

    def convert(self, value: object, param: click.Parameter | None, ctx: click.Context | None) -> int:
        if isinstance(value, int):
            return value
        try:
            return int(str(value), 0)
        except ValueError:
            self.fail(f"{value!r} is not a valid integer", param, ctx)


@click.group()
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    show_default=True,
    help="Log verbosity level.",
)
@click.option(
    "--log-format",
    default="console",
    type=click.Choice(["console", "json"], case_sensitive=False),
    show_default=True,
    help="Log output format.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str, log_format: str) -> None:
    """Decode cFS Data Storage housekeeping telemetry dumps."""
    ctx.ensure_object(dict)
    configure_logging(level=log_level, fmt=log_format.lower())  # type: ignore[arg-type]


# --------------------------------------------------------------------------- #
#  dshk version                                                                #
# --------------------------------------------------------------------------- #


@cli.command()
def version() -> None:
    """Print the dshk version."""
    click.echo(f"dshk v{__version__}")


# --------------------------------------------------------------------------- #
#  dshk decode                                                                 #
# --------------------------------------------------------------------------- #


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--apid",
    multiple=True,
    type=_IntParam(),
    help="Only show records with this application ID (repeatable, hex allowed).",
)
@click.option("--max-records", default=None, type=click.IntRange(min=1), help="Stop after N records.")
@click.option(
    "--format",
    "output_format",
    default="text",
    type=click.Choice(["text", "table", "csv"], case_sensitive=False),
    show_default=True,
    help="Output format.",
)
@click.option(
    "--output",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write CSV to this file instead of stdout (csv format only).",
)
def decode(
    file: Path,
    apid: tuple[int, ...],
    max_records: Optional[int],
    output_format: str,
    output: Optional[Path],
) -> None:
    """Decode every record in FILE and print it."""
    cfg = ReaderConfig(
        path=file,
        apid_filter=list(apid) if apid else None,
        max_records=max_records,
    )
    metrics = DecodeMetrics(name=file.name)
    reader = RecordFileReader(cfg, metrics=metrics)
    output_format = output_format.lower()

    collected = HousekeepingLog(metadata={"source": str(file)})
    error: DecodeError | None = None
    try:
        for batch in reader.read():
            for record in batch.iter_records():
                if output_format == "text":
                    if len(collected):
                        click.echo()
                    click.echo(render_record(record))
                collected.add_record(record)
    except DecodeError as exc:
        error = exc

    if output_format == "table":
        console.print(summary_table(collected.records, title=file.name))
    elif output_format == "csv":
        _write_csv(collected, output)

    log.info("cli.decode.complete", **metrics.snapshot())

    if error is not None:
        click.echo(f"Error: {error}", err=True)
        sys.exit(1)


def _write_csv(hk_log: HousekeepingLog, output: Optional[Path]) -> None:
    df = hk_log.to_dataframe()
    if output is not None:
        df.to_csv(output, index=False)
    else:
        click.echo(df.to_csv(index=False), nl=False)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
