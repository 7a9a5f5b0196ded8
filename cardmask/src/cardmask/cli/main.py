"""Typer-based command line interface for cardmask."""
from __future__ import annotations

from contextlib import ExitStack
from pathlib import Path
from typing import BinaryIO, Optional

import structlog
import typer

from ..config import AppConfig, dump_default_config, load_config
from ..errors import ConfigError
from ..logging import configure_logging
from ..models import WindowBounds
from ..redactor import redact_stream
from ..utils.checks import luhn_valid

app = typer.Typer(help="Mask Luhn-valid card numbers in a byte stream")
logger = structlog.get_logger("cardmask.cli")


@app.callback()
def main(ctx: typer.Context, config: Optional[Path] = typer.Option(None, "--config", metavar="PATH")) -> None:
    try:
        ctx.obj = load_config(config)
    except ConfigError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2) from exc
    configure_logging(ctx.obj.logging.normalized_level())


def _is_stdio(path: Optional[Path]) -> bool:
    return path is None or str(path) == "-"


def _open_input(stack: ExitStack, path: Optional[Path]) -> BinaryIO:
    if _is_stdio(path):
        return typer.get_binary_stream("stdin")
    return stack.enter_context(open(path, "rb"))


def _open_output(stack: ExitStack, path: Optional[Path]) -> BinaryIO:
    if _is_stdio(path):
        return typer.get_binary_stream("stdout")
    return stack.enter_context(open(path, "wb"))


@app.command()
def redact(
    ctx: typer.Context,
    input_path: Optional[Path] = typer.Argument(None, help="File to filter; stdin when omitted or '-'"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write filtered output here instead of stdout"),
    min_length: Optional[int] = typer.Option(None, "--min-length", help="Shortest digit run suffix to check"),
    max_length: Optional[int] = typer.Option(None, "--max-length", help="Longest digit run suffix to check"),
) -> None:
    config: AppConfig = ctx.obj
    try:
        bounds = WindowBounds(
            min_length if min_length is not None else config.window.min_length,
            max_length if max_length is not None else config.window.max_length,
        )
    except ValueError as exc:
        typer.echo(f"Invalid window bounds: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    with ExitStack() as stack:
        try:
            source = _open_input(stack, input_path)
            destination = _open_output(stack, output)
            stats = redact_stream(
                source,
                destination,
                bounds=bounds,
                read_size=config.stream.read_size,
                flush_size=config.stream.flush_size,
            )
        except OSError as exc:
            logger.error("redact.failed", error=str(exc))
            typer.echo(f"cardmask: {exc}", err=True)
            raise typer.Exit(code=1) from exc
    logger.info("redact.finished", output=str(output or "-"), windows_redacted=stats.windows_redacted)


@app.command()
def check(value: str = typer.Argument(..., help="Number to validate; spaces and hyphens are ignored")) -> None:
    if luhn_valid(value):
        typer.echo("valid")
        return
    typer.echo("invalid")
    raise typer.Exit(code=1)


@app.command()
def config_init(target: Path = typer.Argument(..., help="Where to write the default configuration")) -> None:
    dump_default_config(target)
    typer.echo(f"Default configuration written to {target}")


@app.command()
def config_show(ctx: typer.Context) -> None:
    config: AppConfig = ctx.obj
    typer.echo(config.model_dump_json(indent=2))


@app.command()
def version() -> None:
    from ..version import __version__

    typer.echo(__version__)


if __name__ == "__main__":  # pragma: no cover
    app()
