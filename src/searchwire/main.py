from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import List, Optional, Type, TypeVar

import typer
from pydantic import ValidationError

from shared.logging import setup_logging

from .config import get_settings
from .errors import SerializationError
from .models import BulkIndexRequest, Fireable, MultiSearchRequest, Request, parse_operations

BatchT = TypeVar("BatchT", BulkIndexRequest, MultiSearchRequest)

cli = typer.Typer(help="Render search cluster requests from JSON operation descriptors")


@cli.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level, defaults to SEARCHWIRE_LOG_LEVEL."),
) -> None:
    setup_logging(log_level or get_settings().log_level)


def _load(source: str) -> List[Request]:
    if source == "-":
        return parse_operations(sys.stdin)
    with Path(source).open(encoding="utf-8") as handle:
        return parse_operations(handle)


def _build(factory: Type[BatchT], source: str) -> BatchT:
    try:
        return factory(_load(source))
    except (ValueError, ValidationError) as exc:
        typer.echo(f"invalid operation: {exc}", err=True)
        raise typer.Exit(code=2) from exc


def _emit(request: Fireable) -> None:
    buffer = io.StringIO()
    request.serialize(buffer)
    query = str(request.values())
    target = f"{request.path()}?{query}" if query else request.path()
    typer.echo(f"{request.method()} {target}")
    typer.echo(buffer.getvalue(), nl=False)


@cli.command()
def bulk(source: str = typer.Argument("-", help="File with one operation per line, '-' for stdin.")) -> None:
    """Render a /_bulk request. Fails on the first operation that cannot be serialized."""

    request = _build(BulkIndexRequest, source)
    try:
        _emit(request)
    except SerializationError as exc:
        typer.echo(f"bulk serialization failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@cli.command()
def msearch(source: str = typer.Argument("-", help="File with one search per line, '-' for stdin.")) -> None:
    """Render a /_msearch request, skipping searches that cannot be serialized."""

    _emit(_build(MultiSearchRequest, source))


if __name__ == "__main__":
    cli()
