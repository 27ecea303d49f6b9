from __future__ import annotations

import logging
import os
import re
from pathlib import Path

import typer
from rich.console import Console

from . import __version__
from .args import Args
from .enums import DetailField, SortField, Typ, Unit
from .listing import Lister, detect_window

app = typer.Typer(
    help="A prettier ls: styled, sorted, collapsible directory listings.",
    add_completion=False,
)
console = Console(highlight=False, soft_wrap=True, emoji=False)

LOG_ENV_VAR = "PLS_LOG"


def _configure_logging() -> None:
    level = os.environ.get(LOG_ENV_VAR)
    if not level:
        return
    logging.basicConfig(
        level=level.upper(),
        format="[%(levelname)s] %(name)s: %(message)s",
    )


def _compile(value: str | None, option: str) -> re.Pattern[str] | None:
    if value is None:
        return None
    try:
        return re.compile(value)
    except re.error as exc:
        raise typer.BadParameter(f"invalid pattern: {exc}", param_hint=option)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"pls {__version__}")
        raise typer.Exit()


@app.command()
def main(
    paths: list[Path] | None = typer.Argument(
        None, help="Paths to list (default: current directory)"
    ),
    sort: list[SortField] | None = typer.Option(
        None,
        "--sort",
        "-s",
        help="Sort bases, most significant first; suffix '_' reverses, 'none' resets (default: cat, cname)",
    ),
    det: list[DetailField] | None = typer.Option(
        None,
        "--det",
        "-d",
        help="Detail columns to show; 'std' and 'all' expand, 'none' resets (default: name)",
    ),
    only: str | None = typer.Option(
        None, help="Only show names matching this regular expression"
    ),
    exclude: str | None = typer.Option(
        None, help="Hide names matching this regular expression"
    ),
    typ: list[Typ] | None = typer.Option(
        None, "--typ", "-t", help="Node types to show (default: all)"
    ),
    imp: int = typer.Option(0, "--imp", "-i", help="Minimum importance to show"),
    max_imp: int | None = typer.Option(None, help="Maximum importance to show"),
    icon: bool = typer.Option(True, help="Show icons next to names"),
    align: bool = typer.Option(True, help="Align names past leading dots"),
    suffix: bool = typer.Option(True, help="Show type suffixes after names"),
    sym: bool = typer.Option(True, help="Show symlink targets"),
    collapse: bool = typer.Option(True, help="Collapse related files into trees"),
    header: bool = typer.Option(True, help="Show the table header"),
    unit: Unit = typer.Option(Unit.BINARY, help="Units for the size column"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """List directory contents."""
    _configure_logging()

    args = Args(
        paths=tuple(paths) if paths else (Path("."),),
        sort_bases=tuple(
            SortField.clean(sort) if sort else (SortField.CAT, SortField.CNAME)
        ),
        details=tuple(DetailField.clean(det or [DetailField.NAME])),
        only=_compile(only, "--only"),
        exclude=_compile(exclude, "--exclude"),
        typs=frozenset(typ) if typ else frozenset(Typ),
        min_imp=imp,
        max_imp=max_imp,
        icon=icon,
        align=align,
        suffix=suffix,
        sym=sym,
        collapse=collapse,
        header=header,
        unit=unit,
    )

    lister = Lister(args, console, window=detect_window(args))
    code = lister.run()
    if code:
        raise typer.Exit(code)


if __name__ == "__main__":
    app()
