from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from .enums import DetailField, SortField, Typ, Unit


@dataclass(frozen=True)
class Args:
    """Resolved command-line arguments for one invocation."""

    paths: tuple[Path, ...] = (Path("."),)
    sort_bases: tuple[SortField, ...] = (SortField.CAT, SortField.CNAME)
    details: tuple[DetailField, ...] = (DetailField.NAME,)
    only: re.Pattern[str] | None = None
    exclude: re.Pattern[str] | None = None
    typs: frozenset[Typ] = field(default_factory=lambda: frozenset(Typ))
    min_imp: int = 0
    max_imp: int | None = None
    icon: bool = True
    align: bool = True
    suffix: bool = True
    sym: bool = True
    collapse: bool = True
    header: bool = True
    unit: Unit = Unit.BINARY
