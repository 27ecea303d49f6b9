from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path, PurePath

from .enums import Appearance, Collapse, DetailField, Typ
from .text_utils import node_name

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Spec:
    """A classification rule pairing a name pattern with presentation."""

    pattern: re.Pattern[str]
    style: str | None = None
    icon: str | None = None
    importance: int = 0
    collapse: Collapse | None = None

    @classmethod
    def build(
        cls,
        pattern: str,
        icon: str | None = None,
        *,
        style: str | None = None,
        importance: int = 0,
        collapse: Collapse | None = None,
    ) -> Spec:
        return cls(
            pattern=re.compile(pattern),
            style=style,
            icon=icon,
            importance=importance,
            collapse=collapse,
        )


@dataclass
class Node:
    name: str
    path: Path
    meta: os.stat_result | None
    typ: Typ
    appearance: Appearance = Appearance.NORMAL
    # indices into `Conf.specs`, in ascending order of specificity
    specs: list[int] = field(default_factory=list)
    collapse_name: str | None = None
    children: list[Node] = field(default_factory=list)

    @classmethod
    def from_path(
        cls,
        path: Path,
        *,
        name: str | None = None,
        appearance: Appearance = Appearance.NORMAL,
    ) -> Node:
        """Stat ``path`` without following symlinks.

        ``FileNotFoundError`` propagates so callers can skip vanished
        entries; any other stat failure yields a node without metadata.
        """
        try:
            meta = path.lstat()
        except FileNotFoundError:
            raise
        except OSError as exc:
            LOGGER.debug("Metadata unavailable for %s: %s", path, exc)
            meta = None
        typ = Typ.from_mode(meta.st_mode) if meta is not None else Typ.UNKNOWN
        return cls(
            name=name if name is not None else node_name(path),
            path=path,
            meta=meta,
            typ=typ,
            appearance=appearance,
        )

    @property
    def ext(self) -> str:
        """Extension without the dot; blank for dotfiles and bare names."""
        return PurePath(self.name).suffix[1:]

    @property
    def cname(self) -> str:
        """Lowercased name stripped of leading non-alphanumeric characters."""
        lowered = self.name.lower()
        for idx, ch in enumerate(lowered):
            if ch.isalnum():
                return lowered[idx:]
        return ""

    def time_ns(self, detail: DetailField) -> int | None:
        if self.meta is None:
            return None
        if detail == DetailField.BTIME:
            birth_ns = getattr(self.meta, "st_birthtime_ns", None)
            if birth_ns is not None:
                return birth_ns
            birth = getattr(self.meta, "st_birthtime", None)
            return int(birth * 1_000_000_000) if birth is not None else None
        if detail == DetailField.CTIME:
            return self.meta.st_ctime_ns
        if detail == DetailField.MTIME:
            return self.meta.st_mtime_ns
        if detail == DetailField.ATIME:
            return self.meta.st_atime_ns
        return None

    def __str__(self) -> str:
        return self.name
