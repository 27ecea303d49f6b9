from __future__ import annotations

import os
import unicodedata
from pathlib import Path


def normalize_text(value: str) -> str:
    """Make a file name printable.

    `os.scandir` hands back undecodable bytes as lone surrogates; they become
    U+FFFD here. Names are then composed to NFC so that the same name sorts
    and matches identically whichever filesystem produced it.
    """
    raw = value.encode("utf-8", "surrogateescape")
    return unicodedata.normalize("NFC", raw.decode("utf-8", "replace"))


def node_name(path: Path) -> str:
    # Paths without a final segment (``/``) are named after the full path.
    name = path.name or os.fspath(path)
    return normalize_text(name)
