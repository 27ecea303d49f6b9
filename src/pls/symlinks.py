from __future__ import annotations

import errno
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .enums import Appearance, SymState, Typ
from .models import Node
from .text_utils import normalize_text

LOGGER = logging.getLogger(__name__)


@dataclass
class SymTarget:
    state: SymState
    text: str
    # only set when the target exists
    node: Node | None = None


def read_target(node: Node) -> SymTarget | None:
    """Resolve the destination of a symlink node; ``None`` for other nodes."""
    if node.typ != Typ.SYMLINK:
        return None

    try:
        raw = os.readlink(node.path)
    except OSError as exc:
        LOGGER.debug("Could not read link %s: %s", node.path, exc)
        return SymTarget(SymState.ERROR, "")
    text = normalize_text(raw)

    try:
        os.stat(node.path)
    except OSError as exc:
        if exc.errno == errno.ELOOP:
            return SymTarget(SymState.CYCLIC, text)
        if exc.errno == errno.ENOENT:
            return SymTarget(SymState.BROKEN, text)
        return SymTarget(SymState.ERROR, text)

    destination = Path(raw)
    if not destination.is_absolute():
        destination = node.path.parent / destination
    try:
        target = Node.from_path(
            destination, name=text, appearance=Appearance.SYMLINK
        )
    except FileNotFoundError:
        return SymTarget(SymState.BROKEN, text)
    return SymTarget(SymState.OK, text, target)
