from __future__ import annotations

import logging
import os
from pathlib import Path

from rich.console import Console

from .args import Args
from .collapse import resolve_collapses
from .config import Conf, ConfMan
from .display import entries
from .enums import Appearance
from .exc import ListingError, PlsError
from .fmt import escape
from .kitty import is_supported
from .matcher import is_visible, match_specs, passes_filters
from .models import Node
from .owner import OwnerMan
from .sorting import sort_nodes
from .table import Table
from .text_utils import normalize_text
from .window import Window, get_window

LOGGER = logging.getLogger(__name__)


class Lister:
    """Lists every requested path, one after the other."""

    def __init__(
        self,
        args: Args,
        console: Console,
        conf_man: ConfMan | None = None,
        window: Window | None = None,
    ) -> None:
        self.args = args
        self.console = console
        self.conf_man = conf_man if conf_man is not None else ConfMan()
        self.window = window

    def get_node(self, entry: os.DirEntry[str], conf: Conf) -> Node | None:
        """Build a node for a directory entry, or ``None`` if it is filtered out.

        Filters apply in order: name (`--only`, `--exclude`), type, importance.
        """
        name = normalize_text(entry.name)
        if not passes_filters(name, self.args.only, self.args.exclude):
            return None

        try:
            node = Node.from_path(Path(entry.path), name=name)
        except FileNotFoundError:
            LOGGER.debug("Entry %r vanished while listing.", name)
            return None
        if node.typ not in self.args.typs:
            LOGGER.debug("Node %r hidden by type %s.", name, node.typ.value)
            return None

        node.specs = match_specs(node.name, conf.specs)
        if not is_visible(node, conf, self.args):
            return None
        return node

    def get_contents(self, path: Path, conf: Conf) -> list[Node]:
        """Nodes for a directory's immediate contents, or for a single file.

        A file passed on its own bypasses the visibility filters.
        """
        if path.is_dir():
            try:
                with os.scandir(path) as scanner:
                    candidates = list(scanner)
            except OSError as exc:
                raise ListingError(str(path), exc) from exc
            nodes = [self.get_node(entry, conf) for entry in candidates]
            return [node for node in nodes if node is not None]

        try:
            node = Node.from_path(
                path,
                name=normalize_text(os.fspath(path)),
                appearance=Appearance.SOLO_FILE,
            )
        except OSError as exc:
            raise ListingError(str(path), exc) from exc
        node.specs = match_specs(node.name, conf.specs)
        return [node]

    def list(self, path: Path) -> None:
        try:
            resolved = path.resolve(strict=True)
        except OSError as exc:
            raise ListingError(str(path), exc) from exc

        conf = self.conf_man.get(resolved)
        nodes = self.get_contents(path, conf)

        # shared by sorting and rendering so owner lookups happen once
        owner_man = OwnerMan()
        sort_nodes(nodes, self.args.sort_bases, owner_man)

        # after sorting, so that collapsed children stay sorted
        if self.args.collapse:
            nodes = resolve_collapses(nodes, conf)

        rows = [
            row
            for node in nodes
            for row in entries(node, owner_man, conf, self.args, self.window)
        ]
        Table(rows).render(conf, self.args, self.console)

    def run(self) -> int:
        """List every path; returns 1 if any of them failed, else 0."""
        failed = False
        for idx, path in enumerate(self.args.paths):
            if idx >= 1:
                self.console.print()
            if len(self.args.paths) > 1:
                self.console.print(f"[bold]{escape(str(path))}:[/bold]")
            try:
                self.list(path)
            except PlsError as exc:
                failed = True
                self.console.print(f"[red]Error:[/red] {escape(str(exc))}")
            else:
                LOGGER.info("Listed %s.", path)
        return 1 if failed else 0


def detect_window(args: Args) -> Window | None:
    """Window geometry for image icons, when the terminal can show them."""
    if not args.icon or not is_supported():
        return None
    return get_window()
