"""Markup helpers shared by node presentation and the table renderer.

Cell contents are rich console markup. Widths are measured on the plain
text, after dropping markup tags and terminal-image sequences, so that
invisible bytes never count toward column widths. Image icons count as the
cells the cursor skips.
"""

from __future__ import annotations

from rich.cells import cell_len
from rich.markup import escape
from rich.text import Text

from .kitty import image_cells, strip_image

__all__ = ["escape", "plain", "printable_len", "styled"]


def styled(text: str, style: str | None) -> str:
    if not style or not style.strip():
        return text
    return f"[{style.strip()}]{text}[/]"


def plain(markup: str) -> str:
    return Text.from_markup(strip_image(markup), emoji=False).plain


def printable_len(markup: str) -> int:
    # images are invisible text but push the cursor forward
    return cell_len(plain(markup)) + image_cells(markup)
