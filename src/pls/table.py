from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console
from rich.text import Text

from .args import Args
from .config import Conf
from .display import Row
from .enums import DetailField
from .fmt import printable_len, styled


@dataclass(frozen=True)
class Cell:
    right_aligned: bool = False
    padding: tuple[int, int] = (0, 1)

    @classmethod
    def for_detail(cls, detail: DetailField, *, is_last: bool) -> Cell:
        # the last column never carries trailing whitespace
        return cls(
            right_aligned=detail.right_aligned,
            padding=(0, 0) if is_last else (0, 1),
        )

    def print(
        self, text: str, width: int | None, directives: str | None = None
    ) -> str:
        content = styled(text, directives)
        if width is not None:
            gap = " " * max(0, width - printable_len(text))
            content = f"{gap}{content}" if self.right_aligned else f"{content}{gap}"
        left, right = self.padding
        return f"{' ' * left}{content}{' ' * right}"


class Table:
    """Renders one row per node, aligning the requested detail columns."""

    def __init__(self, entries: list[Row]) -> None:
        self.entries = entries

    def max_widths(self, conf: Conf, args: Args) -> list[int | None]:
        """Width of every column; ``None`` for the unbounded last column.

        Uniformly wide columns only measure the header and the first row.
        Other columns measure the header and every row.
        """
        names = conf.constants.column_names
        widths: list[int | None] = []
        for idx, detail in enumerate(args.details):
            if idx == len(args.details) - 1:
                widths.append(None)
                continue
            scanned = self.entries[:1] if detail.uniformly_wide else self.entries
            header_width = printable_len(names[detail]) if args.header else 0
            cell_widths = [printable_len(entry.get(detail, "")) for entry in scanned]
            widths.append(max([header_width, *cell_widths]))
        return widths

    def lines(self, conf: Conf, args: Args) -> list[str]:
        widths = self.max_widths(conf, args)
        last = len(args.details) - 1
        columns = [
            (width, detail, Cell.for_detail(detail, is_last=idx == last))
            for idx, (width, detail) in enumerate(zip(widths, args.details))
        ]

        lines: list[str] = []
        if args.header:
            names = conf.constants.column_names
            header_style = conf.constants.header_style
            lines.append(
                "".join(
                    cell.print(names[detail], width, header_style)
                    for width, detail, cell in columns
                )
            )
        for entry in self.entries:
            lines.append(
                "".join(
                    cell.print(entry.get(detail, ""), width)
                    for width, detail, cell in columns
                )
            )
        return lines

    def render(self, conf: Conf, args: Args, console: Console) -> None:
        for line in self.lines(conf, args):
            console.print(Text.from_markup(line, emoji=False))
