from __future__ import annotations

import fcntl
import logging
import struct
import sys
import termios
from dataclasses import dataclass

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Window:
    rows: int
    cols: int
    width: int  # pixels
    height: int  # pixels

    @property
    def cell_width(self) -> int:
        return self.width // self.cols if self.cols else 0

    @property
    def cell_height(self) -> int:
        return self.height // self.rows if self.rows else 0


def get_window(fd: int | None = None) -> Window | None:
    """Query the terminal size, in cells and pixels, attached to ``fd``.

    Returns ``None`` when ``fd`` is not a terminal or the terminal does not
    report its pixel size.
    """
    if fd is None:
        try:
            fd = sys.stdout.fileno()
        except (AttributeError, OSError, ValueError):
            return None
    try:
        packed = fcntl.ioctl(fd, termios.TIOCGWINSZ, struct.pack("HHHH", 0, 0, 0, 0))
    except OSError:
        return None
    rows, cols, width, height = struct.unpack("HHHH", packed)
    if not (rows and cols and width and height):
        LOGGER.debug("Terminal did not report its pixel size.")
        return None
    return Window(rows=rows, cols=cols, width=width, height=height)
