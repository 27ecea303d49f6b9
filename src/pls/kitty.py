"""Kitty terminal graphics protocol.

Images are transmitted inline as base64-encoded 32-bit RGBA, split across
several escape sequences because the protocol caps each chunk at 4096
bytes of payload.
"""

from __future__ import annotations

import base64
import logging
import os
import re

LOGGER = logging.getLogger(__name__)

# a graphics sequence, plus the cursor movement that may trail the last chunk
KITTY_IMAGE_RE = re.compile(r"\x1b_G.*?\x1b\\(?:\x1b\[(\d+)C)?", re.DOTALL)
CHUNK_SIZE = 4096
# first WezTerm release able to render Kitty graphics
WEZTERM_MIN_VERSION = "20220105-201556-91a423da"


def is_supported() -> bool:
    """Check whether the terminal understands Kitty graphics.

    Only environment variables are consulted. Querying the terminal with
    control sequences would require waiting on its response.
    """
    for env_var in ("TERM", "TERMINAL"):
        if "kitty" in os.environ.get(env_var, "").lower():
            LOGGER.debug("Detected Kitty via %s.", env_var)
            return True

    if os.environ.get("TERM_PROGRAM") == "WezTerm":
        version = os.environ.get("TERM_PROGRAM_VERSION")
        if version is not None and version >= WEZTERM_MIN_VERSION:
            LOGGER.debug("Detected WezTerm with graphics support.")
            return True

    LOGGER.debug("Graphics not supported.")
    return False


def render_image(rgba: bytes, size: int, cell_height: int, cols: int = 1) -> str:
    """Build the control text that draws ``rgba`` at the cursor.

    The first sequence carries every control key:

    * ``f=32``: data is 32-bit RGBA
    * ``t=d``: data is transmitted within the sequence
    * ``a=T``: display immediately
    * ``C=1``: do not move the cursor
    * ``m=1``: more data follows
    * ``s``/``v``: width and height in pixels
    * ``Y``: vertical offset that centres the image in its cell

    Later chunks carry only ``m=1`` and the sequence is closed with an empty
    ``m=0`` chunk. Finally the cursor moves past the ``cols`` cells covered by
    the image and one separating space.
    """
    off_y = max(0, (cell_height - size) // 2)
    encoded = base64.standard_b64encode(rgba).decode("ascii")
    chunks = [
        encoded[start : start + CHUNK_SIZE]
        for start in range(0, len(encoded), CHUNK_SIZE)
    ] or [""]

    parts = [
        f"\x1b_Gf=32,t=d,a=T,C=1,m=1,s={size},v={size},Y={off_y};{chunks[0]}\x1b\\"
    ]
    parts.extend(f"\x1b_Gm=1;{chunk}\x1b\\" for chunk in chunks[1:])
    parts.append("\x1b_Gm=0;\x1b\\")
    parts.append(f"\x1b[{cols + 1}C")
    return "".join(parts)


def strip_image(text: str) -> str:
    """Remove every Kitty graphics sequence, keeping the surrounding text."""
    return KITTY_IMAGE_RE.sub("", text)


def image_cells(text: str) -> int:
    """Number of cells the cursor skips over for the images in ``text``."""
    return sum(
        int(match.group(1))
        for match in KITTY_IMAGE_RE.finditer(text)
        if match.group(1)
    )
