from __future__ import annotations

import logging
import math
from functools import lru_cache
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .kitty import render_image
from .window import Window

LOGGER = logging.getLogger(__name__)


def is_image_icon(icon: str) -> bool:
    """Icons that look like paths name image files rather than glyphs."""
    return "/" in icon or icon.startswith("~")


@lru_cache(maxsize=128)
def load_rgba(path: str, size: int) -> bytes | None:
    """Decode an image file into ``size`` x ``size`` RGBA pixels."""
    resolved = Path(path).expanduser()
    try:
        with Image.open(resolved) as img:
            resized = img.convert("RGBA").resize(
                (size, size), Image.Resampling.LANCZOS
            )
            return resized.tobytes()
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError) as exc:
        LOGGER.debug("Could not load image icon %s: %s", resolved, exc)
        return None


def image_icon(path: str, size: int, window: Window) -> str:
    """Render an image icon, or nothing if the image cannot be decoded."""
    rgba = load_rgba(path, size)
    if rgba is None:
        return ""
    cols = max(1, math.ceil(size / window.cell_width)) if window.cell_width else 1
    return render_image(rgba, size, window.cell_height, cols)
