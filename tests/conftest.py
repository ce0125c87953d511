import io

import numpy as np
import pytest
from PIL import Image

from tilemap_pathfinder.config import DEFAULT_PALETTE

CHAR_COLORS = {
    ".": DEFAULT_PALETTE.background,
    "#": DEFAULT_PALETTE.obstacle,
    "S": DEFAULT_PALETTE.origin,
    "E": DEFAULT_PALETTE.end,
    "|": DEFAULT_PALETTE.separator,
    "?": (12, 34, 56),
}

# Four 3x3 tiles split by one-pixel separator lines
TILED_2X2 = [
    "..#|...",
    "S..|.#.",
    "...|...",
    "|||||||",
    "...|#..",
    ".#.|..E",
    "...|...",
]


def pixels_from_rows(rows):
    return np.array([[CHAR_COLORS[ch] for ch in row] for row in rows], dtype=np.uint8)


def png_bytes(rows, mode="RGB"):
    img = Image.fromarray(pixels_from_rows(rows), "RGB").convert(mode)
    buf = io.BytesIO()
    img.save(buf, "PNG")
    buf.seek(0)
    return buf


@pytest.fixture
def make_pixels():
    return pixels_from_rows


@pytest.fixture
def make_png():
    return png_bytes


@pytest.fixture
def tiled_rows():
    return list(TILED_2X2)
