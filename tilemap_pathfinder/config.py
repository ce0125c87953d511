# config.py
from dataclasses import dataclass
from typing import Tuple

RGB = Tuple[int, int, int]

# Smallest decodable image, in pixels, along each axis
MIN_IMAGE_SIZE = 2

BACKGROUND_RGB: RGB = (255, 255, 255)
OBSTACLE_RGB: RGB = (0, 0, 0)
ORIGIN_RGB: RGB = (255, 0, 0)
END_RGB: RGB = (0, 255, 0)
SEPARATOR_RGB: RGB = (23, 23, 23)

# Only handed to the renderer, never matched during decode
PATH_RGB: RGB = (169, 204, 155)
SEARCHED_RGB: RGB = (255, 196, 155)

# API form defaults
DEFAULT_COLUMNS = 1
DEFAULT_ROWS = 1


# region Palette
@dataclass(frozen=True)
class Palette:
    """Exact-match colors used to classify pixels. Alpha is never compared."""
    background: RGB = BACKGROUND_RGB
    obstacle: RGB = OBSTACLE_RGB
    origin: RGB = ORIGIN_RGB
    end: RGB = END_RGB
    separator: RGB = SEPARATOR_RGB
    path: RGB = PATH_RGB
    searched: RGB = SEARCHED_RGB


DEFAULT_PALETTE = Palette()
# endregion
