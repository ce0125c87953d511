# decoder.py — classify a packed tile image into per-layer node sets
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, List, Set, Tuple
import numpy as np

from tilemap_pathfinder.config import DEFAULT_PALETTE, MIN_IMAGE_SIZE, Palette, RGB
from tilemap_pathfinder.geometry import global_to_local
from tilemap_pathfinder.models import Dimension, FixedNodes, GridShape, Layer, Node

logger = logging.getLogger(__name__)


class MapLoadError(ValueError):
    """Raised when an image cannot be turned into a traversable map."""


@dataclass(frozen=True)
class DecodedMap:
    image_dim: Dimension
    tile_dim: Dimension
    layers: Tuple[Layer, ...]
    fixed: FixedNodes
    # image column/row of each compacted x/y, separator lines left out
    pixel_cols: Tuple[int, ...]
    pixel_rows: Tuple[int, ...]


# region Helpers
def _match(rgb: np.ndarray, color: RGB) -> np.ndarray:
    return np.all(rgb == np.asarray(color, dtype=rgb.dtype), axis=-1)


def _separator_lines(full_line: np.ndarray, length: int, count: int) -> List[int]:
    """
    Indices of one-pixel separators between ``count`` tiles along one axis.
    ``full_line[i]`` is True when line ``i`` is entirely separator colored.
    """
    if count < 2:
        return []
    span = length - (count - 1)
    if span < count or span % count:
        return []
    size = span // count
    lines = [size * (k + 1) + k for k in range(count - 1)]
    if all(bool(full_line[i]) for i in lines):
        return lines
    return []


def _as_rgb(pixels) -> np.ndarray:
    arr = np.asarray(pixels)
    if arr.ndim != 3 or arr.shape[2] < 3:
        raise MapLoadError(f"Expected an (H, W, 3|4) pixel buffer, got shape {arr.shape}")
    return arr[..., :3]


def _single(hits: np.ndarray, label: str) -> Tuple[int, int]:
    if len(hits) == 0:
        raise MapLoadError("Map needs an origin and an end point")
    if len(hits) > 1:
        raise MapLoadError(f"Map has {len(hits)} {label} pixels, expected exactly one")
    y, x = hits[0]
    return int(x), int(y)
# endregion


# region Decoder
class ImageDecoder:
    """One pass over a pixel buffer, bucketing local nodes per layer."""

    def __init__(self, palette: Palette = DEFAULT_PALETTE):
        self.palette = palette

    def decode(self, pixels, shape: GridShape) -> DecodedMap:
        rgb = _as_rgb(pixels)
        H, W = rgb.shape[:2]
        if W < MIN_IMAGE_SIZE or H < MIN_IMAGE_SIZE:
            raise MapLoadError(
                f"Map must be greater than (or equal to) {MIN_IMAGE_SIZE}x{MIN_IMAGE_SIZE}, got {W}x{H}"
            )

        # Separator lines are dropped, the rest is compacted into one global space
        sep = _match(rgb, self.palette.separator)
        sep_cols = _separator_lines(sep.all(axis=0), W, shape.columns)
        sep_rows = _separator_lines(sep.all(axis=1), H, shape.rows)
        keep_cols = np.setdiff1d(np.arange(W), sep_cols)
        keep_rows = np.setdiff1d(np.arange(H), sep_rows)
        rgb = rgb[np.ix_(keep_rows, keep_cols)]

        h, w = rgb.shape[:2]
        tile_w, tile_h = w // shape.columns, h // shape.rows
        if tile_w < 1 or tile_h < 1:
            raise MapLoadError(
                f"A {shape.columns}x{shape.rows} grid does not fit a {W}x{H} image"
            )
        tile_dim = Dimension(tile_w, tile_h)
        rgb = rgb[: tile_h * shape.rows, : tile_w * shape.columns]
        logger.debug(
            "Decoding %dx%d image: tile %dx%d, %d separator cols, %d separator rows",
            W, H, tile_w, tile_h, len(sep_cols), len(sep_rows),
        )

        origin_mask = _match(rgb, self.palette.origin)
        end_mask = _match(rgb, self.palette.end)
        background_mask = _match(rgb, self.palette.background)
        ox, oy = _single(np.argwhere(origin_mask), "origin")
        ex, ey = _single(np.argwhere(end_mask), "end")

        traversable: Dict[int, Set[Node]] = {z: set() for z in range(shape.layer_count)}
        obstacles: Dict[int, Set[Node]] = {z: set() for z in range(shape.layer_count)}

        # Unmatched colors count as obstacles
        for y, x in np.argwhere(background_mask):
            node = global_to_local(Node(int(x), int(y)), tile_dim, shape)
            traversable[node.z].add(node)
        for y, x in np.argwhere(~(background_mask | origin_mask | end_mask)):
            node = global_to_local(Node(int(x), int(y)), tile_dim, shape)
            obstacles[node.z].add(node)

        fixed = FixedNodes(
            origin=global_to_local(Node(ox, oy), tile_dim, shape),
            end=global_to_local(Node(ex, ey), tile_dim, shape),
        )
        layers = tuple(
            Layer(z, frozenset(traversable[z]), frozenset(obstacles[z]))
            for z in range(shape.layer_count)
        )
        logger.info(
            "Decoded %d layer(s): origin=%s end=%s obstacles=%d",
            len(layers), fixed.origin, fixed.end, sum(len(l.obstacles) for l in layers),
        )
        return DecodedMap(
            Dimension(W, H), tile_dim, layers, fixed,
            pixel_cols=tuple(int(c) for c in keep_cols[: tile_w * shape.columns]),
            pixel_rows=tuple(int(r) for r in keep_rows[: tile_h * shape.rows]),
        )
# endregion
