# region Imports
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional, Tuple
import numpy as np
from PIL import Image

from tilemap_pathfinder.config import DEFAULT_PALETTE, Palette
from tilemap_pathfinder.decoder import ImageDecoder
from tilemap_pathfinder.geometry import local_to_global
from tilemap_pathfinder.models import Dimension, FixedNodes, GridShape, Layer, Node, NodeType
# endregion


# region Grid Model
@dataclass(frozen=True)
class GridModel:
    """
    Decoded, read-only view of a packed tile image.

    layers[z] holds local nodes of tile z; fixed origin/end are local nodes
    tagged with their own layer.
    """
    layers: Tuple[Layer, ...]
    tile_dim: Dimension
    shape: GridShape
    fixed: FixedNodes
    image_dim: Dimension
    pixel_cols: Tuple[int, ...]
    pixel_rows: Tuple[int, ...]
    _global_traversable: Tuple[FrozenSet[Node], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        index = tuple(
            frozenset(local_to_global(n, self.tile_dim, self.shape) for n in layer.traversable)
            for layer in self.layers
        )
        object.__setattr__(self, "_global_traversable", index)

    # region Construction
    @classmethod
    def from_pixels(cls, pixels, shape: GridShape, palette: Palette = DEFAULT_PALETTE) -> "GridModel":
        decoded = ImageDecoder(palette).decode(pixels, shape)
        return cls(
            layers=decoded.layers,
            tile_dim=decoded.tile_dim,
            shape=shape,
            fixed=decoded.fixed,
            image_dim=decoded.image_dim,
            pixel_cols=decoded.pixel_cols,
            pixel_rows=decoded.pixel_rows,
        )

    @classmethod
    def from_image(cls, image: Image.Image, shape: GridShape, palette: Palette = DEFAULT_PALETTE) -> "GridModel":
        return cls.from_pixels(np.asarray(image.convert("RGB")), shape, palette)
    # endregion

    # region Queries
    @property
    def layer_count(self) -> int:
        return len(self.layers)

    def layer(self, z: int) -> Layer:
        return self.layers[z]

    def obstacles(self, z: int = 0) -> FrozenSet[Node]:
        return self.layers[z].obstacles

    def bounds(self, z: int = 0) -> Tuple[Node, Node]:
        """Inclusive local corners of tile ``z``."""
        return Node(0, 0, z), Node(self.tile_dim.width - 1, self.tile_dim.height - 1, z)

    def to_global(self, node: Node) -> Node:
        return local_to_global(node, self.tile_dim, self.shape)

    def to_pixel(self, node: Node) -> Node:
        """Pixel of the source image under local ``node``, separator lines included."""
        g = self.to_global(node)
        return Node(self.pixel_cols[g.x], self.pixel_rows[g.y])

    def get_node_type(self, x: int, y: int, z: int) -> Optional[NodeType]:
        if z < 0 or z >= self.layer_count:
            return None

        node = Node(x, y, z)
        if node == self.fixed.origin:
            return NodeType.ORIGIN
        if node == self.fixed.end:
            return NodeType.END

        # Compared in global space so nodes filed under a tile offset still match
        if self.to_global(node) in self._global_traversable[z]:
            return NodeType.TRAVERSABLE
        return NodeType.NON_TRAVERSABLE

    def summary(self) -> Dict[str, Any]:
        return {
            "layers": self.layer_count,
            "grid": {"columns": self.shape.columns, "rows": self.shape.rows},
            "tile": {"width": self.tile_dim.width, "height": self.tile_dim.height},
            "image": {"width": self.image_dim.width, "height": self.image_dim.height},
            "origin": node_to_dict(self.fixed.origin),
            "end": node_to_dict(self.fixed.end),
            "per_layer": [
                {"z": l.z, "traversable": len(l.traversable), "obstacles": len(l.obstacles)}
                for l in self.layers
            ],
        }
    # endregion
# endregion


# region Helpers
def node_to_dict(node: Node) -> Dict[str, int]:
    return {"x": node.x, "y": node.y, "z": node.z}


def load_grid(source, shape: GridShape, palette: Palette = DEFAULT_PALETTE) -> GridModel:
    """Open ``source`` (a path or file object) with Pillow and decode it."""
    with Image.open(source) as img:
        return GridModel.from_image(img, shape, palette)
# endregion
