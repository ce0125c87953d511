# region Imports
from typing import Tuple
from tilemap_pathfinder.models import Dimension, GridShape, Node
# endregion

# region Tile Placement
def tile_position(z: int, shape: GridShape) -> Tuple[int, int]:
    """Row-major (column, row) of layer ``z`` inside the tile grid."""
    return z % shape.columns, z // shape.columns


def tile_origin(z: int, tile_dim: Dimension, shape: GridShape) -> Node:
    col, row = tile_position(z, shape)
    return Node(tile_dim.width * col, tile_dim.height * row)


def tile_bounds(z: int, tile_dim: Dimension, shape: GridShape) -> Tuple[Node, Node]:
    """Inclusive global (min, max) corners of layer ``z``."""
    top_left = tile_origin(z, tile_dim, shape)
    bottom_right = Node(top_left.x + tile_dim.width - 1, top_left.y + tile_dim.height - 1)
    return top_left, bottom_right
# endregion

# region Local <-> Global
def local_to_global(node: Node, tile_dim: Dimension, shape: GridShape) -> Node:
    col, row = tile_position(node.z, shape)
    return Node(node.x + tile_dim.width * col, node.y + tile_dim.height * row)


def global_to_local(node: Node, tile_dim: Dimension, shape: GridShape) -> Node:
    col = node.x // tile_dim.width
    row = node.y // tile_dim.height
    return Node(
        node.x % tile_dim.width,
        node.y % tile_dim.height,
        row * shape.columns + col,
    )
# endregion
