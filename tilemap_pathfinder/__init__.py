"""Decode packed tile images into layered grids and search them with A*."""

from tilemap_pathfinder.config import DEFAULT_PALETTE, Palette
from tilemap_pathfinder.models import Dimension, FixedNodes, GridShape, Layer, Node, NodeType
from tilemap_pathfinder.geometry import global_to_local, local_to_global, tile_bounds, tile_origin
from tilemap_pathfinder.decoder import DecodedMap, ImageDecoder, MapLoadError
from tilemap_pathfinder.grid import GridModel, load_grid
from tilemap_pathfinder.astar_core import (
    SearchLimitExceeded,
    SearchResult,
    astar,
    find_path,
    route_nodes,
)

__all__ = [
    "DEFAULT_PALETTE",
    "Palette",
    "Dimension",
    "FixedNodes",
    "GridShape",
    "Layer",
    "Node",
    "NodeType",
    "global_to_local",
    "local_to_global",
    "tile_bounds",
    "tile_origin",
    "DecodedMap",
    "ImageDecoder",
    "MapLoadError",
    "GridModel",
    "load_grid",
    "SearchLimitExceeded",
    "SearchResult",
    "astar",
    "find_path",
    "route_nodes",
]
