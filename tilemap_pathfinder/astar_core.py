# region Imports and Typing
from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, AbstractSet, Dict, Iterator, List, Optional, Set, Tuple
import heapq, logging, math

from tilemap_pathfinder.models import Node

if TYPE_CHECKING:
    from tilemap_pathfinder.grid import GridModel

Bounds = Tuple[Node, Node]
# endregion

logger = logging.getLogger(__name__)

DIAGONAL_COST = math.sqrt(2.0)


class SearchLimitExceeded(RuntimeError):
    """Raised when a search runs past its expansion cap."""


# region Search Records
@dataclass
class SearchNode:
    node: Node
    g: float
    h: float
    f: float
    parent: Optional[int] = None  # arena index


@dataclass
class SearchResult:
    path: List[Node]
    cost: float
    expansions: int
    explored: List[Node] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.path)
# endregion


# region Neighbor Generation
def neighbors_8(u: Node, bounds: Bounds) -> Iterator[Node]:
    lo, hi = bounds
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            x, y = u.x + dx, u.y + dy
            if lo.x <= x <= hi.x and lo.y <= y <= hi.y:
                yield Node(x, y, u.z)


def step_cost(u: Node, v: Node) -> float:
    return DIAGONAL_COST if (u.x != v.x and u.y != v.y) else 1.0


def heuristic(n: Node, end: Node) -> float:
    # sqrt of the Manhattan distance, not admissible in general
    return math.sqrt(abs(n.x - end.x) + abs(n.y - end.y))
# endregion


# region Path Reconstruction
def reconstruct(arena: List[SearchNode], index: int) -> List[Node]:
    path = []
    i: Optional[int] = index
    while i is not None:
        path.append(arena[i].node)
        i = arena[i].parent
    path.reverse()
    return path
# endregion


# region A* Algorithm
def astar(
    origin: Node,
    end: Node,
    obstacles: AbstractSet[Node],
    bounds: Bounds,
    *,
    max_expansions: Optional[int] = None,
) -> SearchResult:
    """
    Single-layer A* over an 8-connected grid.

    Open entries are ordered by (f, h, arena index); the arena index is the
    insertion rank, so equal f and h resolve to the earliest discovered node.
    A reparented entry keeps its rank and is re-pushed with its new f; the
    superseded heap entry is skipped when popped.
    """
    lo, hi = bounds
    if not (lo.x <= origin.x <= hi.x and lo.y <= origin.y <= hi.y) or origin in obstacles:
        logger.debug("Origin %s is outside bounds or blocked", origin)
        return SearchResult([], math.inf, 0, [])

    arena: List[SearchNode] = [SearchNode(origin, 0.0, 0.0, 0.0)]
    openh: List[Tuple[float, float, int]] = [(0.0, 0.0, 0)]
    open_index: Dict[Node, int] = {origin: 0}
    closed: Set[Node] = set()
    explored: List[Node] = []
    expansions = 0

    while openh:
        f, _, i = heapq.heappop(openh)
        current = arena[i]
        if current.node in closed or f != current.f:
            continue

        # region Expansion Limits
        if max_expansions is not None and expansions >= max_expansions:
            raise SearchLimitExceeded(
                f"Search exceeded {max_expansions} expansions without reaching {end}"
            )
        # endregion

        del open_index[current.node]
        closed.add(current.node)
        explored.append(current.node)
        expansions += 1

        if current.node == end:
            path = reconstruct(arena, i)
            logger.debug("Reached %s after %d expansions, %d steps", end, expansions, len(path))
            return SearchResult(path, current.g, expansions, explored)

        # region Neighbor Loop
        for v in neighbors_8(current.node, bounds):
            if v in obstacles or v in closed:
                continue
            alt = current.g + step_cost(current.node, v)
            j = open_index.get(v)
            if j is not None:
                other = arena[j]
                if other.g > alt:
                    other.g = alt
                    other.f = alt + other.h
                    other.parent = i
                    heapq.heappush(openh, (other.f, other.h, j))
                continue
            hv = heuristic(v, end)
            arena.append(SearchNode(v, alt, hv, alt + hv, i))
            j = len(arena) - 1
            open_index[v] = j
            heapq.heappush(openh, (alt + hv, hv, j))
        # endregion

    logger.debug("Open set exhausted after %d expansions, %s unreachable", expansions, end)
    return SearchResult([], math.inf, expansions, explored)
# endregion


# region Grid Helpers
def find_path(grid: "GridModel", *, max_expansions: Optional[int] = None) -> SearchResult:
    """
    Search the origin's layer of ``grid`` between its fixed nodes.

    Uses that layer's obstacles and its own tile bounds rather than layer 0
    with full-image bounds, so the search never spills into a neighbouring
    tile. Fixed nodes on different layers give an empty result.
    """
    origin, end = grid.fixed.origin, grid.fixed.end
    if origin.z != end.z:
        logger.warning("Origin on layer %d and end on layer %d, cross-layer search is unsupported",
                       origin.z, end.z)
        return SearchResult([], math.inf, 0, [])
    return astar(origin, end, grid.obstacles(origin.z), grid.bounds(origin.z),
                 max_expansions=max_expansions)


def route_nodes(result: SearchResult, grid: "GridModel") -> List[Node]:
    """Path cells for the renderer: fixed nodes dropped, source image pixels."""
    fixed = (grid.fixed.origin, grid.fixed.end)
    return [grid.to_pixel(n) for n in result.path if n not in fixed]
# endregion
