# models.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet


@dataclass(frozen=True)
class Node:
    x: int
    y: int
    z: int = 0


@dataclass(frozen=True)
class Dimension:
    width: int
    height: int

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Dimension must be positive, got {self.width}x{self.height}")


@dataclass(frozen=True)
class GridShape:
    columns: int
    rows: int

    def __post_init__(self):
        if self.columns < 1 or self.rows < 1:
            raise ValueError("Grid must be greater than 0")

    @property
    def layer_count(self) -> int:
        return self.columns * self.rows


@dataclass(frozen=True)
class FixedNodes:
    origin: Node
    end: Node


@dataclass(frozen=True)
class Layer:
    z: int
    traversable: FrozenSet[Node] = field(default_factory=frozenset)
    obstacles: FrozenSet[Node] = field(default_factory=frozenset)


class NodeType(str, Enum):
    ORIGIN = "origin"
    END = "end"
    TRAVERSABLE = "traversable"
    NON_TRAVERSABLE = "non-traversable"
