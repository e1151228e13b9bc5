"""
Board coordinates and Manhattan routes.
"""

import numbers
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from config import CONFIG
from errors import BoundsError, InvalidRouteError


@dataclass(frozen=True, slots=True)
class Position:
    """An immutable cell on the board."""

    x: int
    y: int

    def __post_init__(self):
        """Validate invariants after initialization."""
        for axis, value, limit in (
            ("x", self.x, CONFIG.grid.width),
            ("y", self.y, CONFIG.grid.height),
        ):
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise BoundsError(f"Position {axis} must be an integer, got {value!r}")
            if not (0 <= value <= limit - 1):
                raise BoundsError(
                    f"Position {axis}={value} out of bounds [0, {limit - 1}]"
                )

    @staticmethod
    def is_valid(x, y) -> bool:
        """Check coordinates without raising."""
        if isinstance(x, bool) or isinstance(y, bool):
            return False
        if not isinstance(x, numbers.Integral) or not isinstance(y, numbers.Integral):
            return False
        return 0 <= x < CONFIG.grid.width and 0 <= y < CONFIG.grid.height

    def distance_to(self, other: "Position") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def equals(self, other: Optional["Position"]) -> bool:
        return other is not None and self.x == other.x and self.y == other.y

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Dict[str, int]) -> "Position":
        return cls(data["x"], data["y"])

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class Route:
    """
    Ordered path between two positions.

    Without an explicit path the route walks horizontally to the target
    column first, then vertically. Distance is the sum of per-step deltas,
    so custom paths that wander are measured by what they actually walk.
    """

    def __init__(
        self,
        start: Position,
        end: Position,
        positions: Optional[Sequence[Position]] = None,
    ):
        self.start = start
        self.end = end
        if positions is not None:
            path = list(positions)
            if not path:
                raise InvalidRouteError("Route must contain at least one position")
            if not path[0].equals(start):
                raise InvalidRouteError(f"Route must begin at {start}, got {path[0]}")
            if not path[-1].equals(end):
                raise InvalidRouteError(f"Route must end at {end}, got {path[-1]}")
            self.positions: List[Position] = path
        else:
            self.positions = self._manhattan_path(start, end)
        self.distance = self._measure(self.positions)

    @staticmethod
    def _manhattan_path(start: Position, end: Position) -> List[Position]:
        path = [start]
        x, y = start.x, start.y
        step_x = 1 if end.x > x else -1
        while x != end.x:
            x += step_x
            path.append(Position(x, y))
        step_y = 1 if end.y > y else -1
        while y != end.y:
            y += step_y
            path.append(Position(x, y))
        return path

    @staticmethod
    def _measure(path: List[Position]) -> int:
        return sum(a.distance_to(b) for a, b in zip(path, path[1:]))

    @property
    def step_count(self) -> int:
        return len(self.positions) - 1

    def contains(self, position: Position) -> bool:
        return any(p.equals(position) for p in self.positions)

    def position_at(self, step: int) -> Optional[Position]:
        if 0 <= step < len(self.positions):
            return self.positions[step]
        return None

    def __str__(self) -> str:
        return " -> ".join(str(p) for p in self.positions)
