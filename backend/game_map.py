"""
Game Map

Fixed-size grid of building slots. Occupancy only constrains placement;
buildings never block movement.
"""

import logging
from typing import Dict, List, Optional, Tuple

from buildings import create_building
from config import CONFIG
from enums import BuildingType
from errors import MapError
from grid import Position, Route
from jobs import JobSystem

logger = logging.getLogger(__name__)


def _coords(position) -> Tuple[int, int]:
    """Accept a Position, an (x, y) pair or an {x, y} mapping."""
    if isinstance(position, dict):
        return position["x"], position["y"]
    if isinstance(position, (tuple, list)):
        return position[0], position[1]
    return position.x, position.y


class GameMap:
    """Occupancy table plus a flat building list."""

    def __init__(self, width: Optional[int] = None, height: Optional[int] = None):
        self.width = width or CONFIG.grid.width
        self.height = height or CONFIG.grid.height
        # Positions are bounded by the configured grid, so a map may not exceed it
        if not (0 < self.width <= CONFIG.grid.width and 0 < self.height <= CONFIG.grid.height):
            raise MapError(
                f"Map size {self.width}x{self.height} must fit within "
                f"{CONFIG.grid.width}x{CONFIG.grid.height}"
            )
        self._buildings: List = []
        self._grid: Dict[Tuple[int, int], object] = {}

    def is_valid_position(self, position) -> bool:
        x, y = _coords(position)
        if isinstance(x, bool) or isinstance(y, bool):
            return False
        if not isinstance(x, int) or not isinstance(y, int):
            return False
        return 0 <= x < self.width and 0 <= y < self.height

    def add_building(self, building) -> None:
        if not self.is_valid_position(building.position):
            raise MapError(
                f"Cannot add building at {building.position}: position is out of bounds"
            )
        key = _coords(building.position)
        if key in self._grid:
            raise MapError(
                f"Cannot add building at {building.position}: position is already occupied"
            )
        self._buildings.append(building)
        self._grid[key] = building

    def remove_building(self, building_id: str) -> bool:
        building = self.get_building_by_id(building_id)
        if building is None:
            return False
        del self._grid[_coords(building.position)]
        self._buildings.remove(building)
        return True

    def get_building(self, position):
        if not self.is_valid_position(position):
            return None
        return self._grid.get(_coords(position))

    def get_building_by_id(self, building_id: str):
        for building in self._buildings:
            if building.id == building_id:
                return building
        return None

    def get_buildings_by_type(self, building_type: BuildingType) -> List:
        return [b for b in self._buildings if b.type == building_type]

    def get_all_buildings(self) -> List:
        return list(self._buildings)

    def is_empty(self, position) -> bool:
        return self.get_building(position) is None

    def can_move_to(self, position) -> bool:
        return self.is_valid_position(position)

    def get_route(self, start, end) -> Route:
        if not self.is_valid_position(start):
            raise MapError(f"Starting position {start} is invalid")
        if not self.is_valid_position(end):
            raise MapError(f"Ending position {end} is invalid")
        return Route(Position(*_coords(start)), Position(*_coords(end)))

    def get_adjacent_positions(self, position) -> List[Position]:
        if not self.is_valid_position(position):
            return []
        x, y = _coords(position)
        neighbours = []
        for dx, dy in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            if self.is_valid_position((x + dx, y + dy)):
                neighbours.append(Position(x + dx, y + dy))
        return neighbours

    def get_distance(self, start, end) -> int:
        if not self.is_valid_position(start) or not self.is_valid_position(end):
            return -1
        (x1, y1), (x2, y2) = _coords(start), _coords(end)
        return abs(x2 - x1) + abs(y2 - y1)

    def all_positions(self) -> List[Position]:
        return [Position(x, y) for y in range(self.height) for x in range(self.width)]

    def __str__(self) -> str:
        rows = [f"Map ({self.width}x{self.height}):"]
        for y in range(self.height):
            rows.append(" ".join("B" if (x, y) in self._grid else "." for x in range(self.width)))
        return "\n".join(rows)


# (type, id, name, x, y)
DEFAULT_LAYOUT: Tuple[Tuple[BuildingType, str, str, int, int], ...] = (
    (BuildingType.SECURITY_APARTMENT, "security-apartment", "Security Apartment", 0, 0),
    (BuildingType.RENT_AGENCY, "rent-agency", "Rent Agency", 1, 0),
    (BuildingType.LOW_COST_APARTMENT, "lowcost-apartment", "Low-Cost Apartment", 2, 0),
    (BuildingType.SUPERMARKET, "supermarket", "Black's Market", 3, 0),
    (BuildingType.RESTAURANT, "restaurant", "Monolith Burgers", 4, 1),
    (BuildingType.CLOTHES_STORE, "clothes-store", "QT Clothing", 4, 2),
    (BuildingType.APPLIANCE_STORE, "appliance-store", "Socket City", 4, 3),
    (BuildingType.PAWN_SHOP, "pawn-shop", "Pawn Shop", 4, 4),
    (BuildingType.COLLEGE, "college", "HI-TECH U", 3, 4),
    (BuildingType.DEPARTMENT_STORE, "department-store", "Z-Mart", 2, 4),
    (BuildingType.EMPLOYMENT_AGENCY, "employment-agency", "Employment Agency", 1, 4),
    (BuildingType.FACTORY, "factory", "Factory", 0, 4),
    (BuildingType.BANK, "bank", "Bank", 0, 3),
)


def create_default_map(job_system: Optional[JobSystem] = None) -> GameMap:
    """Lay out the standard town around the board's edge."""
    job_system = job_system or JobSystem()
    game_map = GameMap()
    for building_type, building_id, name, x, y in DEFAULT_LAYOUT:
        game_map.add_building(
            create_building(building_type, building_id, name, Position(x, y), job_system)
        )
    logger.debug(f"Default map created with {len(game_map.get_all_buildings())} buildings")
    return game_map
