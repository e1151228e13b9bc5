"""
Unit tests for GameMap

Tests cover:
- Building placement and occupancy errors
- Lookups by position, id and type
- Neighbours, distances and routes
- The default town layout
"""

import pytest
from buildings import Factory
from enums import BuildingType
from errors import MapError
from game_map import DEFAULT_LAYOUT, GameMap, create_default_map
from grid import Position


class TestGameMap:
    """Test suite for the building grid"""

    def test_add_and_lookup(self):
        game_map = GameMap()
        factory = Factory("factory", "Factory", Position(2, 2))
        game_map.add_building(factory)

        assert game_map.get_building(Position(2, 2)) is factory
        assert game_map.get_building((2, 2)) is factory
        assert game_map.get_building({"x": 2, "y": 2}) is factory
        assert game_map.get_building_by_id("factory") is factory
        assert game_map.get_buildings_by_type(BuildingType.FACTORY) == [factory]
        assert not game_map.is_empty(Position(2, 2))

    def test_occupied_cell_rejected(self):
        game_map = GameMap()
        game_map.add_building(Factory("f1", "Factory", Position(1, 1)))
        with pytest.raises(MapError) as excinfo:
            game_map.add_building(Factory("f2", "Factory", Position(1, 1)))
        assert "already occupied" in str(excinfo.value)

    def test_out_of_bounds_building_rejected(self):
        game_map = GameMap(width=3, height=3)
        with pytest.raises(MapError):
            game_map.add_building(Factory("f1", "Factory", Position(4, 4)))

    @pytest.mark.parametrize("width,height", [(6, 5), (5, 9), (-1, 3)])
    def test_map_larger_than_grid_rejected(self, width, height):
        with pytest.raises(MapError):
            GameMap(width=width, height=height)

    def test_smaller_map_routes_stay_in_bounds(self):
        game_map = GameMap(width=3, height=3)
        assert not game_map.is_valid_position((3, 0))
        assert len(game_map.get_adjacent_positions(Position(2, 2))) == 2

    def test_remove_building(self):
        game_map = GameMap()
        game_map.add_building(Factory("f1", "Factory", Position(1, 1)))

        assert game_map.remove_building("f1")
        assert not game_map.remove_building("f1")
        assert game_map.is_empty(Position(1, 1))

    def test_invalid_positions(self):
        game_map = GameMap()
        assert not game_map.is_valid_position((5, 0))
        assert not game_map.is_valid_position((0, -1))
        assert not game_map.is_valid_position((1.5, 1))
        assert game_map.get_building((7, 7)) is None
        assert game_map.can_move_to((4, 4))

    def test_neighbours(self):
        game_map = GameMap()
        assert len(game_map.get_adjacent_positions(Position(0, 0))) == 2
        assert len(game_map.get_adjacent_positions(Position(0, 2))) == 3
        assert len(game_map.get_adjacent_positions(Position(2, 2))) == 4
        assert game_map.get_adjacent_positions((9, 9)) == []

    def test_distance(self):
        game_map = GameMap()
        assert game_map.get_distance(Position(0, 0), Position(4, 4)) == 8
        assert game_map.get_distance((0, 0), (5, 5)) == -1

    def test_route(self):
        route = GameMap().get_route(Position(0, 0), Position(3, 2))
        assert route.distance == 5
        with pytest.raises(MapError):
            GameMap().get_route((0, 0), (9, 0))


class TestDefaultMap:
    """Test suite for the standard town"""

    def test_every_building_type_present(self):
        game_map = create_default_map()
        assert len(game_map.get_all_buildings()) == len(DEFAULT_LAYOUT) == 13
        for building_type in BuildingType:
            assert len(game_map.get_buildings_by_type(building_type)) == 1

    def test_landmarks(self):
        game_map = create_default_map()
        assert game_map.get_building(Position(0, 0)).type == BuildingType.SECURITY_APARTMENT
        assert game_map.get_building(Position(4, 1)).name == "Monolith Burgers"
        assert game_map.get_building_by_id("college").position.equals(Position(3, 4))

    def test_centre_is_open(self):
        game_map = create_default_map()
        assert game_map.is_empty(Position(2, 2))
        assert "B" in str(game_map)
