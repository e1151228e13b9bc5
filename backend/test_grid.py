"""
Unit tests for Position and Route

Tests cover:
- Bounds and integer validation on construction
- Manhattan distance and equality
- Horizontal-first route construction
- Validation of explicit paths
"""

import pytest
from errors import BoundsError, InvalidRouteError
from grid import Position, Route


class TestPosition:
    """Test suite for board coordinates"""

    def test_valid_corners(self):
        """Both corners of the 5x5 board are legal"""
        assert Position(0, 0).to_dict() == {"x": 0, "y": 0}
        assert Position(4, 4).to_dict() == {"x": 4, "y": 4}

    @pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (5, 0), (0, 5)])
    def test_out_of_bounds_raises(self, x, y):
        """Coordinates outside [0, 4] are rejected"""
        with pytest.raises(BoundsError):
            Position(x, y)

    def test_non_integer_raises(self):
        """Fractional and boolean coordinates are rejected"""
        with pytest.raises(BoundsError):
            Position(1.5, 2)
        with pytest.raises(BoundsError):
            Position(True, 0)

    def test_bounds_error_is_value_error(self):
        """Callers catching ValueError still see bounds failures"""
        with pytest.raises(ValueError):
            Position(9, 9)

    def test_is_valid_does_not_raise(self):
        assert Position.is_valid(2, 3)
        assert not Position.is_valid(5, 0)
        assert not Position.is_valid(1.5, 0)

    def test_distance_is_manhattan(self):
        assert Position(0, 0).distance_to(Position(3, 2)) == 5
        assert Position(4, 1).distance_to(Position(1, 4)) == 6

    def test_equality(self):
        assert Position(1, 2).equals(Position(1, 2))
        assert not Position(1, 2).equals(Position(2, 1))
        assert not Position(1, 2).equals(None)

    def test_positions_are_immutable(self):
        position = Position(1, 1)
        with pytest.raises(AttributeError):
            position.x = 3

    def test_str(self):
        assert str(Position(3, 2)) == "(3, 2)"


class TestRoute:
    """Test suite for Manhattan routes"""

    def test_horizontal_first_path(self):
        """(0,0) -> (3,2) walks along x before y"""
        route = Route(Position(0, 0), Position(3, 2))

        assert route.distance == 5
        assert len(route.positions) == 6
        assert [p.to_dict() for p in route.positions] == [
            {"x": 0, "y": 0},
            {"x": 1, "y": 0},
            {"x": 2, "y": 0},
            {"x": 3, "y": 0},
            {"x": 3, "y": 1},
            {"x": 3, "y": 2},
        ]

    def test_route_backwards(self):
        route = Route(Position(4, 4), Position(2, 3))
        assert route.distance == 3
        assert route.positions[1].equals(Position(3, 4))
        assert route.positions[-1].equals(Position(2, 3))

    def test_zero_length_route(self):
        route = Route(Position(2, 2), Position(2, 2))
        assert route.distance == 0
        assert route.step_count == 0
        assert len(route.positions) == 1

    def test_explicit_path_measures_what_it_walks(self):
        """A detour is measured by its steps, not by start/end distance"""
        path = [Position(0, 0), Position(0, 1), Position(1, 1), Position(1, 0)]
        route = Route(Position(0, 0), Position(1, 0), path)

        assert route.distance == 3
        assert route.contains(Position(1, 1))

    def test_explicit_path_must_start_and_end_correctly(self):
        with pytest.raises(InvalidRouteError):
            Route(Position(0, 0), Position(1, 0), [Position(1, 0)])
        with pytest.raises(InvalidRouteError):
            Route(Position(0, 0), Position(1, 0), [Position(0, 0), Position(0, 1)])
        with pytest.raises(InvalidRouteError):
            Route(Position(0, 0), Position(1, 0), [])

    def test_position_at(self):
        route = Route(Position(0, 0), Position(2, 0))
        assert route.position_at(1).equals(Position(1, 0))
        assert route.position_at(10) is None
        assert str(route) == "(0, 0) -> (1, 0) -> (2, 0)"
