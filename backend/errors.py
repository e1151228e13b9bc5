"""
Engine exceptions.

Construction-time violations raise one of these. Turn-level rejections are
reported through ActionResponse instead.
"""


class JonesError(Exception):
    """Base class for every error raised by the engine."""


class BoundsError(JonesError, ValueError):
    """Coordinate outside the board."""


class InvalidRouteError(JonesError, ValueError):
    """Explicit route that does not start and end where it claims."""


class InvalidColorError(JonesError, ValueError):
    """Player color that is not a #RRGGBB hex string."""


class MapError(JonesError, ValueError):
    """Building placement or route lookup on an invalid cell."""


class GameStateError(JonesError):
    """Game used in a state that does not allow the operation, or a bad snapshot."""
