"""Move strategies: the producers of each car's next acceleration."""

from .base import DoNotMoveStrategy, MoveStrategy, StrategyType, UserMoveStrategy  # noqa: F401
from .move_list import MoveListStrategy  # noqa: F401
from .path_finder import PathFinderStrategy, find_route  # noqa: F401
from .path_follower import (  # noqa: F401
    InvalidPathFormatError,
    PathFollowerMoveStrategy,
    max_speed,
    optimize_acceleration,
)

__all__ = [
    "DoNotMoveStrategy",
    "MoveStrategy",
    "StrategyType",
    "UserMoveStrategy",
    "MoveListStrategy",
    "PathFinderStrategy",
    "find_route",
    "InvalidPathFormatError",
    "PathFollowerMoveStrategy",
    "max_speed",
    "optimize_acceleration",
]
