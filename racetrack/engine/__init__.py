"""
Race engine package implementing the turn-based grid racetrack.

The package is split into data models, the rasterizer, the track grid and
its loader, the turn resolver and the distance field used by autonomous
drivers. Higher level orchestration code composes these pieces in
``racetrack.simulation``.
"""

from .data_models import Car, Direction, SpaceType, Vector  # noqa: F401
from .distance_field import DistanceField  # noqa: F401
from .errors import (  # noqa: F401
    DegenerateSetupError,
    ExhaustedMovesError,
    NoSafeMoveError,
    RaceTimeoutError,
)
from .geometry import bresenham_path  # noqa: F401
from .race_loop import NO_WINNER, RaceLoop  # noqa: F401
from .telemetry import TelemetryCollector, TurnFrame  # noqa: F401
from .track import Track  # noqa: F401
from .track_loader import InvalidTrackFormatError, load_track, parse_track  # noqa: F401

__all__ = [
    "Car",
    "Direction",
    "SpaceType",
    "Vector",
    "DistanceField",
    "DegenerateSetupError",
    "ExhaustedMovesError",
    "NoSafeMoveError",
    "RaceTimeoutError",
    "bresenham_path",
    "NO_WINNER",
    "RaceLoop",
    "TelemetryCollector",
    "TurnFrame",
    "Track",
    "InvalidTrackFormatError",
    "load_track",
    "parse_track",
]
