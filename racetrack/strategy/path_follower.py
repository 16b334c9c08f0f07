from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional, Sequence

from racetrack.engine.data_models import ZERO, Direction, Vector
from racetrack.engine.errors import ExhaustedMovesError
from racetrack.engine.geometry import bresenham_path

WAYPOINT_PATTERN = re.compile(r"^\(X:(-?\d+), Y:(-?\d+)\)$")


class InvalidPathFormatError(ValueError):
    pass


def parse_waypoints(text: str) -> List[Vector]:
    """Parses one ``(X:<int>, Y:<int>)`` pair per line; trailing empty lines are ignored."""
    lines = text.splitlines()
    while lines and not lines[-1].strip():
        lines.pop()

    waypoints: List[Vector] = []
    for number, line in enumerate(lines, start=1):
        match = WAYPOINT_PATTERN.match(line.strip())
        if not match:
            raise InvalidPathFormatError(f"line {number} is not a waypoint: {line!r}")
        waypoints.append(Vector(int(match.group(1)), int(match.group(2))))
    return waypoints


def load_waypoints(path: Path | str) -> List[Vector]:
    waypoint_path = Path(path)
    if not waypoint_path.exists():
        raise FileNotFoundError(waypoint_path)
    return parse_waypoints(waypoint_path.read_text(encoding="utf-8"))


def unit_moves(waypoints: Sequence[Vector], start: Vector) -> List[Direction]:
    """
    Accelerations that drive from ``start`` through every waypoint at a
    speed of at most one cell per turn, stopping on each waypoint.

    Each leg is rasterized; a step equal to the current velocity needs no
    acceleration, any other step applies the difference, and arriving on
    the waypoint adds one braking move back to rest.
    """
    moves: List[Direction] = []
    velocity = ZERO
    position = start

    for waypoint in waypoints:
        for cell in bresenham_path(position, waypoint)[1:]:
            step = cell - position
            if velocity.is_zero():
                moves.append(Direction.from_vector(step))
            elif step != velocity:
                moves.append(Direction.from_vector(step - velocity))
            else:
                moves.append(Direction.NONE)
            velocity = step
            position = cell

        if not velocity.is_zero():
            moves.append(Direction.from_vector(-velocity))
            velocity = ZERO
        position = waypoint

    return moves


def acceleration_distance(speed: int) -> int:
    """Cells travelled while accelerating from rest to ``speed``: sum(1..speed-1)."""
    return sum(range(1, speed))


def stopping_distance(speed: int) -> int:
    """Shortest distance to reach ``speed`` from rest and brake back to rest."""
    return 2 * acceleration_distance(speed) + speed


def max_speed(distance: int) -> int:
    """Highest speed that can be reached and braked from within ``distance`` cells."""
    speed = 0
    while stopping_distance(speed + 1) <= distance:
        speed += 1
    return speed


def optimize_acceleration(moves: Sequence[Direction]) -> List[Direction]:
    """
    Replaces long coasting runs with an accelerate/brake profile.

    A run of N ``NONE`` moves travelled at unit velocity D covers N cells.
    With S = max_speed(N) >= 2 the run becomes S-1 accelerations along D,
    S-1 accelerations against D (speeds 2..S..1, S*S - 1 cells) and the
    remaining cells as ``NONE`` at unit speed. Displacement, the cells
    touched and the velocity after the run are unchanged; the run never
    gets longer.
    """
    optimized: List[Direction] = []
    velocity = ZERO
    idx = 0

    while idx < len(moves):
        move = moves[idx]
        if move is not Direction.NONE or velocity.is_zero():
            optimized.append(move)
            velocity = velocity + move.vector
            idx += 1
            continue

        run = 0
        while idx + run < len(moves) and moves[idx + run] is Direction.NONE:
            run += 1

        speed = max_speed(run)
        if speed >= 2:
            heading = Direction.from_vector(velocity)
            optimized.extend([heading] * (speed - 1))
            optimized.extend([heading.opposite()] * (speed - 1))
            optimized.extend([Direction.NONE] * (run - (speed * speed - 1)))
        else:
            optimized.extend([Direction.NONE] * run)
        idx += run

    return optimized


def simulate(moves: Sequence[Direction], start: Vector) -> List[Vector]:
    """Positions after every move when replaying ``moves`` from rest, ``start`` first."""
    positions = [start]
    position = start
    velocity = ZERO
    for move in moves:
        velocity = velocity + move.vector
        position = position + velocity
        positions.append(position)
    return positions


class PathFollowerMoveStrategy:
    """Drives through a list of waypoints with an optimized acceleration profile."""

    def __init__(self, waypoints: Sequence[Vector], start: Vector) -> None:
        self.waypoints = list(waypoints)
        self.start = start
        self.directions = unit_moves(self.waypoints, start)
        self.speedy_directions = optimize_acceleration(self.directions)
        self._check_route()
        self._cursor = 0

    def _check_route(self) -> None:
        """Replays the optimized moves; every waypoint must be visited and the last one reached."""
        positions = simulate(self.speedy_directions, self.start)
        missed = [waypoint for waypoint in self.waypoints if waypoint not in positions]
        if missed:
            raise RuntimeError(f"Optimized route misses waypoints: {', '.join(map(str, missed))}")
        if self.waypoints and positions[-1] != self.waypoints[-1]:
            raise RuntimeError(f"Optimized route ends at {positions[-1]}, not at {self.waypoints[-1]}")

    @classmethod
    def from_file(cls, path: Path | str, start: Vector) -> "PathFollowerMoveStrategy":
        return cls(load_waypoints(path), start)

    def next_move(self) -> Optional[Direction]:
        if self._cursor >= len(self.speedy_directions):
            raise ExhaustedMovesError("Path follower has no moves left")
        move = self.speedy_directions[self._cursor]
        self._cursor += 1
        return move
