from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Set, Tuple

from racetrack.engine.constants import MAX_SEARCH_STATES
from racetrack.engine.data_models import ZERO, Direction, Vector
from racetrack.engine.distance_field import DistanceField
from racetrack.engine.errors import ExhaustedMovesError, NoSafeMoveError
from racetrack.engine.geometry import bresenham_path
from racetrack.engine.track import Track


@dataclass(frozen=True)
class Alternative:
    """A non-winning, crash-free candidate move and where it leads."""

    direction: Direction
    position: Vector
    velocity: Vector
    distance: int


@dataclass
class _Frame:
    direction: Optional[Direction]
    alternatives: Iterator[Alternative]


def next_moves(
    track: Track, field: DistanceField, position: Vector, velocity: Vector
) -> Tuple[Optional[Direction], List[Alternative]]:
    """
    Evaluates the nine accelerations from one state.

    Candidates are offsets from the coast position (position + velocity).
    Targets off the grid and paths touching a wall, or entering a finish
    line the wrong way, are dropped. The first candidate (in Direction order)
    whose path crosses a finish line forward is returned as the winning move;
    otherwise the survivors are returned sorted by distance-field value,
    ties keeping Direction order.
    """
    coast = position + velocity
    alternatives: List[Alternative] = []

    for direction in Direction:
        target = coast + direction.vector
        next_velocity = velocity + direction.vector
        if not track.in_bounds(target):
            continue

        path = bresenham_path(position, target)
        if any(field.is_wall(cell) for cell in path):
            continue

        crossing = _finish_crossing(track, path, next_velocity)
        if crossing > 0:
            return direction, []
        if crossing < 0:
            continue

        alternatives.append(Alternative(direction, target, next_velocity, field.value(target)))

    alternatives.sort(key=lambda alternative: alternative.distance)
    return None, alternatives


def find_route(
    track: Track,
    field: DistanceField,
    start: Vector,
    velocity: Vector = ZERO,
    max_states: int = MAX_SEARCH_STATES,
) -> List[Direction]:
    """
    Depth-first search for a crash-free move sequence that ends with a
    forward finish crossing.

    At every state the most promising alternative (lowest distance to the
    finish) is tried first; when a branch runs out of alternatives the
    search backtracks to the next-best alternative of its parent. Each
    (position, velocity) state is expanded at most once, and an explicit
    stack replaces recursion.

    Raises NoSafeMoveError when every branch fails or more than
    ``max_states`` states were expanded.
    """
    winning, alternatives = next_moves(track, field, start, velocity)
    if winning is not None:
        return [winning]

    visited: Set[Tuple[Vector, Vector]] = {(start, velocity)}
    stack: List[_Frame] = [_Frame(direction=None, alternatives=iter(alternatives))]

    while stack:
        alternative = _next_unvisited(stack[-1].alternatives, visited)
        if alternative is None:
            stack.pop()
            continue

        visited.add((alternative.position, alternative.velocity))
        if len(visited) > max_states:
            raise NoSafeMoveError(f"Route search gave up after {max_states} states")

        winning, alternatives = next_moves(track, field, alternative.position, alternative.velocity)
        if winning is not None:
            route = [frame.direction for frame in stack[1:]]
            return route + [alternative.direction, winning]
        stack.append(_Frame(direction=alternative.direction, alternatives=iter(alternatives)))

    raise NoSafeMoveError(f"No crash-free route to the finish line from {start}")


def _next_unvisited(
    alternatives: Iterator[Alternative], visited: Set[Tuple[Vector, Vector]]
) -> Optional[Alternative]:
    for alternative in alternatives:
        if (alternative.position, alternative.velocity) not in visited:
            return alternative
    return None


def _finish_crossing(track: Track, path: List[Vector], velocity: Vector) -> int:
    """+1 if the path's first finish cell is crossed forward, -1 if not, 0 without one."""
    for cell in path[1:]:
        space = track.space_type(cell)
        if space.is_finish:
            return 1 if space.crossing(velocity) > 0 else -1
    return 0


class PathFinderStrategy:
    """
    Autonomous driver. The distance field and the full route are computed
    once at construction; ``next_move`` replays the route.
    """

    def __init__(
        self,
        track: Track,
        start: Vector,
        velocity: Vector = ZERO,
        max_states: int = MAX_SEARCH_STATES,
    ) -> None:
        self.start = start
        self.distance_field = DistanceField.build(track)
        self.moves = find_route(track, self.distance_field, start, velocity, max_states=max_states)
        self._cursor = 0

    def next_move(self) -> Optional[Direction]:
        if self._cursor >= len(self.moves):
            raise ExhaustedMovesError("Path finder route is used up")
        move = self.moves[self._cursor]
        self._cursor += 1
        return move

    def distance(self, x: int, y: int) -> int:
        return self.distance_field.value(Vector(x, y))

    def __str__(self) -> str:
        return self.distance_field.format()
