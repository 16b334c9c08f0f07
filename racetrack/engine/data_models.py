from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True)
class Vector:
    """Integer grid vector, used for both positions and velocities."""

    x: int
    y: int

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Vector":
        return Vector(-self.x, -self.y)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def sign(self) -> "Vector":
        return Vector(_sign(self.x), _sign(self.y))

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0

    def __str__(self) -> str:
        return f"(X:{self.x}, Y:{self.y})"


ZERO = Vector(0, 0)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class Direction(Enum):
    """The nine acceleration values a car may apply in one turn.

    Declaration order is the enumeration order used wherever candidates are
    tried one after another.
    """

    DOWN_LEFT = (-1, 1)
    DOWN = (0, 1)
    DOWN_RIGHT = (1, 1)
    LEFT = (-1, 0)
    NONE = (0, 0)
    RIGHT = (1, 0)
    UP_LEFT = (-1, -1)
    UP = (0, -1)
    UP_RIGHT = (1, -1)

    @property
    def vector(self) -> Vector:
        return Vector(*self.value)

    def opposite(self) -> "Direction":
        return Direction.from_vector(-self.vector)

    @classmethod
    def from_vector(cls, vector: Vector) -> "Direction":
        try:
            return cls((vector.x, vector.y))
        except ValueError as exc:
            raise ValueError(f"{vector} can't be converted to a Direction.") from exc

    @classmethod
    def from_name(cls, value: str) -> "Direction":
        try:
            return cls[value.strip().upper()]
        except KeyError as exc:
            raise ValueError(f"Unknown direction: {value!r}") from exc


class SpaceType(Enum):
    """Classification of a single grid cell, keyed by its track-file character."""

    WALL = "#"
    TRACK = " "
    FINISH_LEFT = "<"
    FINISH_RIGHT = ">"
    FINISH_UP = "^"
    FINISH_DOWN = "v"

    @classmethod
    def from_char(cls, char: str) -> "SpaceType":
        """Unknown characters are car start markers and therefore open track."""
        try:
            return cls(char)
        except ValueError:
            return cls.TRACK

    @property
    def is_finish(self) -> bool:
        return self in _FINISH_HEADINGS

    @property
    def heading(self) -> Vector:
        """Unit vector a car must move along to cross this finish line forward."""
        if self not in _FINISH_HEADINGS:
            raise ValueError(f"{self.name} is not a finish line")
        return _FINISH_HEADINGS[self]

    @property
    def approach_offset(self) -> Vector:
        """Offset from a finish cell to the cell a car occupies just before crossing it."""
        return -self.heading

    def crossing(self, velocity: Vector) -> int:
        """Returns +1 for a forward crossing, -1 for a backward one, 0 for none.

        Only the velocity component perpendicular to the line counts.
        """
        heading = self.heading
        component = velocity.x * heading.x + velocity.y * heading.y
        return _sign(component)


_FINISH_HEADINGS = {
    SpaceType.FINISH_UP: Vector(0, -1),
    SpaceType.FINISH_DOWN: Vector(0, 1),
    SpaceType.FINISH_LEFT: Vector(-1, 0),
    SpaceType.FINISH_RIGHT: Vector(1, 0),
}


@dataclass
class Car:
    """Mutable per-turn car state.

    ``crashed`` is a one-way latch: once set it is never cleared.
    """

    car_id: str
    position: Vector
    velocity: Vector = ZERO
    crashed: bool = False
    round_count: int = 0
    strategy: Optional[Any] = field(default=None, repr=False, compare=False)

    def accelerate(self, acceleration: Direction) -> None:
        self.velocity = self.velocity + acceleration.vector

    def next_position(self) -> Vector:
        return self.position + self.velocity

    def move(self) -> None:
        self.position = self.next_position()

    def set_position(self, position: Vector) -> None:
        self.position = position

    def crash(self) -> None:
        self.crashed = True

    def change_round_count(self, amount: int) -> None:
        self.round_count += amount
