from __future__ import annotations

from typing import Iterator, List, Sequence, Tuple

from .constants import CRASH_INDICATOR, WALL_CHAR
from .data_models import Car, SpaceType, Vector


class Track:
    """
    Racetrack board: a rectangular grid of SpaceType cells plus the car roster.

    The origin is the top-left cell, x grows to the right and y downwards.
    Cells outside the grid are walls. The grid never changes after
    construction; cars are mutated in place by the race loop. Roster order
    is the order the cars appeared in the track definition and is the turn
    order.
    """

    def __init__(self, grid: Sequence[Sequence[SpaceType]], cars: Sequence[Car]) -> None:
        rows = tuple(tuple(row) for row in grid)
        if not rows or not rows[0]:
            raise ValueError("Track grid must have at least one row and one column")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("Track grid must be rectangular")

        self._grid: Tuple[Tuple[SpaceType, ...], ...] = rows
        self.width = width
        self.height = len(rows)
        self._cars: List[Car] = list(cars)

    # --- grid queries -------------------------------------------------

    def in_bounds(self, position: Vector) -> bool:
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def space_type(self, position: Vector) -> SpaceType:
        if not self.in_bounds(position):
            return SpaceType.WALL
        return self._grid[position.y][position.x]

    @property
    def grid(self) -> Tuple[Tuple[SpaceType, ...], ...]:
        return self._grid

    def finish_cells(self) -> Iterator[Tuple[Vector, SpaceType]]:
        for y, row in enumerate(self._grid):
            for x, space in enumerate(row):
                if space.is_finish:
                    yield Vector(x, y), space

    # --- car roster ---------------------------------------------------

    @property
    def cars(self) -> Tuple[Car, ...]:
        return tuple(self._cars)

    @property
    def car_count(self) -> int:
        return len(self._cars)

    def car(self, index: int) -> Car:
        # Negative indices are a usage error here, not "count from the end".
        if not 0 <= index < len(self._cars):
            raise IndexError(f"Car index {index} out of range (0..{len(self._cars) - 1})")
        return self._cars[index]

    def car_by_id(self, car_id: str) -> Car:
        for car in self._cars:
            if car.car_id == car_id:
                return car
        raise KeyError(f"No car with id {car_id!r} on this track")

    def car_index(self, car: Car) -> int:
        for idx, candidate in enumerate(self._cars):
            if candidate is car:
                return idx
        raise ValueError(f"Car {car.car_id!r} is not on this track")

    def uncrashed_car_count(self) -> int:
        return sum(1 for car in self._cars if not car.crashed)

    def cars_at(self, position: Vector) -> List[Car]:
        return [car for car in self._cars if car.position == position]

    def has_other_car_at(self, position: Vector, car: Car) -> bool:
        """True if a car other than ``car`` (crashed or not) occupies ``position``."""
        return any(other.position == position and other.car_id != car.car_id for other in self._cars)

    # --- rendering ----------------------------------------------------

    def char_at(self, position: Vector) -> str:
        if not self.in_bounds(position):
            return WALL_CHAR
        cars = self.cars_at(position)
        if any(car.crashed for car in cars):
            return CRASH_INDICATOR
        if cars:
            return cars[0].car_id
        return self.space_type(position).value

    def render(self) -> str:
        return "\n".join(
            "".join(self.char_at(Vector(x, y)) for x in range(self.width)) for y in range(self.height)
        )

    def __str__(self) -> str:
        return self.render()
