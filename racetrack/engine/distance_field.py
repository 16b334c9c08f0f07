from __future__ import annotations

import numpy as np

from .data_models import SpaceType, Vector
from .track import Track

UNSET = 0
WALL = int(np.iinfo(np.int64).max)
FINISH = WALL - 1
SEED = 1

_NEIGHBOUR_OFFSETS = tuple(
    (dy, dx) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dy, dx) != (0, 0)
)


class DistanceField:
    """
    King-move distance from every open cell to the finish line.

    Values are indexed ``[y, x]``. Walls hold ``WALL``, finish cells hold
    ``FINISH``, the cell in front of each finish cell (seen from its legal
    crossing direction) holds 1 and every other reachable cell holds its
    minimum number of king moves to such a seed plus one. Cells that cannot
    be reached without crossing a wall keep ``UNSET``. Car positions are
    ignored; only walls block.
    """

    def __init__(self, values: np.ndarray) -> None:
        self._values = values
        self._values.setflags(write=False)

    @classmethod
    def build(cls, track: Track) -> "DistanceField":
        field = np.full((track.height, track.width), UNSET, dtype=np.int64)
        walls = np.array(
            [[space is SpaceType.WALL for space in row] for row in track.grid],
            dtype=bool,
        )

        # Finish cells are blocked first so a seed can never overwrite one.
        finish_cells = list(track.finish_cells())
        for position, _ in finish_cells:
            field[position.y, position.x] = FINISH
        for position, space in finish_cells:
            approach = position + space.approach_offset
            if track.space_type(approach) is SpaceType.TRACK:
                field[approach.y, approach.x] = SEED
        field[walls] = WALL

        level = SEED
        while True:
            reached = _dilate(field == level) & (field == UNSET)
            if not reached.any():
                break
            level += 1
            field[reached] = level

        return cls(field)

    @property
    def width(self) -> int:
        return self._values.shape[1]

    @property
    def height(self) -> int:
        return self._values.shape[0]

    def in_bounds(self, position: Vector) -> bool:
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def value(self, position: Vector) -> int:
        if not self.in_bounds(position):
            return WALL
        return int(self._values[position.y, position.x])

    def is_wall(self, position: Vector) -> bool:
        return self.value(position) == WALL

    def is_finish(self, position: Vector) -> bool:
        return self.value(position) == FINISH

    def is_reachable(self, position: Vector) -> bool:
        return self.value(position) not in (UNSET, WALL)

    @property
    def max_level(self) -> int:
        levels = self._values[(self._values != WALL) & (self._values != FINISH)]
        return int(levels.max()) if levels.size else UNSET

    def as_array(self) -> np.ndarray:
        return self._values.copy()

    def format(self) -> str:
        """Table of two-digit distances; walls and finish cells are left blank."""
        rows = []
        for row in self._values:
            cells = ["  " if value in (WALL, FINISH) else f"{int(value):02d}" for value in row]
            rows.append("|".join(cells) + "|")
        return "\n".join(rows)

    def __str__(self) -> str:
        return self.format()


def _dilate(mask: np.ndarray) -> np.ndarray:
    """Cells with at least one of their 8 neighbours set in ``mask``."""
    height, width = mask.shape
    padded = np.pad(mask, 1, mode="constant", constant_values=False)
    result = np.zeros_like(mask)
    for dy, dx in _NEIGHBOUR_OFFSETS:
        result |= padded[1 + dy : 1 + dy + height, 1 + dx : 1 + dx + width]
    return result
