from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from racetrack.engine.data_models import Direction


class MoveListStrategy:
    """
    Replays direction names, one per line.

    The end of the list, or the first line that is not a direction name,
    ends the input: ``next_move`` returns ``None`` from then on.
    """

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines: List[str] = [line.strip() for line in lines if line.strip()]
        self._cursor = 0
        self._exhausted = False

    @classmethod
    def from_file(cls, path: Path | str) -> "MoveListStrategy":
        move_path = Path(path)
        if not move_path.exists():
            raise FileNotFoundError(move_path)
        return cls(move_path.read_text(encoding="utf-8").splitlines())

    def next_move(self) -> Optional[Direction]:
        if self._exhausted or self._cursor >= len(self._lines):
            self._exhausted = True
            return None

        line = self._lines[self._cursor]
        self._cursor += 1
        try:
            return Direction.from_name(line)
        except ValueError:
            self._exhausted = True
            return None

    @property
    def remaining(self) -> int:
        if self._exhausted:
            return 0
        return len(self._lines) - self._cursor
