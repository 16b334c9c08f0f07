from __future__ import annotations

from typing import List

from .data_models import Vector


def bresenham_path(start: Vector, end: Vector) -> List[Vector]:
    """
    Returns the grid cells a straight move from ``start`` to ``end`` passes,
    both endpoints included.

    The axis with the strictly larger absolute distance is the fast axis and
    advances every step; on equal distances the y axis is used. The error
    term starts at half the fast-axis distance and decides whether the slow
    axis advances as well (diagonal step) or not (parallel step).
    """
    difference = end - start
    distance = Vector(abs(difference.x), abs(difference.y))
    direction = difference.sign()

    if distance.x > distance.y:
        parallel_step = Vector(direction.x, 0)
        distance_slow_axis = distance.y
        distance_fast_axis = distance.x
    else:
        parallel_step = Vector(0, direction.y)
        distance_slow_axis = distance.x
        distance_fast_axis = distance.y
    diagonal_step = direction

    current = start
    path: List[Vector] = [current]
    error = distance_fast_axis // 2

    for _ in range(distance_fast_axis):
        error -= distance_slow_axis
        if error < 0:
            error += distance_fast_axis
            current = current + diagonal_step
        else:
            current = current + parallel_step
        path.append(current)
    return path
