"""Flood-fill helpers over a board type map.

A type map is a ``Dict[(row, col), color]`` holding only the occupied cells, so
an absent key covers both empty and out-of-bounds positions.
"""
from __future__ import annotations

from collections import deque
from typing import Mapping, Set, Tuple

from spectra.constants import MIN_REGION_SIZE

Position = Tuple[int, int]

NEIGHBOR_OFFSETS: Tuple[Position, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def connected_region(types: Mapping[Position, str], row: int, col: int) -> Set[Position]:
    """Return the maximal 4-connected same-color region containing (row, col).

    An empty or out-of-bounds seed yields an empty set.
    """
    color = types.get((row, col))
    if color is None:
        return set()
    visited: Set[Position] = {(row, col)}
    queue = deque([(row, col)])
    while queue:
        r, c = queue.popleft()
        for dr, dc in NEIGHBOR_OFFSETS:
            neighbor = (r + dr, c + dc)
            if neighbor in visited:
                continue
            if types.get(neighbor) == color:
                visited.add(neighbor)
                queue.append(neighbor)
    return visited


def is_clearable(region: Set[Position]) -> bool:
    return len(region) >= MIN_REGION_SIZE


def has_valid_move(types: Mapping[Position, str]) -> bool:
    """True as soon as any occupied cell belongs to a clearable region."""
    seen: Set[Position] = set()
    for pos in sorted(types):
        if pos in seen:
            continue
        region = connected_region(types, pos[0], pos[1])
        if is_clearable(region):
            return True
        seen |= region
    return False
