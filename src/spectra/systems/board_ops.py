from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from esper import World

from spectra.components.active_switch import ActiveSwitch
from spectra.components.board import Board
from spectra.components.board_position import BoardPosition
from spectra.components.tile import TileType
from spectra.components.tile_type_registry import TileTypeRegistry
from spectra.components.tile_types import TileTypes
from spectra.constants import MIN_REGION_SIZE, SHUFFLE_ATTEMPTS
from spectra.utils.board_layout import Layout, generate_layout, type_map_to_layout
from spectra.utils.connectivity import has_valid_move

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
TypeEntry = Tuple[int, int, str]

REMEDY_SHUFFLE = "shuffle"
REMEDY_REGENERATE = "regenerate"


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    type_name: str


@dataclass(slots=True)
class ResolutionResult:
    """Outcome of clearing one region.

    ``points_eligible`` is False when the region was rejected; in that case the
    board was left untouched and every other field is empty.
    """
    points_eligible: bool
    cleared: List[TypeEntry] = field(default_factory=list)
    moves: List[GravityMove] = field(default_factory=list)
    columns_shifted: int = 0
    new_tiles: List[Position] = field(default_factory=list)
    remedy: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.cleared)


def world_rng(world: World, rng: random.Random | None = None) -> random.Random:
    candidate = rng or getattr(world, "random", None)
    if isinstance(candidate, random.Random):
        return candidate
    return random.Random()


def get_tile_registry(world: World) -> TileTypes:
    for entity, _ in world.get_component(TileTypeRegistry):
        return world.component_for_entity(entity, TileTypes)
    raise RuntimeError("TileTypes definitions not found")


def board_dimensions(world: World) -> Tuple[int, int] | None:
    for _, board in world.get_component(Board):
        return board.rows, board.cols
    return None


def position_index(world: World) -> Dict[Position, int]:
    return {(pos.row, pos.col): entity for entity, pos in world.get_component(BoardPosition)}


def get_entity_at(world: World, row: int, col: int) -> int | None:
    for entity, position in world.get_component(BoardPosition):
        if position.row == row and position.col == col:
            return entity
    return None


def active_tile_type_map(world: World) -> Dict[Position, str]:
    """Return mapping of occupied positions to their color names."""
    mapping: Dict[Position, str] = {}
    for entity, (position, switch, tile) in world.get_components(BoardPosition, ActiveSwitch, TileType):
        if switch.active:
            mapping[(position.row, position.col)] = tile.type_name
    return mapping


def board_layout(world: World) -> Layout:
    """Row-major snapshot of the board; empty cells are None."""
    dims = board_dimensions(world)
    if not dims:
        return []
    rows, cols = dims
    return type_map_to_layout(active_tile_type_map(world), rows, cols)


def set_tile(world: World, entity: int, type_name: str | None) -> None:
    switch: ActiveSwitch = world.component_for_entity(entity, ActiveSwitch)
    if type_name is None:
        switch.active = False
        return
    tile: TileType = world.component_for_entity(entity, TileType)
    tile.type_name = type_name
    switch.active = True


def apply_layout(world: World, layout: Layout) -> List[Position]:
    """Write ``layout`` onto the board entities and return the positions touched."""
    index = position_index(world)
    touched: List[Position] = []
    for row, values in enumerate(layout):
        for col, value in enumerate(values):
            entity = index.get((row, col))
            if entity is None:
                continue
            set_tile(world, entity, value)
            touched.append((row, col))
    return touched


def clear_positions(world: World, positions: Iterable[Position]) -> List[TypeEntry]:
    """Mark positions empty and return the (row, col, type_name) entries removed."""
    index = position_index(world)
    typed: List[TypeEntry] = []
    for row, col in sorted(set(positions)):
        entity = index.get((row, col))
        if entity is None:
            continue
        tile_switch: ActiveSwitch = world.component_for_entity(entity, ActiveSwitch)
        if not tile_switch.active:
            continue
        tile_type: TileType = world.component_for_entity(entity, TileType)
        typed.append((row, col, tile_type.type_name))
        tile_switch.active = False
    return typed


def compute_gravity_moves(world: World) -> Tuple[List[GravityMove], int]:
    """Plan the downward compaction of every column.

    Survivors keep their top-to-bottom order and settle against the bottom row.
    Moves are listed bottom-up per column so they can be applied in order.
    """
    dims = board_dimensions(world)
    if not dims:
        return [], 0
    rows, cols = dims
    types = active_tile_type_map(world)
    moves: List[GravityMove] = []
    columns_shifted = 0
    for col in range(cols):
        filled_rows = [row for row in range(rows) if (row, col) in types]
        offset = rows - len(filled_rows)
        shifted = False
        for idx in range(len(filled_rows) - 1, -1, -1):
            original_row = filled_rows[idx]
            target_row = offset + idx
            if original_row == target_row:
                continue
            moves.append(GravityMove(
                source=(original_row, col),
                target=(target_row, col),
                type_name=types[(original_row, col)],
            ))
            shifted = True
        if shifted:
            columns_shifted += 1
    return moves, columns_shifted


def apply_gravity_moves(world: World, moves: List[GravityMove]) -> None:
    index = position_index(world)
    for move in moves:
        src_entity = index.get(move.source)
        dst_entity = index.get(move.target)
        if src_entity is None or dst_entity is None:
            continue
        src_switch: ActiveSwitch = world.component_for_entity(src_entity, ActiveSwitch)
        if not src_switch.active:
            continue
        set_tile(world, dst_entity, move.type_name)
        src_switch.active = False


def refill_inactive_tiles(world: World, rng: random.Random | None = None) -> List[Position]:
    """Give every empty cell a fresh random color; returns the refilled positions."""
    rng = world_rng(world, rng)
    registry = get_tile_registry(world)
    spawned: List[Position] = []
    for position, entity in sorted(position_index(world).items()):
        tile_switch: ActiveSwitch = world.component_for_entity(entity, ActiveSwitch)
        if tile_switch.active:
            continue
        set_tile(world, entity, registry.random_type(rng))
        spawned.append(position)
    return spawned


def respawn_full_board(world: World, *, rng: random.Random | None = None) -> List[Position]:
    """Fill the entire board with a freshly generated layout."""
    dims = board_dimensions(world)
    if not dims:
        return []
    rows, cols = dims
    registry = get_tile_registry(world)
    layout = generate_layout(rows, cols, registry.all_types(), world_rng(world, rng))
    return apply_layout(world, layout)


def shuffle_board(world: World, rng: random.Random | None = None) -> None:
    """Fisher-Yates shuffle of the occupied colors, redistributed row-major over the board.

    Cells beyond the number of collected colors receive a fresh random color.
    """
    rng = world_rng(world, rng)
    registry = get_tile_registry(world)
    index = position_index(world)
    types = active_tile_type_map(world)
    positions = sorted(index)
    tiles = [types[pos] for pos in positions if pos in types]
    for i in range(len(tiles) - 1, 0, -1):
        j = rng.randint(0, i)
        tiles[i], tiles[j] = tiles[j], tiles[i]
    for idx, pos in enumerate(positions):
        value = tiles[idx] if idx < len(tiles) else registry.random_type(rng)
        set_tile(world, index[pos], value)


def ensure_valid_move(
    world: World,
    rng: random.Random | None = None,
    *,
    max_shuffles: int = SHUFFLE_ATTEMPTS,
) -> str | None:
    """Restore the has-a-valid-move invariant; returns the remedy used or None."""
    if has_valid_move(active_tile_type_map(world)):
        return None
    rng = world_rng(world, rng)
    for attempt in range(max_shuffles):
        shuffle_board(world, rng)
        if has_valid_move(active_tile_type_map(world)):
            logger.debug("Board reshuffled after %d attempt(s)", attempt + 1)
            return REMEDY_SHUFFLE
    logger.warning("No valid move after %d shuffles; regenerating the board", max_shuffles)
    respawn_full_board(world, rng=rng)
    return REMEDY_REGENERATE


def resolve_region(
    world: World,
    region: Iterable[Position],
    rng: random.Random | None = None,
) -> ResolutionResult:
    """Clear ``region``, apply gravity, refill, and re-establish a valid move.

    Regions with fewer than three occupied cells are rejected without touching
    the board.
    """
    types = active_tile_type_map(world)
    positions = sorted({pos for pos in region if pos in types})
    if len(positions) < MIN_REGION_SIZE:
        return ResolutionResult(points_eligible=False)
    rng = world_rng(world, rng)
    cleared = clear_positions(world, positions)
    moves, columns_shifted = compute_gravity_moves(world)
    apply_gravity_moves(world, moves)
    new_tiles = refill_inactive_tiles(world, rng)
    remedy = ensure_valid_move(world, rng)
    return ResolutionResult(
        points_eligible=True,
        cleared=cleared,
        moves=moves,
        columns_shifted=columns_shifted,
        new_tiles=new_tiles,
        remedy=remedy,
    )


def perturb_random_cell(world: World, rng: random.Random | None = None) -> Position | None:
    """Overwrite one uniformly random cell with a uniformly random color."""
    dims = board_dimensions(world)
    if not dims:
        return None
    rows, cols = dims
    rng = world_rng(world, rng)
    row = rng.randrange(rows)
    col = rng.randrange(cols)
    entity = get_entity_at(world, row, col)
    if entity is None:
        return None
    set_tile(world, entity, get_tile_registry(world).random_type(rng))
    return row, col
