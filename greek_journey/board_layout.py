"""Procedural board geometry.

Everything here is a pure function of the layout seed and the module
constants. Coordinates live in a 0..100 square; the renderer scales them to
whatever rectangle it draws into.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum

from .game_core import TOTAL_STEPS, sine_hash

GRID_COLS = 5
GRID_ROWS = 5
BOARD_EXTENT = 100.0

JITTER_FRACTION = 0.6  # full range; offsets stay within +/-30% of a cell
X_JITTER_MULTIPLIER = 13
Y_JITTER_MULTIPLIER = 7

DECORATION_CANDIDATES = 15
DECORATION_CLEARANCE = 8.0

# Irrational spread keeps distinct seeds from aliasing onto each other's hash inputs.
_SEED_SPREAD = 1.6180339887


class DecorationKind(StrEnum):
    TREE = "tree"
    MOUNTAIN = "mountain"
    CLOUD = "cloud"
    TENT = "tent"
    FLOWER = "flower"


# Trees appear twice to make them the most common scenery.
_DECORATION_TABLE: tuple[DecorationKind, ...] = (
    DecorationKind.TREE,
    DecorationKind.TREE,
    DecorationKind.MOUNTAIN,
    DecorationKind.CLOUD,
    DecorationKind.TENT,
    DecorationKind.FLOWER,
)


@dataclass(frozen=True, slots=True)
class BoardNode:
    index: int
    x: float
    y: float
    is_start: bool = False
    is_finish: bool = False


@dataclass(frozen=True, slots=True)
class DecorationMarker:
    id: int
    x: float
    y: float
    kind: DecorationKind
    scale: float
    rotation: float


@dataclass(frozen=True, slots=True)
class BoardLayout:
    seed: int
    nodes: tuple[BoardNode, ...]
    decorations: tuple[DecorationMarker, ...]

    def node_for(self, position: int) -> BoardNode:
        return self.nodes[max(0, min(len(self.nodes) - 1, int(position)))]


def _seed_offset(seed: int) -> float:
    return float(seed) * _SEED_SPREAD


def grid_cell(index: int) -> tuple[int, int]:
    """Return the serpentine (column, row) for ``index``; row 0 is the bottom row."""

    row = index // GRID_COLS
    col = index % GRID_COLS
    if row % 2 == 1:
        col = GRID_COLS - 1 - col
    return col, row


def node_position(index: int, seed: int = 0) -> tuple[float, float]:
    x_step = BOARD_EXTENT / GRID_COLS
    y_step = BOARD_EXTENT / GRID_ROWS
    col, row = grid_cell(index)

    base_x = col * x_step + x_step / 2.0
    # Screen y grows downward, so row 0 sits at the bottom of the board.
    base_y = (GRID_ROWS - 1 - row) * y_step + y_step / 2.0

    off = _seed_offset(seed)
    jitter_x = (sine_hash(index * X_JITTER_MULTIPLIER + off) - 0.5) * (x_step * JITTER_FRACTION)
    jitter_y = (sine_hash(index * Y_JITTER_MULTIPLIER + off) - 0.5) * (y_step * JITTER_FRACTION)
    return base_x + jitter_x, base_y + jitter_y


def generate_nodes(seed: int, *, total_steps: int = TOTAL_STEPS) -> tuple[BoardNode, ...]:
    if total_steps <= 0 or total_steps > GRID_COLS * GRID_ROWS:
        raise ValueError("total_steps must fit the board grid")
    nodes: list[BoardNode] = []
    for i in range(total_steps):
        x, y = node_position(i, seed)
        nodes.append(BoardNode(index=i, x=x, y=y, is_start=(i == 0), is_finish=(i == total_steps - 1)))
    return tuple(nodes)


def is_clear_of_path(x: float, y: float, nodes: tuple[BoardNode, ...], *, clearance: float = DECORATION_CLEARANCE) -> bool:
    return all(math.hypot(n.x - x, n.y - y) >= clearance for n in nodes)


def generate_decorations(seed: int, nodes: tuple[BoardNode, ...]) -> tuple[DecorationMarker, ...]:
    off = _seed_offset(seed)
    markers: list[DecorationMarker] = []
    for k in range(DECORATION_CANDIDATES):
        x = sine_hash(k * 123 + off) * BOARD_EXTENT
        y = sine_hash(k * 456 + off) * BOARD_EXTENT
        if not is_clear_of_path(x, y, nodes):
            continue
        kind_idx = int(sine_hash(k * 99 + off) * len(_DECORATION_TABLE))
        markers.append(
            DecorationMarker(
                id=k,
                x=x,
                y=y,
                kind=_DECORATION_TABLE[min(kind_idx, len(_DECORATION_TABLE) - 1)],
                scale=0.5 + sine_hash(k * 88 + off) * 0.8,
                rotation=(sine_hash(k * 22 + off) - 0.5) * 20.0,
            )
        )
    return tuple(markers)


def generate_layout(seed: int) -> BoardLayout:
    nodes = generate_nodes(seed)
    return BoardLayout(seed=int(seed), nodes=nodes, decorations=generate_decorations(seed, nodes))


def path_points(layout: BoardLayout) -> list[tuple[float, float]]:
    return [(n.x, n.y) for n in layout.nodes]


def pawn_offsets(positions: tuple[int, int]) -> tuple[tuple[float, float], tuple[float, float]]:
    """Per-player nudge so two pawns on one node stay visible."""

    if positions[0] != positions[1]:
        return (0.0, 0.0), (0.0, 0.0)
    return (-2.0, 1.0), (2.0, 1.0)
