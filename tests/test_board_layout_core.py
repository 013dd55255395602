from __future__ import annotations

import math

import pytest

from greek_journey.board_layout import (
    BOARD_EXTENT,
    DECORATION_CANDIDATES,
    DECORATION_CLEARANCE,
    GRID_COLS,
    GRID_ROWS,
    DecorationKind,
    generate_layout,
    generate_nodes,
    grid_cell,
    node_position,
    pawn_offsets,
    path_points,
)
from greek_journey.game_core import TOTAL_STEPS, sine_hash


def test_sine_hash_is_stable_and_in_unit_interval() -> None:
    for n in range(500):
        v = sine_hash(n * 13)
        assert 0.0 <= v < 1.0
        assert v == sine_hash(n * 13)


def test_grid_cells_follow_serpentine_order() -> None:
    assert grid_cell(0) == (0, 0)
    assert grid_cell(4) == (4, 0)
    assert grid_cell(5) == (4, 1)
    assert grid_cell(9) == (0, 1)
    assert grid_cell(10) == (0, 2)
    assert grid_cell(24) == (4, 4)


def test_nodes_stay_within_their_jittered_cell() -> None:
    x_step = BOARD_EXTENT / GRID_COLS
    y_step = BOARD_EXTENT / GRID_ROWS
    for seed in (0, 1, 99, 123456):
        for node in generate_nodes(seed):
            col, row = grid_cell(node.index)
            cx = col * x_step + x_step / 2.0
            cy = (GRID_ROWS - 1 - row) * y_step + y_step / 2.0
            assert abs(node.x - cx) <= 0.3 * x_step + 1e-9
            assert abs(node.y - cy) <= 0.3 * y_step + 1e-9


def test_start_is_bottom_left_and_finish_is_top_row() -> None:
    nodes = generate_nodes(17)
    assert len(nodes) == TOTAL_STEPS
    assert nodes[0].is_start and not nodes[0].is_finish
    assert nodes[-1].is_finish and not nodes[-1].is_start
    assert nodes[0].x < BOARD_EXTENT / GRID_COLS
    assert nodes[0].y > BOARD_EXTENT * (GRID_ROWS - 1) / GRID_ROWS
    assert nodes[-1].y < BOARD_EXTENT / GRID_ROWS


def test_layout_is_deterministic_for_same_seed() -> None:
    a = generate_layout(42)
    b = generate_layout(42)
    assert a == b
    assert node_position(3, 42) == node_position(3, 42)


def test_layouts_differ_for_different_seeds() -> None:
    a = generate_layout(1)
    b = generate_layout(2)
    assert [(n.x, n.y) for n in a.nodes] != [(n.x, n.y) for n in b.nodes]


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 50, 777, 2**31 - 1])
def test_decorations_keep_clear_of_the_track(seed: int) -> None:
    layout = generate_layout(seed)
    assert len(layout.decorations) <= DECORATION_CANDIDATES
    ids = [d.id for d in layout.decorations]
    assert ids == sorted(set(ids))
    for d in layout.decorations:
        assert isinstance(d.kind, DecorationKind)
        assert 0.5 <= d.scale < 1.3
        assert -10.0 <= d.rotation < 10.0
        for n in layout.nodes:
            assert math.hypot(n.x - d.x, n.y - d.y) >= DECORATION_CLEARANCE


def test_node_for_clamps_to_track() -> None:
    layout = generate_layout(5)
    assert layout.node_for(-3).index == 0
    assert layout.node_for(10).index == 10
    assert layout.node_for(99).index == TOTAL_STEPS - 1


def test_path_points_and_pawn_offsets() -> None:
    layout = generate_layout(8)
    pts = path_points(layout)
    assert pts == [(n.x, n.y) for n in layout.nodes]

    assert pawn_offsets((3, 5)) == ((0.0, 0.0), (0.0, 0.0))
    assert pawn_offsets((4, 4)) == ((-2.0, 1.0), (2.0, 1.0))


def test_generate_nodes_rejects_tracks_that_do_not_fit() -> None:
    with pytest.raises(ValueError):
        generate_nodes(0, total_steps=0)
    with pytest.raises(ValueError):
        generate_nodes(0, total_steps=GRID_COLS * GRID_ROWS + 1)
