"""
Tests for the triangular lattice geometry.
"""

import pytest

from wizardchess.board_manager import (
    BOARD_SIZE,
    DIRECTIONS,
    BoardManager,
    build_nodes,
    coordinate_label,
    rotate_to_square,
    square_to_lattice,
)


@pytest.fixture
def geometry():
    return BoardManager.geometry()


# =============================================================================
# NODES
# =============================================================================


class TestNodes:
    def test_row_lengths_expand_then_contract(self):
        rows = build_nodes(BOARD_SIZE)
        assert len(rows) == 2 * BOARD_SIZE + 1
        assert [len(r) for r in rows] == [1, 2, 3, 4, 5, 6, 7, 8, 9, 8, 7, 6, 5, 4, 3, 2, 1]

    def test_total_node_count(self, geometry):
        assert len(geometry.nodes) == 81

    def test_board_is_centred(self):
        rows = build_nodes(BOARD_SIZE)
        middle = rows[BOARD_SIZE]
        assert middle[0].x == -middle[-1].x
        assert middle[0].y == 0


# =============================================================================
# ADJACENCY
# =============================================================================


class TestAdjacency:
    def test_adjacency_is_symmetric(self, geometry):
        for a, neighbours in geometry.adjacency.items():
            for b in neighbours:
                assert a in geometry.adjacency[b], f"{a} -> {b} is not mirrored"

    def test_no_self_loops(self, geometry):
        for cell, neighbours in geometry.adjacency.items():
            assert cell not in neighbours

    def test_interior_node_has_six_neighbours(self, geometry):
        assert len(geometry.neighbours((8, 4))) == 6

    def test_apex_has_two_neighbours(self, geometry):
        assert geometry.neighbours((0, 0)) == {(1, 0), (1, 1)}
        assert geometry.neighbours((16, 0)) == {(15, 0), (15, 1)}

    def test_adjacency_matches_square_directions(self, geometry):
        for cell in geometry.adjacency:
            by_direction = {geometry.offset(cell, d) for d in DIRECTIONS} - {None}
            assert by_direction == geometry.neighbours(cell)


# =============================================================================
# ROTATED FRAME
# =============================================================================


class TestRotation:
    def test_round_trip_for_every_node(self, geometry):
        for row, col in geometry.adjacency:
            x, y = rotate_to_square(row, col)
            assert 0 <= x <= BOARD_SIZE and 0 <= y <= BOARD_SIZE
            assert square_to_lattice(x, y) == (row, col)

    def test_same_row_has_constant_sum(self, geometry):
        for row, col in geometry.adjacency:
            x, y = rotate_to_square(row, col)
            assert x + y == row

    def test_off_board_square_is_none(self, geometry):
        assert geometry.from_square(-1, 0) is None
        assert geometry.from_square(0, BOARD_SIZE + 1) is None

    def test_ray_runs_to_edge(self, geometry):
        ray = list(geometry.ray((8, 4), (1, 0)))
        assert [geometry.to_square(c) for c in ray] == [(5, 4), (6, 4), (7, 4), (8, 4)]

    def test_line_direction(self, geometry):
        origin = square_to_lattice(4, 4)
        assert geometry.line_direction(origin, square_to_lattice(4, 1)) == ((0, -1), 3)
        assert geometry.line_direction(origin, square_to_lattice(6, 2)) == ((1, -1), 2)
        assert geometry.line_direction(origin, square_to_lattice(5, 5)) is None
        assert geometry.line_direction(origin, origin) is None


# =============================================================================
# LABELS
# =============================================================================


class TestLabels:
    def test_white_wizard_home_is_i9(self):
        assert coordinate_label(16, 0) == "I9"

    def test_black_wizard_home_is_a1(self):
        assert coordinate_label(0, 0) == "A1"

    def test_centre_is_e5(self):
        assert coordinate_label(8, 4) == "E5"
