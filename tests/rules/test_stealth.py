"""
Tests for assassin stealth transitions, reveals and grace expiry.
"""

import pytest

from tests.rules.helpers import at, make_state, place
from wizardchess.models import PieceType, Side
from wizardchess.rules.core import is_hidden_from
from wizardchess.rules.generators.assassin import ASSASSIN_OFFSETS
from wizardchess.rules.stealth import (
    STEALTH_ENTER_DELTA,
    expire_grace,
    reveal,
    reveal_if_in_opposing_zone,
    reveal_in_paladin_zone,
    update_stealth,
)

ORIGIN = (4, 4)


def _assassin(side=Side.WHITE, **traits):
    return place(PieceType.ASSASSIN, side, *ORIGIN, "s", **traits)


def _shift(offset):
    return at(ORIGIN[0] + offset[0], ORIGIN[1] + offset[1])


# =============================================================================
# DIRECTIONAL RULE
# =============================================================================


class TestUpdateStealth:
    def test_white_advance_enters_stealth(self):
        piece = _assassin()
        update_stealth(piece, at(*ORIGIN), _shift((-2, 1)))
        assert piece.stealthed
        assert piece.traits.stealth_expires_on_side is None

    def test_white_retreat_leaves_stealth_with_grace(self):
        piece = _assassin(stealthed=True)
        update_stealth(piece, at(*ORIGIN), _shift((2, -1)))
        assert not piece.stealthed
        assert piece.traits.stealth_expires_on_side is Side.BLACK

    def test_black_is_reversed(self):
        piece = _assassin(Side.BLACK)
        update_stealth(piece, at(*ORIGIN), _shift((2, -1)))
        assert piece.stealthed

    def test_zero_sum_step_leaves_state(self):
        piece = _assassin(stealthed=True)
        update_stealth(piece, at(*ORIGIN), _shift((1, -1)))
        assert piece.stealthed

    def test_retreat_when_visible_changes_nothing(self):
        piece = _assassin()
        update_stealth(piece, at(*ORIGIN), _shift((2, -1)))
        assert not piece.stealthed
        assert piece.traits.stealth_expires_on_side is None

    def test_other_archetypes_ignored(self):
        piece = place(PieceType.RANGER, Side.WHITE, *ORIGIN, "r")
        update_stealth(piece, at(*ORIGIN), _shift((-2, 1)))
        assert piece.traits is None


@pytest.mark.parametrize("side", [Side.WHITE, Side.BLACK])
@pytest.mark.parametrize("offset", ASSASSIN_OFFSETS)
def test_inverse_moves_restore_stealth_state(side, offset):
    # Start from whichever state the first move would flip
    initial = sum(offset) != STEALTH_ENTER_DELTA[side]
    piece = _assassin(side, stealthed=initial)
    start, dest = at(*ORIGIN), _shift(offset)

    update_stealth(piece, start, dest)
    assert piece.stealthed is not initial
    update_stealth(piece, dest, start)
    assert piece.stealthed is initial


# =============================================================================
# VISIBILITY AND REVEALS
# =============================================================================


class TestVisibility:
    def test_stealthed_hidden_from_opponent_only(self):
        piece = _assassin(stealthed=True)
        assert is_hidden_from(piece, Side.BLACK)
        assert not is_hidden_from(piece, Side.WHITE)

    def test_grace_keeps_piece_hidden(self):
        piece = _assassin(stealth_expires_on_side=Side.BLACK)
        assert not piece.stealthed
        assert is_hidden_from(piece, Side.BLACK)

    def test_reveal_clears_flag_and_grace(self):
        piece = _assassin(stealthed=True, stealth_expires_on_side=Side.BLACK)
        assert reveal(piece)
        assert not is_hidden_from(piece, Side.BLACK)
        assert not reveal(piece)

    def test_reveal_in_opposing_zone(self):
        state = make_state(
            place(PieceType.ASSASSIN, Side.WHITE, 4, 4, "s", stealthed=True),
            place(PieceType.PALADIN, Side.BLACK, 5, 4, "p"),
        )
        assert reveal_if_in_opposing_zone(state, state.pieces["s"])
        assert not state.pieces["s"].stealthed

    def test_own_paladin_does_not_reveal(self):
        state = make_state(
            place(PieceType.ASSASSIN, Side.WHITE, 4, 4, "s", stealthed=True),
            place(PieceType.PALADIN, Side.WHITE, 5, 4, "p"),
        )
        assert not reveal_if_in_opposing_zone(state, state.pieces["s"])
        assert state.pieces["s"].stealthed

    def test_paladin_reveals_every_enemy_in_zone(self):
        state = make_state(
            place(PieceType.PALADIN, Side.WHITE, 4, 4, "p"),
            place(PieceType.ASSASSIN, Side.BLACK, 5, 4, "s1", stealthed=True),
            place(PieceType.ASSASSIN, Side.BLACK, 5, 3, "s2", stealthed=True),
            place(PieceType.ASSASSIN, Side.BLACK, 6, 6, "far", stealthed=True),
        )
        assert reveal_in_paladin_zone(state, state.pieces["p"]) == 2
        assert state.pieces["far"].stealthed


class TestGraceExpiry:
    def test_marker_expires_when_named_side_finishes(self):
        piece = _assassin(stealth_expires_on_side=Side.BLACK)
        expire_grace([piece], Side.WHITE)
        assert piece.traits.stealth_expires_on_side is Side.BLACK
        expire_grace([piece], Side.BLACK)
        assert piece.traits.stealth_expires_on_side is None
        assert not is_hidden_from(piece, Side.BLACK)
