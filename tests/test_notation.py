"""Tests for coordinate labels and move-record text."""

from __future__ import annotations

import pytest

from wizardchess.board_manager import square_to_lattice
from wizardchess.models import PieceType, Side
from wizardchess.notation import (
    HIDDEN_TEXT,
    algebraic_to_position,
    capture_text,
    guard_text,
    make_record,
    move_text,
    moves_to_notation_list,
    no_effect_text,
    position_to_algebraic,
    swap_text,
)


class TestPositionConversion:
    """Test position <-> label conversion."""

    def test_known_labels(self):
        assert position_to_algebraic((16, 0)) == "I9"
        assert position_to_algebraic((0, 0)) == "A1"
        assert position_to_algebraic((8, 4)) == "E5"

    def test_parse_labels(self):
        assert algebraic_to_position("I9") == (16, 0)
        assert algebraic_to_position("a1") == (0, 0)
        assert algebraic_to_position(" E5 ") == (8, 4)

    def test_every_square_round_trips(self):
        for x in range(9):
            for y in range(9):
                cell = square_to_lattice(x, y)
                assert algebraic_to_position(position_to_algebraic(cell)) == cell

    @pytest.mark.parametrize("label", ["", "5E", "E", "E0", "J1", "A10", "??"])
    def test_invalid_labels_raise(self, label):
        with pytest.raises(ValueError):
            algebraic_to_position(label)


class TestRecordText:
    """Test the human-readable record formats."""

    def test_move(self):
        assert move_text(PieceType.WIZARD, (16, 0), (15, 0)) == "Wizard I9 → H9"

    def test_capture(self):
        text = capture_text(PieceType.RANGER, (8, 4), PieceType.GRIFFIN, (7, 4))
        assert text == "Ranger E5 ⚔ Griffin E4"

    def test_swap(self):
        text = swap_text(PieceType.WIZARD, (16, 0), PieceType.APPRENTICE, (8, 4))
        assert text == "Wizard I9 ⇄ Apprentice E5"

    def test_no_effect(self):
        text = no_effect_text(PieceType.RANGER, (8, 4), (7, 4))
        assert text == "Ranger E5 attacks Bard E4 (no effect)"

    def test_guard(self):
        text = guard_text(PieceType.RANGER, (8, 4), (7, 4), (8, 5), PieceType.ASSASSIN)
        assert text.startswith("Ranger E5 → E4 (Paladin ")
        assert text.endswith(" guards Assassin)")

    def test_ranged_guard_has_no_move_arrow(self):
        text = guard_text(PieceType.WIZARD, (16, 0), (8, 4), (8, 5), PieceType.GRIFFIN, ranged=True)
        assert text.startswith("Wizard I9 attacks Griffin E5 (Paladin ")
        assert "→" not in text
        assert text.endswith(" guards)")


class TestRedaction:
    """Test per-viewer record variants."""

    def test_visible_record(self):
        record = make_record("Wizard I9 → H9")
        assert record.full == record.white_view == record.black_view

    def test_hidden_from_black(self):
        record = make_record("Assassin E5 → C6", {Side.BLACK})
        assert record.for_viewer(Side.WHITE) == "Assassin E5 → C6"
        assert record.for_viewer(Side.BLACK) == HIDDEN_TEXT
        assert record.for_viewer(None) == "Assassin E5 → C6"

    def test_notation_list_is_numbered_per_viewer(self):
        records = [
            make_record("Apprentice C9 → B9"),
            make_record("Assassin E5 → C6", {Side.WHITE}),
        ]
        assert moves_to_notation_list(records, Side.WHITE) == [
            "1. Apprentice C9 → B9",
            f"2. {HIDDEN_TEXT}",
        ]
        assert moves_to_notation_list(records)[1] == "2. Assassin E5 → C6"
