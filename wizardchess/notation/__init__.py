"""Wizard Chess notation module.

Provides coordinate labels and move-record text for the turn history.
"""

from wizardchess.notation.algebraic import (
    HIDDEN_TEXT,
    PIECE_NAMES,
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

__all__ = [
    "HIDDEN_TEXT",
    "PIECE_NAMES",
    "algebraic_to_position",
    "capture_text",
    "guard_text",
    "make_record",
    "move_text",
    "moves_to_notation_list",
    "no_effect_text",
    "position_to_algebraic",
    "swap_text",
]
