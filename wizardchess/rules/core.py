"""Shared rule primitives.

Occupancy lookups, visibility, terrain enterability and paladin protection
zones. Every generator and mutator goes through these helpers so that the
visibility rules are applied the same way everywhere.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Set

from wizardchess.board_manager import BoardGeometry, BoardManager, Cell
from wizardchess.models import (
    AssassinTraits,
    GameState,
    Piece,
    PieceType,
    Side,
)


class Visibility(str, Enum):
    """Occupancy lookup mode"""
    PHYSICAL = "physical"  # any piece blocks
    VISIBLE = "visible"    # hidden enemy assassins are treated as absent


def geometry_for(state: GameState) -> BoardGeometry:
    return BoardManager.geometry()


def is_hidden_from(piece: Piece, viewer: Side) -> bool:
    """True when ``viewer`` cannot currently see ``piece``.

    An assassin is hidden from the opposing side while stealthed, and also
    during the grace period after leaving stealth (until the handoff that
    follows the opponent's next turn).
    """
    if viewer is Side.NEUTRAL or piece.side == viewer:
        return False
    traits = piece.traits
    if not isinstance(traits, AssassinTraits):
        return False
    return traits.stealthed or traits.stealth_expires_on_side is not None


def is_enemy(piece: Piece, side: Side) -> bool:
    return piece.side != side and piece.side is not Side.NEUTRAL


class BoardView:
    """Cell -> piece lookup over a state, built once per query."""

    def __init__(self, state: GameState):
        self.state = state
        self.geometry = geometry_for(state)
        self._by_cell: Dict[Cell, Piece] = {p.cell: p for p in state.pieces.values()}
        self._guard_lights = {(g.row, g.col): g for g in state.guard_lights}
        self._scorch: Set[Cell] = {(m.row, m.col) for m in state.scorch_marks}

    def piece_at(
        self,
        cell: Cell,
        viewer: Optional[Side] = None,
        mode: Visibility = Visibility.VISIBLE,
    ) -> Optional[Piece]:
        piece = self._by_cell.get(cell)
        if piece is None:
            return None
        if mode is Visibility.VISIBLE and viewer is not None and is_hidden_from(piece, viewer):
            return None
        return piece

    def is_open(self, cell: Cell, viewer: Side, mode: Visibility = Visibility.VISIBLE) -> bool:
        return self.piece_at(cell, viewer, mode) is None

    def has_scorch(self, cell: Cell) -> bool:
        return cell in self._scorch

    def has_opposing_guard_light(self, cell: Cell, side: Side) -> bool:
        light = self._guard_lights.get(cell)
        return light is not None and light.created_by != side

    def can_enter(self, cell: Cell, side: Side) -> bool:
        """Passing through is allowed unless an opposing guard light is present."""
        return not self.has_opposing_guard_light(cell, side)

    def can_stop(self, cell: Cell, side: Side, piece_type: PieceType) -> bool:
        if not self.can_enter(cell, side):
            return False
        if self.has_scorch(cell) and piece_type is not PieceType.PALADIN:
            return False
        return True


def protection_zone(piece: Piece, geometry: Optional[BoardGeometry] = None) -> Set[Cell]:
    """A paladin's own cell plus all adjacent cells."""
    geometry = geometry or BoardManager.geometry()
    zone = set(geometry.neighbours(piece.cell))
    zone.add(piece.cell)
    return zone


def paladins_of(state: GameState, side: Side) -> List[Piece]:
    return [
        p for p in state.pieces.values()
        if p.type is PieceType.PALADIN and p.side == side
    ]


def in_protection_zone(state: GameState, cell: Cell, side: Side) -> bool:
    """True if ``cell`` lies inside any protection zone of ``side``'s paladins."""
    geometry = geometry_for(state)
    return any(cell in protection_zone(p, geometry) for p in paladins_of(state, side))


def guardians_for(state: GameState, target: Piece) -> List[Piece]:
    """Friendly paladins (other than the target) whose zone covers the target."""
    if target.side is Side.NEUTRAL:
        return []
    geometry = geometry_for(state)
    return [
        p for p in paladins_of(state, target.side)
        if p.id != target.id and target.cell in protection_zone(p, geometry)
    ]


def wizard_of(state: GameState, side: Side) -> Optional[Piece]:
    for piece in state.pieces.values():
        if piece.type is PieceType.WIZARD and piece.side == side:
            return piece
    return None
