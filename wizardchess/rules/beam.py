"""Wizard conductor beam tracer.

A wizard attacks at range by relaying a beam through conductors: friendly
apprentices and activated bards (own side or neutral). Each hop is a
straight lattice line of length 1 or 2; a length-2 hop needs an open
midpoint free of opposing guard lights, and no hop may end on an opposing
guard light.

Branch rule:
    At every step there must be exactly one valid link. The first step
    only considers conductors; later steps consider both the remaining
    conductors and visible enemy pieces (bards excluded). Zero links or
    more than one link aborts the beam entirely. The tracer never picks
    the "first" of several options.

Midpoints are judged with visible-mode occupancy (a hidden enemy assassin
does not block) and scorch on a midpoint does not block.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from wizardchess.board_manager import DIRECTIONS, Cell
from wizardchess.models import GameState, Piece, PieceType, Side
from wizardchess.rules.core import BoardView, is_enemy

logger = logging.getLogger(__name__)

MAX_LINK_DISTANCE = 2


@dataclass
class BeamTrace:
    """Result of tracing a wizard's beam."""

    path: List[Cell] = field(default_factory=list)
    target: Optional[Cell] = None
    target_id: Optional[str] = None
    failure: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.target is not None


def is_conductor(piece: Piece, side: Side) -> bool:
    if piece.type is PieceType.APPRENTICE:
        return piece.side == side
    if piece.type is PieceType.BARD:
        return piece.activated and piece.side in (side, Side.NEUTRAL)
    return False


def linked_pieces(
    view: BoardView,
    origin: Cell,
    side: Side,
    pool: Dict[Cell, Piece],
) -> List[Piece]:
    """Pieces of ``pool`` reachable from ``origin`` by a single beam hop."""
    found: List[Piece] = []
    for direction in DIRECTIONS:
        for distance in range(1, MAX_LINK_DISTANCE + 1):
            cell = view.geometry.offset(origin, direction, distance)
            if cell is None:
                break
            if distance > 1:
                mid = view.geometry.offset(origin, direction, distance - 1)
                if not view.is_open(mid, side) or view.has_opposing_guard_light(mid, side):
                    break
            if view.has_opposing_guard_light(cell, side):
                continue
            piece = pool.get(cell)
            if piece is not None:
                found.append(piece)
    return found


def trace_beam(state: GameState, wizard_id: str) -> BeamTrace:
    """Trace the beam of ``wizard_id`` and return its path and unique target."""
    wizard = state.pieces.get(wizard_id)
    if wizard is None or wizard.type is not PieceType.WIZARD:
        return BeamTrace(failure="not_a_wizard")

    side = wizard.side
    view = BoardView(state)
    conductors: Dict[Cell, Piece] = {
        p.cell: p for p in state.pieces.values() if is_conductor(p, side)
    }
    enemies: Dict[Cell, Piece] = {}
    for p in state.pieces.values():
        if is_enemy(p, side) and p.type is not PieceType.BARD and view.piece_at(p.cell, side):
            enemies[p.cell] = p

    trace = BeamTrace(path=[wizard.cell])
    first = linked_pieces(view, wizard.cell, side, conductors)
    if len(first) != 1:
        trace.failure = "no_conductor" if not first else "branch"
        return trace

    chain: Set[str] = {first[0].id}
    current = first[0]
    trace.path.append(current.cell)

    while True:
        remaining = {cell: p for cell, p in conductors.items() if p.id not in chain}
        next_conductors = linked_pieces(view, current.cell, side, remaining)
        targets = linked_pieces(view, current.cell, side, enemies)
        total = len(next_conductors) + len(targets)
        if total == 0:
            trace.failure = "dead_end"
            return trace
        if total > 1:
            trace.failure = "branch"
            return trace
        if targets:
            trace.target = targets[0].cell
            trace.target_id = targets[0].id
            trace.path.append(targets[0].cell)
            logger.debug(f"Beam from {wizard_id} resolved to {targets[0].id} via {len(chain)} conductor(s)")
            return trace
        current = next_conductors[0]
        chain.add(current.id)
        trace.path.append(current.cell)
