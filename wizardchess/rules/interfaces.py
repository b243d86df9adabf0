"""Abstract seams of the rules engine.

- Generator: enumerates candidate actions for one piece
- Mutator: applies one kind of state change in place
- Validator: accepts or rejects an input against the current state
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List

from wizardchess.board_manager import Cell, Direction
from wizardchess.models import ActionType, CandidateAction, GameState, Piece, PieceType, Side
from wizardchess.rules.core import BoardView, Visibility, is_enemy


class Generator(ABC):
    """Candidate action generator for a single archetype."""

    piece_type: PieceType

    @abstractmethod
    def generate(self, state: GameState, piece: Piece, side: Side) -> List[CandidateAction]:
        """Return the candidate actions for ``piece`` moved by ``side``."""

    def _step(
        self,
        view: BoardView,
        piece: Piece,
        side: Side,
        cells: Iterable[Cell],
        *,
        allow_attack: bool = True,
    ) -> List[CandidateAction]:
        """Single-cell move/attack onto each of ``cells``."""
        actions: List[CandidateAction] = []
        for cell in cells:
            if not view.can_stop(cell, side, piece.type):
                continue
            occupant = view.piece_at(cell, side)
            if occupant is None:
                actions.append(CandidateAction(type=ActionType.MOVE, row=cell[0], col=cell[1]))
            elif allow_attack and is_enemy(occupant, side) and occupant.type is not PieceType.BARD:
                actions.append(CandidateAction(type=ActionType.ATTACK, row=cell[0], col=cell[1]))
        return actions

    def _slide(
        self,
        view: BoardView,
        piece: Piece,
        side: Side,
        direction: Direction,
        mode: Visibility = Visibility.VISIBLE,
    ) -> List[CandidateAction]:
        """Unlimited straight travel, stopping at the first blocker.

        Scorch may be crossed but not stopped on; an opposing guard light
        ends the ray before it.
        """
        actions: List[CandidateAction] = []
        for cell in view.geometry.ray(piece.cell, direction):
            if not view.can_enter(cell, side):
                break
            occupant = view.piece_at(cell, side, mode)
            if occupant is not None:
                if (
                    is_enemy(occupant, side)
                    and occupant.type is not PieceType.BARD
                    and view.can_stop(cell, side, piece.type)
                ):
                    actions.append(CandidateAction(type=ActionType.ATTACK, row=cell[0], col=cell[1]))
                break
            if view.can_stop(cell, side, piece.type):
                actions.append(CandidateAction(type=ActionType.MOVE, row=cell[0], col=cell[1]))
        return actions


class Mutator(ABC):
    """Applies one kind of state change in place."""

    @abstractmethod
    def apply(self, state: GameState, *args, **kwargs) -> None:
        ...


class Validator(ABC):
    """Accepts or rejects an input against the current state."""

    @abstractmethod
    def validate(self, state: GameState, *args, **kwargs) -> bool:
        ...
