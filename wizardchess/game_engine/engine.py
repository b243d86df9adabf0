"""Turn resolution state machine.

``GameEngine`` owns a ``GameState`` and advances it one input at a time.
Inputs that are illegal or arrive in the wrong phase are declined: the
operation returns False and the state is left untouched.

Phases:
    idle -> selected -> (resolve) -> handoff -> idle
    selected -> awaiting_wizard_attack_choice -> (resolve)
    selected -> awaiting_guard_decision -> (guard | decline) -> handoff
    selected -> (bard move) -> awaiting_bard_swap_target -> handoff

Resolution order for a committed action:
    1. capture removal (a bard target only records "no effect")
    2. bard activation on the first capture
    3. relocation with stealth, scorch and paladin terrain updates
    4. paladin-zone reveal
    5. win check
    6. handoff
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Set

from wizardchess.board_manager import Cell
from wizardchess.models import (
    ActionType,
    AwaitingBardSwapTarget,
    AwaitingGuardDecision,
    AwaitingWizardAttackChoice,
    CandidateAction,
    GameState,
    IdleTurn,
    PendingGuard,
    Piece,
    PieceType,
    SelectedTurn,
    Side,
    TurnPhase,
    WizardAttackMode,
)
from wizardchess.notation import (
    capture_text,
    guard_text,
    make_record,
    move_text,
    no_effect_text,
    swap_text,
)
from wizardchess.rules.beam import BeamTrace, trace_beam
from wizardchess.rules.core import (
    BoardView,
    Visibility,
    geometry_for,
    guardians_for,
    is_hidden_from,
    protection_zone,
)
from wizardchess.rules.generators import acting_side, generate_candidates
from wizardchess.rules.layout import initial_state
from wizardchess.rules.mutators import (
    CaptureMutator,
    GuardLightMutator,
    GuardMutator,
    RelocationMutator,
    SwapMutator,
)
from wizardchess.rules.stealth import expire_grace
from wizardchess.rules.validators import GuardDecisionValidator, TurnValidator
from wizardchess.rules.victory import apply_victory

logger = logging.getLogger(__name__)

PLAYER_SIDES = (Side.WHITE, Side.BLACK)
BARD_SWAP_EXCLUDED = (PieceType.BARD, PieceType.DRAGON, PieceType.WIZARD)

_SELECTABLE = (TurnPhase.IDLE, TurnPhase.SELECTED)


class GameEngine:
    """Single-game rules engine."""

    def __init__(self, state: Optional[GameState] = None):
        self.state = state if state is not None else initial_state()

        self.turn_validator = TurnValidator()
        self.guard_validator = GuardDecisionValidator()

        self.capture = CaptureMutator()
        self.relocation = RelocationMutator()
        self.swap = SwapMutator()
        self.guard = GuardMutator()
        self.lights = GuardLightMutator()

    # =========================================================================
    # Construction and snapshots
    # =========================================================================

    @classmethod
    def new_game(cls) -> "GameEngine":
        return cls(initial_state())

    @classmethod
    def from_snapshot(cls, data: Dict[str, Any]) -> "GameEngine":
        """Rebuild an engine from a wire snapshot.

        Raises:
            pydantic.ValidationError: if ``data`` is not a valid snapshot
        """
        return cls(GameState.model_validate(data))

    def snapshot(self) -> Dict[str, Any]:
        return self.state.model_dump(by_alias=True, mode="json")

    # =========================================================================
    # Read-only queries
    # =========================================================================

    def candidates(self, piece_id: str) -> List[CandidateAction]:
        return generate_candidates(self.state, piece_id)

    def beam(self, wizard_id: str) -> BeamTrace:
        return trace_beam(self.state, wizard_id)

    def protection_zone(self, piece_id: str) -> Set[Cell]:
        piece = self.state.pieces.get(piece_id)
        if piece is None or piece.type is not PieceType.PALADIN:
            return set()
        return protection_zone(piece, geometry_for(self.state))

    # =========================================================================
    # Seats
    # =========================================================================

    def claim_seat(self, side: Side, participant_id: str) -> bool:
        if side not in PLAYER_SIDES:
            return False
        holder = self.state.seats.get(side)
        if holder is not None and holder != participant_id:
            return self._decline("claim_seat", f"{side.value} seat held by {holder}")
        self.state.seats[side] = participant_id
        self.state.version += 1
        return True

    def set_ready(self, side: Side, ready: bool = True) -> bool:
        if side not in PLAYER_SIDES or self.state.seats.get(side) is None:
            return self._decline("set_ready", f"{side.value} seat is empty")
        self.state.ready[side] = ready
        self.state.version += 1
        return True

    # =========================================================================
    # Turn operations
    # =========================================================================

    def select(self, piece_id: str, as_side: Optional[Side] = None) -> bool:
        if not self.turn_validator.validate(self.state, _SELECTABLE, as_side):
            return self._decline("select", "not selectable now")
        piece = self.state.pieces.get(piece_id)
        if piece is None:
            return self._decline("select", f"unknown piece {piece_id}")
        if piece.side not in (self.state.current_side, Side.NEUTRAL):
            return self._decline("select", f"{piece_id} does not belong to {self.state.current_side.value}")

        self.state.turn = SelectedTurn(piece_id=piece_id, candidates=generate_candidates(self.state, piece_id))
        return True

    def deselect(self, as_side: Optional[Side] = None) -> bool:
        if not self.turn_validator.validate(self.state, (TurnPhase.SELECTED,), as_side):
            return self._decline("deselect", "nothing selected")
        self.state.turn = IdleTurn()
        return True

    def act(self, row: int, col: int, as_side: Optional[Side] = None) -> bool:
        """Commit the selected piece's candidate action at ``(row, col)``."""
        if not self.turn_validator.validate(self.state, (TurnPhase.SELECTED,), as_side):
            return self._decline("act", "no piece selected")
        piece = self.state.pieces.get(self.state.turn.piece_id)
        if piece is None:
            return self._decline("act", "selected piece is gone")

        cell = (row, col)
        action = next((a for a in generate_candidates(self.state, piece.id) if a.cell == cell), None)
        if action is None:
            return self._decline("act", f"{cell} is not a candidate for {piece.id}")

        if action.type is ActionType.MOVE:
            return self._resolve_move(piece, cell)
        if action.type is ActionType.SWAP:
            return self._resolve_swap(piece, cell)
        return self._resolve_attack(piece, cell)

    def click(self, row: int, col: int, as_side: Optional[Side] = None) -> bool:
        """Board click dispatcher.

        Acts on a candidate cell, switches selection to another of the
        mover's pieces, picks a bard swap partner, or otherwise deselects.
        """
        cell = (row, col)
        view = BoardView(self.state)
        occupant = view.piece_at(cell, self.state.current_side)
        phase = self.state.phase

        if phase is TurnPhase.AWAITING_BARD_SWAP_TARGET:
            if occupant is None:
                return self._decline("click", f"no swap partner at {cell}")
            return self.choose_bard_swap(occupant.id, as_side)

        if phase is TurnPhase.SELECTED:
            if any(a.cell == cell for a in self.state.turn.candidates):
                return self.act(row, col, as_side)
            if occupant is not None and occupant.id == self.state.turn.piece_id:
                return self.deselect(as_side)
            if occupant is not None and occupant.side in (self.state.current_side, Side.NEUTRAL):
                return self.select(occupant.id, as_side)
            return self.deselect(as_side)

        if phase is TurnPhase.IDLE and occupant is not None:
            return self.select(occupant.id, as_side)
        return self._decline("click", f"nothing to do at {cell} in {phase.value}")

    def choose_wizard_attack(self, mode: WizardAttackMode, as_side: Optional[Side] = None) -> bool:
        if not self.turn_validator.validate(
            self.state, (TurnPhase.AWAITING_WIZARD_ATTACK_CHOICE,), as_side
        ):
            return self._decline("choose_wizard_attack", "no wizard attack pending")
        turn = self.state.turn
        wizard = self.state.pieces.get(turn.wizard_id)
        target = BoardView(self.state).piece_at((turn.target_row, turn.target_col), mode=Visibility.PHYSICAL)
        if wizard is None or target is None:
            return self._decline("choose_wizard_attack", "attack no longer valid")

        try:
            mode = WizardAttackMode(mode)
        except ValueError:
            return self._decline("choose_wizard_attack", f"unknown mode {mode!r}")
        return self._begin_attack(wizard, target, melee=mode is WizardAttackMode.WALK)

    def decide_guard(self, paladin_id: Optional[str], as_side: Optional[Side] = None) -> bool:
        """Defender's answer: a guardian id to guard, or None to decline."""
        if not self.guard_validator.validate(self.state, as_side):
            return self._decline("decide_guard", "no guard decision pending")
        pending = self.state.turn.pending
        attacker = self.state.pieces.get(pending.attacker_id)
        target = self.state.pieces.get(pending.target_id)
        if attacker is None or target is None:
            return self._decline("decide_guard", "attack participants are gone")

        if paladin_id is None:
            logger.debug(f"{pending.defending_side.value} declined to guard {target.id}")
            return self._commit_capture(attacker, target, pending.melee)

        if paladin_id not in pending.guardian_ids:
            return self._decline("decide_guard", f"{paladin_id} cannot guard {target.id}")
        paladin = self.state.pieces.get(paladin_id)
        if paladin is None:
            return self._decline("decide_guard", f"unknown paladin {paladin_id}")

        origin = attacker.cell
        paladin_cell = paladin.cell
        self.guard.apply(self.state, pending, attacker, target, paladin)
        self._record(
            guard_text(
                attacker.type,
                origin,
                (pending.target_row, pending.target_col),
                paladin_cell,
                target.type,
                ranged=not pending.melee,
            ),
            attacker,
        )
        self._finish_turn()
        return True

    def choose_bard_swap(self, piece_id: str, as_side: Optional[Side] = None) -> bool:
        if not self.turn_validator.validate(self.state, (TurnPhase.AWAITING_BARD_SWAP_TARGET,), as_side):
            return self._decline("choose_bard_swap", "no bard swap pending")
        turn = self.state.turn
        if piece_id not in turn.partner_ids:
            return self._decline("choose_bard_swap", f"{piece_id} is not a swap partner")
        bard = self.state.pieces.get(turn.bard_id)
        partner = self.state.pieces.get(piece_id)
        if bard is None or partner is None:
            return self._decline("choose_bard_swap", "swap participants are gone")

        bard_cell, partner_cell = bard.cell, partner.cell
        self.swap.apply(self.state, bard, partner)
        self._record(swap_text(bard.type, bard_cell, partner.type, partner_cell), partner)
        self._finish_turn()
        return True

    # =========================================================================
    # Resolution
    # =========================================================================

    def _resolve_move(self, piece: Piece, dest: Cell) -> bool:
        origin = piece.cell
        hidden = BoardView(self.state).piece_at(dest, mode=Visibility.PHYSICAL)

        if hidden is not None and hidden.id != piece.id:
            # Stepping onto a hidden assassin captures it outright
            if not self.capture.apply(self.state, hidden):
                return self._decline("act", f"cannot land on {hidden.id}")
            self.relocation.apply(self.state, piece, dest, forced_reveal=True)
            self._record(capture_text(piece.type, origin, hidden.type, dest), piece)
            logger.debug(f"{piece.id} caught hidden {hidden.id} at {dest}")
        else:
            self.relocation.apply(self.state, piece, dest)
            self._record(move_text(piece.type, origin, dest), piece)

        if piece.type is PieceType.BARD:
            return self._begin_bard_swap(piece)
        self._finish_turn()
        return True

    def _resolve_swap(self, piece: Piece, cell: Cell) -> bool:
        partner = BoardView(self.state).piece_at(cell, mode=Visibility.PHYSICAL)
        if partner is None or partner.side != piece.side:
            return self._decline("act", f"no friendly swap partner at {cell}")
        origin = piece.cell
        self.swap.apply(self.state, piece, partner)
        self._record(swap_text(piece.type, origin, partner.type, cell), piece)
        self._finish_turn()
        return True

    def _resolve_attack(self, piece: Piece, cell: Cell) -> bool:
        side = acting_side(self.state, piece.side)
        view = BoardView(self.state)
        target = view.piece_at(cell, mode=Visibility.PHYSICAL)
        if target is None:
            return self._decline("act", f"no target at {cell}")

        if piece.type is PieceType.WIZARD:
            adjacent = cell in view.geometry.neighbours(piece.cell)
            if adjacent and view.can_stop(cell, side, piece.type):
                self.state.turn = AwaitingWizardAttackChoice(
                    wizard_id=piece.id, target_row=cell[0], target_col=cell[1]
                )
                self.state.version += 1
                return True
            return self._begin_attack(piece, target, melee=False)
        return self._begin_attack(piece, target, melee=True)

    def _begin_attack(self, attacker: Piece, target: Piece, melee: bool) -> bool:
        if target.type is PieceType.BARD:
            self._record(no_effect_text(attacker.type, attacker.cell, target.cell), attacker)
            self._finish_turn()
            return True

        guardians = guardians_for(self.state, target)
        if guardians:
            self.state.turn = AwaitingGuardDecision(
                pending=PendingGuard(
                    attacker_id=attacker.id,
                    target_id=target.id,
                    target_row=target.row,
                    target_col=target.col,
                    defending_side=target.side,
                    guardian_ids=[p.id for p in guardians],
                    melee=melee,
                )
            )
            self.state.version += 1
            logger.debug(f"Attack on {target.id} suspended; guardians {[p.id for p in guardians]}")
            return True

        return self._commit_capture(attacker, target, melee)

    def _commit_capture(self, attacker: Piece, target: Piece, melee: bool) -> bool:
        origin, target_cell = attacker.cell, target.cell
        if not self.capture.apply(self.state, target):
            return self._decline("capture", f"{target.id} cannot be captured")
        if melee:
            self.relocation.apply(self.state, attacker, target_cell, forced_reveal=True)
        self._record(capture_text(attacker.type, origin, target.type, target_cell), attacker)
        self._finish_turn()
        return True

    def _begin_bard_swap(self, bard: Piece) -> bool:
        side = self.state.current_side
        partners = [
            p.id for p in self.state.pieces.values()
            if p.side == side and p.type not in BARD_SWAP_EXCLUDED
        ]
        if not partners:
            logger.debug(f"Bard {bard.id} has no swap partner; turn ends")
            self._finish_turn()
            return True
        self.state.turn = AwaitingBardSwapTarget(bard_id=bard.id, partner_ids=partners)
        self.state.version += 1
        return True

    # =========================================================================
    # Bookkeeping
    # =========================================================================

    def _record(self, text: str, actor: Piece) -> None:
        hidden_from = {side for side in PLAYER_SIDES if is_hidden_from(actor, side)}
        self.state.move_history.append(make_record(text, hidden_from))

    def _finish_turn(self) -> None:
        state = self.state
        if apply_victory(state):
            state.turn = IdleTurn()
            state.version += 1
            return

        completed = state.current_side
        state.current_side = completed.opponent
        state.turn_number += 1
        self.lights.expire(state, state.current_side)
        expire_grace(state.pieces.values(), completed)
        state.turn = IdleTurn()
        state.version += 1
        logger.debug(f"Turn {state.turn_number}: {state.current_side.value} to move")

    def _decline(self, operation: str, reason: str) -> bool:
        logger.debug(f"Declined {operation}: {reason}")
        return False
