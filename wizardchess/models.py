"""
Pydantic Models for Wizard Chess Game State
Field aliases match the camelCase snapshot exchanged through the room relay
"""

from pydantic import BaseModel, Field
from typing import Annotated, Optional, List, Dict, Union, Literal
from enum import Enum


class Side(str, Enum):
    """Side enumeration"""
    WHITE = "white"
    BLACK = "black"
    NEUTRAL = "neutral"

    @property
    def opponent(self) -> "Side":
        if self is Side.WHITE:
            return Side.BLACK
        if self is Side.BLACK:
            return Side.WHITE
        return Side.NEUTRAL


class PieceType(str, Enum):
    """Piece archetype enumeration"""
    WIZARD = "wizard"
    APPRENTICE = "apprentice"
    DRAGON = "dragon"
    RANGER = "ranger"
    GRIFFIN = "griffin"
    ASSASSIN = "assassin"
    PALADIN = "paladin"
    BARD = "bard"


class ActionType(str, Enum):
    """Candidate action enumeration"""
    MOVE = "move"
    SWAP = "swap"
    ATTACK = "attack"


class TurnPhase(str, Enum):
    """Turn resolution phase enumeration"""
    IDLE = "idle"
    SELECTED = "selected"
    AWAITING_GUARD_DECISION = "awaiting_guard_decision"
    AWAITING_WIZARD_ATTACK_CHOICE = "awaiting_wizard_attack_choice"
    AWAITING_BARD_SWAP_TARGET = "awaiting_bard_swap_target"


class WizardAttackMode(str, Enum):
    """How a wizard resolves an adjacent beam target"""
    BEAM = "beam"
    WALK = "walk"


# =============================================================================
# Pieces
# =============================================================================


class AssassinTraits(BaseModel):
    """Stealth state carried only by assassins"""
    kind: Literal["assassin"] = "assassin"
    stealthed: bool = False
    stealth_expires_on_side: Optional[Side] = Field(None, alias="stealthExpiresOnSide")

    class Config:
        populate_by_name = True


class BardTraits(BaseModel):
    """Activation flag carried only by bards"""
    kind: Literal["bard"] = "bard"
    activated: bool = False


class ApprenticeTraits(BaseModel):
    """One-time wizard swap flag carried only by apprentices"""
    kind: Literal["apprentice"] = "apprentice"
    swap_used: bool = Field(False, alias="swapUsed")

    class Config:
        populate_by_name = True


class DragonTraits(BaseModel):
    """Stable identity used to scope a dragon's scorch marks"""
    kind: Literal["dragon"] = "dragon"
    tag: str


PieceTraits = Annotated[
    Union[AssassinTraits, BardTraits, ApprenticeTraits, DragonTraits],
    Field(discriminator="kind"),
]


class Piece(BaseModel):
    """A piece on the board: common header plus an archetype payload"""
    id: str
    type: PieceType
    side: Side
    row: int
    col: int
    traits: Optional[PieceTraits] = None

    @property
    def cell(self) -> tuple[int, int]:
        return (self.row, self.col)

    @property
    def stealthed(self) -> bool:
        return isinstance(self.traits, AssassinTraits) and self.traits.stealthed

    @property
    def activated(self) -> bool:
        return isinstance(self.traits, BardTraits) and self.traits.activated

    @property
    def swap_used(self) -> bool:
        return isinstance(self.traits, ApprenticeTraits) and self.traits.swap_used

    @property
    def dragon_tag(self) -> Optional[str]:
        if isinstance(self.traits, DragonTraits):
            return self.traits.tag
        return None


# =============================================================================
# Terrain
# =============================================================================


class ScorchMark(BaseModel):
    """Dragon trail: passable by all, stoppable only by a paladin"""
    row: int
    col: int
    tag: str
    created_by: Side = Field(alias="createdBy")

    class Config:
        populate_by_name = True


class GuardLight(BaseModel):
    """Cell the opposing side may neither stop on nor pass through"""
    row: int
    col: int
    created_by: Side = Field(alias="createdBy")
    placed_on_turn: int = Field(0, alias="placedOnTurn")

    class Config:
        populate_by_name = True


# =============================================================================
# Actions and turn state
# =============================================================================


class CandidateAction(BaseModel):
    """Legal action offered for the selected piece"""
    type: ActionType
    row: int
    col: int

    @property
    def cell(self) -> tuple[int, int]:
        return (self.row, self.col)


class PendingGuard(BaseModel):
    """Attack suspended until the defending side guards or declines"""
    attacker_id: str = Field(alias="attackerId")
    target_id: str = Field(alias="targetId")
    target_row: int = Field(alias="targetRow")
    target_col: int = Field(alias="targetCol")
    defending_side: Side = Field(alias="defendingSide")
    guardian_ids: List[str] = Field(default_factory=list, alias="guardianIds")
    melee: bool = True

    class Config:
        populate_by_name = True


class MoveRecord(BaseModel):
    """Resolved step in three redaction variants"""
    full: str
    white_view: str = Field(alias="whiteView")
    black_view: str = Field(alias="blackView")

    class Config:
        populate_by_name = True

    def for_viewer(self, side: Optional[Side]) -> str:
        if side is Side.WHITE:
            return self.white_view
        if side is Side.BLACK:
            return self.black_view
        return self.full


class IdleTurn(BaseModel):
    phase: Literal["idle"] = "idle"


class SelectedTurn(BaseModel):
    phase: Literal["selected"] = "selected"
    piece_id: str = Field(alias="pieceId")
    candidates: List[CandidateAction] = Field(default_factory=list)

    class Config:
        populate_by_name = True


class AwaitingGuardDecision(BaseModel):
    phase: Literal["awaiting_guard_decision"] = "awaiting_guard_decision"
    pending: PendingGuard


class AwaitingWizardAttackChoice(BaseModel):
    phase: Literal["awaiting_wizard_attack_choice"] = "awaiting_wizard_attack_choice"
    wizard_id: str = Field(alias="wizardId")
    target_row: int = Field(alias="targetRow")
    target_col: int = Field(alias="targetCol")

    class Config:
        populate_by_name = True


class AwaitingBardSwapTarget(BaseModel):
    phase: Literal["awaiting_bard_swap_target"] = "awaiting_bard_swap_target"
    bard_id: str = Field(alias="bardId")
    partner_ids: List[str] = Field(default_factory=list, alias="partnerIds")

    class Config:
        populate_by_name = True


TurnState = Annotated[
    Union[
        IdleTurn,
        SelectedTurn,
        AwaitingGuardDecision,
        AwaitingWizardAttackChoice,
        AwaitingBardSwapTarget,
    ],
    Field(discriminator="phase"),
]


def _empty_tally() -> Dict[Side, List[PieceType]]:
    return {Side.WHITE: [], Side.BLACK: [], Side.NEUTRAL: []}


class GameState(BaseModel):
    """Complete game snapshot"""
    pieces: Dict[str, Piece] = Field(default_factory=dict)
    current_side: Side = Field(Side.WHITE, alias="currentSide")
    turn_number: int = Field(1, alias="turnNumber")
    turn: TurnState = Field(default_factory=IdleTurn)
    move_history: List[MoveRecord] = Field(default_factory=list, alias="moveHistory")
    scorch_marks: List[ScorchMark] = Field(default_factory=list, alias="scorchMarks")
    guard_lights: List[GuardLight] = Field(default_factory=list, alias="guardLights")
    captured: Dict[Side, List[PieceType]] = Field(default_factory=_empty_tally)
    seats: Dict[Side, Optional[str]] = Field(
        default_factory=lambda: {Side.WHITE: None, Side.BLACK: None}
    )
    ready: Dict[Side, bool] = Field(
        default_factory=lambda: {Side.WHITE: False, Side.BLACK: False}
    )
    winner: Optional[Side] = None
    game_over: bool = Field(False, alias="gameOver")
    version: int = 0

    class Config:
        populate_by_name = True

    @property
    def phase(self) -> TurnPhase:
        return TurnPhase(self.turn.phase)
