"""FastAPI router exposing the pure rules functions.

Provides stateless endpoints for a fresh game snapshot, candidate actions
for one piece, and the wizard beam trace. Every request carries the full
snapshot; nothing is stored server-side.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field, ValidationError

from wizardchess.game_engine import GameEngine
from wizardchess.metrics import RULES_REQUESTS
from wizardchess.models import CandidateAction
from wizardchess.notation import position_to_algebraic
from wizardchess.utils.error_utils import is_production_request, sanitize_error_detail

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rules", tags=["rules"])


# =============================================================================
# Request/Response Models
# =============================================================================


class CandidatesRequest(BaseModel):
    """Snapshot plus the piece to enumerate."""

    state: Dict[str, Any]
    piece_id: str = Field(alias="pieceId")

    class Config:
        populate_by_name = True


class CandidatesResponse(BaseModel):
    piece_id: str = Field(alias="pieceId")
    candidates: List[CandidateAction]

    class Config:
        populate_by_name = True


class BeamRequest(BaseModel):
    """Snapshot plus the wizard whose beam to trace."""

    state: Dict[str, Any]
    wizard_id: str = Field(alias="wizardId")

    class Config:
        populate_by_name = True


class BeamResponse(BaseModel):
    wizard_id: str = Field(alias="wizardId")
    path: List[List[int]]
    labels: List[str]
    target: Optional[List[int]] = None
    target_id: Optional[str] = Field(None, alias="targetId")
    failure: Optional[str] = None

    class Config:
        populate_by_name = True


def _load(http_request: Request, state: Dict[str, Any], endpoint: str) -> GameEngine:
    try:
        return GameEngine.from_snapshot(state)
    except ValidationError as e:
        RULES_REQUESTS.labels(endpoint=endpoint, outcome="invalid").inc()
        logger.info(f"Rejected malformed snapshot on /rules/{endpoint}: {e.error_count()} error(s)")
        detail = sanitize_error_detail(
            e, "Invalid game snapshot", production=is_production_request(http_request)
        )
        raise HTTPException(status_code=422, detail=detail)


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/new-game")
async def new_game() -> Dict[str, Any]:
    """Initial snapshot: full layout, white to move."""
    RULES_REQUESTS.labels(endpoint="new-game", outcome="ok").inc()
    return GameEngine.new_game().snapshot()


@router.post("/candidates", response_model=CandidatesResponse, response_model_by_alias=True)
async def candidates(request: CandidatesRequest, http_request: Request):
    engine = _load(http_request, request.state, "candidates")
    if request.piece_id not in engine.state.pieces:
        RULES_REQUESTS.labels(endpoint="candidates", outcome="not_found").inc()
        raise HTTPException(status_code=404, detail=f"Unknown piece: {request.piece_id}")
    RULES_REQUESTS.labels(endpoint="candidates", outcome="ok").inc()
    return CandidatesResponse(piece_id=request.piece_id, candidates=engine.candidates(request.piece_id))


@router.post("/beam", response_model=BeamResponse, response_model_by_alias=True)
async def beam(request: BeamRequest, http_request: Request):
    """Trace a wizard's conductor beam. A failed trace is a normal result."""
    engine = _load(http_request, request.state, "beam")
    trace = engine.beam(request.wizard_id)
    if trace.failure == "not_a_wizard":
        RULES_REQUESTS.labels(endpoint="beam", outcome="not_found").inc()
        raise HTTPException(status_code=404, detail=f"Unknown wizard: {request.wizard_id}")
    RULES_REQUESTS.labels(endpoint="beam", outcome="ok").inc()
    return BeamResponse(
        wizard_id=request.wizard_id,
        path=[list(cell) for cell in trace.path],
        labels=[position_to_algebraic(cell) for cell in trace.path],
        target=list(trace.target) if trace.target is not None else None,
        target_id=trace.target_id,
        failure=trace.failure,
    )
