"""Game engine package for Wizard Chess.

Package structure:
- engine.py: ``GameEngine``, the turn resolution state machine

Public API:
    ``from wizardchess.game_engine import GameEngine``
"""

from wizardchess.game_engine.engine import BARD_SWAP_EXCLUDED, PLAYER_SIDES, GameEngine

__all__ = ["BARD_SWAP_EXCLUDED", "GameEngine", "PLAYER_SIDES"]
