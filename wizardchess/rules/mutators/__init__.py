"""State mutators.

Each mutator applies one kind of change to a ``GameState`` in place. The
engine composes them; none of them checks legality.
"""

from wizardchess.rules.mutators.capture import CaptureMutator, activate_bards
from wizardchess.rules.mutators.guard import GuardMutator
from wizardchess.rules.mutators.movement import RelocationMutator, flight_path
from wizardchess.rules.mutators.swap import SwapMutator
from wizardchess.rules.mutators.terrain import GuardLightMutator, ScorchMutator

__all__ = [
    "CaptureMutator",
    "GuardLightMutator",
    "GuardMutator",
    "RelocationMutator",
    "ScorchMutator",
    "SwapMutator",
    "activate_bards",
    "flight_path",
]
