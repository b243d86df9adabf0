"""
Tests for the wizard conductor beam tracer.
"""

from tests.rules.helpers import at, make_state, place
from wizardchess.models import GuardLight, PieceType, ScorchMark, Side
from wizardchess.rules.beam import is_conductor, trace_beam

W = PieceType.WIZARD
A = PieceType.APPRENTICE


def _base(*extra):
    """White wizard at (1, 1) with an apprentice one step along +x."""
    return make_state(
        place(W, Side.WHITE, 1, 1, "w"),
        place(A, Side.WHITE, 2, 1, "a1"),
        *extra,
    )


# =============================================================================
# SUCCESSFUL TRACES
# =============================================================================


class TestBeamTarget:
    def test_single_chain_reaches_enemy(self):
        state = _base(place(PieceType.RANGER, Side.BLACK, 4, 1, "enemy"))
        trace = trace_beam(state, "w")
        assert trace.ok
        assert trace.target == at(4, 1)
        assert trace.target_id == "enemy"
        assert trace.path == [at(1, 1), at(2, 1), at(4, 1)]

    def test_multi_hop_chain(self):
        state = _base(
            place(A, Side.WHITE, 4, 1, "a2"),
            place(PieceType.RANGER, Side.BLACK, 5, 1, "enemy"),
        )
        trace = trace_beam(state, "w")
        assert trace.target == at(5, 1)
        assert trace.path == [at(1, 1), at(2, 1), at(4, 1), at(5, 1)]

    def test_activated_bard_conducts(self):
        state = make_state(
            place(W, Side.WHITE, 1, 1, "w"),
            place(PieceType.BARD, Side.NEUTRAL, 2, 1, "bard", activated=True),
            place(PieceType.RANGER, Side.BLACK, 4, 1, "enemy"),
        )
        assert trace_beam(state, "w").target == at(4, 1)

    def test_hidden_midpoint_does_not_block(self):
        state = _base(
            place(PieceType.ASSASSIN, Side.BLACK, 3, 1, "hidden", stealthed=True),
            place(PieceType.RANGER, Side.BLACK, 4, 1, "enemy"),
        )
        assert trace_beam(state, "w").target == at(4, 1)

    def test_scorched_midpoint_does_not_block(self):
        row, col = at(3, 1)
        state = _base(place(PieceType.RANGER, Side.BLACK, 4, 1, "enemy"))
        state.scorch_marks.append(ScorchMark(row=row, col=col, tag="t", created_by=Side.BLACK))
        assert trace_beam(state, "w").target == at(4, 1)

    def test_wizard_never_moves(self):
        state = _base(place(PieceType.RANGER, Side.BLACK, 4, 1, "enemy"))
        trace_beam(state, "w")
        assert state.pieces["w"].cell == at(1, 1)


# =============================================================================
# FAILED TRACES
# =============================================================================


class TestBeamFailure:
    def test_two_first_links_branch(self):
        state = _base(
            place(A, Side.WHITE, 1, 2, "a2"),
            place(PieceType.RANGER, Side.BLACK, 4, 1, "enemy"),
        )
        trace = trace_beam(state, "w")
        assert trace.target is None
        assert trace.failure == "branch"

    def test_two_later_links_branch(self):
        state = _base(
            place(PieceType.RANGER, Side.BLACK, 4, 1, "e1"),
            place(PieceType.RANGER, Side.BLACK, 2, 3, "e2"),
        )
        trace = trace_beam(state, "w")
        assert trace.target is None
        assert trace.failure == "branch"

    def test_no_conductor(self):
        state = make_state(place(W, Side.WHITE, 1, 1, "w"))
        assert trace_beam(state, "w").failure == "no_conductor"

    def test_dead_end(self):
        assert trace_beam(_base(), "w").failure == "dead_end"

    def test_hidden_enemy_is_not_a_target(self):
        state = _base(place(PieceType.ASSASSIN, Side.BLACK, 4, 1, "hidden", stealthed=True))
        assert trace_beam(state, "w").failure == "dead_end"

    def test_blocked_midpoint_breaks_link(self):
        state = make_state(
            place(W, Side.WHITE, 1, 1, "w"),
            place(PieceType.RANGER, Side.WHITE, 2, 1, "blocker"),
            place(A, Side.WHITE, 3, 1, "a"),
        )
        assert trace_beam(state, "w").failure == "no_conductor"

    def test_opposing_guard_light_on_endpoint(self):
        row, col = at(4, 1)
        state = _base(place(PieceType.RANGER, Side.BLACK, 4, 1, "enemy"))
        state.guard_lights.append(GuardLight(row=row, col=col, created_by=Side.BLACK, placed_on_turn=1))
        assert trace_beam(state, "w").target is None

    def test_opposing_guard_light_on_midpoint(self):
        row, col = at(3, 1)
        state = _base(place(PieceType.RANGER, Side.BLACK, 4, 1, "enemy"))
        state.guard_lights.append(GuardLight(row=row, col=col, created_by=Side.BLACK, placed_on_turn=1))
        assert trace_beam(state, "w").target is None

    def test_not_a_wizard(self):
        assert trace_beam(_base(), "a1").failure == "not_a_wizard"


class TestConductors:
    def test_conductor_kinds(self):
        assert is_conductor(place(A, Side.WHITE, 0, 0), Side.WHITE)
        assert not is_conductor(place(A, Side.BLACK, 0, 0), Side.WHITE)
        assert is_conductor(place(PieceType.BARD, Side.NEUTRAL, 0, 0, activated=True), Side.WHITE)
        assert not is_conductor(place(PieceType.BARD, Side.NEUTRAL, 0, 0), Side.WHITE)
        assert not is_conductor(place(PieceType.RANGER, Side.WHITE, 0, 0), Side.WHITE)
