"""
Unit tests for DuelState and its substates.
"""

import pytest

from nerdduel.core.engine import DuelState, GamePhase, PendingTurn, TurnPhase
from nerdduel.game.entities import spawn
from tests.conftest import make_template


def _pending(acting_index=0):
    return PendingTurn(
        acting_index=acting_index,
        action_index=0,
        critical=False,
        equation_text="50 - 6 * 10 * 1",
        expected_answer=-10,
    )


class TestDuelStateDefaults:

    def test_starts_in_intro(self, duel_state):
        assert duel_state.phase == GamePhase.INTRO
        assert duel_state.turn_phase == TurnPhase.CHOOSING
        assert duel_state.nerds is None
        assert duel_state.pending_turn is None
        assert duel_state.outcome is None
        assert list(duel_state.log) == []

    def test_log_size_must_be_positive(self):
        with pytest.raises(ValueError, match="log_size"):
            DuelState(log_size=0)

    def test_require_nerds_before_duel(self, duel_state):
        with pytest.raises(RuntimeError, match="No duel in progress"):
            duel_state.require_nerds()
        assert duel_state.nerd_snapshots() == ()


class TestDuelLifecycle:

    @pytest.fixture
    def started(self, duel_state):
        first = spawn(make_template("Alpha"))
        second = spawn(make_template("Beta", health=50))
        duel_state.start_duel(first, second)
        return duel_state

    def test_start_duel_installs_nerds(self, started):
        assert started.acting_nerd().name == "Alpha"
        assert started.opposing_nerd().name == "Beta"
        assert started.current_player == 0
        assert started.opponent_index == 1
        assert started.turn_number == 1

    def test_start_duel_resets_previous_duel(self, started):
        started.push_log("old message")
        started.pending_turn = _pending()
        started.current_player = 1
        started.turn_number = 7

        started.start_duel(spawn(make_template("Gamma")), spawn(make_template("Delta")))

        assert started.current_player == 0
        assert started.turn_number == 1
        assert started.pending_turn is None
        assert list(started.log) == []

    def test_advance_turn_alternates(self, started):
        started.pending_turn = _pending()
        started.menu.reject_answer("abc")

        started.advance_turn()

        assert started.current_player == 1
        assert started.turn_number == 2
        assert started.pending_turn is None
        assert started.menu.answer_text == ""
        assert not started.menu.answer_rejected

        started.advance_turn()
        assert started.current_player == 0
        assert started.acting_nerd().name == "Alpha"

    def test_equation_text_only_while_solving(self, started):
        started.pending_turn = _pending()
        assert started.equation_text is None

        started.phase = GamePhase.IN_GAME
        started.turn_phase = TurnPhase.MATHING
        assert started.equation_text == "50 - 6 * 10 * 1"

        started.turn_phase = TurnPhase.CHOOSING
        assert started.equation_text is None

    def test_snapshots(self, started):
        first, second = started.nerd_snapshots()
        assert (first.name, first.health, first.multiplier) == ("Alpha", 100, 10)
        assert (second.name, second.health) == ("Beta", 50)


class TestDuelLog:

    def test_oldest_message_evicted_at_cap(self):
        state = DuelState(log_size=3)
        for number in range(1, 5):
            state.push_log(f"message {number}")

        assert list(state.log) == ["message 2", "message 3", "message 4"]

    def test_is_over_follows_phase(self, duel_state):
        assert not duel_state.is_over
        duel_state.phase = GamePhase.GAME_END
        assert duel_state.is_over
