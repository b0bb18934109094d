"""
Unit tests for the LogManager and PhaseManager.
"""

from unittest.mock import Mock

import pytest

from nerdduel.core.engine import GamePhase, TurnPhase
from nerdduel.core.events import (
    ActionCanceled,
    ActionSelected,
    DuelEnded,
    DuelStarted,
    EventType,
    IntroFinished,
    LogMessage,
    TurnResolved,
)
from nerdduel.game.managers import LogCategory, LogEntry, LogLevel, LogManager, PhaseManager


class TestLogManager:

    @pytest.fixture
    def log_manager(self, event_manager, duel_state):
        return LogManager(event_manager, duel_state)

    def test_duel_messages_reach_the_duel_log(self, log_manager, event_manager, duel_state):
        event_manager.publish(LogMessage(turn=1, message="Joe used Slap!", category="DUEL"))
        event_manager.publish(LogMessage(turn=1, message="Phase changed", category="SYSTEM"))
        event_manager.process_events()

        assert list(duel_state.log) == ["Joe used Slap!"]
        assert [m.text for m in log_manager.get_messages()] == ["Joe used Slap!", "Phase changed"]

    def test_unknown_category_falls_back_to_system(self, log_manager, event_manager):
        event_manager.publish(LogMessage(turn=1, message="hello", category="NONSENSE"))
        event_manager.process_events()

        assert log_manager.get_messages()[0].category == LogCategory.SYSTEM

    def test_debug_hidden_at_info_level(self, log_manager, event_manager):
        log_manager.debug("noisy")
        event_manager.publish(LogMessage(turn=1, message="bad line", category="INPUT"))
        event_manager.publish(LogMessage(turn=1, message="useful", category="SYSTEM"))
        event_manager.process_events()

        assert not log_manager.is_debug_enabled()
        assert [m.text for m in log_manager.get_messages()] == ["useful"]

    def test_debug_level_shows_everything(self, log_manager, event_manager):
        log_manager.set_log_level(LogLevel.DEBUG)
        log_manager.debug("noisy")
        event_manager.publish(LogMessage(turn=1, message="bad line", category="INPUT"))
        event_manager.process_events()

        assert log_manager.is_debug_enabled()
        assert [m.category for m in log_manager.get_messages()] == [LogCategory.DEBUG, LogCategory.INPUT]

    def test_count_and_format(self, log_manager):
        for number in range(3):
            log_manager.log(f"line {number}", LogCategory.DUEL)

        recent = log_manager.get_messages(count=2)

        assert [m.text for m in recent] == ["line 1", "line 2"]
        assert recent[0].format() == "[DUL] line 1"
        assert recent[0].format(include_category=False) == "line 1"

    def test_format_with_timestamp(self):
        entry = LogEntry(text="hello", category=LogCategory.SYSTEM)
        stamp = entry.timestamp.strftime("%H:%M:%S")

        assert entry.format(include_timestamp=True) == f"[{stamp}] [SYS] hello"

    def test_history_is_bounded(self, event_manager, duel_state):
        log_manager = LogManager(event_manager, duel_state, max_messages=2)
        for number in range(5):
            log_manager.log(f"line {number}")

        assert [m.text for m in log_manager.get_messages()] == ["line 3", "line 4"]


class TestPhaseManager:

    @pytest.fixture
    def phase_manager(self, duel_state, event_manager):
        return PhaseManager(duel_state, event_manager)

    def test_intro_to_menu_to_game(self, phase_manager, duel_state, event_manager):
        event_manager.publish_immediate(IntroFinished(turn=0, skipped=True))
        assert duel_state.phase == GamePhase.MAIN_MENU

        duel_state.turn_phase = TurnPhase.MATHING
        event_manager.publish_immediate(DuelStarted(turn=1, first_name="A", second_name="B"))

        assert duel_state.phase == GamePhase.IN_GAME
        assert duel_state.turn_phase == TurnPhase.CHOOSING

    def test_turn_phase_cycle(self, phase_manager, duel_state, event_manager):
        duel_state.phase = GamePhase.IN_GAME

        event_manager.publish_immediate(ActionSelected(turn=1, acting_index=0, action_index=0, critical=False))
        assert duel_state.turn_phase == TurnPhase.MATHING

        event_manager.publish_immediate(ActionCanceled(turn=1, acting_index=0, action_index=0))
        assert duel_state.turn_phase == TurnPhase.CHOOSING

        event_manager.publish_immediate(ActionSelected(turn=1, acting_index=0, action_index=1, critical=False))
        event_manager.publish_immediate(
            TurnResolved(turn=2, acting_index=0, action_index=1, correct=True, submitted=5, expected=5)
        )
        assert duel_state.turn_phase == TurnPhase.CHOOSING

    def test_turn_events_ignored_outside_game(self, phase_manager, duel_state, event_manager):
        event_manager.publish_immediate(ActionSelected(turn=1, acting_index=0, action_index=0, critical=False))

        assert duel_state.phase == GamePhase.INTRO
        assert duel_state.turn_phase == TurnPhase.CHOOSING

    def test_game_end_is_terminal(self, phase_manager, duel_state, event_manager):
        duel_state.phase = GamePhase.IN_GAME
        event_manager.publish_immediate(DuelEnded(turn=3, winner_name="A", loser_name="B"))
        assert duel_state.phase == GamePhase.GAME_END

        event_manager.publish_immediate(IntroFinished(turn=0, skipped=True))
        event_manager.publish_immediate(DuelStarted(turn=1, first_name="A", second_name="B"))
        event_manager.publish_immediate(ActionSelected(turn=1, acting_index=0, action_index=0, critical=False))

        assert duel_state.phase == GamePhase.GAME_END
        assert duel_state.turn_phase == TurnPhase.CHOOSING

    def test_transitions_are_announced(self, phase_manager, duel_state, event_manager):
        game_changes = Mock()
        turn_changes = Mock()
        event_manager.subscribe(EventType.GAME_PHASE_CHANGED, game_changes)
        event_manager.subscribe(EventType.TURN_PHASE_CHANGED, turn_changes)

        event_manager.publish_immediate(IntroFinished(turn=0, skipped=True))
        event_manager.publish_immediate(DuelStarted(turn=1, first_name="A", second_name="B"))
        event_manager.publish_immediate(ActionSelected(turn=1, acting_index=0, action_index=0, critical=False))
        event_manager.process_events()

        assert [c.args[0].new_phase for c in game_changes.call_args_list] == ["MAIN_MENU", "IN_GAME"]
        turn_changes.assert_called_once()
        assert turn_changes.call_args[0][0].new_phase == "MATHING"
