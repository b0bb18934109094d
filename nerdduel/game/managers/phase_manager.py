"""
Phase Management System with Event-Driven State Machine.

All phase changes of the duel happen here. Other managers publish events
describing what happened (a duel started, an action was selected, a turn
was resolved) and the phase manager moves the state according to a fixed
table of transition rules.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...core.events import EventManager
    from ...core.engine import DuelState

from ...core.events import (
    EventType,
    GameEvent,
    GamePhaseChanged,
    LogMessage,
    TurnPhaseChanged,
)
from ...core.engine import GamePhase, TurnPhase


@dataclass
class GamePhaseTransitionRule:
    """Defines a game phase transition rule."""

    from_phase: GamePhase
    event_type: EventType
    to_phase: GamePhase
    description: str

    def matches(self, current_phase: GamePhase, event_type: EventType) -> bool:
        return self.from_phase == current_phase and self.event_type == event_type


@dataclass
class TurnPhaseTransitionRule:
    """Defines a turn phase transition rule, only applied while in game."""

    from_phase: TurnPhase
    event_type: EventType
    to_phase: TurnPhase
    description: str

    def matches(self, current_phase: TurnPhase, event_type: EventType) -> bool:
        return self.from_phase == current_phase and self.event_type == event_type


GAME_PHASE_RULES = (
    GamePhaseTransitionRule(
        from_phase=GamePhase.INTRO,
        event_type=EventType.INTRO_FINISHED,
        to_phase=GamePhase.MAIN_MENU,
        description="Show the main menu once the intro is over",
    ),
    GamePhaseTransitionRule(
        from_phase=GamePhase.MAIN_MENU,
        event_type=EventType.DUEL_STARTED,
        to_phase=GamePhase.IN_GAME,
        description="Start the duel once both nerds are picked",
    ),
    GamePhaseTransitionRule(
        from_phase=GamePhase.IN_GAME,
        event_type=EventType.DUEL_ENDED,
        to_phase=GamePhase.GAME_END,
        description="End the game when a nerd is defeated",
    ),
)

TURN_PHASE_RULES = (
    TurnPhaseTransitionRule(
        from_phase=TurnPhase.CHOOSING,
        event_type=EventType.ACTION_SELECTED,
        to_phase=TurnPhase.MATHING,
        description="Show the equation once an action is picked",
    ),
    TurnPhaseTransitionRule(
        from_phase=TurnPhase.MATHING,
        event_type=EventType.ACTION_CANCELED,
        to_phase=TurnPhase.CHOOSING,
        description="Back to action selection, same nerd keeps the turn",
    ),
    TurnPhaseTransitionRule(
        from_phase=TurnPhase.MATHING,
        event_type=EventType.TURN_RESOLVED,
        to_phase=TurnPhase.CHOOSING,
        description="Next nerd chooses after an answer is checked",
    ),
)


class PhaseManager:
    """Centralized phase management with event-driven state machine.

    GAME_END has no outgoing rule, so once it is reached the duel stays
    there and every later event is ignored.
    """

    def __init__(self, duel_state: "DuelState", event_manager: "EventManager"):
        self.state = duel_state
        self.event_manager = event_manager

        self.game_phase_rules: list[GamePhaseTransitionRule] = list(GAME_PHASE_RULES)
        self.turn_phase_rules: list[TurnPhaseTransitionRule] = list(TURN_PHASE_RULES)

        self._subscribe_to_events()

    def _emit_log(self, message: str, level: str = "DEBUG") -> None:
        self.event_manager.publish(
            LogMessage(
                turn=self.state.turn_number,
                message=message,
                category="SYSTEM",
                level=level,
                source="PhaseManager",
            ),
            source="PhaseManager",
        )

    def _subscribe_to_events(self) -> None:
        trigger_types = {rule.event_type for rule in self.game_phase_rules}
        trigger_types.update(rule.event_type for rule in self.turn_phase_rules)

        for event_type in sorted(trigger_types, key=lambda t: t.value):
            self.event_manager.subscribe(
                event_type,
                self._handle_phase_transition_event,
                subscriber_name=f"PhaseManager.{event_type.name.lower()}",
            )

    def _handle_phase_transition_event(self, event: GameEvent) -> None:
        for rule in self.game_phase_rules:
            if rule.matches(self.state.phase, event.event_type):
                self._transition_game_phase(rule.to_phase, rule.description)
                return

        if self.state.phase == GamePhase.IN_GAME:
            for rule in self.turn_phase_rules:
                if rule.matches(self.state.turn_phase, event.event_type):
                    self._transition_turn_phase(rule.to_phase, rule.description)
                    return

        self._emit_log(
            f"Ignored {event.event_type.name} in {self.state.phase.name}/{self.state.turn_phase.name}"
        )

    def _transition_game_phase(self, new_phase: GamePhase, description: str) -> None:
        old_phase = self.state.phase
        if old_phase == new_phase:
            return

        self.state.phase = new_phase
        if new_phase == GamePhase.IN_GAME:
            # Every duel opens with the first nerd choosing
            self.state.turn_phase = TurnPhase.CHOOSING

        self.event_manager.publish(
            GamePhaseChanged(
                turn=self.state.turn_number,
                old_phase=old_phase.name,
                new_phase=new_phase.name,
            ),
            source="PhaseManager",
        )
        self._emit_log(f"Game phase: {old_phase.name} -> {new_phase.name} ({description})")

    def _transition_turn_phase(self, new_phase: TurnPhase, description: str) -> None:
        old_phase = self.state.turn_phase
        if old_phase == new_phase:
            return

        self.state.turn_phase = new_phase

        self.event_manager.publish(
            TurnPhaseChanged(
                turn=self.state.turn_number,
                old_phase=old_phase.name,
                new_phase=new_phase.name,
                acting_index=self.state.current_player,
            ),
            source="PhaseManager",
        )
        self._emit_log(f"Turn phase: {old_phase.name} -> {new_phase.name} ({description})")
