"""
Duel turn resolution.

The duel manager consumes player intents and runs the turn cycle: spawn the
two nerds, draw the critical flag when an action is picked, cache the
equation and its answer, check submitted answers, apply effects, hand the
turn over and detect the end of the duel. Phase changes are requested by
publishing events that the ``PhaseManager`` turns into transitions.
"""

import re
from typing import TYPE_CHECKING, Callable, Optional

from ...core.engine import DuelOutcome, GamePhase, PendingTurn, TurnPhase
from ...core.data import ACTION_KIND_NAMES, OFFENSIVE_KINDS, ActionKind
from ...core.events import (
    ActionCanceled,
    ActionSelected,
    AnswerRejected,
    DuelEnded,
    DuelStarted,
    IntroFinished,
    LogMessage,
    ManagerInitialized,
    SecretUnlocked,
    TurnResolved,
)
from ...core.intents import (
    CancelToActionSelect,
    ConfirmDuelStart,
    SelectAction,
    SkipIntro,
    SubmitAnswer,
    UnlockSecret,
)
from ..combat import EquationResolver, Resolution
from ..entities import ACTIONS_PER_NERD, Nerd, NerdTemplate, spawn

if TYPE_CHECKING:
    from ...core.duel_config import DuelConfig
    from ...core.engine import CriticalRoller, DuelState
    from ...core.events import EventManager
    from ..entities import NerdRegistry


ANSWER_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)


def parse_answer(raw_text: str) -> Optional[int]:
    """Parse typed answer text, returning ``None`` when it is not an integer."""
    text = raw_text.strip()
    if not ANSWER_PATTERN.fullmatch(text):
        return None
    return int(text)


def _require_index(value: object, upper: int, label: str) -> int:
    """Validate an index handed in by the input collaborator."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{label} must be an int, got {type(value).__name__}")
    if not 0 <= value < upper:
        raise IndexError(f"{label} must be in 0..{upper - 1}, got {value}")
    return value


class DuelManager:
    """Runs the turn cycle of a single duel."""

    def __init__(
        self,
        duel_state: "DuelState",
        event_manager: "EventManager",
        registry: "NerdRegistry",
        config: "DuelConfig",
        critical_roller: "CriticalRoller",
    ):
        self.state = duel_state
        self.event_manager = event_manager
        self.registry = registry
        self.config = config
        self.critical_roller = critical_roller
        self.resolver = EquationResolver(critical_factor=config.critical_factor)

        self._handlers: dict[type, Callable] = {
            SkipIntro: self._handle_skip_intro,
            UnlockSecret: self._handle_unlock_secret,
            ConfirmDuelStart: self._handle_confirm_duel_start,
            SelectAction: self._handle_select_action,
            CancelToActionSelect: self._handle_cancel,
            SubmitAnswer: self._handle_submit_answer,
        }

        self.event_manager.publish(
            ManagerInitialized(turn=0, manager_name="DuelManager"),
            source="DuelManager",
        )

    def _emit_log(self, message: str, category: str = "DUEL", level: str = "INFO") -> None:
        self.event_manager.publish(
            LogMessage(
                turn=self.state.turn_number,
                message=message,
                category=category,
                level=level,
                source="DuelManager",
            ),
            source="DuelManager",
        )

    def _emit_debug(self, message: str) -> None:
        self._emit_log(message, category="DEBUG", level="DEBUG")

    def selectable_templates(self) -> tuple[NerdTemplate, ...]:
        return self.registry.selectable(self.state.menu.secret_unlocked)

    def handle(self, intent: object) -> None:
        """Apply one player intent to the duel.

        Intents that make no sense in the current phase are ignored.

        Raises:
            TypeError: For objects that are not duel intents
            IndexError: For action or template indices outside the offered range
        """
        handler = self._handlers.get(type(intent))
        if handler is None:
            raise TypeError(f"Not a duel intent: {intent!r}")
        handler(intent)

    def _in_turn_phase(self, turn_phase: TurnPhase) -> bool:
        return self.state.phase == GamePhase.IN_GAME and self.state.turn_phase == turn_phase

    def _ignore(self, intent: object) -> None:
        self._emit_debug(
            f"Ignored {type(intent).__name__} in {self.state.phase.name}/{self.state.turn_phase.name}"
        )

    # ==================== MENU FLOW ====================

    def _handle_skip_intro(self, intent: SkipIntro) -> None:
        if self.state.phase != GamePhase.INTRO:
            self._ignore(intent)
            return
        self.event_manager.publish_immediate(
            IntroFinished(turn=0, skipped=intent.skipped), source="DuelManager"
        )

    def _handle_unlock_secret(self, intent: UnlockSecret) -> None:
        if self.state.phase != GamePhase.MAIN_MENU or self.state.menu.secret_unlocked:
            self._ignore(intent)
            return
        if intent.code.strip().lower() != self.config.secret_code.lower():
            self._emit_debug("Secret code did not match")
            return

        self.state.menu.secret_unlocked = True
        names = tuple(t.name for t in self.registry.secret_templates())
        self.event_manager.publish(
            SecretUnlocked(turn=0, nerd_names=names), source="DuelManager"
        )
        self._emit_log(f"Secret unlocked: {', '.join(names) or 'nothing'}", category="SYSTEM")

    def _handle_confirm_duel_start(self, intent: ConfirmDuelStart) -> None:
        if self.state.phase != GamePhase.MAIN_MENU:
            self._ignore(intent)
            return

        templates = self.selectable_templates()
        first_template = templates[_require_index(intent.first_index, len(templates), "First nerd index")]
        second_template = templates[_require_index(intent.second_index, len(templates), "Second nerd index")]

        first = spawn(first_template)
        # Names stay unique when both players pick the same nerd
        second_name = None
        if second_template.name == first_template.name:
            second_name = f"{second_template.name} (2)"
        second = spawn(second_template, name=second_name)

        self.state.start_duel(first, second)
        self.event_manager.publish_immediate(
            DuelStarted(turn=self.state.turn_number, first_name=first.name, second_name=second.name),
            source="DuelManager",
        )
        self._emit_log(self.config.opening_narration.format(first=first.name, second=second.name))

    # ==================== TURN FLOW ====================

    def _handle_select_action(self, intent: SelectAction) -> None:
        if not self._in_turn_phase(TurnPhase.CHOOSING):
            self._ignore(intent)
            return

        action_index = _require_index(intent.index, ACTIONS_PER_NERD, "Action index")
        actor = self.state.acting_nerd()
        target = self.state.opposing_nerd()
        action = actor.actions[action_index]

        # Drawn once here and cached with the answer until the turn ends
        critical = bool(self.critical_roller.roll_critical())
        resolution = self.resolver.resolve(actor, target, action_index, critical)

        self.state.pending_turn = PendingTurn(
            acting_index=self.state.current_player,
            action_index=action_index,
            critical=critical,
            equation_text=resolution.equation_text,
            expected_answer=resolution.result_value,
        )
        self.state.menu.clear_answer()

        self.event_manager.publish_immediate(
            ActionSelected(
                turn=self.state.turn_number,
                acting_index=self.state.current_player,
                action_index=action_index,
                critical=critical,
            ),
            source="DuelManager",
        )
        self._emit_debug(
            f"{actor.name} picked {action.display_name} ({ACTION_KIND_NAMES[action.kind]}): "
            f"{resolution.equation_text} (critical: {critical})"
        )

    def _handle_cancel(self, intent: CancelToActionSelect) -> None:
        pending = self.state.pending_turn
        if not self._in_turn_phase(TurnPhase.MATHING) or pending is None:
            self._ignore(intent)
            return

        self.state.clear_pending_turn()
        self.event_manager.publish_immediate(
            ActionCanceled(
                turn=self.state.turn_number,
                acting_index=pending.acting_index,
                action_index=pending.action_index,
            ),
            source="DuelManager",
        )

    def _handle_submit_answer(self, intent: SubmitAnswer) -> None:
        pending = self.state.pending_turn
        if not self._in_turn_phase(TurnPhase.MATHING) or pending is None:
            self._ignore(intent)
            return

        answer = parse_answer(intent.raw_text)
        if answer is None:
            # Not a number yet: stay parked on the equation
            self.state.menu.reject_answer(intent.raw_text)
            self.event_manager.publish(
                AnswerRejected(turn=self.state.turn_number, raw_text=intent.raw_text),
                source="DuelManager",
            )
            self._emit_debug(f"Answer {intent.raw_text!r} is not a number")
            return

        actor = self.state.acting_nerd()
        target = self.state.opposing_nerd()
        action = actor.actions[pending.action_index]
        correct = answer == pending.expected_answer

        if correct:
            # Stats cannot change while an equation is pending, so the cached answer is applied as is
            resolution = Resolution(pending.equation_text, pending.expected_answer, action.kind)
            affected = self.resolver.apply(actor, target, resolution)
            self._emit_log(self._describe_success(actor, affected, action.name, action.kind, pending.critical))
        else:
            self._emit_log(
                f"{actor.name} answered {answer}, but it was {pending.expected_answer}. "
                f"{action.name} failed!"
            )

        acting_index = self.state.current_player
        self.state.advance_turn()
        self.event_manager.publish_immediate(
            TurnResolved(
                turn=self.state.turn_number,
                acting_index=acting_index,
                action_index=pending.action_index,
                correct=correct,
                submitted=answer,
                expected=pending.expected_answer,
            ),
            source="DuelManager",
        )

        self._check_end_condition()

    @staticmethod
    def _describe_success(actor: Nerd, affected: Nerd, action_name: str,
                          kind: ActionKind, critical: bool) -> str:
        target_note = f" on {affected.name}" if kind in OFFENSIVE_KINDS else ""
        if kind in (ActionKind.DAMAGE, ActionKind.HEAL):
            outcome = f"{affected.name} is at {affected.health} health."
        else:
            # Only multiplier changes call out critical hits
            critical_note = " Critical hit!" if critical else ""
            outcome = (
                f"{affected.name}'s multiplier is now "
                f"{affected.snapshot().multiplier_display}.{critical_note}"
            )
        return f"{actor.name} used {action_name}{target_note}! {outcome}"

    def _check_end_condition(self) -> None:
        """End the duel when a nerd is down. Two defeated nerds make a draw."""
        first, second = self.state.require_nerds()
        defeated = [nerd for nerd in (first, second) if nerd.is_defeated()]
        if not defeated:
            return

        if len(defeated) == 2:
            outcome = DuelOutcome(winner=None, loser=None, draw=True)
            narration = self.config.draw_narration.format(first=first.name, second=second.name)
        else:
            loser = defeated[0]
            winner = second if loser is first else first
            outcome = DuelOutcome(winner=winner.name, loser=loser.name)
            narration = self.config.victory_narration.format(winner=winner.name, loser=loser.name)

        self.state.outcome = outcome
        self.state.clear_pending_turn()
        self.event_manager.publish_immediate(
            DuelEnded(
                turn=self.state.turn_number,
                winner_name=outcome.winner,
                loser_name=outcome.loser,
                draw=outcome.draw,
            ),
            source="DuelManager",
        )
        self._emit_log(narration)
