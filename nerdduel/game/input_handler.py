"""
Text input handling.

Translates raw lines typed by the players into duel intents. What a line
means depends on the phase the duel is in, so the same text can select an
action in one frame and be submitted as an answer in the next. Command
words (quit, cancel, unlock) come from the duel configuration.
"""

from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from ..core.duel_config import DuelConfig
    from ..core.engine import DuelState
    from ..core.events import EventManager

from ..core.engine import GamePhase, TurnPhase
from ..core.events import LogMessage, ManagerInitialized
from ..core.intents import (
    CancelToActionSelect,
    ConfirmDuelStart,
    Intent,
    RequestQuit,
    SelectAction,
    SkipIntro,
    SubmitAnswer,
    UnlockSecret,
)
from .entities import ACTIONS_PER_NERD


class InputHandler:
    """Maps typed lines to intents for the current phase."""

    def __init__(
        self,
        duel_state: "DuelState",
        event_manager: "EventManager",
        config: "DuelConfig",
    ):
        self.state = duel_state
        self.event_manager = event_manager
        self.config = config

        # Set by the Game once the duel manager exists
        self.menu_size: Optional[Callable[[], int]] = None

        self.event_manager.publish(
            ManagerInitialized(turn=0, manager_name="InputHandler"),
            source="InputHandler",
        )

    def _emit_log(self, message: str, level: str = "DEBUG") -> None:
        self.event_manager.publish(
            LogMessage(
                turn=self.state.turn_number,
                message=message,
                category="INPUT",
                level=level,
                source="InputHandler",
            ),
            source="InputHandler",
        )

    def handle_input_events(self, lines: list[str]) -> list[Intent]:
        """Translate a batch of raw lines, dropping the ones that mean nothing."""
        intents = []
        for line in lines:
            intent = self.translate(line)
            if intent is not None:
                intents.append(intent)
        return intents

    def translate(self, line: str) -> Optional[Intent]:
        word = line.strip().lower()
        if word in self.config.quit_commands:
            return RequestQuit()

        phase = self.state.phase
        if phase == GamePhase.INTRO:
            return SkipIntro()
        if phase == GamePhase.MAIN_MENU:
            return self._translate_main_menu(line)
        if phase == GamePhase.GAME_END:
            # Nothing left to play, any key leaves
            return RequestQuit()

        if self.state.turn_phase == TurnPhase.CHOOSING:
            return self._translate_action_choice(word)
        if word in self.config.cancel_commands:
            return CancelToActionSelect()
        # The duel manager decides whether this parses as a number
        return SubmitAnswer(raw_text=line)

    def _translate_main_menu(self, line: str) -> Optional[Intent]:
        tokens = line.replace(",", " ").split()
        if not tokens:
            return None

        if tokens[0].lower() == self.config.unlock_command:
            if len(tokens) < 2:
                self._emit_log("Unlock needs a code")
                return None
            return UnlockSecret(code=" ".join(tokens[1:]))

        if len(tokens) != 2 or not all(token.isdecimal() for token in tokens):
            self._emit_log(f"Pick two nerds by number, got {line.strip()!r}")
            return None

        first, second = (int(token) for token in tokens)
        size = self.menu_size() if self.menu_size else None
        if size is not None and not (1 <= first <= size and 1 <= second <= size):
            self._emit_log(f"Nerd numbers must be between 1 and {size}")
            return None
        if first < 1 or second < 1:
            self._emit_log("Nerd numbers start at 1")
            return None

        return ConfirmDuelStart(first_index=first - 1, second_index=second - 1)

    def _translate_action_choice(self, word: str) -> Optional[Intent]:
        if word.isdecimal() and 1 <= int(word) <= ACTIONS_PER_NERD:
            return SelectAction(index=int(word) - 1)
        self._emit_log(f"Pick an action between 1 and {ACTIONS_PER_NERD}, got {word!r}")
        return None
