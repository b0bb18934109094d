"""
Main game orchestration class.

This module wires the duel managers together and runs the frame loop:
collect input, turn it into intents, feed them to the duel manager one at
a time, then hand a freshly built view to the renderer.
"""

import time
from collections.abc import Iterable
from typing import Optional, TypeVar

from ..core.duel_config import DuelConfig, load_duel_config
from ..core.engine import (
    CriticalRoller,
    DuelOutcome,
    DuelState,
    GamePhase,
    RandomCriticalRoller,
    TurnPhase,
)
from ..core.events import EventManager, LogMessage
from ..core.intents import Intent, RequestQuit, SkipIntro
from ..core.renderable import DuelView, NerdSnapshot
from ..core.renderer import Renderer
from .entities import NERD_REGISTRY, NerdRegistry, NerdTemplate
from .input_handler import InputHandler
from .managers.duel_manager import DuelManager
from .managers.log_manager import LogLevel, LogManager
from .managers.phase_manager import PhaseManager


TManager = TypeVar("TManager")

# Diagnostic lines shown per frame in debug mode
DIAGNOSTIC_LINES = 8


class Game:
    """Main game orchestrator that coordinates all duel systems."""

    def __init__(
        self,
        renderer: Renderer,
        registry: Optional[NerdRegistry] = None,
        config: Optional[DuelConfig] = None,
        critical_roller: Optional[CriticalRoller] = None,
        fps: int = 30,
        debug: bool = False,
    ):
        self.renderer = renderer
        self.config = config or load_duel_config()
        self.registry = registry or NERD_REGISTRY
        self.critical_roller = critical_roller or RandomCriticalRoller(
            chance=self.config.critical_chance
        )
        self.state = DuelState(log_size=self.config.log_size)

        self.running = False
        self.frame_time = 1.0 / fps
        self.debug = debug
        self._intro_started: Optional[float] = None

        # Event system
        self.event_manager = EventManager(enable_debug_logging=self.config.debug_events)

        # Managers - will be initialized in initialize()
        self._log_manager: Optional[LogManager] = None
        self._phase_manager: Optional[PhaseManager] = None
        self._duel_manager: Optional[DuelManager] = None
        self._input_handler: Optional[InputHandler] = None

    # Properties for managers with fail-fast validation
    def _require_manager(self, manager: Optional[TManager], name: str) -> TManager:
        """Return the manager if initialized, otherwise raise a helpful error."""

        if manager is None:
            raise RuntimeError(f"{name} not initialized. Call initialize() first.")
        return manager

    @property
    def log_manager(self) -> LogManager:
        return self._require_manager(self._log_manager, "LogManager")

    @property
    def phase_manager(self) -> PhaseManager:
        return self._require_manager(self._phase_manager, "PhaseManager")

    @property
    def duel_manager(self) -> DuelManager:
        return self._require_manager(self._duel_manager, "DuelManager")

    @property
    def input_handler(self) -> InputHandler:
        return self._require_manager(self._input_handler, "InputHandler")

    def initialize(self) -> None:
        """Initialize the game and all manager systems."""
        self.renderer.start()

        self._setup_event_system()
        self._initialize_managers()
        self._setup_manager_callbacks()

        self._intro_started = time.monotonic()
        self.running = True
        self._emit_log(f"Loaded {len(self.registry)} nerd templates")
        self.event_manager.process_events()

    def _setup_event_system(self) -> None:
        """Set up the event system and subscriptions."""
        self._log_manager = LogManager(
            event_manager=self.event_manager, duel_state=self.state
        )

        # Set debug callback for event logging
        self.event_manager.set_debug_callback(self.log_manager.debug)
        if self.debug:
            self.log_manager.set_log_level(LogLevel.DEBUG)

        # Phase manager subscribes before anything can publish a trigger
        self._phase_manager = PhaseManager(
            duel_state=self.state, event_manager=self.event_manager
        )

    def _initialize_managers(self) -> None:
        self._duel_manager = DuelManager(
            duel_state=self.state,
            event_manager=self.event_manager,
            registry=self.registry,
            config=self.config,
            critical_roller=self.critical_roller,
        )

        self._input_handler = InputHandler(
            duel_state=self.state,
            event_manager=self.event_manager,
            config=self.config,
        )

    def _setup_manager_callbacks(self) -> None:
        self.input_handler.menu_size = lambda: len(self.selectable_templates())

    def _emit_log(
        self, message: str, category: str = "SYSTEM", level: str = "INFO"
    ) -> None:
        """Emit a log message event."""
        self.event_manager.publish(
            LogMessage(
                turn=self.state.turn_number,
                message=message,
                category=category,
                level=level,
                source="Game",
            ),
            source="Game",
        )

    def run(self) -> None:
        """Main game loop."""
        self.initialize()

        try:
            self.render()
            last_frame = time.monotonic()
            while self.running:
                self.update()
                self.render()

                elapsed = time.monotonic() - last_frame
                if elapsed < self.frame_time:
                    time.sleep(self.frame_time - elapsed)
                last_frame = time.monotonic()
        finally:
            self.cleanup()

    def update(self, intents: Optional[Iterable[Intent]] = None) -> bool:
        """Advance the duel by one frame.

        Args:
            intents: Intents to apply. When omitted, input is read from the
                renderer and the intro timer is checked.

        Returns:
            Whether the game is still running
        """
        self.event_manager.process_events()

        if intents is None:
            self._check_intro_timeout()
            intents = self.input_handler.handle_input_events(self.renderer.get_input_events())
            if not self.renderer.is_running:
                # Input source is gone, e.g. end of stdin
                self.running = False

        for intent in intents:
            if isinstance(intent, RequestQuit):
                self._emit_log("Quit requested")
                self.running = False
                break
            self.duel_manager.handle(intent)
            self.event_manager.process_events()

        return self.running

    def _check_intro_timeout(self) -> None:
        if self.state.phase != GamePhase.INTRO or self._intro_started is None:
            return
        if time.monotonic() - self._intro_started >= self.config.intro_seconds:
            self.duel_manager.handle(SkipIntro(skipped=False))
            self.event_manager.process_events()

    def render(self) -> None:
        """Render the current frame."""
        view = self.build_view()
        self.renderer.clear()
        self.renderer.render_frame(view)
        self.renderer.present()

    def build_view(self) -> DuelView:
        menu_options: tuple[str, ...] = ()
        if self.state.phase == GamePhase.MAIN_MENU:
            menu_options = tuple(
                f"{template.name} ({template.health} health)"
                for template in self.selectable_templates()
            )

        action_options: tuple[str, ...] = ()
        if self.state.in_game and self.state.nerds is not None:
            action_options = tuple(
                action.display_name for action in self.state.acting_nerd().actions
            )

        return DuelView(
            phase=self.state.phase,
            turn_phase=self.state.turn_phase,
            current_player=self.state.current_player,
            nerds=self.nerd_snapshots(),
            log=self.log,
            menu_options=menu_options,
            action_options=action_options,
            equation_text=self.equation_text,
            answer_text=self.state.menu.answer_text,
            answer_rejected=self.state.menu.answer_rejected,
            outcome=self.outcome,
            diagnostics=self.diagnostics(),
        )

    # ==================== QUERY SURFACE ====================

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    @property
    def turn_phase(self) -> TurnPhase:
        return self.state.turn_phase

    @property
    def current_player(self) -> int:
        return self.state.current_player

    def nerd_snapshots(self) -> tuple[NerdSnapshot, ...]:
        return self.state.nerd_snapshots()

    @property
    def log(self) -> tuple[str, ...]:
        """Duel log, oldest first."""
        return tuple(self.state.log)

    @property
    def equation_text(self) -> Optional[str]:
        return self.state.equation_text

    @property
    def is_over(self) -> bool:
        return self.state.is_over

    @property
    def outcome(self) -> Optional[DuelOutcome]:
        return self.state.outcome

    def selectable_templates(self) -> tuple[NerdTemplate, ...]:
        return self.duel_manager.selectable_templates()

    def diagnostics(self) -> tuple[str, ...]:
        """Recent manager log lines, only collected in debug mode."""
        if not self.log_manager.is_debug_enabled():
            return ()
        return tuple(
            entry.format(include_timestamp=True)
            for entry in self.log_manager.get_messages(count=DIAGNOSTIC_LINES)
        )

    def cleanup(self) -> None:
        """Clean up resources."""
        self.event_manager.process_events()
        self.event_manager.shutdown()
        self.renderer.stop()
