"""
Basic test fixtures for the nerd duel test suite.

Provides small nerd templates, a wired-up set of duel managers and a
deterministic critical roller so every duel in the tests is reproducible.
"""

import sys
import os
import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from nerdduel.core.data import ActionKind
from nerdduel.core.duel_config import DuelConfig
from nerdduel.core.engine import DuelState, ScriptedCriticalRoller
from nerdduel.core.events import EventManager
from nerdduel.core.intents import ConfirmDuelStart, SkipIntro
from nerdduel.game.entities import Action, NerdRegistry, NerdTemplate
from nerdduel.game.managers import DuelManager, LogManager, PhaseManager


def make_template(name="Alpha", health=100, multiplier=10, values=(6, 2, 4, 2), secret=False):
    """Build a template whose four actions cover every kind, in kind order."""
    kinds = (ActionKind.DAMAGE, ActionKind.HEAL, ActionKind.WEAKEN, ActionKind.STRENGTHEN)
    labels = ("Zap", "Patch", "Jinx", "Pump")
    actions = tuple(
        Action(name=label, kind=kind, base_value=value)
        for label, kind, value in zip(labels, kinds, values)
    )
    return NerdTemplate(
        name=name,
        health=health,
        multiplier=multiplier,
        actions=actions,
        secret=secret,
    )


class DuelSetup:
    """Duel managers wired to one state and one event bus."""

    def __init__(self, registry, config=None, criticals=(False,)):
        self.config = config or DuelConfig()
        self.state = DuelState(log_size=self.config.log_size)
        self.event_manager = EventManager(enable_debug_logging=False)
        self.log_manager = LogManager(self.event_manager, self.state)
        self.phase_manager = PhaseManager(self.state, self.event_manager)
        self.roller = ScriptedCriticalRoller(criticals)
        self.duel_manager = DuelManager(
            duel_state=self.state,
            event_manager=self.event_manager,
            registry=registry,
            config=self.config,
            critical_roller=self.roller,
        )
        self.event_manager.process_events()

    def send(self, *intents):
        """Handle intents the way Game.update does, flushing events after each."""
        for intent in intents:
            self.duel_manager.handle(intent)
            self.event_manager.process_events()

    @property
    def first(self):
        return self.state.require_nerds()[0]

    @property
    def second(self):
        return self.state.require_nerds()[1]


@pytest.fixture
def duel_state():
    """Create a fresh duel state for testing."""
    return DuelState()


@pytest.fixture
def event_manager():
    """Create an event manager for testing."""
    return EventManager(enable_debug_logging=False)


@pytest.fixture
def alpha_template():
    return make_template("Alpha", health=100, values=(6, 2, 4, 2))


@pytest.fixture
def beta_template():
    return make_template("Beta", health=50, values=(3, 1, 1, 1))


@pytest.fixture
def small_registry(alpha_template, beta_template):
    """Two selectable templates and one secret one."""
    omega = make_template("Omega", health=1000, values=(100, 50, 5, 5), secret=True)
    return NerdRegistry([alpha_template, beta_template, omega])


@pytest.fixture
def duel_setup(small_registry):
    """Managers wired together, parked at the main menu, no criticals."""
    setup = DuelSetup(small_registry)
    setup.send(SkipIntro())
    return setup


@pytest.fixture
def running_duel(duel_setup):
    """Alpha (player one) against Beta (player two), first turn."""
    duel_setup.send(ConfirmDuelStart(first_index=0, second_index=1))
    return duel_setup
