"""Critical hit rolls.

The duel draws exactly one critical flag per turn, at action selection. The
source of that flag is injected into the duel manager so tests and demos can
script it.
"""

import itertools
import random
from dataclasses import dataclass, field
from typing import Iterable, Optional, Protocol


class CriticalRoller(Protocol):
    """Anything that can decide whether this turn is a critical hit."""

    def roll_critical(self) -> bool:
        ...


@dataclass
class RandomCriticalRoller:
    """Percent-chance roller backed by its own ``random.Random``."""

    chance: int
    seed: Optional[int] = None
    _random: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not 0 <= self.chance <= 100:
            raise ValueError(f"Critical chance must be between 0 and 100, got {self.chance}")
        self._random = random.Random(self.seed)

    def roll_critical(self) -> bool:
        return self._random.randint(1, 100) <= self.chance


class ScriptedCriticalRoller:
    """Replays a fixed sequence of critical flags, cycling when exhausted."""

    def __init__(self, results: Iterable[bool]):
        results = list(results)
        if not results:
            raise ValueError("ScriptedCriticalRoller needs at least one result")
        self._results = itertools.cycle(results)
        self.rolls = 0

    def roll_critical(self) -> bool:
        self.rolls += 1
        return next(self._results)
