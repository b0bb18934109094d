"""User intents delivered by the input collaborator.

Intents describe what the player asked for, never which key they pressed.
The input handler turns raw input into these; the duel manager consumes
them once per frame through ``Game.update``.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class SkipIntro:
    """Leave the intro, either because it timed out or because the player skipped it."""
    skipped: bool = True


@dataclass(frozen=True)
class UnlockSecret:
    """Attempt to unlock the secret nerd with a code typed at the main menu."""
    code: str


@dataclass(frozen=True)
class ConfirmDuelStart:
    """Start a duel between two selectable templates."""
    first_index: int
    second_index: int


@dataclass(frozen=True)
class SelectAction:
    """Pick one of the acting nerd's four actions."""
    index: int


@dataclass(frozen=True)
class SubmitAnswer:
    """Submit the typed answer to the pending equation."""
    raw_text: str


@dataclass(frozen=True)
class CancelToActionSelect:
    """Back out of the equation and choose a different action."""


@dataclass(frozen=True)
class RequestQuit:
    """Stop the program. Observed by the driver, never a duel transition."""


Intent = Union[
    SkipIntro,
    UnlockSecret,
    ConfirmDuelStart,
    SelectAction,
    SubmitAnswer,
    CancelToActionSelect,
    RequestQuit,
]
