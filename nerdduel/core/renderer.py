from abc import ABC, abstractmethod
from typing import Optional
from dataclasses import dataclass

from .renderable import DuelView


@dataclass
class RendererConfig:
    width: int = 60
    title: str = "Nerd Duel"
    show_sprites: bool = True
    input_poll_seconds: float = 0.1


class Renderer(ABC):

    def __init__(self, config: Optional[RendererConfig] = None):
        self.config = config or RendererConfig()
        self._running = False

    @abstractmethod
    def initialize(self) -> None:
        pass

    @abstractmethod
    def cleanup(self) -> None:
        pass

    @abstractmethod
    def render_frame(self, view: DuelView) -> None:
        pass

    @abstractmethod
    def get_input_events(self) -> list[str]:
        """Raw input lines collected since the last frame."""
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def present(self) -> None:
        pass

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        self._running = True
        self.initialize()

    def stop(self) -> None:
        self._running = False
        self.cleanup()
