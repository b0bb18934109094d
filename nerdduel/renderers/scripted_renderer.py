from collections import deque
from typing import Iterable, Optional

from ..core.renderable import DuelView
from ..core.renderer import Renderer, RendererConfig


class ScriptedRenderer(Renderer):
    """Headless renderer that replays prepared input lines.

    One line is handed out per frame. Once the script runs out the renderer
    stops, which ends ``Game.run``. Every rendered view is kept in ``frames``
    for inspection.
    """

    def __init__(self, lines: Iterable[str], config: Optional[RendererConfig] = None):
        super().__init__(config)
        self._lines = deque(lines)
        self.frames: list[DuelView] = []
        self.initialized = False
        self.cleaned_up = False

    def initialize(self) -> None:
        self.initialized = True

    def cleanup(self) -> None:
        self.cleaned_up = True

    def clear(self) -> None:
        pass

    def present(self) -> None:
        pass

    def render_frame(self, view: DuelView) -> None:
        self.frames.append(view)

    def get_input_events(self) -> list[str]:
        if not self._lines:
            self._running = False
            return []
        return [self._lines.popleft()]

    @property
    def last_frame(self) -> Optional[DuelView]:
        return self.frames[-1] if self.frames else None
