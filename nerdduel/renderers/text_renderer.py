import select
import sys
from typing import Optional, TextIO

from ..core.engine import GamePhase, TurnPhase
from ..core.renderable import DuelView, NerdSnapshot
from ..core.renderer import Renderer, RendererConfig


class TextRenderer(Renderer):
    """Line based renderer for a plain terminal.

    A frame is printed as a block of text whenever the view changes. Input
    from a terminal is polled, so timed transitions still happen while the
    player thinks. Other streams are read one blocking line at a time, so the
    duel can also be driven by piping commands into stdin.
    """

    def __init__(
        self,
        config: Optional[RendererConfig] = None,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None,
        interactive: Optional[bool] = None,
    ):
        super().__init__(config)
        self.input_stream = input_stream or sys.stdin
        self.output_stream = output_stream or sys.stdout
        self._buffer: list[str] = []
        self._last_view: Optional[DuelView] = None
        self._prompt_pending = False

        if interactive is None:
            interactive = hasattr(self.input_stream, "isatty") and self.input_stream.isatty()
        self.interactive = interactive

        self.use_color = hasattr(self.output_stream, "isatty") and self.output_stream.isatty()

        self.terminal_codes = {
            "reset": "\033[0m",
            "clear_screen": "\033[2J",
            "cursor_home": "\033[H",
            "text_bright": "\033[1;97m",
            "text_dim": "\033[37m",
            "text_error": "\033[91m",
            "text_success": "\033[92m",
            "text_warning": "\033[93m",
        }

        # Player colors, first nerd blue and second red
        self.player_colors = {
            0: "\033[94m",
            1: "\033[91m",
        }

    def initialize(self) -> None:
        self._write(self._paint(self.config.title, "text_bright"))
        self._write("=" * self.config.width)

    def cleanup(self) -> None:
        self._write("\nThanks for playing!")

    def clear(self) -> None:
        self._buffer.clear()

    def present(self) -> None:
        if self._buffer:
            if self.use_color:
                self.output_stream.write(self.terminal_codes["clear_screen"] + self.terminal_codes["cursor_home"])
            for line in self._buffer:
                self._write(line)
            self._buffer.clear()
            self._prompt_pending = True
        self.output_stream.flush()

    def get_input_events(self) -> list[str]:
        if self._prompt_pending:
            self.output_stream.write("> ")
            self.output_stream.flush()
            self._prompt_pending = False

        if self.interactive and not self._input_ready():
            return []

        line = self.input_stream.readline()
        if line == "":
            # End of input
            self._running = False
            return []
        self._prompt_pending = True
        return [line.rstrip("\r\n")]

    def _input_ready(self) -> bool:
        ready, _, _ = select.select([self.input_stream], [], [], self.config.input_poll_seconds)
        return bool(ready)

    def render_frame(self, view: DuelView) -> None:
        if view == self._last_view:
            return
        self._last_view = view
        self._buffer.clear()

        if view.phase == GamePhase.INTRO:
            self._render_intro()
        elif view.phase == GamePhase.MAIN_MENU:
            self._render_main_menu(view)
        elif view.phase == GamePhase.IN_GAME:
            self._render_duel(view)
        else:
            self._render_game_end(view)

        if view.diagnostics:
            self._render_diagnostics(view)

    def _render_intro(self) -> None:
        self._buffer.append("")
        self._buffer.append(self._paint(self.config.title.upper().center(self.config.width), "text_bright"))
        self._buffer.append("Every move is a math problem. Get it right or lose your turn.".center(self.config.width))
        self._buffer.append("")
        self._buffer.append("Press Enter to continue")

    def _render_main_menu(self, view: DuelView) -> None:
        self._buffer.append("Choose your nerds:")
        for number, option in enumerate(view.menu_options, start=1):
            self._buffer.append(f"  {number}. {option}")
        self._buffer.append("")
        self._buffer.append("Type two numbers, first nerd then second, e.g. '1 2'")

    def _render_duel(self, view: DuelView) -> None:
        for index, nerd in enumerate(view.nerds):
            self._render_nerd_panel(nerd, index, acting=index == view.current_player)
        self._render_log(view)
        self._buffer.append("-" * self.config.width)

        acting = view.acting_nerd
        acting_name = acting.name if acting else "?"
        if view.turn_phase == TurnPhase.CHOOSING:
            self._buffer.append(f"{acting_name}, choose an action:")
            for number, option in enumerate(view.action_options, start=1):
                self._buffer.append(f"  {number}. {option}")
            return

        self._buffer.append(f"{acting_name}, solve: {view.equation_text} = ?")
        if view.answer_rejected:
            self._buffer.append(
                self._paint(f"'{view.answer_text}' is not a whole number, try again", "text_error")
            )
        self._buffer.append("Type the answer, or 'b' to pick another action")

    def _render_nerd_panel(self, nerd: NerdSnapshot, index: int, acting: bool) -> None:
        marker = ">" if acting else " "
        header = f"{marker} {nerd.name}  HP {nerd.health}  MULT {nerd.multiplier_display}"
        if self.use_color:
            header = f"{self.player_colors[index]}{header}{self.terminal_codes['reset']}"
        self._buffer.append(header)
        if self.config.show_sprites and nerd.sprite:
            for line in nerd.sprite.splitlines():
                self._buffer.append(f"    {line}"[:self.config.width])

    def _render_log(self, view: DuelView) -> None:
        if not view.log:
            return
        self._buffer.append("-" * self.config.width)
        for message in view.log:
            self._buffer.append(self._paint(message[:self.config.width], "text_dim"))

    def _render_diagnostics(self, view: DuelView) -> None:
        self._buffer.append("-- debug " + "-" * (self.config.width - 9))
        for line in view.diagnostics:
            self._buffer.append(self._paint(line[:self.config.width], "text_dim"))

    def _render_game_end(self, view: DuelView) -> None:
        self._render_log(view)
        self._buffer.append("=" * self.config.width)
        outcome = view.outcome
        if outcome is None:
            self._buffer.append("Game over")
        elif outcome.draw:
            self._buffer.append(self._paint("It's a draw!", "text_warning"))
        else:
            self._buffer.append(self._paint(f"{outcome.winner} wins!", "text_success"))
        self._buffer.append("Press Enter to exit")

    def _paint(self, text: str, code: str) -> str:
        if not self.use_color:
            return text
        return f"{self.terminal_codes[code]}{text}{self.terminal_codes['reset']}"

    def _write(self, line: str) -> None:
        self.output_stream.write(line + "\n")
