#!/usr/bin/env python3

import io
import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from nerdduel.core.engine import ScriptedCriticalRoller
from nerdduel.core.renderer import RendererConfig
from nerdduel.renderers.text_renderer import TextRenderer
from nerdduel.game.game import Game


# Joe against William, typed as a player would
DEMO_INPUT = [
    "",      # skip intro
    "1 3",   # Joe vs William
    "4",     # Joe: Khan Academy (critical), 10 + 2 * 2
    "14",
    "3",     # William: Intimidating Stare, 14 - 1 * 1
    "12",    # wrong on purpose
    "1",     # Joe: Slap, 400 - 3 * 14 * 1
    "358",
    "q",
]


def main():
    print("Nerd Duel - Demo Mode")
    print("This demo plays a short scripted duel through the text renderer")
    print("")

    config = RendererConfig(
        width=50,
        title="Nerd Duel Demo",
        show_sprites=True
    )

    renderer = TextRenderer(config, input_stream=io.StringIO("\n".join(DEMO_INPUT) + "\n"))

    game = Game(
        renderer,
        critical_roller=ScriptedCriticalRoller([True, False, False]),
        fps=2,
    )

    try:
        game.run()
    except Exception as e:
        print(f"\nError: {e}")
        raise

    print("\nDemo complete!")
    print("\nTo play interactively:")
    print("  - Run 'python main.py'")
    print("  - Run 'python main.py --seed 7' for repeatable critical hits")


if __name__ == "__main__":
    main()
