#!/usr/bin/env python3

import argparse

from nerdduel.core.duel_config import load_duel_config
from nerdduel.core.engine import RandomCriticalRoller
from nerdduel.core.renderer import RendererConfig
from nerdduel.renderers.text_renderer import TextRenderer
from nerdduel.game.game import Game


def main():
    parser = argparse.ArgumentParser(description="Nerd Duel: settle it with arithmetic")
    parser.add_argument(
        "--config",
        help="Path to a duel rules YAML file (defaults to the bundled duel.yaml)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for critical hit rolls, for reproducible duels"
    )
    parser.add_argument(
        "--no-sprites",
        action="store_true",
        help="Hide the ASCII nerd portraits"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show recent manager log lines under each frame"
    )
    args = parser.parse_args()

    duel_config = load_duel_config(args.config)

    config = RendererConfig(
        width=60,
        title="Nerd Duel",
        show_sprites=not args.no_sprites
    )

    renderer = TextRenderer(config)

    game = Game(
        renderer,
        config=duel_config,
        critical_roller=RandomCriticalRoller(chance=duel_config.critical_chance, seed=args.seed),
        debug=args.debug,
    )

    try:
        game.run()
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user")
    except Exception as e:
        print(f"\n\nError: {e}")
        raise


if __name__ == "__main__":
    main()
