"""
Configuration loader for duel rules and text commands.

Rules that tune the duel (critical odds, log size, narration templates) and
the words the text input handler understands are read from a YAML file so
they can be changed without touching code.
"""
import os
from dataclasses import dataclass, fields
from typing import Any, Optional

import yaml


PACKAGE_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
ASSETS_DIR = os.path.join(PACKAGE_ROOT, "assets")
DEFAULT_CONFIG_PATH = os.path.join(ASSETS_DIR, "config", "duel.yaml")


@dataclass(frozen=True)
class DuelConfig:
    """Tunable duel rules."""

    critical_chance: int = 15
    critical_factor: int = 2
    log_size: int = 5
    intro_seconds: float = 3.0
    secret_code: str = "numberwang"
    opening_narration: str = "{first} challenges {second} to a nerd duel!"
    victory_narration: str = "{winner} has defeated {loser}! The nerd fight is over."
    draw_narration: str = "{first} and {second} knocked each other out. It's a draw!"
    quit_commands: tuple[str, ...] = ("q", "quit")
    cancel_commands: tuple[str, ...] = ("b", "back")
    unlock_command: str = "unlock"
    debug_events: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.critical_chance <= 100:
            raise ValueError(f"critical_chance must be between 0 and 100, got {self.critical_chance}")
        if self.critical_factor < 1:
            raise ValueError(f"critical_factor must be at least 1, got {self.critical_factor}")
        if self.log_size < 1:
            raise ValueError(f"log_size must be at least 1, got {self.log_size}")
        if self.intro_seconds < 0:
            raise ValueError(f"intro_seconds cannot be negative, got {self.intro_seconds}")


def _parse_config(data: dict[str, Any], source: str) -> DuelConfig:
    known = {f.name for f in fields(DuelConfig)}
    rules = dict(data.get("duel") or {})
    rules.update(data.get("narration") or {})

    commands = data.get("commands") or {}
    if "quit" in commands:
        rules["quit_commands"] = tuple(str(word).lower() for word in commands["quit"])
    if "cancel" in commands:
        rules["cancel_commands"] = tuple(str(word).lower() for word in commands["cancel"])
    if "unlock" in commands:
        rules["unlock_command"] = str(commands["unlock"]).lower()

    unknown = set(rules) - known
    if unknown:
        raise KeyError(f"Unknown duel settings in {source}: {sorted(unknown)}")

    return DuelConfig(**rules)


def load_duel_config(config_path: Optional[str] = None) -> DuelConfig:
    """Load duel rules from a YAML file.

    Args:
        config_path: Path to the YAML file, defaults to the bundled ``duel.yaml``

    Returns:
        DuelConfig with every missing key left at its default

    Raises:
        FileNotFoundError: If the file does not exist
        KeyError: If the file names settings that do not exist
        ValueError: If a setting is out of range
    """
    path = config_path or DEFAULT_CONFIG_PATH

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        raise FileNotFoundError(f"Duel config file not found: {path}")

    if not isinstance(data, dict):
        raise ValueError(f"Invalid duel config structure in {path}: expected a mapping")

    return _parse_config(data, path)

