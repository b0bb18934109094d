"""Nerd templates registry.

Templates are loaded once from YAML into an immutable :class:`NerdRegistry`
that is handed to the duel manager by reference. Secret templates stay out
of the selectable list until the main menu unlocks them.
"""

import os
from typing import Any, Iterable, Optional

import yaml

from ...core.data import ActionKind
from ...core.duel_config import ASSETS_DIR
from .actions import Action
from .nerd import NerdTemplate


DEFAULT_TEMPLATES_PATH = os.path.join(ASSETS_DIR, "data", "nerds.yaml")


class NerdRegistry:
    """Read-only collection of nerd templates."""

    def __init__(self, templates: Iterable[NerdTemplate]):
        self._templates = tuple(templates)
        _validate_templates(self._templates)

    @property
    def templates(self) -> tuple[NerdTemplate, ...]:
        return self._templates

    def selectable(self, secret_unlocked: bool = False) -> tuple[NerdTemplate, ...]:
        """Templates offered at the main menu, in file order."""
        return tuple(t for t in self._templates if secret_unlocked or not t.secret)

    def secret_templates(self) -> tuple[NerdTemplate, ...]:
        return tuple(t for t in self._templates if t.secret)

    def get(self, name: str) -> NerdTemplate:
        """Look up a template by name.

        Raises:
            KeyError: If no template has that name
        """
        for template in self._templates:
            if template.name == name:
                return template
        raise KeyError(f"No nerd template named: {name}")

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self):
        return iter(self._templates)


def _validate_templates(templates: tuple[NerdTemplate, ...]) -> None:
    seen: set[str] = set()
    for template in templates:
        if template.name in seen:
            raise ValueError(f"Duplicate nerd template name: {template.name}")
        seen.add(template.name)

        if template.health <= 0:
            raise ValueError(f"Nerd '{template.name}' must start with positive health, got {template.health}")
        if template.multiplier <= 0:
            raise ValueError(
                f"Nerd '{template.name}' must start with a positive multiplier, got {template.multiplier}"
            )

        kinds = [action.kind for action in template.actions]
        if set(kinds) != set(ActionKind) or len(kinds) != len(set(kinds)):
            raise ValueError(
                f"Nerd '{template.name}' must cover every action kind exactly once, got "
                f"{[kind.name for kind in kinds]}"
            )


def _parse_action(data: dict[str, Any]) -> Action:
    try:
        kind = ActionKind[str(data["kind"]).upper()]
    except KeyError:
        raise ValueError(f"Invalid action kind: {data.get('kind')}")
    return Action(name=str(data["name"]), kind=kind, base_value=int(data["value"]))


def _parse_sprite(raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, list):
        return "\n".join(str(line) for line in raw)
    return str(raw)


def load_nerd_registry(templates_path: Optional[str] = None) -> NerdRegistry:
    """Load nerd templates from a YAML file.

    Returns:
        NerdRegistry with every template in file order

    Raises:
        FileNotFoundError: If the file does not exist
        KeyError: If a template misses a required field
        ValueError: If a template breaks the action rules
    """
    path = templates_path or DEFAULT_TEMPLATES_PATH

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Nerd templates file not found: {path}")

    try:
        templates = []
        for entry in data["nerds"]:
            templates.append(
                NerdTemplate(
                    name=str(entry["name"]),
                    health=int(entry["health"]),
                    multiplier=int(entry.get("multiplier", 10)),
                    actions=tuple(_parse_action(action) for action in entry["actions"]),
                    sprite=_parse_sprite(entry.get("sprite")),
                    secret=bool(entry.get("secret", False)),
                )
            )
    except (KeyError, TypeError) as e:
        raise KeyError(f"Invalid template structure in {path}: {e}")

    return NerdRegistry(templates)


# Loaded once at import; never mutated afterwards
NERD_REGISTRY: NerdRegistry = load_nerd_registry()
