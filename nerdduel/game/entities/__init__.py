"""Duel entities.

This package contains the combatants and their catalog:
- actions.py: Immutable actions and their display names
- nerd.py: Nerd templates, runtime nerds and stat application
- nerd_templates.py: YAML-backed registry of selectable templates
"""

from .actions import Action, ACTIONS_PER_NERD, display_name
from .nerd import (
    Nerd,
    NerdTemplate,
    spawn,
    apply_damage,
    apply_heal,
    apply_weaken,
    apply_strengthen,
)
from .nerd_templates import NerdRegistry, NERD_REGISTRY, load_nerd_registry

__all__ = [
    "Action",
    "ACTIONS_PER_NERD",
    "display_name",
    "Nerd",
    "NerdTemplate",
    "spawn",
    "apply_damage",
    "apply_heal",
    "apply_weaken",
    "apply_strengthen",
    "NerdRegistry",
    "NERD_REGISTRY",
    "load_nerd_registry",
]
