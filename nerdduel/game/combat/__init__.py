"""Combat system for equation generation and effect resolution."""

from .equation_resolver import DEFAULT_CRITICAL_FACTOR, EquationResolver, Resolution, resolve

__all__ = [
    "DEFAULT_CRITICAL_FACTOR",
    "EquationResolver",
    "Resolution",
    "resolve",
]
