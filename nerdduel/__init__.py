"""Nerd Duel: a two-player, turn-based duel where every move is an arithmetic question."""

__version__ = "0.1.0"
