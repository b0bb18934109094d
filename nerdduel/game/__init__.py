"""Duel logic: entities, combat resolution, managers and the game loop."""
